from .services import compute_stats, find_column, coerce_numeric, top_values

__all__ = ['compute_stats', 'find_column', 'coerce_numeric', 'top_values']
