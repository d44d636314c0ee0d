from .services import ResponseParser, parse, PLACEHOLDER_CHARTS, METRIC_PATTERNS

__all__ = ['ResponseParser', 'parse', 'PLACEHOLDER_CHARTS', 'METRIC_PATTERNS']
