from .services import classify, classify_rows, classify_file, CLASSIFICATION_RULES

__all__ = ['classify', 'classify_rows', 'classify_file', 'CLASSIFICATION_RULES']
