"""
Retail Insights - utility package
"""

# Standardized logging
from .logging_utils import get_logger, configure_logging
# Error envelopes
from .error_utils import ErrorResponse

__all__ = [
    'get_logger',
    'configure_logging',
    'ErrorResponse'
]
