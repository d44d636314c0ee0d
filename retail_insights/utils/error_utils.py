"""
Common error response utilities
Standardized JSON error envelopes for every route
"""

import logging
import datetime
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


class ErrorResponse:
    """Standardized error response builder"""

    @staticmethod
    def create(
        error_message: str,
        error_type: str = "general",
        details: Optional[Dict[str, Any]] = None,
        log_error: bool = True
    ) -> Dict[str, Any]:
        """
        Build a standard error envelope

        Args:
            error_message: message shown to the operator
            error_type: machine-readable error category
            details: extra diagnostic information
            log_error: whether to log the error

        Returns:
            error envelope dictionary
        """
        if log_error:
            logger.error(f"❌ {error_type}: {error_message}")

        return {
            "success": False,
            "error": error_message,
            "error_type": error_type,
            "details": details or {},
            "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat()
        }

    @staticmethod
    def validation_error(message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Input validation error"""
        return ErrorResponse.create(message, "validation_error", details)

    @staticmethod
    def configuration_error(message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Missing or invalid server configuration"""
        return ErrorResponse.create(message, "configuration_error", details)

    @staticmethod
    def provider_error(message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Completion backend failure"""
        return ErrorResponse.create(message, "provider_error", details)

    @staticmethod
    def internal_error(message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Internal server error"""
        return ErrorResponse.create(message, "internal_error", details)

    @staticmethod
    def not_found_error(message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Unknown resource"""
        return ErrorResponse.create(message, "not_found", details)
