"""
Core exceptions
Error taxonomy shared by the analysis pipeline and the HTTP layer
"""

from typing import Any, Dict, Optional


class RetailInsightsError(Exception):
    """Base class for all application errors"""
    error_type = "general"

    def to_details(self) -> Dict[str, Any]:
        return {}


class ConfigurationError(RetailInsightsError):
    """Required configuration (e.g. the completion backend credential) is missing"""
    error_type = "configuration_error"

    def __init__(self, message: str, variable: Optional[str] = None):
        super().__init__(message)
        self.variable = variable

    def to_details(self) -> Dict[str, Any]:
        return {"variable": self.variable} if self.variable else {}


class ProviderError(RetailInsightsError):
    """Completion backend failure (transport, authentication, rate limit, provider-side error)"""
    error_type = "provider_error"

    def __init__(self, message: str, status_code: Optional[int] = None, provider_type: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.provider_type = provider_type

    def to_details(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "status": self.status_code,
            "type": self.provider_type
        }


class EmptyDatasetError(RetailInsightsError):
    """Decoded file or request has zero records"""
    error_type = "empty_dataset"


class UnsupportedFileType(RetailInsightsError):
    """Upload extension is not one of the accepted spreadsheet formats"""
    error_type = "unsupported_file_type"

    def __init__(self, file_name: str, accepted=None):
        self.file_name = file_name
        self.accepted = list(accepted or [])
        super().__init__(f'File "{file_name}" is not a valid Excel or CSV file')

    def to_details(self) -> Dict[str, Any]:
        return {"file_name": self.file_name, "accepted": self.accepted}


class UnclassifiedFilesError(RetailInsightsError):
    """Batch contains files that still need a manual type selection"""
    error_type = "validation_error"

    def __init__(self, file_names):
        self.file_names = list(file_names)
        super().__init__(
            f"Select a data type for every file before analysis: {', '.join(self.file_names)}"
        )

    def to_details(self) -> Dict[str, Any]:
        return {"unclassified_files": self.file_names}
