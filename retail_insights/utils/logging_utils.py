"""
Standardized logging utilities
Consistent log prefixes (emoji per log intent) across the backend
"""

import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class StandardLogger:
    """Thin wrapper around a stdlib logger exposing intent-named methods"""

    def __init__(self, logger_name: str):
        """
        Args:
            logger_name: logger name (usually __name__)
        """
        self.logger = logging.getLogger(logger_name)

    # === success / completion ===
    def success(self, message: str, **kwargs):
        """Success log (INFO)"""
        self.logger.info(f"✅ {message}", **kwargs)

    def completed(self, message: str, **kwargs):
        """Completion log (INFO)"""
        self.logger.info(f"🎯 {message}", **kwargs)

    def created(self, message: str, **kwargs):
        """Creation log (INFO)"""
        self.logger.info(f"🔧 {message}", **kwargs)

    # === progress ===
    def processing(self, message: str, **kwargs):
        """In-progress log (INFO)"""
        self.logger.info(f"⚡ {message}", **kwargs)

    def loading(self, message: str, **kwargs):
        """Loading log (INFO)"""
        self.logger.info(f"🔄 {message}", **kwargs)

    def calling(self, message: str, **kwargs):
        """Outbound provider call log (INFO)"""
        self.logger.info(f"📡 {message}", **kwargs)

    # === warnings ===
    def warning(self, message: str, **kwargs):
        """Warning log (WARNING)"""
        self.logger.warning(f"⚠️ {message}", **kwargs)

    # === errors ===
    def error(self, message: str, **kwargs):
        """Error log (ERROR)"""
        self.logger.error(f"❌ {message}", **kwargs)

    def provider_error(self, message: str, **kwargs):
        """Completion backend error log (ERROR)"""
        self.logger.error(f"🤖❌ {message}", **kwargs)

    # === info / debug ===
    def info(self, message: str, **kwargs):
        """General info log (INFO)"""
        self.logger.info(f"ℹ️ {message}", **kwargs)

    def debug(self, message: str, **kwargs):
        """Debug log (DEBUG)"""
        self.logger.debug(f"🔍 {message}", **kwargs)

    def stats(self, message: str, **kwargs):
        """Statistics log (INFO)"""
        self.logger.info(f"📈 {message}", **kwargs)

    def config(self, message: str, **kwargs):
        """Configuration log (INFO)"""
        self.logger.info(f"⚙️ {message}", **kwargs)

    # === lifecycle ===
    def startup(self, message: str, **kwargs):
        """Startup log (INFO)"""
        self.logger.info(f"🚀 {message}", **kwargs)


def get_logger(name: str) -> StandardLogger:
    """
    Standard logger factory

    Args:
        name: logger name (usually __name__)

    Returns:
        StandardLogger instance
    """
    return StandardLogger(name)


def configure_logging(level: Optional[str] = None) -> None:
    """Root logging setup, called once by the application factory"""
    logging.basicConfig(
        level=getattr(logging, (level or 'INFO').upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT
    )
