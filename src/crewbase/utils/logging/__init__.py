# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Provides loguru sink setup and structlog loggers bound with source context

from .config import LoggingMode, configure_logging, get_logging_status
from .utils import get_logger, log_api_call, with_request_context, with_source_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "get_logging_status",
    # Utilities
    "get_logger",
    "log_api_call",
    "with_request_context",
    "with_source_context",
]
