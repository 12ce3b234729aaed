"""로깅."""

from .logging import LOG_FORMAT, get_logger, setup_logging

__all__ = ["LOG_FORMAT", "get_logger", "setup_logging"]
