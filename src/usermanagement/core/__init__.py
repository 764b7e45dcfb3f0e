"""Core utilities shared by every layer: configuration, logging and outcomes."""

from usermanagement.core.config import Settings, get_settings
from usermanagement.core.logging import (
    LoggingContext,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from usermanagement.core.outcome import ErrorCode, Outcome

__all__ = [
    "ErrorCode",
    "LoggingContext",
    "Outcome",
    "Settings",
    "bind_correlation_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_settings",
]
