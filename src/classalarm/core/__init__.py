"""Core ClassAlarm utilities.

This module exports core utilities for use throughout the application.
"""

from classalarm.core.config import Settings, get_settings
from classalarm.core.logging import (
    LoggingContext,
    bind_operation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LoggingContext",
    "bind_operation_id",
    "clear_context",
]
