from __future__ import annotations

from .config import LoggingConfig, get_default_gui_log_path
from .core import (
    _CONFIGURED_FLAG_ATTR,
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    configure_logging,
    get_recent_logs,
    shutdown_logging,
)

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "shutdown_logging",
    "get_recent_logs",
    "get_default_gui_log_path",
]
