from __future__ import annotations

"""
Logging lifecycle.

Records go through a QueueHandler and are written by a QueueListener thread,
so file output never stalls the Tk event loop while a transition animates.
Only handlers created here are tagged; anything installed by libraries or by
pytest is left alone on reconfiguration and shutdown.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import List, Optional

from gitscape.infra.logging.config import LoggingConfig, get_default_gui_log_path

_CONFIGURED_FLAG_ATTR: str = "_gitscape_configured"
_QUEUE_LISTENER_ATTR: str = "_gitscape_queue_listener"
_HANDLER_TAG_ATTR: str = "_gitscape_handler"

FALLBACK_FORMAT = "CRITICAL FALLBACK | %(levelname)s | %(message)s"


# ==============================================================================
# LIFECYCLE
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once.

    Later calls return immediately unless `force` is set, which tears down
    what an earlier call installed and builds it again from `cfg`. If the
    setup itself fails, a bare stderr handler is installed instead.

    Args:
        cfg: Logging settings.
        force: Rebuild even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    shutdown_logging()
    try:
        outputs = _build_outputs(cfg)
        root.setLevel(cfg.level_number)
        if not outputs:
            return root

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        listener = QueueListener(log_queue, *outputs, respect_handler_level=True)
        listener.start()
        atexit.register(_stop_listener, listener)

        root.addHandler(_tagged(QueueHandler(log_queue)))
        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)
    except Exception:
        shutdown_logging()
        emergency = logging.StreamHandler(sys.stderr)
        emergency.setFormatter(logging.Formatter(FALLBACK_FORMAT))
        root.setLevel(logging.INFO)
        root.addHandler(_tagged(emergency))
        root.warning("Logging setup failed. Switched to emergency console.")
    return root


def shutdown_logging() -> None:
    """Stop the listener and remove every handler `configure_logging` added."""
    root = logging.getLogger()
    _stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_TAG_ATTR, False):
            root.removeHandler(handler)
            handler.close()
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_recent_logs(n_lines: int = 100, log_path: Optional[str] = None) -> str:
    """
    Last lines of the GUI log file, for the crash dialog.

    Args:
        n_lines: Maximum number of lines.
        log_path: File to read. Defaults to the GUI log file.

    Returns:
        str: The tail of the log, or a one-line notice when it cannot be read.
    """
    path = log_path or get_default_gui_log_path()
    if not os.path.exists(path):
        return "Log file not found."
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            lines = f.readlines()
    except OSError as e:
        return f"Error retrieving logs: {e}"
    return "".join(lines[-n_lines:])


# ==============================================================================
# HELPERS
# ==============================================================================

def _build_outputs(cfg: LoggingConfig) -> List[logging.Handler]:
    """Handlers the listener writes to: stderr and/or a rotating file."""
    outputs: List[logging.Handler] = []
    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(cfg.console_fmt))
        outputs.append(console)
    if cfg.log_file:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(cfg.log_file)), exist_ok=True)
            file_handler = RotatingFileHandler(
                cfg.log_file,
                maxBytes=int(cfg.max_bytes),
                backupCount=int(cfg.backup_count),
                encoding="utf-8",
            )
        except OSError as e:
            # The diagram still works without a log file
            sys.stderr.write(f"WARNING: Cannot open log file '{cfg.log_file}': {e}\n")
        else:
            file_handler.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
            outputs.append(file_handler)
    for handler in outputs:
        handler.setLevel(cfg.level_number)
        _tagged(handler)
    return outputs


def _tagged(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _stop_listener(listener: Optional[QueueListener]) -> None:
    # stop() on a listener that never started (or already stopped) raises
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
