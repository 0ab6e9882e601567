from __future__ import annotations

"""
Logging settings for the two front ends.

The CLI logs to stderr only; the GUI also keeps a rotating file in the user
data directory so the crash dialog can show what led up to a failure.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from gitscape.infra.fs import get_user_data_dir

GUI_LOG_FILE_NAME = "gitscape.log"


def get_default_gui_log_path() -> str:
    """Path of the GUI log file inside the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", GUI_LOG_FILE_NAME)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings consumed by `configure_logging`.

    Attributes:
        level: Level name ("DEBUG", "INFO", ...). Unknown names mean INFO.
        console: Write records to stderr.
        log_file: Rotating log file, or None for no file output.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files to keep.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False) -> "LoggingConfig":
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=None)

    @classmethod
    def for_gui(cls, log_file: Optional[str] = None) -> "LoggingConfig":
        return cls(level="INFO", console=True, log_file=log_file or get_default_gui_log_path())

    @property
    def level_number(self) -> int:
        name = str(self.level or "").strip().upper()
        if name == "WARN":
            name = "WARNING"
        value = logging.getLevelName(name)
        return value if isinstance(value, int) else logging.INFO
