from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform resolution of the application data directory and
loading of repository tree listings stored as JSON on disk.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "GitScape"
UNIX_APP_DIR_NAME = ".gitscape"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/GitScape
    - Linux/Mac: ~/.gitscape

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion and user home shortcuts (~/).

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))

# -----------------------------------------------------------------------------
# TREE LISTING I/O
# -----------------------------------------------------------------------------

def load_entries_file(path: str) -> List[Dict[str, Any]]:
    """
    Read a repository tree listing from a JSON file.

    Accepts either a bare list of tree items or a git-tree API response
    object holding them under "tree". A truncated listing is logged.

    Args:
        path: JSON file location.

    Returns:
        List[Dict[str, Any]]: Raw tree items.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not valid JSON or has the wrong shape.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        if data.get("truncated"):
            logger.warning(f"Tree listing in '{path}' is truncated. The diagram will be partial.")
        data = data.get("tree")

    if not isinstance(data, list):
        raise ValueError(f"Tree listing in '{path}' must be a list or an object with a 'tree' list.")

    logger.debug(f"Loaded {len(data)} tree items from {path}")
    return data
