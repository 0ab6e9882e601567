from __future__ import annotations

"""
Tkinter Technical Utilities and OS Integration.

Helpers shared by the diagram window and its dialogs: opening file links
in the system browser, picking a listing file, and colour arithmetic for
a canvas that has no native alpha channel.
"""

import logging
import webbrowser
from tkinter import messagebox as mb
from typing import Optional, Tuple

import customtkinter as ctk

from gitscape.utils.i18n import i18n

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# OS INTEGRATION API
# -----------------------------------------------------------------------------

def open_external_url(url: str) -> bool:
    """
    Open a URL in a new browser tab.

    Args:
        url: Absolute http(s) URL.

    Returns:
        bool: True if the browser accepted the request.
    """
    if not url.startswith(("http://", "https://")):
        logger.warning(f"UI Action: Refusing to open non-web URL: {url}")
        return False

    try:
        opened = webbrowser.open_new_tab(url)
    except webbrowser.Error as e:
        logger.error(f"System Error: Failed to invoke web browser: {e}")
        mb.showerror(i18n.t("gui.dialogs.error_title"), i18n.t("gui.dialogs.browser_error", error=str(e)))
        return False

    if not opened:
        logger.warning(f"UI Action: No browser available for {url}")
    return bool(opened)


def ask_listing_file(parent: ctk.CTk) -> Optional[str]:
    """Prompt for a JSON tree listing. Returns None when cancelled."""
    path = ctk.filedialog.askopenfilename(
        parent=parent,
        title=i18n.t("gui.dialogs.open_listing"),
        filetypes=[("JSON", "*.json"), ("All files", "*.*")],
    )
    return path or None

# -----------------------------------------------------------------------------
# COLOUR HELPERS
# -----------------------------------------------------------------------------

def hex_to_rgb(colour: str) -> Tuple[int, int, int]:
    value = colour.lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    if len(value) != 6:
        raise ValueError(f"Unsupported colour literal: {colour!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def blend_colour(foreground: str, background: str, opacity: float) -> str:
    """
    Mix a colour over a background.

    Stands in for alpha on surfaces that only take opaque colours.

    Args:
        foreground: '#rrggbb' colour drawn on top.
        background: '#rrggbb' colour underneath.
        opacity: 0.0 (background only) to 1.0 (foreground only).

    Returns:
        str: The mixed '#rrggbb' colour.
    """
    alpha = max(0.0, min(1.0, opacity))
    fg = hex_to_rgb(foreground)
    bg = hex_to_rgb(background)
    mixed = tuple(round(b + (f - b) * alpha) for f, b in zip(fg, bg))
    return "#{:02x}{:02x}{:02x}".format(*mixed)
