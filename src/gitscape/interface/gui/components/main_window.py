from __future__ import annotations

"""
Main Application Window Factory.

Creates the root CustomTkinter window and its two-row grid: the listing
toolbar on top and the diagram view filling the rest.
"""

import customtkinter as ctk

from gitscape.domain import constants as const

# -----------------------------------------------------------------------------
# ROOT WINDOW CONSTRUCTION
# -----------------------------------------------------------------------------

def create_main_window(theme: str = "dark") -> ctk.CTk:
    """
    Instantiate and configure the primary application window.

    Args:
        theme: customtkinter appearance mode ('dark', 'light' or 'system').

    Returns:
        ctk.CTk: The configured root application instance.
    """
    ctk.set_appearance_mode(theme)
    ctk.set_default_color_theme("green")

    app = ctk.CTk()
    app.title(f"{const.APP_NAME} - v{const.CURRENT_CONFIG_VERSION}")
    app.geometry("1100x720")
    app.minsize(480, 320)

    # Row 0: toolbar, Row 1: diagram
    app.grid_columnconfigure(0, weight=1)
    app.grid_rowconfigure(1, weight=1)

    return app
