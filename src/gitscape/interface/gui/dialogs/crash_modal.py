from __future__ import annotations

"""
Crash Reporting Modal.

Shows a fatal error with its traceback and the tail of the application
log, and lets the user copy both to the clipboard before exiting.
"""

import logging
from typing import Optional

import customtkinter as ctk

from gitscape.infra.logging import get_recent_logs
from gitscape.utils.i18n import i18n

logger = logging.getLogger(__name__)


def show_crash_modal(error_msg: str, stack_trace: str, parent: Optional[ctk.CTk] = None) -> None:
    """Display critical error details and block until the dialog closes."""
    is_root_created = False
    if parent is None:
        parent = ctk.CTk()
        parent.withdraw()
        is_root_created = True

    toplevel = ctk.CTkToplevel(parent)
    toplevel.title(i18n.t("gui.crash.title"))
    toplevel.geometry("700x520")
    toplevel.grab_set()

    ctk.CTkLabel(
        toplevel,
        text=i18n.t("gui.crash.message", error=error_msg),
        font=ctk.CTkFont(size=14, weight="bold"),
        text_color="#E04F5F",
        wraplength=640,
    ).pack(pady=(20, 10), padx=20)

    report = f"Error: {error_msg}\n\n{stack_trace}\n--- Recent log ---\n{get_recent_logs(60)}"
    textbox = ctk.CTkTextbox(toplevel, font=("Consolas", 10))
    textbox.insert("1.0", report)
    textbox.configure(state="disabled")
    textbox.pack(fill="both", expand=True, padx=20, pady=10)

    def _copy() -> None:
        toplevel.clipboard_clear()
        toplevel.clipboard_append(report)

    def _close() -> None:
        toplevel.destroy()
        if is_root_created:
            parent.destroy()

    btn_frame = ctk.CTkFrame(toplevel, fg_color="transparent")
    btn_frame.pack(pady=(0, 15))
    ctk.CTkButton(btn_frame, text=i18n.t("gui.crash.copy"), command=_copy).pack(side="left", padx=5)
    ctk.CTkButton(btn_frame, text=i18n.t("gui.crash.close"), command=_close).pack(side="left", padx=5)

    toplevel.protocol("WM_DELETE_WINDOW", _close)
    parent.wait_window(toplevel)
