from __future__ import annotations

"""
Listing Toolbar Component.

Repository name and branch entries plus the button that loads a tree
listing from disk. Widgets are exposed as attributes so the controller can
read them and bind their commands.
"""

import customtkinter as ctk

from gitscape.domain import constants as const
from gitscape.utils.i18n import i18n


class ListingToolbar(ctk.CTkFrame):
    """Source selection bar shown above the diagram."""

    def __init__(self, master, display_name: str = "", branch_name: str = const.DEFAULT_BRANCH, **kwargs):
        super().__init__(master, **kwargs)
        self.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(self, text=i18n.t("gui.toolbar.repo")).grid(row=0, column=0, padx=(10, 5), pady=10)
        self.entry_repo = ctk.CTkEntry(self, placeholder_text="owner/repo")
        self.entry_repo.grid(row=0, column=1, sticky="ew", pady=10)
        if display_name:
            self.entry_repo.insert(0, display_name)

        ctk.CTkLabel(self, text=i18n.t("gui.toolbar.branch")).grid(row=0, column=2, padx=(15, 5), pady=10)
        self.entry_branch = ctk.CTkEntry(self, width=140)
        self.entry_branch.grid(row=0, column=3, pady=10)
        if branch_name:
            self.entry_branch.insert(0, branch_name)

        self.btn_open = ctk.CTkButton(self, text=i18n.t("gui.toolbar.open"), width=140)
        self.btn_open.grid(row=0, column=4, padx=10, pady=10)
