from __future__ import annotations

"""
GUI Entrypoint and Application Lifecycle Orchestrator.

Bootstraps logging and configuration, assembles the main window (listing
toolbar plus diagram view), binds the controller and enters the Tk loop.
"""

import logging
from typing import Optional

from gitscape.core.services.validator import validate_config
from gitscape.domain import config as cfg
from gitscape.domain import constants as const
from gitscape.infra.logging import LoggingConfig, configure_logging
from gitscape.interface.gui.components.diagram_view import DiagramView
from gitscape.interface.gui.components.main_window import create_main_window
from gitscape.interface.gui.components.toolbar import ListingToolbar
from gitscape.interface.gui.controllers.diagram_controller import DiagramController

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# MAIN APPLICATION LOOP
# -----------------------------------------------------------------------------

def main(
        listing_path: Optional[str] = None,
        display_name: str = "",
        branch_name: str = const.DEFAULT_BRANCH,
) -> None:
    """
    Initialize and launch the Graphical User Interface.

    Args:
        listing_path: Optional listing to show right away.
        display_name: Initial repository name ('owner/repo').
        branch_name: Initial branch.
    """
    # -------------------------------------------------------------------------
    # PHASE 1: DIAGNOSTIC INFRASTRUCTURE SETUP
    # -------------------------------------------------------------------------
    configure_logging(LoggingConfig.for_gui())
    logger.info(f"GUI Lifecycle: Initializing v{const.CURRENT_CONFIG_VERSION}")

    # -------------------------------------------------------------------------
    # PHASE 2: CONFIGURATION
    # -------------------------------------------------------------------------
    config, warnings = validate_config(cfg.load_config())
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")
    settings = cfg.DiagramSettings.from_config(config)

    # -------------------------------------------------------------------------
    # PHASE 3: VIEW CONSTRUCTION AND BINDING
    # -------------------------------------------------------------------------
    app = create_main_window(config.get("theme", "dark"))
    controller = DiagramController(app, settings)

    toolbar = ListingToolbar(app, display_name=display_name, branch_name=branch_name)
    toolbar.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 0))

    diagram_view = DiagramView(app, settings, on_request_fullscreen=controller.open_fullscreen)
    diagram_view.grid(row=1, column=0, sticky="nsew", padx=10, pady=10)

    controller.register_views(toolbar, diagram_view)
    toolbar.btn_open.configure(command=controller.on_open_clicked)
    for entry in (toolbar.entry_repo, toolbar.entry_branch):
        entry.bind("<Return>", lambda e: controller.on_source_changed())

    if listing_path:
        app.after(50, lambda: controller.load_listing(listing_path))

    # -------------------------------------------------------------------------
    # PHASE 4: LIFECYCLE FINALIZATION
    # -------------------------------------------------------------------------
    def on_closing() -> None:
        logger.info("GUI Lifecycle: Shutting down.")
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_closing)
    app.mainloop()


if __name__ == "__main__":
    main()
