from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the headless diagram exporter and maps
the parsed namespace onto configuration overrides.
"""

import argparse
from typing import Any, Dict

from gitscape.domain import constants as const
from gitscape.utils.i18n import i18n

DEFAULT_VIEWPORT_WIDTH = 1200
DEFAULT_VIEWPORT_HEIGHT = 800

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the GitScape CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="gitscape",
        description=i18n.t("app.description"),
    )

    # --- Input Listing ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        help=i18n.t("cli.args.input"),
        default=None,
    )
    p.add_argument(
        "--repo",
        dest="display_name",
        help=i18n.t("cli.args.repo"),
        default=None,
    )
    p.add_argument(
        "--branch",
        dest="branch_name",
        help=i18n.t("cli.args.branch"),
        default=const.DEFAULT_BRANCH,
    )

    # --- Viewport ---
    p.add_argument(
        "--width",
        type=float,
        default=DEFAULT_VIEWPORT_WIDTH,
        help=i18n.t("cli.args.width"),
    )
    p.add_argument(
        "--height",
        type=float,
        default=DEFAULT_VIEWPORT_HEIGHT,
        help=i18n.t("cli.args.height"),
    )
    p.add_argument(
        "--expand-all",
        action="store_true",
        help=i18n.t("cli.args.expand_all"),
    )

    # --- Layout Tunables ---
    p.add_argument(
        "--node-spacing",
        dest="node_spacing",
        type=float,
        default=None,
        help=i18n.t("cli.args.node_spacing"),
    )
    p.add_argument(
        "--initial-scale",
        dest="initial_scale",
        type=float,
        default=None,
        help=i18n.t("cli.args.initial_scale"),
    )
    p.add_argument(
        "--base-url",
        dest="github_base_url",
        default=None,
        help=i18n.t("cli.args.base_url"),
    )

    # --- Output ---
    p.add_argument(
        "--print-tree",
        action="store_true",
        help=i18n.t("cli.args.print_tree"),
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json"),
    )

    p.add_argument(
        "--gui",
        action="store_true",
        help=i18n.t("cli.args.gui"),
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help=i18n.t("cli.args.config"),
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.defaults"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options that map onto configuration keys are returned; the
    listing, viewport and output switches are read by the app controller.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.node_spacing is not None:
        overrides["node_spacing"] = args.node_spacing
    if args.initial_scale is not None:
        overrides["initial_scale"] = args.initial_scale
    if args.github_base_url:
        overrides["github_base_url"] = args.github_base_url

    return overrides
