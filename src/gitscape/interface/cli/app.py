from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Headless counterpart of the diagram window: loads a tree listing, builds
the hierarchy, runs the renderer against a virtual viewport and prints
either a summary, an ASCII tree or the computed layout as JSON. Useful for
automation and for inspecting layouts without a display.
"""

import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from gitscape.core.analysis.tree_builder import build_diagram_tree, parse_path_entries
from gitscape.core.analysis.tree_renderer import render_diagram_tree
from gitscape.core.diagram.engine import DiagramRenderer
from gitscape.core.diagram.presentation import build_file_url, link_path
from gitscape.core.services.validator import validate_config
from gitscape.domain.config import DiagramSettings, get_default_config, load_config
from gitscape.domain.layout_models import ViewportSize
from gitscape.infra.fs import load_entries_file, normalize_path
from gitscape.infra.logging import LoggingConfig, configure_logging
from gitscape.interface.cli import args as cli_args
from gitscape.utils.i18n import i18n

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 bad input).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console only)
    configure_logging(LoggingConfig.for_cli(debug=args.debug))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Configuration: defaults or persisted file, then CLI overrides
    if args.use_defaults:
        base_conf = get_default_config()
    else:
        base_conf = load_config(args.config_path)

    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 4. Pre-flight input verification
    if not args.input_path:
        return _fail(i18n.t("cli.errors.missing_input"), 2)

    input_path = normalize_path(args.input_path, os.getcwd())
    if not os.path.exists(input_path):
        return _fail(i18n.t("cli.errors.path_not_exist", path=input_path), 2)

    display_name = (args.display_name or "").strip()
    if "/" not in display_name:
        return _fail(i18n.t("cli.errors.bad_repo", repo=display_name), 2)

    if args.gui:
        # Imported lazily so headless runs never load Tk
        from gitscape.interface.gui.app import main as gui_main
        gui_main(input_path, display_name, args.branch_name)
        return 0

    if args.width < 1 or args.height < 1:
        return _fail(i18n.t("cli.errors.bad_viewport", width=args.width, height=args.height), 2)

    try:
        items = load_entries_file(input_path)
    except (OSError, ValueError) as e:
        return _fail(i18n.t("cli.errors.bad_input", error=str(e)), 2)

    # 5. Build and lay out
    settings = DiagramSettings.from_config(clean_conf)
    try:
        entries = parse_path_entries(items)
        root = build_diagram_tree(entries, display_name, settings.file_weight, settings.directory_weight)

        renderer = DiagramRenderer(settings)
        renderer.initialize(root, ViewportSize(args.width, args.height), display_name, args.branch_name)
        if args.expand_all:
            renderer.expand_all()
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130
    except Exception as e:
        msg = i18n.t("cli.errors.render_fail", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    # 6. Output rendering phase
    if args.print_tree:
        print("\n".join(render_diagram_tree(root)))

    if args.json_output:
        print(json.dumps(layout_payload(renderer), ensure_ascii=False, indent=2))
    elif not args.print_tree:
        _print_human_summary(renderer)

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of known, non-empty override keys into the base configuration."""
    out = dict(base)
    known_keys = get_default_config().keys()
    for k, v in overrides.items():
        if k in known_keys and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def layout_payload(renderer: DiagramRenderer) -> Dict[str, Any]:
    """
    Serializable description of the current layout.

    Nodes are listed in visible pre-order with their final positions; links
    carry their connector path in SVG notation.
    """
    state = renderer.state
    transform = renderer.transform
    payload: Dict[str, Any] = {
        "display_name": renderer.display_name,
        "branch": renderer.branch_name,
        "viewport": {"width": renderer.viewport.width, "height": renderer.viewport.height},
        "transform": {
            "translate_x": transform.translate_x,
            "translate_y": transform.translate_y,
            "scale": transform.scale,
        },
        "nodes": [],
        "links": [],
    }
    if state is None or not renderer.is_initialized:
        return payload

    frame = renderer.frame
    styles = {item.key: item.style for item in frame.nodes} if frame else {}

    for node_id in renderer.visible_node_ids():
        layout_node = state.node(node_id)
        node = layout_node.node
        position = layout_node.position
        style = styles.get(node_id)
        entry: Dict[str, Any] = {
            "id": node.id,
            "name": node.name,
            "kind": node.kind,
            "depth": layout_node.depth,
            "x": position.x if position else None,
            "y": position.y if position else None,
            "label": style.label if style else node.name,
            "expanded": layout_node.expanded if layout_node.state is not None else None,
        }
        if node.is_file:
            entry["url"] = build_file_url(
                renderer.display_name, renderer.branch_name, node.path, renderer.settings.github_base_url
            )
        payload["nodes"].append(entry)

    if frame is not None:
        for link in frame.links:
            if link.removes:
                continue
            payload["links"].append({
                "key": link.key,
                "source": link.source_id,
                "target": link.target_id,
                "path": link_path(link.end),
            })

    return payload


def _print_human_summary(renderer: DiagramRenderer) -> None:
    state = renderer.state
    if state is None:
        return
    visible = renderer.visible_node_ids()
    print(i18n.t(
        "cli.status.summary",
        repo=renderer.display_name,
        branch=renderer.branch_name,
        total=len(state),
        visible=len(visible),
        depth=state.visible_height(),
    ))
    print(i18n.t("cli.status.transform", transform=str(renderer.transform)))


def _fail(msg: str, code: int) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return code

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
