from __future__ import annotations

"""
Diagram Tree Builder.

Converts the flat path listing of a repository into a rooted hierarchy of
DiagramNode objects. Directories implied by intermediate path segments are
materialized so every leaf is reachable from the root, and inconsistent
listings are tolerated: the explicit record wins and a warning is logged.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from gitscape.domain import constants as const
from gitscape.domain.diagram_models import (
    ENTRY_BLOB,
    KIND_DIRECTORY,
    KIND_FILE,
    ROOT_ID,
    DiagramNode,
    PathEntry,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_diagram_tree(
        entries: Sequence[PathEntry],
        root_label: str,
        file_weight: int = const.DEFAULT_FILE_WEIGHT,
        directory_weight: int = const.DEFAULT_DIRECTORY_WEIGHT,
) -> DiagramNode:
    """
    Build the rooted hierarchy for a list of path entries.

    Entries are sorted by path first, so the result does not depend on the
    input order. Node ids are full paths; the root id is the empty string.

    Args:
        entries: Flat file/directory listing.
        root_label: Display name, usually "owner/repo".
        file_weight: Weight for files whose size is unknown.
        directory_weight: Weight for directories.

    Returns:
        DiagramNode: The synthetic root.
    """
    root = DiagramNode(
        id=ROOT_ID,
        name=root_name_from_label(root_label),
        kind=KIND_DIRECTORY,
        path=ROOT_ID,
        children=[],
        weight=directory_weight,
    )
    node_map: Dict[str, DiagramNode] = {ROOT_ID: root}

    for entry in sorted(entries, key=lambda e: e.path):
        if not entry.path:
            continue
        _insert_entry(entry, root, node_map, file_weight, directory_weight)

    logger.debug(f"Diagram tree built: {len(node_map) - 1} nodes from {len(entries)} entries.")
    return root


def parse_path_entries(items: Iterable[Any]) -> List[PathEntry]:
    """
    Convert raw git-tree items into PathEntry records.

    Malformed items are skipped with a warning.

    Args:
        items: Mappings with at least a 'path' key.

    Returns:
        List[PathEntry]: Parsed entries in input order.
    """
    entries: List[PathEntry] = []
    for index, item in enumerate(items):
        try:
            entries.append(PathEntry.from_dict(item))
        except TypeError as e:
            logger.warning(f"Skipping tree item #{index}: {e}")
    return entries


def root_name_from_label(root_label: str) -> str:
    """Return the part of "owner/repo" after the first slash."""
    if "/" in root_label:
        return root_label[root_label.index("/") + 1:]
    return root_label

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _insert_entry(
        entry: PathEntry,
        root: DiagramNode,
        node_map: Dict[str, DiagramNode],
        file_weight: int,
        directory_weight: int,
) -> None:
    """Walk the entry's segments from the root, creating or updating nodes."""
    parts = entry.path.split("/")
    parent = root
    accumulated = ROOT_ID

    for i, part in enumerate(parts):
        accumulated = f"{accumulated}/{part}" if accumulated else part
        is_last = i == len(parts) - 1

        node = node_map.get(accumulated)
        if node is None:
            kind = KIND_FILE if is_last and entry.kind == ENTRY_BLOB else KIND_DIRECTORY
            node = DiagramNode(
                id=accumulated,
                name=part,
                kind=kind,
                path=accumulated,
                children=[] if kind == KIND_DIRECTORY else None,
                weight=_weight_for(kind, entry.size, file_weight, directory_weight),
                source_data=entry if is_last else None,
            )
            if parent.children is None:
                parent.children = []
            parent.children.append(node)
            node_map[accumulated] = node
        elif is_last:
            _apply_explicit_entry(node, entry)

        parent = node

        if parent.kind == KIND_FILE and not is_last:
            logger.warning(
                f"Data inconsistency: file found in intermediate path '{parent.path}' "
                f"while inserting '{entry.path}'. Skipping the rest of this entry."
            )
            break


def _apply_explicit_entry(node: DiagramNode, entry: PathEntry) -> None:
    """Update an existing node in place from its explicit entry."""
    kind = KIND_FILE if entry.kind == ENTRY_BLOB else KIND_DIRECTORY

    if kind != node.kind:
        logger.warning(
            f"Data inconsistency: '{node.path}' was a {node.kind} and is now listed as a {kind}. "
            f"Trusting the explicit entry."
        )
        if node.children:
            logger.warning(f"'{node.path}' keeps its {len(node.children)} existing children.")

    node.kind = kind
    node.source_data = entry

    if kind == KIND_DIRECTORY and node.children is None:
        node.children = []
    if kind == KIND_FILE and entry.size:
        node.weight = entry.size


def _weight_for(kind: str, size: Optional[int], file_weight: int, directory_weight: int) -> int:
    if kind == KIND_FILE:
        return size if size else file_weight
    return directory_weight
