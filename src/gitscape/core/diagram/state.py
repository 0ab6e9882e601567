from __future__ import annotations

"""
Diagram Expansion State.

Arena of LayoutNode records indexed by node id, with a separate parent-id
index. Owns the per-directory Expanded/Collapsed state machine and answers
visibility queries (visible nodes, visible links, visible height) for the
layout and reconciliation passes.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from gitscape.domain.diagram_models import DiagramNode
from gitscape.domain.layout_models import Collapsed, Expanded, LayoutNode, Point

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# STATE ARENA
# -----------------------------------------------------------------------------

class DiagramState:
    """
    Expand/collapse model over one built hierarchy.

    The initial state has the root expanded and every other directory
    collapsed. File nodes carry no expansion state.
    """

    def __init__(self, root: DiagramNode):
        """
        Index the hierarchy and apply the default expansion state.

        Args:
            root: Root produced by the tree builder.
        """
        self.root_id: str = root.id
        self._nodes: Dict[str, LayoutNode] = {}
        self._parents: Dict[str, Optional[str]] = {}

        stack: List[Tuple[DiagramNode, Optional[str], int]] = [(root, None, 0)]
        while stack:
            node, parent_id, depth = stack.pop()
            layout_node = LayoutNode(node=node, depth=depth, parent_id=parent_id)
            if node.is_directory:
                child_ids = tuple(child.id for child in node.children or [])
                layout_node.state = Expanded(child_ids) if depth == 0 else Collapsed(child_ids)
            self._nodes[node.id] = layout_node
            self._parents[node.id] = parent_id
            for child in reversed(node.children or []):
                stack.append((child, node.id, depth + 1))

        logger.debug(f"Diagram state indexed {len(self._nodes)} nodes.")

    # -------------------------------------------------------------------------
    # LOOKUPS
    # -------------------------------------------------------------------------

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> LayoutNode:
        return self._nodes[self.root_id]

    def get(self, node_id: str) -> Optional[LayoutNode]:
        return self._nodes.get(node_id)

    def node(self, node_id: str) -> LayoutNode:
        """Return the LayoutNode for an id, raising KeyError if unknown."""
        return self._nodes[node_id]

    def parent_id(self, node_id: str) -> Optional[str]:
        return self._parents.get(node_id)

    def all_nodes(self) -> Iterator[LayoutNode]:
        return iter(self._nodes.values())

    def visible_children(self, node_id: str) -> Tuple[str, ...]:
        return self._nodes[node_id].children

    # -------------------------------------------------------------------------
    # STATE TRANSITIONS
    # -------------------------------------------------------------------------

    def toggle(self, node_id: str) -> bool:
        """
        Switch a directory between Collapsed and Expanded.

        Only the given node changes; descendants keep their own state.

        Args:
            node_id: Target directory id.

        Returns:
            bool: True if the state changed, False for files, unknown ids and
                  directories without children.
        """
        layout_node = self._nodes.get(node_id)
        if layout_node is None or not layout_node.is_directory or not layout_node.has_content:
            return False

        if isinstance(layout_node.state, Expanded):
            layout_node.state = Collapsed(layout_node.state.children)
        elif isinstance(layout_node.state, Collapsed):
            layout_node.state = Expanded(layout_node.state.hidden_children)
        return True

    def expand_all(self) -> None:
        """Expand every directory of the hierarchy."""
        for layout_node in self._nodes.values():
            if isinstance(layout_node.state, Collapsed):
                layout_node.state = Expanded(layout_node.state.hidden_children)

    def collapse_all(self) -> None:
        """Collapse every directory below the root; the root stays expanded."""
        for layout_node in self._nodes.values():
            if layout_node.depth == 0:
                if isinstance(layout_node.state, Collapsed):
                    layout_node.state = Expanded(layout_node.state.hidden_children)
                continue
            if isinstance(layout_node.state, Expanded):
                layout_node.state = Collapsed(layout_node.state.children)

    # -------------------------------------------------------------------------
    # VISIBILITY
    # -------------------------------------------------------------------------

    def visible_ids(self) -> List[str]:
        """Ids of the visible hierarchy in pre-order (parents before children)."""
        out: List[str] = []
        stack = [self.root_id]
        while stack:
            node_id = stack.pop()
            out.append(node_id)
            stack.extend(reversed(self._nodes[node_id].children))
        return out

    def visible_links(self) -> List[Tuple[str, str]]:
        """(parent_id, child_id) pairs of the visible hierarchy in pre-order."""
        links: List[Tuple[str, str]] = []
        for node_id in self.visible_ids():
            parent_id = self._parents[node_id]
            if parent_id is not None:
                links.append((parent_id, node_id))
        return links

    def visible_height(self) -> int:
        """Deepest depth among the visible nodes."""
        return max(self._nodes[node_id].depth for node_id in self.visible_ids())

    def snapshot_positions(self, node_ids: List[str]) -> None:
        """Copy position into previous_position for the given nodes."""
        for node_id in node_ids:
            layout_node = self._nodes[node_id]
            if layout_node.position is not None:
                layout_node.previous_position = layout_node.position

    def apply_positions(self, positions: Dict[str, Point]) -> None:
        for node_id, point in positions.items():
            self._nodes[node_id].position = point
