from __future__ import annotations

"""
Diagram Hierarchy Data Models.

Provides the input record consumed from the repository tree listing and
the node type produced by the tree builder. Node identity is the full
path from the repository root, the synthetic root uses the empty string.
"""

from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Optional

# -----------------------------------------------------------------------------
# NODE KINDS
# -----------------------------------------------------------------------------

KIND_DIRECTORY = "directory"
KIND_FILE = "file"

# Git tree object types as reported by the data source
ENTRY_BLOB = "blob"
ENTRY_TREE = "tree"

ROOT_ID = ""

# -----------------------------------------------------------------------------
# INPUT RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PathEntry:
    """
    One file or directory as reported by the repository tree listing.

    Attributes:
        path: Slash-separated path relative to the repository root.
        kind: Git object type ("blob", "tree" or anything else).
        size: Byte size when known (blobs only).
    """
    path: str
    kind: str = ENTRY_BLOB
    size: Optional[int] = None

    @classmethod
    def from_dict(cls, item: Mapping[str, Any]) -> "PathEntry":
        """
        Build an entry from a git-tree item mapping.

        Accepts both the GitHub field name ('type') and the local one ('kind').

        Raises:
            TypeError: If the item is not a mapping or the path is not a string.
        """
        if not isinstance(item, Mapping):
            raise TypeError(f"Tree item must be a mapping, received {type(item).__name__}.")

        path = item.get("path")
        if not isinstance(path, str):
            raise TypeError(f"Tree item path must be a string, received {type(path).__name__}.")

        kind = item.get("type", item.get("kind", ENTRY_BLOB))
        size = item.get("size")
        if isinstance(size, bool) or not isinstance(size, int):
            size = None

        return cls(path=path, kind=str(kind), size=size)

# -----------------------------------------------------------------------------
# HIERARCHY NODES
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class DiagramNode:
    """
    A node of the built hierarchy.

    The id never changes once the node exists. Kind, weight and source data
    may be corrected by the builder when an explicit entry for an implied
    directory shows up later.

    Attributes:
        id: Full path from the repository root ("" for the root).
        name: Last path segment, or the repository short name for the root.
        kind: "directory" or "file".
        path: Same as id, kept for display and linking.
        children: Ordered children for directories, None for files.
        weight: Sizing hint (file size if known, else a per-kind constant).
        source_data: Original entry for explicitly listed nodes.
    """
    id: str
    name: str
    kind: str
    path: str
    children: Optional[List["DiagramNode"]] = None
    weight: int = 0
    source_data: Optional[PathEntry] = None

    @property
    def is_directory(self) -> bool:
        return self.kind == KIND_DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind == KIND_FILE

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_ID

    def iter_nodes(self) -> Iterator["DiagramNode"]:
        """Yield this node and all descendants in pre-order."""
        stack: List[DiagramNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))

    def find(self, node_id: str) -> Optional["DiagramNode"]:
        """Follow path segments from the root down to the given id."""
        if node_id == self.id:
            return self

        current: Optional[DiagramNode] = self
        accumulated = ROOT_ID
        for part in node_id.split("/"):
            accumulated = f"{accumulated}/{part}" if accumulated else part
            if current is None or not current.children:
                return None
            current = next((c for c in current.children if c.id == accumulated), None)
        return current
