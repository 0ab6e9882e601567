from __future__ import annotations

"""
Tree Renderer.

Converts a DiagramNode hierarchy into an ASCII representation for terminal
output. Children are emitted in builder order, which is sorted by path.
"""

from typing import List

from gitscape.domain.diagram_models import DiagramNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_diagram_tree(root: DiagramNode) -> List[str]:
    """
    Render a full hierarchy, starting with the root's name.

    Args:
        root: The synthetic root produced by the tree builder.

    Returns:
        List[str]: Visual lines of the tree.
    """
    lines: List[str] = [f"{root.name}/" if root.is_directory else root.name]
    render_tree_structure(root, lines, prefix="")
    return lines


def render_tree_structure(node: DiagramNode, lines: List[str], prefix: str = "") -> None:
    """
    Recursively append the children of `node` to `lines`.

    Uses standard ASCII connectors (├──, └──) and manages indentation
    levels for nested directories. Directory names carry a trailing slash.

    Args:
        node: Current node to process.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    children = node.children or []
    total = len(children)

    for i, child in enumerate(children):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        if child.is_directory:
            lines.append(f"{prefix}{connector}{child.name}/")
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(child, lines, prefix=new_prefix)
            continue

        lines.append(f"{prefix}{connector}{child.name}")
