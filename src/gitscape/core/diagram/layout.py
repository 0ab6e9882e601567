from __future__ import annotations

"""
Tidy Tree Layout.

Places the visible hierarchy on a layered grid using the Buchheim, Jünger
and Leipert refinement of Walker's algorithm (linear time). Depth runs
along the horizontal axis, siblings are stacked on the vertical axis at a
fixed spacing, and subtrees are packed as tightly as the separation rule
allows: 1 unit between siblings, 2 units between cousins.

The root is always placed at the layout origin.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from gitscape.domain.layout_models import Margin, Point

logger = logging.getLogger(__name__)

ChildrenOf = Callable[[str], Sequence[str]]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def level_spacing(
        viewport_width: float,
        margin: Margin,
        visible_height: int,
        min_spacing: float,
        slack: int,
) -> float:
    """
    Distance between two depth levels.

    Deep trees are compressed into the viewport, shallow trees keep at least
    `min_spacing` pixels per level.

    Args:
        viewport_width: Surface extent along the depth axis.
        margin: Surface margins.
        visible_height: Deepest visible depth (0 when only the root shows).
        min_spacing: Lower bound for the spacing.
        slack: Extra levels reserved in the division.

    Returns:
        float: Level spacing in pixels.
    """
    available = viewport_width - margin.left - margin.right
    return max(min_spacing, available / (visible_height + slack))


def tidy_tree_layout(
        root_id: str,
        children_of: ChildrenOf,
        node_spacing: float,
        level_spacing: float,
) -> Dict[str, Point]:
    """
    Compute positions for every node reachable through `children_of`.

    Args:
        root_id: Id of the layout root.
        children_of: Returns the ordered visible children of a node id.
        node_spacing: Cross-axis distance between adjacent siblings.
        level_spacing: Depth-axis distance between levels.

    Returns:
        Dict[str, Point]: Position per node id.
    """
    root = _build_tidy_tree(root_id, children_of)

    for v in _post_order(root):
        _first_walk(v)

    assert root.parent is not None
    root.parent.m = -root.z

    positions: Dict[str, Point] = {}
    for v in _pre_order(root):
        assert v.parent is not None
        breadth = v.z + v.parent.m
        v.m += v.parent.m
        positions[v.id] = Point(v.depth * level_spacing, breadth * node_spacing)

    return positions

# -----------------------------------------------------------------------------
# INTERNAL STRUCTURES
# -----------------------------------------------------------------------------

class _TidyNode:
    """Working record of the layout walk (prelim z, modifier m, shifts)."""

    __slots__ = ("id", "depth", "parent", "children", "A", "a", "z", "m", "c", "s", "t", "i")

    def __init__(self, node_id: Optional[str], index: int, depth: int = 0):
        self.id = node_id
        self.depth = depth
        self.parent: Optional[_TidyNode] = None
        self.children: Optional[List[_TidyNode]] = None
        self.A: Optional[_TidyNode] = None  # default ancestor
        self.a: _TidyNode = self  # ancestor
        self.z = 0.0  # prelim
        self.m = 0.0  # mod
        self.c = 0.0  # change
        self.s = 0.0  # shift
        self.t: Optional[_TidyNode] = None  # thread
        self.i = index


def _build_tidy_tree(root_id: str, children_of: ChildrenOf) -> _TidyNode:
    root = _TidyNode(root_id, 0)
    stack = [root]
    while stack:
        node = stack.pop()
        child_ids = children_of(node.id) if node.id is not None else ()
        if not child_ids:
            continue
        node.children = []
        for i, child_id in enumerate(child_ids):
            child = _TidyNode(child_id, i, node.depth + 1)
            child.parent = node
            node.children.append(child)
        stack.extend(reversed(node.children))

    # Sentinel parent so the root can be treated like any other node
    sentinel = _TidyNode(None, 0)
    sentinel.children = [root]
    root.parent = sentinel
    return root


def _pre_order(root: _TidyNode) -> List[_TidyNode]:
    out: List[_TidyNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        out.append(node)
        if node.children:
            stack.extend(reversed(node.children))
    return out


def _post_order(root: _TidyNode) -> List[_TidyNode]:
    """Children left to right, each after its own subtree, parents last."""
    visit: List[_TidyNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        visit.append(node)
        if node.children:
            stack.extend(node.children)
    visit.reverse()
    return visit

# -----------------------------------------------------------------------------
# WALKER / BUCHHEIM STEPS
# -----------------------------------------------------------------------------

def _separation(a: _TidyNode, b: _TidyNode) -> float:
    return 1.0 if a.parent is b.parent else 2.0


def _next_left(v: _TidyNode) -> Optional[_TidyNode]:
    return v.children[0] if v.children else v.t


def _next_right(v: _TidyNode) -> Optional[_TidyNode]:
    return v.children[-1] if v.children else v.t


def _move_subtree(wm: _TidyNode, wp: _TidyNode, shift: float) -> None:
    change = shift / (wp.i - wm.i)
    wp.c -= change
    wp.s += shift
    wm.c += change
    wp.z += shift
    wp.m += shift


def _execute_shifts(v: _TidyNode) -> None:
    shift = 0.0
    change = 0.0
    assert v.children is not None
    for w in reversed(v.children):
        w.z += shift
        w.m += shift
        change += w.c
        shift += w.s + change


def _next_ancestor(vim: _TidyNode, v: _TidyNode, ancestor: _TidyNode) -> _TidyNode:
    return vim.a if vim.a.parent is v.parent else ancestor


def _first_walk(v: _TidyNode) -> None:
    assert v.parent is not None and v.parent.children is not None
    siblings = v.parent.children
    w = siblings[v.i - 1] if v.i else None

    if v.children:
        _execute_shifts(v)
        midpoint = (v.children[0].z + v.children[-1].z) / 2
        if w is not None:
            v.z = w.z + _separation(v, w)
            v.m = v.z - midpoint
        else:
            v.z = midpoint
    elif w is not None:
        v.z = w.z + _separation(v, w)

    v.parent.A = _apportion(v, w, v.parent.A or siblings[0])


def _apportion(v: _TidyNode, w: Optional[_TidyNode], ancestor: _TidyNode) -> _TidyNode:
    """Push the subtree of v away from its left siblings' contours."""
    if w is None:
        return ancestor

    assert v.parent is not None and v.parent.children is not None
    vip: Optional[_TidyNode] = v
    vop: _TidyNode = v
    vim: Optional[_TidyNode] = w
    vom: _TidyNode = v.parent.children[0]
    sip = vip.m
    sop = vop.m
    sim = vim.m
    som = vom.m

    while True:
        vim = _next_right(vim)
        vip = _next_left(vip)
        if vim is None or vip is None:
            break
        vom = _next_left(vom)  # type: ignore[assignment]
        vop = _next_right(vop)  # type: ignore[assignment]
        vop.a = v
        shift = vim.z + sim - vip.z - sip + _separation(vim, vip)
        if shift > 0:
            _move_subtree(_next_ancestor(vim, v, ancestor), v, shift)
            sip += shift
            sop += shift
        sim += vim.m
        sip += vip.m
        som += vom.m
        sop += vop.m

    if vim is not None and _next_right(vop) is None:
        vop.t = vim
        vop.m += sim - sop

    if vip is not None and _next_left(vom) is None:
        vom.t = vip
        vom.m += sip - som
        ancestor = v

    return ancestor
