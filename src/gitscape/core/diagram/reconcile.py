from __future__ import annotations

"""
Keyed Reconciliation.

Pure diff between the visible set of the previous layout pass and the
current one. Nodes are keyed by id and links by "parent->child", so the
same element keeps its identity across passes and only truly new or
removed items enter or exit.
"""

from typing import Hashable, Iterable, List, Set, Tuple, TypeVar

from gitscape.domain.scene_models import Reconciliation

K = TypeVar("K", bound=Hashable)

LINK_KEY_SEPARATOR = "->"


def reconcile(previous: Iterable[K], current: Iterable[K]) -> Reconciliation[K]:
    """
    Split two keyed sequences into enter, update and exit groups.

    Enter and update keep the order of `current`; exit keeps the order of
    `previous`. Duplicate keys count once, at their first occurrence.

    Args:
        previous: Keys rendered by the last pass.
        current: Keys visible after this pass.

    Returns:
        Reconciliation[K]: The three-way split.
    """
    previous_keys = _unique(previous)
    current_keys = _unique(current)
    previous_set: Set[K] = set(previous_keys)
    current_set: Set[K] = set(current_keys)

    enter = tuple(k for k in current_keys if k not in previous_set)
    update = tuple(k for k in current_keys if k in previous_set)
    exit_ = tuple(k for k in previous_keys if k not in current_set)
    return Reconciliation(enter=enter, update=update, exit=exit_)


def link_key(parent_id: str, child_id: str) -> str:
    """Stable identity of the edge between a parent and a child."""
    return f"{parent_id}{LINK_KEY_SEPARATOR}{child_id}"


def link_keys(links: Iterable[Tuple[str, str]]) -> List[str]:
    return [link_key(parent_id, child_id) for parent_id, child_id in links]


def _unique(keys: Iterable[K]) -> List[K]:
    seen: Set[K] = set()
    out: List[K] = []
    for key in keys:
        if key not in seen:
            seen.add(key)
            out.append(key)
    return out
