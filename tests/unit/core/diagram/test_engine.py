from __future__ import annotations

"""
Unit tests for the DiagramRenderer engine.

Drives the renderer the way a surface does (initialize, resize, clicks,
toolbar actions, pan/zoom) with a manual clock, and checks lifecycle,
layout passes, reconciled frames and outward callbacks.
"""

import time
from typing import List, Tuple

import pytest

from gitscape.core.analysis.tree_builder import build_diagram_tree
from gitscape.core.diagram.engine import (
    CLICK_IGNORED,
    CLICK_OPENED,
    CLICK_TOGGLED,
    DiagramRenderer,
)
from gitscape.domain.diagram_models import DiagramNode, PathEntry
from gitscape.domain.layout_models import Expanded, Point, ViewportSize, ViewTransform
from gitscape.domain.scene_models import PHASE_ENTER, PHASE_EXIT, PHASE_UPDATE

VIEWPORT = ViewportSize(800, 600)


@pytest.fixture
def opened() -> List[str]:
    return []


@pytest.fixture
def fullscreen_requests() -> List[Tuple[DiagramNode, str, str]]:
    return []


@pytest.fixture
def renderer(clock, opened, fullscreen_requests) -> DiagramRenderer:
    return DiagramRenderer(
        on_open_external=opened.append,
        on_request_fullscreen=lambda root, name, branch: fullscreen_requests.append((root, name, branch)),
        clock=clock,
    )


def _keys(items) -> List[str]:
    return [item.key for item in items]


# -----------------------------------------------------------------------------
# Lifecycle
# -----------------------------------------------------------------------------

def test_uninitialized_without_viewport(renderer: DiagramRenderer, sample_root: DiagramNode) -> None:
    assert renderer.set_data(sample_root, "org/repo", "main") is False
    assert not renderer.is_initialized
    assert not renderer.controls_enabled
    assert renderer.frame is None
    assert renderer.sample().nodes == ()
    assert renderer.visible_node_ids() == []

    assert renderer.expand_all() is False
    assert renderer.collapse_all() is False
    assert renderer.toggle_node("a") is False
    assert renderer.click_node("a") == CLICK_IGNORED
    assert renderer.maximize() is False
    assert renderer.pan(10, 10) == ViewTransform()


@pytest.mark.parametrize("display_name, branch", [("", "main"), ("org/repo", "")])
def test_uninitialized_without_names(
        renderer: DiagramRenderer, sample_root: DiagramNode, display_name: str, branch: str,
) -> None:
    assert renderer.initialize(sample_root, VIEWPORT, display_name, branch) is False
    assert not renderer.is_initialized


def test_uninitialized_without_root(renderer: DiagramRenderer) -> None:
    assert renderer.initialize(None, VIEWPORT, "org/repo", "main") is False
    assert renderer.state is None


def test_initialize_lays_out_first_level(renderer: DiagramRenderer, sample_root: DiagramNode, clock) -> None:
    assert renderer.initialize(sample_root, VIEWPORT, "org/repo", "main") is True
    assert renderer.controls_enabled
    assert renderer.visible_node_ids() == ["", "a"]

    frame = renderer.frame
    assert frame.source_id == ""
    assert _keys(frame.nodes) == ["", "a"]
    assert all(n.phase == PHASE_ENTER for n in frame.nodes)
    # Everything grows out of the initial anchor (left margin, vertical centre)
    assert all(n.start == Point(100, 300) for n in frame.nodes)
    assert _keys(frame.links) == ["->a"]

    assert renderer.transform == ViewTransform(160, 300, 0.85)

    clock.advance(750)
    final = {s.key: s for s in renderer.sample().nodes}
    assert final[""].position == Point(0, 0)
    assert final["a"].position == Point(150, 0)
    assert final["a"].opacity == 1.0
    assert not renderer.is_animating


def test_zero_entries_shows_only_root(renderer: DiagramRenderer) -> None:
    root = build_diagram_tree([], "org/empty")
    assert renderer.initialize(root, VIEWPORT, "org/empty", "main")

    assert renderer.visible_node_ids() == [""]
    assert renderer.frame.links == ()
    (only,) = renderer.frame.nodes
    assert only.style.label == "empty"
    assert not only.style.clickable
    assert renderer.click_node("") == CLICK_IGNORED


# -----------------------------------------------------------------------------
# Toggling and clicks
# -----------------------------------------------------------------------------

def test_toggle_enters_children_from_source(renderer: DiagramRenderer, sample_root: DiagramNode, clock) -> None:
    renderer.initialize(sample_root, VIEWPORT, "org/repo", "main")
    clock.advance(750)

    assert renderer.click_node("a") == CLICK_TOGGLED
    frame = renderer.frame
    assert frame.source_id == "a"

    by_key = {n.key: n for n in frame.nodes}
    assert by_key["a/b.txt"].phase == PHASE_ENTER
    assert by_key["a/b.txt"].start == Point(150, 0)
    assert by_key["a/b.txt"].end == Point(300, -14)
    assert by_key["a/c"].end == Point(300, 14)
    assert by_key["a"].phase == PHASE_UPDATE
    assert _keys(frame.links) == ["->a", "a->a/b.txt", "a->a/c"]


def test_collapse_exits_into_source(renderer: DiagramRenderer, sample_root: DiagramNode, clock) -> None:
    renderer.initialize(sample_root, VIEWPORT, "org/repo", "main")
    renderer.toggle_node("a")
    clock.advance(750)

    renderer.toggle_node("a")
    exits = [n for n in renderer.frame.nodes if n.phase == PHASE_EXIT]
    assert _keys(exits) == ["a/b.txt", "a/c"]
    assert all(n.end == Point(150, 0) and n.end_opacity == 0.0 for n in exits)

    clock.advance(750)
    assert _keys(renderer.sample().nodes) == ["", "a"]


def test_toggle_twice_mid_transition_restores_visible_set(
        renderer: DiagramRenderer, wide_root: DiagramNode, clock,
) -> None:
    renderer.initialize(wide_root, VIEWPORT, "octo/project", "main")
    before = renderer.visible_node_ids()

    renderer.toggle_node("src")
    clock.advance(200)
    renderer.toggle_node("src")
    assert renderer.visible_node_ids() == before

    clock.advance(750)
    assert _keys(renderer.sample().nodes) == before


def test_click_file_opens_external_url(
        renderer: DiagramRenderer, sample_root: DiagramNode, opened: List[str],
) -> None:
    renderer.initialize(sample_root, VIEWPORT, "org/repo", "main")
    renderer.toggle_node("a")
    renderer.toggle_node("a/c")
    frame_before = renderer.frame
    visible_before = renderer.visible_node_ids()

    assert renderer.click_node("a/c/d.txt") == CLICK_OPENED
    assert opened == ["https://github.com/org/repo/blob/main/a/c/d.txt"]
    assert "%2F" not in opened[0]

    # Opening a file never touches the layout
    assert renderer.frame is frame_before
    assert renderer.visible_node_ids() == visible_before


def test_click_unknown_or_empty_directory_is_noop(renderer: DiagramRenderer, opened: List[str]) -> None:
    root = build_diagram_tree([PathEntry("empty", "tree")], "o/r")
    renderer.initialize(root, VIEWPORT, "o/r", "main")
    frame = renderer.frame

    assert renderer.click_node("empty") == CLICK_IGNORED
    assert renderer.click_node("ghost") == CLICK_IGNORED
    assert renderer.frame is frame
    assert opened == []


# -----------------------------------------------------------------------------
# Toolbar actions
# -----------------------------------------------------------------------------

def test_expand_all_collapse_all_closure(renderer: DiagramRenderer, wide_root: DiagramNode) -> None:
    renderer.initialize(wide_root, VIEWPORT, "octo/project", "main")
    default_visible = renderer.visible_node_ids()

    assert renderer.expand_all()
    assert set(renderer.visible_node_ids()) == {n.id for n in wide_root.iter_nodes()}
    assert renderer.frame.source_id == ""

    assert renderer.collapse_all()
    assert renderer.visible_node_ids() == default_visible

    renderer.collapse_all()
    renderer.expand_all()
    assert set(default_visible) <= set(renderer.visible_node_ids())


def test_level_spacing_follows_visible_depth(renderer: DiagramRenderer, wide_root: DiagramNode) -> None:
    wide = ViewportSize(2000, 600)
    renderer.initialize(wide_root, wide, "octo/project", "main")
    # (2000 - 250) / (1 + 3)
    assert renderer.state.node("src").position.x == pytest.approx(437.5)

    renderer.expand_all()
    # (2000 - 250) / (4 + 3)
    assert renderer.state.node("src").position.x == pytest.approx(250.0)


def test_maximize_emits_fullscreen_request(
        renderer: DiagramRenderer, sample_root: DiagramNode, fullscreen_requests,
) -> None:
    renderer.initialize(sample_root, VIEWPORT, "org/repo", "main")
    assert renderer.maximize() is True
    assert fullscreen_requests == [(sample_root, "org/repo", "main")]


def test_fullscreen_instance_does_not_maximize(sample_root: DiagramNode, clock) -> None:
    requests = []
    renderer = DiagramRenderer(on_request_fullscreen=lambda *a: requests.append(a), fullscreen=True, clock=clock)
    renderer.initialize(sample_root, VIEWPORT, "org/repo", "main")
    assert renderer.maximize() is False
    assert requests == []

# -----------------------------------------------------------------------------
# Resize
# -----------------------------------------------------------------------------

def test_resize_to_zero_and_back_keeps_expansion_state(
        renderer: DiagramRenderer, sample_root: DiagramNode, clock,
) -> None:
    renderer.initialize(sample_root, VIEWPORT, "org/repo", "main")
    renderer.toggle_node("a")
    clock.advance(750)
    renderer.pan(40, 40)

    assert renderer.resize(ViewportSize(0, 0)) is False
    assert not renderer.is_initialized
    assert not renderer.controls_enabled
    assert renderer.sample().nodes == ()
    assert isinstance(renderer.state.node("a").state, Expanded)

    assert renderer.resize(ViewportSize(1000, 700)) is True
    assert renderer.is_initialized
    assert renderer.visible_node_ids() == ["", "a", "a/b.txt", "a/c"]
    assert all(n.phase == PHASE_ENTER for n in renderer.frame.nodes)
    assert renderer.transform == ViewTransform(160, 350, 0.85)


def test_resize_while_initialized_keeps_transform(
        renderer: DiagramRenderer, sample_root: DiagramNode, clock,
) -> None:
    renderer.initialize(sample_root, VIEWPORT, "org/repo", "main")
    clock.advance(750)
    renderer.pan(10, 5)

    assert renderer.resize(ViewportSize(1200, 600)) is True
    assert renderer.transform == ViewTransform(170, 305, 0.85)
    assert renderer.frame.source_id == ""
    assert all(n.phase == PHASE_UPDATE for n in renderer.frame.nodes)


def test_resize_within_tolerance_is_ignored(renderer: DiagramRenderer, sample_root: DiagramNode) -> None:
    renderer.initialize(sample_root, VIEWPORT, "org/repo", "main")
    frame = renderer.frame
    assert renderer.resize(ViewportSize(800.5, 600.4)) is False
    assert renderer.frame is frame


def test_resize_before_data_then_data_arrives(renderer: DiagramRenderer, sample_root: DiagramNode) -> None:
    assert renderer.resize(VIEWPORT) is False
    assert renderer.set_data(sample_root, "org/repo", "main") is True
    assert renderer.visible_node_ids() == ["", "a"]

# -----------------------------------------------------------------------------
# Data replacement
# -----------------------------------------------------------------------------

def test_new_data_resets_state_and_discards_transitions(
        renderer: DiagramRenderer, sample_root: DiagramNode, wide_root: DiagramNode,
) -> None:
    renderer.initialize(sample_root, VIEWPORT, "org/repo", "main")
    renderer.toggle_node("a")
    renderer.zoom(2.0, Point(0, 0))

    assert renderer.set_data(wide_root, "octo/project", "dev") is True
    frame = renderer.frame
    assert all(n.phase == PHASE_ENTER for n in frame.nodes)
    assert "a" not in _keys(frame.nodes)
    assert renderer.visible_node_ids() == ["", "README.md", "docs", "setup.py", "src", "tests"]
    assert renderer.transform == ViewTransform(160, 300, 0.85)
    assert renderer.root is wide_root
    assert renderer.branch_name == "dev"

# -----------------------------------------------------------------------------
# Pan / zoom
# -----------------------------------------------------------------------------

def test_zoom_and_wheel_compose_with_transform(renderer: DiagramRenderer, sample_root: DiagramNode) -> None:
    renderer.initialize(sample_root, VIEWPORT, "org/repo", "main")
    positions_before = {n.id: n.position for n in renderer.state.all_nodes()}

    t = renderer.zoom(2.0, Point(160, 300))
    assert t.scale == pytest.approx(1.7)
    assert (t.translate_x, t.translate_y) == pytest.approx((160, 300))

    t = renderer.wheel(-100, Point(160, 300))
    assert t.scale == pytest.approx(1.7 * 2 ** 0.2)

    for _ in range(50):
        renderer.wheel(-500, Point(0, 0))
    assert renderer.transform.scale == 5.0

    # Layout positions are untouched by view changes
    assert {n.id: n.position for n in renderer.state.all_nodes()} == positions_before


def test_reset_view(renderer: DiagramRenderer, sample_root: DiagramNode) -> None:
    renderer.initialize(sample_root, VIEWPORT, "org/repo", "main")
    renderer.pan(300, -20)
    assert renderer.reset_view() == ViewTransform(160, 300, 0.85)


def test_expand_all_on_large_listing(renderer: DiagramRenderer) -> None:
    entries = [
        PathEntry(path=f"pkg{d}/module{f}.py", kind="blob", size=100)
        for d in range(150)
        for f in range(100)
    ]
    root = build_diagram_tree(entries, "org/big")
    assert renderer.initialize(root, VIEWPORT, "org/big", "main")

    started = time.perf_counter()
    assert renderer.expand_all()
    elapsed = time.perf_counter() - started

    assert len(renderer.visible_node_ids()) == 1 + 150 + 150 * 100
    assert len(renderer.frame.nodes) == 1 + 150 + 150 * 100
    assert elapsed < 3.0
