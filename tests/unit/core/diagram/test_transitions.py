from __future__ import annotations

"""
Unit tests for transition planning and playback.
"""

import time

import pytest

from gitscape.core.diagram.reconcile import reconcile
from gitscape.core.diagram.transitions import (
    TransitionPlayer,
    ease_cubic_in_out,
    lerp_point,
    plan_frame,
)
from gitscape.domain.layout_models import Point
from gitscape.domain.scene_models import (
    PHASE_ENTER,
    PHASE_EXIT,
    PHASE_UPDATE,
    NodeStyle,
    RenderFrame,
)

STYLE = NodeStyle(
    kind="directory", label="x", tooltip="x", radius=7.0, fill="#000000",
    stroke="#000000", label_dx=12.0, label_anchor="start", clickable=True,
)


def _expand_frame() -> RenderFrame:
    """Root expands: 'a' and 'b' enter from the root's old position."""
    return plan_frame(
        source_id="",
        anchor_previous=Point(100, 300),
        anchor_current=Point(0, 0),
        nodes=reconcile([""], ["", "a", "b"]),
        links=reconcile([], [("", "a"), ("", "b")]),
        previous_positions={"": Point(100, 300)},
        current_positions={"": Point(0, 0), "a": Point(150, -14), "b": Point(150, 14)},
        styles={"": STYLE, "a": STYLE, "b": STYLE},
        duration_ms=750,
    )


# -----------------------------------------------------------------------------
# Easing
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("t, expected", [(0.0, 0.0), (0.5, 0.5), (1.0, 1.0), (0.25, 0.0625), (0.75, 0.9375)])
def test_ease_cubic_in_out(t: float, expected: float) -> None:
    assert ease_cubic_in_out(t) == pytest.approx(expected)


def test_ease_clamps_input() -> None:
    assert ease_cubic_in_out(-1) == 0.0
    assert ease_cubic_in_out(2) == 1.0


def test_lerp_point() -> None:
    assert lerp_point(Point(0, 0), Point(10, -20), 0.25) == Point(2.5, -5.0)

# -----------------------------------------------------------------------------
# Planning
# -----------------------------------------------------------------------------

def test_plan_enter_starts_at_anchor_previous() -> None:
    frame = _expand_frame()
    by_key = {n.key: n for n in frame.nodes}

    assert by_key["a"].phase == PHASE_ENTER
    assert by_key["a"].start == Point(100, 300)
    assert by_key["a"].end == Point(150, -14)
    assert (by_key["a"].start_opacity, by_key["a"].end_opacity) == (0.0, 1.0)

    assert by_key[""].phase == PHASE_UPDATE
    assert by_key[""].start == Point(100, 300)
    assert by_key[""].end == Point(0, 0)
    assert by_key[""].start_opacity == 1.0

    link = frame.links[0]
    assert link.key == "->a"
    assert link.phase == PHASE_ENTER
    assert link.start.source == link.start.target == Point(100, 300)


def test_plan_exit_collapses_into_anchor_current() -> None:
    frame = plan_frame(
        source_id="a",
        anchor_previous=Point(150, 0),
        anchor_current=Point(150, 0),
        nodes=reconcile(["", "a", "a/x"], ["", "a"]),
        links=reconcile([("", "a"), ("a", "a/x")], [("", "a")]),
        previous_positions={"": Point(0, 0), "a": Point(150, 0), "a/x": Point(300, 0)},
        current_positions={"": Point(0, 0), "a": Point(150, 0)},
        styles={"": STYLE, "a": STYLE, "a/x": STYLE},
        duration_ms=750,
    )
    exiting = frame.nodes[-1]
    assert exiting.key == "a/x"
    assert exiting.phase == PHASE_EXIT
    assert exiting.removes
    assert exiting.start == Point(300, 0)
    assert exiting.end == Point(150, 0)
    assert (exiting.start_opacity, exiting.end_opacity) == (1.0, 0.0)

    exiting_link = frame.links[-1]
    assert exiting_link.key == "a->a/x"
    assert exiting_link.removes
    assert exiting_link.end.source == exiting_link.end.target == Point(150, 0)

# -----------------------------------------------------------------------------
# Playback
# -----------------------------------------------------------------------------

def test_player_interpolates_over_duration(clock) -> None:
    player = TransitionPlayer(clock)
    player.start(_expand_frame())

    start = {s.key: s for s in player.sample().nodes}
    assert start["a"].position == Point(100, 300)
    assert start["a"].opacity == 0.0
    assert player.is_running

    clock.advance(375)
    middle = {s.key: s for s in player.sample().nodes}
    assert middle["a"].position == Point(125, 143)
    assert middle["a"].opacity == pytest.approx(0.5)

    clock.advance(375)
    end = player.sample()
    assert end.finished
    assert not player.is_running
    assert {s.key: s.position for s in end.nodes}["b"] == Point(150, 14)


def test_player_drops_exits_when_finished(clock) -> None:
    frame = plan_frame(
        source_id="",
        anchor_previous=Point(0, 0),
        anchor_current=Point(0, 0),
        nodes=reconcile(["", "a"], [""]),
        links=reconcile([("", "a")], []),
        previous_positions={"": Point(0, 0), "a": Point(150, 0)},
        current_positions={"": Point(0, 0)},
        styles={"": STYLE, "a": STYLE},
        duration_ms=750,
    )
    player = TransitionPlayer(clock)
    player.start(frame)

    assert [s.key for s in player.sample().nodes] == ["", "a"]
    clock.advance(800)
    snapshot = player.sample()
    assert [s.key for s in snapshot.nodes] == [""]
    assert snapshot.links == ()


def test_player_rebases_interrupted_items(clock) -> None:
    player = TransitionPlayer(clock)
    player.start(_expand_frame())
    clock.advance(375)
    shown = {s.key: s for s in player.sample().nodes}

    # Collapse again mid-flight: 'a' exits from where it is on screen
    collapse = plan_frame(
        source_id="",
        anchor_previous=Point(0, 0),
        anchor_current=Point(0, 0),
        nodes=reconcile(["", "a", "b"], [""]),
        links=reconcile([("", "a"), ("", "b")], []),
        previous_positions={"": Point(0, 0), "a": Point(150, -14), "b": Point(150, 14)},
        current_positions={"": Point(0, 0)},
        styles={"": STYLE, "a": STYLE, "b": STYLE},
        duration_ms=750,
    )
    played = player.start(collapse)
    by_key = {n.key: n for n in played.nodes}

    assert by_key["a"].start == shown["a"].position
    assert by_key["a"].start_opacity == pytest.approx(shown["a"].opacity)
    assert by_key["a"].phase == PHASE_EXIT


def test_reentering_exiting_item_resumes_as_update(clock) -> None:
    player = TransitionPlayer(clock)
    collapse = plan_frame(
        source_id="",
        anchor_previous=Point(0, 0),
        anchor_current=Point(0, 0),
        nodes=reconcile(["", "a"], [""]),
        links=reconcile([("", "a")], []),
        previous_positions={"": Point(0, 0), "a": Point(150, 0)},
        current_positions={"": Point(0, 0)},
        styles={"": STYLE, "a": STYLE},
        duration_ms=750,
    )
    player.start(collapse)
    clock.advance(100)

    expand = plan_frame(
        source_id="",
        anchor_previous=Point(0, 0),
        anchor_current=Point(0, 0),
        nodes=reconcile([""], ["", "a"]),
        links=reconcile([], [("", "a")]),
        previous_positions={"": Point(0, 0)},
        current_positions={"": Point(0, 0), "a": Point(150, 0)},
        styles={"": STYLE, "a": STYLE},
        duration_ms=750,
    )
    played = player.start(expand)
    a = next(n for n in played.nodes if n.key == "a")
    assert a.phase == PHASE_UPDATE
    assert a.start_opacity > 0.9
    assert played.links[0].phase == PHASE_UPDATE


def test_cancel_clears_scene(clock) -> None:
    player = TransitionPlayer(clock)
    player.start(_expand_frame())
    player.cancel()
    assert player.frame is None
    assert player.sample().nodes == ()
    assert not player.is_running


def test_zero_duration_finishes_immediately(clock) -> None:
    frame = _expand_frame()
    player = TransitionPlayer(clock)
    player.start(RenderFrame(frame.source_id, 0, frame.nodes, frame.links))
    assert player.sample().finished


# -----------------------------------------------------------------------------
# Scale
# -----------------------------------------------------------------------------

def test_plan_frame_is_linear_in_entering_nodes() -> None:
    """Expanding a listing of twenty thousand nodes plans in well under a second."""
    ids = [""] + [f"dir{i // 100}/file{i}.txt" for i in range(20000)]
    positions = {node_id: Point(float(i), float(i)) for i, node_id in enumerate(ids)}
    links = [("", node_id) for node_id in ids[1:]]

    started = time.perf_counter()
    frame = plan_frame(
        source_id="",
        anchor_previous=Point(0, 0),
        anchor_current=Point(0, 0),
        nodes=reconcile([""], ids),
        links=reconcile([], links),
        previous_positions={"": Point(0, 0)},
        current_positions=positions,
        styles={node_id: STYLE for node_id in ids},
        duration_ms=750,
    )
    elapsed = time.perf_counter() - started

    assert elapsed < 1.0
    assert len(frame.nodes) == len(ids)
    assert [item.key for item in frame.nodes if item.phase == PHASE_UPDATE] == [""]
    assert sum(item.phase == PHASE_ENTER for item in frame.nodes) == len(ids) - 1
    assert len(frame.links) == len(links)
