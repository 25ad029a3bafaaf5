from __future__ import annotations

from functools import reduce as fold

import pytest

from theme_archive.lightbox import (
    Close,
    DragEnd,
    DragMove,
    DragStart,
    LightboxState,
    Next,
    Open,
    Prev,
    ToggleZoom,
    Zoom,
    clamp_scale,
    data_attributes,
    reduce,
)
from theme_archive.path_util import STATIC_DIR


def _run(state: LightboxState, *events) -> LightboxState:
    return fold(reduce, events, state)


def test_open_resets_view() -> None:
    state = _run(LightboxState(count=3), Open(1), Zoom(0.5), Open(2))

    assert state.is_open
    assert state.index == 2
    assert state.scale == 1.0
    assert state.offset == (0.0, 0.0)


def test_open_with_no_images_is_ignored() -> None:
    state = LightboxState(count=0)
    assert reduce(state, Open(0)) == state


def test_next_and_prev_wrap() -> None:
    state = _run(LightboxState(count=3), Open(2), Next())
    assert state.index == 0

    state = _run(state, Prev(), Prev())
    assert state.index == 1


def test_navigation_resets_zoom() -> None:
    state = _run(LightboxState(count=2), Open(0), Zoom(1.0), DragStart(0, 0), DragMove(10, 5), Next())

    assert state.index == 1
    assert state.scale == 1.0
    assert state.offset == (0.0, 0.0)
    assert state.drag_origin is None


def test_single_image_viewer_ignores_navigation() -> None:
    state = _run(LightboxState(count=2, navigable=False), Open(1), Next(), Prev())
    assert state.index == 1


def test_events_while_closed_are_ignored() -> None:
    state = LightboxState(count=3)
    assert _run(state, Next(), Zoom(1.0), ToggleZoom(), DragStart(1, 1)) == state


@pytest.mark.parametrize(
    "deltas, expected",
    [
        ([0.1, 0.1], 1.2),
        ([10.0], 5.0),
        ([-10.0], 0.5),
    ],
)
def test_zoom_is_clamped(deltas, expected) -> None:
    state = _run(LightboxState(count=1), Open(0), *[Zoom(d) for d in deltas])
    assert state.scale == pytest.approx(expected)


def test_toggle_zoom() -> None:
    state = _run(LightboxState(count=1), Open(0), ToggleZoom())
    assert state.scale == 2.0

    state = _run(state, DragStart(0, 0), DragMove(30, 40), DragEnd(), ToggleZoom())
    assert state.scale == 1.0
    assert state.offset == (0.0, 0.0)


def test_drag_pans_relative_to_offset() -> None:
    state = _run(LightboxState(count=1), Open(0), DragStart(100, 100), DragMove(110, 120), DragEnd())
    assert state.offset == (10, 20)
    assert state.drag_origin is None

    state = _run(state, DragStart(200, 200), DragMove(205, 200))
    assert state.offset == (15, 20)


def test_drag_move_without_start_is_ignored() -> None:
    state = _run(LightboxState(count=1), Open(0))
    assert reduce(state, DragMove(50, 50)) == state


def test_close_resets_view() -> None:
    state = _run(LightboxState(count=2), Open(1), Zoom(1.0), Close())

    assert not state.is_open
    assert state.scale == 1.0
    assert state.index == 1


def test_clamp_scale() -> None:
    assert clamp_scale(0.1) == 0.5
    assert clamp_scale(3.3) == 3.3
    assert clamp_scale(99) == 5.0


def test_data_attributes_carry_limits() -> None:
    assert data_attributes() == {
        "data-navigable": "true",
        "data-min-scale": "0.5",
        "data-max-scale": "5.0",
        "data-zoom-step": "0.1",
        "data-toggle-scale": "2.0",
    }
    assert data_attributes(navigable=False)["data-navigable"] == "false"


def test_browser_widget_reads_rendered_limits() -> None:
    script = (STATIC_DIR / "js" / "lightbox.js").read_text(encoding="utf-8")

    for key in ("minScale", "maxScale", "zoomStep", "toggleScale"):
        assert f"{key}:" in script
    assert "root.dataset[key]" in script
