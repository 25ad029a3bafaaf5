"""Lightbox state machine.

Pure model of the image viewer js/lightbox.js drives on each detail page.
States are ``closed`` and ``open``; every user action is an event and
:func:`reduce` returns the next state. Two instances exist per page: the
main screenshot gallery (navigable) and the alternate flash-menu viewer
(not navigable).
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple, Union

from theme_archive import settings

Point = Tuple[float, float]
ORIGIN: Point = (0.0, 0.0)


@dataclass(frozen=True)
class LightboxState:
    count: int
    navigable: bool = True
    is_open: bool = False
    index: int = 0
    scale: float = 1.0
    offset: Point = ORIGIN
    drag_origin: Optional[Point] = None


@dataclass(frozen=True)
class Open:
    index: int


@dataclass(frozen=True)
class Close:
    pass


@dataclass(frozen=True)
class Next:
    pass


@dataclass(frozen=True)
class Prev:
    pass


@dataclass(frozen=True)
class Zoom:
    delta: float


@dataclass(frozen=True)
class ToggleZoom:
    pass


@dataclass(frozen=True)
class DragStart:
    x: float
    y: float


@dataclass(frozen=True)
class DragMove:
    x: float
    y: float


@dataclass(frozen=True)
class DragEnd:
    pass


LightboxEvent = Union[Open, Close, Next, Prev, Zoom, ToggleZoom, DragStart, DragMove, DragEnd]


def clamp_scale(scale: float) -> float:
    return max(settings.LIGHTBOX_MIN_SCALE, min(settings.LIGHTBOX_MAX_SCALE, scale))


def _reset_view(state: LightboxState, **changes) -> LightboxState:
    return replace(state, scale=1.0, offset=ORIGIN, drag_origin=None, **changes)


def _step(state: LightboxState, step: int) -> LightboxState:
    if not state.is_open or not state.navigable or state.count <= 0:
        return state
    return _reset_view(state, index=(state.index + step) % state.count)


def reduce(state: LightboxState, event: LightboxEvent) -> LightboxState:
    """Apply one event. Unknown or inapplicable events leave the state as is."""
    if isinstance(event, Open):
        if state.count <= 0:
            return state
        return _reset_view(state, is_open=True, index=event.index % state.count)
    if isinstance(event, Close):
        return _reset_view(state, is_open=False)
    if not state.is_open:
        return state
    if isinstance(event, Next):
        return _step(state, 1)
    if isinstance(event, Prev):
        return _step(state, -1)
    if isinstance(event, Zoom):
        return replace(state, scale=clamp_scale(state.scale + event.delta))
    if isinstance(event, ToggleZoom):
        # Zoomed in snaps back to 1:1, otherwise jump to the default zoom level
        if state.scale != 1.0:
            return replace(state, scale=1.0, offset=ORIGIN)
        return replace(state, scale=clamp_scale(settings.LIGHTBOX_TOGGLE_SCALE))
    if isinstance(event, DragStart):
        return replace(state, drag_origin=(event.x - state.offset[0], event.y - state.offset[1]))
    if isinstance(event, DragMove):
        if state.drag_origin is None:
            return state
        return replace(state, offset=(event.x - state.drag_origin[0], event.y - state.drag_origin[1]))
    if isinstance(event, DragEnd):
        return replace(state, drag_origin=None)
    return state


def data_attributes(navigable: bool = True) -> Dict[str, str]:
    """``data-*`` attributes a lightbox container carries for js/lightbox.js.

    The browser widget reads its limits from these, so the page and
    :func:`reduce` share the values in :mod:`theme_archive.settings`.
    """
    return {
        "data-navigable": "true" if navigable else "false",
        "data-min-scale": str(settings.LIGHTBOX_MIN_SCALE),
        "data-max-scale": str(settings.LIGHTBOX_MAX_SCALE),
        "data-zoom-step": str(settings.LIGHTBOX_ZOOM_STEP),
        "data-toggle-scale": str(settings.LIGHTBOX_TOGGLE_SCALE),
    }
