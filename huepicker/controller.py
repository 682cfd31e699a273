# -*- coding: utf-8 -*-
"""
PADDOL: Python Advanced Design & Dispersion Optimization Lab
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import math
import logging
from contextlib import ExitStack, nullcontext
from enum import Enum, auto
from typing import Callable, ContextManager, Optional
from PySide6.QtCore import QObject, Signal

from .colormath import ColorMath, HSLTuple, RGBTuple, wrap_hue
from .config import DEFAULT_VALUE
from .geometry import WidgetGeometry, hit_ring

__all__ = ["DragState", "ColorPickerController"]

logger = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = auto()
    DRAGGING_RING = auto()
    DRAGGING_SQUARE = auto()


def _clamp(v: float) -> float:
    return max(0.0, min(1.0, v))


class ColorPickerController(QObject):
    """Pointer-driven state machine behind the hue ring / square picker.

    Coordinates passed to the pointer handlers are local widget coordinates;
    the controller converts them to midpoint-relative positions itself.

    A drag session holds a pointer subscription obtained from
    ``pointer_capture`` (a context manager factory supplied by the host). It is
    entered on press and closed exactly once when the session ends, whether by
    a release or by :meth:`teardown`.

    Signals:
        valueChanged(str): Every color change, from a drag or an external push.
        changed(str): Committed selection at release, see ``notify_unchanged``.
        afterChanged(str): Every release, after ``changed``.
    """
    valueChanged = Signal(str)
    changed = Signal(str)
    afterChanged = Signal(str)

    def __init__(self,
                 geometry: WidgetGeometry,
                 value: str = DEFAULT_VALUE,
                 disabled: bool = False,
                 render_markers: Optional[Callable[[HSLTuple, bool], None]] = None,
                 pointer_capture: Optional[Callable[[], ContextManager]] = None,
                 notify_unchanged: bool = False,
                 parent: Optional[QObject] = None):
        """Initializes the controller.

        Args:
            geometry: Layout of the widget the pointer events refer to.
            value: Initial hex color. Raises FormatError when malformed.
            disabled: Blocks new drag sessions when True.
            render_markers: Called with (hsl, invert) after every color change.
            pointer_capture: Returns a context manager that keeps move/release
                events flowing for the duration of a drag.
            notify_unchanged: Emit ``changed`` even when a gesture ends on the
                color it started from.
            parent: Optional Qt parent.
        """
        super().__init__(parent)
        rgb = ColorMath.hex_to_rgb(value)
        self._geometry = geometry
        self._render_markers = render_markers
        self._pointer_capture = pointer_capture or nullcontext
        self.notify_unchanged = notify_unchanged
        self.disabled = disabled

        self._value = value
        self._rgb: RGBTuple = rgb
        self._hsl: HSLTuple = ColorMath.rgb_to_hsl(rgb)
        self._invert = ColorMath.is_dark(rgb)

        self._state = DragState.IDLE
        self._gesture: Optional[ExitStack] = None
        self._gesture_start_value = value

    # --- Read-only state ---

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def dragging(self) -> bool:
        return self._state is not DragState.IDLE

    @property
    def circle_dragging(self) -> bool:
        return self._state is DragState.DRAGGING_RING

    @property
    def invert(self) -> bool:
        return self._invert

    @property
    def value(self) -> str:
        return self._value

    @property
    def hsl(self) -> HSLTuple:
        return self._hsl

    @property
    def rgb(self) -> RGBTuple:
        return self._rgb

    @property
    def geometry(self) -> WidgetGeometry:
        return self._geometry

    def set_geometry(self, geometry: WidgetGeometry) -> None:
        """Rebinds the layout after a size change and redraws the markers."""
        self._geometry = geometry
        self.redraw()

    def redraw(self) -> None:
        if self._render_markers is not None:
            self._render_markers(self._hsl, self._invert)

    # --- Pointer handlers ---

    def pointer_down(self, x: float, y: float) -> bool:
        """Starts a drag session at a local position.

        Returns:
            bool: True if a session was opened, False when disabled or already dragging.
        """
        if self.disabled or self.dragging:
            return False

        mid = self._geometry.mid
        rx, ry = x - mid, y - mid
        state = (DragState.DRAGGING_RING if hit_ring(self._geometry, rx, ry)
                 else DragState.DRAGGING_SQUARE)

        gesture = ExitStack()
        gesture.enter_context(self._pointer_capture())
        self._gesture = gesture
        self._state = state
        self._gesture_start_value = self._value
        logger.debug("Drag started: %s at (%.1f, %.1f)", state.name, rx, ry)

        try:
            self._apply_position(rx, ry)
        except Exception:
            self.teardown()
            raise
        return True

    def pointer_move(self, x: float, y: float) -> None:
        """Updates the color from a local position while a session is open."""
        if not self.dragging:
            return
        mid = self._geometry.mid
        self._apply_position(x - mid, y - mid)

    def pointer_up(self) -> None:
        """Ends the drag session and emits the commit notifications."""
        if not self.dragging:
            return
        try:
            self._release_gesture()
        finally:
            self._state = DragState.IDLE
        logger.debug("Drag finished with %s", self._value)

        if self.notify_unchanged or self._value != self._gesture_start_value:
            self.changed.emit(self._value)
        self.afterChanged.emit(self._value)

    def teardown(self) -> None:
        """Drops an open session without committing, e.g. when the widget goes away."""
        if not self.dragging:
            return
        try:
            self._release_gesture()
        finally:
            self._state = DragState.IDLE
        logger.debug("Drag aborted by teardown")

    def _release_gesture(self) -> None:
        gesture, self._gesture = self._gesture, None
        if gesture is not None:
            gesture.close()

    def _apply_position(self, x: float, y: float) -> None:
        h, s, l = self._hsl
        if self._state is DragState.DRAGGING_RING:
            h = wrap_hue(math.atan2(x, -y) / (2 * math.pi))
        else:
            sq = self._geometry.square_size
            if sq > 0:
                s = _clamp(0.5 - x / sq)
                l = _clamp(0.5 - y / sq)
            else:
                # degenerate square, every position is its center
                s = l = 0.5
        self._set_hsl((h, s, l))

    def _set_hsl(self, hsl: HSLTuple) -> None:
        self._hsl = hsl
        self._rgb = ColorMath.hsl_to_rgb(hsl)
        self._value = ColorMath.rgb_to_hex(self._rgb)
        self._invert = ColorMath.is_dark(self._rgb)
        self.redraw()
        self.valueChanged.emit(self._value)

    # --- External updates ---

    def set_value(self, value: str) -> bool:
        """Applies a color pushed by the host.

        Ignored while a drag is in progress so the host never fights the
        gesture. The color is parsed before any state changes, so a malformed
        value leaves the current color untouched.

        Args:
            value: Hex color, ``#RRGGBB`` or ``#RGB``.

        Returns:
            bool: True if the color was applied.

        Raises:
            FormatError: If ``value`` is not a well-formed hex color.
        """
        if self.dragging:
            logger.debug("Ignoring external color %s while dragging", value)
            return False

        rgb = ColorMath.hex_to_rgb(value)
        if value == self._value:
            return False

        self._value = value
        self._rgb = rgb
        self._hsl = ColorMath.rgb_to_hsl(rgb)
        self._invert = ColorMath.is_dark(rgb)
        self.redraw()
        self.valueChanged.emit(value)
        return True
