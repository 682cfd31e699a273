# -*- coding: utf-8 -*-
"""
PADDOL: Python Advanced Design & Dispersion Optimization Lab
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import sys
import logging
from contextlib import contextmanager
from typing import Optional
from PySide6.QtWidgets import QApplication, QWidget, QVBoxLayout, QLabel
from PySide6.QtGui import QPainter, QColor, QImage, QMouseEvent, QWindow
from PySide6.QtCore import Qt, Signal, Slot, QEvent, QObject, QPointF, QRectF, QSize

from .colormath import ColorMath, HSLTuple
from .config import ColorPickerConfig, DEFAULT_SIZE, DEFAULT_VALUE
from .controller import ColorPickerController
from .geometry import derive_geometry
from .renderer import (upscale_for_sharpness, render_ring_layer,
                       render_overlay_layer, DARK, LIGHT)

__all__ = ["ColorPickerWidget", "main"]

logger = logging.getLogger(__name__)


class ColorPickerWidget(QWidget):
    """A hue ring around a saturation/lightness square.

    Dragging on the ring changes the hue, dragging in the square changes
    saturation (horizontal) and lightness (vertical). The widget paints three
    stacked layers: the square filled with the pure hue, a static layer with the
    ring and the square's mask, and an overlay with the two markers.

    Signals:
        valueChanged(str): Every color change, dragged or pushed with setValue().
        changed(str): Committed color when a drag ends.
        afterChanged(str): Emitted after every drag, following ``changed``.
    """
    valueChanged = Signal(str)
    changed = Signal(str)
    afterChanged = Signal(str)

    def __init__(self,
                 size: int = DEFAULT_SIZE,
                 value: str = DEFAULT_VALUE,
                 disabled: bool = False,
                 show_value: bool = True,
                 notify_unchanged: bool = False,
                 parent: Optional[QWidget] = None):
        """Initializes the ColorPickerWidget.

        Args:
            size (int): Edge length of the widget in pixels. Defaults to 300.
            value (str): Initial hex color. Defaults to "#000000".
            disabled (bool): Start with new drags blocked. Defaults to False.
            show_value (bool): Draw the hex string inside the square. Defaults to True.
            notify_unchanged (bool): Emit ``changed`` even when a drag ends on its
                starting color. Defaults to False.
            parent (QWidget, optional): Parent widget.

        Raises:
            FormatError: If ``value`` is not a well-formed hex color.
        """
        super().__init__(parent)
        self.show_value = show_value
        self._geometry = derive_geometry(size)
        self._ring_layer: Optional[QImage] = None
        self._overlay_layer: Optional[QImage] = None

        self.controller = ColorPickerController(
            self._geometry,
            value=value,
            disabled=disabled,
            render_markers=self._draw_markers,
            pointer_capture=self._capture_pointer,
            notify_unchanged=notify_unchanged,
            parent=self,
        )
        self.controller.valueChanged.connect(self.valueChanged)
        self.controller.changed.connect(self.changed)
        self.controller.afterChanged.connect(self.afterChanged)

        self.setFixedSize(size, size)
        self.setCursor(Qt.CursorShape.CrossCursor)
        self._mount_layers()

    @classmethod
    def from_config(cls, config: ColorPickerConfig,
                    parent: Optional[QWidget] = None) -> "ColorPickerWidget":
        """Creates a widget from a :class:`ColorPickerConfig`."""
        return cls(size=config.size, value=config.value, disabled=config.disabled,
                   show_value=config.show_value,
                   notify_unchanged=config.notify_unchanged, parent=parent)

    # --- Host API ---

    def value(self) -> str:
        return self.controller.value

    @Slot(str)
    def setValue(self, value: str) -> bool:
        """Pushes an external color. Ignored while dragging; see ColorPickerController.set_value."""
        return self.controller.set_value(value)

    def pickerSize(self) -> int:
        return int(self._geometry.size)

    def setPickerSize(self, size: int) -> None:
        """Resizes the picker, re-deriving the geometry and rebuilding both layers."""
        if size == self._geometry.size:
            return
        self._geometry = derive_geometry(size)
        self.setFixedSize(size, size)
        self._mount_layers()

    def isPickerDisabled(self) -> bool:
        return self.controller.disabled

    def setPickerDisabled(self, disabled: bool) -> None:
        """Blocks or allows new drags. A drag already in progress is not interrupted."""
        self.controller.disabled = disabled

    def sizeHint(self) -> QSize:
        side = int(self._geometry.size)
        return QSize(side, side)

    # --- Layers ---

    def _mount_layers(self):
        """Allocates both layers for the current geometry and screen density."""
        dpr = self.devicePixelRatioF()
        self._ring_layer = render_ring_layer(self._geometry, dpr)
        self._overlay_layer = upscale_for_sharpness(self._geometry.size, dpr)
        logger.debug("Mounted layers: size=%s dpr=%s", self._geometry.size, dpr)
        # set_geometry redraws the markers onto the new overlay
        self.controller.set_geometry(self._geometry)

    def _draw_markers(self, hsl: HSLTuple, invert: bool):
        if self._overlay_layer is None:
            return
        render_overlay_layer(self._overlay_layer, self._geometry, hsl, invert)
        self.update()

    # --- Pointer capture ---

    @contextmanager
    def _capture_pointer(self):
        """Listens to application-wide mouse events for the length of one drag."""
        app = QApplication.instance()
        app.installEventFilter(self)
        try:
            yield
        finally:
            app.removeEventFilter(self)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        """Routes move/release events to the controller while a drag is open.

        Only events addressed to a window are handled; Qt forwards the same
        event to the widget under the cursor afterwards.
        """
        if isinstance(watched, QWindow) and self.controller.dragging:
            etype = event.type()
            if etype == QEvent.Type.MouseMove:
                pos = self.mapFromGlobal(event.globalPosition())
                self.controller.pointer_move(pos.x(), pos.y())
            elif (etype == QEvent.Type.MouseButtonRelease
                  and event.button() == Qt.MouseButton.LeftButton):
                self.controller.pointer_up()
        return super().eventFilter(watched, event)

    # --- Qt events ---

    def mousePressEvent(self, e: QMouseEvent):
        """Starts a drag on the ring or in the square."""
        if e.button() == Qt.MouseButton.LeftButton:
            pos = e.position()
            if self.controller.pointer_down(pos.x(), pos.y()):
                e.accept()
                return
        super().mousePressEvent(e)

    def showEvent(self, e):
        """Rebuilds the layers if the widget landed on a screen with another density."""
        if self._ring_layer.devicePixelRatio() != max(1.0, self.devicePixelRatioF()):
            self._mount_layers()
        super().showEvent(e)

    def hideEvent(self, e):
        """Drops an open drag so the application event filter is released."""
        self.controller.teardown()
        super().hideEvent(e)

    def closeEvent(self, e):
        self.controller.teardown()
        super().closeEvent(e)

    def paintEvent(self, e):
        """Paints the hue background, the value text, the ring layer and the markers."""
        g = self._geometry
        sq = g.square_size
        square = QRectF(g.mid - sq / 2, g.mid - sq / 2, sq, sq)

        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        p.fillRect(square, QColor(ColorMath.hue_color(self.controller.hsl[0])))

        if self.show_value:
            p.setPen(LIGHT if self.controller.invert else DARK)
            p.drawText(square, Qt.AlignmentFlag.AlignCenter, self.controller.value)

        p.drawImage(QPointF(0, 0), self._ring_layer)
        p.drawImage(QPointF(0, 0), self._overlay_layer)
        p.end()


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    app = QApplication.instance() or QApplication(sys.argv)

    window = QWidget()
    window.setWindowTitle("Hue Picker")
    layout = QVBoxLayout(window)
    picker = ColorPickerWidget(value="#3daee9")
    label = QLabel(picker.value())
    label.setAlignment(Qt.AlignmentFlag.AlignCenter)
    label.setStyleSheet("font-family: monospace; font-size: 14px;")
    layout.addWidget(picker, alignment=Qt.AlignmentFlag.AlignCenter)
    layout.addWidget(label)

    picker.valueChanged.connect(label.setText)
    picker.afterChanged.connect(lambda c: print(f"Selected: {c}"))

    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
