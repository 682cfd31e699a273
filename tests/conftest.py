"""Pytest fixtures for tests."""

import os
from contextlib import contextmanager

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from huepicker import ColorPickerController, derive_geometry


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Single QApplication shared by every test."""
    app = QApplication.instance() or QApplication([])
    yield app


class RecordingCapture:
    """Pointer capture stand-in that counts acquire/release calls."""

    def __init__(self):
        self.acquired = 0
        self.released = 0

    @property
    def active(self):
        return self.acquired > self.released

    @contextmanager
    def __call__(self):
        self.acquired += 1
        try:
            yield
        finally:
            self.released += 1


@pytest.fixture
def geometry():
    """Geometry of the default 300px picker (square_size 168, mid 150)."""
    return derive_geometry(300)


@pytest.fixture
def capture():
    return RecordingCapture()


@pytest.fixture
def renders():
    return []


@pytest.fixture
def controller(geometry, capture, renders):
    """Controller starting on black with recording collaborators."""
    return ColorPickerController(
        geometry,
        value="#000000",
        render_markers=lambda hsl, invert: renders.append((hsl, invert)),
        pointer_capture=capture,
    )


@pytest.fixture
def emitted(controller):
    """Collects every signal emitted by the controller fixture."""
    log = {"valueChanged": [], "changed": [], "afterChanged": []}
    controller.valueChanged.connect(log["valueChanged"].append)
    controller.changed.connect(log["changed"].append)
    controller.afterChanged.connect(log["afterChanged"].append)
    return log
