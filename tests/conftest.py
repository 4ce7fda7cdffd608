"""Shared fixtures for the engine tests."""

import pytest

import deskwin.display.glyphs as glyphs
from deskwin.core import ContainerBounds, WindowEngine, WindowRegistry, normalize_props


class RecordingScheduler:
    """Collects scheduled callbacks instead of running a timer."""

    def __init__(self):
        self.calls = []

    def __call__(self, delay_ms, callback):
        self.calls.append((delay_ms, callback))

    def run_all(self):
        calls, self.calls = self.calls, []
        for _, callback in calls:
            callback()


@pytest.fixture
def registry():
    return WindowRegistry(container=ContainerBounds(height=700, width=1000))


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def make_window(registry):
    """Builds and mounts a window engine on the shared registry."""

    def _make(window_id="w", minimize=None, config=None, scheduler=None, **props):
        engine = WindowEngine(
            normalize_props(id=window_id, config=config, **props),
            registry,
            minimize=minimize,
            config=config,
            scheduler=scheduler,
        )
        engine.mount()
        return engine

    return _make


@pytest.fixture(autouse=True)
def standard_glyphs():
    glyphs.init("standard")
    yield
    glyphs.init("standard")
