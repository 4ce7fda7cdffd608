"""Tests for the demo command line."""

import pytest

import deskwin.display.glyphs as glyphs
from deskwin import boot


@pytest.fixture
def started(monkeypatch):
    """Records the apps main() would run instead of starting them."""
    apps = []
    monkeypatch.setattr(boot.DeskwinApp, "run", lambda self: apps.append(self))
    return apps


class TestMain:
    def test_flags_select_glyphs_and_skip_demo(self, started, monkeypatch):
        # Given
        monkeypatch.delenv("DESKWIN_GLYPH_STYLE", raising=False)
        # When
        boot.main(["--glyphs", "compatible", "--empty"])
        # Then
        assert len(started) == 1
        assert started[0].demo is False
        assert glyphs.get("exit") == "X"

    def test_environment_configures_the_desktop(self, started, monkeypatch):
        monkeypatch.setenv("DESKWIN_EDGE_MARGIN", "2")
        boot.main([])
        assert started[0].config.edge_margin == 2
        assert started[0].config.minimized_height == 3

    def test_unknown_flag_is_rejected(self, started):
        with pytest.raises(SystemExit):
            boot.main(["--console"])
        assert started == []
