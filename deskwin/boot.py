"""
deskwin demo
A handful of floating windows on a terminal desktop, built with Textual.

- Drag a window by its title
- Minimize stacks windows in the bottom-right corner, un-minimize sends them home
- Maximize fills the desktop
- Click a window or press Alt+Tab to bring it to the front

Log lines go to `textual console` when started with `textual run --dev deskwin.boot:DeskwinApp`.
"""
from __future__ import annotations

import argparse
from datetime import datetime

import deskwin.display.glyphs as glyphs
from deskwin.config import TERMINAL, EngineConfig
from deskwin.core.events import WindowsChanged, WindowStateChanged
from deskwin.display.desktop import Desktop
from textual import on
from textual.app import App, ComposeResult
from textual.widgets import Digits, Footer, Static, TextArea

# ─────────────────────────────────────────────────────────────────────────────
#  Demo windows
# ─────────────────────────────────────────────────────────────────────────────


class ClockFace(Digits):
    def on_mount(self) -> None:
        self.update_clock()
        self.set_interval(1, self.update_clock)

    def update_clock(self) -> None:
        self.update(f"{datetime.now().time():%T}")


DEMO_WINDOWS = [
    (lambda: Static("Drag me by the title bar."), {"title_bar": {"icon": "~", "title": "Welcome"}, "top": 1, "left": 2, "width": 40, "height": 8}),
    (lambda: TextArea(), {"title_bar": {"title": "Notepad"}, "top": 4, "left": 20, "width": 50, "height": 14, "resizable": True}),
    (lambda: ClockFace(), {"title_bar": {"title": "Clock", "buttons": {"maximize": False}}, "top": 2, "left": 60, "width": 32, "height": 7}),
]


# ─────────────────────────────────────────────────────────────────────────────
#  Main Application
# ─────────────────────────────────────────────────────────────────────────────
class DeskwinApp(App):
    """Hosts the desktop and its global key bindings."""
    BINDINGS = [
        ("alt+tab", "cycle_focus('1')", "Next Window"),
        ("alt+shift+tab", "cycle_focus('-1')", "Previous Window"),
        ("ctrl+n", "new_window", "New Window"),
        ("alt+m", "minimize_active", "Minimize"),
        ("alt+r", "restore_all", "Restore All"),
        ("alt+q", "close_active", "Close"),
    ]

    def __init__(self, config: EngineConfig = TERMINAL, demo: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.config = config
        self.demo = demo
        self._opened = 0

    def compose(self) -> ComposeResult:
        yield Desktop(config=self.config, id="desktop")
        yield Footer()

    @property
    def wm(self):
        return self.query_one(Desktop).wm

    async def on_mount(self) -> None:
        if not self.demo:
            return
        for make_content, props in DEMO_WINDOWS:
            await self.wm.spawn_window(make_content(), **props)

    @on(WindowStateChanged)
    def show_state_change(self, message: WindowStateChanged) -> None:
        self.notify(f"{message.window_id}: {message.lifecycle.value}", timeout=1.5)

    @on(WindowsChanged)
    def update_subtitle(self, message: WindowsChanged) -> None:
        self.sub_title = f"{len(message.window_ids)} windows"

    async def action_new_window(self) -> None:
        self._opened += 1
        await self.wm.spawn_window(
            Static(f"Window #{self._opened}"),
            title_bar={"title": f"Untitled {self._opened}"},
            width=30,
            height=8,
        )

    async def action_cycle_focus(self, direction: str) -> None:
        self.wm.focus_cycle(int(direction))

    def action_minimize_active(self) -> None:
        active = self.wm.active_window
        if active:
            self.wm.set_minimized(active.engine.id, True)

    def action_restore_all(self) -> None:
        for window_id in list(self.wm.flags):
            self.wm.set_minimized(window_id, False)

    async def action_close_active(self) -> None:
        active = self.wm.active_window
        if active:
            await self.wm.close_window(active)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="deskwin", description="Floating windows on a terminal desktop.")
    parser.add_argument("--glyphs", choices=glyphs.STYLES, default=None, help="title bar glyph set")
    parser.add_argument("--empty", action="store_true", help="start without the demo windows")
    args = parser.parse_args(argv)

    config = EngineConfig.from_env(base=TERMINAL)
    glyphs.init(args.glyphs or config.glyph_style)
    DeskwinApp(config=config, demo=not args.empty).run()


if __name__ == "__main__":
    main()
