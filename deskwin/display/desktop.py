from __future__ import annotations

from typing import Any

from deskwin.config import TERMINAL, EngineConfig
from deskwin.core.events import WindowFocused, WindowsChanged
from deskwin.core.geometry import ContainerBounds
from deskwin.core.props import normalize_props
from deskwin.core.registry import HitTarget, WindowRegistry
from deskwin.core.state import LifecycleState
from deskwin.core.window import MinimizeFlag, WindowEngine
from deskwin.display.window import Window
from textual import log, on
from textual.containers import Container
from textual.widget import Widget


class Desktop(Container):
    """
    The container hosting every window on the surface.

    It is also the sibling registry its windows consult for stacking,
    container bounds and minimized-window placement, and it repaints the
    paint order whenever a window is brought to the front.
    """
    DEFAULT_CSS = """
    Desktop {
        width: 1fr;
        height: 1fr;
        background: $background;
    }
    """

    def __init__(self, config: EngineConfig = TERMINAL, **kwargs):
        super().__init__(**kwargs)
        self.config = config
        self._registry = WindowRegistry(title_height=config.minimized_height)
        self.wm = WindowManager(self)

    @property
    def windows(self) -> list[Window]:
        """Returns the mounted windows in paint order, bottom first."""
        return [child for child in self.children if isinstance(child, Window)]

    # ─────────────────────────────────────────────────────────────────────────
    # Sibling registry
    # ─────────────────────────────────────────────────────────────────────────

    def register(self, window: WindowEngine) -> None:
        self._registry.register(window)

    def unregister(self, window: WindowEngine) -> None:
        self._registry.unregister(window)

    def query_all_window_stack_indices(self) -> list[int]:
        return self._registry.query_all_window_stack_indices()

    def hit_test(self, x: float, y: float, exclude: str | None = None) -> HitTarget | None:
        return self._registry.hit_test(x, y, exclude=exclude)

    def container_bounds(self) -> ContainerBounds:
        """The desktop's client size, or the whole app when it has none yet."""
        width, height = self.size
        if self.is_mounted and width and height:
            return ContainerBounds(height=height, width=width)
        viewport = self.app.size
        return ContainerBounds(height=viewport.height, width=viewport.width)

    # ─────────────────────────────────────────────────────────────────────────
    # Paint order
    # ─────────────────────────────────────────────────────────────────────────

    def restack(self) -> None:
        """Reorders the window widgets so higher stack indices paint on top."""
        ordered = sorted(self.windows, key=lambda window: window.engine.stack_index)
        for window in ordered:
            last = self.children[-1]
            if window is not last:
                self.move_child(window, after=last)
        for window in ordered:
            window.set_class(window is ordered[-1], "-active")

    @on(WindowFocused)
    def _restack_on_focus(self, message: WindowFocused) -> None:
        self.restack()


class WindowManager:
    """
    Spawns and closes windows on a Desktop and owns their minimize flags,
    so minimizing can be coordinated from outside the windows themselves.
    """

    def __init__(self, desktop: Desktop):
        self._desktop = desktop
        self.flags: dict[str, MinimizeFlag] = {}
        self._spawn_order: list[str] = []

    @property
    def windows(self) -> list[Window]:
        return self._desktop.windows

    @property
    def active_window(self) -> Window | None:
        """The window painted on top of all others."""
        windows = self.windows
        if not windows:
            return None
        return max(windows, key=lambda window: window.engine.stack_index)

    def get_window(self, window_id: str) -> Window | None:
        return next((w for w in self.windows if w.engine.id == window_id), None)

    # ─────────────────────────────────────────────────────────────────────────
    # Window Management
    # ─────────────────────────────────────────────────────────────────────────

    async def spawn_window(self, content: Widget | None = None, **props: Any) -> Window:
        """
        Creates a window around ``content`` and mounts it on the desktop.

        Without an explicit position the window is centered. Unless the caller
        passes its own ``close`` button callback, closing removes the window.
        Raises ``ValueError`` when another window on the desktop has the same id.
        """
        window: Window | None = None

        def _close() -> None:
            if window is not None:
                self._desktop.app.call_next(self.close_window, window)

        title_bar = props.pop("title_bar", None)
        if title_bar is not False:
            title_bar = dict(title_bar or {})
            buttons = title_bar.get("buttons")
            if buttons is not False:
                buttons = dict(buttons or {})
                buttons.setdefault("close", _close)
                title_bar["buttons"] = buttons

        if props.get("top") is None and props.get("left") is None:
            bounds = self._desktop.container_bounds()
            props["left"] = max(0, (bounds.width - (props.get("width") or 0)) // 2)
            props["top"] = max(0, (bounds.height - (props.get("height") or 0)) // 2)

        window_props = normalize_props(title_bar=title_bar, config=self._desktop.config, **props)
        if window_props.id in self.flags or self.get_window(window_props.id) is not None:
            raise ValueError(f"A window with id {window_props.id!r} is already on the desktop")

        flag = MinimizeFlag()
        window = Window(self._desktop, window_props, minimize=flag, content=content, config=self._desktop.config)
        await self._desktop.mount(window)
        self.flags[window_props.id] = flag
        self._spawn_order.append(window_props.id)
        self._post_windows_update()
        return window

    async def close_window(self, window_to_close: Window) -> None:
        """The authoritative method for closing a window safely."""
        if not window_to_close.parent:
            return

        window_id = window_to_close.engine.id
        log(f"Closing window {window_id}")
        await window_to_close.remove()
        self.flags.pop(window_id, None)
        if window_id in self._spawn_order:
            self._spawn_order.remove(window_id)

        remaining = [w for w in self.windows if w.engine.lifecycle is not LifecycleState.MINIMIZED]
        if remaining:
            max(remaining, key=lambda w: w.engine.stack_index).engine.click()
        self._post_windows_update()

    def set_minimized(self, window_id: str, minimized: bool) -> None:
        """Drives a window's minimize flag from outside the window."""
        flag = self.flags.get(window_id)
        if flag is None:
            log.warning(f"set_minimized: no window with id {window_id!r}")
            return
        flag.set_minimized(minimized)

    def focus_cycle(self, direction: int = 1) -> None:
        """Brings the next (or previous) window in spawn order to the front."""
        windows = [self.get_window(window_id) for window_id in self._spawn_order]
        windows = [w for w in windows if w is not None]
        if not windows:
            return
        active = self.active_window
        current_index = windows.index(active) if active in windows else -1
        next_index = (current_index + direction) % len(windows)
        windows[next_index].engine.click()

    def _post_windows_update(self) -> None:
        self._desktop.post_message(WindowsChanged([window_id for window_id in self._spawn_order]))
