from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

import deskwin.display.glyphs as glyphs
from deskwin.config import EngineConfig
from deskwin.core.drag import PointerSample
from deskwin.core.events import WindowFocused, WindowStateChanged
from deskwin.core.props import WindowProps
from deskwin.core.registry import SiblingRegistry
from deskwin.core.state import LifecycleState
from deskwin.core.window import MinimizeControl, WindowEngine
from textual import log, on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.css.errors import StyleValueError
from textual.css.scalar import ScalarOffset
from textual.css.styles import RULE_NAMES
from textual.events import MouseDown, MouseMove, MouseUp
from textual.widget import Widget
from textual.widgets import Button, Static

if TYPE_CHECKING:
    from textual.timer import Timer

# shorthand properties are settable on styles without being rules of their own
STYLE_RULES = frozenset(RULE_NAMES) | {"border", "outline", "overflow", "align", "content_align", "scrollbar_size"}


class PriorityButton(Button):
    """A button that stops MouseDown events from bubbling to its parent."""
    ALLOW_MAXIMIZE = False

    def on_mouse_down(self, event: MouseDown) -> None:
        event.stop()


class TitleBar(Horizontal):
    """The title bar for a Window, handles drag initiation and window controls."""
    DEFAULT_CSS = """
    TitleBar {
        height: 1;
        width: 1fr;
        background: $panel;
    }
    TitleBar > .icon {
        width: auto;
    }
    TitleBar > .window-title {
        width: 1fr;
        text-style: bold;
        padding: 0 1;
    }
    TitleBar > PriorityButton {
        min-width: 3;
        width: 3;
    }
    """

    def __init__(self, window: Window):
        self._window = window
        super().__init__(classes="title-bar")

    def compose(self) -> ComposeResult:
        """Composes the icon, title and whichever window buttons are enabled."""
        title_bar = self._window.props.title_bar
        engine = self._window.engine
        if title_bar.icon:
            yield Static(title_bar.icon, classes="icon")
        yield Static(title_bar.title, id="window-title", classes="window-title")
        buttons = title_bar.buttons
        if not buttons:
            return
        if buttons.minimize:
            yield PriorityButton(glyphs.get(engine.minimize_icon), id="minimize-btn", compact=True)
        if buttons.maximize:
            yield PriorityButton(glyphs.get(engine.maximize_icon), id="maximize-btn", compact=True)
        if buttons.close:
            yield PriorityButton(glyphs.get("exit"), id="exit-btn", compact=True)

    def refresh_glyphs(self) -> None:
        engine = self._window.engine
        for button_id, glyph in (("#minimize-btn", engine.minimize_icon), ("#maximize-btn", engine.maximize_icon)):
            for button in self.query(button_id).results(Button):
                button.label = glyphs.get(glyph)

    def on_mouse_down(self, event: MouseDown) -> None:
        """Initiates a window drag operation when the title bar is pressed."""
        self._window.start_drag(event)


class Window(Container):
    """
    A movable, minimizable, maximizable window painted from a WindowEngine.

    The window reacts to a minimize flag owned by its parent; clicking the
    minimize button only asks the parent to flip it.
    """
    DEFAULT_CSS = """
    Window {
        position: absolute;
        border: round $primary;
        background: $surface;
        overflow: hidden;
    }
    Window.-active {
        border: round $accent;
    }
    Window.resizable {
        border-bottom: heavy $primary;
    }
    Window > .content {
        height: 1fr;
        width: 1fr;
    }
    """

    def __init__(
        self,
        registry: SiblingRegistry,
        props: WindowProps,
        minimize: MinimizeControl | None = None,
        content: Widget | None = None,
        config: EngineConfig | None = None,
        **kwargs,
    ):
        super().__init__(classes="window-container", **kwargs)
        self.props = props
        self.engine = WindowEngine(
            props,
            registry,
            minimize=minimize,
            config=config,
            scheduler=self._schedule,
        )
        self.body = Container(*([content] if content is not None else []), classes="content")
        self._apply_style(props.style)

        self._last_stack_index: int | None = None
        self._last_lifecycle: LifecycleState | None = None
        self._offset_target: tuple[int, int] | None = None
        self._paint()

    # ┌───────────────────────────────────────────────────────────────────────┐
    # │ Lifecycle & Compose Methods                                           │
    # └───────────────────────────────────────────────────────────────────────┘

    def compose(self) -> ComposeResult:
        """Composes the window with a TitleBar and the body container."""
        if self.props.title_bar:
            yield TitleBar(self)
        yield self.body

    def on_mount(self) -> None:
        self.engine.subscribe(self._on_engine_changed)
        self.engine.mount()

    def on_unmount(self) -> None:
        self.engine.unmount()

    def _schedule(self, delay_ms: float, callback) -> Timer:
        return self.set_timer(delay_ms / 1000, callback)

    def _apply_style(self, style: Mapping[str, Any]) -> None:
        """Copies caller style rules onto the body, skipping anything Textual does not know."""
        for name, value in style.items():
            rule = name.replace("-", "_")
            if rule not in STYLE_RULES:
                log.warning(f"Window {self.props.id}: ignoring unknown style {name!r}")
                continue
            try:
                setattr(self.body.styles, rule, value)
            except (StyleValueError, ValueError, TypeError) as error:
                log.warning(f"Window {self.props.id}: ignoring style {name}={value!r}: {error}")

    # ┌───────────────────────────────────────────────────────────────────────┐
    # │ Painting                                                              │
    # └───────────────────────────────────────────────────────────────────────┘

    def _on_engine_changed(self, engine: WindowEngine) -> None:
        self._paint()
        self._announce()

    def _paint(self) -> None:
        """Copies the engine state onto the widget styles."""
        engine = self.engine
        self._paint_offset(engine.left, engine.top)
        self.styles.width = engine.effective.width
        self.styles.height = engine.effective.height
        self.styles.opacity = engine.visibility_level
        self.body.display = engine.content_visible

        self.set_class(engine.transition is not None, "-animated")
        self.set_class(engine.lifecycle is LifecycleState.MINIMIZED, "minimized")
        self.set_class(engine.lifecycle is LifecycleState.MAXIMIZED, "maximized")
        self.set_class(engine.resizable, "resizable")

        if self.is_mounted:
            for title_bar in self.query(TitleBar).results():
                title_bar.refresh_glyphs()

    def _paint_offset(self, left: int, top: int) -> None:
        """Slides to a new position while a transition runs, jumps otherwise."""
        if (left, top) == self._offset_target:
            return
        self._offset_target = (left, top)
        transition = self.engine.transition
        if transition is not None and self.is_mounted:
            self.styles.animate(
                "offset",
                ScalarOffset.from_offset((left, top)),
                duration=transition / 1000,
                easing="in_out_cubic",
            )
        else:
            self.styles.offset = (left, top)

    def _announce(self) -> None:
        engine = self.engine
        if engine.stack_index != self._last_stack_index:
            self._last_stack_index = engine.stack_index
            self.post_message(WindowFocused(engine.id, engine.stack_index))
        if engine.lifecycle is not self._last_lifecycle:
            first = self._last_lifecycle is None
            self._last_lifecycle = engine.lifecycle
            if not first:
                self.post_message(WindowStateChanged(engine.id, engine.lifecycle))

    # ┌───────────────────────────────────────────────────────────────────────┐
    # │ Event Handlers                                                        │
    # └───────────────────────────────────────────────────────────────────────┘

    def start_drag(self, event: MouseDown) -> None:
        """Initiates a drag operation for the window."""
        self.engine.drag_start(PointerSample(event.screen_x, event.screen_y))
        self.capture_mouse()

    def on_mouse_move(self, event: MouseMove) -> None:
        """Moves the window along with the pointer while dragging."""
        if self.engine.is_dragging:
            self.engine.drag_move(PointerSample(event.screen_x, event.screen_y))
            event.stop()

    def on_mouse_up(self, event: MouseUp) -> None:
        """Drops the window when the mouse button is released."""
        if self.engine.is_dragging:
            self.engine.drag_end(PointerSample(event.screen_x, event.screen_y))
            self.release_mouse()
            event.stop()

    def on_mouse_down(self, event: MouseDown) -> None:
        """Any press on the window brings it to the front."""
        self.engine.click()

    # ┌───────────────────────────────────────────────────────────────────────┐
    # │ Window Controls                                                       │
    # └───────────────────────────────────────────────────────────────────────┘

    @on(Button.Pressed, "#exit-btn")
    def close_window(self, event: Button.Pressed) -> None:
        log(f"Closing window {self.engine.id}")
        self.engine.press_close()
        event.stop()

    @on(Button.Pressed, "#minimize-btn")
    def minimize_window(self, event: Button.Pressed) -> None:
        log(f"Minimize pressed on window {self.engine.id}")
        self.engine.press_minimize()
        event.stop()

    @on(Button.Pressed, "#maximize-btn")
    def toggle_maximize_window(self, event: Button.Pressed) -> None:
        self.engine.press_maximize()
        event.stop()
