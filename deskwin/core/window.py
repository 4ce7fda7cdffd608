from __future__ import annotations

from typing import Any, Callable, Protocol

import rich.repr
from deskwin.config import EngineConfig
from deskwin.core.drag import DragController, DragOffset, PointerSample
from deskwin.core.geometry import Geometry, GeometryState, RenderGeometry
from deskwin.core.props import WindowProps
from deskwin.core.registry import SiblingRegistry
from deskwin.core.state import LifecycleState, WindowStateMachine
from deskwin.core.zorder import next_index
from textual import log

# (delay in milliseconds, callback)
Scheduler = Callable[[float, Callable[[], None]], Any]

DRAG_VISIBILITY = 0.5
FULL_VISIBILITY = 1.0


class MinimizeControl(Protocol):
    """The minimize flag a window reacts to but does not own."""

    def is_minimized(self) -> bool:
        ...

    def set_minimized(self, value: bool) -> None:
        ...


class MinimizeFlag:
    """A caller-owned minimize flag that notifies its watchers when it flips."""

    def __init__(self, value: bool = False):
        self._value = bool(value)
        self._watchers: list[Callable[[bool], None]] = []

    def is_minimized(self) -> bool:
        return self._value

    def set_minimized(self, value: bool) -> None:
        value = bool(value)
        if value == self._value:
            return
        self._value = value
        for watcher in list(self._watchers):
            watcher(value)

    def watch(self, callback: Callable[[bool], None]) -> None:
        self._watchers.append(callback)

    def unwatch(self, callback: Callable[[bool], None]) -> None:
        if callback in self._watchers:
            self._watchers.remove(callback)


@rich.repr.auto
class WindowEngine:
    """
    The interaction engine behind one window: geometry, drag, stacking and
    the minimize/maximize state machine. A presentation surface forwards its
    pointer and click events here and repaints from the resulting state,
    subscribing through ``subscribe`` to hear about every change.
    """

    def __init__(
        self,
        props: WindowProps,
        registry: SiblingRegistry,
        minimize: MinimizeControl | None = None,
        config: EngineConfig | None = None,
        scheduler: Scheduler | None = None,
    ):
        self.props = props
        self.id = props.id
        self.config = config or EngineConfig()
        self.registry = registry
        self.minimize_control: MinimizeControl = minimize if minimize is not None else MinimizeFlag()
        self._scheduler = scheduler

        self._geometry = GeometryState(Geometry(props.top, props.left, props.width, props.height))
        self.drag = DragController(self._geometry)
        self.state = WindowStateMachine(
            self._geometry,
            registry,
            home=(props.top, props.left),
            minimized_width=props.minimized_width,
            config=self.config,
            window_id=props.id,
        )

        self.stack_index = next_index(registry.query_all_window_stack_indices())
        self.visibility_level = FULL_VISIBILITY
        self.transition: int | None = None
        self.mounted = False

        self._applied_minimized: bool | None = None
        self._transition_count = 0
        self._subscribers: list[Callable[[WindowEngine], None]] = []

    def __rich_repr__(self) -> rich.repr.Result:
        yield self.id
        yield "lifecycle", self.lifecycle.value
        yield "geometry", self.geometry
        yield "effective", self.effective
        yield "stack_index", self.stack_index
        yield "dragging", self.is_dragging, False

    # ┌───────────────────────────────────────────────────────────────────────┐
    # │ State                                                                 │
    # └───────────────────────────────────────────────────────────────────────┘

    @property
    def geometry(self) -> Geometry:
        return self._geometry.logical

    @property
    def effective(self) -> RenderGeometry:
        return self._geometry.effective

    @property
    def top(self) -> int:
        return self._geometry.top

    @property
    def left(self) -> int:
        return self._geometry.left

    @property
    def lifecycle(self) -> LifecycleState:
        return self.state.lifecycle

    @property
    def content_visible(self) -> bool:
        return self.state.content_visible

    @property
    def minimize_icon(self) -> str:
        return self.state.minimize_icon

    @property
    def maximize_icon(self) -> str:
        return self.state.maximize_icon

    @property
    def is_dragging(self) -> bool:
        return self.drag.dragging

    @property
    def drag_offset(self) -> DragOffset | None:
        return self.drag.offset

    @property
    def resizable(self) -> bool:
        return self.props.resizable

    @property
    def closable(self) -> bool:
        buttons = self.props.title_bar.buttons if self.props.title_bar else None
        return bool(buttons and buttons.close)

    def set_geometry(self, **partial: int) -> None:
        """Updates the logical geometry directly, e.g. from a caller relayout."""
        self._geometry.set_geometry(**partial)
        self._changed()

    def subscribe(self, callback: Callable[[WindowEngine], None]) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[WindowEngine], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _changed(self) -> None:
        for callback in list(self._subscribers):
            callback(self)

    # ┌───────────────────────────────────────────────────────────────────────┐
    # │ Lifecycle                                                             │
    # └───────────────────────────────────────────────────────────────────────┘

    def mount(self) -> None:
        """Registers with the siblings and applies the initial minimize state without animating."""
        if self.mounted:
            return
        self.mounted = True
        self.registry.register(self)
        if isinstance(self.minimize_control, MinimizeFlag):
            self.minimize_control.watch(self._on_minimize_flag)
        self.sync_minimized()

    def unmount(self) -> None:
        if not self.mounted:
            return
        self.mounted = False
        if isinstance(self.minimize_control, MinimizeFlag):
            self.minimize_control.unwatch(self._on_minimize_flag)
        self.registry.unregister(self)
        self._subscribers.clear()

    def bring_to_front(self) -> None:
        self.stack_index = next_index(self.registry.query_all_window_stack_indices())

    def click(self) -> None:
        """A click anywhere on the window focuses it."""
        self.bring_to_front()
        self._changed()

    # ┌───────────────────────────────────────────────────────────────────────┐
    # │ Drag                                                                  │
    # └───────────────────────────────────────────────────────────────────────┘

    def drag_start(self, pointer: PointerSample) -> None:
        self.drag.start(pointer)
        self.bring_to_front()
        self.visibility_level = DRAG_VISIBILITY
        self._changed()

    def drag_move(self, pointer: PointerSample) -> None:
        self.drag.move(pointer)
        self._changed()

    def drag_end(self, pointer: PointerSample) -> None:
        self.drag.end(pointer)
        self.visibility_level = FULL_VISIBILITY
        self._changed()

    # ┌───────────────────────────────────────────────────────────────────────┐
    # │ Minimize / Maximize                                                   │
    # └───────────────────────────────────────────────────────────────────────┘

    def _on_minimize_flag(self, value: bool) -> None:
        self.sync_minimized()

    def sync_minimized(self) -> None:
        """Reacts to the minimize flag if it changed since it was last applied."""
        minimized = bool(self.minimize_control.is_minimized())
        if minimized == self._applied_minimized:
            return
        self._applied_minimized = minimized
        # the first application after mount lays the window out without animating
        animate = self._transition_count > 0
        self._transition_count += 1

        if animate:
            self._start_transition()
        self.state.apply_minimized(minimized)
        self.bring_to_front()
        log(f"Window {self.id} {'minimized' if minimized else 'restored'} at ({self.top}, {self.left})")
        self._changed()

    def toggle_maximized(self) -> None:
        self.state.toggle_maximized()
        self.bring_to_front()
        log(f"Window {self.id} {'maximized' if self.state.maximized else 'restored'}")
        self._changed()

    def _start_transition(self) -> None:
        duration = self.config.animation_duration_ms
        self.transition = duration
        if self._scheduler is not None:
            self._scheduler(duration + 1, self.clear_transition)

    def clear_transition(self) -> None:
        if self.transition is None:
            return
        self.transition = None
        self._changed()

    # ┌───────────────────────────────────────────────────────────────────────┐
    # │ Title bar buttons                                                     │
    # └───────────────────────────────────────────────────────────────────────┘

    def press_minimize(self) -> None:
        """Asks the flag's owner to flip it, then follows whatever it now says."""
        self.minimize_control.set_minimized(not self.minimize_control.is_minimized())
        self.sync_minimized()

    def press_maximize(self) -> None:
        self.toggle_maximized()

    def press_close(self) -> None:
        if self.closable:
            self.props.title_bar.buttons.close()
