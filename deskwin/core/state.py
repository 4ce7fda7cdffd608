"""
The minimize/maximize state machine.

A window is in exactly one of three lifecycle states. Minimized is driven by
a flag the window does not own (see ``deskwin.core.window.MinimizeControl``);
Maximized by the window's own maximize button. Entering either clears the
other's visual affordance. The render footprint for each state comes from
``derive_render`` so leaving a state can always restore the logical size.

Leaving Minimized returns the window to its configured home position, and
leaving Maximized to the container offset, never to wherever the window
was before.
"""
from __future__ import annotations

from enum import Enum

from deskwin.config import EngineConfig
from deskwin.core.geometry import ContainerBounds, Geometry, GeometryState, RenderGeometry
from deskwin.core.registry import OCCUPYING_ROLES, SiblingRegistry
from textual import log


class LifecycleState(Enum):
    NORMAL = "normal"
    MINIMIZED = "minimized"
    MAXIMIZED = "maximized"


# glyph names, resolved to characters by deskwin.display.glyphs
MINIMIZE_GLYPH = "minimize"
UNMINIMIZE_GLYPH = "unminimize"
MAXIMIZE_GLYPH = "maximize"
RESTORE_GLYPH = "restore"


def derive_render(
    state: LifecycleState,
    geometry: Geometry,
    bounds: ContainerBounds,
    minimized_size: RenderGeometry,
) -> RenderGeometry:
    """Returns the footprint a window paints with in the given lifecycle state."""
    if state is LifecycleState.MINIMIZED:
        return minimized_size
    if state is LifecycleState.MAXIMIZED:
        return RenderGeometry(bounds.height, bounds.width)
    return RenderGeometry(geometry.height, geometry.width)


def place_minimized(
    bounds: ContainerBounds,
    size: RenderGeometry,
    registry: SiblingRegistry,
    margin: int = 4,
    passes: int = 1,
    exclude: str | None = None,
) -> tuple[int, int]:
    """
    Picks the (top, left) corner for a minimized window: the bottom-right of
    the container, moved up past any window already occupying it. Each pass
    hit-tests the center of the candidate rectangle once.
    """
    top = bounds.height - size.height - margin
    left = bounds.width - size.width - margin

    for _ in range(passes):
        occupant = registry.hit_test(left + size.width / 2, top + size.height / 2, exclude=exclude)
        if occupant is None or occupant.role not in OCCUPYING_ROLES:
            break
        log(f"Minimized anchor ({top}, {left}) occupied by {occupant.window_id}, moving up")
        top -= occupant.height + margin

    return top, left


class WindowStateMachine:
    """
    Applies lifecycle transitions to a window's geometry: footprint, corner
    position, content visibility and title-bar glyphs. Bringing the window to
    front and animating are left to the owner.
    """

    def __init__(
        self,
        geometry: GeometryState,
        registry: SiblingRegistry,
        home: tuple[int, int],
        minimized_width: int,
        config: EngineConfig,
        window_id: str | None = None,
    ):
        self._geometry = geometry
        self._registry = registry
        self._home = home
        self._window_id = window_id
        self._minimized_size = RenderGeometry(config.minimized_height, minimized_width)
        self._config = config

        self.lifecycle = LifecycleState.NORMAL
        self.maximized = False
        self.content_visible = True
        self.minimize_icon = MINIMIZE_GLYPH
        self.maximize_icon = MAXIMIZE_GLYPH

    @property
    def minimized(self) -> bool:
        return self.lifecycle is LifecycleState.MINIMIZED

    def _apply_render(self, state: LifecycleState, bounds: ContainerBounds) -> None:
        render = derive_render(state, self._geometry.logical, bounds, self._minimized_size)
        self._geometry.apply_effective(render.height, render.width)
        self.lifecycle = state
        self.content_visible = state is not LifecycleState.MINIMIZED

    # ┌───────────────────────────────────────────────────────────────────────┐
    # │ Minimize                                                              │
    # └───────────────────────────────────────────────────────────────────────┘

    def enter_minimized(self) -> None:
        bounds = self._registry.container_bounds()
        self._apply_render(LifecycleState.MINIMIZED, bounds)
        top, left = place_minimized(
            bounds,
            self._minimized_size,
            self._registry,
            margin=self._config.edge_margin,
            passes=self._config.placement_passes,
            exclude=self._window_id,
        )
        self._geometry.move_to(top, left)
        self.minimize_icon = UNMINIMIZE_GLYPH
        self.maximized = False
        self.maximize_icon = MAXIMIZE_GLYPH

    def exit_minimized(self) -> None:
        self._apply_render(LifecycleState.NORMAL, self._registry.container_bounds())
        self._geometry.move_to(*self._home)
        self.minimize_icon = MINIMIZE_GLYPH
        self.maximized = False
        self.maximize_icon = MAXIMIZE_GLYPH

    def apply_minimized(self, minimized: bool) -> None:
        if minimized:
            self.enter_minimized()
        else:
            self.exit_minimized()

    # ┌───────────────────────────────────────────────────────────────────────┐
    # │ Maximize                                                              │
    # └───────────────────────────────────────────────────────────────────────┘

    def enter_maximized(self) -> None:
        bounds = self._registry.container_bounds()
        self._apply_render(LifecycleState.MAXIMIZED, bounds)
        self._geometry.move_to(bounds.offset_top, bounds.offset_left)
        self.maximized = True
        self.maximize_icon = RESTORE_GLYPH
        self.minimize_icon = MINIMIZE_GLYPH

    def exit_maximized(self) -> None:
        bounds = self._registry.container_bounds()
        self._apply_render(LifecycleState.NORMAL, bounds)
        self._geometry.move_to(bounds.offset_top, bounds.offset_left)
        self.maximized = False
        self.maximize_icon = MAXIMIZE_GLYPH
        self.minimize_icon = MINIMIZE_GLYPH

    def toggle_maximized(self) -> None:
        if self.maximized:
            self.exit_maximized()
        else:
            self.enter_maximized()
