"""
The sibling registry: what a window can learn about the other windows
mounted in the same container.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Protocol, Sequence

from deskwin.core.geometry import ContainerBounds
from textual import log

if TYPE_CHECKING:
    from deskwin.core.window import WindowEngine

# hit target roles
WINDOW_CONTAINER = "window-container"
WINDOW_TITLE = "window-title"
CONTENT = "content"
BUTTON = "button"
OTHER = "other"

# a hit on one of these means a window already sits there
OCCUPYING_ROLES = frozenset({WINDOW_CONTAINER, WINDOW_TITLE})

DEFAULT_VIEWPORT = ContainerBounds(height=768, width=1024)


@dataclass(frozen=True)
class HitTarget:
    window_id: str | None
    role: str
    height: int


class SiblingRegistry(Protocol):
    def register(self, window: WindowEngine) -> None:
        ...

    def unregister(self, window: WindowEngine) -> None:
        ...

    def query_all_window_stack_indices(self) -> Sequence[int]:
        ...

    def hit_test(self, x: float, y: float, exclude: str | None = None) -> HitTarget | None:
        ...

    def container_bounds(self) -> ContainerBounds:
        ...


def hit_test_windows(
    windows: Iterable[WindowEngine],
    x: float,
    y: float,
    title_height: int,
    exclude: str | None = None,
) -> HitTarget | None:
    """
    Finds the topmost window painted at (x, y), in container coordinates,
    and reports which part of it was hit: the first ``title_height`` rows are
    the title bar, the rest is content while shown and bare container otherwise.
    """
    hit: WindowEngine | None = None
    for window in windows:
        if window.id == exclude:
            continue
        top, left = window.geometry.top, window.geometry.left
        height, width = window.effective.height, window.effective.width
        if not (left <= x < left + width and top <= y < top + height):
            continue
        if hit is None or window.stack_index > hit.stack_index:
            hit = window

    if hit is None:
        return None

    if y < hit.geometry.top + title_height:
        role = WINDOW_TITLE
    elif hit.content_visible:
        role = CONTENT
    else:
        role = WINDOW_CONTAINER
    return HitTarget(hit.id, role, hit.effective.height)


class WindowRegistry:
    """
    An in-memory registry for windows living in one container. With no
    container bounds it answers with the viewport instead.
    """

    def __init__(
        self,
        container: ContainerBounds | None = None,
        viewport: ContainerBounds = DEFAULT_VIEWPORT,
        title_height: int = 32,
    ):
        self.container = container
        self.viewport = viewport
        self.title_height = title_height
        self._windows: dict[str, WindowEngine] = {}

    @property
    def windows(self) -> list[WindowEngine]:
        return list(self._windows.values())

    def get(self, window_id: str) -> WindowEngine | None:
        return self._windows.get(window_id)

    def register(self, window: WindowEngine) -> None:
        if window.id in self._windows and self._windows[window.id] is not window:
            log.warning(f"Window id {window.id!r} registered twice, replacing the older window")
        self._windows[window.id] = window

    def unregister(self, window: WindowEngine) -> None:
        if self._windows.get(window.id) is window:
            del self._windows[window.id]

    def query_all_window_stack_indices(self) -> list[int]:
        return [window.stack_index for window in self._windows.values()]

    def hit_test(self, x: float, y: float, exclude: str | None = None) -> HitTarget | None:
        return hit_test_windows(self._windows.values(), x, y, self.title_height, exclude)

    def container_bounds(self) -> ContainerBounds:
        return self.container if self.container is not None else self.viewport
