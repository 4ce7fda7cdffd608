from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from deskwin.core.geometry import GeometryState
from textual import log


class DragPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class PointerSample:
    """
    A pointer position reported during a drag gesture. A coordinate of 0
    means the surface could not report it; ``screen_x``/``screen_y`` are the
    second-chance values tried before giving up on that axis.
    """
    x: int
    y: int
    screen_x: int = 0
    screen_y: int = 0


@dataclass(frozen=True)
class DragOffset:
    """Pointer-to-window-corner distance captured at gesture start."""
    x: int
    y: int


def _axis(primary: int, secondary: int, fallback: int) -> int:
    return primary or secondary or fallback


class DragController:
    """
    Converts a title-bar drag gesture into position updates. The offset
    captured on start keeps the window from jumping to the pointer.
    """

    def __init__(self, geometry: GeometryState):
        self._geometry = geometry
        self.phase = DragPhase.IDLE
        self.offset: DragOffset | None = None

    @property
    def dragging(self) -> bool:
        return self.phase is DragPhase.DRAGGING

    def start(self, pointer: PointerSample) -> None:
        """Idle -> Dragging: remembers where on the window the pointer grabbed it."""
        self.offset = DragOffset(
            pointer.x - self._geometry.left,
            pointer.y - self._geometry.top,
        )
        self.phase = DragPhase.DRAGGING

    def move(self, pointer: PointerSample) -> None:
        """Follows the pointer, keeping the previous position on unknown axes."""
        if self.offset is None:
            log(f"Ignoring drag sample {pointer} outside of a drag gesture")
            return
        self._follow(pointer)

    def end(self, pointer: PointerSample) -> None:
        """Dragging -> Idle, applying the final sample."""
        if self.offset is None:
            return
        self._follow(pointer)
        self.offset = None
        self.phase = DragPhase.IDLE

    def _follow(self, pointer: PointerSample) -> None:
        offset = self.offset
        left = _axis(pointer.x, pointer.screen_x, self._geometry.left + offset.x) - offset.x
        top = _axis(pointer.y, pointer.screen_y, self._geometry.top + offset.y) - offset.y
        self._geometry.move_to(top, left)
