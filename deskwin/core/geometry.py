from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Geometry:
    """Logical, user-intended position and size of a window."""
    top: int = 0
    left: int = 0
    width: int = 0
    height: int = 0

    def replace(self, **changes) -> Geometry:
        return replace(self, **changes)


@dataclass(frozen=True)
class RenderGeometry:
    """The footprint actually painted, which diverges from the logical size
    while a window is minimized or maximized."""
    height: int
    width: int


@dataclass(frozen=True)
class ContainerBounds:
    """Client size and offset of the container hosting the windows."""
    height: int
    width: int
    offset_top: int = 0
    offset_left: int = 0


class GeometryState:
    """
    Holds the authoritative logical geometry and the separately tracked
    render geometry. Values are never validated or clamped here.
    """

    def __init__(self, geometry: Geometry):
        self.logical = geometry
        self.effective = RenderGeometry(geometry.height, geometry.width)

    @property
    def top(self) -> int:
        return self.logical.top

    @property
    def left(self) -> int:
        return self.logical.left

    def set_geometry(self, **partial: int) -> None:
        """Updates any of top/left/width/height on the logical geometry."""
        self.logical = self.logical.replace(**partial)

    def move_to(self, top: int, left: int) -> None:
        self.set_geometry(top=top, left=left)

    def apply_effective(self, height: int, width: int) -> None:
        """Updates only the render footprint, leaving the logical size intact."""
        self.effective = RenderGeometry(height, width)
