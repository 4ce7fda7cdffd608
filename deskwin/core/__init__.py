from deskwin.core.drag import DragController, DragOffset, DragPhase, PointerSample
from deskwin.core.geometry import ContainerBounds, Geometry, GeometryState, RenderGeometry
from deskwin.core.props import ButtonsProps, TitleBarProps, WindowProps, normalize_props
from deskwin.core.registry import HitTarget, SiblingRegistry, WindowRegistry
from deskwin.core.state import LifecycleState, WindowStateMachine, derive_render, place_minimized
from deskwin.core.window import MinimizeControl, MinimizeFlag, WindowEngine
from deskwin.core.zorder import next_index

__all__ = [
    "ButtonsProps", "ContainerBounds", "DragController", "DragOffset", "DragPhase",
    "Geometry", "GeometryState", "HitTarget", "LifecycleState", "MinimizeControl",
    "MinimizeFlag", "PointerSample", "RenderGeometry", "SiblingRegistry",
    "TitleBarProps", "WindowEngine", "WindowProps", "WindowRegistry",
    "WindowStateMachine", "derive_render", "next_index", "normalize_props",
    "place_minimized",
]
