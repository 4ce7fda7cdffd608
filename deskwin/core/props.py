"""Merges caller-supplied window configuration with defaults."""
from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping

from deskwin.config import EngineConfig

CloseCallback = Callable[[], Any]

DEFAULT_TITLE = "Untitled window"
DEFAULT_ICON = " "

_id_counter = itertools.count(1)


@dataclass(frozen=True)
class ButtonsProps:
    minimize: bool = True
    maximize: bool = True
    close: CloseCallback | None = None


@dataclass(frozen=True)
class TitleBarProps:
    icon: str = DEFAULT_ICON
    title: str = DEFAULT_TITLE
    buttons: ButtonsProps | None = field(default_factory=ButtonsProps)


@dataclass(frozen=True)
class WindowProps:
    """The immutable configuration a window is created with."""
    id: str
    height: int = 0
    width: int = 0
    top: int = 0
    left: int = 0
    resizable: bool = False
    minimized_width: int = 280
    title_bar: TitleBarProps | None = field(default_factory=TitleBarProps)
    style: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


def generate_id() -> str:
    """A timestamp-derived identity for windows created without one."""
    # the counter keeps ids unique when the clock does not advance between calls
    return f"{time.time_ns()}-{next(_id_counter)}"


def _normalize_buttons(buttons: ButtonsProps | Mapping[str, Any] | bool | None) -> ButtonsProps | None:
    if isinstance(buttons, ButtonsProps):
        return buttons
    if buttons is False:
        return None
    merged = dict(buttons or {})
    close = merged.get("close")
    return ButtonsProps(
        minimize=bool(merged.get("minimize", True)),
        maximize=bool(merged.get("maximize", True)),
        # anything but a callable disables the close button
        close=close if callable(close) else None,
    )


def _normalize_title_bar(title_bar: TitleBarProps | Mapping[str, Any] | bool | None) -> TitleBarProps | None:
    if isinstance(title_bar, TitleBarProps):
        return title_bar
    if title_bar is False:
        return None
    merged = dict(title_bar or {})
    return TitleBarProps(
        icon=merged.get("icon", DEFAULT_ICON),
        title=merged.get("title") or DEFAULT_TITLE,
        buttons=_normalize_buttons(merged.get("buttons")),
    )


def normalize_props(
    id: str | None = None,
    height: int = 0,
    width: int = 0,
    top: int | None = None,
    left: int | None = None,
    resizable: bool = False,
    minimized_width: int | None = None,
    title_bar: TitleBarProps | Mapping[str, Any] | bool | None = None,
    style: Mapping[str, Any] | None = None,
    config: EngineConfig | None = None,
) -> WindowProps:
    """
    Fills in defaults for everything the caller left out. Identity is
    generated once here and never again. ``title_bar`` and its ``buttons``
    may be given as mappings, which are merged over the defaults, or as
    ``False`` to leave them out entirely.
    """
    config = config or EngineConfig()
    return WindowProps(
        id=id or generate_id(),
        height=height or 0,
        width=width or 0,
        top=top or 0,
        left=left or 0,
        resizable=bool(resizable),
        minimized_width=minimized_width or config.minimized_width,
        title_bar=_normalize_title_bar(title_bar),
        style=MappingProxyType(dict(style or {})),
    )
