"""Engine configuration, with overrides read from ``DESKWIN_*`` environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping

ENV_PREFIX = "DESKWIN_"


@dataclass(frozen=True)
class EngineConfig:
    """Tunables shared by every window engine on a surface."""

    animation_duration_ms: int = 500
    minimized_height: int = 32
    minimized_width: int = 280
    edge_margin: int = 4
    placement_passes: int = 1
    glyph_style: str = "standard"

    def __post_init__(self) -> None:
        if self.placement_passes < 1:
            raise ValueError(f"placement_passes must be at least 1, got {self.placement_passes}")
        if self.animation_duration_ms < 0:
            raise ValueError(f"animation_duration_ms cannot be negative, got {self.animation_duration_ms}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, base: EngineConfig | None = None) -> EngineConfig:
        """Build a config from the environment, falling back to ``base`` (or the defaults) for missing keys."""
        environ = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for field in fields(cls):
            key = f"{ENV_PREFIX}{field.name.upper()}"
            raw = environ.get(key)
            if raw is None:
                continue
            if field.type == "int":
                try:
                    values[field.name] = int(raw)
                except ValueError:
                    raise ValueError(f"{key} must be an integer, got {raw!r}") from None
            else:
                values[field.name] = raw
        if base is not None:
            return replace(base, **values)
        return cls(**values)


# Cell-sized footprint for terminal surfaces: a minimized window is its
# bordered title bar, three rows tall.
TERMINAL = EngineConfig(minimized_height=3, minimized_width=28, edge_margin=1)
