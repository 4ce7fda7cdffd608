"""Window state & interaction engine for desktop-like multi-window surfaces."""

__version__ = "0.1.0"
