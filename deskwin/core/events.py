from __future__ import annotations

from deskwin.core.state import LifecycleState
from textual import log
from textual.message import Message

# =============================================================================
# Custom Messages
# =============================================================================


class WindowFocused(Message):
    """Posted when a window was brought to the front."""
    def __init__(self, window_id: str, stack_index: int) -> None:
        self.window_id = window_id
        self.stack_index = stack_index
        super().__init__()


class WindowStateChanged(Message):
    """Posted when a window is minimized, maximized or restored."""
    def __init__(self, window_id: str, lifecycle: LifecycleState) -> None:
        log(f"Window {window_id} is now {lifecycle.value}.")
        self.window_id = window_id
        self.lifecycle = lifecycle
        super().__init__()


class WindowsChanged(Message):
    """Posted when the set of mounted windows changes."""
    def __init__(self, window_ids: list[str]) -> None:
        log(f"Mounted windows changed: {window_ids}.")
        self.window_ids = window_ids
        super().__init__()
