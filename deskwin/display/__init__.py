from deskwin.display.desktop import Desktop, WindowManager
from deskwin.display.window import PriorityButton, TitleBar, Window

__all__ = ["Desktop", "PriorityButton", "TitleBar", "Window", "WindowManager"]
