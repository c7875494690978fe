"""UI components for FrameIt."""

from .control_panel import ControlPanel, EditMode
from .file_browser import FileBrowser, FileList, ScrollIndicatorBar
from .image_canvas import ImageCanvas
from .main_window import MainWindow

__all__ = [
    "ControlPanel",
    "EditMode",
    "FileBrowser",
    "FileList",
    "ScrollIndicatorBar",
    "ImageCanvas",
    "MainWindow",
]
