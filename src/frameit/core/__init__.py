"""Core business logic modules for FrameIt."""

from .models import CompletionData, DirectoryEntry, EntryKind, Rectangle, RectKind
from .config import AppConfig, ConfigManager
from .geometry import ScaleState, compute_scale_state, to_image_space, to_view_space
from .session import AnnotationSession, DrawGesture
from .save_format import SaveFileStore, save_path_for
from .completion import CompletionAggregator, aggregate_completion
from .listing import DirectoryLister, Listing
from .list_window import ListWindow

__all__ = [
    "CompletionData",
    "DirectoryEntry",
    "EntryKind",
    "Rectangle",
    "RectKind",
    "AppConfig",
    "ConfigManager",
    "ScaleState",
    "compute_scale_state",
    "to_image_space",
    "to_view_space",
    "AnnotationSession",
    "DrawGesture",
    "SaveFileStore",
    "save_path_for",
    "CompletionAggregator",
    "aggregate_completion",
    "DirectoryLister",
    "Listing",
    "ListWindow",
]
