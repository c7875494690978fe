"""Main application window for FrameIt."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from PyQt6.QtGui import QAction, QImageReader, QPixmap
from PyQt6.QtWidgets import QHBoxLayout, QMainWindow, QMessageBox, QWidget

from ..core.completion import CompletionAggregator
from ..core.config import AppConfig, ConfigManager
from ..core.exceptions import FrameItError
from ..core.list_window import ListWindow
from ..core.listing import DirectoryLister, Listing
from ..core.models import DirectoryEntry, EntryKind
from ..core.save_format import SaveFileStore
from ..core.session import AnnotationSession
from .control_panel import ControlPanel, EditMode
from .file_browser import FileBrowser
from .image_canvas import ImageCanvas

logger = logging.getLogger(__name__)


def increase_image_allocation_limit() -> None:
    """Remove image allocation limit for large images."""
    QImageReader.setAllocationLimit(0)


class MainWindow(QMainWindow):
    """
    Main application window for FrameIt.

    Lays out the file browser, the image canvas and the control panel
    side by side and wires them to the annotation session and save store.
    """

    def __init__(
        self,
        image_root: Path,
        save_root: Path,
        config_manager: Optional[ConfigManager] = None
    ) -> None:
        """
        Initialize the main window.

        Args:
            image_root: Top of the browsable image tree
            save_root: Directory mirroring the image tree with save files
            config_manager: Configuration source, defaults to config.yaml
        """
        super().__init__()
        increase_image_allocation_limit()

        self.config_manager = config_manager or ConfigManager()
        config = self.config

        self.store = SaveFileStore(image_root, save_root, with_kind=config.persist_rect_kind)
        self.aggregator = CompletionAggregator(self.store)
        self.lister = DirectoryLister(self.aggregator)
        self.session = AnnotationSession(min_area=config.min_rect_area)
        self.list_window = ListWindow(item_height=config.item_height)

        # State
        self.listing: Optional[Listing] = None
        self.current_image: Optional[Path] = None
        self.image_size: Optional[Tuple[int, int]] = None

        self._init_ui()
        self._setup_connections()
        self._load_directory(self.store.image_root)

        logger.info("MainWindow initialization complete")

    @property
    def config(self) -> AppConfig:
        """Get the current configuration."""
        return self.config_manager.config

    def _init_ui(self) -> None:
        """Initialize the user interface."""
        self.setWindowTitle("FrameIt")

        central = QWidget()
        layout = QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.file_browser = FileBrowser(self.list_window, self.config.scroll_step)
        self.canvas = ImageCanvas(self.session)
        self.control_panel = ControlPanel()

        layout.addWidget(self.file_browser)
        layout.addWidget(self.canvas, 1)
        layout.addWidget(self.control_panel)
        self.setCentralWidget(central)

        self._create_actions()
        self._apply_window_geometry()

    def _create_actions(self) -> None:
        """Create keyboard shortcuts."""
        self.undo_action = QAction("Undo", self)
        self.undo_action.setShortcut("Ctrl+Z")
        self.undo_action.triggered.connect(self.undo)
        self.addAction(self.undo_action)

        self.redo_action = QAction("Redo", self)
        self.redo_action.setShortcut("Ctrl+Shift+Z")
        self.redo_action.triggered.connect(self.redo)
        self.addAction(self.redo_action)

        self.save_action = QAction("Save", self)
        self.save_action.setShortcut("Ctrl+S")
        self.save_action.triggered.connect(self.save)
        self.addAction(self.save_action)

    def _apply_window_geometry(self) -> None:
        """Size the window and its side panels from the screen size."""
        screen = self.screen()
        if screen is None:
            return

        available = screen.availableGeometry()
        width = int(available.width() * self.config.window_fraction)
        height = int(available.height() * self.config.window_fraction)
        self.resize(width, height)

        side_width = int(width * self.config.side_panel_fraction)
        self.file_browser.setFixedWidth(side_width)
        self.control_panel.setFixedWidth(side_width)

    def _setup_connections(self) -> None:
        """Connect signals between widgets and the session."""
        self.file_browser.entry_activated.connect(self._on_entry_activated)

        self.control_panel.mode_changed.connect(self.canvas.set_mode)
        self.control_panel.undo_requested.connect(self.undo)
        self.control_panel.redo_requested.connect(self.redo)
        self.control_panel.clear_requested.connect(self.session.clear)
        self.control_panel.save_requested.connect(self.save)
        self.control_panel.save_and_proceed_requested.connect(self.save_and_proceed)

        self.session.changed.connect(self._update_history_state)

    def _update_history_state(self) -> None:
        """Enable undo and redo controls to match the session."""
        can_undo = self.session.can_undo()
        can_redo = self.session.can_redo()
        self.control_panel.set_history_state(can_undo, can_redo)
        self.undo_action.setEnabled(can_undo)
        self.redo_action.setEnabled(can_redo)

    # === Navigation ===

    def _load_directory(self, directory: Path) -> None:
        """List a directory in the file browser."""
        if not self.lister.can_enter(directory):
            logger.warning(f"Refusing to leave the image root: {directory}")
            return

        listing = self.lister.build(directory)
        self._report_errors(listing)
        self.listing = listing
        self.list_window.rebuild(listing.entries)
        self.setWindowTitle(f"FrameIt - {directory}")

    def _report_errors(self, listing: Listing) -> None:
        """Show filesystem errors met while listing."""
        if not listing.errors:
            return
        details = "\n".join(error.message for error in listing.errors)
        QMessageBox.warning(self, "Filesystem Error", details)

    def _on_entry_activated(self, entry: DirectoryEntry) -> None:
        """Enter a directory or open an image."""
        if entry.is_directory:
            self._load_directory(entry.path)
        else:
            self._open_image(entry)

    def _open_image(self, entry: DirectoryEntry) -> None:
        """
        Show an image and load its saved rectangles.

        Unsaved rectangles of the previously open image are discarded.
        """
        if entry.path == self.current_image:
            return

        reader = QImageReader(str(entry.path))
        image = reader.read()
        if image.isNull():
            logger.error(f"Failed to load image {entry.path}: {reader.errorString()}")
            QMessageBox.warning(self, "Error", f"Failed to load image: {entry.path.name}")
            return

        self.current_image = entry.path
        self.image_size = (image.width(), image.height())
        self.session.reset()
        self.canvas.set_pixmap(QPixmap.fromImage(image))
        self.file_browser.set_open_path(entry.path)

        if entry.is_completed:
            try:
                self.session.load(self.store.load(entry.path))
            except FrameItError as e:
                QMessageBox.warning(self, e.title, e.message)

        logger.info(f"Opened {entry.path} ({image.width()}x{image.height()})")

    # === Editing ===

    def undo(self) -> None:
        """Undo the last change to the rectangles."""
        self.session.undo()

    def redo(self) -> None:
        """Redo the last undone change."""
        self.session.redo()

    def save(self) -> bool:
        """
        Write the open image's rectangles and refresh completion data.

        Returns:
            True if a save file was written
        """
        if self.current_image is None or self.image_size is None:
            return False

        width, height = self.image_size
        try:
            self.store.save(self.current_image, width, height, self.session.committed)
        except FrameItError as e:
            QMessageBox.critical(self, e.title, e.message)
            return False

        if self.listing is not None:
            self.listing = self.lister.refresh(self.listing)
            self.list_window.replace_entries(self.listing.entries)
        return True

    def save_and_proceed(self) -> None:
        """Save, then open the next entry if it is an image."""
        if not self.save():
            return

        entry = self.list_window.select_next()
        if entry is not None and entry.kind == EntryKind.FILE:
            self._open_image(entry)

    def set_mode(self, mode: EditMode) -> None:
        """Switch the editing mode."""
        self.control_panel.set_mode(mode)
