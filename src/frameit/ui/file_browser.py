"""File browser showing a virtualized directory listing with completion status."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QRect, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QMouseEvent, QPainter, QPen, QResizeEvent, QWheelEvent
from PyQt6.QtWidgets import QHBoxLayout, QPushButton, QSizePolicy, QVBoxLayout, QWidget

from ..core.list_window import ListWindow
from ..core.models import DirectoryEntry, EntryKind

logger = logging.getLogger(__name__)

SELECTED_COLOR = QColor(70, 155, 255)
OPEN_COLOR = QColor(191, 110, 254)
COMPLETED_COLOR = QColor(100, 255, 100)
PENDING_COLOR = QColor(255, 75, 75)
TEXT_PADDING = 10


class FileList(QWidget):
    """
    Paints the visible rows of a ListWindow.

    Only rows inside the window are painted; the full listing may be far
    larger than what fits.
    """

    entry_activated = pyqtSignal(object)  # DirectoryEntry double-clicked

    def __init__(
        self,
        list_window: ListWindow,
        scroll_step: int = 10,
        parent: Optional[QWidget] = None
    ) -> None:
        """
        Initialize the list.

        Args:
            list_window: List window holding the entries
            scroll_step: Pixels the scroll handle moves per wheel notch
            parent: Parent widget
        """
        super().__init__(parent)
        self.list_window = list_window
        self.scroll_step = scroll_step
        self.open_path: Optional[Path] = None

        self.list_window.window_changed.connect(self.update)
        self.list_window.selection_changed.connect(lambda _: self.update())
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    def set_open_path(self, path: Optional[Path]) -> None:
        """Mark the image currently open in the editor."""
        self.open_path = path
        self.update()

    def _row_color(self, entry: DirectoryEntry) -> QColor:
        if entry == self.list_window.selected:
            return SELECTED_COLOR
        if entry.kind == EntryKind.FILE and entry.path == self.open_path:
            return OPEN_COLOR
        if entry.is_completed:
            return COMPLETED_COLOR
        return PENDING_COLOR

    def paintEvent(self, event) -> None:
        """Paint the visible rows."""
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(255, 255, 255))
        item_height = self.list_window.item_height
        width = self.width() - 1

        for row, entry in enumerate(self.list_window.visible_entries):
            rect = QRect(0, row * item_height, width, item_height)
            color = self._row_color(entry)
            painter.fillRect(rect, color)

            # Partially completed directories show their progress as a bar
            if (color == PENDING_COLOR and entry.kind == EntryKind.DIRECTORY and
                    entry.completion is not None):
                progress = QRectF(rect.x(), rect.y(), rect.width() * entry.completion.percent,
                                  rect.height())
                painter.fillRect(progress, COMPLETED_COLOR)

            painter.setPen(QPen(QColor(0, 0, 0)))
            painter.drawRect(rect)
            text_rect = rect.adjusted(TEXT_PADDING, 0, -TEXT_PADDING, 0)
            text = painter.fontMetrics().elidedText(
                entry.label, Qt.TextElideMode.ElideMiddle, text_rect.width()
            )
            painter.drawText(
                text_rect,
                Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft,
                text
            )

        painter.end()

    def resizeEvent(self, event: QResizeEvent) -> None:
        """Fit the window to the new height."""
        super().resizeEvent(event)
        self.list_window.resize(self.height())

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Select the row under the cursor."""
        self.list_window.select_at_offset(event.position().y())

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        """Open the row under the cursor."""
        entry = self.list_window.select_at_offset(event.position().y())
        if entry is not None:
            self.entry_activated.emit(entry)

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Scroll by a fixed step per wheel notch."""
        notches = event.angleDelta().y() / 120
        if notches:
            self.list_window.scroll_by(-notches * self.scroll_step)
        event.accept()


class ScrollIndicatorBar(QWidget):
    """
    Proportional scroll bar driving a ListWindow.

    Dragging the handle scrolls continuously; clicking the track moves the
    handle one step toward the click.
    """

    BAR_WIDTH = 11

    def __init__(
        self,
        list_window: ListWindow,
        scroll_step: int = 10,
        parent: Optional[QWidget] = None
    ) -> None:
        """
        Initialize the bar.

        Args:
            list_window: List window to scroll
            scroll_step: Pixels the handle moves per track click
            parent: Parent widget
        """
        super().__init__(parent)
        self.list_window = list_window
        self.scroll_step = scroll_step
        self._dragging = False
        self._click_offset = 0.0

        self.list_window.window_changed.connect(self.update)
        self.setFixedWidth(self.BAR_WIDTH)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Expanding)

    def paintEvent(self, event) -> None:
        """Paint the track and the handle."""
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(255, 255, 255))
        painter.setPen(QPen(QColor(0, 0, 0)))
        painter.drawRect(0, 0, self.BAR_WIDTH - 1, self.height() - 1)

        indicator = self.list_window.indicator
        if indicator.visible:
            handle = QRectF(0, indicator.top, self.BAR_WIDTH - 1, indicator.bar_length)
            painter.fillRect(handle, QColor(190, 190, 190))
            painter.drawRect(handle)

        painter.end()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Grab the handle or step toward the click."""
        y = event.position().y()
        indicator = self.list_window.indicator
        if indicator.contains(y):
            self._dragging = True
            self._click_offset = indicator.center - y
        else:
            self.list_window.scroll_indicator_toward(y, self.scroll_step)
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        """Drag the handle."""
        if self._dragging:
            self.list_window.drag_indicator_to(event.position().y() + self._click_offset)
            self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        """Release the handle."""
        self._dragging = False
        self._click_offset = 0.0


class FileBrowser(QWidget):
    """
    File browser panel: an Open button above the list and its scroll bar.

    Emits ``entry_activated`` when an entry is opened by double-click or by
    the Open button.
    """

    entry_activated = pyqtSignal(object)  # DirectoryEntry

    def __init__(
        self,
        list_window: ListWindow,
        scroll_step: int = 10,
        parent: Optional[QWidget] = None
    ) -> None:
        """
        Initialize the browser.

        Args:
            list_window: List window holding the entries
            scroll_step: Pixels the scroll handle moves per wheel notch or click
            parent: Parent widget
        """
        super().__init__(parent)
        self.list_window = list_window

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.open_button = QPushButton("Open")
        self.open_button.clicked.connect(self._on_open_clicked)
        layout.addWidget(self.open_button)

        list_layout = QHBoxLayout()
        list_layout.setContentsMargins(0, 0, 0, 0)
        list_layout.setSpacing(0)
        self.file_list = FileList(list_window, scroll_step)
        self.scroll_bar = ScrollIndicatorBar(list_window, scroll_step)
        list_layout.addWidget(self.file_list)
        list_layout.addWidget(self.scroll_bar)
        layout.addLayout(list_layout)

        self.file_list.entry_activated.connect(self.entry_activated.emit)

    def _on_open_clicked(self) -> None:
        """Open the selected entry."""
        selected = self.list_window.selected
        if selected is not None:
            self.entry_activated.emit(selected)

    def set_open_path(self, path: Optional[Path]) -> None:
        """Mark the image currently open in the editor."""
        self.file_list.set_open_path(path)
