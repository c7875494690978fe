"""Image display and rectangle drawing widget."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QColor, QMouseEvent, QPainter, QPen, QPixmap, QResizeEvent
from PyQt6.QtWidgets import QSizePolicy, QWidget

from ..core.geometry import (
    ScaleState, compute_scale_state, image_bounds_in_view, point_to_image_space
)
from ..core.models import Rectangle, RectKind
from ..core.session import AnnotationSession, DrawGesture
from .control_panel import EditMode

logger = logging.getLogger(__name__)

OUTLINE_COLOR = QColor(0, 255, 0)
KIND_COLORS = {
    RectKind.PRIMARY: QColor(255, 0, 0),
    RectKind.SECONDARY: QColor(0, 120, 255),
}


class ImageCanvas(QWidget):
    """
    Widget showing one image scaled to fit, with its annotation rectangles.

    Rectangles are kept in image space by the session and converted to
    view space on every paint, so resizing never changes them.
    """

    def __init__(self, session: AnnotationSession, parent: Optional[QWidget] = None) -> None:
        """
        Initialize the canvas.

        Args:
            session: Annotation session the canvas edits
            parent: Parent widget
        """
        super().__init__(parent)
        self.session = session
        self.session.changed.connect(self.update)
        self.mode = EditMode.NONE

        self._pixmap: Optional[QPixmap] = None
        self._scaled_pixmap: Optional[QPixmap] = None
        self._state: Optional[ScaleState] = None
        self._gesture = DrawGesture()

        self.setMinimumSize(200, 200)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    @property
    def image_size(self) -> Optional[Tuple[int, int]]:
        """Pixel size of the displayed image."""
        if self._pixmap is None:
            return None
        return (self._pixmap.width(), self._pixmap.height())

    @property
    def scale_state(self) -> Optional[ScaleState]:
        """Current display transform, None without an image."""
        return self._state

    def set_pixmap(self, pixmap: QPixmap) -> None:
        """
        Display a new image.

        Args:
            pixmap: Decoded image
        """
        self._pixmap = pixmap
        self._gesture.cancel()
        self._update_scale()
        self.update()

    def set_mode(self, mode: EditMode) -> None:
        """Change what mouse presses do."""
        self.mode = mode
        self._gesture.cancel()
        self.update()

    def _update_scale(self) -> None:
        """Recompute the display transform for the current widget size."""
        if (self._pixmap is None or self._pixmap.isNull() or
                self.width() <= 0 or self.height() <= 0):
            self._state = None
            self._scaled_pixmap = None
            return

        self._state = compute_scale_state(
            self._pixmap.width(), self._pixmap.height(), self.width(), self.height()
        )
        self._scaled_pixmap = self._pixmap.scaled(
            int(self._pixmap.width() * self._state.scale),
            int(self._pixmap.height() * self._state.scale),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation
        )

    def _contains_image(self, pos: QPointF) -> bool:
        """Check if a widget position lies on the displayed image."""
        if self._state is None or self._pixmap is None:
            return False
        bounds = image_bounds_in_view(self._pixmap.width(), self._pixmap.height(), self._state)
        return bounds.contains(pos)

    def resizeEvent(self, event: QResizeEvent) -> None:
        """Refit the image to the new size."""
        super().resizeEvent(event)
        self._update_scale()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Start a rectangle or delete rectangles under the cursor."""
        pos = event.position()
        if event.button() != Qt.MouseButton.LeftButton or not self._contains_image(pos):
            return

        kind = self.mode.rect_kind
        if kind is not None:
            self.session.begin_draw()
            self._gesture.start(pos, kind)
        elif self.mode == EditMode.DELETE:
            self.session.delete_at(point_to_image_space(pos, self._state))
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        """Grow the rectangle being drawn; leaving the image ends it."""
        if not self._gesture.active:
            return

        pos = event.position()
        if self._contains_image(pos):
            self._gesture.update(pos)
            self.update()
        else:
            self._finish_gesture()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        """Commit the rectangle being drawn."""
        if self._gesture.active:
            self._finish_gesture()

    def _finish_gesture(self) -> None:
        rect = self._gesture.finish()
        if rect is not None and self._state is not None:
            self.session.commit_gesture(rect, self._state)
        self.update()

    def paintEvent(self, event) -> None:
        """Paint the image and its rectangles."""
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(0, 0, 0))

        if self._scaled_pixmap is not None and self._state is not None:
            painter.drawPixmap(
                QPointF(self._state.offset_x, self._state.offset_y), self._scaled_pixmap
            )
            for rect in self.session.view_rectangles(self._state):
                self._draw_rectangle(painter, rect)

            current = self._gesture.rect
            if current is not None:
                self._draw_rectangle(painter, current)

        painter.end()

    def _draw_rectangle(self, painter: QPainter, rect: Rectangle) -> None:
        """Draw one view-space rectangle with a contrasting outline."""
        qrect = rect.to_qrectf()
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.setPen(QPen(OUTLINE_COLOR, 1))
        painter.drawRect(qrect.adjusted(-1, -1, 1, 1))
        painter.setPen(QPen(KIND_COLORS[rect.kind], 1))
        painter.drawRect(qrect)
