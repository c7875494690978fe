"""Per-image annotation state with draw/delete/undo/redo/clear history."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from PyQt6.QtCore import QObject, QPointF, pyqtSignal

from .geometry import ScaleState, to_image_space, to_view_space
from .models import Rectangle, RectKind

logger = logging.getLogger(__name__)

# Minimum area, in view pixels at the time of drawing, of a committed rectangle
MIN_RECT_AREA = 15


class AnnotationSession(QObject):
    """
    Rectangles drawn on one image plus their undo/redo history.

    ``committed`` and ``redo_buffer`` are ordered most-recent-first. The
    ``cleared_last`` flag marks that the last history action was a clear:
    undo then restores the whole cleared set, redo is disabled, and the
    next draw forfeits the cleared set for good.

    Rectangles are held in image space.
    """

    changed = pyqtSignal()  # Emitted after every effective mutation

    def __init__(self, min_area: float = MIN_RECT_AREA) -> None:
        """
        Initialize an empty session.

        Args:
            min_area: Minimum view-space area of a committed gesture
        """
        super().__init__()
        self.min_area = min_area
        self._committed: List[Rectangle] = []
        self._redo_buffer: List[Rectangle] = []
        self._cleared_last = False

    @property
    def committed(self) -> Tuple[Rectangle, ...]:
        """Rectangles currently on the image, most recent first."""
        return tuple(self._committed)

    @property
    def redo_buffer(self) -> Tuple[Rectangle, ...]:
        """Rectangles that were undone, deleted or cleared, most recent first."""
        return tuple(self._redo_buffer)

    @property
    def cleared_last(self) -> bool:
        """Whether the last history action was a clear."""
        return self._cleared_last

    def can_undo(self) -> bool:
        """Check if undo would change anything."""
        return self._cleared_last or bool(self._committed)

    def can_redo(self) -> bool:
        """Check if redo would change anything."""
        return bool(self._redo_buffer) and not self._cleared_last

    def reset(self) -> None:
        """Forget all rectangles and history, as when a new image is opened."""
        self._committed = []
        self._redo_buffer = []
        self._cleared_last = False
        self.changed.emit()

    def load(self, rects: Iterable[Rectangle]) -> None:
        """
        Install rectangles read from a save file.

        Args:
            rects: Image-space rectangles in saved order
        """
        self._committed = list(rects)
        self._redo_buffer = []
        self._cleared_last = False
        logger.debug(f"Loaded {len(self._committed)} rectangles into session")
        self.changed.emit()

    def begin_draw(self) -> None:
        """Forfeit the last clear, as starting any draw does."""
        if self._cleared_last:
            self._redo_buffer = []
            self._cleared_last = False
            logger.debug("Draw after clear: cleared rectangles discarded")

    def draw(self, rect: Rectangle) -> None:
        """
        Commit a new rectangle.

        Args:
            rect: Image-space rectangle
        """
        self.begin_draw()
        self._committed.insert(0, rect)
        logger.debug(f"Drew {rect}")
        self.changed.emit()

    def undo(self) -> bool:
        """
        Undo the last clear, or the most recently drawn rectangle.

        Returns:
            True if anything changed
        """
        if self._cleared_last:
            self._committed = self._redo_buffer
            self._redo_buffer = []
            self._cleared_last = False
            logger.debug(f"Undid clear: restored {len(self._committed)} rectangles")
        elif self._committed:
            self._redo_buffer.insert(0, self._committed.pop(0))
            logger.debug("Undid last rectangle")
        else:
            return False

        self.changed.emit()
        return True

    def redo(self) -> bool:
        """
        Restore the most recently undone or deleted rectangle.

        Has no effect right after a clear.

        Returns:
            True if anything changed
        """
        if not self.can_redo():
            return False

        self._committed.insert(0, self._redo_buffer.pop(0))
        logger.debug("Redid rectangle")
        self.changed.emit()
        return True

    def clear(self) -> None:
        """Remove all rectangles, keeping them for a single undo."""
        self._redo_buffer = list(self._committed)
        self._committed = []
        self._cleared_last = True
        logger.debug(f"Cleared {len(self._redo_buffer)} rectangles")
        self.changed.emit()

    def delete_at(self, point: QPointF) -> List[Rectangle]:
        """
        Delete every rectangle containing a point.

        Each removed rectangle is pushed onto the front of the redo buffer
        in removal order. The clear flag is left as it is.

        Args:
            point: Image-space point

        Returns:
            Removed rectangles in removal order
        """
        removed: List[Rectangle] = []
        kept: List[Rectangle] = []
        for rect in self._committed:
            if rect.contains(point):
                self._redo_buffer.insert(0, rect)
                removed.append(rect)
            else:
                kept.append(rect)

        if removed:
            self._committed = kept
            logger.debug(f"Deleted {len(removed)} rectangles at ({point.x()}, {point.y()})")
            self.changed.emit()

        return removed

    def commit_gesture(self, view_rect: Rectangle, state: ScaleState) -> Optional[Rectangle]:
        """
        Commit a rectangle drawn on screen if it is large enough.

        Args:
            view_rect: Rectangle in view space
            state: Scale state at the time of the gesture

        Returns:
            The committed image-space rectangle, or None if it was too small
        """
        if view_rect.area < self.min_area:
            logger.debug(f"Discarded gesture with area {view_rect.area}")
            return None

        rect = to_image_space(view_rect, state)
        self.draw(rect)
        return rect

    def view_rectangles(self, state: ScaleState) -> List[Rectangle]:
        """Committed rectangles converted to view space."""
        return [to_view_space(rect, state) for rect in self._committed]


class DrawGesture:
    """
    In-progress rectangle drag in view space.

    The rectangle always spans the press point and the current point,
    whichever direction the drag goes.
    """

    def __init__(self, kind: RectKind = RectKind.PRIMARY) -> None:
        self.kind = kind
        self._origin: Optional[QPointF] = None
        self._current: Optional[QPointF] = None

    @property
    def active(self) -> bool:
        """Whether a drag is in progress."""
        return self._origin is not None

    def start(self, point: QPointF, kind: Optional[RectKind] = None) -> None:
        """Begin a drag at a point."""
        if kind is not None:
            self.kind = kind
        self._origin = QPointF(point)
        self._current = QPointF(point)

    def update(self, point: QPointF) -> None:
        """Move the free corner of the drag."""
        if self.active:
            self._current = QPointF(point)

    @property
    def rect(self) -> Optional[Rectangle]:
        """Rectangle spanned so far, or None if no drag is active."""
        if self._origin is None or self._current is None:
            return None
        return Rectangle.from_corners(self._origin, self._current, self.kind)

    def finish(self) -> Optional[Rectangle]:
        """End the drag and return the spanned rectangle."""
        rect = self.rect
        self.cancel()
        return rect

    def cancel(self) -> None:
        """Abandon the drag."""
        self._origin = None
        self._current = None
