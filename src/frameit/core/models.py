"""Data models for FrameIt annotations and directory listings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QPointF, QRectF

logger = logging.getLogger(__name__)


class RectKind(str, Enum):
    """Type of annotation rectangle."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned annotation rectangle.

    The same logical rectangle exists in image space (persisted) and in
    view space (display-scale dependent). Instances do not record which
    frame they are in; conversions live in :mod:`frameit.core.geometry`.
    """

    x: float
    y: float
    width: float
    height: float
    kind: RectKind = RectKind.PRIMARY

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Rectangle extent must be non-negative, got {self.width}x{self.height}"
            )

    @property
    def area(self) -> float:
        """Area of the rectangle."""
        return self.width * self.height

    def contains(self, point: QPointF) -> bool:
        """
        Check whether a point lies inside the rectangle.

        The left and top edges are inside, the right and bottom edges are not.

        Args:
            point: Point in the same coordinate frame as the rectangle

        Returns:
            True if the point is inside
        """
        px, py = point.x(), point.y()
        return (
            self.x <= px < self.x + self.width and
            self.y <= py < self.y + self.height
        )

    def to_qrectf(self) -> QRectF:
        """Convert to a QRectF for painting."""
        return QRectF(self.x, self.y, self.width, self.height)

    @classmethod
    def from_corners(
        cls,
        first: QPointF,
        second: QPointF,
        kind: RectKind = RectKind.PRIMARY
    ) -> Rectangle:
        """
        Create a rectangle spanning two opposite corners in any order.

        Args:
            first: One corner
            second: The opposite corner
            kind: Annotation type

        Returns:
            New Rectangle instance
        """
        x = min(first.x(), second.x())
        y = min(first.y(), second.y())
        return cls(
            x=x,
            y=y,
            width=abs(second.x() - first.x()),
            height=abs(second.y() - first.y()),
            kind=kind
        )


@dataclass(frozen=True)
class CompletionData:
    """Completion counts for an image or a directory subtree."""

    completed: int = 0
    total: int = 0

    @property
    def percent(self) -> float:
        """Fraction of completed images, 0.0 for an empty subtree."""
        if self.total == 0:
            return 0.0
        return self.completed / self.total

    @property
    def is_complete(self) -> bool:
        """Whether every image in the subtree is completed."""
        return self.completed == self.total

    def __add__(self, other: CompletionData) -> CompletionData:
        return CompletionData(
            completed=self.completed + other.completed,
            total=self.total + other.total
        )


class EntryKind(str, Enum):
    """Kind of entry in a directory listing."""

    FILE = "file"
    DIRECTORY = "directory"
    BACKTRACK = "backtrack"


BACKTRACK_NAME = ".."


@dataclass(frozen=True)
class DirectoryEntry:
    """
    Single entry of a directory listing.

    Files carry a completion of (1, 1) or (0, 1), directories the aggregate
    of their subtree, and the backtrack entry none at all.
    """

    path: Path
    display_name: str
    kind: EntryKind
    completion: Optional[CompletionData] = field(default=None, compare=False)

    @property
    def is_directory(self) -> bool:
        """Whether activating the entry changes directory."""
        return self.kind in (EntryKind.DIRECTORY, EntryKind.BACKTRACK)

    @property
    def is_completed(self) -> bool:
        """Whether the entry is fully annotated."""
        return self.completion is not None and self.completion.is_complete

    @property
    def label(self) -> str:
        """Text shown in the file browser."""
        if self.kind == EntryKind.DIRECTORY and self.completion is not None:
            return f"{self.display_name}  {self.completion.completed}/{self.completion.total}"
        return self.display_name

    @classmethod
    def backtrack(cls, parent: Path) -> DirectoryEntry:
        """Create the synthetic entry pointing at a parent directory."""
        return cls(path=parent, display_name=BACKTRACK_NAME, kind=EntryKind.BACKTRACK)
