"""Tests for core models."""

import pytest
from pathlib import Path
from PyQt6.QtCore import QPointF

from frameit.core.models import (
    BACKTRACK_NAME,
    CompletionData,
    DirectoryEntry,
    EntryKind,
    Rectangle,
    RectKind,
)


class TestRectangle:
    """Tests for the Rectangle class."""

    def test_defaults_to_primary(self):
        """Test that rectangles are primary unless told otherwise."""
        rect = Rectangle(1, 2, 3, 4)

        assert rect.kind == RectKind.PRIMARY
        assert rect.area == 12

    def test_negative_extent_rejected(self):
        """Test that a negative width or height is invalid."""
        with pytest.raises(ValueError):
            Rectangle(0, 0, -1, 5)
        with pytest.raises(ValueError):
            Rectangle(0, 0, 5, -1)

    def test_contains_is_half_open(self):
        """Test that left/top edges are inside and right/bottom edges are not."""
        rect = Rectangle(10, 10, 20, 20)

        assert rect.contains(QPointF(10, 10))
        assert rect.contains(QPointF(29.9, 29.9))
        assert not rect.contains(QPointF(30, 15))
        assert not rect.contains(QPointF(15, 30))
        assert not rect.contains(QPointF(9.9, 15))

    def test_from_corners_any_direction(self):
        """Test that dragging up and left gives the same rectangle."""
        forward = Rectangle.from_corners(QPointF(10, 20), QPointF(40, 60))
        backward = Rectangle.from_corners(QPointF(40, 60), QPointF(10, 20))

        assert forward == backward == Rectangle(10, 20, 30, 40)

    def test_from_corners_keeps_kind(self):
        """Test that the kind is carried over."""
        rect = Rectangle.from_corners(QPointF(0, 0), QPointF(5, 5), RectKind.SECONDARY)

        assert rect.kind == RectKind.SECONDARY

    def test_to_qrectf(self):
        """Test conversion to QRectF."""
        qrect = Rectangle(1.5, 2.5, 3, 4).to_qrectf()

        assert qrect.x() == 1.5
        assert qrect.y() == 2.5
        assert qrect.width() == 3
        assert qrect.height() == 4


class TestCompletionData:
    """Tests for CompletionData."""

    def test_percent(self):
        """Test the completed fraction."""
        assert CompletionData(3, 4).percent == 0.75

    def test_percent_of_empty_subtree(self):
        """Test that an empty subtree reports 0 without dividing by zero."""
        assert CompletionData(0, 0).percent == 0.0

    def test_is_complete(self):
        """Test completion check."""
        assert CompletionData(2, 2).is_complete
        assert not CompletionData(1, 2).is_complete

    def test_add(self):
        """Test summing counts."""
        assert CompletionData(1, 2) + CompletionData(3, 5) == CompletionData(4, 7)


class TestDirectoryEntry:
    """Tests for DirectoryEntry."""

    def test_backtrack(self):
        """Test the synthetic parent entry."""
        entry = DirectoryEntry.backtrack(Path("/images"))

        assert entry.display_name == BACKTRACK_NAME
        assert entry.kind == EntryKind.BACKTRACK
        assert entry.completion is None
        assert entry.is_directory
        assert not entry.is_completed

    def test_file_completion(self):
        """Test that a file is completed when its counts are (1, 1)."""
        done = DirectoryEntry(Path("a.png"), "a.png", EntryKind.FILE, CompletionData(1, 1))
        pending = DirectoryEntry(Path("b.png"), "b.png", EntryKind.FILE, CompletionData(0, 1))

        assert done.is_completed
        assert not pending.is_completed
        assert not done.is_directory

    def test_directory_label_shows_counts(self):
        """Test that directory labels include completion counts."""
        entry = DirectoryEntry(Path("sub"), "sub", EntryKind.DIRECTORY, CompletionData(3, 4))

        assert entry.label == "sub  3/4"

    def test_equality_ignores_completion(self):
        """Test that refreshed entries compare equal to the earlier ones."""
        before = DirectoryEntry(Path("a.png"), "a.png", EntryKind.FILE, CompletionData(0, 1))
        after = DirectoryEntry(Path("a.png"), "a.png", EntryKind.FILE, CompletionData(1, 1))

        assert before == after
