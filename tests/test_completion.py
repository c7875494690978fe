"""Tests for completion counting."""

import pytest
from pathlib import Path

from frameit.core.completion import CompletionAggregator, CompletionResult, aggregate_completion
from frameit.core.filesystem import ListedPath
from frameit.core.models import CompletionData
from frameit.core.save_format import SaveFileStore


class FakeTree:
    """In-memory directory tree for completion tests."""

    def __init__(self, layout, unreadable=()):
        self.layout = {Path(k): v for k, v in layout.items()}
        self.unreadable = {Path(p) for p in unreadable}

    def list_directory(self, directory):
        directory = Path(directory)
        if directory in self.unreadable:
            raise PermissionError(f"Permission denied: '{directory}'")
        return [
            ListedPath(directory / name, (directory / name) in self.layout)
            for name in self.layout[directory]
        ]

    @staticmethod
    def is_image(path):
        return path.suffix == ".jpg"


@pytest.fixture
def tree():
    """Root with [done, done, pending, notes] and sub with [done]."""
    return FakeTree({
        "/root": ["a.jpg", "b.jpg", "c.jpg", "notes.md", "sub"],
        "/root/sub": ["d.jpg"],
    })


DONE = {Path("/root/a.jpg"), Path("/root/b.jpg"), Path("/root/sub/d.jpg")}


class TestAggregateCompletion:
    """Tests for aggregate_completion."""

    def test_counts_recursively(self, tree):
        """Test counting a tree with three of four images done."""
        result = aggregate_completion(
            Path("/root"), DONE.__contains__, tree.list_directory, tree.is_image
        )

        assert result.data == CompletionData(completed=3, total=4)
        assert result.errors == ()

    def test_non_images_ignored(self):
        """Test that a directory of non-images counts as empty."""
        tree = FakeTree({"/root": ["notes.md", "data.csv"]})

        result = aggregate_completion(
            Path("/root"), lambda path: True, tree.list_directory, tree.is_image
        )

        assert result.data == CompletionData(0, 0)

    def test_unreadable_subtree_reported(self):
        """Test that a failing directory counts as zero and is reported."""
        tree = FakeTree(
            {"/root": ["a.jpg", "locked"], "/root/locked": ["b.jpg"]},
            unreadable=["/root/locked"],
        )

        result = aggregate_completion(
            Path("/root"), lambda path: False, tree.list_directory, tree.is_image
        )

        assert result.data == CompletionData(0, 1)
        assert len(result.errors) == 1
        assert result.errors[0].path == Path("/root/locked")

    def test_result_addition(self):
        """Test combining results."""
        total = CompletionResult(CompletionData(1, 2)) + CompletionResult(CompletionData(1, 1))

        assert total.data == CompletionData(2, 3)


class TestCompletionAggregator:
    """Tests for CompletionAggregator on disk."""

    def test_counts_save_files(self, image_tree):
        """Test that save file existence marks images complete."""
        image_root, save_root = image_tree
        store = SaveFileStore(image_root, save_root)
        store.save(image_root / "sub" / "b.png", 8, 6, [])
        aggregator = CompletionAggregator(store)

        assert aggregator.aggregate(image_root).data == CompletionData(1, 3)
        assert aggregator.aggregate(image_root / "sub").data == CompletionData(1, 2)
        assert aggregator.aggregate(image_root / "empty").data == CompletionData(0, 0)

    def test_image_completion(self, image_tree):
        """Test single image completion."""
        image_root, save_root = image_tree
        store = SaveFileStore(image_root, save_root)
        store.save(image_root / "a.png", 8, 6, [])
        aggregator = CompletionAggregator(store)

        assert aggregator.image_completion(image_root / "a.png") == CompletionData(1, 1)
        assert aggregator.image_completion(image_root / "sub" / "b.png") == CompletionData(0, 1)
