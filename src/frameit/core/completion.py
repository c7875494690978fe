"""Recursive completion counting over directory trees."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Tuple

from .exceptions import FilesystemEnumerationError
from .filesystem import ListedPath, is_image as default_is_image
from .filesystem import list_directory as default_list_directory
from .models import CompletionData
from .save_format import SaveFileStore

logger = logging.getLogger(__name__)

ListDirectory = Callable[[Path], Iterable[ListedPath]]
PathPredicate = Callable[[Path], bool]


@dataclass(frozen=True)
class CompletionResult:
    """Completion counts of a subtree plus any directories that failed to list."""

    data: CompletionData = field(default_factory=CompletionData)
    errors: Tuple[FilesystemEnumerationError, ...] = ()

    def __add__(self, other: CompletionResult) -> CompletionResult:
        return CompletionResult(self.data + other.data, self.errors + other.errors)


def aggregate_completion(
    directory: Path,
    is_complete: PathPredicate,
    list_directory: ListDirectory = default_list_directory,
    is_image: PathPredicate = default_is_image
) -> CompletionResult:
    """
    Count completed and total images in a directory subtree.

    Sub-directories are walked recursively. Files that are not images are
    ignored. A directory that cannot be listed counts as empty and is
    reported in the result's errors.

    Args:
        directory: Root of the subtree
        is_complete: Whether an image has been annotated
        list_directory: Directory listing capability
        is_image: Image type test

    Returns:
        CompletionResult for the subtree
    """
    try:
        children = list(list_directory(directory))
    except OSError as e:
        logger.warning(f"Error checking directory completion for {directory}: {e}")
        error = FilesystemEnumerationError(Path(directory), str(e))
        return CompletionResult(errors=(error,))

    result = CompletionResult()
    for child in children:
        if child.is_directory:
            result += aggregate_completion(child.path, is_complete, list_directory, is_image)
        elif is_image(child.path):
            completed = 1 if is_complete(child.path) else 0
            result += CompletionResult(CompletionData(completed, 1))

    return result


class CompletionAggregator:
    """Completion counting bound to a save store."""

    def __init__(
        self,
        store: SaveFileStore,
        list_directory: ListDirectory = default_list_directory,
        is_image: PathPredicate = default_is_image
    ) -> None:
        """
        Initialize the aggregator.

        Args:
            store: Save store deciding which images are complete
            list_directory: Directory listing capability
            is_image: Image type test
        """
        self.store = store
        self.list_directory = list_directory
        self.is_image = is_image

    def aggregate(self, directory: Path) -> CompletionResult:
        """Count completed and total images below a directory."""
        result = aggregate_completion(
            directory,
            self.store.has_save,
            self.list_directory,
            self.is_image
        )
        logger.debug(
            f"Completion of {directory}: {result.data.completed}/{result.data.total}"
        )
        return result

    def image_completion(self, image_path: Path) -> CompletionData:
        """Completion of a single image."""
        return CompletionData(1 if self.store.has_save(image_path) else 0, 1)
