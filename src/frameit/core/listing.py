"""Building directory listings for the file browser."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from .completion import CompletionAggregator, ListDirectory, PathPredicate
from .exceptions import FilesystemEnumerationError
from .filesystem import is_image as default_is_image
from .filesystem import list_directory as default_list_directory
from .models import DirectoryEntry, EntryKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Listing:
    """Entries of one directory plus any enumeration failures."""

    directory: Path
    entries: Tuple[DirectoryEntry, ...] = ()
    errors: Tuple[FilesystemEnumerationError, ...] = field(default=())


def sort_entries(entries: Iterable[DirectoryEntry]) -> List[DirectoryEntry]:
    """
    Sort entries for display.

    The backtrack entry comes first, the rest follow in case-sensitive
    order of their display names.
    """
    return sorted(
        entries,
        key=lambda entry: (entry.kind != EntryKind.BACKTRACK, entry.display_name)
    )


class DirectoryLister:
    """
    Lists image directories with completion data.

    Directories without any images below them and non-image files are left
    out. Navigation never goes above the image root.
    """

    def __init__(
        self,
        aggregator: CompletionAggregator,
        list_directory: ListDirectory = default_list_directory,
        is_image: PathPredicate = default_is_image
    ) -> None:
        """
        Initialize the lister.

        Args:
            aggregator: Completion aggregator for directories and images
            list_directory: Directory listing capability
            is_image: Image type test
        """
        self.aggregator = aggregator
        self.list_directory = list_directory
        self.is_image = is_image

    @property
    def image_root(self) -> Path:
        """Top of the browsable tree."""
        return self.aggregator.store.image_root

    def is_root(self, directory: Path) -> bool:
        """Check if a directory is the image root."""
        return Path(directory) == self.image_root

    def can_enter(self, directory: Path) -> bool:
        """Check if a directory lies inside the image root."""
        directory = Path(directory)
        return directory == self.image_root or self.image_root in directory.parents

    def build(self, directory: Path) -> Listing:
        """
        List a directory.

        Args:
            directory: Directory to list

        Returns:
            Listing with sorted entries
        """
        directory = Path(directory)
        entries: List[DirectoryEntry] = []
        errors: List[FilesystemEnumerationError] = []

        if not self.is_root(directory):
            entries.append(DirectoryEntry.backtrack(directory.parent))

        try:
            children = list(self.list_directory(directory))
        except OSError as e:
            logger.error(f"Error when loading directory {directory}: {e}")
            errors.append(FilesystemEnumerationError(directory, str(e)))
            children = []

        for child in children:
            if child.is_directory:
                result = self.aggregator.aggregate(child.path)
                errors.extend(result.errors)
                if result.data.total == 0:
                    logger.debug(f"Skipping directory without images: {child.path}")
                    continue
                entries.append(DirectoryEntry(
                    path=child.path,
                    display_name=child.path.name,
                    kind=EntryKind.DIRECTORY,
                    completion=result.data
                ))
            elif self.is_image(child.path):
                entries.append(DirectoryEntry(
                    path=child.path,
                    display_name=child.path.name,
                    kind=EntryKind.FILE,
                    completion=self.aggregator.image_completion(child.path)
                ))

        logger.info(f"Listed {directory}: {len(entries)} entries")
        return Listing(directory, tuple(sort_entries(entries)), tuple(errors))

    def refresh(self, listing: Listing) -> Listing:
        """
        Recompute completion data for the entries of an existing listing.

        Args:
            listing: Listing to refresh

        Returns:
            New listing with the same entries in the same order
        """
        entries: List[DirectoryEntry] = []
        errors: List[FilesystemEnumerationError] = []

        for entry in listing.entries:
            if entry.kind == EntryKind.FILE:
                completion = self.aggregator.image_completion(entry.path)
            elif entry.kind == EntryKind.DIRECTORY:
                result = self.aggregator.aggregate(entry.path)
                errors.extend(result.errors)
                completion = result.data
            else:
                entries.append(entry)
                continue
            entries.append(DirectoryEntry(entry.path, entry.display_name, entry.kind, completion))

        return Listing(listing.directory, tuple(entries), tuple(errors))
