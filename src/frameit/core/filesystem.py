"""Directory enumeration and image type detection."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, NamedTuple

from PyQt6.QtGui import QImageReader

logger = logging.getLogger(__name__)


class ListedPath(NamedTuple):
    """Child of a directory as returned by a directory listing."""

    path: Path
    is_directory: bool


def list_directory(directory: Path) -> List[ListedPath]:
    """
    List the direct children of a directory.

    Args:
        directory: Directory to list

    Returns:
        Children with their directory flag

    Raises:
        OSError: If the directory cannot be read
    """
    return [
        ListedPath(path=child, is_directory=child.is_dir())
        for child in Path(directory).iterdir()
    ]


def is_image(path: Path) -> bool:
    """
    Check whether a file holds an image Qt can read.

    The format is detected from the file contents, never from its extension.

    Args:
        path: File to check

    Returns:
        True if the file contents are a supported image format
    """
    image_format = QImageReader.imageFormat(str(path))
    if image_format.isEmpty():
        logger.debug(f"Not an image: {path}")
        return False
    return True

