"""Save file reading and writing.

A save file mirrors its image's location under the save root, with the
extension replaced by ``.txt``::

    parent/image.jpg        # image path relative to the image root
    1920,1080               # image width,height
    2                       # rectangle count
    10.0,20.0,30.5,40.0,primary
    5.0,5.0,12.0,8.0,secondary

Rectangle lines are image-space ``x,y,width,height`` with an optional
trailing kind token. Lines without the token load as primary rectangles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import List, Optional, Sequence

from .exceptions import AnnotationIOError, MalformedSaveFileError
from .models import Rectangle, RectKind

logger = logging.getLogger(__name__)

SAVE_FILE_EXTENSION = ".txt"
HEADER_LINES = 3


@dataclass
class SaveRecord:
    """Contents of one save file."""

    image_path: str
    width: int
    height: int
    rectangles: List[Rectangle] = field(default_factory=list)


def save_path_for(image_root: Path, save_root: Path, image_path: Path) -> Path:
    """
    Get the save file path for an image.

    Args:
        image_root: Root directory of all images
        save_root: Root directory of all save files
        image_path: Path to the image file

    Returns:
        Path under the save root mirroring the image's relative location

    Raises:
        ValueError: If the image is not inside the image root
    """
    relative = Path(image_path).relative_to(image_root)
    return Path(save_root) / relative.with_suffix(SAVE_FILE_EXTENSION)


def _format_number(value: float) -> str:
    return repr(float(value))


def format_rectangle(rect: Rectangle, with_kind: bool = True) -> str:
    """
    Format one rectangle as a save file line.

    Args:
        rect: Image-space rectangle
        with_kind: Append the kind token

    Returns:
        Comma-separated line without a newline
    """
    fields = [
        _format_number(rect.x),
        _format_number(rect.y),
        _format_number(rect.width),
        _format_number(rect.height),
    ]
    if with_kind:
        fields.append(rect.kind.value)
    return ",".join(fields)


def format_record(
    image_rel_path: PurePath,
    width: int,
    height: int,
    rects: Sequence[Rectangle],
    with_kind: bool = True
) -> str:
    """
    Build the text of a save file.

    Args:
        image_rel_path: Image path relative to the image root
        width: Image width in pixels
        height: Image height in pixels
        rects: Image-space rectangles
        with_kind: Append the kind token to each rectangle line

    Returns:
        Save file contents ending with a newline
    """
    lines = [
        PurePath(image_rel_path).as_posix(),
        f"{width},{height}",
        str(len(rects)),
    ]
    lines.extend(format_rectangle(rect, with_kind) for rect in rects)
    return "\n".join(lines) + "\n"


def _parse_rectangle(line: str, line_number: int, path: Optional[Path]) -> Rectangle:
    parts = [part.strip() for part in line.split(",")]
    if len(parts) not in (4, 5):
        raise MalformedSaveFileError(
            f"Expected 4 or 5 fields, got {len(parts)}", path, line_number
        )

    try:
        x, y, width, height = (float(part) for part in parts[:4])
    except ValueError as e:
        raise MalformedSaveFileError(f"Invalid number: {e}", path, line_number) from e

    kind = RectKind.PRIMARY
    if len(parts) == 5:
        try:
            kind = RectKind(parts[4].lower())
        except ValueError as e:
            raise MalformedSaveFileError(
                f"Unknown rectangle kind '{parts[4]}'", path, line_number
            ) from e

    try:
        return Rectangle(x, y, width, height, kind)
    except ValueError as e:
        raise MalformedSaveFileError(str(e), path, line_number) from e


def parse_rectangles(text: str, path: Optional[Path] = None) -> List[Rectangle]:
    """
    Parse the rectangles of a save file.

    The three header lines are skipped without validation.

    Args:
        text: Save file contents
        path: Source path, used in error messages

    Returns:
        Image-space rectangles in file order

    Raises:
        MalformedSaveFileError: If the header is missing or any line is invalid
    """
    lines = text.splitlines()
    if len(lines) < HEADER_LINES:
        raise MalformedSaveFileError(
            f"Expected {HEADER_LINES} header lines, got {len(lines)}", path
        )

    rects: List[Rectangle] = []
    for line_number, line in enumerate(lines[HEADER_LINES:], HEADER_LINES + 1):
        line = line.strip()
        if not line:
            continue
        rects.append(_parse_rectangle(line, line_number, path))

    return rects


def parse_record(text: str, path: Optional[Path] = None) -> SaveRecord:
    """
    Parse a save file including its header.

    Args:
        text: Save file contents
        path: Source path, used in error messages

    Returns:
        SaveRecord with header values and rectangles

    Raises:
        MalformedSaveFileError: If any part of the file is invalid
    """
    rects = parse_rectangles(text, path)
    lines = text.splitlines()

    try:
        width_text, height_text = lines[1].split(",")
        width, height = int(width_text), int(height_text)
    except ValueError as e:
        raise MalformedSaveFileError(f"Invalid image size '{lines[1]}'", path, 2) from e

    try:
        count = int(lines[2])
    except ValueError as e:
        raise MalformedSaveFileError(f"Invalid rectangle count '{lines[2]}'", path, 3) from e

    if count != len(rects):
        raise MalformedSaveFileError(
            f"Header declares {count} rectangles, found {len(rects)}", path, 3
        )

    return SaveRecord(image_path=lines[0], width=width, height=height, rectangles=rects)


class SaveFileStore:
    """
    Reads and writes save files for images under one image root.

    The existence of an image's save file is the only completion signal.
    """

    def __init__(self, image_root: Path, save_root: Path, with_kind: bool = True) -> None:
        """
        Initialize the store.

        Args:
            image_root: Root directory of all images
            save_root: Root directory of all save files
            with_kind: Write the rectangle kind token
        """
        self.image_root = Path(image_root)
        self.save_root = Path(save_root)
        self.with_kind = with_kind

    def save_path(self, image_path: Path) -> Path:
        """Get the save file path for an image."""
        return save_path_for(self.image_root, self.save_root, image_path)

    def has_save(self, image_path: Path) -> bool:
        """Check if an image has a save file."""
        try:
            return self.save_path(image_path).exists()
        except (OSError, ValueError) as e:
            logger.warning(f"Error checking save file for {image_path}: {e}")
            return False

    def save(
        self,
        image_path: Path,
        width: int,
        height: int,
        rects: Sequence[Rectangle]
    ) -> Path:
        """
        Write the save file for an image.

        Args:
            image_path: Path to the image file
            width: Image width in pixels
            height: Image height in pixels
            rects: Image-space rectangles

        Returns:
            Path of the written save file

        Raises:
            AnnotationIOError: If the file could not be written
        """
        image_path = Path(image_path)
        save_path = self.save_path(image_path)
        relative = image_path.relative_to(self.image_root)
        text = format_record(relative, width, height, rects, self.with_kind)

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            save_path.write_text(text, encoding="utf-8")
        except OSError as e:
            logger.error(f"Error writing save file {save_path}: {e}")
            raise AnnotationIOError(f"Could not write {save_path}: {e}", save_path) from e

        logger.info(f"Saved {len(rects)} rectangles to {save_path}")
        return save_path

    def load(self, image_path: Path) -> List[Rectangle]:
        """
        Read the rectangles saved for an image.

        Args:
            image_path: Path to the image file

        Returns:
            Image-space rectangles in saved order

        Raises:
            AnnotationIOError: If the file could not be read
            MalformedSaveFileError: If the file could not be parsed
        """
        save_path = self.save_path(image_path)

        try:
            text = save_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading save file {save_path}: {e}")
            raise AnnotationIOError(f"Could not read {save_path}: {e}", save_path) from e

        rects = parse_rectangles(text, save_path)
        logger.info(f"Loaded {len(rects)} rectangles from {save_path}")
        return rects
