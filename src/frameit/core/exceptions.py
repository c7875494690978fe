"""Exception types raised by the FrameIt core."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class FrameItError(Exception):
    """Base error that can be shown to the user in a message box.

    Attributes:
        title: The title of the error dialog.
        message: The detailed message to show to the user.
    """

    title = "Error"

    def __init__(self, message: str, title: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if title is not None:
            self.title = title


class InvalidScaleError(FrameItError, ValueError):
    """Coordinate conversion attempted without a loaded image."""

    title = "Invalid Scale"


class MalformedSaveFileError(FrameItError):
    """A save file could not be parsed."""

    title = "Malformed Save File"

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        line_number: Optional[int] = None
    ) -> None:
        location = ""
        if path is not None:
            location = f"{path}"
            if line_number is not None:
                location += f":{line_number}"
            location += ": "
        super().__init__(f"{location}{message}")
        self.path = path
        self.line_number = line_number


class AnnotationIOError(FrameItError):
    """Reading or writing a save file failed."""

    title = "File Error"

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class FilesystemEnumerationError(FrameItError):
    """A directory could not be listed."""

    title = "Directory Error"

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not list {path}: {reason}")
        self.path = path
        self.reason = reason
