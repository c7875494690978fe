"""Pytest configuration and fixtures."""

import os
import pytest
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    """Create a QApplication for tests that need it."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])

    yield app


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for tests."""
    return tmp_path


def write_png(path: Path, width: int = 8, height: int = 6) -> Path:
    """Write a small solid PNG image."""
    from PyQt6.QtGui import QColor, QImage

    path.parent.mkdir(parents=True, exist_ok=True)
    image = QImage(width, height, QImage.Format.Format_RGB32)
    image.fill(QColor(200, 100, 50))
    assert image.save(str(path), "PNG")
    return path


@pytest.fixture
def make_png(qapp):
    """Provide a helper that writes small PNG images."""
    return write_png


@pytest.fixture
def image_tree(tmp_path, qapp):
    """
    Create an image tree with a matching empty save root.

    Layout::

        images/a.png
        images/notes.txt
        images/sub/b.png
        images/sub/c.png
        images/empty/readme.txt
    """
    image_root = tmp_path / "images"
    save_root = tmp_path / "saves"
    write_png(image_root / "a.png")
    write_png(image_root / "sub" / "b.png")
    write_png(image_root / "sub" / "c.png")
    (image_root / "notes.txt").write_text("not an image\n")
    (image_root / "empty").mkdir()
    (image_root / "empty" / "readme.txt").write_text("nothing here\n")
    save_root.mkdir()
    return image_root, save_root


@pytest.fixture
def sample_save_file(tmp_path):
    """Create a sample save file."""
    txt_path = tmp_path / "sample.txt"
    txt_path.write_text(
        "sub/b.png\n"
        "640,480\n"
        "2\n"
        "10.0,20.0,30.0,40.0,primary\n"
        "1.5,2.5,3.0,4.0,secondary\n"
    )
    return txt_path
