"""Application bootstrap for FrameIt."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from PyQt6.QtWidgets import QApplication

from . import __version__
from .core.config import DEFAULT_CONFIG_PATH, ConfigManager
from .ui.main_window import MainWindow

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Arguments without the program name, defaults to sys.argv

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="frameit",
        description="Frame objects in images with bounding boxes."
    )
    parser.add_argument("--images", type=Path, help="Image directory (overrides config)")
    parser.add_argument("--saves", type=Path, help="Save directory (overrides config)")
    parser.add_argument(
        "--config", type=Path, default=DEFAULT_CONFIG_PATH,
        help=f"Configuration file (default: {DEFAULT_CONFIG_PATH})"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def create_application(argv: Optional[List[str]] = None) -> QApplication:
    """
    Create and configure the Qt application.

    Returns:
        Configured QApplication instance
    """
    app = QApplication(argv if argv is not None else sys.argv)
    app.setApplicationName("FrameIt")
    app.setApplicationVersion(__version__)
    app.setOrganizationName("FrameIt")
    return app


def create_main_window(args: argparse.Namespace) -> MainWindow:
    """
    Create the main application window.

    Args:
        args: Parsed command line arguments

    Returns:
        MainWindow instance
    """
    config_manager = ConfigManager(args.config)
    config_manager.write_defaults_if_missing()
    image_root, save_root = config_manager.config.resolve_directories(Path.cwd())
    if args.images is not None:
        image_root = args.images
    if args.saves is not None:
        save_root = args.saves

    image_root = Path(image_root).resolve()
    save_root = Path(save_root).resolve()
    logger.info(f"Images: {image_root}, saves: {save_root}")
    return MainWindow(image_root, save_root, config_manager)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the FrameIt application.

    Returns:
        Exit code
    """
    args = parse_args(argv)
    logger.info("Starting FrameIt")

    try:
        app = create_application()
        logger.info("QApplication created")

        window = create_main_window(args)
        logger.info("MainWindow created")

        window.show()
        logger.info("MainWindow shown")

        return app.exec()

    except Exception as e:
        logger.error(f"Application error: {e}", exc_info=True)
        return 1


def main() -> None:
    """Main entry point for the application."""
    sys.exit(run())


if __name__ == "__main__":
    main()
