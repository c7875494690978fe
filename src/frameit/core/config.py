"""Configuration management for FrameIt."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

# Default configuration file path
DEFAULT_CONFIG_PATH = Path("config.yaml")


@dataclass
class AppConfig:
    """
    Application configuration settings.

    Relative directories are resolved against the working directory.
    """

    image_directory: str = "images"
    save_directory: str = "saves"
    item_height: int = 30  # Pixel height of a file browser row
    min_rect_area: int = 15  # Minimum drawn rectangle area in screen pixels
    scroll_step: int = 10  # Pixels the scroll handle moves per wheel notch or track click
    side_panel_fraction: float = 1 / 6  # Width share of the file browser and of the control panel
    window_fraction: float = 0.9  # Initial window size as a share of the screen
    persist_rect_kind: bool = True  # Write the primary/secondary token to save files

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            "imageDirectory": self.image_directory,
            "saveDirectory": self.save_directory,
            "itemHeight": self.item_height,
            "minRectArea": self.min_rect_area,
            "scrollStep": self.scroll_step,
            "sidePanelFraction": self.side_panel_fraction,
            "windowFraction": self.window_fraction,
            "persistRectKind": self.persist_rect_kind,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        """Create config from dictionary."""
        return cls(
            image_directory=data.get("imageDirectory", "images"),
            save_directory=data.get("saveDirectory", "saves"),
            item_height=data.get("itemHeight", 30),
            min_rect_area=data.get("minRectArea", 15),
            scroll_step=data.get("scrollStep", 10),
            side_panel_fraction=data.get("sidePanelFraction", 1 / 6),
            window_fraction=data.get("windowFraction", 0.9),
            persist_rect_kind=data.get("persistRectKind", True),
        )

    def resolve_directories(self, base: Path) -> Tuple[Path, Path]:
        """
        Resolve the image and save directories.

        Args:
            base: Directory that relative paths are relative to

        Returns:
            Tuple of (image directory, save directory)
        """
        base = Path(base)
        return (
            base / Path(self.image_directory).expanduser(),
            base / Path(self.save_directory).expanduser(),
        )


class ConfigManager:
    """
    Reads and writes the YAML configuration file.

    A missing file is written with the defaults on first start so it can be
    edited by hand afterwards.
    """

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> AppConfig:
        """Current configuration, loaded on first access."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> AppConfig:
        """
        Load configuration from file.

        Missing or unreadable files give the defaults.

        Returns:
            AppConfig instance with loaded or default values
        """
        if not self.config_path.exists():
            logger.info(f"Config file not found at {self.config_path}, using defaults")
            return AppConfig()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading config {self.config_path}: {e}")
            return AppConfig()

        if not isinstance(data, dict):
            logger.error(f"Config {self.config_path} is not a mapping, using defaults")
            return AppConfig()

        logger.info(f"Loaded configuration from {self.config_path}")
        return AppConfig.from_dict(data)

    def save(self) -> bool:
        """
        Write the current configuration to file.

        Returns:
            True if the file was written
        """
        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                yaml.dump(self.config.to_dict(), f, default_flow_style=False)
        except OSError as e:
            logger.error(f"Error saving config {self.config_path}: {e}")
            return False

        logger.info(f"Saved configuration to {self.config_path}")
        return True

    def write_defaults_if_missing(self) -> bool:
        """
        Create the configuration file from the current settings if it is missing.

        Returns:
            True if a new file was written
        """
        if self.config_path.exists():
            return False
        return self.save()
