"""Mode toggles and history buttons for the image editor."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QButtonGroup, QPushButton, QVBoxLayout, QWidget

from ..core.models import RectKind

logger = logging.getLogger(__name__)


class EditMode(str, Enum):
    """What a click on the image does."""

    NONE = "none"
    DRAW_PRIMARY = "draw_primary"
    DRAW_SECONDARY = "draw_secondary"
    DELETE = "delete"

    @property
    def rect_kind(self) -> Optional[RectKind]:
        """Kind of rectangle drawn in this mode, None if the mode does not draw."""
        if self == EditMode.DRAW_PRIMARY:
            return RectKind.PRIMARY
        if self == EditMode.DRAW_SECONDARY:
            return RectKind.SECONDARY
        return None


MODE_LABELS = {
    EditMode.DRAW_PRIMARY: "Draw Primary",
    EditMode.DRAW_SECONDARY: "Draw Secondary",
    EditMode.DELETE: "Delete",
}


class ControlPanel(QWidget):
    """
    Column of editor controls.

    At most one mode toggle is checked at a time; clicking the checked
    toggle again leaves no mode active.
    """

    mode_changed = pyqtSignal(object)  # EditMode
    undo_requested = pyqtSignal()
    redo_requested = pyqtSignal()
    clear_requested = pyqtSignal()
    save_requested = pyqtSignal()
    save_and_proceed_requested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        """
        Initialize the control panel.

        Args:
            parent: Parent widget
        """
        super().__init__(parent)
        self._mode = EditMode.NONE
        self._mode_buttons: Dict[EditMode, QPushButton] = {}
        self._init_ui()

    def _init_ui(self) -> None:
        """Initialize the user interface."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self._mode_group = QButtonGroup(self)
        self._mode_group.setExclusive(False)
        for mode, label in MODE_LABELS.items():
            button = QPushButton(label)
            button.setCheckable(True)
            self._mode_group.addButton(button)
            self._mode_buttons[mode] = button
            layout.addWidget(button)
        self._mode_group.buttonClicked.connect(self._on_mode_clicked)

        layout.addSpacing(12)

        self.undo_button = self._add_button(layout, "Undo", self.undo_requested)
        self.redo_button = self._add_button(layout, "Redo", self.redo_requested)
        self.clear_button = self._add_button(layout, "Clear", self.clear_requested)
        self.save_button = self._add_button(layout, "Save", self.save_requested)
        self.save_proceed_button = self._add_button(
            layout, "Save and Proceed", self.save_and_proceed_requested
        )

        layout.addStretch()
        self.set_history_state(False, False)

    def _add_button(self, layout: QVBoxLayout, label: str, signal) -> QPushButton:
        button = QPushButton(label)
        button.clicked.connect(signal.emit)
        layout.addWidget(button)
        return button

    @property
    def mode(self) -> EditMode:
        """Currently active mode."""
        return self._mode

    def set_mode(self, mode: EditMode) -> None:
        """
        Activate a mode and update the toggles.

        Args:
            mode: Mode to activate
        """
        for button_mode, button in self._mode_buttons.items():
            button.setChecked(button_mode == mode)

        if mode != self._mode:
            self._mode = mode
            logger.debug(f"Edit mode: {mode.value}")
            self.mode_changed.emit(mode)

    def _on_mode_clicked(self, clicked: QPushButton) -> None:
        """Handle a click on one of the mode toggles."""
        for mode, button in self._mode_buttons.items():
            if button is clicked:
                self.set_mode(mode if clicked.isChecked() else EditMode.NONE)
                return

    def set_history_state(self, can_undo: bool, can_redo: bool) -> None:
        """Enable or disable the undo and redo buttons."""
        self.undo_button.setEnabled(can_undo)
        self.redo_button.setEnabled(can_redo)
