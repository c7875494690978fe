"""Virtualized window over a large sorted directory listing."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from .listing import sort_entries
from .models import DirectoryEntry
from .scroll_indicator import ScrollIndicator

logger = logging.getLogger(__name__)

# Default pixel height of one list row
ITEM_HEIGHT = 30

# Absorbs rounding in fractions read back from the scroll indicator
FRACTION_EPSILON = 1e-9


class ListWindow(QObject):
    """
    Visible slice of a sorted entry sequence.

    Only ``window_size`` entries starting at ``window_start`` are visible.
    The window size is the number of whole rows that fit the available
    height, capped by the number of entries, and the start never goes past
    the point where the last entry is on the last row. A proportional
    scroll indicator is kept in step with the window.
    """

    window_changed = pyqtSignal()  # Visible slice changed
    selection_changed = pyqtSignal(object)  # Newly selected DirectoryEntry or None

    def __init__(self, item_height: int = ITEM_HEIGHT, available_height: int = 0) -> None:
        """
        Initialize an empty window.

        Args:
            item_height: Pixel height of one row
            available_height: Pixel height available for rows
        """
        super().__init__()
        if item_height <= 0:
            raise ValueError(f"Item height must be positive, got {item_height}")

        self.item_height = item_height
        self._entries: List[DirectoryEntry] = []
        self._window: List[DirectoryEntry] = []
        self._window_start = 0
        self._capacity = self._capacity_for(available_height)
        self._selected_index: Optional[int] = None
        self.indicator = ScrollIndicator(available_height)

    def _capacity_for(self, available_height: int) -> int:
        return max(0, int(available_height // self.item_height))

    # === State ===

    @property
    def entries(self) -> Tuple[DirectoryEntry, ...]:
        """All entries in sorted order."""
        return tuple(self._entries)

    @property
    def visible_entries(self) -> Tuple[DirectoryEntry, ...]:
        """Entries currently in the window."""
        return tuple(self._window)

    @property
    def window_start(self) -> int:
        """Index of the first visible entry."""
        return self._window_start

    @property
    def capacity(self) -> int:
        """Number of whole rows that fit the available height."""
        return self._capacity

    @property
    def window_size(self) -> int:
        """Number of visible entries."""
        return min(self._capacity, len(self._entries))

    @property
    def max_start(self) -> int:
        """Largest allowed window start."""
        return max(0, len(self._entries) - self.window_size)

    @property
    def indicator_ratio(self) -> float:
        """Visible fraction of the list, 1.0 when everything fits."""
        if not self._entries:
            return 1.0
        return self.window_size / len(self._entries)

    def is_scrollable(self) -> bool:
        """Check if some entries are outside the window."""
        return len(self._entries) > self._capacity

    def _fill_window(self, start: int) -> None:
        self._window_start = start
        self._window = self._entries[start:start + self.window_size]

    def _sync_indicator(self) -> None:
        if self.is_scrollable():
            self.indicator.set_ratio(self.indicator_ratio)
            self.indicator.set_fraction(self._window_start / len(self._entries))
        else:
            self.indicator.reset()

    # === Operations ===

    def rebuild(self, entries: Iterable[DirectoryEntry]) -> None:
        """
        Replace all entries and show the window from the top.

        Args:
            entries: New entries in any order
        """
        self._entries = sort_entries(entries)
        self._selected_index = None
        self._fill_window(0)
        self._sync_indicator()
        logger.debug(
            f"Rebuilt list window: {len(self._entries)} entries, {self.window_size} visible"
        )
        self.window_changed.emit()
        self.selection_changed.emit(None)

    def replace_entries(self, entries: Iterable[DirectoryEntry]) -> None:
        """
        Swap in refreshed entries keeping the scroll position and selection.

        Falls back to a rebuild if the entries are not the same set.

        Args:
            entries: Entries equal to the current ones, with new data
        """
        entries = sort_entries(entries)
        if entries != self._entries:
            self.rebuild(entries)
            return

        self._entries = entries
        self._fill_window(self._window_start)
        self.window_changed.emit()

    def resize(self, available_height: int) -> None:
        """
        Adapt the window to a new available height.

        A smaller window drops rows from its tail. A larger one takes more
        entries after its tail, then before its start once the end of the
        list is reached.

        Args:
            available_height: Pixel height available for rows
        """
        self._capacity = self._capacity_for(available_height)
        self.indicator.resize_track(available_height)

        if len(self._window) > self._capacity:
            del self._window[self._capacity:]
        elif len(self._window) < self._capacity:
            next_index = self._window_start + len(self._window)
            while len(self._window) < self._capacity and next_index < len(self._entries):
                self._window.append(self._entries[next_index])
                next_index += 1

            if len(self._window) < self.window_size:
                start = self.max_start
                self._window = self._entries[start:self._window_start] + self._window
                self._window_start = start

        if len(self._window) == len(self._entries):
            self._window_start = 0
            self.indicator.reset()
        else:
            self._sync_indicator()

        self.window_changed.emit()

    def _apply_fraction(self, fraction: float) -> bool:
        fraction = min(max(fraction, 0.0), 1.0)
        start = min(int(len(self._entries) * fraction + FRACTION_EPSILON), self.max_start)
        if start == self._window_start:
            return False

        self._fill_window(start)
        self.window_changed.emit()
        return True

    def scroll_to_fraction(self, fraction: float) -> bool:
        """
        Show the window starting at a fraction of the list.

        Args:
            fraction: Position in the list between 0 and 1

        Returns:
            True if the window moved
        """
        if self.is_scrollable():
            self.indicator.set_fraction(min(max(fraction, 0.0), 1.0))
        return self._apply_fraction(fraction)

    def drag_indicator_to(self, center: float) -> bool:
        """Move the indicator handle and scroll to match."""
        if not self.is_scrollable():
            return False
        return self._apply_fraction(self.indicator.set_center(center))

    def scroll_indicator_toward(self, position: float, amount: float) -> bool:
        """Step the indicator handle toward a track position and scroll to match."""
        if not self.is_scrollable():
            return False
        return self._apply_fraction(self.indicator.scroll_toward(position, amount))

    def scroll_by(self, pixels: float) -> bool:
        """Move the indicator handle by some pixels and scroll to match."""
        if not self.is_scrollable():
            return False
        return self._apply_fraction(self.indicator.scroll_by(pixels))

    def entry_at_offset(self, pixel_y: float) -> Optional[DirectoryEntry]:
        """
        Get the visible entry at a vertical pixel offset.

        Args:
            pixel_y: Offset from the top of the list

        Returns:
            Entry at that row, or None below the last row
        """
        if pixel_y < 0:
            return None
        index = int(pixel_y // self.item_height)
        if index < len(self._window):
            return self._window[index]
        return None

    # === Selection ===

    @property
    def selected(self) -> Optional[DirectoryEntry]:
        """Currently selected entry."""
        if self._selected_index is None:
            return None
        return self._entries[self._selected_index]

    def select(self, entry: Optional[DirectoryEntry]) -> bool:
        """
        Select an entry of the list.

        Args:
            entry: Entry to select; None leaves the selection unchanged

        Returns:
            True if the entry is now selected
        """
        if entry is None:
            return False
        try:
            index = self._entries.index(entry)
        except ValueError:
            logger.warning(f"Cannot select entry not in list: {entry.path}")
            return False

        if index != self._selected_index:
            self._selected_index = index
            self.selection_changed.emit(entry)
        return True

    def select_at_offset(self, pixel_y: float) -> Optional[DirectoryEntry]:
        """Select the visible entry at a vertical pixel offset."""
        entry = self.entry_at_offset(pixel_y)
        self.select(entry)
        return entry

    def select_next(self) -> Optional[DirectoryEntry]:
        """
        Select the entry after the current selection in the full list.

        Returns:
            The newly selected entry, or None if there is no selection or
            the selection is the last entry
        """
        if self._selected_index is None:
            return None
        next_index = self._selected_index + 1
        if next_index >= len(self._entries):
            return None

        entry = self._entries[next_index]
        self.select(entry)
        return entry

    def is_visible(self, entry: DirectoryEntry) -> bool:
        """Check if an entry is in the window."""
        return entry in self._window
