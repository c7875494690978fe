"""Proportional scroll indicator geometry."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ScrollIndicator:
    """
    Position and size of a scroll bar handle along a track.

    The handle length is ``ratio * track_length``; its center is kept far
    enough from both ends that the whole handle stays on the track. The
    handle is hidden when the ratio is 0 or covers the whole track.
    """

    def __init__(self, track_length: float = 0.0) -> None:
        """
        Initialize a hidden indicator at the top of the track.

        Args:
            track_length: Length of the track in pixels
        """
        self.track_length = max(0.0, float(track_length))
        self._ratio = 0.0
        self._center = 0.0

    @property
    def ratio(self) -> float:
        """Visible fraction of the list."""
        return self._ratio

    @property
    def visible(self) -> bool:
        """Whether the handle is drawn at all."""
        return 0.0 < self._ratio < 1.0

    @property
    def bar_length(self) -> float:
        """Length of the handle, 0 when hidden."""
        if not self.visible:
            return 0.0
        return self.track_length * self._ratio

    @property
    def center(self) -> float:
        """Center position of the handle."""
        return self._center

    @property
    def fraction(self) -> float:
        """Position of the handle's leading edge as a fraction of the track."""
        if self.track_length <= 0:
            return 0.0
        return (self._center - self.bar_length / 2) / self.track_length

    @property
    def top(self) -> float:
        """Leading edge of the handle."""
        return self._center - self.bar_length / 2

    def center_for_fraction(self, fraction: float) -> float:
        """Handle center that corresponds to a list fraction."""
        return fraction * self.track_length + self.bar_length / 2

    def set_ratio(self, ratio: float) -> None:
        """
        Resize the handle and move it back to the top of the track.

        Args:
            ratio: Visible fraction of the list
        """
        self._ratio = max(0.0, float(ratio))
        self._center = self.bar_length / 2

    def reset(self) -> None:
        """Hide the handle and move it to the top."""
        self.set_ratio(0.0)

    def set_center(self, center: float) -> float:
        """
        Move the handle, clamped to the track.

        Args:
            center: Requested center position

        Returns:
            The resulting list fraction
        """
        half = self.bar_length / 2
        self._center = min(max(center, half), max(half, self.track_length - half))
        return self.fraction

    def set_fraction(self, fraction: float) -> float:
        """Move the handle to a list fraction."""
        return self.set_center(self.center_for_fraction(fraction))

    def scroll_by(self, amount: float) -> float:
        """Move the handle by a number of pixels."""
        return self.set_center(self._center + amount)

    def scroll_toward(self, position: float, amount: float) -> float:
        """Move the handle a step toward a position on the track."""
        if position > self._center:
            return self.set_center(self._center + amount)
        if position < self._center:
            return self.set_center(self._center - amount)
        return self.fraction

    def resize_track(self, track_length: float) -> float:
        """
        Change the track length keeping the handle at the same fraction.

        Args:
            track_length: New track length in pixels

        Returns:
            The resulting list fraction
        """
        fraction = self.fraction
        self.track_length = max(0.0, float(track_length))
        return self.set_fraction(fraction)

    def contains(self, position: float) -> bool:
        """Check if a track position lies on the handle."""
        if not self.visible:
            return False
        half = self.bar_length / 2
        return self._center - half <= position <= self._center + half
