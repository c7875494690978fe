"""Tests for the proportional scroll indicator."""

import pytest

from frameit.core.scroll_indicator import ScrollIndicator


@pytest.fixture
def indicator():
    """Indicator on a 100 pixel track showing a quarter of the list."""
    indicator = ScrollIndicator(100)
    indicator.set_ratio(0.25)
    return indicator


class TestScrollIndicator:
    """Tests for ScrollIndicator."""

    def test_hidden_by_default(self):
        """Test that a new indicator has no handle."""
        indicator = ScrollIndicator(100)

        assert not indicator.visible
        assert indicator.bar_length == 0.0
        assert indicator.fraction == 0.0

    def test_set_ratio_moves_to_top(self, indicator):
        """Test that resizing the handle puts it at the top."""
        assert indicator.visible
        assert indicator.bar_length == 25.0
        assert indicator.center == 12.5
        assert indicator.top == 0.0
        assert indicator.fraction == 0.0

    def test_full_ratio_hidden(self):
        """Test that a handle covering the whole track is hidden."""
        indicator = ScrollIndicator(100)
        indicator.set_ratio(1.0)

        assert not indicator.visible
        assert indicator.bar_length == 0.0

    def test_center_clamped_to_track(self, indicator):
        """Test that the handle never leaves the track."""
        assert indicator.set_center(1000) == pytest.approx(0.75)
        assert indicator.center == 87.5

        assert indicator.set_center(-50) == 0.0
        assert indicator.center == 12.5

    def test_fraction_round_trip(self, indicator):
        """Test that setting a fraction positions the handle for it."""
        assert indicator.set_fraction(0.5) == pytest.approx(0.5)
        assert indicator.center == pytest.approx(62.5)

    def test_scroll_toward(self, indicator):
        """Test stepping toward a click position."""
        indicator.set_fraction(0.5)

        assert indicator.scroll_toward(0, 10) == pytest.approx(0.4)
        assert indicator.scroll_toward(100, 10) == pytest.approx(0.5)

    def test_scroll_by(self, indicator):
        """Test moving the handle by pixels."""
        assert indicator.scroll_by(20) == pytest.approx(0.2)

    def test_contains(self, indicator):
        """Test hit testing the handle."""
        indicator.set_fraction(0.5)

        assert indicator.contains(60)
        assert not indicator.contains(5)

    def test_resize_track_keeps_fraction(self, indicator):
        """Test that a new track length keeps the list position."""
        indicator.set_fraction(0.4)

        assert indicator.resize_track(200) == pytest.approx(0.4)
        assert indicator.bar_length == 50.0

    def test_reset(self, indicator):
        """Test hiding the handle."""
        indicator.set_fraction(0.5)
        indicator.reset()

        assert not indicator.visible
        assert indicator.fraction == 0.0
