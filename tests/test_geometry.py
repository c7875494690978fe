"""Tests for image/view coordinate conversion."""

import pytest
from PyQt6.QtCore import QPointF

from frameit.core.exceptions import InvalidScaleError
from frameit.core.geometry import (
    ScaleState,
    compute_scale_ratio,
    compute_scale_state,
    image_bounds_in_view,
    point_to_image_space,
    point_to_view_space,
    to_image_space,
    to_view_space,
)
from frameit.core.models import Rectangle, RectKind


class TestScaleRatio:
    """Tests for compute_scale_ratio."""

    def test_shrinks_to_fit(self):
        """Test that a large image is shrunk by the tighter dimension."""
        assert compute_scale_ratio(2000, 1000, 1000, 800) == 0.5

    def test_grows_to_fit(self):
        """Test that a small image is enlarged."""
        assert compute_scale_ratio(100, 50, 400, 400) == 4.0

    def test_matching_dimension_gives_one(self):
        """Test that an exactly matching dimension pins the scale to 1."""
        assert compute_scale_ratio(800, 2000, 800, 600) == 1.0
        assert compute_scale_ratio(2000, 600, 800, 600) == 1.0

    def test_invalid_image_size(self):
        """Test that an empty image cannot be scaled."""
        with pytest.raises(InvalidScaleError):
            compute_scale_ratio(0, 100, 400, 400)


class TestScaleState:
    """Tests for compute_scale_state and conversions."""

    def test_centering_offsets(self):
        """Test that the image is centered in the container."""
        state = compute_scale_state(200, 100, 400, 400)

        assert state.scale == 2.0
        assert state.offset_x == 0.0
        assert state.offset_y == 100.0

    def test_rectangle_conversion(self):
        """Test converting a rectangle both ways."""
        state = ScaleState(scale=2.0, offset_x=10.0, offset_y=20.0)
        image_rect = Rectangle(5, 5, 10, 20, RectKind.SECONDARY)

        view_rect = to_view_space(image_rect, state)

        assert view_rect == Rectangle(20, 30, 20, 40, RectKind.SECONDARY)
        assert to_image_space(view_rect, state) == image_rect

    def test_point_conversion(self):
        """Test converting a point both ways."""
        state = ScaleState(scale=0.5, offset_x=4.0, offset_y=0.0)

        view = point_to_view_space(QPointF(10, 10), state)

        assert view == QPointF(9, 5)
        assert point_to_image_space(view, state) == QPointF(10, 10)

    def test_zero_scale_rejected(self):
        """Test that conversion without a valid scale raises."""
        state = ScaleState(scale=0.0)

        with pytest.raises(InvalidScaleError):
            to_view_space(Rectangle(0, 0, 1, 1), state)
        with pytest.raises(InvalidScaleError):
            point_to_image_space(QPointF(1, 1), state)

    def test_invalid_scale_is_value_error(self):
        """Test that scale errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            ScaleState(scale=-1.0).validate()

    def test_image_bounds(self):
        """Test the area covered by the displayed image."""
        state = compute_scale_state(200, 100, 400, 400)
        bounds = image_bounds_in_view(200, 100, state)

        assert bounds.x() == 0
        assert bounds.y() == 100
        assert bounds.width() == 400
        assert bounds.height() == 200
