"""Conversion between image space and view space."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from PyQt6.QtCore import QPointF, QRectF

from .exceptions import InvalidScaleError
from .models import Rectangle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaleState:
    """
    Display transform of an image inside its container.

    A view-space coordinate is ``image * scale + offset``.
    """

    scale: float
    offset_x: float = 0.0
    offset_y: float = 0.0

    def validate(self) -> None:
        """Raise InvalidScaleError unless the scale is positive."""
        if not self.scale > 0:
            raise InvalidScaleError(
                f"Scale must be positive, got {self.scale}; is an image loaded?"
            )


def compute_scale_ratio(
    image_width: int,
    image_height: int,
    container_width: int,
    container_height: int
) -> float:
    """
    Find the scale that fits an image inside its container.

    If either image dimension exactly equals the container dimension the
    scale is 1, even when the other dimension would not fit.

    Args:
        image_width: Image width in pixels
        image_height: Image height in pixels
        container_width: Available width in pixels
        container_height: Available height in pixels

    Returns:
        Scale to multiply the image dimensions by
    """
    if image_width <= 0 or image_height <= 0:
        raise InvalidScaleError(
            f"Image dimensions must be positive, got {image_width}x{image_height}"
        )

    if image_width == container_width or image_height == container_height:
        return 1.0

    return min(container_width / image_width, container_height / image_height)


def compute_scale_state(
    image_width: int,
    image_height: int,
    container_width: int,
    container_height: int
) -> ScaleState:
    """
    Compute the scale and centering offsets of an image in a container.

    Args:
        image_width: Image width in pixels
        image_height: Image height in pixels
        container_width: Available width in pixels
        container_height: Available height in pixels

    Returns:
        ScaleState for the current container size
    """
    scale = compute_scale_ratio(image_width, image_height, container_width, container_height)
    state = ScaleState(
        scale=scale,
        offset_x=(container_width - image_width * scale) / 2,
        offset_y=(container_height - image_height * scale) / 2,
    )
    state.validate()
    logger.debug(
        f"Scale state for {image_width}x{image_height} in "
        f"{container_width}x{container_height}: {state}"
    )
    return state


def to_view_space(rect: Rectangle, state: ScaleState) -> Rectangle:
    """Convert an image-space rectangle to view space."""
    state.validate()
    return replace(
        rect,
        x=rect.x * state.scale + state.offset_x,
        y=rect.y * state.scale + state.offset_y,
        width=rect.width * state.scale,
        height=rect.height * state.scale,
    )


def to_image_space(rect: Rectangle, state: ScaleState) -> Rectangle:
    """Convert a view-space rectangle to image space."""
    state.validate()
    return replace(
        rect,
        x=(rect.x - state.offset_x) / state.scale,
        y=(rect.y - state.offset_y) / state.scale,
        width=rect.width / state.scale,
        height=rect.height / state.scale,
    )


def point_to_view_space(point: QPointF, state: ScaleState) -> QPointF:
    """Convert an image-space point to view space."""
    state.validate()
    return QPointF(
        point.x() * state.scale + state.offset_x,
        point.y() * state.scale + state.offset_y
    )


def point_to_image_space(point: QPointF, state: ScaleState) -> QPointF:
    """Convert a view-space point to image space."""
    state.validate()
    return QPointF(
        (point.x() - state.offset_x) / state.scale,
        (point.y() - state.offset_y) / state.scale
    )


def image_bounds_in_view(image_width: int, image_height: int, state: ScaleState) -> QRectF:
    """
    Get the area the scaled image occupies in view space.

    Args:
        image_width: Image width in pixels
        image_height: Image height in pixels
        state: Current scale state

    Returns:
        Rectangle covered by the displayed image
    """
    state.validate()
    return QRectF(
        state.offset_x,
        state.offset_y,
        image_width * state.scale,
        image_height * state.scale
    )
