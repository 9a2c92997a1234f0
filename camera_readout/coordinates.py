"""
Image coordinate frame conversion.

Three frames describe a 2D location on the calibrated image:

    RELATIVE:    origin top-left, x right, y down, the image spans [0, 1]
                 on both axes.
    ABSOLUTE:    origin top-left, x right, y down, in pixels. The image spans
                 [0, width] x [0, height]. Pixel corners sit on integer
                 coordinates; no half-pixel offset is applied.
    IMAGE_PLANE: the solver's frame. Origin at the image centre, x right,
                 y up, and the longer image side spans [-1, 1]. The shorter
                 side spans [-1/aspect, 1/aspect] (landscape) or
                 [-aspect, aspect] (portrait), with aspect = width / height.

Conversions:
    ABSOLUTE <-> RELATIVE:    scale by (width, height)
    RELATIVE <-> IMAGE_PLANE: affine map above
    ABSOLUTE <-> IMAGE_PLANE: composed through RELATIVE
"""

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Tuple
import logging

from .exceptions import InvalidDimensionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point2D:
    """2D point. The coordinate frame is implied by where the point is used."""
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y


class ImageCoordinateFrame(Enum):
    IMAGE_PLANE = 'image_plane'
    ABSOLUTE = 'absolute'
    RELATIVE = 'relative'


def _check_dimension(name: str, value: float) -> None:
    if not (isinstance(value, numbers.Real) and math.isfinite(value) and value > 0):
        raise InvalidDimensionError(name, value)


def _absolute_to_relative(p: Point2D, width: float, height: float) -> Point2D:
    return Point2D(p.x / width, p.y / height)


def _relative_to_absolute(p: Point2D, width: float, height: float) -> Point2D:
    return Point2D(p.x * width, p.y * height)


def _relative_to_image_plane(p: Point2D, width: float, height: float) -> Point2D:
    aspect = width / height
    if aspect >= 1.0:
        # Landscape or square: x spans [-1, 1]
        return Point2D(2.0 * p.x - 1.0, (1.0 - 2.0 * p.y) / aspect)
    # Portrait: y spans [-1, 1]
    return Point2D((2.0 * p.x - 1.0) * aspect, 1.0 - 2.0 * p.y)


def _image_plane_to_relative(p: Point2D, width: float, height: float) -> Point2D:
    aspect = width / height
    if aspect >= 1.0:
        return Point2D(0.5 * (p.x + 1.0), 0.5 * (1.0 - p.y * aspect))
    return Point2D(0.5 * (p.x / aspect + 1.0), 0.5 * (1.0 - p.y))


def _image_plane_to_absolute(p: Point2D, width: float, height: float) -> Point2D:
    return _relative_to_absolute(_image_plane_to_relative(p, width, height), width, height)


def _absolute_to_image_plane(p: Point2D, width: float, height: float) -> Point2D:
    return _relative_to_image_plane(_absolute_to_relative(p, width, height), width, height)


_CONVERSIONS: Dict[Tuple[ImageCoordinateFrame, ImageCoordinateFrame],
                   Callable[[Point2D, float, float], Point2D]] = {
    (ImageCoordinateFrame.ABSOLUTE, ImageCoordinateFrame.RELATIVE): _absolute_to_relative,
    (ImageCoordinateFrame.RELATIVE, ImageCoordinateFrame.ABSOLUTE): _relative_to_absolute,
    (ImageCoordinateFrame.RELATIVE, ImageCoordinateFrame.IMAGE_PLANE): _relative_to_image_plane,
    (ImageCoordinateFrame.IMAGE_PLANE, ImageCoordinateFrame.RELATIVE): _image_plane_to_relative,
    (ImageCoordinateFrame.IMAGE_PLANE, ImageCoordinateFrame.ABSOLUTE): _image_plane_to_absolute,
    (ImageCoordinateFrame.ABSOLUTE, ImageCoordinateFrame.IMAGE_PLANE): _absolute_to_image_plane,
}


def convert(
    point: Point2D,
    from_frame: ImageCoordinateFrame,
    to_frame: ImageCoordinateFrame,
    image_width: float,
    image_height: float,
) -> Point2D:
    """
    Convert a point between image coordinate frames.

    Args:
        point: Point expressed in from_frame
        from_frame: Frame of the input point
        to_frame: Requested frame
        image_width: Image width in pixels (> 0)
        image_height: Image height in pixels (> 0)

    Returns:
        The point expressed in to_frame. The input is returned unchanged
        when both frames are equal.

    Raises:
        InvalidDimensionError: If a dimension is zero, negative or not finite
    """
    if from_frame == to_frame:
        return point

    _check_dimension('image_width', image_width)
    _check_dimension('image_height', image_height)

    result = _CONVERSIONS[(from_frame, to_frame)](point, image_width, image_height)
    logger.debug(
        f"Converted ({point.x}, {point.y}) {from_frame.value} -> "
        f"({result.x}, {result.y}) {to_frame.value} for {image_width}x{image_height}"
    )
    return result
