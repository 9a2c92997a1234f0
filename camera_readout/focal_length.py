"""
Absolute focal length from a relative focal length and a sensor size.

The solver expresses the focal length relative to half the longer side of
the image plane (the IMAGE_PLANE frame spans [-1, 1] along that side). To
get a physical value the same side of the sensor has to be used:

    wide sensor (width > height):  f_abs = 0.5 * sensor_width  * f_rel
    tall sensor (width < height):  f_abs = 0.5 * sensor_height * f_rel

A square sensor gives the same value either way. A sensor height of zero
is treated as aspect ratio 1 and resolves to the width branch.
"""

from dataclasses import dataclass
from typing import Tuple
import logging

from .exceptions import InvalidDimensionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SensorSize:
    """Physical sensor dimensions in millimetres."""
    width: float
    height: float

    def as_tuple(self) -> Tuple[float, float]:
        return self.width, self.height


def sensor_aspect_ratio(sensor_width: float, sensor_height: float) -> float:
    """Width over height, or 1 when the height is not positive."""
    if sensor_height > 0:
        return sensor_width / sensor_height
    logger.warning(f"Sensor height {sensor_height} is not positive, assuming square sensor")
    return 1.0


def _uses_width(sensor_width: float, sensor_height: float) -> bool:
    return sensor_aspect_ratio(sensor_width, sensor_height) >= 1.0


def absolute_focal_length(
    relative_focal_length: float,
    sensor_width: float,
    sensor_height: float,
) -> float:
    """
    Compute the absolute focal length in sensor units (usually mm).

    Args:
        relative_focal_length: Focal length relative to half the longer image side
        sensor_width: Sensor width
        sensor_height: Sensor height

    Returns:
        Absolute focal length in the unit of the sensor dimensions
    """
    if _uses_width(sensor_width, sensor_height):
        return 0.5 * sensor_width * relative_focal_length
    return 0.5 * sensor_height * relative_focal_length


def relative_focal_length(
    focal_length: float,
    sensor_width: float,
    sensor_height: float,
) -> float:
    """
    Inverse of absolute_focal_length.

    Raises:
        InvalidDimensionError: If the selected sensor dimension is not positive
    """
    if _uses_width(sensor_width, sensor_height):
        name, size = 'sensor_width', sensor_width
    else:
        name, size = 'sensor_height', sensor_height

    if size <= 0:
        raise InvalidDimensionError(name, size)

    return focal_length / (0.5 * size)
