"""
Result presentation.

Turns a solver result plus the chosen display settings into the values the
result panel shows:
    1. Image size
    2. Field of view (degrees or radians)
    3. Camera position
    4. Orientation (axis-angle in degrees/radians, or quaternion)
    5. Principal point (absolute pixels or relative)
    6. Absolute focal length (when the calibration mode provides one)

Each format category is dispatched through a table keyed by its enum. The
tables are checked at import time to cover every member, so a new format
cannot fall through to a default.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type
import logging

from .camera_presets import resolve_sensor_size
from .config import (
    CalibrationMode,
    CameraData,
    FieldOfViewFormat,
    GlobalSettings,
    OrientationFormat,
    PrincipalPointFormat,
    ReadoutConfig,
    ResultDisplaySettings,
)
from .coordinates import ImageCoordinateFrame, Point2D, convert
from .focal_length import SensorSize, absolute_focal_length
from .math_util import Transform, matrix_to_axis_angle, matrix_to_quaternion
from .solver_result import CameraParameters, SolverResult

logger = logging.getLogger(__name__)


def _axis_angle_degrees(transform: Transform) -> Tuple[float, float, float, float]:
    x, y, z, angle = matrix_to_axis_angle(transform)
    return x, y, z, angle * 180.0 / math.pi


FIELD_OF_VIEW_FACTORS: Mapping[FieldOfViewFormat, float] = {
    FieldOfViewFormat.DEGREES: 180.0 / math.pi,
    FieldOfViewFormat.RADIANS: 1.0,
}

ORIENTATION_CONVERTERS: Mapping[OrientationFormat, Callable[[Transform], Tuple[float, ...]]] = {
    OrientationFormat.AXIS_ANGLE_DEGREES: _axis_angle_degrees,
    OrientationFormat.AXIS_ANGLE_RADIANS: matrix_to_axis_angle,
    OrientationFormat.QUATERNION: matrix_to_quaternion,
}

ORIENTATION_LABELS: Mapping[OrientationFormat, Tuple[str, str, str, str]] = {
    OrientationFormat.AXIS_ANGLE_DEGREES: ('x', 'y', 'z', 'Angle'),
    OrientationFormat.AXIS_ANGLE_RADIANS: ('x', 'y', 'z', 'Angle'),
    OrientationFormat.QUATERNION: ('x', 'y', 'z', 'w'),
}

PRINCIPAL_POINT_FRAMES: Mapping[PrincipalPointFormat, ImageCoordinateFrame] = {
    PrincipalPointFormat.ABSOLUTE: ImageCoordinateFrame.ABSOLUTE,
    PrincipalPointFormat.RELATIVE: ImageCoordinateFrame.RELATIVE,
}

# Whether the solve constrains the focal length in each mode
FOCAL_LENGTH_AVAILABLE: Mapping[CalibrationMode, bool] = {
    CalibrationMode.ONE_VANISHING_POINT: False,
    CalibrationMode.TWO_VANISHING_POINTS: True,
}


def check_dispatch_table(enum_cls: Type[Enum], table: Mapping) -> None:
    """
    Ensure a dispatch table handles every member of an enum.

    Raises:
        RuntimeError: If members are missing
    """
    missing = [m.name for m in enum_cls if m not in table]
    if missing:
        raise RuntimeError(f"No handler for {enum_cls.__name__} members: {', '.join(missing)}")


check_dispatch_table(FieldOfViewFormat, FIELD_OF_VIEW_FACTORS)
check_dispatch_table(OrientationFormat, ORIENTATION_CONVERTERS)
check_dispatch_table(OrientationFormat, ORIENTATION_LABELS)
check_dispatch_table(PrincipalPointFormat, PRINCIPAL_POINT_FRAMES)
check_dispatch_table(CalibrationMode, FOCAL_LENGTH_AVAILABLE)


@dataclass(frozen=True)
class OrientationReadout:
    """Four orientation components and their row labels."""
    format: OrientationFormat
    components: Tuple[float, float, float, float]
    labels: Tuple[str, str, str, str]


@dataclass(frozen=True)
class FocalLengthReadout:
    """
    Absolute focal length.

    available is False when the calibration mode does not constrain the
    focal length; value and sensor_size are then None.
    """
    available: bool
    value: Optional[float] = None
    sensor_size: Optional[SensorSize] = None
    preset_id: Optional[str] = None

    @classmethod
    def unavailable(cls) -> "FocalLengthReadout":
        return cls(available=False)


@dataclass(frozen=True)
class PresentedResult:
    """Ready-to-display values. Numeric fields are None for a failed solve."""
    errors: Tuple[str, ...] = field(default_factory=tuple)
    warnings: Tuple[str, ...] = field(default_factory=tuple)
    image_size: Optional[Tuple[float, float]] = None
    field_of_view_format: Optional[FieldOfViewFormat] = None
    field_of_view: Optional[Tuple[float, float]] = None
    camera_position: Optional[Tuple[float, float, float]] = None
    orientation: Optional[OrientationReadout] = None
    principal_point_format: Optional[PrincipalPointFormat] = None
    principal_point: Optional[Point2D] = None
    focal_length: Optional[FocalLengthReadout] = None

    @property
    def has_camera(self) -> bool:
        return self.image_size is not None

    def as_dict(self) -> Dict[str, Any]:
        """Plain dictionary for renderers and JSON output."""
        data: Dict[str, Any] = {
            'errors': list(self.errors),
            'warnings': list(self.warnings),
        }
        if not self.has_camera:
            return data

        data['image'] = {'width': self.image_size[0], 'height': self.image_size[1]}
        data['field_of_view'] = {
            'format': self.field_of_view_format.value,
            'horizontal': self.field_of_view[0],
            'vertical': self.field_of_view[1],
        }
        data['camera_position'] = dict(zip(('x', 'y', 'z'), self.camera_position))
        data['orientation'] = {
            'format': self.orientation.format.value,
            **{label.lower(): value
               for label, value in zip(self.orientation.labels, self.orientation.components)},
        }
        data['principal_point'] = {
            'format': self.principal_point_format.value,
            'x': self.principal_point.x,
            'y': self.principal_point.y,
        }
        if self.focal_length.available:
            data['focal_length'] = {
                'value': self.focal_length.value,
                'sensor_width': self.focal_length.sensor_size.width,
                'sensor_height': self.focal_length.sensor_size.height,
                'preset_id': self.focal_length.preset_id,
            }
        else:
            data['focal_length'] = None
        return data


def present_field_of_view(
    params: CameraParameters, fmt: FieldOfViewFormat
) -> Tuple[float, float]:
    """(horizontal, vertical) field of view in the requested unit."""
    factor = FIELD_OF_VIEW_FACTORS[fmt]
    return (
        factor * params.horizontal_field_of_view,
        factor * params.vertical_field_of_view,
    )


def present_camera_position(params: CameraParameters) -> Tuple[float, float, float]:
    x, y, z = params.transform.translation
    return float(x), float(y), float(z)


def present_orientation(transform: Transform, fmt: OrientationFormat) -> OrientationReadout:
    """
    Orientation components in the requested format.

    Axis-angle formats return (x, y, z, angle); only the angle is affected
    by the degree/radian choice. The quaternion format returns (x, y, z, w).
    """
    components = ORIENTATION_CONVERTERS[fmt](transform)
    return OrientationReadout(
        format=fmt,
        components=tuple(components),
        labels=ORIENTATION_LABELS[fmt],
    )


def present_principal_point(params: CameraParameters, fmt: PrincipalPointFormat) -> Point2D:
    """Principal point converted from the IMAGE_PLANE frame to the display frame."""
    return convert(
        params.principal_point,
        ImageCoordinateFrame.IMAGE_PLANE,
        PRINCIPAL_POINT_FRAMES[fmt],
        params.image_width,
        params.image_height,
    )


def present_focal_length(
    params: CameraParameters,
    camera_data: CameraData,
    global_settings: GlobalSettings,
) -> FocalLengthReadout:
    """
    Absolute focal length for the selected sensor.

    Raises:
        PresetNotFoundError: If camera_data names an unknown preset
    """
    if not FOCAL_LENGTH_AVAILABLE[global_settings.calibration_mode]:
        logger.debug(f"Focal length not available in {global_settings.calibration_mode.value} mode")
        return FocalLengthReadout.unavailable()

    sensor = resolve_sensor_size(camera_data)
    value = absolute_focal_length(params.relative_focal_length, sensor.width, sensor.height)
    return FocalLengthReadout(
        available=True,
        value=value,
        sensor_size=sensor,
        preset_id=camera_data.preset_id or None,
    )


def present_result(
    solver_result: SolverResult,
    display: Optional[ResultDisplaySettings] = None,
    camera_data: Optional[CameraData] = None,
    global_settings: Optional[GlobalSettings] = None,
) -> PresentedResult:
    """
    Compute every displayed value for a solver result.

    Args:
        solver_result: Output of the solver
        display: Chosen formats (defaults if None)
        camera_data: Sensor selection (defaults if None)
        global_settings: Calibration mode (defaults if None)

    Returns:
        PresentedResult. For a failed solve only errors and warnings are set.
    """
    display = display or ResultDisplaySettings()
    camera_data = camera_data or CameraData()
    global_settings = global_settings or GlobalSettings()

    params = solver_result.camera_parameters
    if params is None:
        logger.info(f"No camera parameters to present ({len(solver_result.errors)} errors)")
        return PresentedResult(errors=solver_result.errors, warnings=solver_result.warnings)

    return PresentedResult(
        errors=solver_result.errors,
        warnings=solver_result.warnings,
        image_size=(params.image_width, params.image_height),
        field_of_view_format=display.field_of_view_format,
        field_of_view=present_field_of_view(params, display.field_of_view_format),
        camera_position=present_camera_position(params),
        orientation=present_orientation(params.transform, display.orientation_format),
        principal_point_format=display.principal_point_format,
        principal_point=present_principal_point(params, display.principal_point_format),
        focal_length=present_focal_length(params, camera_data, global_settings),
    )


class ResultPresenter:
    """
    Presents solver results with a fixed set of settings.

    Example usage:
        config = ReadoutConfig.from_yaml("settings.yaml")
        presenter = ResultPresenter(config)
        readout = presenter.present(solver_result)
    """

    def __init__(self, config: Optional[ReadoutConfig] = None):
        self.config = config or ReadoutConfig()
        logger.debug(f"Presenter initialized with {self.config.display}")

    def present(self, solver_result: SolverResult) -> PresentedResult:
        return present_result(
            solver_result,
            display=self.config.display,
            camera_data=self.config.camera_data,
            global_settings=self.config.global_settings,
        )
