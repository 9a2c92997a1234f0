"""
Camera Parameter Readout Package

Derives the values shown for a solved camera in a calibration result panel:
field of view, camera position, orientation, principal point and absolute
focal length, each in the format chosen by the user.

Data Flow:
    SolverResult + ResultDisplaySettings + CameraData → PresentedResult

Conventions:
    - Transform: 4x4 matrix, rotation in the upper-left 3x3 block,
      camera position in the last column
    - Field of view stored in radians
    - Principal point stored in the IMAGE_PLANE frame (centre origin, y up,
      longer side spanning [-1, 1])
    - Relative focal length relative to half the longer image side
    - Quaternions ordered (x, y, z, w)
"""

from .exceptions import CameraReadoutError, GeometryError, InvalidDimensionError, PresetNotFoundError
from .math_util import Transform, matrix_to_axis_angle, matrix_to_quaternion, validate_rotation_matrix
from .coordinates import ImageCoordinateFrame, Point2D, convert
from .focal_length import SensorSize, absolute_focal_length, relative_focal_length
from .camera_presets import CameraPreset, CAMERA_PRESETS, get_camera_preset, resolve_sensor_size
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
from .solver_result import CameraParameters, SolverResult
from .presentation import (
    FocalLengthReadout,
    OrientationReadout,
    PresentedResult,
    ResultPresenter,
    present_result,
)

__version__ = "1.0.0"
__all__ = [
    "CameraReadoutError",
    "GeometryError",
    "InvalidDimensionError",
    "PresetNotFoundError",
    "Transform",
    "matrix_to_axis_angle",
    "matrix_to_quaternion",
    "validate_rotation_matrix",
    "ImageCoordinateFrame",
    "Point2D",
    "convert",
    "SensorSize",
    "absolute_focal_length",
    "relative_focal_length",
    "CameraPreset",
    "CAMERA_PRESETS",
    "get_camera_preset",
    "resolve_sensor_size",
    "CalibrationMode",
    "CameraData",
    "FieldOfViewFormat",
    "GlobalSettings",
    "OrientationFormat",
    "PrincipalPointFormat",
    "ReadoutConfig",
    "ResultDisplaySettings",
    "CameraParameters",
    "SolverResult",
    "FocalLengthReadout",
    "OrientationReadout",
    "PresentedResult",
    "ResultPresenter",
    "present_result",
]
