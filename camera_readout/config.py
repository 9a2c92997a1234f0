"""
Display settings and camera data for the result readout.

Handles the user-selected formats and the sensor selection, and loading
them from YAML files.
"""

import yaml
from pathlib import Path
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, Type, TypeVar
import logging

logger = logging.getLogger(__name__)

E = TypeVar('E', bound=Enum)


class FieldOfViewFormat(Enum):
    DEGREES = 'degrees'
    RADIANS = 'radians'


class OrientationFormat(Enum):
    AXIS_ANGLE_DEGREES = 'axis_angle_degrees'
    AXIS_ANGLE_RADIANS = 'axis_angle_radians'
    QUATERNION = 'quaternion'


class PrincipalPointFormat(Enum):
    ABSOLUTE = 'absolute'
    RELATIVE = 'relative'


class CalibrationMode(Enum):
    ONE_VANISHING_POINT = 'one_vanishing_point'
    TWO_VANISHING_POINTS = 'two_vanishing_points'


def _mapping(value: Any, name: str) -> Dict[str, Any]:
    """Return a parsed section, treating a missing or empty one as {}."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Section '{name}' must be a mapping, got {type(value).__name__}")
    return value


def _dimension(section: Dict[str, Any], key: str, default: float) -> float:
    """Read a sensor dimension in mm, rejecting null or non-numeric values."""
    value = section.get(key, default)
    if value is None or isinstance(value, bool):
        raise ValueError(f"Invalid {key} '{value}' (expected a number in mm)")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {key} '{value}' (expected a number in mm)") from None


def parse_enum(enum_cls: Type[E], value: Any) -> E:
    """
    Resolve an enum member from its value or name (case-insensitive).

    Raises:
        ValueError: If the value matches no member
    """
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip().lower()
    for member in enum_cls:
        if text in (member.value, member.name.lower()):
            return member
    choices = ', '.join(m.value for m in enum_cls)
    raise ValueError(f"Invalid {enum_cls.__name__} '{value}' (expected one of: {choices})")


@dataclass(frozen=True)
class ResultDisplaySettings:
    """Formats chosen for the result display."""
    field_of_view_format: FieldOfViewFormat = FieldOfViewFormat.DEGREES
    orientation_format: OrientationFormat = OrientationFormat.AXIS_ANGLE_DEGREES
    principal_point_format: PrincipalPointFormat = PrincipalPointFormat.RELATIVE


@dataclass(frozen=True)
class CameraData:
    """
    Sensor selection for focal length derivation.

    A preset id takes precedence over the custom dimensions.
    """
    preset_id: Optional[str] = None
    custom_sensor_width: float = 36.0   # mm
    custom_sensor_height: float = 24.0  # mm


@dataclass(frozen=True)
class GlobalSettings:
    calibration_mode: CalibrationMode = CalibrationMode.TWO_VANISHING_POINTS


@dataclass(frozen=True)
class ReadoutConfig:
    """
    Settings needed to present a solver result.

    Attributes:
        display: Output formats
        camera_data: Sensor preset or custom sensor size
        global_settings: Calibration mode
    """
    display: ResultDisplaySettings = field(default_factory=ResultDisplaySettings)
    camera_data: CameraData = field(default_factory=CameraData)
    global_settings: GlobalSettings = field(default_factory=GlobalSettings)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ReadoutConfig":
        """
        Build settings from a parsed document. Missing sections keep defaults.

        Example structure:
            calibration_mode: two_vanishing_points
            display:
              field_of_view: degrees
              orientation: quaternion
              principal_point: absolute
            camera_data:
              preset_id: full_frame
              custom_sensor_width: 36.0
              custom_sensor_height: 24.0
        """
        data = _mapping(data, 'document')
        defaults = cls()

        disp_data = _mapping(data.get('display'), 'display')
        display = ResultDisplaySettings(
            field_of_view_format=parse_enum(
                FieldOfViewFormat,
                disp_data.get('field_of_view', defaults.display.field_of_view_format)),
            orientation_format=parse_enum(
                OrientationFormat,
                disp_data.get('orientation', defaults.display.orientation_format)),
            principal_point_format=parse_enum(
                PrincipalPointFormat,
                disp_data.get('principal_point', defaults.display.principal_point_format)),
        )

        cam_data = _mapping(data.get('camera_data'), 'camera_data')
        camera_data = CameraData(
            preset_id=cam_data.get('preset_id'),
            custom_sensor_width=_dimension(
                cam_data, 'custom_sensor_width', defaults.camera_data.custom_sensor_width),
            custom_sensor_height=_dimension(
                cam_data, 'custom_sensor_height', defaults.camera_data.custom_sensor_height),
        )

        global_settings = GlobalSettings(
            calibration_mode=parse_enum(
                CalibrationMode,
                data.get('calibration_mode', defaults.global_settings.calibration_mode)),
        )

        return cls(display=display, camera_data=camera_data, global_settings=global_settings)

    @classmethod
    def from_yaml(cls, config_path: str) -> "ReadoutConfig":
        """
        Load settings from a YAML file.

        Args:
            config_path: Path to the YAML file

        Returns:
            ReadoutConfig with loaded settings
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        logger.info(f"Loading readout settings from {config_path}")
        return cls.from_dict(data)
