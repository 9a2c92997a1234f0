"""
Camera sensor presets.

A read-only registry mapping preset ids to sensor dimensions (millimetres).
The registry is built once at import time and exposed as a mapping proxy,
so lookups need no locking.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping
import logging

from .config import CameraData
from .exceptions import PresetNotFoundError
from .focal_length import SensorSize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraPreset:
    """Named camera body or sensor format."""
    id: str
    description: str
    sensor_width: float   # mm
    sensor_height: float  # mm

    @property
    def sensor_size(self) -> SensorSize:
        return SensorSize(self.sensor_width, self.sensor_height)


_PRESETS = [
    CameraPreset('full_frame', 'Full frame 35mm', 36.0, 24.0),
    CameraPreset('aps_h', 'APS-H (Canon)', 27.9, 18.6),
    CameraPreset('aps_c', 'APS-C (Nikon, Sony, Fujifilm)', 23.5, 15.6),
    CameraPreset('aps_c_canon', 'APS-C (Canon)', 22.3, 14.9),
    CameraPreset('four_thirds', 'Four Thirds / Micro Four Thirds', 17.3, 13.0),
    CameraPreset('one_inch', '1" sensor', 13.2, 8.8),
    CameraPreset('two_thirds_inch', '2/3" sensor', 8.8, 6.6),
    CameraPreset('one_over_2_3_inch', '1/2.3" sensor', 6.17, 4.55),
    CameraPreset('medium_format_44x33', 'Medium format 44x33', 43.8, 32.9),
    CameraPreset('super_35', 'Super 35 (4-perf)', 24.89, 18.66),
    CameraPreset('super_16', 'Super 16', 12.52, 7.41),
]

CAMERA_PRESETS: Mapping[str, CameraPreset] = MappingProxyType(
    {preset.id: preset for preset in _PRESETS}
)

del _PRESETS


def get_camera_preset(preset_id: str) -> CameraPreset:
    """
    Look up a camera preset by id.

    Raises:
        PresetNotFoundError: If the id is not registered
    """
    try:
        return CAMERA_PRESETS[preset_id]
    except KeyError:
        raise PresetNotFoundError(preset_id) from None


def list_camera_presets() -> List[CameraPreset]:
    """All presets sorted by description."""
    return sorted(CAMERA_PRESETS.values(), key=lambda p: p.description)


def resolve_sensor_size(camera_data: CameraData) -> SensorSize:
    """
    Sensor size for a camera selection.

    The preset, when set, wins over the custom dimensions.

    Raises:
        PresetNotFoundError: If the preset id is not registered
    """
    if camera_data.preset_id:
        preset = get_camera_preset(camera_data.preset_id)
        logger.debug(f"Using sensor size of preset '{preset.id}': {preset.sensor_width}x{preset.sensor_height}")
        return preset.sensor_size
    return SensorSize(camera_data.custom_sensor_width, camera_data.custom_sensor_height)
