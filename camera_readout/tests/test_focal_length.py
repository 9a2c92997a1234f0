"""
Tests for focal length derivation and camera presets.
"""

import pytest

from camera_readout.camera_presets import (
    CAMERA_PRESETS,
    CameraPreset,
    get_camera_preset,
    list_camera_presets,
    resolve_sensor_size,
)
from camera_readout.config import CameraData
from camera_readout.exceptions import InvalidDimensionError, PresetNotFoundError
from camera_readout.focal_length import (
    SensorSize,
    absolute_focal_length,
    relative_focal_length,
    sensor_aspect_ratio,
)


class TestAbsoluteFocalLength:
    """Tests for absolute focal length from relative focal length."""

    def test_wide_sensor_uses_width(self):
        assert absolute_focal_length(2.0, 36, 24) == pytest.approx(36.0)

    def test_tall_sensor_uses_height(self):
        assert absolute_focal_length(2.0, 24, 36) == pytest.approx(36.0)

    def test_branch_selection_is_visible(self):
        # 0.5 * 30 * 1.5 for wide, 0.5 * 40 * 1.5 for tall
        assert absolute_focal_length(1.5, 30, 20) == pytest.approx(22.5)
        assert absolute_focal_length(1.5, 20, 40) == pytest.approx(30.0)

    def test_square_sensor(self):
        assert absolute_focal_length(3.0, 10, 10) == pytest.approx(15.0)

    def test_zero_sensor_height_falls_back_to_square(self):
        """A zero height is not an error; aspect 1 resolves to the width branch."""
        assert absolute_focal_length(2.0, 36, 0) == pytest.approx(36.0)

    def test_zero_sensor_height_logs_warning(self, caplog):
        with caplog.at_level('WARNING', logger='camera_readout.focal_length'):
            absolute_focal_length(2.0, 36, 0)
        assert 'not positive' in caplog.text

    def test_aspect_ratio(self):
        assert sensor_aspect_ratio(36, 24) == pytest.approx(1.5)
        assert sensor_aspect_ratio(36, 0) == 1.0


class TestRelativeFocalLength:
    """Tests for the inverse derivation."""

    @pytest.mark.parametrize("f_rel,width,height", [
        (2.0, 36, 24),
        (1.2, 24, 36),
        (0.8, 13.2, 8.8),
        (3.3, 17.3, 17.3),
    ])
    def test_inverse(self, f_rel, width, height):
        f_abs = absolute_focal_length(f_rel, width, height)
        assert relative_focal_length(f_abs, width, height) == pytest.approx(f_rel)

    def test_full_frame_50mm(self):
        # 50mm on a 36mm wide sensor: 50 / 18
        assert relative_focal_length(50.0, 36, 24) == pytest.approx(50.0 / 18.0)

    def test_keyword_arguments(self):
        value = relative_focal_length(focal_length=50.0, sensor_width=24, sensor_height=36)
        assert value == pytest.approx(50.0 / 18.0)

    def test_zero_dimension_rejected(self):
        with pytest.raises(InvalidDimensionError):
            relative_focal_length(50.0, 0, 0)


class TestCameraPresets:
    """Tests for the preset registry."""

    def test_full_frame(self):
        preset = get_camera_preset('full_frame')
        assert preset.sensor_size == SensorSize(36.0, 24.0)

    def test_unknown_preset(self):
        with pytest.raises(PresetNotFoundError) as exc_info:
            get_camera_preset('no_such_camera')

        assert exc_info.value.preset_id == 'no_such_camera'
        assert 'no_such_camera' in str(exc_info.value)

    def test_unknown_preset_is_key_error(self):
        with pytest.raises(KeyError):
            get_camera_preset('no_such_camera')

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            CAMERA_PRESETS['mine'] = CameraPreset('mine', 'Mine', 1.0, 1.0)

    def test_ids_match_keys(self):
        for preset_id, preset in CAMERA_PRESETS.items():
            assert preset.id == preset_id
            assert preset.sensor_width > 0
            assert preset.sensor_height > 0

    def test_list_sorted_by_description(self):
        descriptions = [p.description for p in list_camera_presets()]
        assert descriptions == sorted(descriptions)
        assert len(descriptions) == len(CAMERA_PRESETS)


class TestResolveSensorSize:
    """Tests for sensor selection."""

    def test_custom_size(self):
        data = CameraData(custom_sensor_width=23.0, custom_sensor_height=15.0)
        assert resolve_sensor_size(data) == SensorSize(23.0, 15.0)

    def test_preset_wins_over_custom(self):
        data = CameraData(preset_id='four_thirds', custom_sensor_width=1.0, custom_sensor_height=1.0)
        assert resolve_sensor_size(data) == SensorSize(17.3, 13.0)

    def test_unknown_preset(self):
        with pytest.raises(PresetNotFoundError):
            resolve_sensor_size(CameraData(preset_id='bogus'))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
