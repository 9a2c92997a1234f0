"""
Tests for settings loading and solver result loading.
"""

import tempfile

import pytest
import numpy as np
from numpy.testing import assert_allclose

from camera_readout.config import (
    CalibrationMode,
    CameraData,
    FieldOfViewFormat,
    OrientationFormat,
    PrincipalPointFormat,
    ReadoutConfig,
    parse_enum,
)
from camera_readout.coordinates import Point2D
from camera_readout.exceptions import GeometryError, InvalidDimensionError
from camera_readout.solver_result import CameraParameters, SolverResult


SAMPLE_DOCUMENT = """
calibration_mode: two_vanishing_points
display:
  field_of_view: radians
  orientation: quaternion
  principal_point: absolute
camera_data:
  preset_id: full_frame
camera:
  transform:
    - [1, 0, 0, 0.5]
    - [0, 1, 0, -1.0]
    - [0, 0, 1, 12.0]
    - [0, 0, 0, 1]
  relative_focal_length: 2.0
  horizontal_field_of_view: 0.9272952180016122
  vertical_field_of_view: 0.5404195002705842
  principal_point: [0.0, 0.0]
  image_width: 1920
  image_height: 1080
warnings:
  - Principal point assumed at image centre
"""


@pytest.fixture
def sample_file():
    """Create a temporary YAML file with a solved camera and settings."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write(SAMPLE_DOCUMENT)
        return f.name


@pytest.fixture
def failed_file(tmp_path):
    path = tmp_path / 'failed.yaml'
    path.write_text("errors:\n  - Vanishing point 1 is at infinity\n")
    return str(path)


class TestParseEnum:
    """Tests for enum parsing from strings."""

    def test_by_value(self):
        assert parse_enum(FieldOfViewFormat, 'degrees') == FieldOfViewFormat.DEGREES

    def test_by_name_case_insensitive(self):
        assert parse_enum(OrientationFormat, 'QUATERNION') == OrientationFormat.QUATERNION

    def test_member_passes_through(self):
        assert parse_enum(CalibrationMode, CalibrationMode.ONE_VANISHING_POINT) == \
            CalibrationMode.ONE_VANISHING_POINT

    def test_invalid(self):
        with pytest.raises(ValueError, match='expected one of'):
            parse_enum(PrincipalPointFormat, 'image_plane')


class TestReadoutConfig:
    """Tests for settings loading."""

    def test_defaults(self):
        config = ReadoutConfig()

        assert config.display.field_of_view_format == FieldOfViewFormat.DEGREES
        assert config.display.orientation_format == OrientationFormat.AXIS_ANGLE_DEGREES
        assert config.display.principal_point_format == PrincipalPointFormat.RELATIVE
        assert config.camera_data == CameraData(None, 36.0, 24.0)
        assert config.global_settings.calibration_mode == CalibrationMode.TWO_VANISHING_POINTS

    def test_from_yaml(self, sample_file):
        config = ReadoutConfig.from_yaml(sample_file)

        assert config.display.field_of_view_format == FieldOfViewFormat.RADIANS
        assert config.display.orientation_format == OrientationFormat.QUATERNION
        assert config.display.principal_point_format == PrincipalPointFormat.ABSOLUTE
        assert config.camera_data.preset_id == 'full_frame'

    def test_empty_document(self):
        assert ReadoutConfig.from_dict(None) == ReadoutConfig()

    def test_partial_document(self):
        config = ReadoutConfig.from_dict({
            'calibration_mode': 'one_vanishing_point',
            'camera_data': {'custom_sensor_width': 23.5},
        })

        assert config.global_settings.calibration_mode == CalibrationMode.ONE_VANISHING_POINT
        assert config.camera_data.custom_sensor_width == 23.5
        assert config.camera_data.custom_sensor_height == 24.0
        assert config.display == ReadoutConfig().display

    def test_invalid_format(self):
        with pytest.raises(ValueError):
            ReadoutConfig.from_dict({'display': {'orientation': 'euler'}})

    def test_null_sensor_dimension(self):
        with pytest.raises(ValueError, match='custom_sensor_width'):
            ReadoutConfig.from_dict({'camera_data': {'custom_sensor_width': None}})

    def test_non_numeric_sensor_dimension(self):
        with pytest.raises(ValueError, match='custom_sensor_height'):
            ReadoutConfig.from_dict({'camera_data': {'custom_sensor_height': 'wide'}})

    def test_non_mapping_document(self):
        with pytest.raises(ValueError, match='document'):
            ReadoutConfig.from_dict([1, 2])

    def test_non_mapping_section(self):
        with pytest.raises(ValueError, match='display'):
            ReadoutConfig.from_dict({'display': 'quaternion'})

    def test_empty_section(self):
        assert ReadoutConfig.from_dict({'display': None, 'camera_data': None}) == ReadoutConfig()

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            ReadoutConfig.from_yaml('/nonexistent/settings.yaml')


class TestSolverResultLoading:
    """Tests for solver result records."""

    def test_from_yaml(self, sample_file):
        result = SolverResult.from_yaml(sample_file)
        params = result.camera_parameters

        assert result.succeeded
        assert_allclose(params.transform.translation, [0.5, -1.0, 12.0])
        assert params.principal_point == Point2D(0.0, 0.0)
        assert params.image_width == 1920
        assert result.warnings == ("Principal point assumed at image centre",)

    def test_failed_result(self, failed_file):
        result = SolverResult.from_yaml(failed_file)

        assert not result.succeeded
        assert result.errors == ("Vanishing point 1 is at infinity",)

    def test_non_mapping_document(self):
        with pytest.raises(ValueError, match='mapping'):
            SolverResult.from_dict(['camera'])

    def test_principal_point_mapping(self):
        params = CameraParameters.from_dict({
            'transform': np.eye(4).tolist(),
            'relative_focal_length': 1.0,
            'horizontal_field_of_view': 1.0,
            'vertical_field_of_view': 1.0,
            'principal_point': {'x': 0.1, 'y': -0.2},
            'image_width': 100,
            'image_height': 100,
        })
        assert params.principal_point == Point2D(0.1, -0.2)

    def test_coerces_transform_and_point(self):
        params = CameraParameters(
            transform=np.eye(4),
            relative_focal_length=1.0,
            horizontal_field_of_view=1.0,
            vertical_field_of_view=1.0,
            principal_point=(0.25, 0.5),
            image_width=10,
            image_height=10,
        )
        assert params.principal_point == Point2D(0.25, 0.5)
        assert_allclose(params.transform.matrix, np.eye(4))

    def test_bad_transform(self):
        with pytest.raises(GeometryError):
            CameraParameters.from_dict({
                'transform': [[1, 0, 0], [0, 1, 0], [0, 0, 1]],
                'relative_focal_length': 1.0,
                'horizontal_field_of_view': 1.0,
                'vertical_field_of_view': 1.0,
                'image_width': 100,
                'image_height': 100,
            })

    def test_bad_image_size(self):
        with pytest.raises(InvalidDimensionError):
            CameraParameters(
                transform=np.eye(4),
                relative_focal_length=1.0,
                horizontal_field_of_view=1.0,
                vertical_field_of_view=1.0,
                principal_point=Point2D(0, 0),
                image_width=0,
                image_height=10,
            )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
