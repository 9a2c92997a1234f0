"""
Solver output records.

The solver is an external collaborator; these records are the boundary it
hands over. Both are immutable snapshots.
"""

import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
import logging

from .coordinates import Point2D
from .exceptions import InvalidDimensionError
from .math_util import Transform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraParameters:
    """
    Solved camera.

    Attributes:
        transform: Camera transform (rotation + position)
        relative_focal_length: Focal length relative to half the longer image side
        horizontal_field_of_view: Horizontal field of view (radians)
        vertical_field_of_view: Vertical field of view (radians)
        principal_point: Principal point in the IMAGE_PLANE frame
        image_width: Image width in pixels
        image_height: Image height in pixels
    """
    transform: Transform
    relative_focal_length: float
    horizontal_field_of_view: float
    vertical_field_of_view: float
    principal_point: Point2D
    image_width: float
    image_height: float

    def __post_init__(self):
        if not isinstance(self.transform, Transform):
            object.__setattr__(self, 'transform', Transform(self.transform))
        if not isinstance(self.principal_point, Point2D):
            x, y = self.principal_point
            object.__setattr__(self, 'principal_point', Point2D(float(x), float(y)))
        if not self.image_width > 0:
            raise InvalidDimensionError('image_width', self.image_width)
        if not self.image_height > 0:
            raise InvalidDimensionError('image_height', self.image_height)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CameraParameters":
        """
        Build camera parameters from a parsed document.

        Example structure:
            transform:
              - [1, 0, 0, 0]
              - [0, 1, 0, 0]
              - [0, 0, 1, 10]
              - [0, 0, 0, 1]
            relative_focal_length: 2.0
            horizontal_field_of_view: 0.927
            vertical_field_of_view: 0.643
            principal_point: [0.0, 0.0]
            image_width: 1920
            image_height: 1080
        """
        pp = data.get('principal_point', (0.0, 0.0))
        if isinstance(pp, dict):
            pp = (pp['x'], pp['y'])

        return cls(
            transform=Transform(data['transform']),
            relative_focal_length=float(data['relative_focal_length']),
            horizontal_field_of_view=float(data['horizontal_field_of_view']),
            vertical_field_of_view=float(data['vertical_field_of_view']),
            principal_point=Point2D(float(pp[0]), float(pp[1])),
            image_width=float(data['image_width']),
            image_height=float(data['image_height']),
        )


@dataclass(frozen=True)
class SolverResult:
    """
    Outcome of one solve.

    camera_parameters is None when the solve failed; errors then explains why.
    """
    camera_parameters: Optional[CameraParameters] = None
    errors: Tuple[str, ...] = field(default_factory=tuple)
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'errors', tuple(self.errors))
        object.__setattr__(self, 'warnings', tuple(self.warnings))

    @property
    def succeeded(self) -> bool:
        return self.camera_parameters is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolverResult":
        if not isinstance(data, dict):
            raise ValueError(f"Solver result must be a mapping, got {type(data).__name__}")
        cam_data = data.get('camera')
        camera_parameters = CameraParameters.from_dict(cam_data) if cam_data else None
        return cls(
            camera_parameters=camera_parameters,
            errors=[str(e) for e in data.get('errors') or []],
            warnings=[str(w) for w in data.get('warnings') or []],
        )

    @classmethod
    def from_yaml(cls, path: str) -> "SolverResult":
        """Load a solver result snapshot from a YAML (or JSON) file."""
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Solver result file not found: {path}")

        with open(file_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        logger.info(f"Loaded solver result from {path}")
        return cls.from_dict(data)
