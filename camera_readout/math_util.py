"""
Rotation representation conversion for solved camera transforms.

The solver stores the camera as a 4x4 rigid transform:

    | R11 R12 R13 tx |
    | R21 R22 R23 ty |
    | R31 R32 R33 tz |
    |  0   0   0   1 |

The upper-left 3x3 block is a proper rotation (orthonormal, det = +1) and
the last column holds the camera position. This module turns the rotation
block into the representations offered by the result display:

    - Axis-angle: unit axis (x, y, z) and angle in [0, pi] radians
    - Quaternion: unit quaternion (x, y, z, w), scalar last

Numerical notes:
    - The angle comes from arccos((trace - 1) / 2). Rounding can push the
      ratio just outside [-1, 1], so it is clipped before arccos.
    - Near 0 rad the axis is undefined; (1, 0, 0) is returned.
    - Near pi rad the skew-symmetric part vanishes and the axis is read
      from the symmetric part (R + I) / 2 = a a^T instead.
    - Quaternion extraction follows Shepperd's method, picking the branch
      with the largest denominator.
"""

import numpy as np
from typing import Sequence, Tuple, Union
from dataclasses import dataclass
import logging

from scipy.spatial.transform import Rotation

from .exceptions import GeometryError

logger = logging.getLogger(__name__)

# Orthonormality/determinant tolerance accepted from the solver
ROTATION_TOLERANCE = 1e-3

# Below this angle (radians) the rotation is reported as identity
IDENTITY_ANGLE_EPS = 1e-9

# Within this distance of pi (radians) the symmetric-part axis recovery is used
HALF_TURN_ANGLE_EPS = 1e-6

# Skew-part norm below which the axis cannot be read from R - R^T
SKEW_NORM_EPS = 1e-12

DEFAULT_AXIS = (1.0, 0.0, 0.0)

AxisAngle = Tuple[float, float, float, float]
Quaternion = Tuple[float, float, float, float]


@dataclass(frozen=True, eq=False)
class Transform:
    """
    Immutable 4x4 rigid camera transform.

    The matrix is copied on construction and marked read-only, so a
    Transform can be shared between callers without aliasing.

    Attributes:
        matrix: 4x4 float64 array (rotation block + translation column)
    """
    matrix: np.ndarray

    def __post_init__(self):
        try:
            matrix = np.array(self.matrix, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise GeometryError(f"Transform is not numeric: {e}") from e

        if matrix.shape != (4, 4):
            raise GeometryError(f"Transform must be 4x4, got shape {matrix.shape}")
        if not np.all(np.isfinite(matrix)):
            raise GeometryError("Transform contains non-finite values")

        matrix.setflags(write=False)
        object.__setattr__(self, 'matrix', matrix)

    @classmethod
    def identity(cls) -> "Transform":
        return cls(np.eye(4))

    @classmethod
    def from_rotation_translation(
        cls,
        rotation: np.ndarray,
        translation: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> "Transform":
        """
        Build a transform from a 3x3 rotation and a 3-vector translation.

        Args:
            rotation: 3x3 rotation matrix
            translation: Camera position (x, y, z)

        Returns:
            Transform with the given blocks
        """
        rotation = np.asarray(rotation, dtype=np.float64)
        translation = np.asarray(translation, dtype=np.float64)
        if rotation.shape != (3, 3):
            raise GeometryError(f"Rotation must be 3x3, got shape {rotation.shape}")
        if translation.shape != (3,):
            raise GeometryError(f"Translation must have 3 elements, got shape {translation.shape}")

        matrix = np.eye(4)
        matrix[:3, :3] = rotation
        matrix[:3, 3] = translation
        return cls(matrix)

    @property
    def rotation(self) -> np.ndarray:
        """3x3 rotation block (read-only view)."""
        return self.matrix[:3, :3]

    @property
    def translation(self) -> np.ndarray:
        """Translation column, i.e. the camera position (read-only view)."""
        return self.matrix[:3, 3]


TransformLike = Union[Transform, np.ndarray, Sequence[Sequence[float]]]


def validate_rotation_matrix(R: np.ndarray, tol: float = 1e-6) -> bool:
    """
    Check that R is orthonormal with determinant +1, within tol.

    rotation_block calls this with the looser ROTATION_TOLERANCE so that
    solver rounding passes while reflections and scaled matrices do not.
    Non-finite entries and shapes other than 3x3 are rejected.
    """
    R = np.asarray(R)
    if R.shape != (3, 3):
        return False

    if not np.all(np.isfinite(R)):
        return False

    if not np.allclose(R @ R.T, np.eye(3), atol=tol):
        return False

    return bool(np.isclose(np.linalg.det(R), 1.0, atol=tol))


def rotation_block(transform: TransformLike) -> np.ndarray:
    """
    Extract and check the 3x3 rotation block.

    Accepts a Transform, a 4x4 array or a bare 3x3 rotation.

    Raises:
        GeometryError: If the shape is wrong or the block is not a proper
            rotation within ROTATION_TOLERANCE
    """
    if isinstance(transform, Transform):
        R = transform.rotation
    else:
        try:
            matrix = np.asarray(transform, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise GeometryError(f"Transform is not numeric: {e}") from e

        if matrix.shape == (4, 4):
            R = matrix[:3, :3]
        elif matrix.shape == (3, 3):
            R = matrix
        else:
            raise GeometryError(f"Expected a 4x4 or 3x3 matrix, got shape {matrix.shape}")

    if not validate_rotation_matrix(R, tol=ROTATION_TOLERANCE):
        raise GeometryError("Rotation block is not a proper rotation matrix")

    return R


def _half_turn_axis(R: np.ndarray, skew: np.ndarray) -> np.ndarray:
    """
    Recover the rotation axis of a (near) 180 degree rotation.

    For angle = pi, R = 2 a a^T - I, so (R + I) / 2 = a a^T. The column
    with the largest diagonal entry is the best conditioned multiple of a.
    The sign is taken from the residual skew part when there is one,
    otherwise the first significant component is made positive.
    """
    S = 0.5 * (R + np.eye(3))
    j = int(np.argmax(np.diag(S)))
    axis = S[:, j] / np.linalg.norm(S[:, j])

    alignment = float(np.dot(axis, skew))
    if alignment < -SKEW_NORM_EPS:
        axis = -axis
    elif abs(alignment) <= SKEW_NORM_EPS:
        k = int(np.argmax(np.abs(axis) > SKEW_NORM_EPS))
        if axis[k] < 0:
            axis = -axis

    return axis


def matrix_to_axis_angle(transform: TransformLike) -> AxisAngle:
    """
    Convert the rotation of a transform to axis-angle form.

    Args:
        transform: Transform, 4x4 array or 3x3 rotation

    Returns:
        Tuple (x, y, z, angle) with a unit axis and angle in [0, pi] radians.
        The identity rotation returns (1, 0, 0, 0).

    Raises:
        GeometryError: If the rotation block is invalid
    """
    R = rotation_block(transform)

    cos_angle = np.clip((np.trace(R) - 1.0) / 2.0, -1.0, 1.0)
    angle = float(np.arccos(cos_angle))

    if angle < IDENTITY_ANGLE_EPS:
        return DEFAULT_AXIS + (0.0,)

    skew = np.array([
        R[2, 1] - R[1, 2],
        R[0, 2] - R[2, 0],
        R[1, 0] - R[0, 1],
    ])

    if np.pi - angle < HALF_TURN_ANGLE_EPS:
        logger.debug(f"Half-turn rotation (angle={angle}), using symmetric part for axis")
        axis = _half_turn_axis(R, skew)
    else:
        norm = np.linalg.norm(skew)
        if norm < SKEW_NORM_EPS:
            # Symmetric and not a half turn: identity up to rounding
            logger.debug(f"Vanishing skew part at angle={angle}, treating as identity")
            return DEFAULT_AXIS + (0.0,)
        axis = skew / norm

    return float(axis[0]), float(axis[1]), float(axis[2]), angle


def matrix_to_quaternion(transform: TransformLike) -> Quaternion:
    """
    Convert the rotation of a transform to a unit quaternion.

    Uses Shepperd's method: of 4w^2, 4x^2, 4y^2, 4z^2 the largest is
    computed from the diagonal and the rest are divided by it, so the
    divisor is never close to zero.

    The result is in the w >= 0 hemisphere. For w == 0 the first non-zero
    vector component is made positive.

    Args:
        transform: Transform, 4x4 array or 3x3 rotation

    Returns:
        Tuple (x, y, z, w)

    Raises:
        GeometryError: If the rotation block is invalid
    """
    R = rotation_block(transform)
    trace = np.trace(R)

    branch = int(np.argmax([trace, R[0, 0], R[1, 1], R[2, 2]]))
    if branch == 0:
        s = 2.0 * np.sqrt(1.0 + trace)
        w = 0.25 * s
        x = (R[2, 1] - R[1, 2]) / s
        y = (R[0, 2] - R[2, 0]) / s
        z = (R[1, 0] - R[0, 1]) / s
    elif branch == 1:
        s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        w = (R[2, 1] - R[1, 2]) / s
        x = 0.25 * s
        y = (R[0, 1] + R[1, 0]) / s
        z = (R[0, 2] + R[2, 0]) / s
    elif branch == 2:
        s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        w = (R[0, 2] - R[2, 0]) / s
        x = (R[0, 1] + R[1, 0]) / s
        y = 0.25 * s
        z = (R[1, 2] + R[2, 1]) / s
    else:
        s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        w = (R[1, 0] - R[0, 1]) / s
        x = (R[0, 2] + R[2, 0]) / s
        y = (R[1, 2] + R[2, 1]) / s
        z = 0.25 * s

    q = np.array([x, y, z, w])
    q /= np.linalg.norm(q)

    if q[3] < 0:
        q = -q
    elif q[3] == 0:
        k = int(np.argmax(q[:3] != 0))
        if q[k] < 0:
            q = -q

    return float(q[0]), float(q[1]), float(q[2]), float(q[3])


def axis_angle_to_matrix(axis: Sequence[float], angle: float) -> np.ndarray:
    """
    Build a 3x3 rotation matrix from an axis and an angle in radians.

    The axis does not need to be normalized but must be non-zero.
    """
    axis = np.asarray(axis, dtype=np.float64)
    norm = np.linalg.norm(axis)
    if axis.shape != (3,) or norm == 0 or not np.isfinite(norm):
        raise GeometryError(f"Rotation axis must be a non-zero 3-vector, got {axis}")
    return Rotation.from_rotvec(axis / norm * angle).as_matrix()


def quaternion_to_matrix(q: Sequence[float]) -> np.ndarray:
    """Build a 3x3 rotation matrix from a quaternion (x, y, z, w)."""
    q = np.asarray(q, dtype=np.float64)
    if q.shape != (4,) or not np.all(np.isfinite(q)) or np.linalg.norm(q) == 0:
        raise GeometryError(f"Quaternion must be a non-zero 4-vector, got {q}")
    return Rotation.from_quat(q).as_matrix()
