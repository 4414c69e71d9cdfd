"""
Axes Box Projection Module

Builds the axes box of a 3D plot in equal-length world units, projects it
orthographically onto the view plane and rotates the result so that the
camera up-vector points straight up, as it does on screen.

Coordinate Conventions:
- World units: data units divided by the data aspect ratio, so that one world
  unit has the same physical length along every axis.
- View angles: azimuth 0 / elevation 0 looks along +y with x to the right and
  z up; elevation 90 is the top view. Angles are in degrees.
- View plane: x' to the right, y' up, both in world units.
"""

import logging
from typing import Literal

import numpy as np
from numpy.typing import NDArray

from axisscale.configs.scale_config import ScaleConfig
from axisscale.configs.scale_result import ProjectedBox
from axisscale.exceptions import DegenerateProjectionError

logger = logging.getLogger(__name__)

# Type aliases for improved readability
Points3D = NDArray[np.float64]
Points2D = NDArray[np.float64]
Vector3D = NDArray[np.float64]

# fmt: off

# Corners of the unit box in construction order, scaled per axis later
BOX_OFFSETS = np.array([
    [0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0],  # base
    [0, 0, 1], [1, 0, 1], [1, 1, 1], [0, 1, 1],  # top
], dtype=float)

BOX_EDGES = [
    (0, 1), (1, 2), (2, 3), (3, 0),  # base
    (4, 5), (5, 6), (6, 7), (7, 4),  # top
    (0, 4), (1, 5), (2, 6), (3, 7),  # verticals
]

# fmt: on


def _corner_index(offset: tuple[int, int, int]) -> int:
    """Position of a unit offset in BOX_OFFSETS."""
    return int(np.flatnonzero(np.all(BOX_OFFSETS == offset, axis=1))[0])


# Indices into the stacked point array
ORIGIN_INDEX = _corner_index((0, 0, 0))
AXIS_CORNER_INDICES = (
    _corner_index((1, 0, 0)),  # pure x
    _corner_index((0, 1, 0)),  # pure y
    _corner_index((0, 0, 1)),  # pure z
)
UP_VECTOR_INDEX = len(BOX_OFFSETS)


def sind(angle_deg: float) -> float:
    """Sine of an angle in degrees, exact at multiples of 90."""
    reduced = float(angle_deg) % 360.0
    if reduced % 90.0 == 0.0:
        return (0.0, 1.0, 0.0, -1.0)[int(reduced // 90.0)]
    return float(np.sin(np.deg2rad(reduced)))


def cosd(angle_deg: float) -> float:
    """Cosine of an angle in degrees, exact at multiples of 90."""
    reduced = float(angle_deg) % 360.0
    if reduced % 90.0 == 0.0:
        return (1.0, 0.0, -1.0, 0.0)[int(reduced // 90.0)]
    return float(np.cos(np.deg2rad(reduced)))


def build_box_and_up_vector(
    extents: Vector3D, aspect: Vector3D, up_vector: Vector3D
) -> Points3D:
    """
    Build the 8 axes box corners plus the up-vector in world units.

    The box is anchored at the minimum corner. The up-vector is appended as a
    ninth point so that it goes through the same projection as the box.

    Args:
        extents: Axis ranges (max - min) in data units.
        aspect: Data aspect ratio.
        up_vector: Camera up-vector in data coordinates.

    Returns:
        Array of shape (9, 3); rows follow BOX_OFFSETS, then the up-vector.
    """
    points = np.vstack((BOX_OFFSETS * extents, up_vector))
    return points / aspect


def orthographic_matrix(azimuth_deg: float, elevation_deg: float) -> NDArray[np.float64]:
    """
    2x3 matrix projecting world points onto the view plane.

    Args:
        azimuth_deg: Azimuth in degrees.
        elevation_deg: Elevation in degrees.

    Returns:
        Matrix whose rows are the view-plane x' and y' directions.
    """
    sa, ca = sind(azimuth_deg), cosd(azimuth_deg)
    se, ce = sind(elevation_deg), cosd(elevation_deg)
    return np.array(
        [
            [ca, sa, 0.0],
            [-sa * se, ca * se, ce],
        ]
    )


def view_matrix(azimuth_deg: float, elevation_deg: float) -> NDArray[np.float64]:
    """
    4x4 homogeneous orthographic view transformation.

    The first two rows reproduce ``orthographic_matrix``; the third row is the
    depth axis pointing towards the viewer.

    Args:
        azimuth_deg: Azimuth in degrees.
        elevation_deg: Elevation in degrees.

    Returns:
        Homogeneous 4x4 transformation matrix.
    """
    sa, ca = sind(azimuth_deg), cosd(azimuth_deg)
    se, ce = sind(elevation_deg), cosd(elevation_deg)
    return np.array(
        [
            [ca, sa, 0.0, 0.0],
            [-sa * se, ca * se, ce, 0.0],
            [ce * sa, -ce * ca, se, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def project_points(
    points_3d: Points3D,
    azimuth_deg: float,
    elevation_deg: float,
    method: Literal["matrix", "homogeneous"] = "matrix",
) -> Points2D:
    """
    Project world points onto the view plane.

    Args:
        points_3d: Array of shape (N, 3).
        azimuth_deg: Azimuth in degrees.
        elevation_deg: Elevation in degrees.
        method: "matrix" applies the 2x3 projection directly, "homogeneous"
            goes through the 4x4 view matrix and drops depth and w.

    Returns:
        Array of shape (N, 2) with view-plane coordinates (x', y').

    Raises:
        ValueError: If an unsupported method is given.
    """
    match method:
        case "matrix":
            return points_3d @ orthographic_matrix(azimuth_deg, elevation_deg).T
        case "homogeneous":
            homogeneous = np.hstack((points_3d, np.ones((len(points_3d), 1))))
            transformed = homogeneous @ view_matrix(azimuth_deg, elevation_deg).T
            return transformed[:, :2] / transformed[:, 3:4]
        case _:
            raise ValueError(
                f"Unsupported projection method '{method}'. Use 'matrix' or 'homogeneous'."
            )


def rotation_2d(angle: float) -> NDArray[np.float64]:
    """Counterclockwise 2D rotation matrix for an angle in radians."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, -s], [s, c]])


def align_up_vector(
    projected: Points2D, up_length: float, tol: float = 1e-12
) -> ProjectedBox:
    """
    Rotate the projected box so that the projected up-vector points up.

    Args:
        projected: Array of shape (9, 2) from ``project_points``; the last row
            is the projected up-vector.
        up_length: Length of the up-vector in world units, used as the
            reference for the zero-length test.
        tol: Relative tolerance below which the projected up-vector counts as
            zero length.

    Returns:
        ProjectedBox with the 8 rotated corners.

    Raises:
        DegenerateProjectionError: If the up-vector is parallel to the viewing
            direction and has no direction on screen.
    """
    up_x, up_y = projected[UP_VECTOR_INDEX]
    if np.hypot(up_x, up_y) <= tol * up_length:
        raise DegenerateProjectionError(
            "Camera up-vector is parallel to the viewing direction"
        )

    up_angle = np.arctan2(up_y, up_x)
    rot_angle = np.pi / 2 - up_angle
    rotation = rotation_2d(rot_angle)

    corners = projected[:UP_VECTOR_INDEX] @ rotation.T
    up_rotated = rotation @ projected[UP_VECTOR_INDEX]

    logger.debug(
        "Up-vector at %.6f rad on the view plane, rotating box by %.6f rad",
        up_angle,
        rot_angle,
    )
    return ProjectedBox(corners=corners, up_vector=up_rotated, rotation_angle=float(rot_angle))


def project_axes_box(
    extents: Vector3D,
    aspect: Vector3D,
    up_vector: Vector3D,
    azimuth_deg: float,
    elevation_deg: float,
    config: ScaleConfig | None = None,
) -> ProjectedBox:
    """
    Build, project and align the axes box for one view.

    Inputs are expected to be validated already.

    Args:
        extents: Axis ranges in data units.
        aspect: Data aspect ratio.
        up_vector: Camera up-vector in data coordinates.
        azimuth_deg: Azimuth in degrees.
        elevation_deg: Elevation in degrees.
        config: Scale configuration (defaults if None).

    Returns:
        The aligned ProjectedBox.
    """
    if config is None:
        config = ScaleConfig()

    points = build_box_and_up_vector(extents, aspect, up_vector)
    projected = project_points(
        points, azimuth_deg, elevation_deg, method=config.projection_method
    )
    up_length = float(np.linalg.norm(points[UP_VECTOR_INDEX]))
    return align_up_vector(projected, up_length, tol=config.degenerate_tol)
