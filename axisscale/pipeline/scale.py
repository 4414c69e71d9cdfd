import logging

import numpy as np

from axisscale.configs.scale_result import ProjectedBox
from axisscale.exceptions import DegenerateProjectionError
from axisscale.pipeline.projection import AXIS_CORNER_INDICES, ORIGIN_INDEX
from axisscale.pipeline.validation import AXIS_NAMES

logger = logging.getLogger(__name__)


def recover_points_per_unit(
    box: ProjectedBox, width_pts: float, height_pts: float, tol: float = 1e-12
) -> float:
    """
    Recover the number of points per world unit on screen.

    The box is fitted into the viewport without clipping, so the tighter of
    the horizontal and vertical fits sets the scale.

    Args:
        box: Aligned projection of the axes box.
        width_pts: Viewport width in points.
        height_pts: Viewport height in points.
        tol: Relative tolerance for a zero span, measured against the largest
            distance of a corner from the origin corner.

    Returns:
        Points per world unit.

    Raises:
        DegenerateProjectionError: If the box projects onto a line or a point.
    """
    size = float(np.max(np.hypot(box.corners[:, 0], box.corners[:, 1])))
    span_x, span_y = box.span_x, box.span_y
    if span_x <= tol * size or span_y <= tol * size:
        raise DegenerateProjectionError(
            f"Axes box projects to a degenerate shape (spans {span_x:g} x {span_y:g})"
        )

    points_per_x = width_pts / span_x
    points_per_y = height_pts / span_y
    logger.debug(
        "Points per world unit: %.6g horizontally, %.6g vertically",
        points_per_x,
        points_per_y,
    )
    return min(points_per_x, points_per_y)


def extract_axis_factors(
    box: ProjectedBox,
    extents: np.ndarray,
    aspect: np.ndarray,
    points_per_unit: float,
    tol: float = 1e-12,
) -> tuple[float, float, float]:
    """
    Convert the on-screen length of each axis into axis units per point.

    Args:
        box: Aligned projection of the axes box.
        extents: Axis ranges in data units.
        aspect: Data aspect ratio.
        points_per_unit: Points per world unit from ``recover_points_per_unit``.
        tol: Relative tolerance for a zero projected axis length, measured
            against the axis length in world units.

    Returns:
        Tuple (xppt, yppt, zppt).

    Raises:
        DegenerateProjectionError: If an axis is viewed exactly end-on.
    """
    origin = box.corners[ORIGIN_INDEX]
    factors = []
    for name, index, extent, world_length in zip(
        AXIS_NAMES, AXIS_CORNER_INDICES, extents, extents / aspect
    ):
        dx, dy = box.corners[index] - origin
        projected_length = np.hypot(dx, dy)
        if projected_length <= tol * world_length:
            raise DegenerateProjectionError(
                f"The {name} axis is parallel to the viewing direction"
            )
        factors.append(float(extent / (points_per_unit * projected_length)))

    return tuple(factors)
