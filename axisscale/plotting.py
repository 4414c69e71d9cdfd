import matplotlib.pyplot as plt
import numpy as np

from axisscale.adapters.matplotlib_axes import freeze_limits, points2axes
from axisscale.configs.scale_result import AxisScaleResult, ProjectedBox
from axisscale.pipeline.projection import (
    AXIS_CORNER_INDICES,
    BOX_EDGES,
    ORIGIN_INDEX,
)


def draw_scale_bars(
    ax,
    length_pts: float = 20.0,
    center: tuple[float, float, float] | None = None,
    result: AxisScaleResult | None = None,
    **line_kw,
) -> list:
    """
    Draw three lines of ``2 * length_pts`` points along x, y and z.

    The limits of the axes are frozen first so that the new lines do not
    rescale the plot and invalidate the factors.

    Args:
        ax: 3D matplotlib axes to draw on.
        length_pts (float): Half-length of each line in points.
        center (tuple | None): Crossing point in data coordinates. Defaults to
            the centre of the axis limits.
        result (AxisScaleResult | None): Precomputed factors. Computed from
            ``ax`` if None.
        **line_kw: Keyword arguments passed to ``ax.plot``.

    Returns:
        list: The three Line3D artists, in x, y, z order.
    """
    freeze_limits(ax)
    if result is None:
        result = points2axes(ax)

    if center is None:
        center = [np.mean(lims) for lims in (ax.get_xlim(), ax.get_ylim(), ax.get_zlim())]
    center = np.asarray(center, dtype=float)

    lines = []
    for axis, half_length in enumerate(result.data_lengths(length_pts)):
        offset = np.zeros(3)
        offset[axis] = half_length
        start, end = center - offset, center + offset
        (line,) = ax.plot(*zip(start, end), **line_kw)
        lines.append(line)

    return lines


def plot_projected_box(projected: ProjectedBox, ax=None):
    """
    Draw the aligned view-plane projection of the axes box.

    Args:
        projected (ProjectedBox): Output of the projection stage.
        ax: 2D matplotlib axes to draw on. A new figure is created if None.

    Returns:
        The matplotlib axes.
    """
    if ax is None:
        _, ax = plt.subplots()

    corners = projected.corners
    for i, j in BOX_EDGES:
        ax.plot(*corners[[i, j]].T, color="black", linewidth=1)

    # Label the pure axis corners
    origin = corners[ORIGIN_INDEX]
    for label, index, color in zip("xyz", AXIS_CORNER_INDICES, ("red", "green", "blue")):
        ax.plot(*np.vstack((origin, corners[index])).T, color=color, linewidth=2)
        ax.annotate(label, corners[index], color=color)

    # Up-vector, scaled to a fraction of the box
    size = max(projected.span_x, projected.span_y)
    up = projected.up_vector / np.linalg.norm(projected.up_vector) * 0.25 * size
    ax.annotate(
        "up",
        xy=origin + up,
        xytext=origin,
        arrowprops={"arrowstyle": "->", "color": "gray"},
    )

    ax.set_aspect("equal")
    ax.set_xlabel("x'")
    ax.set_ylabel("y'")
    return ax
