"""
Matplotlib host adapter.

Reads a 3D matplotlib axes into an ``AxesSnapshot`` without modifying it and
runs the scale computation on the snapshot.

Matplotlib conventions differ from the ones used by the computation:
- Azimuth: matplotlib's azimuth 0 looks along -x; the computation expects
  azimuth 0 to look along +y, so 90 degrees are added.
- Aspect: matplotlib stores the relative physical box side lengths (box
  aspect); the data aspect ratio per axis is ``extent / box_side``.
- Roll: folded into the up-vector as the world direction shown upward.
- Size: matplotlib draws the 3D box inside the axes area with a margin that
  depends on the view, so the viewport is the on-screen extent of the box
  itself, measured after drawing the figure.
"""

import itertools
import logging
import warnings

import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d import Axes3D, proj3d

from axisscale.configs.scale_config import ScaleConfig
from axisscale.configs.scale_result import AxisScaleResult
from axisscale.enums import DiagnosticKind, ProjectionMode, ScaleKind
from axisscale.exceptions import (
    ExtraArgumentsWarning,
    InvalidInputError,
    PerspectiveApproximationWarning,
)
from axisscale.models.axes_state import (
    AxesSnapshot,
    AxisLimits,
    ViewportSettings,
    ViewSettings,
)
from axisscale.pipeline.pipeline import compute_from_snapshot
from axisscale.pipeline.projection import cosd, orthographic_matrix, sind

logger = logging.getLogger(__name__)

AZIMUTH_OFFSET_DEG = 90.0
DEFAULT_BOX_ASPECT = (4.0, 4.0, 3.0)

WARNING_CATEGORIES = {
    DiagnosticKind.PERSPECTIVE_APPROXIMATED: PerspectiveApproximationWarning,
    DiagnosticKind.EXTRA_ARGUMENTS_IGNORED: ExtraArgumentsWarning,
}


def _limits(lims: tuple[float, float]) -> AxisLimits:
    # Inverted axes have the same on-screen scale
    lo, hi = sorted(float(v) for v in lims)
    return AxisLimits(min=lo, max=hi)


def _scale_kind(scale: str) -> ScaleKind:
    return ScaleKind.LINEAR if scale == "linear" else ScaleKind.LOG


def screen_up_vector(
    azimuth_deg: float, elevation_deg: float, roll_deg: float = 0.0
) -> np.ndarray:
    """
    World direction shown upward on screen for a view, in world units.

    Args:
        azimuth_deg: Azimuth in the computation's convention.
        elevation_deg: Elevation in degrees.
        roll_deg: Camera roll in degrees; positive rolls rotate the scene
            counterclockwise on screen.

    Returns:
        Unit vector of shape (3,) lying in the view plane.
    """
    right, up = orthographic_matrix(azimuth_deg, elevation_deg)
    return sind(roll_deg) * right + cosd(roll_deg) * up


def display_points(ax, xs, ys, zs, config: ScaleConfig | None = None) -> np.ndarray:
    """
    On-screen positions of 3D data points, in points from the figure corner.

    Uses the projection of the last draw, so the figure should be drawn
    after the axes were last changed.

    Args:
        ax: 3D matplotlib axes.
        xs, ys, zs: Data coordinates.
        config: Scale configuration (uses defaults if None).

    Returns:
        Array of shape (N, 2).
    """
    if config is None:
        config = ScaleConfig()

    px, py, _ = proj3d.proj_transform(
        np.asarray(xs, dtype=float),
        np.asarray(ys, dtype=float),
        np.asarray(zs, dtype=float),
        ax.get_proj(),
    )
    pixels = ax.transData.transform(np.column_stack((px, py)))
    return pixels / ax.get_figure().dpi * config.points_per_inch


def box_extent_points(ax, config: ScaleConfig | None = None) -> tuple[float, float]:
    """
    Horizontal and vertical on-screen extent of the axes box in points.

    The figure is drawn first so that the layout and projection are current.
    """
    ax.get_figure().canvas.draw()

    corners = np.array(
        list(itertools.product(ax.get_xlim(), ax.get_ylim(), ax.get_zlim()))
    )
    screen = display_points(ax, *corners.T, config=config)
    width, height = np.ptp(screen, axis=0)
    logger.debug("Axes box drawn as %.2f x %.2f points", width, height)
    return float(width), float(height)


def snapshot_from_axes(ax, config: ScaleConfig | None = None) -> AxesSnapshot:
    """
    Take a read-only snapshot of a 3D matplotlib axes.

    Args:
        ax: An ``mpl_toolkits.mplot3d.Axes3D`` instance.
        config: Scale configuration (uses defaults if None).

    Returns:
        AxesSnapshot with the viewport set to the drawn box extent in points.

    Raises:
        InvalidInputError: If ``ax`` is not a 3D axes.
    """
    if not isinstance(ax, Axes3D):
        raise InvalidInputError(
            f'Input must be a 3D axes (Axes3D), not "{type(ax).__name__}".'
        )

    # Drawing settles pending autoscaling, so measure before reading limits
    width_pts, height_pts = box_extent_points(ax, config)

    xlim, ylim, zlim = _limits(ax.get_xlim()), _limits(ax.get_ylim()), _limits(ax.get_zlim())
    extents = np.array([xlim.extent, ylim.extent, zlim.extent])

    box_aspect = ax.get_box_aspect()
    if box_aspect is None:
        box_aspect = DEFAULT_BOX_ASPECT
    aspect = extents / np.asarray(box_aspect, dtype=float)

    azimuth = float(ax.azim) + AZIMUTH_OFFSET_DEG
    elevation = float(ax.elev)
    roll = float(getattr(ax, "roll", 0.0) or 0.0)

    # Up-vector in data coordinates, undone again by the aspect division
    up_vector = screen_up_vector(azimuth, elevation, roll) * aspect

    # Orthographic axes have an infinite focal length
    focal_length = getattr(ax, "_focal_length", np.inf)
    projection = (
        ProjectionMode.ORTHOGRAPHIC
        if np.isinf(focal_length)
        else ProjectionMode.PERSPECTIVE
    )

    snapshot = AxesSnapshot(
        xlim=xlim,
        ylim=ylim,
        zlim=zlim,
        aspect=tuple(float(v) for v in aspect),
        view=ViewSettings(
            azimuth=azimuth,
            elevation=elevation,
            up_vector=tuple(float(v) for v in up_vector),
            projection=projection,
        ),
        viewport=ViewportSettings(
            width=width_pts,
            height=height_pts,
            units="pt",
        ),
        scales=(
            _scale_kind(ax.get_xscale()),
            _scale_kind(ax.get_yscale()),
            _scale_kind(ax.get_zscale()),
        ),
    )
    logger.debug("Axes snapshot: %s", snapshot)
    return snapshot


def points2axes(ax=None, *extra_args, config: ScaleConfig | None = None) -> AxisScaleResult:
    """
    Conversion factors between points and axis units for a matplotlib axes.

    ``xppt`` is the number of x axis units that corresponds to a length of
    1 point (1/72 inch) on screen; ``yppt`` and ``zppt`` likewise. Changing
    the figure size or the limits, view or aspect of the axes changes the
    factors, so freeze the limits (see ``freeze_limits``) before adding
    objects sized with them.

    Log axes are not supported. Perspective axes get the factors of the
    corresponding orthographic projection and a warning.

    Args:
        ax: 3D axes to evaluate; the current axes if None.
        *extra_args: Ignored, with a warning.
        config: Scale configuration (uses defaults if None).

    Returns:
        AxisScaleResult, which unpacks as ``xppt, yppt, zppt``.

    Example:
        >>> ax = plt.figure().add_subplot(projection="3d", proj_type="ortho")
        >>> ax.set(xlim=(-1, 1), ylim=(-2, 2), zlim=(-3, 3))
        >>> xppt, yppt, zppt = points2axes(ax)
        >>> ax.plot([-20 * xppt, 20 * xppt], [0, 0], [0, 0])
    """
    if ax is None:
        ax = plt.gca()

    snapshot = snapshot_from_axes(ax, config)
    result = compute_from_snapshot(snapshot, config, ignored_args=extra_args)

    for diagnostic in result.diagnostics:
        warnings.warn(diagnostic.message, WARNING_CATEGORIES[diagnostic.kind], stacklevel=2)

    return result


def freeze_limits(ax) -> None:
    """Pin the current limits of a 3D axes and turn autoscaling off."""
    if not isinstance(ax, Axes3D):
        raise InvalidInputError(
            f'Input must be a 3D axes (Axes3D), not "{type(ax).__name__}".'
        )
    ax.set_xlim(ax.get_xlim())
    ax.set_ylim(ax.get_ylim())
    ax.set_zlim(ax.get_zlim())
    ax.set_autoscale_on(False)
