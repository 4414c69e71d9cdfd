import logging
from collections.abc import Sequence

from axisscale.configs.scale_config import ScaleConfig
from axisscale.configs.scale_result import AxisScaleResult, ProjectedBox
from axisscale.enums import ProjectionMode, ScaleKind
from axisscale.models.axes_state import AxesSnapshot
from axisscale.pipeline.projection import project_axes_box
from axisscale.pipeline.scale import extract_axis_factors, recover_points_per_unit
from axisscale.pipeline.validation import (
    check_extra_arguments,
    check_scale_kinds,
    resolve_projection,
    validate_inputs,
)

logger = logging.getLogger(__name__)

LINEAR_SCALES = (ScaleKind.LINEAR, ScaleKind.LINEAR, ScaleKind.LINEAR)


def compute_axis_scale(
    x_range: Sequence[float],
    y_range: Sequence[float],
    z_range: Sequence[float],
    aspect_ratio: Sequence[float],
    azimuth_deg: float,
    elevation_deg: float,
    up_vector: Sequence[float],
    viewport_width_pts: float,
    viewport_height_pts: float,
    projection_mode: ProjectionMode | str = ProjectionMode.ORTHOGRAPHIC,
    scale_kinds: Sequence[ScaleKind | str] = LINEAR_SCALES,
    ignored_args: Sequence = (),
    config: ScaleConfig | None = None,
) -> AxisScaleResult:
    """
    Compute the conversion factors between points and axis units.

    A length of N points drawn along an axis direction corresponds to
    N * factor data units of that axis. Factors change with the viewport
    size and with the limits, view and aspect ratio of the axes, so inputs
    should be snapshotted after the plot is frozen.

    Args:
        x_range: (min, max) limits of the x axis.
        y_range: (min, max) limits of the y axis.
        z_range: (min, max) limits of the z axis.
        aspect_ratio: Data aspect ratio (dx, dy, dz).
        azimuth_deg: Azimuth in degrees.
        elevation_deg: Elevation in degrees.
        up_vector: Camera up-vector in data coordinates.
        viewport_width_pts: Width of the plotting region in points.
        viewport_height_pts: Height of the plotting region in points.
        projection_mode: Projection of the axes. Perspective is evaluated as
            orthographic and reported in the diagnostics.
        scale_kinds: Scale kind of the x, y and z axes.
        ignored_args: Extra arguments received by a caller; reported in the
            diagnostics when non-empty.
        config: Scale configuration (uses defaults if None).

    Returns:
        AxisScaleResult with xppt, yppt, zppt and any diagnostics.

    Raises:
        UnsupportedScaleError: If any axis is logarithmic.
        InvalidInputError: If limits, aspect ratio, up-vector, angles or
            viewport size are unusable.
        DegenerateProjectionError: If the view collapses the box or an axis.

    Example:
        >>> xppt, yppt, zppt = compute_axis_scale(
        ...     (-1, 1), (-2, 2), (-3, 3), (2, 3, 5), -37.5, 30, (0, 0, 1), 300, 225
        ... )
    """
    if config is None:
        config = ScaleConfig()

    # 1. Validation and mode resolution
    check_scale_kinds(scale_kinds)
    diagnostics = resolve_projection(projection_mode)
    diagnostics += check_extra_arguments(ignored_args)
    extents, aspect, up = validate_inputs(
        (x_range, y_range, z_range),
        aspect_ratio,
        azimuth_deg,
        elevation_deg,
        up_vector,
        viewport_width_pts,
        viewport_height_pts,
    )

    # 2-4. Box construction, projection and up-vector alignment
    box = project_axes_box(extents, aspect, up, azimuth_deg, elevation_deg, config)

    # 5. Points per world unit
    points_per_unit = recover_points_per_unit(
        box, float(viewport_width_pts), float(viewport_height_pts), config.degenerate_tol
    )

    # 6. Axis units per point
    xppt, yppt, zppt = extract_axis_factors(
        box, extents, aspect, points_per_unit, config.degenerate_tol
    )

    logger.debug(
        "Axis units per point: x=%.6g, y=%.6g, z=%.6g", xppt, yppt, zppt
    )
    return AxisScaleResult(
        xppt=xppt,
        yppt=yppt,
        zppt=zppt,
        points_per_unit=points_per_unit,
        diagnostics=tuple(diagnostics),
    )


def viewport_points(snapshot: AxesSnapshot, config: ScaleConfig) -> tuple[float, float]:
    """Viewport width and height of a snapshot in points."""
    viewport = snapshot.viewport
    return (
        config.points_from(viewport.width, viewport.units, viewport.dpi),
        config.points_from(viewport.height, viewport.units, viewport.dpi),
    )


def compute_from_snapshot(
    snapshot: AxesSnapshot,
    config: ScaleConfig | None = None,
    ignored_args: Sequence = (),
) -> AxisScaleResult:
    """
    Run ``compute_axis_scale`` on an axes snapshot.

    Args:
        snapshot: Read-only state of the axes.
        config: Scale configuration (uses defaults if None).
        ignored_args: Extra arguments received by the caller.

    Returns:
        AxisScaleResult for the snapshot.
    """
    if config is None:
        config = ScaleConfig()

    width_pts, height_pts = viewport_points(snapshot, config)
    return compute_axis_scale(
        snapshot.xlim.as_tuple(),
        snapshot.ylim.as_tuple(),
        snapshot.zlim.as_tuple(),
        snapshot.aspect,
        snapshot.view.azimuth,
        snapshot.view.elevation,
        snapshot.view.up_vector,
        width_pts,
        height_pts,
        projection_mode=snapshot.view.projection,
        scale_kinds=snapshot.scales,
        ignored_args=ignored_args,
        config=config,
    )


def project_snapshot(
    snapshot: AxesSnapshot, config: ScaleConfig | None = None
) -> ProjectedBox:
    """
    Validate a snapshot and return its aligned box projection.

    Useful for previews of what the scale computation sees.
    """
    if config is None:
        config = ScaleConfig()

    width_pts, height_pts = viewport_points(snapshot, config)
    extents, aspect, up = validate_inputs(
        (snapshot.xlim.as_tuple(), snapshot.ylim.as_tuple(), snapshot.zlim.as_tuple()),
        snapshot.aspect,
        snapshot.view.azimuth,
        snapshot.view.elevation,
        snapshot.view.up_vector,
        width_pts,
        height_pts,
    )
    return project_axes_box(
        extents, aspect, up, snapshot.view.azimuth, snapshot.view.elevation, config
    )
