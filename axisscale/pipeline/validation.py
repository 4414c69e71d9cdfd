"""
Input validation and mode resolution for the axis scale computation.

Fatal problems raise an ``AxisScaleError`` subclass before anything is
computed; non-fatal ones are returned as ``Diagnostic`` values.
"""

import logging
from collections.abc import Sequence

import numpy as np

from axisscale.configs.scale_result import Diagnostic
from axisscale.enums import DiagnosticKind, ProjectionMode, ScaleKind
from axisscale.exceptions import InvalidInputError, UnsupportedScaleError

logger = logging.getLogger(__name__)

AXIS_NAMES = ("x", "y", "z")


def check_scale_kinds(scale_kinds: Sequence[ScaleKind | str]) -> None:
    """
    Reject logarithmic axes.

    Args:
        scale_kinds: Scale kind of the x, y and z axes, as enum members or
            their string values ("linear", "log").

    Raises:
        InvalidInputError: If there are not exactly three entries or one is unknown.
        UnsupportedScaleError: If any axis is logarithmic.
    """
    if len(scale_kinds) != 3:
        raise InvalidInputError(
            f"Expected three scale kinds (x, y, z), got {len(scale_kinds)}"
        )

    # Log axes are reported first, even next to an unknown kind
    for name, kind in zip(AXIS_NAMES, scale_kinds):
        if kind == ScaleKind.LOG or kind == ScaleKind.LOG.value:
            raise UnsupportedScaleError(
                f"Log plots are not supported ({name} axis is logarithmic)"
            )

    for name, kind in zip(AXIS_NAMES, scale_kinds):
        try:
            ScaleKind(kind)
        except ValueError:
            raise InvalidInputError(f"Unknown scale kind for {name} axis: {kind!r}")


def resolve_projection(projection_mode: ProjectionMode | str) -> list[Diagnostic]:
    """
    Resolve the projection mode to the orthographic computation.

    Perspective factors depend on position and have no unique value, so the
    factors of the corresponding orthographic projection are used instead.

    Args:
        projection_mode: Projection of the axes.

    Returns:
        A list holding a PERSPECTIVE_APPROXIMATED diagnostic for perspective
        axes, empty otherwise.
    """
    try:
        mode = ProjectionMode(projection_mode)
    except ValueError:
        raise InvalidInputError(f"Unknown projection mode: {projection_mode!r}")

    if mode is ProjectionMode.PERSPECTIVE:
        message = (
            "Perspective projection; returning orthographic projection conversion factors"
        )
        logger.warning(message)
        return [Diagnostic(DiagnosticKind.PERSPECTIVE_APPROXIMATED, message)]
    return []


def check_extra_arguments(extra_args: Sequence) -> list[Diagnostic]:
    """Note extraneous arguments, which are ignored."""
    if not extra_args:
        return []
    message = (
        f"Only one axes argument is accepted; {len(extra_args)} other "
        f"argument(s) ignored"
    )
    logger.warning(message)
    return [Diagnostic(DiagnosticKind.EXTRA_ARGUMENTS_IGNORED, message)]


def _as_finite_vector(values, size: int, what: str) -> np.ndarray:
    try:
        vector = np.asarray(values, dtype=float)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{what} must be numeric, got {values!r}")
    if vector.shape != (size,):
        raise InvalidInputError(
            f"{what} must have {size} components, got shape {vector.shape}"
        )
    if not np.all(np.isfinite(vector)):
        raise InvalidInputError(f"{what} must be finite, got {vector.tolist()}")
    return vector


def validate_inputs(
    ranges: Sequence[Sequence[float]],
    aspect_ratio: Sequence[float],
    azimuth_deg: float,
    elevation_deg: float,
    up_vector: Sequence[float],
    viewport_width_pts: float,
    viewport_height_pts: float,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Validate numeric inputs and return them as arrays.

    Args:
        ranges: (min, max) limits of the x, y and z axes.
        aspect_ratio: Data aspect ratio (dx, dy, dz).
        azimuth_deg: Azimuth in degrees.
        elevation_deg: Elevation in degrees.
        up_vector: Camera up-vector.
        viewport_width_pts: Viewport width in points.
        viewport_height_pts: Viewport height in points.

    Returns:
        Tuple (extents, aspect, up) of shape-(3,) float arrays.

    Raises:
        InvalidInputError: On non-finite values, non-positive extents, aspect
            components or viewport sizes, or a zero up-vector.
    """
    if len(ranges) != 3:
        raise InvalidInputError(f"Expected three axis ranges, got {len(ranges)}")

    extents = np.empty(3)
    for i, (name, axis_range) in enumerate(zip(AXIS_NAMES, ranges)):
        lo, hi = _as_finite_vector(axis_range, 2, f"{name} axis limits")
        extents[i] = hi - lo
        if not extents[i] > 0:
            raise InvalidInputError(
                f"{name} axis limits must satisfy min < max, got [{lo}, {hi}]"
            )

    aspect = _as_finite_vector(aspect_ratio, 3, "Data aspect ratio")
    if np.any(aspect <= 0):
        raise InvalidInputError(
            f"Data aspect ratio components must be positive, got {aspect.tolist()}"
        )

    up = _as_finite_vector(up_vector, 3, "Up-vector")
    if not np.any(up):
        raise InvalidInputError("Up-vector must be non-zero")

    _as_finite_vector((azimuth_deg, elevation_deg), 2, "View angles")

    width, height = _as_finite_vector(
        (viewport_width_pts, viewport_height_pts), 2, "Viewport size"
    )
    if width <= 0 or height <= 0:
        raise InvalidInputError(
            f"Viewport size must be positive, got {width} x {height} points"
        )

    return extents, aspect, up
