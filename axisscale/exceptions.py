"""Errors raised by the axis scale computation and warnings used by the host adapter."""


class AxisScaleError(ValueError):
    """Base class for all failures of the points-to-axis-units computation."""


class UnsupportedScaleError(AxisScaleError):
    """An axis uses a logarithmic scale."""


class DegenerateProjectionError(AxisScaleError):
    """The current view collapses the axes box or one of its axis vectors."""


class InvalidInputError(AxisScaleError):
    """Limits, aspect ratio, up-vector, angles or viewport size are unusable."""


class PerspectiveApproximationWarning(UserWarning):
    """Perspective axes were evaluated with the orthographic approximation."""


class ExtraArgumentsWarning(UserWarning):
    """Extra positional arguments were passed and ignored."""
