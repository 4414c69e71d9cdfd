from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from axisscale.enums import DiagnosticKind


@dataclass(frozen=True)
class Diagnostic:
    """Advisory notice attached to a result; never fatal."""

    kind: DiagnosticKind
    message: str

    def __str__(self) -> str:
        return f"[{self.kind.name}] {self.message}"


@dataclass(frozen=True)
class ProjectedBox:
    """Axes box after projection onto the view plane and up-vector alignment."""

    corners: np.ndarray  # (8, 2) rotated view-plane coordinates
    up_vector: np.ndarray  # (2,) rotated projection of the up-vector
    rotation_angle: float  # radians applied to align the up-vector

    @property
    def span_x(self) -> float:
        """Horizontal extent of the projected box in world units."""
        return float(np.ptp(self.corners[:, 0]))

    @property
    def span_y(self) -> float:
        """Vertical extent of the projected box in world units."""
        return float(np.ptp(self.corners[:, 1]))


@dataclass(frozen=True)
class AxisScaleResult:
    """
    Axis units per point along x, y and z.

    Iterating yields the three factors, so a result unpacks as
    ``xppt, yppt, zppt = result``.
    """

    xppt: float
    yppt: float
    zppt: float
    points_per_unit: float
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[float]:
        return iter((self.xppt, self.yppt, self.zppt))

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.xppt, self.yppt, self.zppt)

    def data_lengths(self, points: float) -> tuple[float, float, float]:
        """Data lengths along x, y and z that render as ``points`` points."""
        return (points * self.xppt, points * self.yppt, points * self.zppt)

    def has_diagnostic(self, kind: DiagnosticKind) -> bool:
        return any(d.kind is kind for d in self.diagnostics)

    def to_dict(self) -> dict:
        """Plain representation for JSON export."""
        return {
            "xppt": self.xppt,
            "yppt": self.yppt,
            "zppt": self.zppt,
            "points_per_unit": self.points_per_unit,
            "diagnostics": [
                {"kind": d.kind.name, "message": d.message} for d in self.diagnostics
            ],
        }
