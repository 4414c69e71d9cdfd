from dataclasses import dataclass
from typing import Literal

from axisscale.exceptions import InvalidInputError


@dataclass
class ScaleConfig:
    """Configuration for the points-to-axis-units computation."""

    points_per_inch: float = 72.0
    degenerate_tol: float = 1e-12
    projection_method: Literal["matrix", "homogeneous"] = "matrix"

    # Physical length units, expressed in inches
    _unit_conversion = {
        "in": 1.0,
        "cm": 1.0 / 2.54,
        "mm": 1.0 / 25.4,
    }

    def points_from(self, value: float, units: str, dpi: float | None = None) -> float:
        """
        Convert a physical viewport length to points.

        Args:
            value (float): The length to convert.
            units (str): One of "pt", "in", "cm", "mm" or "px".
            dpi (float | None): Pixels per inch, required for "px".

        Returns:
            float: The length in points.

        Raises:
            InvalidInputError: If the units are unknown or "px" is used without a dpi.
        """
        match units:
            case "pt":
                return float(value)
            case "px":
                if dpi is None or dpi <= 0:
                    raise InvalidInputError(
                        "A positive dpi is required to convert pixels to points"
                    )
                return float(value) / dpi * self.points_per_inch
            case _ if units in self._unit_conversion:
                return float(value) * self._unit_conversion[units] * self.points_per_inch
            case _:
                raise InvalidInputError(
                    f"Unsupported viewport units '{units}'. "
                    f"Use 'pt', 'px' or one of {sorted(self._unit_conversion)}."
                )
