from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from axisscale.enums import ProjectionMode, ScaleKind


class AxisLimits(BaseModel):
    """
    Visible data range of one axis.

    Attributes:
        min: Lower axis limit in data units
        max: Upper axis limit in data units
    """

    model_config = ConfigDict(frozen=True)

    min: float = Field(..., description="Lower axis limit")
    max: float = Field(..., description="Upper axis limit")

    @property
    def extent(self) -> float:
        """Length of the visible range, ``max - min``."""
        return self.max - self.min

    def as_tuple(self) -> tuple[float, float]:
        return (self.min, self.max)

    def __str__(self) -> str:
        return f"[{self.min}, {self.max}]"


class ViewSettings(BaseModel):
    """
    Camera orientation of a 3D axes.

    Angles follow the azimuth/elevation convention in which azimuth 0 and
    elevation 0 look along +y, and elevation 90 is the top view.

    Attributes:
        azimuth: Horizontal rotation in degrees
        elevation: Vertical rotation in degrees
        up_vector: World direction displayed as upward on screen
        projection: Orthographic or perspective projection
    """

    model_config = ConfigDict(frozen=True)

    azimuth: float = Field(-37.5, description="Azimuth in degrees")
    elevation: float = Field(30.0, description="Elevation in degrees")
    up_vector: tuple[float, float, float] = Field(
        (0.0, 0.0, 1.0), description="Camera up-vector in world coordinates"
    )
    projection: ProjectionMode = Field(
        ProjectionMode.ORTHOGRAPHIC, description="Projection type"
    )


class ViewportSettings(BaseModel):
    """
    Physical size of the plotting region.

    Attributes:
        width: Viewport width in ``units``
        height: Viewport height in ``units``
        units: Length unit of width and height
        dpi: Pixels per inch, only needed for pixel units
    """

    model_config = ConfigDict(frozen=True)

    width: float = Field(..., description="Viewport width")
    height: float = Field(..., description="Viewport height")
    units: Literal["pt", "in", "cm", "mm", "px"] = Field(
        "pt", description="Unit of width and height"
    )
    dpi: float | None = Field(None, gt=0, description="Pixels per inch for 'px'")


class AxesSnapshot(BaseModel):
    """
    Read-only snapshot of everything the scale computation needs from a plot.

    Snapshots are taken from a live plot by a host adapter or loaded from a
    scenario file; the computation itself never touches the host.

    Attributes:
        xlim, ylim, zlim: Visible data ranges
        aspect: Data aspect ratio (data units per equal-length world unit)
        view: Camera orientation and projection
        viewport: Physical size of the plotting region
        scales: Scale kind of the x, y and z axes
    """

    model_config = ConfigDict(frozen=True)

    xlim: AxisLimits
    ylim: AxisLimits
    zlim: AxisLimits
    aspect: tuple[float, float, float] = Field(
        (1.0, 1.0, 1.0), description="Data aspect ratio"
    )
    view: ViewSettings = Field(default_factory=ViewSettings)
    viewport: ViewportSettings
    scales: tuple[ScaleKind, ScaleKind, ScaleKind] = Field(
        (ScaleKind.LINEAR, ScaleKind.LINEAR, ScaleKind.LINEAR),
        description="Scale kind per axis",
    )

    def __str__(self) -> str:
        return (
            f"x {self.xlim}, y {self.ylim}, z {self.zlim}, aspect {self.aspect}, "
            f"view ({self.view.azimuth}, {self.view.elevation}), "
            f"viewport {self.viewport.width}x{self.viewport.height} {self.viewport.units}"
        )
