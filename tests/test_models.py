from pathlib import Path

import pydantic
import pytest

from axisscale.enums import ProjectionMode, ScaleKind
from axisscale.models.axes_state import AxesSnapshot, AxisLimits
from axisscale.utils import load_scenarios_from_yaml

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

SCENARIO_YAML = """
scenarios:
  - id: "a"
    label: "Log z"
    axes:
      xlim: {min: 0, max: 1}
      ylim: {min: 0, max: 2}
      zlim: {min: 1, max: 100}
      view: {azimuth: 10, elevation: 20, projection: perspective}
      viewport: {width: 300, height: 200}
      scales: [linear, linear, log]
  - id: "b"
    axes:
      xlim: {min: -1, max: 1}
      ylim: {min: -1, max: 1}
      zlim: {min: -1, max: 1}
      viewport: {width: 640, height: 480, units: px, dpi: 96}
"""


@pytest.fixture
def scenario_file(tmp_path):
    path = tmp_path / "scenarios.yaml"
    path.write_text(SCENARIO_YAML, encoding="utf-8")
    return path


def test_axis_limits_extent():
    limits = AxisLimits(min=-2.5, max=4.0)
    assert limits.extent == pytest.approx(6.5)
    assert limits.as_tuple() == (-2.5, 4.0)
    assert str(limits) == "[-2.5, 4.0]"


def test_snapshot_defaults():
    snapshot = AxesSnapshot(
        xlim=AxisLimits(min=0, max=1),
        ylim=AxisLimits(min=0, max=1),
        zlim=AxisLimits(min=0, max=1),
        viewport={"width": 100, "height": 100},
    )

    assert snapshot.aspect == (1.0, 1.0, 1.0)
    assert snapshot.view.up_vector == (0.0, 0.0, 1.0)
    assert snapshot.view.projection is ProjectionMode.ORTHOGRAPHIC
    assert snapshot.viewport.units == "pt"
    assert snapshot.scales == (ScaleKind.LINEAR,) * 3


def test_snapshot_is_frozen():
    snapshot = AxesSnapshot(
        xlim={"min": 0, "max": 1},
        ylim={"min": 0, "max": 1},
        zlim={"min": 0, "max": 1},
        viewport={"width": 100, "height": 100},
    )
    with pytest.raises(pydantic.ValidationError):
        snapshot.aspect = (2.0, 1.0, 1.0)


def test_unknown_viewport_units_fail_validation():
    with pytest.raises(pydantic.ValidationError):
        AxesSnapshot(
            xlim={"min": 0, "max": 1},
            ylim={"min": 0, "max": 1},
            zlim={"min": 0, "max": 1},
            viewport={"width": 1, "height": 1, "units": "furlong"},
        )


def test_load_scenarios(scenario_file):
    scenarios = load_scenarios_from_yaml(scenario_file)

    assert scenarios.list_scenarios() == ["a", "b"]
    a = scenarios.get_scenario("a")
    assert a.label == "Log z"
    assert a.axes.scales[2] is ScaleKind.LOG
    assert a.axes.view.projection is ProjectionMode.PERSPECTIVE
    assert scenarios.get_scenario("b").axes.viewport.dpi == 96
    assert scenarios.get_scenario("missing") is None
    assert str(a).startswith("[a] Log z")


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_scenarios_from_yaml(tmp_path / "nope.yaml")


def test_load_invalid_schema(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("scenarios:\n  - id: x\n", encoding="utf-8")

    with pytest.raises(RuntimeError, match="Failed to load scenarios"):
        load_scenarios_from_yaml(path)


def test_bundled_scenarios_load():
    scenarios = load_scenarios_from_yaml(DATA_DIR / "scenarios.yaml")
    assert scenarios.list_scenarios() == ["iso", "top", "persp", "end-on"]
