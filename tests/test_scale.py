import numpy as np
import pytest

from axisscale.configs.scale_result import ProjectedBox
from axisscale.exceptions import DegenerateProjectionError
from axisscale.pipeline.projection import project_axes_box
from axisscale.pipeline.scale import extract_axis_factors, recover_points_per_unit

SQRT_HALF = np.sqrt(0.5)


@pytest.fixture
def unit_cube_at_45():
    # Azimuth 0, elevation 45: x' = x, y' = (y + z) / sqrt(2)
    extents, aspect = np.ones(3), np.ones(3)
    box = project_axes_box(extents, aspect, np.array([0.0, 0.0, 1.0]), 0.0, 45.0)
    return box, extents, aspect


def test_spans_of_unit_cube_at_45(unit_cube_at_45):
    box, _, _ = unit_cube_at_45
    assert box.span_x == pytest.approx(1.0)
    assert box.span_y == pytest.approx(2 * SQRT_HALF)


def test_binding_dimension_sets_scale(unit_cube_at_45):
    box, _, _ = unit_cube_at_45
    # Vertical span is larger, so the height limits the scale
    assert recover_points_per_unit(box, 100.0, 100.0) == pytest.approx(100 / np.sqrt(2))
    # A short wide viewport is still height-bound, a tall narrow one width-bound
    assert recover_points_per_unit(box, 400.0, 100.0) == pytest.approx(100 / np.sqrt(2))
    assert recover_points_per_unit(box, 50.0, 400.0) == pytest.approx(50.0)


def test_axis_factors_of_unit_cube_at_45(unit_cube_at_45):
    box, extents, aspect = unit_cube_at_45
    points_per_unit = recover_points_per_unit(box, 100.0, 100.0)

    xppt, yppt, zppt = extract_axis_factors(box, extents, aspect, points_per_unit)

    assert xppt == pytest.approx(np.sqrt(2) / 100)
    assert yppt == pytest.approx(1 / 50)
    assert zppt == pytest.approx(1 / 50)


def test_flat_box_is_degenerate():
    corners = np.array([[float(i), 0.0] for i in range(8)])
    box = ProjectedBox(corners=corners, up_vector=np.array([0.0, 1.0]), rotation_angle=0.0)

    with pytest.raises(DegenerateProjectionError, match="degenerate"):
        recover_points_per_unit(box, 100.0, 100.0)


def test_end_on_axis_is_degenerate():
    # Azimuth 0, elevation 0 looks straight down the y axis
    extents, aspect = np.ones(3), np.ones(3)
    box = project_axes_box(extents, aspect, np.array([0.0, 0.0, 1.0]), 0.0, 0.0)
    points_per_unit = recover_points_per_unit(box, 100.0, 100.0)

    with pytest.raises(DegenerateProjectionError, match="y axis"):
        extract_axis_factors(box, extents, aspect, points_per_unit)
