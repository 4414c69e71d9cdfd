import warnings

import matplotlib.pyplot as plt
import numpy as np
import pytest

from axisscale.adapters.matplotlib_axes import (
    box_extent_points,
    display_points,
    freeze_limits,
    points2axes,
    screen_up_vector,
    snapshot_from_axes,
)
from axisscale.configs.scale_config import ScaleConfig
from axisscale.enums import DiagnosticKind, ProjectionMode
from axisscale.exceptions import (
    ExtraArgumentsWarning,
    InvalidInputError,
    PerspectiveApproximationWarning,
)
from axisscale.pipeline.pipeline import compute_from_snapshot, project_snapshot
from axisscale.plotting import draw_scale_bars, plot_projected_box


@pytest.fixture
def ortho_axes():
    fig = plt.figure(figsize=(4, 3))
    ax = fig.add_axes([0, 0, 1, 1], projection="3d", proj_type="ortho")
    ax.set_xlim(-1, 1)
    ax.set_ylim(-2, 2)
    ax.set_zlim(-3, 3)
    ax.view_init(elev=30, azim=-60)
    yield ax
    plt.close(fig)


def test_snapshot_reads_axes(ortho_axes):
    snapshot = snapshot_from_axes(ortho_axes)

    assert snapshot.xlim.as_tuple() == pytest.approx((-1, 1))
    assert snapshot.zlim.as_tuple() == pytest.approx((-3, 3))
    assert snapshot.view.azimuth == pytest.approx(30.0)
    assert snapshot.view.elevation == pytest.approx(30.0)
    assert snapshot.view.projection is ProjectionMode.ORTHOGRAPHIC
    # The box is drawn inside the 3 x 3 in square region of the axes
    assert snapshot.viewport.units == "pt"
    assert 0 < snapshot.viewport.width < 3 * 72
    assert 0 < snapshot.viewport.height < 3 * 72
    assert (snapshot.viewport.width, snapshot.viewport.height) == pytest.approx(
        box_extent_points(ortho_axes)
    )


def test_snapshot_sorts_inverted_limits(ortho_axes):
    ortho_axes.set_xlim(1, -1)
    assert snapshot_from_axes(ortho_axes).xlim.as_tuple() == pytest.approx((-1, 1))


def test_snapshot_aspect_follows_box_aspect(ortho_axes):
    ortho_axes.set_box_aspect((1, 2, 3))
    aspect = np.array(snapshot_from_axes(ortho_axes).aspect)

    # Extents 2, 4, 6 over box sides proportional to 1, 2, 3
    np.testing.assert_allclose(aspect / aspect[0], [1, 1, 1])


def test_snapshot_up_vector_shows_upward(ortho_axes):
    ortho_axes.view_init(elev=30, azim=-60, roll=25)
    projected = project_snapshot(snapshot_from_axes(ortho_axes))

    # Rolled views need a rotation, the rotated up-vector points straight up
    assert projected.rotation_angle == pytest.approx(np.deg2rad(25), abs=1e-9)
    assert projected.up_vector[0] == pytest.approx(0.0, abs=1e-12)


def test_screen_up_vector():
    np.testing.assert_allclose(screen_up_vector(0, 0), [0, 0, 1], atol=1e-15)
    np.testing.assert_allclose(screen_up_vector(0, 90), [0, 1, 0], atol=1e-15)
    np.testing.assert_allclose(screen_up_vector(0, 90, 90), [1, 0, 0], atol=1e-15)


def test_points2axes_matches_snapshot(ortho_axes):
    with warnings.catch_warnings():
        warnings.simplefilter("error", PerspectiveApproximationWarning)
        warnings.simplefilter("error", ExtraArgumentsWarning)
        result = points2axes(ortho_axes)

    expected = compute_from_snapshot(snapshot_from_axes(ortho_axes))
    assert result.as_tuple() == pytest.approx(expected.as_tuple())
    assert result.diagnostics == ()


def test_points2axes_uses_current_axes(ortho_axes):
    plt.sca(ortho_axes)
    assert points2axes().as_tuple() == pytest.approx(points2axes(ortho_axes).as_tuple())


def test_points2axes_warns_on_extra_arguments(ortho_axes):
    with pytest.warns(ExtraArgumentsWarning):
        result = points2axes(ortho_axes, "unused")
    assert result.has_diagnostic(DiagnosticKind.EXTRA_ARGUMENTS_IGNORED)


def test_points2axes_warns_on_perspective():
    fig = plt.figure()
    ax = fig.add_subplot(projection="3d", proj_type="persp")
    try:
        with pytest.warns(PerspectiveApproximationWarning):
            result = points2axes(ax)
        assert result.has_diagnostic(DiagnosticKind.PERSPECTIVE_APPROXIMATED)
    finally:
        plt.close(fig)


def test_2d_axes_are_rejected():
    fig, ax = plt.subplots()
    try:
        with pytest.raises(InvalidInputError, match="Axes3D"):
            points2axes(ax)
        with pytest.raises(InvalidInputError):
            freeze_limits(ax)
    finally:
        plt.close(fig)


def test_freeze_limits_stops_autoscaling():
    fig = plt.figure()
    ax = fig.add_subplot(projection="3d")
    try:
        ax.plot([0, 1], [0, 2], [0, 3])
        before = (ax.get_xlim(), ax.get_ylim(), ax.get_zlim())

        freeze_limits(ax)
        ax.plot([0, 100], [0, 100], [0, 100])

        assert ax.get_xlim() == pytest.approx(before[0])
        assert ax.get_ylim() == pytest.approx(before[1])
        assert ax.get_zlim() == pytest.approx(before[2])
    finally:
        plt.close(fig)


@pytest.mark.parametrize("roll", [0, 25])
def test_draw_scale_bars_measure_on_screen(ortho_axes, roll):
    ortho_axes.view_init(elev=30, azim=-60, roll=roll)
    lines = draw_scale_bars(ortho_axes, length_pts=20, color="red")
    ortho_axes.get_figure().canvas.draw()

    assert len(lines) == 3
    for line in lines:
        coords = np.asarray(line.get_data_3d())
        # Lines cross at the centre of the limits
        assert coords[:, 0] + coords[:, 1] == pytest.approx(np.zeros(3), abs=1e-12)

        start, end = display_points(ortho_axes, *coords)
        assert np.linalg.norm(end - start) == pytest.approx(40.0, rel=1e-6)


def test_snapshot_viewport_follows_points_per_inch(ortho_axes):
    default = snapshot_from_axes(ortho_axes).viewport
    doubled = snapshot_from_axes(ortho_axes, ScaleConfig(points_per_inch=144)).viewport

    assert doubled.width == pytest.approx(2 * default.width)
    assert doubled.height == pytest.approx(2 * default.height)


def test_plot_projected_box(ortho_axes):
    projected = project_snapshot(snapshot_from_axes(ortho_axes))
    fig, ax = plt.subplots()
    try:
        assert plot_projected_box(projected, ax=ax) is ax
        # 12 box edges plus the three highlighted axes
        assert len(ax.lines) == 15
    finally:
        plt.close(fig)
