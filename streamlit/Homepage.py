import os
import sys

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from axisscale.adapters.matplotlib_axes import snapshot_from_axes
from axisscale.exceptions import AxisScaleError
from axisscale.pipeline.pipeline import compute_from_snapshot, project_snapshot
from axisscale.plotting import draw_scale_bars, plot_projected_box

# Set page config (this MUST be the first Streamlit command)
st.set_page_config(
    page_title="Points to Axis Units",
    page_icon="📏",
    layout="wide",
)

st.title("📏 Points to Axis Units for 3D Plots")
st.markdown("""
Conversion factors between points (1/72 inch) and data units along each axis of a
3D plot, for a given view, data aspect ratio and axes size. Objects sized with these
factors keep a fixed on-screen size, e.g. markers or scale bars.
""")
st.markdown("---")


# ============================================================================
# Sidebar Controls
# ============================================================================
with st.sidebar:
    st.header("Axes")
    limits = {}
    for name, default in (("x", 1.0), ("y", 2.0), ("z", 3.0)):
        limits[name] = st.slider(f"{name} limits", -10.0, 10.0, (-default, default))

    st.header("Data aspect ratio")
    aspect = tuple(
        st.number_input(f"d{name}", min_value=0.1, value=value, step=0.5)
        for name, value in (("x", 2.0), ("y", 3.0), ("z", 5.0))
    )

    st.header("View")
    azimuth = st.slider("Azimuth (°)", -180.0, 180.0, -37.5)
    elevation = st.slider("Elevation (°)", -90.0, 90.0, 30.0)

    st.header("Axes size")
    width_in = st.number_input("Width (in)", min_value=1.0, value=6.0)
    height_in = st.number_input("Height (in)", min_value=1.0, value=4.5)
    bar_pts = st.slider("Scale bar half-length (pt)", 5.0, 100.0, 20.0)


if any(hi <= lo for lo, hi in limits.values()):
    st.error("⚠️ Each axis needs a non-empty range.")
    st.stop()

# The factors are read from the figure that is shown, so the bars measure true
# points. Matplotlib azimuth 0 looks along -x, hence the 90 degree offset.
fig = plt.figure(figsize=(width_in, height_in))
ax = fig.add_axes([0, 0, 1, 1], projection="3d", proj_type="ortho")
ax.set_xlim(*limits["x"])
ax.set_ylim(*limits["y"])
ax.set_zlim(*limits["z"])
extents = [limits[n][1] - limits[n][0] for n in "xyz"]
ax.set_box_aspect([e / d for e, d in zip(extents, aspect)])
ax.view_init(elev=elevation, azim=azimuth - 90.0)

try:
    snapshot = snapshot_from_axes(ax)
    result = compute_from_snapshot(snapshot)
except AxisScaleError as e:
    st.error(f"⚠️ {e}")
    st.stop()


# ============================================================================
# Results
# ============================================================================
st.caption(
    f"Axes box drawn as {snapshot.viewport.width:.1f} x "
    f"{snapshot.viewport.height:.1f} pt"
)

col_x, col_y, col_z = st.columns(3)
col_x.metric("x units / pt", f"{result.xppt:.4g}")
col_y.metric("y units / pt", f"{result.yppt:.4g}")
col_z.metric("z units / pt", f"{result.zppt:.4g}")

st.dataframe(
    pd.DataFrame(
        {
            "axis": ["x", "y", "z"],
            "units per point": result.as_tuple(),
            f"units per {bar_pts:g} pt": result.data_lengths(bar_pts),
        }
    ),
    hide_index=True,
)

left, right = st.columns(2)

with left:
    st.subheader("Scale bars")
    draw_scale_bars(ax, length_pts=bar_pts, result=result, color="crimson", linewidth=2)
    # A tight bounding box would crop the figure and change its scale
    st.pyplot(fig, bbox_inches=None)

with right:
    st.subheader("Projected axes box")
    fig_box, ax_box = plt.subplots(figsize=(5, 5))
    plot_projected_box(project_snapshot(snapshot), ax=ax_box)
    st.pyplot(fig_box)
