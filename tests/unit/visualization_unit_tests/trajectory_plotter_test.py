# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Unit Tests for TrajectoryPlotter

Image export is exercised through '.html' output, which needs no external
renderer; raster export is mostly checked by intercepting Figure.write_image,
with one end-to-end PNG test that runs when Kaleido is installed.
"""

import numpy as np
import plotly.graph_objects as go
import pytest

from chaossim import DoublePendulum, Lorenz, Rossler, Simulator, Trajectory
from chaossim.visualization import DEFAULT_OUTPUT_PATHS, RenderingError, TrajectoryPlotter


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def plotter():
    return TrajectoryPlotter()


@pytest.fixture
def lorenz_trajectory():
    return Simulator(Lorenz(), x0=[1.0, 1.0, 1.0], dt=0.01, steps=200).simulate()


@pytest.fixture
def pendulum_trajectory():
    return Simulator(DoublePendulum(), x0=[0.5, 0.2, 0.0, 0.0], dt=0.01, steps=50).simulate()


@pytest.fixture
def record_write_image(monkeypatch):
    calls = []

    def fake_write_image(self, path, width=None, height=None, **kwargs):
        calls.append({"path": path, "width": width, "height": height})

    monkeypatch.setattr(go.Figure, "write_image", fake_write_image)
    return calls


# ============================================================================
# Initialization
# ============================================================================


class TestInitialization:
    def test_default_theme(self, plotter):
        assert plotter.default_theme == "default"

    def test_custom_theme(self):
        assert TrajectoryPlotter(default_theme="dark").default_theme == "dark"

    def test_unknown_theme(self):
        with pytest.raises(ValueError):
            TrajectoryPlotter(default_theme="neon")


# ============================================================================
# Time-Series Plots
# ============================================================================


class TestPlotTrajectory:
    def test_one_series_per_coordinate(self, plotter, lorenz_trajectory):
        fig = plotter.plot_trajectory(lorenz_trajectory)
        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 3
        assert [trace.name for trace in fig.data] == ["x", "y", "z"]

    def test_series_values(self, plotter, lorenz_trajectory):
        fig = plotter.plot_trajectory(lorenz_trajectory)
        np.testing.assert_array_equal(fig.data[1].y, lorenz_trajectory.coordinate("y"))
        np.testing.assert_allclose(fig.data[0].x, lorenz_trajectory.times)

    def test_four_coordinates(self, plotter, pendulum_trajectory):
        fig = plotter.plot_trajectory(pendulum_trajectory)
        assert len(fig.data) == 4

    def test_default_title(self, plotter, lorenz_trajectory):
        fig = plotter.plot_trajectory(lorenz_trajectory)
        assert fig.layout.title.text == "Lorenz trajectory"

    def test_custom_title_and_names(self, plotter, lorenz_trajectory):
        fig = plotter.plot_trajectory(
            lorenz_trajectory, state_names=["a", "b", "c"], title="Custom"
        )
        assert fig.layout.title.text == "Custom"
        assert fig.data[2].name == "c"

    def test_state_names_length_mismatch(self, plotter, lorenz_trajectory):
        with pytest.raises(ValueError, match="state names"):
            plotter.plot_trajectory(lorenz_trajectory, state_names=["a", "b"])

    def test_color_scheme(self, plotter, lorenz_trajectory):
        fig = plotter.plot_trajectory(lorenz_trajectory, color_scheme="d3")
        assert fig.data[0].line.color == "#1f77b4"

    def test_layout_kwargs(self, plotter, lorenz_trajectory):
        fig = plotter.plot_trajectory(lorenz_trajectory, showlegend=False)
        assert fig.layout.showlegend is False

    def test_does_not_modify_trajectory(self, plotter, lorenz_trajectory):
        before = lorenz_trajectory.states.copy()
        plotter.plot_trajectory(lorenz_trajectory)
        np.testing.assert_array_equal(lorenz_trajectory.states, before)

    def test_diverged_trajectory_is_annotated(self, plotter):
        sim = Simulator(Lorenz(), x0=[1e200, 1e200, 1e200], dt=0.01, steps=5)
        with pytest.warns(RuntimeWarning):
            trajectory = sim.simulate()
        fig = plotter.plot_trajectory(trajectory)
        assert len(fig.layout.shapes) == 1

    def test_empty_trajectory(self, plotter):
        trajectory = Trajectory(("x", "y", "z"), dt=0.1, system_name="Lorenz")
        fig = plotter.plot_trajectory(trajectory)
        assert len(fig.data) == 3


# ============================================================================
# 3-D Plots
# ============================================================================


class TestPlotTrajectory3D:
    def test_phase_curve(self, plotter, lorenz_trajectory):
        fig = plotter.plot_trajectory_3d(lorenz_trajectory)
        assert isinstance(fig.data[0], go.Scatter3d)
        np.testing.assert_array_equal(fig.data[0].z, lorenz_trajectory.coordinate("z"))
        assert fig.layout.scene.xaxis.title.text == "x"

    def test_start_end_markers(self, plotter, lorenz_trajectory):
        fig = plotter.plot_trajectory_3d(lorenz_trajectory)
        assert [trace.name for trace in fig.data] == ["Trajectory", "Start", "End"]

    def test_without_markers(self, plotter, lorenz_trajectory):
        fig = plotter.plot_trajectory_3d(lorenz_trajectory, show_start_end=False)
        assert len(fig.data) == 1

    def test_custom_indices(self, plotter, pendulum_trajectory):
        fig = plotter.plot_trajectory_3d(pendulum_trajectory, state_indices=(0, 1, 3))
        assert fig.layout.scene.zaxis.title.text == "omega2"

    def test_index_out_of_range(self, plotter, lorenz_trajectory):
        with pytest.raises(ValueError, match="out of range"):
            plotter.plot_trajectory_3d(lorenz_trajectory, state_indices=(0, 1, 3))

    def test_wrong_number_of_indices(self, plotter, lorenz_trajectory):
        with pytest.raises(ValueError, match="3 entries"):
            plotter.plot_trajectory_3d(lorenz_trajectory, state_indices=(0, 1))


# ============================================================================
# Rendering to Files
# ============================================================================


class TestRender:
    def test_default_paths(self):
        assert DEFAULT_OUTPUT_PATHS == {
            "Lorenz": "lorenz_attractor.png",
            "Rossler": "rossler_attractor.png",
            "DoublePendulum": "double_pendulum.png",
        }

    def test_html_output(self, plotter, lorenz_trajectory, tmp_path):
        path = plotter.render(lorenz_trajectory, tmp_path / "lorenz.html")
        assert path == tmp_path / "lorenz.html"
        assert path.exists()
        assert "plotly" in path.read_text(encoding="utf-8").lower()

    def test_html_output_overwrites(self, plotter, lorenz_trajectory, tmp_path):
        target = tmp_path / "lorenz.html"
        target.write_text("stale", encoding="utf-8")
        plotter.render(lorenz_trajectory, target)
        assert target.read_text(encoding="utf-8") != "stale"

    def test_raster_output_size(self, plotter, lorenz_trajectory, tmp_path, record_write_image):
        plotter.render(lorenz_trajectory, tmp_path / "lorenz.png")
        assert record_write_image == [
            {"path": str(tmp_path / "lorenz.png"), "width": 800, "height": 600}
        ]

    def test_real_png_dimensions(self, plotter, lorenz_trajectory, tmp_path):
        pytest.importorskip("kaleido")
        try:
            path = plotter.render(lorenz_trajectory, tmp_path / "lorenz.png")
        except RenderingError as e:
            # Kaleido >= 1.0 drives an installed Chrome
            if "chrome" in str(e.__cause__).lower():
                pytest.skip("Kaleido found no Chrome installation")
            raise

        header = path.read_bytes()[:24]
        assert header[:8] == b"\x89PNG\r\n\x1a\n"
        assert header[12:16] == b"IHDR"
        assert int.from_bytes(header[16:20], "big") == 800
        assert int.from_bytes(header[20:24], "big") == 600

    def test_default_path_per_system(self, plotter, record_write_image, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        trajectory = Simulator(Rossler(), x0=[1.0, 1.0, 0.0], dt=0.01, steps=10).simulate()
        path = plotter.render(trajectory)
        assert str(path) == "rossler_attractor.png"
        assert record_write_image[0]["path"] == "rossler_attractor.png"

    def test_3d_kind(self, plotter, lorenz_trajectory, tmp_path):
        path = plotter.render(lorenz_trajectory, tmp_path / "lorenz3d.html", kind="3d")
        assert path.exists()

    def test_unknown_kind(self, plotter, lorenz_trajectory, tmp_path):
        with pytest.raises(RenderingError, match="kind"):
            plotter.render(lorenz_trajectory, tmp_path / "x.html", kind="polar")

    def test_no_default_path(self, plotter):
        trajectory = Trajectory(("u",), dt=0.1, system_name="Custom")
        trajectory.append([0.0])
        with pytest.raises(RenderingError, match="No default output path"):
            plotter.render(trajectory)

    def test_missing_directory(self, plotter, lorenz_trajectory, tmp_path):
        with pytest.raises(RenderingError) as excinfo:
            plotter.render(lorenz_trajectory, tmp_path / "missing" / "lorenz.html")
        assert excinfo.value.__cause__ is not None

    def test_writer_failure_is_wrapped(self, plotter, lorenz_trajectory, tmp_path, monkeypatch):
        def failing_write_image(self, *args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(go.Figure, "write_image", failing_write_image)
        with pytest.raises(RenderingError, match="disk full") as excinfo:
            plotter.render(lorenz_trajectory, tmp_path / "lorenz.png")
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_failure_leaves_trajectory_intact(
        self, plotter, lorenz_trajectory, tmp_path, monkeypatch
    ):
        def failing_write_image(self, *args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(go.Figure, "write_image", failing_write_image)
        before = lorenz_trajectory.states.copy()
        with pytest.raises(RenderingError):
            plotter.render(lorenz_trajectory, tmp_path / "lorenz.png")
        np.testing.assert_array_equal(lorenz_trajectory.states, before)
        assert len(lorenz_trajectory) == 200
