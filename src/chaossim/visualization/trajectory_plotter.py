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
Trajectory Plotter

Turns a finished Trajectory into Plotly figures and image files. The plotter
only reads the trajectory; it never touches a simulator.

Output format follows the file suffix:
- '.html' : interactive page via Figure.write_html
- anything else ('.png', '.svg', '.pdf', ...) : static image via
  Figure.write_image (requires Kaleido)

Examples
--------
>>> trajectory = Simulator(Lorenz(), [1.0, 1.0, 1.0], dt=0.01, steps=5000).simulate()
>>> plotter = TrajectoryPlotter()
>>> fig = plotter.plot_trajectory_3d(trajectory)
>>> plotter.render(trajectory)  # writes lorenz_attractor.png, 800x600
PosixPath('lorenz_attractor.png')
"""

from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple, Union

import numpy as np
import plotly.graph_objects as go

from chaossim.systems.base.trajectory import Trajectory
from chaossim.visualization.themes import ColorSchemes, PlotThemes

# One file per system, overwritten on each render
DEFAULT_OUTPUT_PATHS: Dict[str, str] = {
    "Lorenz": "lorenz_attractor.png",
    "Rossler": "rossler_attractor.png",
    "DoublePendulum": "double_pendulum.png",
}

PLOT_KINDS = ("time_series", "3d")


class RenderingError(RuntimeError):
    """Raised when a figure cannot be built or written to disk."""

    pass


class TrajectoryPlotter:
    """
    Plotly figures for simulated trajectories.

    Parameters
    ----------
    default_theme : str
        Theme applied to every figure ('default', 'publication', 'dark')
    """

    def __init__(self, default_theme: str = "default"):
        PlotThemes.get_theme(default_theme)
        self.default_theme = default_theme

    def plot_trajectory(
        self,
        trajectory: Trajectory,
        state_names: Optional[Sequence[str]] = None,
        title: Optional[str] = None,
        color_scheme: Optional[str] = None,
        theme: Optional[str] = None,
        **kwargs,
    ) -> go.Figure:
        """
        One line series per state coordinate against time.

        Parameters
        ----------
        trajectory : Trajectory
            Finished trajectory
        state_names : Optional[Sequence[str]]
            Legend labels; defaults to the trajectory's coordinate names
        title : Optional[str]
            Figure title; defaults to '<system> trajectory'
        color_scheme : Optional[str]
            Palette name; defaults to the theme's palette
        theme : Optional[str]
            Overrides the plotter's default theme
        **kwargs
            Passed to fig.update_layout

        Returns
        -------
        go.Figure
        """
        states = np.array(trajectory.states)
        times = trajectory.times
        names = list(state_names) if state_names is not None else list(trajectory.state_names)
        if len(names) != trajectory.nx:
            raise ValueError(
                f"Expected {trajectory.nx} state names, got {len(names)}: {names}"
            )

        theme = theme or self.default_theme
        colors = ColorSchemes.get_colors(
            color_scheme or PlotThemes.get_theme(theme).get("color_scheme", "plotly"),
            n_colors=trajectory.nx,
        )

        fig = go.Figure()
        for i, name in enumerate(names):
            fig.add_trace(
                go.Scatter(
                    x=times,
                    y=states[:, i],
                    mode="lines",
                    name=name,
                    line=dict(color=colors[i]),
                )
            )

        fig.update_layout(
            title=title or f"{trajectory.system_name or 'System'} trajectory",
            xaxis_title="Time",
            yaxis_title="State",
            hovermode="x unified",
        )
        self._mark_divergence(fig, trajectory)
        fig.update_layout(**kwargs)
        return PlotThemes.apply_theme(fig, theme)

    def plot_trajectory_3d(
        self,
        trajectory: Trajectory,
        state_indices: Tuple[int, int, int] = (0, 1, 2),
        title: Optional[str] = None,
        show_start_end: bool = True,
        color_scheme: Optional[str] = None,
        theme: Optional[str] = None,
        **kwargs,
    ) -> go.Figure:
        """
        Phase curve through three chosen coordinates.

        Start is marked with a green circle and end with a red square.

        Raises
        ------
        ValueError
            If state_indices does not name three valid coordinates
        """
        if len(state_indices) != 3:
            raise ValueError(f"state_indices must have 3 entries, got {state_indices}")
        for idx in state_indices:
            if not 0 <= idx < trajectory.nx:
                raise ValueError(
                    f"State index {idx} out of range for {trajectory.nx} coordinates"
                )

        states = np.array(trajectory.states)
        i, j, k = state_indices
        labels = [trajectory.state_names[idx] for idx in state_indices]

        theme = theme or self.default_theme
        color = ColorSchemes.get_colors(
            color_scheme or PlotThemes.get_theme(theme).get("color_scheme", "plotly"),
            n_colors=1,
        )[0]

        fig = go.Figure()
        fig.add_trace(
            go.Scatter3d(
                x=states[:, i],
                y=states[:, j],
                z=states[:, k],
                mode="lines",
                name="Trajectory",
                line=dict(color=color),
            )
        )

        if show_start_end and len(states) > 0:
            for row, name, marker in (
                (states[0], "Start", dict(color="green", size=5, symbol="circle")),
                (states[-1], "End", dict(color="red", size=5, symbol="square")),
            ):
                fig.add_trace(
                    go.Scatter3d(
                        x=[row[i]],
                        y=[row[j]],
                        z=[row[k]],
                        mode="markers",
                        name=name,
                        marker=marker,
                    )
                )

        fig.update_layout(
            title=title or f"{trajectory.system_name or 'System'} phase portrait",
            scene=dict(
                xaxis=dict(title=labels[0]),
                yaxis=dict(title=labels[1]),
                zaxis=dict(title=labels[2]),
            ),
        )
        fig.update_layout(**kwargs)
        return PlotThemes.apply_theme(fig, theme)

    def render(
        self,
        trajectory: Trajectory,
        path: Optional[Union[str, Path]] = None,
        width: int = 800,
        height: int = 600,
        kind: Optional[str] = None,
    ) -> Path:
        """
        Build a figure and write it to a file, replacing any existing file.

        Parameters
        ----------
        trajectory : Trajectory
            Finished trajectory; it is not modified
        path : Optional[str or Path]
            Output file; defaults to DEFAULT_OUTPUT_PATHS[trajectory.system_name]
        width, height : int
            Image size in pixels
        kind : Optional[str]
            'time_series' (default) or '3d'

        Returns
        -------
        Path
            The written file

        Raises
        ------
        RenderingError
            If the figure cannot be built or written
        """
        kind = kind or "time_series"
        if kind not in PLOT_KINDS:
            raise RenderingError(f"Unknown plot kind '{kind}'. Must be one of {list(PLOT_KINDS)}")

        if path is None:
            if trajectory.system_name not in DEFAULT_OUTPUT_PATHS:
                raise RenderingError(
                    f"No default output path for system {trajectory.system_name!r}; "
                    f"pass path explicitly"
                )
            path = DEFAULT_OUTPUT_PATHS[trajectory.system_name]
        path = Path(path)

        try:
            if kind == "3d":
                fig = self.plot_trajectory_3d(trajectory)
            else:
                fig = self.plot_trajectory(trajectory)
            fig.update_layout(width=width, height=height)

            if path.suffix.lower() in (".html", ".htm"):
                fig.write_html(str(path))
            else:
                fig.write_image(str(path), width=width, height=height)
        except Exception as e:
            raise RenderingError(f"Failed to render {trajectory!r} to {path}: {e}") from e

        return path

    @staticmethod
    def _mark_divergence(fig: go.Figure, trajectory: Trajectory):
        if trajectory.diverged_at is not None and trajectory.diverged_at < len(trajectory):
            fig.add_vline(
                x=trajectory.diverged_at * trajectory.dt,
                line_dash="dash",
                line_color="gray",
                annotation_text="non-finite",
            )
