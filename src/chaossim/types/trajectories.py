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
Trajectory and Result Types

Defines types for time series data produced by a simulation:
- State trajectories (time series of states)
- Time arrays
- Trajectory summaries and integrator statistics

Shape Conventions
-----------------
- Single trajectory: (steps, nx), row k is the state recorded at step k
- Coordinate series: (steps,), one per state coordinate

Usage
-----
>>> from chaossim.types.trajectories import StateTrajectory, TrajectorySummary
>>>
>>> trajectory = simulator.simulate()
>>> states: StateTrajectory = trajectory.states
>>> summary: TrajectorySummary = trajectory.summary()
"""

from typing import Optional, Tuple

import numpy as np
from typing_extensions import TypedDict

StateTrajectory = np.ndarray
"""
State trajectory over time, shape (steps, nx).

Indexing:
- trajectory[k] -> state recorded at step k (nx,)
- trajectory[:, i] -> i-th coordinate over time (steps,)
"""

CoordinateSeries = np.ndarray
"""
One state coordinate over time, shape (steps,).
"""

TimePoints = np.ndarray
"""
Simulated time of each recorded state, t_k = k * dt, shape (steps,).
"""


class TrajectorySummary(TypedDict):
    """
    Compact description of a recorded trajectory.

    Fields
    ------
    system : Optional[str]
        Name of the system that produced the trajectory
    steps : int
        Number of recorded states
    nx : int
        State dimension
    dt : float
        Time increment between recorded states
    state_names : Tuple[str, ...]
        Coordinate names in state order
    diverged_at : Optional[int]
        First step whose state was non-finite, None if finite throughout
    """

    system: Optional[str]
    steps: int
    nx: int
    dt: float
    state_names: Tuple[str, ...]
    diverged_at: Optional[int]


class IntegratorStats(TypedDict):
    """
    Integrator bookkeeping returned by IntegratorBase.get_stats().
    """

    total_steps: int
    total_fev: int
    total_time: float
    avg_fev_per_step: float


__all__ = [
    "StateTrajectory",
    "CoordinateSeries",
    "TimePoints",
    "TrajectorySummary",
    "IntegratorStats",
]
