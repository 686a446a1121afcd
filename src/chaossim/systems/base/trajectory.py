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
Trajectory - Append-Only Record of Simulated States

Row k holds the state recorded at step k (simulated time k * dt). Rows are
value snapshots: appending copies the state, and every view handed out is
read-only. The backing buffer itself stays non-writable outside append(),
so a view cannot be switched back to writable.

Examples
--------
>>> trajectory = simulator.simulate()
>>> len(trajectory)
10000
>>> x, y, z = trajectory.coordinates()
>>> trajectory.coordinate("z")[-1]
>>> trajectory.diverged
False
"""

from typing import Dict, Iterator, Optional, Sequence, Tuple, Union

import numpy as np

from chaossim.types.core import ArrayLike, StateVector
from chaossim.types.trajectories import (
    CoordinateSeries,
    StateTrajectory,
    TimePoints,
    TrajectorySummary,
)


def _read_only(arr: np.ndarray) -> np.ndarray:
    view = arr.view()
    view.setflags(write=False)
    return view


class Trajectory:
    """
    Ordered, append-only sequence of recorded states.

    Parameters
    ----------
    state_names : Sequence[str]
        Coordinate names; fixes the state dimension
    dt : float
        Time increment between consecutive entries
    system_name : Optional[str]
        Name of the producing system (used for default render paths)
    capacity : int
        Number of rows to preallocate
    """

    def __init__(
        self,
        state_names: Sequence[str],
        dt: float,
        system_name: Optional[str] = None,
        capacity: int = 0,
    ):
        self.state_names: Tuple[str, ...] = tuple(state_names)
        if not self.state_names:
            raise ValueError("Trajectory requires at least one state coordinate")
        self.dt = float(dt)
        self.system_name = system_name
        self._buffer = np.empty((max(int(capacity), 0), self.nx), dtype=np.float64)
        self._buffer.flags.writeable = False
        self._length = 0
        self._diverged_at: Optional[int] = None

    @property
    def nx(self) -> int:
        return len(self.state_names)

    # ========================================================================
    # Recording
    # ========================================================================

    def append(self, state: ArrayLike):
        """
        Record a copy of `state` as the next entry.

        Raises
        ------
        ValueError
            If the state does not have shape (nx,)
        """
        row = np.asarray(state, dtype=np.float64)
        if row.shape != (self.nx,):
            raise ValueError(f"Expected state of shape ({self.nx},), got {row.shape}")

        if self._length == self._buffer.shape[0]:
            grown = np.empty((max(2 * self._length, 16), self.nx), dtype=np.float64)
            grown[: self._length] = self._buffer[: self._length]
            self._buffer = grown

        self._buffer.flags.writeable = True
        self._buffer[self._length] = row
        self._buffer.flags.writeable = False
        self._length += 1

    def mark_diverged(self, step: int):
        """
        Flag the trajectory as diverged from `step` onward.

        Only the first reported step is kept.
        """
        if self._diverged_at is None:
            self._diverged_at = int(step)

    @property
    def diverged_at(self) -> Optional[int]:
        """First step whose state was non-finite, or None."""
        return self._diverged_at

    @property
    def diverged(self) -> bool:
        return self._diverged_at is not None

    # ========================================================================
    # Access
    # ========================================================================

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index: Union[int, slice]) -> np.ndarray:
        return self.states[index]

    def __iter__(self) -> Iterator[StateVector]:
        return iter(self.states)

    @property
    def states(self) -> StateTrajectory:
        """All recorded states, read-only array of shape (len, nx)."""
        return _read_only(self._buffer[: self._length])

    @property
    def times(self) -> TimePoints:
        """Simulated time of each entry, t_k = k * dt."""
        return np.arange(self._length, dtype=np.float64) * self.dt

    def coordinate(self, key: Union[int, str]) -> CoordinateSeries:
        """
        One coordinate over time.

        Parameters
        ----------
        key : int or str
            Coordinate index or name (e.g. 'z', 'theta1')
        """
        if isinstance(key, str):
            if key not in self.state_names:
                raise KeyError(f"Unknown coordinate '{key}'. Available: {self.state_names}")
            key = self.state_names.index(key)
        return self.states[:, key]

    def coordinates(self) -> Tuple[CoordinateSeries, ...]:
        """One read-only series per coordinate, in state order."""
        states = self.states
        return tuple(states[:, i] for i in range(self.nx))

    def as_dict(self) -> Dict[str, CoordinateSeries]:
        """Coordinate name → series."""
        return dict(zip(self.state_names, self.coordinates()))

    def summary(self) -> TrajectorySummary:
        return {
            "system": self.system_name,
            "steps": self._length,
            "nx": self.nx,
            "dt": self.dt,
            "state_names": self.state_names,
            "diverged_at": self._diverged_at,
        }

    def __repr__(self) -> str:
        status = f", diverged_at={self._diverged_at}" if self.diverged else ""
        return (
            f"Trajectory(system={self.system_name}, steps={self._length}, "
            f"states={self.state_names}, dt={self.dt}{status})"
        )
