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
Two-state cellular automaton on a bounded grid (Conway's B3/S23 rule).

Cells outside the grid count as dead; the grid does not wrap.
"""

from typing import Optional

import numpy as np
from scipy.signal import convolve2d

_NEIGHBOR_KERNEL = np.array(
    [
        [1, 1, 1],
        [1, 0, 1],
        [1, 1, 1],
    ],
    dtype=np.int64,
)


class LifeGrid:
    """
    Game-of-Life style grid.

    Parameters
    ----------
    height, width : int
        Grid dimensions
    live_cells : int
        Number of initially live cells. Without `rng` they are the first
        `live_cells` cells in row-major order; with `rng` they are placed at
        distinct random positions.
    rng : Optional[np.random.Generator]
        Source of randomness for the placement

    Examples
    --------
    >>> grid = LifeGrid(3, 3, live_cells=3)  # top row alive
    >>> grid.step().astype(int)
    array([[0, 1, 0],
           [0, 1, 0],
           [0, 0, 0]])
    """

    def __init__(
        self,
        height: int,
        width: int,
        live_cells: int,
        rng: Optional[np.random.Generator] = None,
    ):
        if height < 0 or width < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {height}x{width}")
        n_cells = height * width
        if not 0 <= live_cells <= n_cells:
            raise ValueError(
                f"live_cells must be between 0 and {n_cells} for a {height}x{width} grid, "
                f"got {live_cells}"
            )

        self.height = height
        self.width = width

        flat = np.zeros(n_cells, dtype=bool)
        if rng is None:
            flat[:live_cells] = True
        else:
            flat[rng.choice(n_cells, size=live_cells, replace=False)] = True
        self.cells = flat.reshape(height, width)

    def live_neighbor_counts(self) -> np.ndarray:
        """Number of live neighbors of every cell, shape (height, width)."""
        if self.cells.size == 0:
            return np.zeros_like(self.cells, dtype=np.int64)
        return convolve2d(
            self.cells.astype(np.int64), _NEIGHBOR_KERNEL, mode="same", boundary="fill"
        )

    def step(self) -> np.ndarray:
        """
        Advance one generation and return the new cell states.

        A live cell with 2 or 3 live neighbors survives; a dead cell with
        exactly 3 live neighbors is born; every other cell is dead.
        """
        counts = self.live_neighbor_counts()
        survive = self.cells & ((counts == 2) | (counts == 3))
        born = ~self.cells & (counts == 3)
        self.cells = survive | born
        return self.cells.copy()

    def simulate(self, steps: int) -> np.ndarray:
        """
        Run `steps` generations.

        Returns
        -------
        np.ndarray
            Generations after each update, shape (steps, height, width)
        """
        if steps < 0:
            raise ValueError(f"steps must be non-negative, got {steps}")
        history = np.empty((steps, self.height, self.width), dtype=bool)
        for k in range(steps):
            history[k] = self.step()
        return history

    @property
    def population(self) -> int:
        return int(self.cells.sum())

    def render_text(self) -> str:
        """Grid as text, 'X' for live and '.' for dead cells."""
        return "\n".join(
            " ".join("X" if alive else "." for alive in row) for row in self.cells
        )

    def __repr__(self) -> str:
        return f"LifeGrid({self.height}x{self.width}, population={self.population})"
