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
Random symmetric matrices for level-statistics experiments.

A real symmetric matrix with independent standard-normal entries on and
above the diagonal is a member of the Gaussian Orthogonal Ensemble (GOE).
"""

from typing import Optional

import numpy as np

DISTRIBUTIONS = ("uniform", "gaussian")


class RandomSymmetricMatrix:
    """
    Zero-initialized real matrix that can be filled with symmetric noise.

    Parameters
    ----------
    rows, cols : int
        Matrix shape. Any shape can be constructed, but only square
        matrices can be filled symmetrically.

    Examples
    --------
    >>> m = RandomSymmetricMatrix(4, 4)
    >>> data = m.fill_symmetric(rng=np.random.default_rng(0))
    >>> np.array_equal(data, data.T)
    True
    """

    def __init__(self, rows: int, cols: int):
        if rows < 0 or cols < 0:
            raise ValueError(f"Matrix dimensions must be non-negative, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.data = np.zeros((rows, cols), dtype=np.float64)

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def fill_symmetric(
        self,
        rng: Optional[np.random.Generator] = None,
        distribution: str = "uniform",
    ) -> np.ndarray:
        """
        Overwrite the matrix with random values such that data[i, j] == data[j, i].

        One value is drawn per entry on or above the diagonal and mirrored
        below it.

        Parameters
        ----------
        rng : Optional[np.random.Generator]
            Source of randomness; an unseeded generator when omitted
        distribution : str
            'uniform' for values in [0, 1), 'gaussian' for standard normals

        Returns
        -------
        np.ndarray
            The filled matrix (also stored in `self.data`)

        Raises
        ------
        ValueError
            If the matrix is not square or the distribution is unknown
        """
        if not self.is_square:
            raise ValueError(
                f"A symmetric fill needs a square matrix, got {self.rows}x{self.cols}"
            )
        if distribution not in DISTRIBUTIONS:
            raise ValueError(
                f"Unknown distribution '{distribution}'. Must be one of {list(DISTRIBUTIONS)}"
            )
        if rng is None:
            rng = np.random.default_rng()

        n = self.rows
        iu = np.triu_indices(n)
        if distribution == "uniform":
            values = rng.random(len(iu[0]))
        else:
            values = rng.standard_normal(len(iu[0]))

        data = np.zeros((n, n), dtype=np.float64)
        data[iu] = values
        data.T[iu] = values
        self.data = data
        return data

    def eigenvalues(self) -> np.ndarray:
        """Sorted real eigenvalues of the (symmetric) matrix."""
        if not self.is_square:
            raise ValueError(f"Eigenvalues need a square matrix, got {self.rows}x{self.cols}")
        return np.linalg.eigvalsh(self.data)

    def __repr__(self) -> str:
        return f"RandomSymmetricMatrix({self.rows}x{self.cols})"
