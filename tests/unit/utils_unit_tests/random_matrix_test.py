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
Unit tests for RandomSymmetricMatrix.
"""

import numpy as np
import pytest

from chaossim import RandomSymmetricMatrix


class TestConstruction:
    def test_zero_initialized(self):
        m = RandomSymmetricMatrix(3, 5)
        assert m.data.shape == (3, 5)
        assert not m.data.any()

    def test_negative_dimensions(self):
        with pytest.raises(ValueError):
            RandomSymmetricMatrix(-2, 2)

    def test_repr(self):
        assert repr(RandomSymmetricMatrix(2, 3)) == "RandomSymmetricMatrix(2x3)"


class TestFillSymmetric:
    """Test the symmetric fill"""

    @pytest.mark.parametrize("distribution", ["uniform", "gaussian"])
    def test_symmetric(self, distribution):
        m = RandomSymmetricMatrix(6, 6)
        data = m.fill_symmetric(rng=np.random.default_rng(1), distribution=distribution)
        np.testing.assert_array_equal(data, data.T)
        assert data is m.data

    def test_uniform_range(self):
        data = RandomSymmetricMatrix(20, 20).fill_symmetric(rng=np.random.default_rng(2))
        assert data.min() >= 0.0
        assert data.max() < 1.0

    def test_gaussian_has_negative_entries(self):
        data = RandomSymmetricMatrix(20, 20).fill_symmetric(
            rng=np.random.default_rng(3), distribution="gaussian"
        )
        assert data.min() < 0.0

    def test_upper_triangle_entries_are_independent(self):
        data = RandomSymmetricMatrix(10, 10).fill_symmetric(rng=np.random.default_rng(4))
        upper = data[np.triu_indices(10)]
        assert len(np.unique(upper)) == len(upper)

    def test_reproducible_with_seed(self):
        a = RandomSymmetricMatrix(5, 5).fill_symmetric(rng=np.random.default_rng(9))
        b = RandomSymmetricMatrix(5, 5).fill_symmetric(rng=np.random.default_rng(9))
        np.testing.assert_array_equal(a, b)

    def test_unseeded_fill(self):
        data = RandomSymmetricMatrix(4, 4).fill_symmetric()
        np.testing.assert_array_equal(data, data.T)

    def test_empty_matrix(self):
        assert RandomSymmetricMatrix(0, 0).fill_symmetric().shape == (0, 0)

    def test_non_square_raises(self):
        with pytest.raises(ValueError, match="square"):
            RandomSymmetricMatrix(3, 4).fill_symmetric()

    def test_unknown_distribution(self):
        with pytest.raises(ValueError, match="distribution"):
            RandomSymmetricMatrix(3, 3).fill_symmetric(distribution="poisson")


class TestEigenvalues:
    def test_real_sorted_eigenvalues(self):
        m = RandomSymmetricMatrix(8, 8)
        m.fill_symmetric(rng=np.random.default_rng(0), distribution="gaussian")
        eigenvalues = m.eigenvalues()
        assert eigenvalues.shape == (8,)
        assert np.all(np.diff(eigenvalues) >= 0.0)
        np.testing.assert_allclose(np.sum(eigenvalues), np.trace(m.data), atol=1e-10)

    def test_non_square_raises(self):
        with pytest.raises(ValueError, match="square"):
            RandomSymmetricMatrix(2, 3).eigenvalues()
