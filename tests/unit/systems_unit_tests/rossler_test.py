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
Unit tests for the Rössler system.
"""

import numpy as np
import pytest

from chaossim import ExplicitEulerIntegrator, Rossler, Simulator


@pytest.fixture
def rossler():
    return Rossler()


@pytest.fixture
def linear_rossler():
    """a=b=c=0: rates reduce to (-y - z, x, xz)."""
    return Rossler(a_val=0.0, b_val=0.0, c_val=0.0)


class TestRosslerDefinition:
    """Test the symbolic definition"""

    def test_dimensions(self, rossler):
        assert rossler.nx == 3
        assert rossler.order == 1
        assert rossler.state_names == ("x", "y", "z")

    def test_default_parameters(self, rossler):
        params = rossler.parameter_values
        assert params["a"] == 0.2
        assert params["b"] == 0.2
        assert params["c"] == 5.7

    def test_equations(self, rossler):
        assert rossler.equations()[0] == "d(x)/dt = -y - z"

    def test_repr(self, rossler):
        assert repr(rossler) == "Rossler(a=0.2, b=0.2, c=5.7)"
        assert str(rossler) == "Rossler(nx=3, order=1)"


class TestRosslerDerivative:
    """Test evaluation of the vector field"""

    def test_derivative_default_parameters(self, rossler):
        dx = rossler.derivative([1.0, 2.0, 3.0])
        np.testing.assert_allclose(dx, [-5.0, 1.4, 0.2 + 3.0 * (1.0 - 5.7)])

    def test_derivative_linear_case(self, linear_rossler):
        np.testing.assert_allclose(linear_rossler.derivative([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])

    def test_z_rate_depends_on_b_at_origin(self, rossler):
        # At the origin only the constant b drives the system
        np.testing.assert_allclose(rossler.derivative([0.0, 0.0, 0.0]), [0.0, 0.0, 0.2])


class TestRosslerSimulation:
    """Test Euler steps and trajectories"""

    def test_single_step_closed_form(self, linear_rossler):
        integrator = ExplicitEulerIntegrator(linear_rossler, dt=0.1)
        np.testing.assert_allclose(integrator.step(np.array([1.0, 0.0, 0.0])), [1.0, 0.1, 0.0])

    def test_second_trajectory_entry(self, linear_rossler):
        trajectory = Simulator(linear_rossler, x0=[1.0, 0.0, 0.0], dt=0.1, steps=2).simulate()
        np.testing.assert_allclose(trajectory[0], [1.0, 0.0, 0.0])
        np.testing.assert_allclose(trajectory[1], [1.0, 0.1, 0.0])

    def test_attractor_is_bounded(self, rossler):
        trajectory = Simulator(rossler, x0=[1.0, 1.0, 0.0], dt=0.01, steps=20000).simulate()
        assert not trajectory.diverged
        assert np.max(np.abs(trajectory.coordinate("x"))) < 30.0
        assert np.max(np.abs(trajectory.coordinate("y"))) < 30.0
        assert np.max(trajectory.coordinate("z")) < 60.0
