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
Unit tests for ContinuousSymbolicSystem.

Tests cover:
1. define → validate → compile construction
2. Dimensions and names
3. Frozen parameter table
4. Derivative evaluation and parameter overrides
5. Information methods (equations, repr)
"""

import numpy as np
import pytest
import sympy as sp

from chaossim import (
    ContinuousSymbolicSystem,
    DoublePendulum,
    DynamicalSystem,
    Lorenz,
    Rossler,
    ValidationError,
)


# ============================================================================
# Test Systems
# ============================================================================


class ExponentialDecay(ContinuousSymbolicSystem):
    """dx/dt = -k*x"""

    def define_system(self, k_val=1.0):
        x = sp.symbols("x", real=True)
        k = sp.symbols("k", real=True)
        self.state_vars = [x]
        self.parameters = {k: k_val}
        self._f_sym = sp.Matrix([-k * x])
        self.order = 1


class HarmonicOscillator(ContinuousSymbolicSystem):
    """q̈ = -ω²q, second-order form"""

    def define_system(self, omega_val=2.0):
        q, qdot = sp.symbols("q q_dot", real=True)
        omega = sp.symbols("omega", positive=True)
        self.state_vars = [q, qdot]
        self.parameters = {omega: omega_val}
        self._f_sym = sp.Matrix([-(omega**2) * q])
        self.order = 2


class BrokenSystem(ContinuousSymbolicSystem):
    """Uses a symbol that is neither a state nor a parameter"""

    def define_system(self):
        x, mystery = sp.symbols("x mystery")
        self.state_vars = [x]
        self.parameters = {}
        self._f_sym = sp.Matrix([mystery * x])
        self.order = 1


@pytest.fixture
def decay():
    return ExponentialDecay(k_val=2.0)


@pytest.fixture
def oscillator():
    return HarmonicOscillator()


# ============================================================================
# Construction
# ============================================================================


class TestConstruction:
    """Test system construction"""

    def test_dynamical_system_alias(self):
        assert DynamicalSystem is ContinuousSymbolicSystem

    def test_cannot_instantiate_abstract_base(self):
        with pytest.raises(TypeError):
            ContinuousSymbolicSystem()

    def test_initialized_flag(self, decay):
        assert decay._initialized

    def test_invalid_definition_names_class(self):
        with pytest.raises(ValidationError, match="BrokenSystem"):
            BrokenSystem()

    def test_invalid_definition_lists_symbol(self):
        with pytest.raises(ValidationError, match="mystery"):
            BrokenSystem()

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            BrokenSystem()

    def test_positive_parameter_rejects_negative_value(self):
        with pytest.raises(ValidationError, match="declared positive"):
            HarmonicOscillator(omega_val=-1.0)


# ============================================================================
# Dimensions and Names
# ============================================================================


class TestDimensions:
    """Test nx, nq and names"""

    def test_first_order(self, decay):
        assert decay.nx == 1
        assert decay.nq == 1
        assert decay.dimension() == 1

    def test_second_order(self, oscillator):
        assert oscillator.nx == 2
        assert oscillator.nq == 1
        assert oscillator.order == 2

    def test_state_names(self, oscillator):
        assert oscillator.state_names == ("q", "q_dot")


# ============================================================================
# Parameters
# ============================================================================


class TestParameters:
    """Test the frozen parameter table"""

    def test_parameter_values_by_name(self, decay):
        assert dict(decay.parameter_values) == {"k": 2.0}

    def test_values_converted_to_float(self):
        system = ExponentialDecay(k_val=3)
        assert isinstance(system.parameter_values["k"], float)

    def test_parameters_mapping_is_read_only(self, decay):
        k = sp.symbols("k", real=True)
        with pytest.raises(TypeError):
            decay.parameters[k] = 5.0

    def test_parameter_values_is_read_only(self, decay):
        with pytest.raises(TypeError):
            decay.parameter_values["k"] = 5.0


# ============================================================================
# Evaluation
# ============================================================================


class TestDerivative:
    """Test vector field evaluation"""

    def test_first_order_derivative(self, decay):
        np.testing.assert_allclose(decay.derivative([1.5]), [-3.0])

    def test_returns_float64_array(self, decay):
        dx = decay.derivative([1])
        assert isinstance(dx, np.ndarray)
        assert dx.dtype == np.float64
        assert dx.shape == (1,)

    def test_second_order_derivative_covers_full_state(self, oscillator):
        # [q̇, q̈] = [10, -ω²·q] with ω = 2
        np.testing.assert_allclose(oscillator.derivative([0.5, 10.0]), [10.0, -2.0])

    def test_highest_derivative(self, oscillator):
        np.testing.assert_allclose(oscillator.highest_derivative([0.5, 10.0]), [-2.0])

    def test_highest_derivative_first_order(self, decay):
        np.testing.assert_array_equal(decay.highest_derivative([1.5]), decay.derivative([1.5]))

    def test_highest_derivative_override(self, oscillator):
        np.testing.assert_allclose(
            oscillator.highest_derivative([0.5, 0.0], params={"omega": 1.0}), [-0.5]
        )

    def test_override_by_name(self, decay):
        np.testing.assert_allclose(decay.derivative([1.0], params={"k": 5.0}), [-5.0])

    def test_override_by_symbol(self, decay):
        k = sp.symbols("k", real=True)
        np.testing.assert_allclose(decay.derivative([1.0], params={k: 5.0}), [-5.0])

    def test_override_is_per_call(self, decay):
        decay.derivative([1.0], params={"k": 5.0})
        np.testing.assert_allclose(decay.derivative([1.0]), [-2.0])

    def test_unknown_override(self, decay):
        with pytest.raises(ValueError, match="Known parameters"):
            decay.derivative([1.0], params={"q": 1.0})

    def test_validate_state_rejects_2d(self, decay):
        with pytest.raises(ValueError):
            decay.validate_state([[1.0]])

    def test_validate_state_coerces_list(self, oscillator):
        x = oscillator.validate_state([1, 2])
        assert x.dtype == np.float64
        np.testing.assert_array_equal(x, [1.0, 2.0])

    def test_nonfinite_input_propagates(self, decay):
        assert np.isnan(decay.derivative([np.nan])[0])

    @pytest.mark.parametrize("system_class", [Lorenz, Rossler, DoublePendulum])
    def test_derivative_matches_state_dimension(self, system_class):
        system = system_class()
        x = np.linspace(0.1, 0.4, system.dimension())
        assert system.derivative(x).shape == (system.dimension(),)


# ============================================================================
# Information
# ============================================================================


class TestInformation:
    """Test human-readable output"""

    def test_equations_first_order(self, decay):
        assert decay.equations() == ["d(x)/dt = -k*x"]

    def test_equations_second_order(self, oscillator):
        assert oscillator.equations() == ["d^2(q)/dt^2 = -omega**2*q"]

    def test_print_equations(self, decay, capsys):
        decay.print_equations()
        out = capsys.readouterr().out
        assert "ExponentialDecay (nx=1, order=1)" in out
        assert "d(x)/dt = -k*x" in out

    def test_repr(self, decay):
        assert repr(decay) == "ExponentialDecay(k=2.0)"
