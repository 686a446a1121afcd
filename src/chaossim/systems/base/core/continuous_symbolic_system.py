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
Continuous Symbolic System - Base Class for Autonomous ODE Systems

Provides the system-agnostic interface every dynamical system implements:

    dimension() / nx      state dimension
    derivative(x, params) instantaneous rate of change

derivative() always returns one rate per state coordinate, shape (nx,).

Subclasses declare their dynamics symbolically in define_system(); the base
class validates the definition and compiles a NumPy function from it once,
at construction.

Higher-order systems
--------------------
For order > 1 the state is x = [q, q̇, ..., q^(n-1)] and _f_sym holds only
the highest derivative q^(n) (nq = nx / order rows), available through
highest_derivative(). derivative() fills in the lower rows by shifting the
state: d/dt [q, ..., q^(n-1)] = [q̇, ..., q^(n-1), q^(n)].

Examples
--------
>>> class Decay(ContinuousSymbolicSystem):
...     def define_system(self, k_val=1.0):
...         x = sp.symbols("x", real=True)
...         k = sp.symbols("k", real=True)
...         self.state_vars = [x]
...         self.parameters = {k: k_val}
...         self._f_sym = sp.Matrix([-k * x])
...         self.order = 1
>>>
>>> system = Decay(k_val=2.0)
>>> system.derivative([1.0])
array([-2.])
>>> system.derivative([1.0], params={"k": 3.0})
array([-3.])
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple, Union

import numpy as np
import sympy as sp

from chaossim.systems.base.codegen_utils import generate_numpy_function
from chaossim.systems.base.utils.symbolic_validator import (
    SymbolicValidator,
    ValidationError,
)
from chaossim.types.core import ArrayLike, DerivativeVector, StateVector, SystemParameters
from chaossim.types.symbolic import SymbolicParameters


class ContinuousSymbolicSystem(ABC):
    """
    Base class for autonomous continuous-time systems defined with SymPy.

    Subclasses implement define_system() and populate:
    - state_vars: List[sp.Symbol] in state order
    - parameters: Dict[sp.Symbol, float]
    - _f_sym: sp.Matrix column of derivatives (highest derivatives if order > 1)
    - order: int

    Construction follows define → validate → compile. After construction
    the parameter table is frozen: `parameters` becomes a read-only mapping
    and the compiled vector field reads its default values from an
    immutable tuple.

    Attributes
    ----------
    state_vars : List[sp.Symbol]
        State variables
    parameters : Mapping[sp.Symbol, float]
        Physical constants (read-only after construction)
    order : int
        System order
    """

    def __init__(self, *args, **kwargs):
        self.state_vars: List[sp.Symbol] = []
        self.parameters: SymbolicParameters = {}
        self._f_sym: Optional[sp.Matrix] = None
        self.order: int = 1
        self._initialized: bool = False

        self.define_system(*args, **kwargs)

        self._validator = SymbolicValidator(self)
        try:
            self._validator.validate(raise_on_error=True)
        except ValidationError as e:
            raise ValidationError(
                f"Validation failed for {self.__class__.__name__}:\n{str(e)}"
            ) from e

        # Freeze the parameter table
        self.parameters = MappingProxyType(
            {symbol: float(value) for symbol, value in self.parameters.items()}
        )
        self._param_symbols: Tuple[sp.Symbol, ...] = tuple(self.parameters.keys())
        self._param_names: Tuple[str, ...] = tuple(str(s) for s in self._param_symbols)
        self._param_values: Tuple[float, ...] = tuple(self.parameters.values())

        self._f_func = generate_numpy_function(
            self._f_sym, list(self.state_vars) + list(self._param_symbols)
        )
        self._initialized = True

    @abstractmethod
    def define_system(self, *args, **kwargs):
        """
        Populate state_vars, parameters, _f_sym and order.

        Keyword arguments carry the numeric parameter values; defaults give
        the canonical configuration of each system.
        """
        pass

    # ========================================================================
    # Dimensions and Names
    # ========================================================================

    @property
    def nx(self) -> int:
        """Number of state coordinates."""
        return len(self.state_vars)

    @property
    def nq(self) -> int:
        """
        Number of generalized coordinates.

        For an nth-order system with state x = [q, q̇, ..., q^(n-1)]:
        nq = nx / order. For first-order systems nq == nx.
        """
        return self.nx // self.order

    def dimension(self) -> int:
        """State dimension (same as nx)."""
        return self.nx

    @property
    def state_names(self) -> Tuple[str, ...]:
        """Coordinate names in state order."""
        return tuple(str(var) for var in self.state_vars)

    @property
    def parameter_values(self) -> SystemParameters:
        """
        Read-only record of the bound physical constants, keyed by name.

        Examples
        --------
        >>> Lorenz().parameter_values["rho"]
        28.0
        """
        return MappingProxyType(dict(zip(self._param_names, self._param_values)))

    # ========================================================================
    # Evaluation
    # ========================================================================

    def validate_state(self, x: ArrayLike) -> StateVector:
        """
        Coerce a state to a 1-D float64 array of length nx.

        Raises
        ------
        ValueError
            If the state is not one-dimensional or has the wrong length
        """
        x_arr = np.asarray(x, dtype=np.float64)
        if x_arr.ndim != 1 or x_arr.shape[0] != self.nx:
            raise ValueError(
                f"{self.__class__.__name__} expects a state of shape ({self.nx},) "
                f"{self.state_names}, got shape {x_arr.shape}"
            )
        return x_arr

    def _resolve_parameters(
        self, params: Optional[Mapping[Union[str, sp.Symbol], float]]
    ) -> Tuple[float, ...]:
        if params is None:
            return self._param_values

        overrides = {str(name): float(value) for name, value in params.items()}
        unknown = set(overrides) - set(self._param_names)
        if unknown:
            raise ValueError(
                f"Unknown parameter(s) {sorted(unknown)} for {self.__class__.__name__}. "
                f"Known parameters: {list(self._param_names)}"
            )
        return tuple(
            overrides.get(name, default)
            for name, default in zip(self._param_names, self._param_values)
        )

    def derivative(
        self,
        x: ArrayLike,
        params: Optional[Mapping[Union[str, sp.Symbol], float]] = None,
    ) -> DerivativeVector:
        """
        Evaluate the vector field at a state.

        Every component is computed from the same input snapshot; the input
        is never modified.

        Parameters
        ----------
        x : ArrayLike
            State, shape (nx,)
        params : Optional[Mapping]
            Parameter overrides for this call only (name → value).
            Missing names fall back to the bound constants.

        Returns
        -------
        np.ndarray
            dx/dt, shape (nx,). For order > 1 this is
            [q̇, ..., q^(n-1), q^(n)].

        Examples
        --------
        >>> DoublePendulum().derivative([0.0, 0.0, 1.0, -1.0]).shape
        (4,)
        """
        x_arr = self.validate_state(x)
        highest = self._f_func(*x_arr, *self._resolve_parameters(params))
        if self.order == 1:
            return highest
        return np.concatenate([x_arr[self.nq :], highest])

    def highest_derivative(
        self,
        x: ArrayLike,
        params: Optional[Mapping[Union[str, sp.Symbol], float]] = None,
    ) -> DerivativeVector:
        """
        Evaluate only the rows of _f_sym: q^(n), shape (nq,).

        For first-order systems this is the same as derivative().
        """
        x_arr = self.validate_state(x)
        return self._f_func(*x_arr, *self._resolve_parameters(params))

    def __call__(self, x: ArrayLike, params=None) -> DerivativeVector:
        return self.derivative(x, params)

    # ========================================================================
    # Information
    # ========================================================================

    def equations(self) -> List[str]:
        """
        Human-readable equations, one per row of _f_sym.

        Examples
        --------
        >>> Rossler().equations()[0]
        'd(x)/dt = -y - z'
        """
        order_mark = "dt" if self.order == 1 else f"dt^{self.order}"
        lhs_vars = self.state_vars if self.order == 1 else self.state_vars[: self.nq]
        return [
            f"d{'' if self.order == 1 else '^' + str(self.order)}({var})/{order_mark} = {expr}"
            for var, expr in zip(lhs_vars, self._f_sym)
        ]

    def print_equations(self):
        """Print the symbolic equations of motion."""
        print("=" * 70)
        print(f"{self.__class__.__name__} (nx={self.nx}, order={self.order})")
        print("=" * 70)
        for line in self.equations():
            print(f"  {line}")
        print(f"  Parameters: {dict(self.parameter_values)}")

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v}" for k, v in zip(self._param_names, self._param_values))
        return f"{self.__class__.__name__}({params})"

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(nx={self.nx}, order={self.order})"
