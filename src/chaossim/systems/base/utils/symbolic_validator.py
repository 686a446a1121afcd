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
Definition checks for symbolic systems.

Run once at construction, before any code is generated. Problems are
sorted into two lists:

errors   - the definition cannot be compiled or would compute nonsense
           (missing attributes, wrong types, row count not matching the
           state partition, symbols nobody declared, non-finite constants,
           clashing names)
warnings - legal but suspicious (a constant the vector field never reads,
           a vector field that ignores the state)
"""

import warnings
from collections import Counter
from typing import TYPE_CHECKING, List

import numpy as np
import sympy as sp

from chaossim.types.symbolic import SymbolicValidationResult

if TYPE_CHECKING:
    from chaossim.systems.base.core.continuous_symbolic_system import (
        ContinuousSymbolicSystem,
    )

REQUIRED_ATTRIBUTES = ("state_vars", "parameters", "_f_sym", "order")


class ValidationError(ValueError):
    """Raised when a symbolic system definition is rejected."""

    pass


class SymbolicValidator:
    """
    Checks the attributes populated by define_system().

    Example:
        >>> SymbolicValidator(Lorenz()).validate()["is_valid"]
        True
        >>>
        >>> # Collect problems instead of raising
        >>> report = SymbolicValidator(system).validate(raise_on_error=False)
        >>> report["errors"]
        []
    """

    def __init__(self, system: "ContinuousSymbolicSystem"):
        self.system = system
        self._errors: List[str] = []
        self._warnings: List[str] = []

    def validate(self, raise_on_error: bool = True) -> SymbolicValidationResult:
        """
        Run every check on the system definition.

        Args:
            raise_on_error: raise ValidationError instead of returning a
                report with errors

        Returns:
            SymbolicValidationResult ('is_valid', 'errors', 'warnings')

        Raises:
            ValidationError: if any error was found and raise_on_error is True
        """
        self._errors = []
        self._warnings = []

        # Later checks index into the attributes, so they need sane types
        self._check_presence()
        if not self._errors:
            self._check_types()
        if not self._errors:
            self._check_shape()
            self._check_free_symbols()
            self._check_constants()
            self._check_unique_names()

        for message in self._warnings:
            warnings.warn(f"{self._system_name}: {message}", UserWarning, stacklevel=4)

        report: SymbolicValidationResult = {
            "is_valid": not self._errors,
            "errors": list(self._errors),
            "warnings": list(self._warnings),
        }
        if raise_on_error and self._errors:
            raise ValidationError(
                f"Invalid definition of {self._system_name}:\n"
                + "\n".join(f"  - {error}" for error in self._errors)
            )
        return report

    @property
    def _system_name(self) -> str:
        return self.system.__class__.__name__

    # ========================================================================
    # Checks
    # ========================================================================

    def _check_presence(self):
        for attribute in REQUIRED_ATTRIBUTES:
            if not hasattr(self.system, attribute):
                self._errors.append(f"define_system() did not set '{attribute}'")

        if self._errors:
            return
        if not self.system.state_vars:
            self._errors.append("state_vars is empty; declare at least one state symbol")
        if self.system._f_sym is None:
            self._errors.append("_f_sym is None; assign the vector field as an sp.Matrix")

    def _check_types(self):
        system = self.system

        for index, symbol in enumerate(system.state_vars):
            if not isinstance(symbol, sp.Symbol):
                self._errors.append(
                    f"state_vars[{index}] must be an sp.Symbol, got {type(symbol).__name__} "
                    f"({symbol!r})"
                )

        if not isinstance(system._f_sym, sp.MatrixBase):
            self._errors.append(
                f"_f_sym must be sp.Matrix, got {type(system._f_sym).__name__}"
            )

        for symbol, value in system.parameters.items():
            if not isinstance(symbol, sp.Symbol):
                self._errors.append(
                    f"parameter key {symbol!r} is not a SymPy Symbol; "
                    f"key parameters by symbol, e.g. {{sigma: 10.0}}"
                )
            if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
                self._errors.append(
                    f"value of parameter {symbol} must be numeric, got {type(value).__name__}"
                )

        if isinstance(system.order, bool) or not isinstance(system.order, int):
            self._errors.append(f"order must be an int, got {type(system.order).__name__}")

    def _check_shape(self):
        system = self.system
        nx = len(system.state_vars)
        order = system.order

        if order < 1:
            self._errors.append(f"order must be >= 1, got {order}")
            return
        if nx % order:
            self._errors.append(
                f"{nx} state variables cannot be split into {order} equal blocks "
                f"[q, q', ...]; nx must be divisible by order"
            )
            return

        rows, cols = system._f_sym.shape
        if cols != 1:
            self._errors.append(f"_f_sym must be a column vector, got shape {(rows, cols)}")
        if rows != nx // order:
            self._errors.append(
                f"_f_sym has {rows} rows, expected {nx // order} for nx={nx}, order={order}"
            )

    def _check_free_symbols(self):
        system = self.system
        used = system._f_sym.free_symbols
        states = set(system.state_vars)

        undeclared = used - states - set(system.parameters)
        if undeclared:
            self._errors.append(
                f"_f_sym contains undefined symbols: {sorted(map(str, undeclared))}; "
                f"declare them in state_vars or parameters"
            )
        if not used & states:
            self._warnings.append("_f_sym does not depend on any state variable")

    def _check_constants(self):
        system = self.system

        for symbol, value in system.parameters.items():
            if not np.isfinite(value):
                self._errors.append(f"parameter {symbol} is non-finite ({value})")
            elif symbol.is_positive and value <= 0:
                self._errors.append(
                    f"parameter {symbol} is declared positive but has value {value}"
                )

        unused = set(system.parameters) - system._f_sym.free_symbols
        if unused:
            self._warnings.append(
                f"parameters {sorted(map(str, unused))} are never used in _f_sym"
            )

    def _check_unique_names(self):
        names = [str(s) for s in self.system.state_vars]
        names += [str(s) for s in self.system.parameters]
        clashes = sorted(name for name, count in Counter(names).items() if count > 1)
        if clashes:
            self._errors.append(
                f"Duplicate names {clashes}; every state and parameter needs its own name"
            )

    def __repr__(self) -> str:
        return f"SymbolicValidator(system={self._system_name})"
