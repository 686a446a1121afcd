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
Code generation utilities.

Compiles SymPy vector fields into plain NumPy callables with sympy.lambdify.
Generated functions take one scalar argument per symbol and always return a
flat float64 array, whatever shape SymPy hands back.
"""

from functools import reduce
from typing import Callable, List, Union

import numpy as np
import sympy as sp


def _numpy_min(*args):
    """
    Variadic Min for lambdify (np.minimum is binary).

    Examples:
        >>> _numpy_min(4, 2, 3)
        2
    """
    if not args:
        raise ValueError("Min needs at least one argument")
    return reduce(np.minimum, args)


def _numpy_max(*args):
    """Variadic Max for lambdify (np.maximum is binary)."""
    if not args:
        raise ValueError("Max needs at least one argument")
    return reduce(np.maximum, args)


def _numpy_matrix_handler(data):
    """
    Flatten a column matrix that lambdify returned as nested lists.

    [[a], [b]] → [a, b]; flat lists and scalars pass through.
    """
    if not isinstance(data, (list, tuple)) or not data:
        return data
    if not isinstance(data[0], (list, tuple)):
        return data
    return [row[0] if isinstance(row, (list, tuple)) and len(row) == 1 else row for row in data]


SYMPY_TO_NUMPY_LAMBDIFY = {
    "Min": _numpy_min,
    "Max": _numpy_max,
    "ImmutableDenseMatrix": _numpy_matrix_handler,
    "MutableDenseMatrix": _numpy_matrix_handler,
    "Matrix": _numpy_matrix_handler,
}


def generate_numpy_function(
    expr: Union[sp.Expr, List[sp.Expr], sp.Matrix],
    symbols: List[sp.Symbol],
) -> Callable[..., np.ndarray]:
    """
    Compile SymPy expression(s) into a NumPy function.

    Args:
        expr: single expression, list of expressions or column Matrix
        symbols: argument order of the generated function

    Returns:
        Callable taking one scalar per symbol and returning a 1-D float64
        array with one entry per expression (shape (1,) for a scalar expr)

    Example:
        >>> x, a = sp.symbols("x a")
        >>> f = generate_numpy_function(sp.Matrix([a * x, x + 1]), [x, a])
        >>> f(2.0, 3.0)
        array([6., 3.])
    """
    if isinstance(expr, list):
        expr = sp.Matrix(expr)
    elif not isinstance(expr, sp.MatrixBase):
        expr = sp.Matrix([expr])

    n_out = expr.rows * expr.cols
    compiled = sp.lambdify(symbols, expr, modules=[SYMPY_TO_NUMPY_LAMBDIFY, "numpy"])

    def evaluate(*args) -> np.ndarray:
        raw = compiled(*args)
        if isinstance(raw, (list, tuple)):
            raw = [np.asarray(item, dtype=np.float64).reshape(-1)[0] for item in raw]

        out = np.asarray(raw, dtype=np.float64).reshape(-1)
        if out.size != n_out:
            raise ValueError(f"Compiled function returned {out.size} values, expected {n_out}")
        return out

    return evaluate
