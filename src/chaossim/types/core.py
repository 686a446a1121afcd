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
Core Types

Fundamental array, scalar and vector types shared by every module:
- Array and scalar aliases
- State vectors and derivative vectors
- System parameter records
- Dynamics function signatures

Shape Conventions
-----------------
- State vector: (nx,)
- Derivative vector: (nx,) for every system order

Usage
-----
>>> from chaossim.types.core import StateVector, SystemParameters
>>>
>>> x: StateVector = np.array([1.0, 0.0, 0.0])
>>> params: SystemParameters = {"sigma": 10.0, "rho": 28.0, "beta": 8 / 3}
"""

from typing import Callable, Mapping, Optional, Sequence, Union

import numpy as np

# ============================================================================
# Basic Array Types
# ============================================================================

ArrayLike = Union[np.ndarray, Sequence[float]]
"""
Anything that can be coerced to a 1-D float64 NumPy array.

Lists and tuples are accepted at API boundaries and converted once;
everything internal works on np.ndarray.
"""

ScalarLike = Union[float, int, np.number]
"""
Real scalar value (time step, parameter value).
"""

IntegerLike = Union[int, np.integer]
"""
Integer value (step counts, indices).

Note that bool is a subclass of int; callers that need a real count
must reject it explicitly.
"""

# ============================================================================
# Vector Types
# ============================================================================

StateVector = np.ndarray
"""
State vector x of a dynamical system, shape (nx,).

Examples
--------
>>> # Lorenz / Rossler
>>> x: StateVector = np.array([x, y, z])
>>>
>>> # Double pendulum
>>> x: StateVector = np.array([theta1, theta2, omega1, omega2])
"""

DerivativeVector = np.ndarray
"""
Instantaneous rate of change returned by a system's vector field.

Shape (nx,). For second-order systems this is [q̇, q̈].
"""

# ============================================================================
# Parameters
# ============================================================================

SystemParameters = Mapping[str, float]
"""
Immutable record of physical constants for one system, keyed by name.

Examples
--------
>>> lorenz.parameter_values
mappingproxy({'sigma': 10.0, 'rho': 28.0, 'beta': 2.6666666666666665})
"""

# ============================================================================
# Function Types
# ============================================================================

DynamicsFunction = Callable[[StateVector, Optional[SystemParameters]], DerivativeVector]
"""
Vector field: (x, params) → derivative.

Pure function of its arguments; never mutates x.
"""


__all__ = [
    "ArrayLike",
    "ScalarLike",
    "IntegerLike",
    "StateVector",
    "DerivativeVector",
    "SystemParameters",
    "DynamicsFunction",
]
