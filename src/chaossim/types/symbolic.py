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
Symbolic Types

Types for SymPy-based system definitions and their validation.
"""

from typing import Dict, List

import sympy as sp
from typing_extensions import TypedDict

SymbolicParameters = Dict[sp.Symbol, float]
"""
Parameter table of a symbolic system: Symbol → numeric value.

Examples
--------
>>> sigma, rho, beta = sp.symbols("sigma rho beta", real=True)
>>> params: SymbolicParameters = {sigma: 10.0, rho: 28.0, beta: 8 / 3}
"""


class SymbolicValidationResult(TypedDict):
    """
    Outcome of SymbolicValidator.validate().

    Fields
    ------
    is_valid : bool
        True if no errors were found
    errors : List[str]
        Problems that make the definition unusable
    warnings : List[str]
        Suspicious but usable patterns (e.g. unused parameters)
    """

    is_valid: bool
    errors: List[str]
    warnings: List[str]


__all__ = ["SymbolicParameters", "SymbolicValidationResult"]
