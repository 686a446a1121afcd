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

import sympy as sp

from chaossim.systems.base.core.continuous_symbolic_system import ContinuousSymbolicSystem


class Rossler(ContinuousSymbolicSystem):
    """
    Rössler system - a minimal three-dimensional chaotic flow.

    State Space:
    -----------
    State: x = [x, y, z]
        Position of the system in 3-D phase space.

    Dynamics:
    --------
        ẋ = -y - z
        ẏ = x + a·y
        ż = b + z(x - c)

    The (x, y) plane carries an outward spiral driven by a; z stays small
    until x exceeds c, then spikes and folds the orbit back toward the
    spiral.

    Parameters:
    ----------
    a_val : float, default=0.2
        Controls stretching and folding in the y direction.
    b_val : float, default=0.2
        Sets the overall speed of the z excursion.
    c_val : float, default=5.7
        Shifts the system along the x axis; c = 5.7 gives the classic
        chaotic band.

    Examples
    --------
    >>> Rossler(a_val=0.0, b_val=0.0, c_val=0.0).derivative([1.0, 0.0, 0.0])
    array([0., 1., 0.])
    """

    def define_system(self, a_val: float = 0.2, b_val: float = 0.2, c_val: float = 5.7):
        x, y, z = sp.symbols("x y z", real=True)
        a, b, c = sp.symbols("a b c", real=True)

        self.parameters = {a: a_val, b: b_val, c: c_val}

        self.state_vars = [x, y, z]
        self.order = 1

        dx = -y - z
        dy = x + a * y
        dz = b + z * (x - c)

        self._f_sym = sp.Matrix([dx, dy, dz])
