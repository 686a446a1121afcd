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


class Lorenz(ContinuousSymbolicSystem):
    """
    Lorenz system - three-mode truncation of Rayleigh-Bénard convection.

    State Space:
    -----------
    State: x = [x, y, z], all dimensionless
        - x: intensity of the convective roll
        - y: temperature difference between rising and sinking fluid
        - z: distortion of the vertical temperature profile

    Dynamics:
    --------
        ẋ = σ(y - x)
        ẏ = x(ρ - z) - y
        ż = xy - βz

    All three rates are evaluated on the same state, and each coordinate is
    advanced with its own rate.

    Parameters:
    ----------
    sigma_val : float, default=10.0
        Prandtl number σ. Controls the rate at which temperature
        differences translate into velocity differences.
    rho_val : float, default=28.0
        Rayleigh number ρ. Influences the onset of convection:
        - ρ < 1: the origin attracts everything
        - 1 < ρ < 24.74: trajectories settle on C+ or C-
        - ρ = 28: the butterfly-shaped strange attractor
    beta_val : float, default=8/3
        Geometric factor β (aspect ratio of the convection cell).

    Equilibria:
    ----------
    Origin [0, 0, 0], and for ρ > 1:
        C± = [±√(β(ρ-1)), ±√(β(ρ-1)), ρ-1]

    The Lorenz Attractor:
    --------------------
    For σ=10, ρ=28, β=8/3 trajectories spiral around C+ or C- and switch
    between the two wings irregularly. The largest Lyapunov exponent is about
    0.9, so an initial error doubles in under one time unit and long Euler
    runs separate from the exact solution exponentially.

    Examples
    --------
    >>> lorenz = Lorenz()
    >>> lorenz.derivative([1.0, 1.0, 1.0])
    array([ 0.        , 26.        , -1.66666667])
    """

    def define_system(
        self, sigma_val: float = 10.0, rho_val: float = 28.0, beta_val: float = 8.0 / 3.0
    ):
        x, y, z = sp.symbols("x y z", real=True)
        sigma, rho, beta = sp.symbols("sigma rho beta", real=True)

        self.parameters = {sigma: sigma_val, rho: rho_val, beta: beta_val}

        self.state_vars = [x, y, z]
        self.order = 1

        # Lorenz dynamics
        dx = sigma * (y - x)
        dy = x * (rho - z) - y
        dz = x * y - beta * z

        self._f_sym = sp.Matrix([dx, dy, dz])
