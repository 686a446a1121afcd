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

from typing import Optional

import numpy as np
import sympy as sp

from chaossim.systems.base.core.continuous_symbolic_system import ContinuousSymbolicSystem

RANDOM_INITIAL_STATE_LOW = 0.0
RANDOM_INITIAL_STATE_HIGH = 90.0


class DoublePendulum(ContinuousSymbolicSystem):
    """
    Double pendulum - second-order formulation.

    State Space:
    -----------
    State: x = [θ1, θ2, ω1, ω2]
        - θ1, θ2: Arm angles [rad]
        - ω1, ω2: Angular velocities [rad/s]

    Generalized coordinates q = [θ1, θ2], nq = 2, order = 2.

    Dynamics Representation:
    -----------------------
    With Δ = θ1 - θ2 and D = 3 - cos(2θ1 - 2θ2):

        K  = 2·sin θ1 + sin(θ1 - 2θ2) + 2·sin Δ·(ω2² + ω1²·cos Δ)
        α1 = -g·K / D
        α2 = 2·sin Δ·(2·cos θ1·ω1² + g·K) / D

    _f_sym holds [α1, α2] (see highest_derivative()); derivative() returns
    the full rate [ω1, ω2, α1, α2]. The default integrator advances ω with
    α·dt first and then θ with the updated ω·dt.

    Numerical notes:
    ---------------
    D ranges over [2, 4] analytically, so it never reaches zero, but large
    angular velocities make α grow quadratically and a long run can
    overflow. The simulator reports that as numeric degeneracy.

    Parameters:
    ----------
    g_val : float, default=9.81
        Gravitational acceleration [m/s²].

    Examples
    --------
    >>> pendulum = DoublePendulum(g_val=9.81)
    >>> pendulum.nx, pendulum.nq
    (4, 2)
    >>> x0 = pendulum.random_initial_state(np.random.default_rng(42))
    """

    def define_system(self, g_val: float = 9.81):
        theta1, theta2, omega1, omega2 = sp.symbols("theta1 theta2 omega1 omega2", real=True)
        g = sp.symbols("g", real=True)

        self.parameters = {g: g_val}
        self.state_vars = [theta1, theta2, omega1, omega2]
        self.order = 2

        delta = theta1 - theta2
        denominator = 3 - sp.cos(2 * theta1 - 2 * theta2)
        coupling = (
            2 * sp.sin(theta1)
            + sp.sin(theta1 - 2 * theta2)
            + 2 * sp.sin(delta) * (omega2**2 + omega1**2 * sp.cos(delta))
        )

        alpha1 = -g * coupling / denominator
        alpha2 = 2 * sp.sin(delta) * (2 * sp.cos(theta1) * omega1**2 + g * coupling) / denominator

        self._f_sym = sp.Matrix([alpha1, alpha2])

    def random_initial_state(self, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """
        Draw [θ1, θ2, ω1, ω2] independently and uniformly from [0, 90).

        Parameters
        ----------
        rng : Optional[np.random.Generator]
            Source of randomness. When omitted an unseeded generator is
            created, so the draw is NOT reproducible across runs; pass
            np.random.default_rng(seed) for repeatable results.

        Returns
        -------
        np.ndarray
            Initial state, shape (4,)
        """
        if rng is None:
            rng = np.random.default_rng()
        return rng.uniform(RANDOM_INITIAL_STATE_LOW, RANDOM_INITIAL_STATE_HIGH, size=self.nx)
