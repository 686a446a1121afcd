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
Fixed-Step Integrators

Implements the explicit (forward) Euler method for first- and second-order
systems.

First-order systems:
    x_{k+1} = x_k + dt * f(x_k)

Second-order systems, x = [q, q̇], f(x) = [q̇, q̈]:
    q̇_{k+1} = q̇_k + dt * q̈(x_k)
    q_{k+1} = q_k + dt * q̇_{k+1}      (position_update="semi_implicit")
    q_{k+1} = q_k + dt * q̇_k          (position_update="explicit")

Accuracy
--------
Euler is first order: local truncation error O(dt²), global error O(dt)
over a fixed time span. For chaotic systems (Lorenz, Rossler, double
pendulum) the numerical trajectory separates exponentially from the exact
one as the step count grows. That is a property of the problem, not an
integration fault.
"""

from typing import TYPE_CHECKING, Optional

import numpy as np

from chaossim.systems.base.numerical_integration.integrator_base import IntegratorBase
from chaossim.types.core import ScalarLike, StateVector

if TYPE_CHECKING:
    from chaossim.systems.base.core.continuous_symbolic_system import (
        ContinuousSymbolicSystem,
    )

POSITION_UPDATES = ("semi_implicit", "explicit")


class ExplicitEulerIntegrator(IntegratorBase):
    """
    Explicit Euler integrator (Forward Euler).

    Characteristics:
    - Order: 1 (error ∝ dt)
    - Stability: Conditionally stable (small dt required)
    - Function evaluations: 1 per step

    Every coordinate is advanced with its own derivative, all derivatives
    being evaluated on the same pre-step state.

    Examples
    --------
    >>> integrator = ExplicitEulerIntegrator(Rossler(a_val=0, b_val=0, c_val=0), dt=0.1)
    >>> integrator.step(np.array([1.0, 0.0, 0.0]))
    array([1. , 0.1, 0. ])
    """

    def __init__(
        self,
        system: "ContinuousSymbolicSystem",
        dt: ScalarLike,
        position_update: str = "semi_implicit",
        **options,
    ):
        """
        Initialize Explicit Euler integrator.

        Parameters
        ----------
        system : ContinuousSymbolicSystem
            System to integrate (order 1 or 2)
        dt : float
            Fixed time step
        position_update : str
            Second-order systems only: 'semi_implicit' advances positions
            with the updated velocities, 'explicit' with the old ones
        """
        super().__init__(system, dt, **options)

        if position_update not in POSITION_UPDATES:
            raise ValueError(
                f"Unknown position_update '{position_update}'. "
                f"Must be one of {list(POSITION_UPDATES)}"
            )
        if system.order not in (1, 2):
            raise NotImplementedError(
                f"Integration of order {system.order} systems is not implemented"
            )
        self.position_update = position_update

    def step(self, x: StateVector, dt: Optional[ScalarLike] = None) -> StateVector:
        """
        Take one Euler step.

        Parameters
        ----------
        x : np.ndarray
            Current state
        dt : Optional[float]
            Time step (uses self.dt if None)

        Returns
        -------
        np.ndarray
            Next state
        """
        dt = self.dt if dt is None else self._check_dt(dt)
        x = self.system.validate_state(x)

        if self.system.order == 1:
            x_next = self._step_first_order(x, dt)
        else:
            x_next = self._step_second_order(x, dt)

        self._stats["total_steps"] += 1
        return x_next

    def _step_first_order(self, x: StateVector, dt: float) -> StateVector:
        dx = self._evaluate_dynamics(x)
        return x + dt * dx

    def _step_second_order(self, x: StateVector, dt: float) -> StateVector:
        nq = self.system.nq
        dx = self._evaluate_dynamics(x)
        if self.position_update == "explicit":
            return x + dt * dx

        qdot_next = x[nq:] + dt * dx[nq:]
        q_next = x[:nq] + dt * qdot_next

        return np.concatenate([q_next, qdot_next])

    @property
    def name(self) -> str:
        if self.system.order == 2 and self.position_update == "semi_implicit":
            return "Explicit Euler (semi-implicit positions)"
        return "Explicit Euler"
