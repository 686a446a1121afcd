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
Simulator - Fixed-Step Trajectory Generation

Binds one system, one initial state, a time step and a step count, and folds
the integrator over them:

    for k in range(steps):
        record x_k
        x_{k+1} = step(x_k)

so the trajectory holds exactly `steps` states, the first being the initial
state and the state after the final step not being recorded.

Numeric degeneracy
------------------
Chaotic growth or near-degenerate denominators can drive the state to
NaN/inf. The first step index whose state is non-finite is reported:

- on_degeneracy="flag" (default): the trajectory is tagged
  (`trajectory.diverged_at`), a RuntimeWarning is issued and stepping
  continues so the length invariant holds.
- on_degeneracy="raise": NumericDegeneracyError is raised with the step
  index and the partial trajectory.

Examples
--------
>>> sim = Simulator(Lorenz(), x0=[0.01, 0.01, 0.01], dt=0.001, steps=10000)
>>> trajectory = sim.simulate()
>>> len(trajectory)
10000
>>>
>>> # Randomized double pendulum (reproducible only with a seeded generator)
>>> sim = Simulator.from_random_initial_state(
...     DoublePendulum(), dt=0.001, steps=1000, rng=np.random.default_rng(0)
... )
"""

import numbers
import warnings
from typing import TYPE_CHECKING, Optional

import numpy as np

from chaossim.systems.base.numerical_integration.fixed_step_integrators import (
    ExplicitEulerIntegrator,
)
from chaossim.systems.base.numerical_integration.integrator_base import IntegratorBase
from chaossim.systems.base.trajectory import Trajectory
from chaossim.types.core import ArrayLike, IntegerLike, ScalarLike, StateVector

if TYPE_CHECKING:
    from chaossim.systems.base.core.continuous_symbolic_system import (
        ContinuousSymbolicSystem,
    )

DEGENERACY_POLICIES = ("flag", "raise")


class ConfigurationError(ValueError):
    """Raised when a simulation is configured with invalid inputs."""

    pass


class NumericDegeneracyError(RuntimeError):
    """
    Raised when a state becomes non-finite and the policy is 'raise'.

    Attributes
    ----------
    step : int
        Index of the first non-finite state
    trajectory : Trajectory
        States recorded before the failure
    """

    def __init__(self, step: int, trajectory: Trajectory):
        self.step = step
        self.trajectory = trajectory
        super().__init__(
            f"Non-finite state encountered at step {step} "
            f"({trajectory.system_name}, dt={trajectory.dt})"
        )


class Simulator:
    """
    Drives one system from an initial state for a fixed number of steps.

    Parameters
    ----------
    system : ContinuousSymbolicSystem
        System providing the vector field
    x0 : ArrayLike
        Initial state, length system.nx
    dt : float
        Time step, > 0 (== 0 only with allow_zero_dt=True)
    steps : int
        Number of states to record, >= 0
    integrator : Optional[IntegratorBase]
        Defaults to ExplicitEulerIntegrator(system, dt)
    on_degeneracy : str
        'flag' or 'raise' (see module docstring)
    allow_zero_dt : bool
        Accept dt == 0; every recorded state then equals x0

    Raises
    ------
    ConfigurationError
        On any invalid input, before any simulation work is done
    """

    def __init__(
        self,
        system: "ContinuousSymbolicSystem",
        x0: ArrayLike,
        dt: ScalarLike,
        steps: IntegerLike,
        integrator: Optional[IntegratorBase] = None,
        on_degeneracy: str = "flag",
        allow_zero_dt: bool = False,
    ):
        self.system = system
        self.dt = self._validate_dt(dt, allow_zero_dt)
        self.steps = self._validate_steps(steps)
        self.x0 = self._validate_initial_state(x0)

        if on_degeneracy not in DEGENERACY_POLICIES:
            raise ConfigurationError(
                f"Unknown on_degeneracy '{on_degeneracy}'. "
                f"Must be one of {list(DEGENERACY_POLICIES)}"
            )
        self.on_degeneracy = on_degeneracy

        if integrator is None:
            integrator = ExplicitEulerIntegrator(system, self.dt)
        elif integrator.system is not system:
            raise ConfigurationError(
                f"Integrator is bound to {integrator.system!r}, not to {system!r}"
            )
        self.integrator = integrator

    @classmethod
    def from_random_initial_state(
        cls,
        system: "ContinuousSymbolicSystem",
        dt: ScalarLike,
        steps: IntegerLike,
        rng: Optional[np.random.Generator] = None,
        **kwargs,
    ) -> "Simulator":
        """
        Build a simulator whose initial state is drawn by the system.

        The state is drawn once, here, before any step. Without a seeded
        `rng` the result is not reproducible across runs.

        Raises
        ------
        ConfigurationError
            If the system has no random initializer
        """
        draw = getattr(system, "random_initial_state", None)
        if draw is None:
            raise ConfigurationError(
                f"{system.__class__.__name__} does not provide a random initial state"
            )
        return cls(system, draw(rng=rng), dt, steps, **kwargs)

    # ========================================================================
    # Validation
    # ========================================================================

    @staticmethod
    def _validate_dt(dt: ScalarLike, allow_zero_dt: bool) -> float:
        if isinstance(dt, bool) or not isinstance(dt, numbers.Real):
            raise ConfigurationError(f"dt must be a real number, got {type(dt).__name__}")
        dt = float(dt)
        if not np.isfinite(dt):
            raise ConfigurationError(f"dt must be finite, got {dt}")
        if dt < 0 or (dt == 0 and not allow_zero_dt):
            raise ConfigurationError(f"dt must be strictly positive, got {dt}")
        return dt

    @staticmethod
    def _validate_steps(steps: IntegerLike) -> int:
        if isinstance(steps, bool) or not isinstance(steps, numbers.Integral):
            raise ConfigurationError(f"steps must be an integer, got {type(steps).__name__}")
        if steps < 0:
            raise ConfigurationError(f"steps must be non-negative, got {steps}")
        return int(steps)

    def _validate_initial_state(self, x0: ArrayLike) -> StateVector:
        try:
            x0_arr = np.array(x0, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Initial state is not numeric: {x0!r}") from e

        if x0_arr.shape != (self.system.nx,):
            raise ConfigurationError(
                f"{self.system.__class__.__name__} has {self.system.nx} coordinates "
                f"{self.system.state_names}, got initial state of shape {x0_arr.shape}"
            )
        if not np.all(np.isfinite(x0_arr)):
            raise ConfigurationError(f"Initial state must be finite, got {x0_arr}")

        x0_arr.setflags(write=False)
        return x0_arr

    # ========================================================================
    # Simulation
    # ========================================================================

    def simulate(self) -> Trajectory:
        """
        Run the simulation to completion.

        Each call starts again from the stored initial state, so repeated
        calls return identical trajectories.

        Returns
        -------
        Trajectory
            Exactly `steps` states; entry 0 is x0

        Raises
        ------
        NumericDegeneracyError
            If a state becomes non-finite and on_degeneracy='raise'
        """
        trajectory = Trajectory(
            self.system.state_names,
            self.dt,
            system_name=self.system.__class__.__name__,
            capacity=self.steps,
        )

        x = self.x0
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            for k in range(self.steps):
                trajectory.append(x)
                x_next = self.integrator.step(x, dt=self.dt)

                if not trajectory.diverged and not np.all(np.isfinite(x_next)):
                    self._report_degeneracy(k + 1, trajectory)

                x = x_next

        return trajectory

    def _report_degeneracy(self, step: int, trajectory: Trajectory):
        if self.on_degeneracy == "raise":
            raise NumericDegeneracyError(step, trajectory)

        trajectory.mark_diverged(step)
        warnings.warn(
            f"{self.system.__class__.__name__}: non-finite state first observed at "
            f"step {step} (dt={self.dt}); trajectory marked as diverged",
            RuntimeWarning,
            stacklevel=3,
        )

    def __repr__(self) -> str:
        return (
            f"Simulator(system={self.system!r}, x0={self.x0.tolist()}, "
            f"dt={self.dt}, steps={self.steps}, integrator={self.integrator.name})"
        )
