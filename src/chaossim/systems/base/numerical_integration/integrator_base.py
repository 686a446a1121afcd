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
Integrator Base - Abstract Interface for Fixed-Step Integration

Defines the interface every integrator implements. Integrators only know the
system through its vector field (derivative) and its order; they are
otherwise system-agnostic.
"""

import numbers
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import numpy as np

from chaossim.types.core import DynamicsFunction, ScalarLike, StateVector
from chaossim.types.trajectories import IntegratorStats

if TYPE_CHECKING:
    from chaossim.systems.base.core.continuous_symbolic_system import (
        ContinuousSymbolicSystem,
    )


class IntegratorBase(ABC):
    """
    Abstract base class for numerical integrators.

    All integrators must implement:
    - step(): Single integration step x(t) → x(t + dt)
    - name: Integrator name for display

    Examples
    --------
    >>> integrator = ExplicitEulerIntegrator(system, dt=0.01)
    >>> x_next = integrator.step(x)
    >>> integrator.get_stats()["total_steps"]
    1
    """

    def __init__(self, system: "ContinuousSymbolicSystem", dt: ScalarLike, **options):
        """
        Initialize integrator.

        Parameters
        ----------
        system : ContinuousSymbolicSystem
            Continuous-time system to integrate
        dt : float
            Fixed time step, finite and >= 0. A zero step leaves the state
            unchanged.
        **options : dict
            Integrator-specific options

        Raises
        ------
        ValueError
            If dt is not a finite, non-negative real number
        """
        self.system = system
        self.dynamics: DynamicsFunction = system.derivative
        self.dt = self._check_dt(dt)
        self.options = options

        self._stats = {
            "total_steps": 0,
            "total_fev": 0,  # Function evaluations
            "total_time": 0.0,
        }

    @staticmethod
    def _check_dt(dt: ScalarLike) -> float:
        if isinstance(dt, bool) or not isinstance(dt, numbers.Real):
            raise ValueError(f"Time step dt must be a real number, got {type(dt).__name__}")
        dt = float(dt)
        if not np.isfinite(dt):
            raise ValueError(f"Time step dt must be finite, got {dt}")
        if dt < 0:
            raise ValueError(f"Time step dt must be non-negative, got {dt}")
        return dt

    @abstractmethod
    def step(self, x: StateVector, dt: Optional[ScalarLike] = None) -> StateVector:
        """
        Take one integration step: x(t) → x(t + dt).

        Parameters
        ----------
        x : np.ndarray
            Current state (nx,)
        dt : Optional[float]
            Step size (uses self.dt if None)

        Returns
        -------
        np.ndarray
            Next state, a new array; x is not modified
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Integrator name for display."""
        pass

    # ========================================================================
    # Common Utilities (Shared by All Integrators)
    # ========================================================================

    def _evaluate_dynamics(self, x: StateVector) -> np.ndarray:
        """
        Evaluate system dynamics with statistics tracking.

        This wrapper counts function evaluations for performance analysis.
        """
        start = time.perf_counter()
        dx = self.dynamics(x, None)
        self._stats["total_fev"] += 1
        self._stats["total_time"] += time.perf_counter() - start
        return dx

    def get_stats(self) -> IntegratorStats:
        """
        Get integration statistics.

        Returns
        -------
        IntegratorStats
            'total_steps', 'total_fev', 'total_time', 'avg_fev_per_step'
        """
        avg_fev = self._stats["total_fev"] / max(1, self._stats["total_steps"])
        return {
            "total_steps": self._stats["total_steps"],
            "total_fev": self._stats["total_fev"],
            "total_time": self._stats["total_time"],
            "avg_fev_per_step": avg_fev,
        }

    def reset_stats(self):
        """Reset integration statistics to zero."""
        self._stats["total_steps"] = 0
        self._stats["total_fev"] = 0
        self._stats["total_time"] = 0.0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(system={self.system.__class__.__name__}, dt={self.dt})"

    def __str__(self) -> str:
        return f"{self.name} (dt={self.dt:.4g})"
