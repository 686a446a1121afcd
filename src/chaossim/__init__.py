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
chaossim - chaotic dynamical systems, fixed-step simulation and plotting.

Examples
--------
>>> from chaossim import Lorenz, Simulator, TrajectoryPlotter
>>> trajectory = Simulator(Lorenz(), x0=[1.0, 1.0, 1.0], dt=0.01, steps=5000).simulate()
>>> TrajectoryPlotter().render(trajectory, "lorenz.html")
"""

__version__ = "0.1.0"

from .systems.base import (
    ConfigurationError,
    ContinuousSymbolicSystem,
    DynamicalSystem,
    ExplicitEulerIntegrator,
    IntegratorBase,
    NumericDegeneracyError,
    Simulator,
    SymbolicValidator,
    Trajectory,
    ValidationError,
)
from .systems.builtin import DoublePendulum, LifeGrid, Lorenz, Rossler
from .utils import RandomSymmetricMatrix
from .visualization import RenderingError, TrajectoryPlotter

__all__ = [
    # Systems
    "ContinuousSymbolicSystem",
    "DynamicalSystem",
    "Lorenz",
    "Rossler",
    "DoublePendulum",
    "LifeGrid",
    # Simulation
    "IntegratorBase",
    "ExplicitEulerIntegrator",
    "Simulator",
    "Trajectory",
    # Visualization
    "TrajectoryPlotter",
    # Utilities
    "RandomSymmetricMatrix",
    "SymbolicValidator",
    # Errors
    "ConfigurationError",
    "NumericDegeneracyError",
    "RenderingError",
    "ValidationError",
]
