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
Visual Test Suite for Trajectory Plotter

Simulates the built-in systems and writes HTML files for visual inspection.
Run this script to create a gallery of plots.

Usage:
    python visual_test_trajectory_plotter.py

Output:
    Creates HTML files in ./visual_tests/trajectory_plotter/
"""

from pathlib import Path

import numpy as np

from chaossim import DoublePendulum, LifeGrid, Lorenz, Rossler, Simulator, TrajectoryPlotter


def setup_output_directory():
    """Create output directory for visual tests."""
    output_dir = Path("visual_tests/trajectory_plotter")
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def test_1_lorenz_attractor(output_dir):
    """Test 1: Classic Lorenz attractor, 10000 steps of dt=0.001."""
    print("Generating Test 1: Lorenz attractor...")

    trajectory = Simulator(Lorenz(), x0=[0.01, 0.01, 0.01], dt=0.001, steps=10000).simulate()
    plotter = TrajectoryPlotter()
    plotter.render(trajectory, output_dir / "01_lorenz_time_series.html")
    plotter.render(trajectory, output_dir / "01_lorenz_attractor.html", kind="3d")
    print("  ✓ Saved: 01_lorenz_time_series.html, 01_lorenz_attractor.html")


def test_2_rossler_attractor(output_dir):
    """Test 2: Rössler attractor with the chaotic c = 5.7 band."""
    print("Generating Test 2: Rossler attractor...")

    trajectory = Simulator(Rossler(), x0=[1.0, 1.0, 0.0], dt=0.01, steps=20000).simulate()
    plotter = TrajectoryPlotter(default_theme="publication")
    plotter.render(trajectory, output_dir / "02_rossler_attractor.html", kind="3d")
    print("  ✓ Saved: 02_rossler_attractor.html")


def test_3_double_pendulum(output_dir):
    """Test 3: Double pendulum released with ω1 = 10."""
    print("Generating Test 3: Double pendulum...")

    trajectory = Simulator(
        DoublePendulum(), x0=[0.1, 0.1, 10.0, 0.0], dt=0.001, steps=1000
    ).simulate()
    TrajectoryPlotter().render(trajectory, output_dir / "03_double_pendulum.html")
    print("  ✓ Saved: 03_double_pendulum.html")


def test_4_random_double_pendulum(output_dir):
    """Test 4: Double pendulum from a seeded random state in [0, 90)."""
    print("Generating Test 4: Random double pendulum...")

    sim = Simulator.from_random_initial_state(
        DoublePendulum(), dt=0.001, steps=2000, rng=np.random.default_rng(2025)
    )
    trajectory = sim.simulate()
    if trajectory.diverged:
        print(f"  ! Non-finite state from step {trajectory.diverged_at}")
    TrajectoryPlotter(default_theme="dark").render(
        trajectory, output_dir / "04_random_double_pendulum.html"
    )
    print("  ✓ Saved: 04_random_double_pendulum.html")


def test_5_life_grid(output_dir):
    """Test 5: Text rendering of a few Game-of-Life generations."""
    print("Generating Test 5: Life grid...")

    grid = LifeGrid(10, 10, live_cells=30, rng=np.random.default_rng(0))
    frames = [grid.render_text()]
    for _ in range(5):
        grid.step()
        frames.append(grid.render_text())

    (output_dir / "05_life_grid.txt").write_text("\n\n".join(frames), encoding="utf-8")
    print("  ✓ Saved: 05_life_grid.txt")


def main():
    """Run all visual tests."""
    print("=" * 70)
    print("TRAJECTORY PLOTTER VISUAL TEST SUITE")
    print("=" * 70)

    output_dir = setup_output_directory()
    print(f"\nOutput directory: {output_dir.absolute()}\n")

    test_1_lorenz_attractor(output_dir)
    test_2_rossler_attractor(output_dir)
    test_3_double_pendulum(output_dir)
    test_4_random_double_pendulum(output_dir)
    test_5_life_grid(output_dir)

    print("\n" + "=" * 70)
    print("✓ All visual tests generated successfully!")
    print("=" * 70)


if __name__ == "__main__":
    main()
