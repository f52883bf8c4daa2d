"""
Validation Against Closed-Form Motion
=====================================
With drag and Coriolis switched off the simulator must reproduce
projectile motion in a uniform gravity field:

    r(t) = r0 + v0 t + ½ g t²

This module flies such a trajectory, samples it at the requested
distances and compares elevation and windage with the closed form at the
same time of flight. The residual is the integrator's truncation error.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

import numpy as np

from .projectile import Flags, SimulationConfig
from .trajectory import Trajectory
from .units import Angle, Length


@dataclass
class ValidationResult:
    """Result of one validation comparison."""
    distance: Length
    time_s: float
    sim_elevation: Length
    ref_elevation: Length
    sim_windage: Length
    ref_windage: Length

    @property
    def elevation_error(self) -> Length:
        return self.sim_elevation - self.ref_elevation

    @property
    def windage_error(self) -> Length:
        return self.sim_windage - self.ref_windage


def validate_against_vacuum(config: SimulationConfig, distances: Sequence[Length],
                            pitch: Optional[Angle] = None, yaw: Optional[Angle] = None,
                            verbose: bool = True) -> List[ValidationResult]:
    """
    Compare a drag-free, Coriolis-free flight of ``config`` with the
    closed-form solution at each distance.

    Returns list of ValidationResult for each distance reached.
    """
    vacuum = replace(config, flags=Flags(use_drag=False, use_gravity=True, use_coriolis=False))
    trajectory = Trajectory(vacuum, pitch, yaw)

    r0 = vacuum.initial_position()
    v0 = vacuum.initial_velocity(trajectory.pitch, trajectory.yaw)
    g = vacuum.shooter.gravity_vector()

    results = []
    pending = sorted(distances)
    for packet in trajectory:
        if not pending:
            break
        if packet.position[0] < pending[0].si:
            continue
        t = packet.time_s
        expected = r0 + v0 * t + 0.5 * g * t ** 2
        results.append(ValidationResult(
            distance=pending.pop(0),
            time_s=t,
            sim_elevation=packet.elevation,
            ref_elevation=Length(expected[1]),
            sim_windage=packet.windage,
            ref_windage=Length(expected[2]),
        ))

    if verbose:
        print(f"\n{'='*64}")
        print(f"  VALIDATION: vacuum trajectory, {vacuum.method.upper()} "
              f"dt={vacuum.time_step.si:g} s")
        print(f"{'='*64}")
        print(f"{'Dist (yd)':>10} {'ToF (s)':>8} {'Sim (in)':>10} {'Ref (in)':>10} "
              f"{'Err (in)':>10} {'Wind err':>10}")
        print("-" * 64)
        for r in results:
            print(f"{r.distance.to('yd'):>10.0f} {r.time_s:>8.4f} "
                  f"{r.sim_elevation.to('in'):>10.3f} {r.ref_elevation.to('in'):>10.3f} "
                  f"{r.elevation_error.to('in'):>+10.4f} {r.windage_error.to('in'):>+10.4f}")
        if results:
            worst = max(abs(r.elevation_error.to('in')) for r in results)
            print("-" * 64)
            print(f"  Max elevation error: {worst:.4f} in")
        print(f"{'='*64}\n")

    return results


def max_error(results: List[ValidationResult]) -> Length:
    """Largest absolute elevation or windage error."""
    if not results:
        return Length(0.0)
    errors = [abs(r.elevation_error.si) for r in results] + \
             [abs(r.windage_error.si) for r in results]
    return Length(float(np.max(errors)))
