"""
Zero Solver
===========
Finds the bore pitch and yaw that put the trajectory through a target
point within tolerance.

Each iteration flies a complete trajectory, takes the first packet at or
past the target distance (no interpolation between steps), and corrects
both angles by the small-angle miss/distance ratio:

    pitch += atan(vertical miss / distance)
    yaw   += atan(horizontal miss / distance)

Pitch and yaw are corrected together every pass; Coriolis, wind and cant
couple the two axes slightly. The loop is capped, and running out of
iterations raises ConvergenceError rather than handing back an
unvalidated zero.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Tuple

from .errors import ConfigurationError, ConvergenceError, TerminatedEarlyError
from .projectile import SimulationConfig
from .trajectory import Packet, Trajectory
from .units import Angle, Length

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 40


@dataclass(frozen=True)
class Target:
    """Point the zero must pass through, relative to the line of sight."""
    distance: Length = field(default_factory=lambda: Length(100.0, 'yd'))
    height: Length = field(default_factory=lambda: Length(0.0))
    offset: Length = field(default_factory=lambda: Length(0.0))
    tolerance: Length = field(default_factory=lambda: Length(0.001, 'in'))

    def __post_init__(self):
        for name in ('distance', 'height', 'offset', 'tolerance'):
            value = getattr(self, name)
            if not isinstance(value, Length):
                raise ConfigurationError(f"target {name} must be a Length, got {value!r}")
        if self.distance.si <= 0:
            raise ConfigurationError(f"target distance must be positive, got {self.distance!r}")
        if self.tolerance.si <= 0:
            raise ConfigurationError(f"target tolerance must be positive, got {self.tolerance!r}")


@dataclass(frozen=True)
class ZeroSolution:
    pitch: Angle
    yaw: Angle
    iterations: int
    elevation_miss: Length
    windage_miss: Length


@dataclass(frozen=True)
class ZeroIteration:
    """One pass of the solver, kept for diagnostics and plotting."""
    pitch: Angle
    yaw: Angle
    distance: Length
    elevation_miss: Length
    windage_miss: Length


class ZeroSolver:
    """
    Iterative pitch/yaw corrector.

    State machine: Initialize(0, 0) → Simulate → MeasureMiss →
    Done | Failed | CorrectAngles → Simulate.
    """

    def __init__(self, config: SimulationConfig, max_iterations: int = MAX_ITERATIONS):
        if not isinstance(config, SimulationConfig):
            raise ConfigurationError(f"config must be a SimulationConfig, got {config!r}")
        if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) \
                or max_iterations < 1:
            raise ConfigurationError(f"max_iterations must be a positive integer, got {max_iterations!r}")
        self.config = config
        self.max_iterations = max_iterations
        self.history: List[ZeroIteration] = []

    def sample(self, pitch: Angle, yaw: Angle, distance: Length) -> Packet:
        """First packet at or past ``distance`` for the given angles."""
        limit = distance.si
        last = None
        for packet in Trajectory(self.config, pitch, yaw):
            if packet.position[0] >= limit:
                return packet
            last = packet
        reached = last.distance if last is not None else Length(0.0)
        raise TerminatedEarlyError(distance, reached)

    def solve(self, target: Target) -> ZeroSolution:
        self.history = []
        tolerance = target.tolerance.si
        cant = self.config.scope.cant.si
        pitch = yaw = 0.0

        for iteration in range(1, self.max_iterations + 1):
            packet = self.sample(Angle(pitch), Angle(yaw), target.distance)
            distance = packet.position[0]
            miss_v = target.height.si - packet.position[1]
            miss_h = target.offset.si - packet.position[2]

            self.history.append(ZeroIteration(
                Angle(pitch), Angle(yaw), Length(distance), Length(miss_v), Length(miss_h),
            ))
            logger.debug("zero iteration %d: pitch=%.4f MOA yaw=%.4f MOA "
                         "miss=(%.5f in, %.5f in)",
                         iteration, Angle(pitch).to('moa'), Angle(yaw).to('moa'),
                         Length(miss_v).to('in'), Length(miss_h).to('in'))

            if abs(miss_v) <= tolerance and abs(miss_h) <= tolerance:
                solution = ZeroSolution(
                    Angle(pitch), Angle(yaw), iteration, Length(miss_v), Length(miss_h),
                )
                logger.info("Zeroed at %.1f yd in %d iterations: pitch=%.3f MOA yaw=%.3f MOA",
                            target.distance.to('yd'), iteration,
                            solution.pitch.to('moa'), solution.yaw.to('moa'))
                return solution

            # Bring the miss into the bore frame before turning it into angles
            c, s = math.cos(cant), math.sin(cant)
            bore_v = miss_v * c + miss_h * s
            bore_h = -miss_v * s + miss_h * c
            pitch += math.atan(bore_v / distance)
            yaw += math.atan(bore_h / distance)

        last = self.history[-1]
        raise ConvergenceError(
            self.max_iterations, last.pitch, last.yaw,
            last.elevation_miss, last.windage_miss,
        )


def find_zero_angles(config: SimulationConfig, target: Target,
                     max_iterations: int = MAX_ITERATIONS) -> Tuple[Angle, Angle]:
    """(pitch, yaw) that zero ``config`` on ``target``."""
    solution = ZeroSolver(config, max_iterations).solve(target)
    return solution.pitch, solution.yaw


def solve_for(zero_config: SimulationConfig, firing_config: SimulationConfig,
              target: Target, max_iterations: int = MAX_ITERATIONS) -> Trajectory:
    """
    Zero under ``zero_config``, then fly ``firing_config`` with the found
    angles plus the firing scope's dialled pitch and yaw.
    """
    pitch, yaw = find_zero_angles(zero_config, target, max_iterations)
    return Trajectory(
        firing_config,
        pitch + firing_config.scope.pitch,
        yaw + firing_config.scope.yaw,
    )
