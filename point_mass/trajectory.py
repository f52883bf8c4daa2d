"""
Trajectory Sequence
===================
A lazy, single-pass stream of Packets. Each pull integrates one step and
yields a snapshot of the state before that step, so the first packet is
the muzzle. Nothing is buffered; a consumer that only needs the first
100 yards only pays for 100 yards.

The stream ends on its own once the projectile is slower than the
configured minimum velocity, stops moving downrange, or exceeds the
maximum time of flight. Consumers may stop pulling at any point.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .integrator import State, step
from .projectile import ForceModel, SimulationConfig
from .units import Acceleration, Angle, Energy, Length, Time, Velocity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Packet:
    """Immutable snapshot of one simulation step (SI arrays)."""
    time_s: float
    position: np.ndarray       # [x, y, z] m, relative to the scope
    velocity_vector: np.ndarray
    acceleration_vector: np.ndarray
    mach: float
    mass: float                # kg

    @property
    def distance(self) -> Length:
        return Length(self.position[0])

    @property
    def elevation(self) -> Length:
        """Vertical deviation from the line of sight."""
        return Length(self.position[1])

    @property
    def windage(self) -> Length:
        """Horizontal deviation from the line of sight (right positive)."""
        return Length(self.position[2])

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity_vector))

    @property
    def velocity(self) -> Velocity:
        return Velocity(self.speed)

    @property
    def energy(self) -> Energy:
        return Energy(0.5 * self.mass * self.speed ** 2)

    @property
    def acceleration(self) -> Acceleration:
        return Acceleration(float(np.linalg.norm(self.acceleration_vector)))

    @property
    def time(self) -> Time:
        return Time(self.time_s)


class Trajectory:
    """
    Forward-only iterator of Packets for one configuration and bore angles.

    ``pitch``/``yaw`` default to the scope's dialled angles. The sequence is
    not restartable: iterating it a second time yields nothing more.
    """

    def __init__(self, config: SimulationConfig,
                 pitch: Optional[Angle] = None, yaw: Optional[Angle] = None):
        self.config = config
        self.pitch = pitch if pitch is not None else config.scope.pitch
        self.yaw = yaw if yaw is not None else config.scope.yaw
        self._forces = ForceModel(config)
        self._dt = config.time_step.si
        self._method = config.method
        self._min_speed = config.minimum_velocity.si
        self._max_time = config.max_time.si
        self._mass = config.projectile.mass.si
        self._state = State(
            0.0,
            config.initial_position(),
            config.initial_velocity(self.pitch, self.yaw),
        )
        self._done = False

    def __iter__(self):
        return self

    def __next__(self) -> Packet:
        if self._done:
            raise StopIteration
        state = self._state
        acc = self._forces.acceleration(state.position, state.velocity)
        packet = Packet(
            time_s=state.time,
            position=state.position,
            velocity_vector=state.velocity,
            acceleration_vector=acc,
            mach=self._forces.mach(state.velocity),
            mass=self._mass,
        )
        if self._terminal(state, packet.speed):
            self._done = True
        else:
            self._state = step(state, self._forces, self._dt, self._method, acc)
        return packet

    def _terminal(self, state: State, speed: float) -> bool:
        if speed < self._min_speed:
            logger.debug("Trajectory ended: speed %.2f m/s below minimum at t=%.4f s",
                         speed, state.time)
            return True
        if state.velocity[0] <= 0.0:
            logger.debug("Trajectory ended: no downrange velocity at t=%.4f s", state.time)
            return True
        if state.time >= self._max_time:
            logger.debug("Trajectory ended: time of flight limit %.1f s", self._max_time)
            return True
        return False
