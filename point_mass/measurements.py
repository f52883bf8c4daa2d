"""
Measurement Projection
======================
Turns a raw Packet into the quantities a range table shows: distance,
elevation and windage (as lengths and as angles), velocity, Mach, energy,
acceleration, time of flight, and the hold needed to hit the aim point.

Read-only; nothing here touches simulation state.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .trajectory import Packet
from .units import Acceleration, Angle, Energy, Length, Time, Velocity


class Adjustment(Enum):
    """Correction needed to bring the impact onto the aim point."""
    UP = 'U'
    DOWN = 'D'
    LEFT = 'L'
    RIGHT = 'R'
    ON_TARGET = '*'

    def __str__(self):
        return self.value


def elevation_adjustment(miss: Length, tolerance: Length) -> Adjustment:
    """High impacts need a hold down, low impacts a hold up."""
    if miss >= tolerance:
        return Adjustment.DOWN
    if miss <= -tolerance:
        return Adjustment.UP
    return Adjustment.ON_TARGET


def windage_adjustment(miss: Length, tolerance: Length) -> Adjustment:
    """Impacts right of the aim point need a hold left, and vice versa."""
    if miss >= tolerance:
        return Adjustment.LEFT
    if miss <= -tolerance:
        return Adjustment.RIGHT
    return Adjustment.ON_TARGET


def angular_equivalent(miss: Length, distance: Length, tolerance: Length) -> Angle:
    """
    Angle subtended by ``miss`` at ``distance``.

    Zero strictly inside the tolerance and at the muzzle, where no angle is defined.
    """
    if distance.si <= 0 or abs(miss) < tolerance:
        return Angle(0.0)
    return Angle(math.atan(miss.si / distance.si))


@dataclass(frozen=True)
class Measurement:
    distance: Length
    elevation: Length
    elevation_angle: Angle
    elevation_adjustment: Adjustment
    windage: Length
    windage_angle: Angle
    windage_adjustment: Adjustment
    velocity: Velocity
    mach: float
    energy: Energy
    acceleration: Acceleration
    time: Time


def measure(packet: Packet, tolerance: Length,
            height: Optional[Length] = None, offset: Optional[Length] = None) -> Measurement:
    """
    Project ``packet`` into user-facing quantities.

    ``height``/``offset`` move the aim point off the line of sight; misses
    and adjustments are taken relative to it.
    """
    height = height if height is not None else Length(0.0)
    offset = offset if offset is not None else Length(0.0)
    distance = packet.distance
    elevation = packet.elevation
    windage = packet.windage
    elevation_miss = elevation - height
    windage_miss = windage - offset
    return Measurement(
        distance=distance,
        elevation=elevation,
        elevation_angle=angular_equivalent(elevation_miss, distance, tolerance),
        elevation_adjustment=elevation_adjustment(elevation_miss, tolerance),
        windage=windage,
        windage_angle=angular_equivalent(windage_miss, distance, tolerance),
        windage_adjustment=windage_adjustment(windage_miss, tolerance),
        velocity=packet.velocity,
        mach=packet.mach,
        energy=packet.energy,
        acceleration=packet.acceleration,
        time=packet.time,
    )
