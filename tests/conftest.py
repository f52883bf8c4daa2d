"""
Shared fixtures for the point_mass test suite.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from point_mass import (
    Flags, Length, Scope, SimulationConfig, Time, Target,
)


@pytest.fixture
def default_config():
    """220 gr .308, G7 0.5, 3000 ft/s, standard conditions, dt = 5e-5 s."""
    return SimulationConfig()


@pytest.fixture
def fast_config():
    """Same load with a coarser step for tests that fly further."""
    return SimulationConfig(time_step=Time(1e-4))


@pytest.fixture
def vacuum_config():
    """Gravity only, scope on the bore axis."""
    return SimulationConfig(
        flags=Flags(use_drag=False, use_gravity=True, use_coriolis=False),
        scope=Scope(height=Length(0.0)),
    )


@pytest.fixture
def zero_target():
    """100 yd, on the line of sight, 0.001 in tolerance."""
    return Target(
        distance=Length(100, 'yd'),
        height=Length(0, 'in'),
        offset=Length(0, 'in'),
        tolerance=Length(0.001, 'in'),
    )


def first_past(trajectory, distance):
    """First packet at or past ``distance`` (a Length)."""
    for packet in trajectory:
        if packet.position[0] >= distance.si:
            return packet
    raise AssertionError(f"trajectory never reached {distance!r}")
