"""
Point Mass Ballistics
=====================
Computational core for small-arms exterior ballistics:
  - Standard drag functions (G1, G2, G5, G6, G7, G8, GI, GS)
  - Air density from temperature, pressure and humidity
  - Gravity on inclined lines of sight
  - Wind
  - Coriolis / Eötvös effect (Earth's rotation)

A Trajectory is a lazy stream of Packets produced by fixed-step
integration. The zero solver iterates bore pitch and yaw until the
trajectory passes through a target point within tolerance, and the
measurement projection turns packets into range table rows.

Range table formatting, unit-string parsing and command line handling
belong to the caller.
"""

from .units import (
    Acceleration, Angle, Energy, Length, Mass, Pressure,
    Temperature, Time, Velocity,
)
from .errors import (
    BallisticsError, ConfigurationError, ZeroFindingError,
    ConvergenceError, TerminatedEarlyError,
)
from .atmosphere import Atmosphere, density_ratio, speed_of_sound
from .drag_model import DragModel, DragTable, drag_model
from .projectile import (
    Projectile, Wind, Shooter, Scope, Flags, SimulationConfig,
    ForceModel, compute_forces,
)
from .integrator import State, step
from .trajectory import Packet, Trajectory
from .zero import (
    Target, ZeroSolution, ZeroSolver, find_zero_angles, solve_for,
)
from .measurements import Adjustment, Measurement, measure
from .sampling import sample, range_table
from .validation import validate_against_vacuum

__version__ = "1.0.0"
__all__ = [
    'Acceleration', 'Angle', 'Energy', 'Length', 'Mass', 'Pressure',
    'Temperature', 'Time', 'Velocity',
    'BallisticsError', 'ConfigurationError', 'ZeroFindingError',
    'ConvergenceError', 'TerminatedEarlyError',
    'Atmosphere', 'density_ratio', 'speed_of_sound',
    'DragModel', 'DragTable', 'drag_model',
    'Projectile', 'Wind', 'Shooter', 'Scope', 'Flags', 'SimulationConfig',
    'ForceModel', 'compute_forces',
    'State', 'step',
    'Packet', 'Trajectory',
    'Target', 'ZeroSolution', 'ZeroSolver', 'find_zero_angles', 'solve_for',
    'Adjustment', 'Measurement', 'measure',
    'sample', 'range_table',
    'validate_against_vacuum',
]
