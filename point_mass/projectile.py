"""
Projectile, Firing Geometry & Forces
====================================
Defines the configuration dataclasses and computes the net acceleration:
  - Gravity (rotated into the inclined line of sight)
  - Aerodynamic drag (Mach-dependent, scaled by ballistic coefficient)
  - Wind effects (velocity relative to air mass)
  - Coriolis / Eötvös effect (Earth's rotation)

Coordinate system (origin at the scope, axes along the line of sight):
  x = downrange
  y = vertical  (up positive)
  z = horizontal (right positive looking downrange)
"""

import math
from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np

from .atmosphere import Atmosphere, STANDARD_DENSITY, density_ratio, speed_of_sound
from .drag_model import DragTable, drag_acceleration, drag_model
from .errors import ConfigurationError
from .units import Acceleration, Angle, Length, Mass, Time, Velocity


# ── Earth rotation parameters ─────────────────────────────────────────────
EARTH_ROTATION_RATE = 7.2921159e-5  # rad/s
STANDARD_GRAVITY = 9.80665          # m/s²

INTEGRATION_METHODS = ('euler', 'rk4')


def _require(name, value, kind):
    if not isinstance(value, kind):
        raise ConfigurationError(
            f"{name} must be a {kind.__name__}, got {value!r}"
        )


def _require_positive(name, value, kind):
    _require(name, value, kind)
    if value.si <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}")


def to_line_of_sight(vector: np.ndarray, incline: float) -> np.ndarray:
    """Rotate a level-frame vector into a line of sight inclined by ``incline`` rad."""
    c, s = math.cos(incline), math.sin(incline)
    x, y, z = vector
    return np.array([x * c + y * s, -x * s + y * c, z])


def rotate_cant(vector: np.ndarray, cant: float) -> np.ndarray:
    """Rotate about the downrange axis; positive cant turns up toward the right."""
    c, s = math.cos(cant), math.sin(cant)
    x, y, z = vector
    return np.array([x, y * c - z * s, y * s + z * c])


@dataclass(frozen=True)
class Projectile:
    """
    Physical and aerodynamic properties of the bullet.

    ``bc`` is the ballistic coefficient (lb/in²) against ``drag_table``.
    """
    mass: Mass = field(default_factory=lambda: Mass(220.0, 'gr'))
    caliber: Length = field(default_factory=lambda: Length(0.308, 'in'))
    velocity: Velocity = field(default_factory=lambda: Velocity(3000.0, 'ft/s'))
    bc: float = 0.5
    drag_table: DragTable = DragTable.G7

    def __post_init__(self):
        _require_positive('mass', self.mass, Mass)
        _require_positive('caliber', self.caliber, Length)
        _require_positive('velocity', self.velocity, Velocity)
        if isinstance(self.bc, bool) or not isinstance(self.bc, (int, float)) or self.bc <= 0:
            raise ConfigurationError(f"bc must be a positive number, got {self.bc!r}")
        if not isinstance(self.drag_table, DragTable):
            raise ConfigurationError(f"drag_table must be a DragTable, got {self.drag_table!r}")

    @property
    def area(self) -> float:
        """Reference cross-sectional area (m²)."""
        return math.pi * (self.caliber.si / 2) ** 2

    @property
    def sectional_density(self) -> float:
        """Sectional density in lb/in²."""
        return self.mass.to('lb') / self.caliber.to('in') ** 2

    @property
    def form_factor(self) -> float:
        """i = SD / BC, scales the reference drag curve."""
        return self.sectional_density / self.bc


@dataclass(frozen=True)
class Wind:
    """
    Wind in the line of sight plane.

    ``direction`` is where the wind comes FROM, clockwise from the line of
    sight: 0° = headwind, 90° = from the right, 180° = tailwind.
    """
    speed: Velocity = field(default_factory=lambda: Velocity(0.0))
    direction: Angle = field(default_factory=lambda: Angle(0.0))

    def __post_init__(self):
        _require('wind speed', self.speed, Velocity)
        _require('wind direction', self.direction, Angle)
        if self.speed.si < 0:
            raise ConfigurationError(f"wind speed cannot be negative, got {self.speed!r}")

    def vector(self) -> np.ndarray:
        """Air mass velocity [vx, vy, vz] (m/s)."""
        a = self.direction.si
        return -self.speed.si * np.array([math.cos(a), 0.0, math.sin(a)])


@dataclass(frozen=True)
class Shooter:
    """Where and how the shot is taken."""
    latitude: Angle = field(default_factory=lambda: Angle(0.0))
    bearing: Angle = field(default_factory=lambda: Angle(0.0))    # 0 = North, 90 = East
    incline: Angle = field(default_factory=lambda: Angle(0.0))    # line of sight above level
    gravity: Acceleration = field(default_factory=lambda: Acceleration(STANDARD_GRAVITY))

    def __post_init__(self):
        _require('latitude', self.latitude, Angle)
        _require('bearing', self.bearing, Angle)
        _require('incline', self.incline, Angle)
        _require('gravity', self.gravity, Acceleration)
        if abs(self.latitude.to('deg')) > 90.0:
            raise ConfigurationError(f"latitude must be within ±90°, got {self.latitude.to('deg'):.3f}°")
        if abs(self.incline.to('deg')) >= 90.0:
            raise ConfigurationError(f"incline must be within ±90°, got {self.incline.to('deg'):.3f}°")
        if self.gravity.si < 0:
            raise ConfigurationError(f"gravity is a magnitude, got {self.gravity!r}")

    def gravity_vector(self) -> np.ndarray:
        """Gravity resolved along/across the inclined line of sight."""
        return to_line_of_sight(np.array([0.0, -self.gravity.si, 0.0]), self.incline.si)

    def omega(self) -> np.ndarray:
        """Earth's angular velocity in the line of sight frame (rad/s)."""
        lat, bearing = self.latitude.si, self.bearing.si
        # x toward the bearing, y local up, z to the right of the bearing
        level = EARTH_ROTATION_RATE * np.array([
            math.cos(lat) * math.cos(bearing),
            math.sin(lat),
            -math.cos(lat) * math.sin(bearing),
        ])
        return to_line_of_sight(level, self.incline.si)


@dataclass(frozen=True)
class Scope:
    """
    Sight position relative to the bore, plus dialled angles and cant.

    ``pitch`` and ``yaw`` are applied on top of any zero found by the
    solver; positive yaw moves impact to the right.
    """
    height: Length = field(default_factory=lambda: Length(1.5, 'in'))
    offset: Length = field(default_factory=lambda: Length(0.0))
    pitch: Angle = field(default_factory=lambda: Angle(0.0))
    yaw: Angle = field(default_factory=lambda: Angle(0.0))
    cant: Angle = field(default_factory=lambda: Angle(0.0))

    def __post_init__(self):
        _require('scope height', self.height, Length)
        _require('scope offset', self.offset, Length)
        _require('scope pitch', self.pitch, Angle)
        _require('scope yaw', self.yaw, Angle)
        _require('scope cant', self.cant, Angle)


@dataclass(frozen=True)
class Flags:
    use_drag: bool = True
    use_gravity: bool = True
    use_coriolis: bool = True


@dataclass(frozen=True)
class SimulationConfig:
    """
    Everything needed to fly one trajectory.

    Built once and validated eagerly; invalid values raise
    ConfigurationError before any integration runs.
    """
    projectile: Projectile = field(default_factory=Projectile)
    atmosphere: Atmosphere = field(default_factory=Atmosphere)
    wind: Wind = field(default_factory=Wind)
    shooter: Shooter = field(default_factory=Shooter)
    scope: Scope = field(default_factory=Scope)
    flags: Flags = field(default_factory=Flags)
    time_step: Time = field(default_factory=lambda: Time(0.00005))
    method: str = 'euler'
    minimum_velocity: Velocity = field(default_factory=lambda: Velocity(50.0, 'ft/s'))
    max_time: Time = field(default_factory=lambda: Time(30.0))

    def __post_init__(self):
        _require('projectile', self.projectile, Projectile)
        _require('atmosphere', self.atmosphere, Atmosphere)
        _require('wind', self.wind, Wind)
        _require('shooter', self.shooter, Shooter)
        _require('scope', self.scope, Scope)
        _require('flags', self.flags, Flags)
        _require_positive('time_step', self.time_step, Time)
        _require_positive('max_time', self.max_time, Time)
        _require('minimum_velocity', self.minimum_velocity, Velocity)
        if self.minimum_velocity.si < 0:
            raise ConfigurationError(f"minimum_velocity cannot be negative, got {self.minimum_velocity!r}")
        if self.method not in INTEGRATION_METHODS:
            raise ConfigurationError(
                f"Unknown integration method '{self.method}'. "
                f"Available: {list(INTEGRATION_METHODS)}"
            )

    def with_conditions(self, atmosphere: Optional[Atmosphere] = None,
                        wind: Optional[Wind] = None,
                        shooter: Optional[Shooter] = None) -> "SimulationConfig":
        """Copy sharing projectile and scope, with other firing conditions."""
        return replace(
            self,
            atmosphere=atmosphere if atmosphere is not None else self.atmosphere,
            wind=wind if wind is not None else self.wind,
            shooter=shooter if shooter is not None else self.shooter,
        )

    def initial_velocity(self, pitch: Angle, yaw: Angle) -> np.ndarray:
        """
        Muzzle velocity vector [vx, vy, vz] for the given bore angles,
        rotated by the scope cant.
        """
        p, y = pitch.si, yaw.si
        v = self.projectile.velocity.si
        bore = v * np.array([
            math.cos(p) * math.cos(y),
            math.sin(p),
            math.cos(p) * math.sin(y),
        ])
        return rotate_cant(bore, self.scope.cant.si)

    def initial_position(self) -> np.ndarray:
        """Muzzle position relative to the scope [x, y, z]."""
        bore = -np.array([0.0, self.scope.height.si, self.scope.offset.si])
        return rotate_cant(bore, self.scope.cant.si)


class ForceModel:
    """
    Net acceleration for a configuration.

    Everything that does not depend on the projectile state (density,
    speed of sound, gravity and rotation vectors) is resolved once.
    """

    def __init__(self, config: SimulationConfig):
        projectile = config.projectile
        self.flags = config.flags
        self.mass = projectile.mass.si
        self.area = projectile.area
        self.form_factor = projectile.form_factor
        self.drag_model = drag_model(projectile.drag_table)
        self.rho = density_ratio(config.atmosphere) * STANDARD_DENSITY
        self.sound = speed_of_sound(config.atmosphere.temperature.si)
        self.wind = config.wind.vector()
        self.gravity = config.shooter.gravity_vector()
        self.omega = config.shooter.omega()

    def mach(self, velocity: np.ndarray) -> float:
        """Mach number of the airspeed (velocity relative to the air mass)."""
        return float(np.linalg.norm(velocity - self.wind)) / self.sound

    def drag(self, velocity: np.ndarray) -> np.ndarray:
        v_rel = velocity - self.wind
        mach = float(np.linalg.norm(v_rel)) / self.sound
        cd = self.drag_model.coefficient(mach)
        return drag_acceleration(v_rel, self.rho, cd, self.area, self.form_factor, self.mass)

    def coriolis(self, velocity: np.ndarray) -> np.ndarray:
        """Coriolis acceleration = -2 (Ω × v)."""
        return -2.0 * np.cross(self.omega, velocity)

    def acceleration(self, position: np.ndarray, velocity: np.ndarray) -> np.ndarray:
        """
        Compute total acceleration acting on the projectile.

        Parameters
        ----------
        position : [x, y, z] in meters (unused; kept for the integrator signature)
        velocity : [vx, vy, vz] in m/s (ground frame)

        Returns
        -------
        acceleration : np.ndarray [ax, ay, az] in m/s²
        """
        acc = np.zeros(3)
        if self.flags.use_drag:
            acc = acc + self.drag(velocity)
        if self.flags.use_gravity:
            acc = acc + self.gravity
        if self.flags.use_coriolis:
            acc = acc + self.coriolis(velocity)
        return acc


def compute_forces(position: np.ndarray, velocity: np.ndarray,
                   config: SimulationConfig) -> np.ndarray:
    """One-off acceleration for a state; see ForceModel for repeated use."""
    return ForceModel(config).acceleration(position, velocity)
