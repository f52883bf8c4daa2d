"""
Atmosphere Model
================
Air density and speed of sound for the conditions at the firing point.

Density comes from the ideal gas law applied separately to the dry-air and
water-vapour partial pressures; humid air is slightly less dense than dry
air at the same temperature and pressure because water vapour has the
lower molar mass. The drag model uses density relative to the standard
reference condition (15 °C, 101325 Pa, 0 % humidity).

The ISA helpers build an atmosphere for a given altitude using the
troposphere (0-11 km) and lower stratosphere (11-20 km) layers.

Reference: U.S. Standard Atmosphere, 1976 (NASA-TM-X-74335)
"""

import math
from dataclasses import dataclass, field

import numpy as np

from .errors import ConfigurationError
from .units import Length, Pressure, Temperature, Velocity


# ── Constants ─────────────────────────────────────────────────────────────
SEA_LEVEL_TEMP       = 288.15      # K  (15 °C)
SEA_LEVEL_PRESSURE   = 101325.0    # Pa
LAPSE_RATE_TROPO     = -0.0065     # K/m  (troposphere)
TROPOPAUSE_ALT       = 11000.0     # m
TROPOPAUSE_TEMP      = 216.65      # K  (-56.5 °C)
STRATOSPHERE_TOP     = 20000.0     # m
GRAVITY              = 9.80665     # m/s²
MOLAR_MASS_AIR       = 0.0289652   # kg/mol  dry air
MOLAR_MASS_VAPOR     = 0.018016    # kg/mol  water vapour
GAS_CONSTANT         = 8.31446     # J/(mol·K)
SPECIFIC_HEAT_RATIO  = 1.4         # γ for dry air


def _partial_density(pressure: float, molar_mass: float, temperature: float) -> float:
    return pressure * molar_mass / (GAS_CONSTANT * temperature)


STANDARD_DENSITY = _partial_density(SEA_LEVEL_PRESSURE, MOLAR_MASS_AIR, SEA_LEVEL_TEMP)


def vapor_pressure(temperature: float, humidity: float) -> float:
    """
    Partial pressure of water vapour (Pa).

    Saturation pressure from the Magnus formula, scaled by relative
    humidity (0-1). ``temperature`` is in kelvin.
    """
    celsius = temperature - 273.15
    saturation = 610.78 * 10 ** (7.5 * celsius / (celsius + 237.3))
    return humidity * saturation


@dataclass(frozen=True)
class Atmosphere:
    """
    Temperature, pressure and relative humidity at the firing point.

    Humidity is a fraction in [0, 1].
    """
    temperature: Temperature = field(default_factory=lambda: Temperature(59.0, 'F'))
    pressure: Pressure = field(default_factory=lambda: Pressure(29.92, 'inHg'))
    humidity: float = 0.0

    def __post_init__(self):
        if not isinstance(self.temperature, Temperature):
            raise ConfigurationError(f"temperature must be a Temperature, got {self.temperature!r}")
        if not isinstance(self.pressure, Pressure):
            raise ConfigurationError(f"pressure must be a Pressure, got {self.pressure!r}")
        if self.temperature.si <= 0:
            raise ConfigurationError(f"temperature must be above absolute zero, got {self.temperature!r}")
        if self.pressure.si <= 0:
            raise ConfigurationError(f"pressure must be positive, got {self.pressure!r}")
        if isinstance(self.humidity, bool) or not isinstance(self.humidity, (int, float)):
            raise ConfigurationError(f"humidity must be a number, got {self.humidity!r}")
        if not 0.0 <= self.humidity <= 1.0:
            raise ConfigurationError(f"humidity must be within [0, 1], got {self.humidity}")
        # dry-air partial pressure must stay positive
        pv = vapor_pressure(self.temperature.si, self.humidity)
        if pv >= self.pressure.si:
            raise ConfigurationError(
                f"vapour pressure {pv:.1f} Pa at {self.humidity:.0%} humidity "
                f"exceeds total pressure {self.pressure.si:.1f} Pa"
            )

    @classmethod
    def standard(cls) -> "Atmosphere":
        """ICAO sea level: 15 °C, 1013.25 hPa, dry air."""
        return cls(Temperature(15.0, 'C'), Pressure(SEA_LEVEL_PRESSURE), 0.0)

    @classmethod
    def at_altitude(cls, altitude: Length, humidity: float = 0.0) -> "Atmosphere":
        """ISA temperature and pressure at a geometric altitude."""
        h = altitude.si
        return cls(Temperature(isa_temperature(h)), Pressure(isa_pressure(h)), humidity)

    def air_density(self) -> float:
        """Air density (kg/m³) with humidity correction."""
        T = self.temperature.si
        pv = vapor_pressure(T, self.humidity)
        pd = self.pressure.si - pv
        return (_partial_density(pd, MOLAR_MASS_AIR, T)
                + _partial_density(pv, MOLAR_MASS_VAPOR, T))

    def density_ratio(self) -> float:
        """Density relative to the standard reference condition."""
        return self.air_density() / STANDARD_DENSITY

    def speed_of_sound(self) -> Velocity:
        """Local speed of sound = sqrt(γ × R × T / M)."""
        return Velocity(speed_of_sound(self.temperature.si))


def density_ratio(atmosphere: Atmosphere) -> float:
    """
    Air density relative to 15 °C, 101325 Pa, 0 % humidity.

    Raises ConfigurationError when pressure is not positive or humidity
    falls outside [0, 1].
    """
    if atmosphere.pressure.si <= 0:
        raise ConfigurationError(f"pressure must be positive, got {atmosphere.pressure!r}")
    if not 0.0 <= atmosphere.humidity <= 1.0:
        raise ConfigurationError(f"humidity must be within [0, 1], got {atmosphere.humidity}")
    return atmosphere.density_ratio()


def speed_of_sound(temperature: float) -> float:
    """Speed of sound (m/s) for an absolute temperature in kelvin."""
    return math.sqrt(SPECIFIC_HEAT_RATIO * GAS_CONSTANT * temperature / MOLAR_MASS_AIR)


# ── ISA layers ────────────────────────────────────────────────────────────
def isa_temperature(altitude: float) -> float:
    """
    Temperature (K) at a given geometric altitude (m).

    - Troposphere (0–11 km): linear lapse at −6.5 °C/km
    - Stratosphere (11–20 km): isothermal at 216.65 K
    """
    if altitude > STRATOSPHERE_TOP:
        raise ValueError(f"ISA model only covers altitudes up to {STRATOSPHERE_TOP:.0f} m")
    if altitude <= TROPOPAUSE_ALT:
        return SEA_LEVEL_TEMP + LAPSE_RATE_TROPO * altitude
    return TROPOPAUSE_TEMP


def isa_pressure(altitude: float) -> float:
    """
    Atmospheric pressure (Pa) at a given geometric altitude (m).
    Uses barometric formula appropriate for each layer.
    """
    exponent = GRAVITY * MOLAR_MASS_AIR / (GAS_CONSTANT * abs(LAPSE_RATE_TROPO))

    if altitude <= TROPOPAUSE_ALT:
        T = isa_temperature(altitude)
        return SEA_LEVEL_PRESSURE * (T / SEA_LEVEL_TEMP) ** exponent

    # Isothermal layer: exponential decay above the tropopause
    P_tropo = SEA_LEVEL_PRESSURE * (TROPOPAUSE_TEMP / SEA_LEVEL_TEMP) ** exponent
    return P_tropo * np.exp(
        -GRAVITY * MOLAR_MASS_AIR * (altitude - TROPOPAUSE_ALT)
        / (GAS_CONSTANT * TROPOPAUSE_TEMP)
    )
