"""
Physical Quantities
===================
Small typed wrappers so the simulation never accepts a bare number for a
physical field. Every quantity keeps a single canonical SI value and
converts on the way in and on the way out:

    >>> Length(100, 'yd').to('m')
    91.44
    >>> Velocity(3000, 'ft/s') > Velocity(900, 'm/s')
    True

Parsing unit strings from user input is left to the caller.
"""

import math
from functools import total_ordering
from typing import Dict


@total_ordering
class Quantity:
    """Base class: a scalar stored in the SI unit of its kind."""

    UNITS: Dict[str, float] = {}
    SI_UNIT = ''

    __slots__ = ('_si',)

    def __init__(self, value: float, unit: str = None):
        unit = unit or self.SI_UNIT
        self._si = self._to_si(float(value), unit)

    @classmethod
    def _factor(cls, unit: str) -> float:
        try:
            return cls.UNITS[unit]
        except KeyError:
            raise ValueError(
                f"Unknown {cls.__name__.lower()} unit '{unit}'. "
                f"Available: {list(cls.UNITS.keys())}"
            ) from None

    @classmethod
    def _to_si(cls, value: float, unit: str) -> float:
        return value * cls._factor(unit)

    @classmethod
    def _from_si(cls, value: float, unit: str) -> float:
        return value / cls._factor(unit)

    @classmethod
    def from_si(cls, value: float):
        return cls(value, cls.SI_UNIT)

    @property
    def si(self) -> float:
        return self._si

    def to(self, unit: str) -> float:
        return self._from_si(self._si, unit)

    # ── comparison ────────────────────────────────────────────────────────
    def _check(self, other):
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}"
            )
        return other

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._si == other._si

    def __lt__(self, other):
        return self._si < self._check(other)._si

    def __hash__(self):
        return hash((type(self).__name__, self._si))

    # ── arithmetic ────────────────────────────────────────────────────────
    def __add__(self, other):
        return self.from_si(self._si + self._check(other)._si)

    def __sub__(self, other):
        return self.from_si(self._si - self._check(other)._si)

    def __neg__(self):
        return self.from_si(-self._si)

    def __abs__(self):
        return self.from_si(abs(self._si))

    def __mul__(self, factor: float):
        if isinstance(factor, Quantity):
            return NotImplemented
        return self.from_si(self._si * factor)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Quantity):
            return self._si / self._check(other)._si
        return self.from_si(self._si / other)

    def __repr__(self):
        return f"{type(self).__name__}({self._si:g} {self.SI_UNIT})"


class Length(Quantity):
    SI_UNIT = 'm'
    UNITS = {
        'm': 1.0, 'cm': 0.01, 'mm': 0.001, 'km': 1000.0,
        'in': 0.0254, 'ft': 0.3048, 'yd': 0.9144, 'mi': 1609.344,
    }


class Velocity(Quantity):
    SI_UNIT = 'm/s'
    UNITS = {
        'm/s': 1.0, 'km/h': 1.0 / 3.6, 'ft/s': 0.3048, 'mph': 0.44704,
    }


class Mass(Quantity):
    SI_UNIT = 'kg'
    UNITS = {
        'kg': 1.0, 'g': 0.001, 'gr': 6.479891e-5, 'lb': 0.45359237,
    }


class Time(Quantity):
    SI_UNIT = 's'
    UNITS = {'s': 1.0, 'ms': 0.001, 'us': 1e-6}


class Acceleration(Quantity):
    SI_UNIT = 'm/s^2'
    UNITS = {'m/s^2': 1.0, 'ft/s^2': 0.3048, 'g': 9.80665}


class Pressure(Quantity):
    SI_UNIT = 'Pa'
    UNITS = {
        'Pa': 1.0, 'hPa': 100.0, 'kPa': 1000.0, 'mbar': 100.0,
        'inHg': 3386.389, 'mmHg': 133.322387415, 'psi': 6894.757293168,
    }


class Energy(Quantity):
    SI_UNIT = 'J'
    UNITS = {'J': 1.0, 'ft*lbf': 1.3558179483314004}


class Angle(Quantity):
    SI_UNIT = 'rad'
    UNITS = {
        'rad': 1.0,
        'deg': math.pi / 180.0,
        'moa': math.pi / 10800.0,   # 1/60 degree
        'mrad': 0.001,
    }


class Temperature(Quantity):
    """Absolute temperature. Celsius and Fahrenheit carry an offset."""

    SI_UNIT = 'K'
    UNITS = {'K': 1.0, 'C': 1.0, 'F': 5.0 / 9.0}
    OFFSETS = {'K': 0.0, 'C': 273.15, 'F': 459.67}

    @classmethod
    def _to_si(cls, value, unit):
        factor = cls._factor(unit)
        if unit == 'F':
            return (value + cls.OFFSETS[unit]) * factor
        return value * factor + cls.OFFSETS[unit]

    @classmethod
    def _from_si(cls, value, unit):
        if unit == 'F':
            return value / cls._factor(unit) - cls.OFFSETS[unit]
        return (value - cls.OFFSETS[unit]) / cls._factor(unit)

    def __add__(self, other):
        raise TypeError("Absolute temperatures cannot be added")
