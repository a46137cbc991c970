"""Conversion of restart values from deck units to SI."""
from __future__ import annotations

from collections import namedtuple
from enum import Enum

__all__ = ["Dimension", "UnitSystem", "UnitConverter", "to_si", "from_si"]

PSI = 6894.757293168361   # Pa
ATM = 101325.0            # Pa
BAR = 1.0e5               # Pa

# si = (value + offset) * scale
factor = namedtuple('factor', 'scale offset')


class Dimension(Enum):
    """Physical dimensions converted when reading restart files."""

    PRESSURE = "pressure"
    TEMPERATURE = "temperature"


class UnitSystem(Enum):
    """Unit systems of an Eclipse deck, valued by their INTEHEAD code."""

    METRIC = 1
    FIELD = 2
    LAB = 3
    PVT_M = 4

    @classmethod
    def from_code(cls, code: int) -> UnitSystem:
        """Return the unit system for the INTEHEAD unit code ``code``."""
        try:
            return cls(int(code))
        except ValueError:
            raise ValueError(f"Unknown unit system code {code}") from None

    @classmethod
    def from_name(cls, name: str) -> UnitSystem:
        """Return the unit system for a deck keyword like ``'FIELD'`` or ``'pvt-m'``."""
        key = name.strip().upper().replace('-', '_')
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown unit system '{name}'") from None


# Temperatures are converted to absolute kelvin, not to temperature differences
_TABLES = {
    UnitSystem.METRIC: {Dimension.PRESSURE:    factor(BAR, 0.0),
                        Dimension.TEMPERATURE: factor(1.0, 273.15)},
    UnitSystem.FIELD:  {Dimension.PRESSURE:    factor(PSI, 0.0),
                        Dimension.TEMPERATURE: factor(5/9, 459.67)},
    UnitSystem.LAB:    {Dimension.PRESSURE:    factor(ATM, 0.0),
                        Dimension.TEMPERATURE: factor(1.0, 273.15)},
    UnitSystem.PVT_M:  {Dimension.PRESSURE:    factor(ATM, 0.0),
                        Dimension.TEMPERATURE: factor(1.0, 273.15)},
}


class UnitConverter:
    """
    Convert values of a given unit system to and from SI.

    The conversion table is picked when the converter is created, the
    conversions themselves are pure and work on scalars and numpy arrays.
    Example: 14.7 psi in FIELD units is returned as 101352.93 Pa.
    """

    def __init__(self, unit_system: UnitSystem):
        if not isinstance(unit_system, UnitSystem):
            unit_system = UnitSystem.from_name(unit_system)
        self.unit_system = unit_system
        self._table = _TABLES[unit_system]

    def __repr__(self):
        return f'<{type(self).__name__}, {self.unit_system.name}>'

    def to_si(self, dimension: Dimension, value):
        scale, offset = self._table[dimension]
        return (value + offset) * scale

    def from_si(self, dimension: Dimension, value):
        scale, offset = self._table[dimension]
        return value / scale - offset


def to_si(unit_system: UnitSystem, dimension: Dimension, value):
    """Return ``value`` given in ``unit_system`` converted to SI."""
    return UnitConverter(unit_system).to_si(dimension, value)


def from_si(unit_system: UnitSystem, dimension: Dimension, value):
    """Return the SI ``value`` converted to ``unit_system``."""
    return UnitConverter(unit_system).from_si(dimension, value)
