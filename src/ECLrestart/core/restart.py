"""Simulation state restored from a restart file."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from numpy import asarray, ndarray

__all__ = ["SolutionKey", "Solution", "Wells", "Checkpoint"]


def _frozen(values) -> ndarray:
    """Return ``values`` as a read-only float64 array."""
    array = asarray(values, dtype="f8").copy()
    array.flags.writeable = False
    return array


class SolutionKey(Enum):
    """Per-cell fields of a solution, valued by the record they are read from."""

    PRESSURE = "PRESSURE"
    TEMPERATURE = "TEMP"
    WATER_SATURATION = "SWAT"
    GAS_SATURATION = "SGAS"
    DISSOLVED_GAS_RATIO = "RS"
    VAPORIZED_OIL_RATIO = "RV"

    @classmethod
    def of(cls, key) -> SolutionKey:
        """Return the member for ``key``, which may be a member, a name or a keyword."""
        if isinstance(key, cls):
            return key
        try:
            return cls(key)
        except ValueError:
            try:
                return cls[key]
            except KeyError:
                raise KeyError(key) from None


class Solution(Mapping):
    """
    Read-only mapping from :class:`SolutionKey` to per-cell arrays.

    Every array holds one value per active cell in cell-index order.
    Items can be looked up by member, member name, or record keyword:
    ``solution[SolutionKey.WATER_SATURATION]``, ``solution['SWAT']``.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields=None):
        fields = fields or {}
        self._fields = {SolutionKey.of(k): _frozen(v) for k, v in fields.items()}

    def __getitem__(self, key) -> ndarray:
        return self._fields[SolutionKey.of(key)]

    def __contains__(self, key):
        try:
            return SolutionKey.of(key) in self._fields
        except KeyError:
            return False

    def __iter__(self):
        return iter(self._fields)

    def __len__(self):
        return len(self._fields)

    def __repr__(self):
        fields = ", ".join(f"{k.value}[{v.size}]" for k, v in self._fields.items())
        return f"<{type(self).__name__}, {fields}>"


@dataclass(frozen=True)
class Wells:
    """
    Well and perforation state of a restart step.

    ``rates`` holds the surface rate of each (well, phase) pair with the
    phase index varying fastest. ``perf_pressure`` and ``perf_rate`` are
    per perforation and always of equal length.
    """

    bhp: ndarray
    temperature: ndarray
    rates: ndarray
    perf_pressure: ndarray
    perf_rate: ndarray

    def __post_init__(self):
        for name in ("bhp", "temperature", "rates", "perf_pressure", "perf_rate"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
        if self.bhp.size != self.temperature.size:
            raise ValueError("bhp and temperature must have one value per well")
        if self.perf_pressure.size != self.perf_rate.size:
            raise ValueError("perf_pressure and perf_rate must have equal length")
        if self.bhp.size and self.rates.size % self.bhp.size:
            raise ValueError("rates must have one value per well and phase")

    @property
    def num_wells(self) -> int:
        return self.bhp.size

    @property
    def num_phases(self) -> int:
        return self.rates.size // self.bhp.size if self.bhp.size else 0

    @property
    def num_perforations(self) -> int:
        return self.perf_pressure.size

    def well_rates(self) -> ndarray:
        """Return ``rates`` shaped as (well, phase)."""
        return self.rates.reshape(self.num_wells, self.num_phases)


@dataclass(frozen=True)
class Checkpoint:
    """The solution and well state read for a report step."""

    solution: Solution
    wells: Wells
    report_step: int = 0

    def __iter__(self):
        return iter((self.solution, self.wells))
