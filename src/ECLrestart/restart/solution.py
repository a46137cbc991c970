"""Per-cell solution fields of a restart step."""
from __future__ import annotations

from logging import getLogger

from numpy import asarray

from .. import config
from ..core import Solution, SolutionKey
from ..errors import MissingKeywordError, SizeMismatchError
from ..units import Dimension, UnitConverter, UnitSystem

__all__ = ["CellFieldExtractor"]

logger = getLogger(__name__)

MANDATORY = (SolutionKey.PRESSURE, SolutionKey.TEMPERATURE,
             SolutionKey.WATER_SATURATION, SolutionKey.GAS_SATURATION)
OPTIONAL = (SolutionKey.DISSOLVED_GAS_RATIO, SolutionKey.VAPORIZED_OIL_RATIO)
CONVERTED = {SolutionKey.PRESSURE: Dimension.PRESSURE,
             SolutionKey.TEMPERATURE: Dimension.TEMPERATURE}


class CellFieldExtractor:
    """
    Read the per-cell solution of a restart step.

    PRESSURE, TEMP, SWAT and SGAS must be present with one value per cell;
    pressure and temperature are converted to SI. RS and RV are copied
    as-is when present. Their length is only checked if ``strict`` is set.
    """

    def __init__(self, strict: bool | None = None):
        self.strict = config.STRICT if strict is None else strict

    def extract(self, store, cell_count: int, unit_system: UnitSystem) -> Solution:
        if cell_count <= 0:
            raise ValueError(f"cell_count must be positive, got {cell_count}")
        converter = UnitConverter(unit_system)

        # All mandatory records must exist before any of them is read
        for key in MANDATORY:
            if not store.has(key.value):
                raise MissingKeywordError(key.value)

        records = {key: store.get(key.value) for key in MANDATORY}
        for key, record in records.items():
            self._check_size(key, record, cell_count)

        fields = {key: asarray(record.data, dtype="f8") for key, record in records.items()}
        for key, dimension in CONVERTED.items():
            fields[key] = converter.to_si(dimension, fields[key])

        for key in OPTIONAL:
            if store.has(key.value):
                record = store.get(key.value)
                if self.strict:
                    self._check_size(key, record, cell_count)
                fields[key] = asarray(record.data, dtype="f8")

        logger.debug("Restored %s for %d cells in %s units",
                     ", ".join(k.value for k in fields), cell_count, converter.unit_system.name)
        return Solution(fields)

    @staticmethod
    def _check_size(key, record, cell_count):
        if record.size != cell_count:
            raise SizeMismatchError(key.value, cell_count, record.size)
