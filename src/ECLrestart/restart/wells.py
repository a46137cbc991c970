"""Well state of a restart step."""
from __future__ import annotations

from logging import getLogger

from numpy import asarray

from .. import config
from ..core import Wells
from ..errors import SizeMismatchError

__all__ = ["WellFieldExtractor", "XWEL"]

logger = getLogger(__name__)

XWEL = "OPM_XWEL"


class WellFieldExtractor:
    """
    Slice the OPM_XWEL record into well and perforation arrays.

    The record is laid out as

        | bhp (W) | temperature (W) | rates (W*P) | perf pressure (K) | perf rate (K) |

    for W wells and P phases. The values are stored in simulator units and
    are not converted.
    """

    def __init__(self, strict: bool | None = None):
        self.strict = config.STRICT if strict is None else strict

    def extract(self, store, num_wells: int, num_phases: int) -> Wells:
        if num_wells < 0 or num_phases < 0:
            raise ValueError(f"num_wells and num_phases must be non-negative, got {num_wells}, {num_phases}")
        size, values = store.get(XWEL)
        values = asarray(values, dtype="f8")

        bhp_end = num_wells
        temp_end = bhp_end + num_wells
        rate_end = temp_end + num_wells * num_phases
        if size < rate_end:
            raise SizeMismatchError(XWEL, rate_end, size)

        remaining = size - rate_end
        perfs = remaining // 2
        if remaining % 2:
            if self.strict:
                raise SizeMismatchError(XWEL, size - 1, size)
            logger.warning("%s has an odd number (%d) of perforation values, the last one is ignored",
                           XWEL, remaining)
        perf_end = rate_end + perfs

        return Wells(bhp=values[:bhp_end],
                     temperature=values[bhp_end:temp_end],
                     rates=values[temp_end:rate_end],
                     perf_pressure=values[rate_end:perf_end],
                     perf_rate=values[perf_end:perf_end + perfs])
