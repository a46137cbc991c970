"""Binary datatype descriptors for Eclipse record files."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Dtyp:
    """Descriptor for an Eclipse binary datatype.

    ``max`` is the number of values stored in one payload chunk.
    """

    name: str = ""
    size: int = 0
    max: int = 0
    nptype: str | None = None


DTYPE = {
    b"INTE": Dtyp("INTE", 4, 1000, "i4"),
    b"REAL": Dtyp("REAL", 4, 1000, "f4"),
    b"DOUB": Dtyp("DOUB", 8, 1000, "f8"),
    b"LOGI": Dtyp("LOGI", 4, 1000, "i4"),
    b"CHAR": Dtyp("CHAR", 8, 105, "S8"),
    b"C008": Dtyp("C008", 8, 105, "S8"),
    b"MESS": Dtyp("MESS", 1, 1, "S1"),
}

# Types accepted by unfmt_block.from_data
DTYPE_ALIAS = {
    "int": b"INTE",
    "float": b"REAL",
    "double": b"DOUB",
    "bool": b"LOGI",
    "char": b"CHAR",
    "mess": b"MESS",
}

__all__ = ["Dtyp", "DTYPE", "DTYPE_ALIAS"]
