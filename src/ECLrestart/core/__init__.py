"""Core primitives used throughout :mod:`ECLrestart`."""
from .datatypes import DTYPE, DTYPE_ALIAS, Dtyp
from .file import File
from .restart import Checkpoint, Solution, SolutionKey, Wells

__all__ = [
    "DTYPE",
    "DTYPE_ALIAS",
    "Dtyp",
    "File",
    "Checkpoint",
    "Solution",
    "SolutionKey",
    "Wells",
]
