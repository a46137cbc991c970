# src/ECLrestart/__init__.py
__version__ = "0.1.0"

from logging import DEBUG as _DEBUG, NullHandler, getLogger

from .config import DEBUG, ENDIAN, STRICT
from .core import Checkpoint, File, Solution, SolutionKey, Wells
from .errors import (FileOpenError, MissingKeywordError, ReportStepNotFoundError, RestartError,
                     SizeMismatchError)
from .io.output import Record, RestartLocator, RST_file
from .io.unformatted import ENDSOL, unfmt_block, unfmt_file
from .restart import CellFieldExtractor, RestartIngestor, WellFieldExtractor, init_from_restart_file
from .units import Dimension, UnitConverter, UnitSystem, from_si, to_si

getLogger(__name__).addHandler(NullHandler())
if DEBUG:
    getLogger(__name__).setLevel(_DEBUG)

__all__ = [
    "CellFieldExtractor",
    "Checkpoint",
    "DEBUG",
    "Dimension",
    "ENDIAN",
    "ENDSOL",
    "File",
    "FileOpenError",
    "MissingKeywordError",
    "Record",
    "ReportStepNotFoundError",
    "RestartError",
    "RestartIngestor",
    "RestartLocator",
    "RST_file",
    "STRICT",
    "SizeMismatchError",
    "Solution",
    "SolutionKey",
    "UnitConverter",
    "UnitSystem",
    "WellFieldExtractor",
    "Wells",
    "from_si",
    "init_from_restart_file",
    "to_si",
    "unfmt_block",
    "unfmt_file",
]
