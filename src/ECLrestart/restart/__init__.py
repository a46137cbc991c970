"""Restore simulation checkpoints from restart files."""

from .ingest import RestartIngestor, init_from_restart_file
from .solution import CellFieldExtractor
from .wells import WellFieldExtractor, XWEL

__all__ = [
    "CellFieldExtractor",
    "RestartIngestor",
    "WellFieldExtractor",
    "XWEL",
    "init_from_restart_file",
]
