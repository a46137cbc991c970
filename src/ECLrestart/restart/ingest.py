"""Restore a checkpoint from a restart file."""
from __future__ import annotations

from logging import getLogger

from ..core import Checkpoint
from ..errors import ReportStepNotFoundError
from ..io.output import RestartLocator, RST_file
from ..units import UnitSystem
from .solution import CellFieldExtractor
from .wells import WellFieldExtractor

__all__ = ["RestartIngestor", "init_from_restart_file"]

logger = getLogger(__name__)


class RestartIngestor:
    """Read the solution and well state of one report step from an open record store."""

    def __init__(self, strict: bool | None = None):
        self.cells = CellFieldExtractor(strict=strict)
        self.wells = WellFieldExtractor(strict=strict)

    def ingest(self, store, report_step: int, cell_count: int, num_wells: int,
               num_phases: int, unit_system: UnitSystem) -> Checkpoint:
        """
        Return the checkpoint of ``report_step``.

        ``store`` must already be positioned at the report step. Errors from
        the extractors are raised unchanged.
        """
        solution = self.cells.extract(store, cell_count, unit_system)
        wells = self.wells.extract(store, num_wells, num_phases)
        return Checkpoint(solution=solution, wells=wells, report_step=report_step)


def init_from_restart_file(root, report_step: int, cell_count: int, num_wells=None,
                           num_phases=None, unit_system=None, locator=None, strict=None):
    """
    Open the restart file of the case ``root`` and return the checkpoint of
    ``report_step``.

    Args:
        root: Case root name or path, e.g. ``'model/CASE'``.
        report_step: Report step to restart from.
        cell_count: Number of active cells.
        num_wells: Number of wells, read from INTEHEAD if None.
        num_phases: Number of phases, read from INTEHEAD if None.
        unit_system: UnitSystem or deck name ('METRIC', 'FIELD', ...) of the
            restart data, read from INTEHEAD if None.
        locator: RestartLocator, defaults to non-unified input files.
        strict: Also validate the optional records, see CellFieldExtractor.

    Raises:
        FileOpenError: The restart file is missing or unreadable.
        ReportStepNotFoundError: A unified file has no section for ``report_step``.
        MissingKeywordError, SizeMismatchError: Invalid restart data.
    """
    locator = locator or RestartLocator()
    path = locator.filename(root, report_step, output=False)
    with RST_file(path, role='Restart file') as store:
        if locator.unified() and not store.select_block(report_step):
            raise ReportStepNotFoundError(path, report_step)
        if num_wells is None:
            num_wells = store.num_wells()
        if num_phases is None:
            num_phases = store.num_phases()
        if unit_system is None:
            unit_system = store.units()
        elif not isinstance(unit_system, UnitSystem):
            unit_system = UnitSystem.from_name(unit_system)
        logger.info('Reading report step %d from %s', report_step, path)
        return RestartIngestor(strict=strict).ingest(
            store, report_step, cell_count, num_wells, num_phases, unit_system)
