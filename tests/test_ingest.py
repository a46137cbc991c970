"""End-to-end tests for restoring a checkpoint."""

import numpy as np
import pytest

from ECLrestart import (Checkpoint, FileOpenError, MissingKeywordError, ReportStepNotFoundError,
                        RestartIngestor, RestartLocator, RST_file, SizeMismatchError, SolutionKey,
                        UnitSystem, init_from_restart_file)


@pytest.fixture
def close_calls(monkeypatch):
    """Record every RST_file.close call."""
    calls = []
    close = RST_file.close

    def _close(self):
        calls.append(self.path.name)
        close(self)

    monkeypatch.setattr(RST_file, 'close', _close)
    return calls


def test_ingest_combines_solution_and_wells(dict_store):
    store = dict_store(PRESSURE=np.full(4, 14.7), TEMP=np.full(4, 60.0), SWAT=np.full(4, 0.2),
                       SGAS=np.zeros(4), OPM_XWEL=np.arange(14.0))
    checkpoint = RestartIngestor().ingest(store, 3, 4, 2, 3, UnitSystem.FIELD)
    assert isinstance(checkpoint, Checkpoint)
    assert checkpoint.report_step == 3
    solution, wells = checkpoint
    np.testing.assert_allclose(solution[SolutionKey.PRESSURE], 101352.93, atol=0.01)
    assert SolutionKey.DISSOLVED_GAS_RATIO not in solution
    assert SolutionKey.VAPORIZED_OIL_RATIO not in solution
    assert wells.rates.size == 6


def test_ingest_propagates_errors_unchanged(dict_store):
    store = dict_store(PRESSURE=np.ones(4), TEMP=np.ones(4), SWAT=np.ones(4), SGAS=np.ones(4),
                       OPM_XWEL=np.ones(3))
    with pytest.raises(SizeMismatchError) as error:
        RestartIngestor().ingest(store, 0, 4, 2, 3, UnitSystem.METRIC)
    assert error.value.name == 'OPM_XWEL'


def test_non_unified_restart_file(write_restart, make_section):
    path = write_restart('CASE.X0004', make_section(ncell=4))
    checkpoint = init_from_restart_file(path.with_name('CASE'), 4, cell_count=4,
                                        num_wells=2, num_phases=3, unit_system='FIELD')
    solution, wells = checkpoint
    assert checkpoint.report_step == 4
    for key in ('PRESSURE', 'TEMP', 'SWAT', 'SGAS'):
        assert solution[key].size == 4
    np.testing.assert_allclose(solution['PRESSURE'], 101352.93, rtol=1e-6)
    assert wells.bhp.tolist() == [0.0, 1.0]
    assert wells.perf_rate.tolist() == [12.0, 13.0]


def test_unified_restart_file_selects_report_step(write_restart, make_section):
    path = write_restart('CASE.UNRST',
                         make_section(step=2, PRESSURE=np.full(4, 100.0, dtype='f4')),
                         make_section(step=6, PRESSURE=np.full(4, 250.0, dtype='f4'),
                                      units=UnitSystem.METRIC))
    checkpoint = init_from_restart_file(path, 6, cell_count=4, locator=RestartLocator(unifin=True))
    # Unit system, wells and phases are read from INTEHEAD of step 6
    np.testing.assert_allclose(checkpoint.solution['PRESSURE'], 2.5e7)
    np.testing.assert_allclose(checkpoint.solution['TEMP'], 373.15)
    assert checkpoint.wells.num_wells == 2
    assert checkpoint.wells.num_phases == 3


def test_unified_restart_file_missing_step(write_restart, make_section, close_calls):
    path = write_restart('CASE.UNRST', make_section(step=2), make_section(step=6))
    with pytest.raises(ReportStepNotFoundError) as error:
        init_from_restart_file(path.with_name('CASE'), 4, cell_count=4,
                               locator=RestartLocator(unifin=True))
    assert error.value.report_step == 4
    assert 'report step 4' in str(error.value)
    assert close_calls == ['CASE.UNRST']


def test_missing_restart_file(tmp_path):
    with pytest.raises(FileOpenError):
        init_from_restart_file(tmp_path / 'CASE', 1, cell_count=4)


def test_handle_is_closed_when_extraction_fails(write_restart, make_section, close_calls):
    path = write_restart('CASE.X0001', make_section(skip=('SGAS',)))
    with pytest.raises(MissingKeywordError, match='SGAS'):
        init_from_restart_file(path, 1, cell_count=4)
    assert close_calls == ['CASE.X0001']


def test_handle_is_closed_after_success(write_restart, make_section, close_calls):
    path = write_restart('CASE.X0001', make_section())
    init_from_restart_file(path, 1, cell_count=4)
    assert close_calls == ['CASE.X0001']


def test_cell_count_mismatch(write_restart, make_section):
    path = write_restart('CASE.X0001', make_section(ncell=99))
    with pytest.raises(SizeMismatchError) as error:
        init_from_restart_file(path, 1, cell_count=100)
    assert (error.value.name, error.value.expected, error.value.actual) == ('PRESSURE', 100, 99)


def test_strict_mode_from_entry_point(write_restart, make_section):
    path = write_restart('CASE.X0001', make_section(RS=np.ones(3, dtype='f4')))
    checkpoint = init_from_restart_file(path, 1, cell_count=4)
    assert checkpoint.solution['RS'].size == 3
    with pytest.raises(SizeMismatchError, match='RS'):
        init_from_restart_file(path, 1, cell_count=4, strict=True)
