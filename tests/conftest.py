"""Fixtures building restart files and in-memory record stores."""

import numpy as np
import pytest

from ECLrestart import ENDSOL, Record, RST_file, UnitSystem, unfmt_block
from ECLrestart.errors import MissingKeywordError


class DictStore:
    """Record store backed by a dict of keyword -> values."""

    def __init__(self, **records):
        self.records = {key: np.asarray(values) for key, values in records.items()}
        self.reads = []

    def has(self, name):
        return name in self.records

    def get(self, name, occurrence=0):
        if name not in self.records or occurrence:
            raise MissingKeywordError(name)
        self.reads.append(name)
        values = self.records[name]
        return Record(values.size, values)


def cell_records(ncell=4, pressure=14.7, temp=100.0, swat=0.2, sgas=0.1):
    return {
        'PRESSURE': np.full(ncell, pressure, dtype='f4'),
        'TEMP': np.full(ncell, temp, dtype='f4'),
        'SWAT': np.full(ncell, swat, dtype='f4'),
        'SGAS': np.full(ncell, sgas, dtype='f4'),
    }


def section(step=None, ncell=4, units=UnitSystem.FIELD, nwell=2, phases=7, xwel=None,
            skip=(), **extra):
    """Return the records of one report step, wrapped in SEQNUM/ENDSOL if ``step`` is given."""
    intehead = np.zeros(411, dtype='i4')
    intehead[2], intehead[14], intehead[16] = units.value, phases, nwell
    records = {'INTEHEAD': intehead, **cell_records(ncell)}
    records.update(extra)
    if xwel is None:
        xwel = np.arange(14, dtype='f8')
    records['OPM_XWEL'] = xwel
    blocks = []
    if step is not None:
        blocks.append(unfmt_block.from_data('SEQNUM', [step], 'int'))
    for key, values in records.items():
        if key in skip:
            continue
        values = np.asarray(values)
        dtype = {'i': 'int', 'f': 'float' if values.itemsize == 4 else 'double'}[values.dtype.kind]
        blocks.append(unfmt_block.from_data(key, values, dtype))
    if step is not None:
        blocks.append(ENDSOL)
    return blocks


@pytest.fixture
def dict_store():
    return DictStore


@pytest.fixture
def make_section():
    return section


@pytest.fixture
def write_restart(tmp_path):
    """Write the given sections to ``tmp_path/name`` and return the path."""
    def _write(name, *sections):
        path = tmp_path / name
        RST_file(path).write([block for sec in sections for block in sec])
        return path
    return _write
