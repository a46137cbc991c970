"""Tests for slicing of the OPM_XWEL well record."""

import logging

import numpy as np
import pytest

from ECLrestart import MissingKeywordError, SizeMismatchError, WellFieldExtractor


def test_two_wells_three_phases(dict_store):
    xwel = np.arange(14, dtype='f8')
    wells = WellFieldExtractor().extract(dict_store(OPM_XWEL=xwel), 2, 3)
    assert wells.bhp.tolist() == [0, 1]
    assert wells.temperature.tolist() == [2, 3]
    assert wells.rates.tolist() == [4, 5, 6, 7, 8, 9]
    assert wells.perf_pressure.tolist() == [10, 11]
    assert wells.perf_rate.tolist() == [12, 13]
    assert wells.well_rates().tolist() == [[4, 5, 6], [7, 8, 9]]
    assert (wells.num_wells, wells.num_phases, wells.num_perforations) == (2, 3, 2)


@pytest.mark.parametrize("nwell, nphase, nperf", [(0, 0, 0), (0, 3, 4), (1, 1, 0), (3, 2, 5), (4, 3, 12)])
def test_window_lengths(dict_store, nwell, nphase, nperf):
    xwel = np.random.default_rng(1).random(2*nwell + nwell*nphase + 2*nperf)
    wells = WellFieldExtractor().extract(dict_store(OPM_XWEL=xwel), nwell, nphase)
    assert wells.bhp.size == wells.temperature.size == nwell
    assert wells.rates.size == nwell * nphase
    assert wells.perf_pressure.size == wells.perf_rate.size == nperf
    joined = np.concatenate([wells.bhp, wells.temperature, wells.rates,
                             wells.perf_pressure, wells.perf_rate])
    np.testing.assert_array_equal(joined, xwel)


def test_no_unit_conversion(dict_store):
    xwel = np.array([2.0e7, 1.9e7, 350.0, 360.0, 0.01, 0.02, 0.03, 0.04, 2.1e7, -0.5])
    wells = WellFieldExtractor().extract(dict_store(OPM_XWEL=xwel), 2, 2)
    assert wells.bhp.tolist() == [2.0e7, 1.9e7]
    assert wells.temperature.tolist() == [350.0, 360.0]
    assert wells.perf_pressure.tolist() == [2.1e7]
    assert wells.perf_rate.tolist() == [-0.5]


def test_record_too_short(dict_store):
    store = dict_store(OPM_XWEL=np.zeros(9))
    with pytest.raises(SizeMismatchError) as error:
        WellFieldExtractor().extract(store, 2, 3)
    assert (error.value.name, error.value.expected, error.value.actual) == ('OPM_XWEL', 10, 9)


def test_odd_perforation_remainder_is_truncated(dict_store, caplog):
    xwel = np.arange(15, dtype='f8')
    with caplog.at_level(logging.WARNING, logger='ECLrestart'):
        wells = WellFieldExtractor().extract(dict_store(OPM_XWEL=xwel), 2, 3)
    assert wells.perf_pressure.tolist() == [10, 11]
    assert wells.perf_rate.tolist() == [12, 13]
    assert 'odd number' in caplog.text


def test_odd_perforation_remainder_strict(dict_store):
    store = dict_store(OPM_XWEL=np.arange(15, dtype='f8'))
    with pytest.raises(SizeMismatchError) as error:
        WellFieldExtractor(strict=True).extract(store, 2, 3)
    assert (error.value.expected, error.value.actual) == (14, 15)


def test_missing_well_record(dict_store):
    with pytest.raises(MissingKeywordError, match='OPM_XWEL'):
        WellFieldExtractor().extract(dict_store(), 1, 3)


@pytest.mark.parametrize("nwell, nphase", [(-1, 3), (2, -1)])
def test_negative_counts(dict_store, nwell, nphase):
    with pytest.raises(ValueError):
        WellFieldExtractor().extract(dict_store(OPM_XWEL=np.zeros(20)), nwell, nphase)


def test_wells_are_read_only(dict_store):
    wells = WellFieldExtractor().extract(dict_store(OPM_XWEL=np.arange(14.0)), 2, 3)
    with pytest.raises(ValueError):
        wells.bhp[0] = 1.0
    with pytest.raises(AttributeError):
        wells.bhp = np.zeros(2)
