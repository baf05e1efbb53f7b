"""
Tests of the labchartio.core.timeseries.TimeSeries class
"""

import pickle
import unittest
from copy import deepcopy

import numpy as np
import quantities as pq
from numpy.testing import assert_array_equal, assert_array_almost_equal

from labchartio.core.timeseries import TimeSeries


class TestTimeSeriesConstructor(unittest.TestCase):

    def test_from_list(self):
        ts = TimeSeries([1, 2, 3, 4], units='mV', sampling_rate=2 * pq.kHz,
                        unit_label='mV', name='ECG', description='block_1',
                        file_origin='test.mat')
        assert_array_equal(ts.magnitude, [1, 2, 3, 4])
        self.assertEqual(ts.units, pq.mV)
        self.assertEqual(ts.sampling_rate, 2 * pq.kHz)
        self.assertEqual(ts.t_start, 0 * pq.s)
        self.assertEqual(ts.unit_label, 'mV')
        self.assertEqual(ts.name, 'ECG')
        self.assertEqual(ts.description, 'block_1')
        self.assertEqual(ts.file_origin, 'test.mat')

    def test_from_quantity(self):
        ts = TimeSeries([1., 2.] * pq.V, sampling_period=0.5 * pq.s)
        self.assertEqual(ts.units, pq.V)
        self.assertEqual(ts.sampling_rate, 2 / pq.s)

    def test_missing_units(self):
        self.assertRaises(ValueError, TimeSeries, [1, 2], sampling_rate=1 * pq.Hz)

    def test_missing_rate(self):
        self.assertRaises(ValueError, TimeSeries, [1, 2], units='V')

    def test_rate_without_units(self):
        self.assertRaises(TypeError, TimeSeries, [1, 2], units='V', sampling_rate=1.)

    def test_inconsistent_rate_and_period(self):
        self.assertRaises(ValueError, TimeSeries, [1, 2], units='V',
                          sampling_rate=1 * pq.Hz, sampling_period=2 * pq.s)

    def test_two_dimensional(self):
        self.assertRaises(ValueError, TimeSeries, [[1, 2], [3, 4]], units='V',
                          sampling_rate=1 * pq.Hz)


class TestTimeSeriesProperties(unittest.TestCase):

    def setUp(self):
        self.ts = TimeSeries(np.arange(10.), units='mV', sampling_rate=100 * pq.Hz,
                             unit_label='mV', name='ECG')

    def test_times(self):
        assert_array_almost_equal(self.ts.times.rescale(pq.s).magnitude, np.arange(10) / 100.)

    def test_duration(self):
        self.assertAlmostEqual(float(self.ts.duration.rescale(pq.s).magnitude), 0.1)
        self.assertAlmostEqual(float(self.ts.t_stop.rescale(pq.s).magnitude), 0.1)
        self.assertAlmostEqual(float(self.ts.sampling_period.rescale(pq.s).magnitude), 0.01)

    def test_slice_keeps_metadata(self):
        sliced = self.ts[2:5]
        self.assertIsInstance(sliced, TimeSeries)
        assert_array_equal(sliced.magnitude, [2., 3., 4.])
        self.assertEqual(sliced.name, 'ECG')
        self.assertEqual(sliced.unit_label, 'mV')
        self.assertAlmostEqual(float(sliced.t_start.rescale(pq.s).magnitude), 0.02)

    def test_slice_with_step(self):
        sliced = self.ts[::2]
        self.assertAlmostEqual(float(sliced.sampling_rate.rescale(pq.Hz).magnitude), 50.)

    def test_single_item(self):
        item = self.ts[3]
        self.assertNotIsInstance(item, TimeSeries)
        self.assertEqual(item, 3 * pq.mV)

    def test_fancy_indexing(self):
        picked = self.ts[np.array([0, 5])]
        self.assertNotIsInstance(picked, TimeSeries)
        assert_array_equal(picked.magnitude, [0., 5.])

    def test_time_index(self):
        self.assertEqual(self.ts.time_index(0.05 * pq.s), 5)

    def test_time_slice(self):
        sliced = self.ts.time_slice(0.02 * pq.s, 0.05 * pq.s)
        assert_array_equal(sliced.magnitude, [2., 3., 4.])
        self.assertAlmostEqual(float(sliced.t_start.rescale(pq.s).magnitude), 0.02)

    def test_time_slice_out_of_range(self):
        self.assertRaises(ValueError, self.ts.time_slice, 0 * pq.s, 1 * pq.s)

    def test_equality_checks_sampling(self):
        other = TimeSeries(np.arange(10.), units='mV', sampling_rate=200 * pq.Hz)
        self.assertFalse(self.ts == other)
        self.assertTrue(np.all(self.ts == deepcopy(self.ts)))

    def test_pickle(self):
        restored = pickle.loads(pickle.dumps(self.ts))
        assert_array_equal(restored.magnitude, self.ts.magnitude)
        self.assertEqual(restored.sampling_rate, self.ts.sampling_rate)
        self.assertEqual(restored.unit_label, 'mV')
        self.assertEqual(restored.name, 'ECG')

    def test_repr(self):
        self.assertTrue(repr(self.ts).startswith('<TimeSeries('))


class TestTimeSeriesQuantityOperations(unittest.TestCase):

    def setUp(self):
        self.ts = TimeSeries(np.arange(1., 5.), units='mV', sampling_rate=1 * pq.kHz,
                             t_start=2 * pq.s, unit_label='mV', name='ECG',
                             description='block_1', file_origin='test.mat')
        self.ts.setflags(write=False)

    def assert_same_time_base(self, result):
        self.assertIsInstance(result, TimeSeries)
        self.assertEqual(result.sampling_rate, self.ts.sampling_rate)
        self.assertEqual(result.t_start, self.ts.t_start)
        self.assertEqual(result.name, 'ECG')
        self.assertEqual(result.description, 'block_1')
        self.assertEqual(result.file_origin, 'test.mat')

    def test_equal_to_itself(self):
        self.assertTrue(np.all(self.ts == self.ts))
        self.assertFalse(np.any(self.ts != self.ts))

    def test_equal_to_quantity(self):
        assert_array_equal(self.ts == [1., 2., 5., 4.] * pq.mV, [True, True, False, True])

    def test_rescale_to_same_units(self):
        result = self.ts.rescale('mV')
        self.assert_same_time_base(result)
        assert_array_equal(result.magnitude, [1., 2., 3., 4.])
        self.assertEqual(result.unit_label, 'mV')

    def test_rescale_to_other_units(self):
        result = self.ts.rescale(pq.V)
        self.assert_same_time_base(result)
        self.assertEqual(result.units, pq.V)
        assert_array_almost_equal(result.magnitude, [0.001, 0.002, 0.003, 0.004])
        self.assertIsNone(result.unit_label)

    def test_astype(self):
        result = self.ts.astype(np.float32)
        self.assert_same_time_base(result)
        self.assertEqual(result.dtype, np.float32)
        self.assertEqual(result.units, pq.mV)

    def test_subtract_mean(self):
        result = self.ts - self.ts.mean()
        self.assert_same_time_base(result)
        assert_array_equal(result.magnitude, [-1.5, -0.5, 0.5, 1.5])
        self.assertEqual(result.unit_label, 'mV')
        self.assertTrue(repr(result).startswith('<TimeSeries('))

    def test_add_and_multiply(self):
        self.assert_same_time_base(self.ts + 1 * pq.mV)
        self.assert_same_time_base(1 * pq.mV + self.ts)
        self.assert_same_time_base(self.ts + self.ts)
        doubled = 2 * self.ts
        self.assert_same_time_base(doubled)
        assert_array_equal(doubled.magnitude, [2., 4., 6., 8.])
        assert_array_equal((self.ts / 2).magnitude, [0.5, 1., 1.5, 2.])
        assert_array_equal((-self.ts).magnitude, [-1., -2., -3., -4.])
        assert_array_equal((10 * pq.mV - self.ts).magnitude, [9., 8., 7., 6.])

    def test_units_change_drops_label(self):
        squared = self.ts * self.ts
        self.assert_same_time_base(squared)
        self.assertEqual(squared.units, pq.mV ** 2)
        self.assertIsNone(squared.unit_label)

    def test_inconsistent_time_base(self):
        other = TimeSeries(np.arange(1., 5.), units='mV', sampling_rate=2 * pq.kHz,
                           t_start=2 * pq.s)
        self.assertRaises(ValueError, self.ts.__add__, other)
        self.assertFalse(self.ts == other)


if __name__ == "__main__":
    unittest.main()
