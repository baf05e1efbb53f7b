"""
Tests of the labchartio.core.cell.Cell and labchartio.core.cellgrid.CellGrid classes
"""

import unittest

import numpy as np
import quantities as pq

try:
    from IPython.lib.pretty import pretty
except ImportError:
    HAVE_IPYTHON = False
else:
    HAVE_IPYTHON = True

from labchartio.core import (Annotation, ALL_CHANNELS, Cell, CellGrid, TimeSeries,
                             ShapeMismatchError)


def make_cell(channel, block, annotations=()):
    ts = TimeSeries(np.arange(4.), units='mV', sampling_rate=1 * pq.kHz,
                    unit_label='mV', name=channel, description=block)
    return Cell(channel, block, ts, 'mV', 1000., 1 * pq.kHz, (-5, 5),
                annotations=annotations)


class TestCell(unittest.TestCase):

    def setUp(self):
        self.annotation = Annotation(ALL_CHANNELS, 'block_1', 2, 'comment', 'start')
        self.cell = make_cell('ECG', 'block_1', [self.annotation])

    def test_attributes(self):
        self.assertEqual(self.cell.channel, 'ECG')
        self.assertEqual(self.cell.block, 'block_1')
        self.assertEqual(self.cell.unit, 'mV')
        self.assertEqual(self.cell.sample_rate, 1000 * pq.Hz)
        self.assertEqual(self.cell.tick_rate, 1000 * pq.Hz)
        self.assertEqual(self.cell.tick_rate.units, pq.Hz)
        self.assertEqual(self.cell.range, (-5., 5.))
        self.assertEqual(self.cell.annotations, (self.annotation,))
        self.assertEqual(len(self.cell.time_series), 4)

    def test_fields_are_sorted(self):
        self.assertEqual(Cell.fields(), ('annotations', 'block', 'channel', 'range',
                                         'sample_rate', 'sample_rate_unit', 'tick_rate',
                                         'tick_rate_unit', 'time_series', 'unit'))
        self.assertEqual(self.cell.sample_rate_unit, 'Hz')
        self.assertEqual(self.cell.tick_rate_unit, 'Hz')

    def test_read_only(self):
        for attr in Cell.fields():
            with self.assertRaises(AttributeError):
                setattr(self.cell, attr, None)

    def test_repr(self):
        self.assertEqual(repr(self.cell), "<Cell('ECG', 'block_1', 4 samples, 1 annotations)>")

    @unittest.skipUnless(HAVE_IPYTHON, "requires IPython")
    def test__pretty(self):
        prepr = pretty(self.cell)
        self.assertTrue(prepr.startswith("Cell"))
        self.assertIn("channel: 'ECG'", prepr)
        self.assertIn("block: 'block_1'", prepr)


class TestCellGrid(unittest.TestCase):

    def setUp(self):
        self.channels = ('ECG', 'BP')
        self.blocks = ('block_1', 'block_2', 'block_3')
        self.cells = {(c, b): make_cell(c, b) for c in self.channels for b in self.blocks}
        self.grid = CellGrid(self.channels, self.blocks, self.cells, file_origin='test.mat')

    def test_shape(self):
        self.assertEqual(self.grid.shape, (2, 3))
        self.assertEqual(len(self.grid), 6)
        self.assertEqual(self.grid.channel_names, self.channels)
        self.assertEqual(self.grid.block_names, self.blocks)
        self.assertEqual(self.grid.file_origin, 'test.mat')

    def test_getitem(self):
        self.assertIs(self.grid['BP', 'block_2'], self.cells['BP', 'block_2'])
        self.assertRaises(KeyError, self.grid.__getitem__, ('EMG', 'block_1'))
        self.assertIn(('ECG', 'block_3'), self.grid)
        self.assertNotIn(('ECG', 'block_4'), self.grid)

    def test_iteration_order(self):
        order = [(cell.channel, cell.block) for cell in self.grid]
        self.assertEqual(order, [(c, b) for c in self.channels for b in self.blocks])
        self.assertEqual(list(self.grid.keys()), order)
        for key, cell in self.grid.items():
            self.assertIs(cell, self.cells[key])

    def test_row_and_column(self):
        row = self.grid.row('BP')
        self.assertEqual(list(row), list(self.blocks))
        self.assertIs(row['block_3'], self.cells['BP', 'block_3'])
        column = self.grid.column('block_1')
        self.assertEqual(list(column), list(self.channels))
        self.assertRaises(KeyError, self.grid.row, 'EMG')
        self.assertRaises(KeyError, self.grid.column, 'block_9')

    def test_read_only(self):
        with self.assertRaises(TypeError):
            self.grid.row('BP')['block_1'] = None
        with self.assertRaises(TypeError):
            self.grid['ECG', 'block_1'] = None

    def test_missing_cell(self):
        del self.cells['ECG', 'block_2']
        self.assertRaises(ShapeMismatchError, CellGrid, self.channels, self.blocks, self.cells)

    def test_extra_cell(self):
        self.cells['EMG', 'block_1'] = make_cell('EMG', 'block_1')
        self.assertRaises(ShapeMismatchError, CellGrid, self.channels, self.blocks, self.cells)

    def test_duplicate_names(self):
        self.assertRaises(ShapeMismatchError, CellGrid, ('ECG', 'ECG'), self.blocks, self.cells)
        self.assertRaises(ShapeMismatchError, CellGrid, self.channels,
                          ('block_1', 'block_1'), self.cells)

    def test_repr(self):
        self.assertEqual(repr(self.grid), '<CellGrid(2 channels x 3 blocks)>')


if __name__ == "__main__":
    unittest.main()
