'''
This module implements :class:`Cell`, everything recorded on one channel
during one block: the time series, its unit, rates, range and the
annotations placed on it.
'''

import quantities as pq

from labchartio.core.baseobject import BaseObject
from labchartio.core.timeseries import TimeSeries

RATES_UNITS = 'Hz'


class Cell(BaseObject):
    '''
    One channel during one block.

    *Usage*::

        >>> cell = grid['Pressure', 'block_1']
        >>> cell.time_series.sampling_rate
        array(1000.) * Hz
        >>> cell.range
        (-10.0, 10.0)
        >>> [ann.text for ann in cell.annotations]
        ['start']

    *Required attributes/properties*:
        :channel: (str) channel name
        :block: (str) block name
        :time_series: (:class:`TimeSeries`) samples of the cell, sampled at
            the block tick rate
        :unit: (str) unit text of the channel in this block
        :sample_rate: (quantity scalar) sample rate, in Hz
        :tick_rate: (quantity scalar) tick rate of the block, in Hz
        :range: (tuple of float) (min, max) range of the channel
        :annotations: (tuple of :class:`Annotation`) comments and events
            applying to this channel in this block, in recording order

    *Recommended attributes/properties*:
        :name: (str) A label for the dataset.
        :description: (str) Text description.
        :file_origin: (str) Filesystem path or URL of the original data file.

    Attributes are read-only.
    '''

    _necessary_attrs = (('channel', str),
                        ('block', str),
                        ('time_series', TimeSeries, 1),
                        ('unit', str),
                        ('sample_rate', pq.Quantity, 0),
                        ('tick_rate', pq.Quantity, 0),
                        ('range', tuple),
                        ('annotations', tuple))
    _repr_pretty_attrs_keys_ = ("channel", "block", "unit", "sample_rate", "tick_rate", "range")
    # read-only fields derived from RATES_UNITS
    _unit_fields = ("sample_rate_unit", "tick_rate_unit")

    def __init__(self, channel, block, time_series, unit, sample_rate, tick_rate, range,
                 annotations=(), name=None, description=None, file_origin=None):
        BaseObject.__init__(self, name=name, description=description,
                            file_origin=file_origin)
        self._channel = channel
        self._block = block
        self._time_series = time_series
        self._unit = unit
        self._sample_rate = pq.Quantity(sample_rate, RATES_UNITS)
        self._tick_rate = pq.Quantity(tick_rate, RATES_UNITS)
        self._range = (float(range[0]), float(range[1]))
        self._annotations = tuple(annotations)

    @property
    def channel(self):
        return self._channel

    @property
    def block(self):
        return self._block

    @property
    def time_series(self):
        return self._time_series

    @property
    def unit(self):
        return self._unit

    @property
    def sample_rate(self):
        return self._sample_rate

    @property
    def sample_rate_unit(self):
        return RATES_UNITS

    @property
    def tick_rate(self):
        return self._tick_rate

    @property
    def tick_rate_unit(self):
        return RATES_UNITS

    @property
    def range(self):
        return self._range

    @property
    def annotations(self):
        return self._annotations

    @classmethod
    def fields(cls):
        '''
        Names of the record fields, sorted alphabetically.
        '''
        return tuple(sorted([attr[0] for attr in cls._necessary_attrs] + list(cls._unit_fields)))

    def __repr__(self):
        return '<%s(%r, %r, %d samples, %d annotations)>' % (
            self.__class__.__name__, self._channel, self._block,
            self._time_series.shape[0], len(self._annotations))
