'''
This module implements :class:`TimeSeries`, the samples of one channel in one
block, regularly sampled at the block tick rate.

:class:`TimeSeries` is a one-dimensional :class:`quantities.Quantity` that
also knows when it starts and how fast it was sampled. As for every numpy
subclass, attributes given to the constructor are set in :meth:`__new__`
while :meth:`__array_finalize__` carries them over to slices and views.
'''

from copy import deepcopy

import numpy as np
import quantities as pq

from labchartio.core.baseobject import BaseObject


def _get_sampling_rate(sampling_rate, sampling_period):
    '''
    Return the sampling rate given either the rate or the period (or both,
    if they agree).
    '''
    if sampling_rate is None and sampling_period is None:
        raise ValueError("A sampling_rate or a sampling_period is required")
    if sampling_rate is None:
        sampling_rate = 1.0 / sampling_period
    elif sampling_period is not None and sampling_period != 1.0 / sampling_rate:
        raise ValueError("sampling_rate and sampling_period do not match")
    if not hasattr(sampling_rate, 'units'):
        raise TypeError("The sampling rate or period needs units")
    return sampling_rate


def _new_TimeSeries(cls, signal, units, dtype, t_start, sampling_rate, unit_label,
                    name, file_origin, description):
    '''
    Rebuild a :class:`TimeSeries` when unpickling.
    '''
    return cls(signal, units=units, dtype=dtype, t_start=t_start,
               sampling_rate=sampling_rate, unit_label=unit_label, name=name,
               file_origin=file_origin, description=description)


class TimeSeries(BaseObject, pq.Quantity):
    '''
    Regularly sampled values of one channel.

    *Usage*::

        >>> from labchartio.core import TimeSeries
        >>> import quantities as pq
        >>>
        >>> ts = TimeSeries([1, 2, 3], units='mV', sampling_rate=1*pq.kHz,
        ...                 unit_label='mV')
        >>> ts.times
        array([0., 1., 2.]) * ms

    *Required attributes/properties*:
        :signal: (1D quantity array, numpy array or list) the samples
        :units: (quantity units) unless ``signal`` is already a quantity
        :sampling_rate: *or* **sampling_period** (quantity scalar)

    *Recommended attributes/properties*:
        :t_start: (quantity scalar) time of the first sample, 0 s by default
        :unit_label: (str) unit text of the recording, kept even when it is
            not a quantities unit
        :name: (str) channel name
        :description: (str) block name
        :file_origin: (str) file the samples were read from

    *Properties available on this object*:
        :sampling_period: (quantity scalar) 1 / :attr:`sampling_rate`
        :duration: (quantity scalar) number of samples * :attr:`sampling_period`
        :t_stop: (quantity scalar) :attr:`t_start` + :attr:`duration`
        :times: (1D quantity array) time of each sample
    '''

    _necessary_attrs = (('signal', pq.Quantity, 1),
                        ('sampling_rate', pq.Quantity, 0),
                        ('t_start', pq.Quantity, 0))
    _recommended_attrs = ((('unit_label', str),) +
                          BaseObject._recommended_attrs)
    _repr_pretty_attrs_keys_ = ("name", "description", "unit_label")

    def __new__(cls, signal, units=None, dtype=None, copy=True, t_start=0 * pq.s,
                sampling_rate=None, sampling_period=None, unit_label=None, name=None,
                file_origin=None, description=None):
        if units is None:
            if not hasattr(signal, "units"):
                raise ValueError("units are required when the signal is not a quantity")
            units = signal.units
        obj = pq.Quantity(signal, units=units, dtype=dtype).view(cls)
        if copy:
            obj = obj.copy()
        if obj.ndim != 1:
            raise ValueError(f"A TimeSeries is one-dimensional, got shape {obj.shape}")
        if t_start is None:
            raise ValueError('t_start cannot be None')

        obj._t_start = t_start
        obj._sampling_rate = _get_sampling_rate(sampling_rate, sampling_period)
        obj.unit_label = unit_label
        return obj

    def __init__(self, signal, units=None, dtype=None, copy=True, t_start=0 * pq.s,
                 sampling_rate=None, sampling_period=None, unit_label=None, name=None,
                 file_origin=None, description=None):
        # not called for slices and views
        BaseObject.__init__(self, name=name, file_origin=file_origin,
                            description=description)

    def __array_finalize__(self, obj):
        super().__array_finalize__(obj)
        for attr, default in (('_t_start', 0 * pq.s), ('_sampling_rate', None),
                              ('unit_label', None), ('name', None),
                              ('file_origin', None), ('description', None)):
            setattr(self, attr, getattr(obj, attr, default))

    def __reduce__(self):
        return _new_TimeSeries, (self.__class__, np.array(self), self.units, self.dtype,
                                 self.t_start, self.sampling_rate, self.unit_label,
                                 self.name, self.file_origin, self.description)

    def __deepcopy__(self, memo):
        copied = self.__class__(np.array(self, copy=True), units=self.units,
                                t_start=self.t_start.copy(),
                                sampling_rate=self.sampling_rate.copy(),
                                unit_label=self.unit_label, name=self.name,
                                file_origin=self.file_origin, description=self.description)
        memo[id(self)] = copied
        return copied

    def __repr__(self):
        return '<%s(%s, [%s, %s], sampling rate: %s)>' % (
            self.__class__.__name__, super().__repr__(),
            self.t_start, self.t_stop, self.sampling_rate)

    def __getitem__(self, i):
        '''
        Slices stay :class:`TimeSeries` with a shifted :attr:`t_start` (and a
        longer period for a step), single items and fancy indexing give plain
        quantities.
        '''
        obj = super().__getitem__(i)
        if isinstance(i, slice) and isinstance(obj, TimeSeries):
            start, _, step = i.indices(self.shape[0])
            if start:
                obj.t_start = self.t_start + start * self.sampling_period
            if step != 1:
                obj.sampling_period = self.sampling_period * step
        elif isinstance(obj, TimeSeries):
            obj = pq.Quantity(obj.magnitude, units=obj.units)
        return obj

    def __eq__(self, other):
        '''
        Element-wise comparison, False for series sampled differently.
        '''
        if isinstance(other, TimeSeries):
            if self.t_start != other.t_start or self.sampling_rate != other.sampling_rate:
                return False
            other = other.view(pq.Quantity)
        return self.view(pq.Quantity) == other

    def _check_consistency(self, other):
        '''
        Raise ValueError if ``other`` is a series with another time base.
        '''
        if isinstance(other, TimeSeries):
            for attr in "t_start", "sampling_rate":
                if getattr(self, attr) != getattr(other, attr):
                    raise ValueError(f"Inconsistent values of {attr}")

    def _copy_data_complement(self, other):
        '''
        Copy the time base and labels of ``other``. The unit label is only
        kept when the units did not change.
        '''
        self._t_start = deepcopy(other.t_start)
        self._sampling_rate = deepcopy(other.sampling_rate)
        for attr in "name", "description", "file_origin":
            setattr(self, attr, getattr(other, attr))
        if self.dimensionality == other.dimensionality:
            self.unit_label = other.unit_label
        else:
            self.unit_label = None

    def duplicate_with_new_data(self, signal, units=None):
        '''
        New series with the samples ``signal`` and the metadata of this one.
        '''
        if units is None:
            units = getattr(signal, "units", self.units)
        new = self.__class__(signal, units=units, t_start=self.t_start,
                             sampling_rate=self.sampling_rate)
        new._copy_data_complement(self)
        return new

    def rescale(self, units, dtype=None):
        '''
        Copy of the series converted to ``units``.
        '''
        dim = pq.quantity.validate_dimensionality(units)
        if self.dimensionality == dim and (dtype is None or np.dtype(dtype) == self.dtype):
            return self.copy()
        return self.duplicate_with_new_data(self.view(pq.Quantity).rescale(dim, dtype=dtype),
                                            units=dim)

    def astype(self, dtype=None, **kwargs):
        return self.duplicate_with_new_data(self.view(pq.Quantity).astype(dtype, **kwargs))

    def _apply_operator(self, other, op, *args):
        '''
        Apply the :class:`quantities.Quantity` operator ``op`` and give the
        result the time base of this series.
        '''
        self._check_consistency(other)
        if isinstance(other, TimeSeries):
            other = other.view(pq.Quantity)
        new_signal = getattr(self.view(pq.Quantity), op)(other, *args)
        if new_signal is NotImplemented:
            return new_signal
        new_signal = new_signal.view(self.__class__)
        new_signal._copy_data_complement(self)
        return new_signal

    def __add__(self, other, *args):
        return self._apply_operator(other, "__add__", *args)

    def __sub__(self, other, *args):
        return self._apply_operator(other, "__sub__", *args)

    def __mul__(self, other, *args):
        return self._apply_operator(other, "__mul__", *args)

    def __truediv__(self, other, *args):
        return self._apply_operator(other, "__truediv__", *args)

    def __rsub__(self, other, *args):
        return self.__mul__(-1, *args) + other

    def __neg__(self):
        return self.__mul__(-1)

    __radd__ = __add__
    __rmul__ = __mul__

    def _repr_pretty_(self, pp, cycle):
        pp.text(f"{self.__class__.__name__} of {self.shape[0]} samples in "
                f"{self.units.dimensionality.string} ")
        if self._has_repr_pretty_attrs_():
            pp.breakable()
            self._repr_pretty_attrs_(pp, cycle)
        for line in (f"sampling rate: {self.sampling_rate}",
                     f"time: {self.t_start} to {self.t_stop}"):
            pp.breakable()
            with pp.group(indent=1):
                pp.text(line)

    @property
    def sampling_rate(self):
        '''
        Number of samples per unit time.
        '''
        return self._sampling_rate

    @sampling_rate.setter
    def sampling_rate(self, rate):
        if not hasattr(rate, 'units'):
            raise ValueError('sampling_rate must be a quantity')
        self._sampling_rate = rate

    @property
    def sampling_period(self):
        '''
        Time between two samples.
        '''
        return 1. / self.sampling_rate

    @sampling_period.setter
    def sampling_period(self, period):
        if not hasattr(period, 'units'):
            raise ValueError('sampling_period must be a quantity')
        self.sampling_rate = 1. / period

    @property
    def t_start(self):
        return self._t_start

    @t_start.setter
    def t_start(self, start):
        if start is None:
            raise ValueError('t_start cannot be None')
        self._t_start = start

    @property
    def duration(self):
        return self.shape[0] / self.sampling_rate

    @property
    def t_stop(self):
        '''
        Time just after the last sample.
        '''
        return self.t_start + self.duration

    @property
    def times(self):
        '''
        Time of each sample.
        '''
        return self.t_start + np.arange(self.shape[0]) / self.sampling_rate

    def time_index(self, t):
        '''
        Index of the sample closest to time ``t`` (or to each time of ``t``).
        '''
        i = (t - self.t_start) * self.sampling_rate
        return np.rint(i.simplified.magnitude).astype(np.int64)

    def time_slice(self, t_start, t_stop):
        '''
        Copy of the samples from ``t_start`` (included) to ``t_stop``
        (excluded), rounded to the nearest samples. ``None`` means the
        start or the end of the series.
        '''
        i = 0 if t_start is None else int(self.time_index(t_start))
        j = len(self) if t_stop is None else int(self.time_index(t_stop))
        if i < 0 or j > len(self) or i > j:
            raise ValueError(f"[{t_start}, {t_stop}] is outside of the series "
                             f"[{self.t_start}, {self.t_stop}]")

        obj = deepcopy(self[i:j])
        obj.t_start = self.t_start + i * self.sampling_period
        return obj
