'''
This module implements :class:`RawContainer`, the LabChart export exactly as
it is stored in the MATLAB file: flat arrays indexed by channel and block, one
concatenated sample buffer and the text tables they point into.

Only the "standard, 32-bit" export layout is understood. Arrays are copied
and made read-only on construction.
'''

import numpy as np

from labchartio.core.baseobject import BaseObject
from labchartio.core.exceptions import ShapeMismatchError

# number of columns of the ``com`` table:
# channel, block, position, type, text
COM_COLUMNS = 5


def _readonly(arr):
    arr = np.array(arr, dtype="float64")
    arr.setflags(write=False)
    return arr


def _as_grid(value, field):
    '''
    Return ``value`` as a read-only 2D float array [channels x blocks].

    A 0-d value (one channel, one block squeezed by the MAT reader)
    is promoted to shape (1, 1).
    '''
    arr = np.asarray(value)
    if arr.ndim == 0:
        arr = arr.reshape(1, 1)
    if arr.ndim != 2:
        raise ShapeMismatchError(f"{field} must be a channels x blocks grid, "
                                 f"got shape {arr.shape}")
    return _readonly(arr)


def _as_vector(value):
    return _readonly(np.asarray(value).reshape(-1))


def _as_table(value):
    if value is None:
        return _readonly(np.zeros((0, COM_COLUMNS)))
    arr = np.asarray(value)
    if arr.size == 0:
        return _readonly(np.zeros((0, COM_COLUMNS)))
    if arr.ndim == 1 and arr.size == COM_COLUMNS:
        # a single comment
        arr = arr.reshape(1, COM_COLUMNS)
    if arr.ndim != 2 or arr.shape[1] != COM_COLUMNS:
        raise ShapeMismatchError(f"com must have {COM_COLUMNS} columns, got shape {arr.shape}")
    return _readonly(arr)


def _as_text_rows(value):
    '''
    Return a tuple of strings, one per row of a fixed-width character table.

    Accepts what scipy.io.loadmat gives with ``chars_as_strings`` on or off
    (1D array of padded strings, or 2D array of single characters) as well
    as plain sequences of strings. Trailing blanks and NUL padding are
    removed, as MATLAB ``cellstr`` does.
    '''
    if value is None:
        return ()
    if isinstance(value, str):
        rows = [value]
    else:
        arr = np.asarray(value)
        if arr.dtype.kind == "S":
            arr = np.char.decode(arr, "latin-1")
        if arr.size == 0:
            rows = []
        elif arr.ndim == 0:
            rows = [str(arr)]
        elif arr.ndim == 2 and arr.dtype.kind == "U" and arr.dtype.itemsize == np.dtype("U1").itemsize:
            rows = ["".join(row) for row in arr]
        else:
            rows = [str(row) for row in arr.reshape(-1)]
    return tuple(row.rstrip(" \t\r\n\x00") for row in rows)


class RawContainer(BaseObject):
    '''
    The content of a LabChart MATLAB export.

    *Usage*::

        >>> import scipy.io
        >>> from labchartio.core import RawContainer
        >>> raw = RawContainer.from_mapping(scipy.io.loadmat('recording.mat'))
        >>> raw.channel_count, raw.block_count
        (2, 3)

    *Required attributes/properties*:
        :datastart: (2D array) 1-based first sample of each channel/block
        :dataend: (2D array) 1-based last sample (inclusive)
        :samplerate: (2D array) sample rate of each channel/block
        :rangemin: (2D array) range minimum of each channel/block
        :rangemax: (2D array) range maximum of each channel/block
        :tickrate: (1D array) tick rate of each block
        :data: (1D array) all samples, concatenated
        :titles: (tuple of str) channel names
        :unittextmap: (2D array) 1-based index into :attr:`unittext`
        :unittext: (tuple of str) unit strings

    *Recommended attributes/properties*:
        :com: (2D array) comments table [comments x 5]: channel (-1 for all
            channels), block, position, type, text index
        :comtext: (tuple of str) comment bodies
        :name: (str) A label for the dataset.
        :description: (str) Text description.
        :file_origin: (str) Filesystem path of the original data file.

    *Properties available on this object*:
        :channel_count: number of rows of :attr:`datastart`
        :block_count: number of columns of :attr:`datastart`
    '''

    _necessary_attrs = (('datastart', np.ndarray, 2),
                        ('dataend', np.ndarray, 2),
                        ('samplerate', np.ndarray, 2),
                        ('rangemin', np.ndarray, 2),
                        ('rangemax', np.ndarray, 2),
                        ('tickrate', np.ndarray, 1),
                        ('data', np.ndarray, 1),
                        ('titles', tuple),
                        ('unittextmap', np.ndarray, 2),
                        ('unittext', tuple))
    _recommended_attrs = ((('com', np.ndarray, 2),
                           ('comtext', tuple)) +
                          BaseObject._recommended_attrs)

    def __init__(self, datastart, dataend, samplerate, rangemin, rangemax, tickrate,
                 data, titles, unittextmap, unittext, com=None, comtext=None,
                 name=None, description=None, file_origin=None):
        BaseObject.__init__(self, name=name, description=description,
                            file_origin=file_origin)
        self.datastart = _as_grid(datastart, 'datastart')
        self.dataend = _as_grid(dataend, 'dataend')
        self.samplerate = _as_grid(samplerate, 'samplerate')
        self.rangemin = _as_grid(rangemin, 'rangemin')
        self.rangemax = _as_grid(rangemax, 'rangemax')
        self.tickrate = _as_vector(tickrate)
        self.data = _as_vector(data)
        self.titles = _as_text_rows(titles)
        self.unittextmap = _as_grid(unittextmap, 'unittextmap')
        self.unittext = _as_text_rows(unittext)
        self.com = _as_table(com)
        self.comtext = _as_text_rows(comtext)

    @classmethod
    def from_mapping(cls, mapping, file_origin=None):
        '''
        Build a :class:`RawContainer` from the dict returned by
        :func:`scipy.io.loadmat` (or any mapping with the same keys).

        Keys that are not part of the export schema are ignored.
        '''
        kwargs = {}
        for attr in cls._necessary_attrs:
            kwargs[attr[0]] = mapping[attr[0]]
        for attr in ('com', 'comtext'):
            kwargs[attr] = mapping.get(attr)
        return cls(file_origin=file_origin, **kwargs)

    @property
    def channel_count(self):
        return self.datastart.shape[0]

    @property
    def block_count(self):
        return self.datastart.shape[1]

    def __repr__(self):
        return '<%s(%d channels x %d blocks, %d samples, %d comments)>' % (
            self.__class__.__name__, self.channel_count, self.block_count,
            self.data.size, self.com.shape[0])
