"""
Restructuring of a :class:`RawContainer` into a :class:`CellGrid`.

This is done in three steps, each one available on its own:

  * :func:`extract_metadata` reads the channel and block names, the units and
    the per channel/block rates and ranges.
  * :func:`normalize_annotations` resolves the indices of the comments table
    into channel names, block names, kinds and texts.
  * :func:`assemble_cells` cuts the sample buffer into one
    :class:`TimeSeries` per channel and block and gives each :class:`Cell`
    the annotations that apply to it.

:func:`restructure` chains the three. All index fields of the export are
1-based and are checked where they are used.

Example::

    >>> from labchartio.io import LabChartIO
    >>> from labchartio.restructure import restructure
    >>> raw = LabChartIO('recording.mat').read_raw()
    >>> grid = restructure(raw)
    >>> grid['Pressure', 'block_1'].time_series
"""

import logging

import numpy as np
import quantities as pq

from labchartio.core import (
    Annotation,
    ALL_CHANNELS,
    ANNOTATION_KINDS,
    Cell,
    CellGrid,
    TimeSeries,
    RATES_UNITS,
    ShapeMismatchError,
    IndexOutOfRangeError,
    UnknownKindError,
    RangeError,
)
from labchartio.units import parse_units

logger = logging.getLogger("labchartio")

BLOCK_NAME_PREFIX = 'block_'

# channel index of comments placed on all channels
ALL_CHANNELS_INDEX = -1

# one record per channel/block, see RecordingMetadata.cells
_cell_metadata_dtype = [
    ("datastart", "float64"),
    ("dataend", "float64"),
    ("sampling_rate", "float64"),
    ("tick_rate", "float64"),
    ("range_min", "float64"),
    ("range_max", "float64"),
    ("units", "O"),
]


def _as_index(value):
    """
    Return ``value`` as an int, or None if it is not integral.
    """
    value = float(value)
    if not value.is_integer():
        return None
    return int(value)


def _lookup(table, index, what):
    """
    1-based lookup of ``index`` in the sequence ``table``.
    """
    position = _as_index(index)
    if position is None or not 1 <= position <= len(table):
        raise IndexOutOfRangeError(f"{what} index {index!r} does not reference one of "
                                   f"the {len(table)} {what} entries")
    return table[position - 1]


def _check_shape(arr, expected, field):
    if arr.shape != expected:
        raise ShapeMismatchError(f"{field} has shape {arr.shape}, "
                                 f"expected {expected} from datastart")


class RecordingMetadata:
    """
    Names and per channel/block metadata of a recording.

    *Attributes*:
        :channel_names: (tuple of str) one per channel, from ``titles``
        :block_names: (tuple of str) ``block_1``, ``block_2``, ...
        :sampling_rates: (2D array) ``samplerate`` of the export
        :tick_rates: (1D array) ``tickrate`` of the export
        :range_min: (2D array) ``rangemin`` of the export
        :range_max: (2D array) ``rangemax`` of the export
        :cells: (2D structured array) [channels x blocks] records with the
            sample bounds, rates, range and unit text of each cell
    """

    def __init__(self, channel_names, block_names, unittext, unittextmap,
                 sampling_rates, tick_rates, range_min, range_max, datastart, dataend):
        self.channel_names = tuple(channel_names)
        self.block_names = tuple(block_names)
        self.unittext = tuple(unittext)
        self.unittextmap = unittextmap
        self.sampling_rates = sampling_rates
        self.tick_rates = tick_rates
        self.range_min = range_min
        self.range_max = range_max

        cells = np.zeros(self.shape, dtype=_cell_metadata_dtype)
        cells["datastart"] = datastart
        cells["dataend"] = dataend
        cells["sampling_rate"] = sampling_rates
        cells["tick_rate"] = tick_rates[np.newaxis, :]
        cells["range_min"] = range_min
        cells["range_max"] = range_max
        for c in range(self.shape[0]):
            for b in range(self.shape[1]):
                cells["units"][c, b] = self.unit(c, b)
        cells.setflags(write=False)
        self.cells = cells

    @property
    def shape(self):
        return (len(self.channel_names), len(self.block_names))

    def unit(self, channel_index, block_index):
        """
        Unit text of a cell, given 0-based channel and block indices.
        """
        return _lookup(self.unittext, self.unittextmap[channel_index, block_index], 'unittext')


def extract_metadata(raw):
    """
    Read names, units, rates and ranges from a :class:`RawContainer`.

    The number of channels and blocks is the shape of ``datastart``; every
    other grid must have that same shape.
    """
    shape = raw.datastart.shape
    num_channels, num_blocks = shape
    _check_shape(raw.dataend, shape, 'dataend')
    _check_shape(raw.samplerate, shape, 'samplerate')
    _check_shape(raw.rangemin, shape, 'rangemin')
    _check_shape(raw.rangemax, shape, 'rangemax')
    _check_shape(raw.unittextmap, shape, 'unittextmap')
    _check_shape(raw.tickrate, (num_blocks,), 'tickrate')
    if len(raw.titles) != num_channels:
        raise ShapeMismatchError(f"{len(raw.titles)} channel titles for "
                                 f"{num_channels} channels")

    channel_names = raw.titles
    block_names = tuple(BLOCK_NAME_PREFIX + str(b + 1) for b in range(num_blocks))
    logger.debug("Extracting metadata of %d channels x %d blocks", num_channels, num_blocks)

    return RecordingMetadata(channel_names, block_names, raw.unittext, raw.unittextmap,
                             raw.samplerate, raw.tickrate, raw.rangemin, raw.rangemax,
                             raw.datastart, raw.dataend)


def _annotation_channel(index, channel_names):
    if _as_index(index) == ALL_CHANNELS_INDEX:
        return ALL_CHANNELS
    return _lookup(channel_names, index, 'channel')


def _annotation_kind(code):
    position = _as_index(code)
    if position is None or not 1 <= position <= len(ANNOTATION_KINDS):
        raise UnknownKindError(f"Comment type {code!r} is not one of "
                               f"{list(range(1, len(ANNOTATION_KINDS) + 1))} "
                               f"({', '.join(ANNOTATION_KINDS)})")
    return ANNOTATION_KINDS[position - 1]


def normalize_annotations(raw, metadata):
    """
    Return the comments table of ``raw`` as a list of :class:`Annotation`,
    one per row, in the order of the table.
    """
    annotations = []
    for channel, block, position, code, text in raw.com:
        annotations.append(Annotation(
            channel=_annotation_channel(channel, metadata.channel_names),
            block=_lookup(metadata.block_names, block, 'block'),
            position=position,
            kind=_annotation_kind(code),
            text=_lookup(raw.comtext, text, 'comtext'),
        ))
    logger.debug("Normalized %d annotations", len(annotations))
    return annotations


def _sample_slice(data, start, end, channel, block):
    """
    Samples ``start`` to ``end`` (1-based, inclusive) of ``data``.
    """
    first, last = _as_index(start), _as_index(end)
    if first is None or last is None:
        raise RangeError(f"Non integer sample bounds [{start}, {end}] "
                         f"for channel {channel!r} in {block}")
    if first > last:
        raise RangeError(f"Empty sample range [{first}, {last}] "
                         f"for channel {channel!r} in {block}")
    if first < 1 or last > data.size:
        raise RangeError(f"Sample range [{first}, {last}] for channel {channel!r} in {block} "
                         f"is outside of the {data.size} samples of the recording")
    return data[first - 1:last]


def assemble_cells(raw, metadata, annotations):
    """
    Build the :class:`CellGrid` of a recording from its metadata
    (see :func:`extract_metadata`) and annotations
    (see :func:`normalize_annotations`).

    Nothing is returned unless every cell could be built.
    """
    cells = {}
    for c, channel in enumerate(metadata.channel_names):
        for b, block in enumerate(metadata.block_names):
            record = metadata.cells[c, b]
            samples = _sample_slice(raw.data, record["datastart"], record["dataend"],
                                    channel, block)
            unit = record["units"]
            tick_rate = pq.Quantity(record["tick_rate"], RATES_UNITS)

            time_series = TimeSeries(samples, units=parse_units(unit),
                                     sampling_rate=tick_rate,
                                     unit_label=unit, name=channel, description=block,
                                     file_origin=raw.file_origin)
            time_series.setflags(write=False)

            cells[channel, block] = Cell(
                channel=channel,
                block=block,
                time_series=time_series,
                unit=unit,
                sample_rate=pq.Quantity(record["sampling_rate"], RATES_UNITS),
                tick_rate=tick_rate,
                range=(record["range_min"], record["range_max"]),
                annotations=[ann for ann in annotations if ann.applies_to(channel, block)],
                file_origin=raw.file_origin,
            )

    logger.debug("Assembled %d cells", len(cells))
    return CellGrid(metadata.channel_names, metadata.block_names, cells,
                    file_origin=raw.file_origin)


def restructure(raw):
    """
    Restructure a :class:`RawContainer` into a :class:`CellGrid`.
    """
    metadata = extract_metadata(raw)
    annotations = normalize_annotations(raw, metadata)
    return assemble_cells(raw, metadata, annotations)
