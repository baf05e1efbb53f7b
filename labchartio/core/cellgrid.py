'''
This module implements :class:`CellGrid`, the restructured recording: a
table of :class:`Cell` objects with one row per channel and one column per
block, addressed by channel name and block name.
'''

from types import MappingProxyType

from labchartio.core.baseobject import BaseObject
from labchartio.core.exceptions import ShapeMismatchError


def _check_unique(names, what):
    seen = set()
    for name in names:
        if name in seen:
            raise ShapeMismatchError(f"Duplicate {what} name {name!r}: "
                                     f"{what}s must be unique to key the grid")
        seen.add(name)


class CellGrid(BaseObject):
    '''
    Cells of a recording, keyed by (channel name, block name).

    *Usage*::

        >>> grid = restructure(raw)
        >>> grid.shape
        (2, 3)
        >>> grid.block_names
        ('block_1', 'block_2', 'block_3')
        >>> cell = grid['Pressure', 'block_2']
        >>> list(grid.row('Pressure'))
        ['block_1', 'block_2', 'block_3']

    Iterating over the grid yields the cells, channel by channel and block
    by block within a channel. The grid cannot be modified once built.
    '''

    _necessary_attrs = (('channel_names', tuple),
                        ('block_names', tuple))

    def __init__(self, channel_names, block_names, cells,
                 name=None, description=None, file_origin=None):
        '''
        ``cells`` maps every (channel name, block name) pair to its
        :class:`Cell`. Every pair must be present.
        '''
        BaseObject.__init__(self, name=name, description=description,
                            file_origin=file_origin)
        channel_names = tuple(channel_names)
        block_names = tuple(block_names)
        _check_unique(channel_names, 'channel')
        _check_unique(block_names, 'block')

        table = {}
        for channel in channel_names:
            for block in block_names:
                try:
                    table[channel, block] = cells[channel, block]
                except KeyError:
                    raise ShapeMismatchError(f"No cell for channel {channel!r} "
                                             f"in block {block!r}") from None
        if len(cells) != len(table):
            raise ShapeMismatchError(f"{len(cells)} cells given for a "
                                     f"{len(channel_names)} x {len(block_names)} grid")

        self._channel_names = channel_names
        self._block_names = block_names
        self._cells = MappingProxyType(table)

    @property
    def channel_names(self):
        return self._channel_names

    @property
    def block_names(self):
        return self._block_names

    @property
    def shape(self):
        return (len(self._channel_names), len(self._block_names))

    def __getitem__(self, key):
        channel, block = key
        return self._cells[channel, block]

    def __contains__(self, key):
        return key in self._cells

    def __len__(self):
        return len(self._cells)

    def __iter__(self):
        return iter(self._cells.values())

    def items(self):
        return self._cells.items()

    def keys(self):
        return self._cells.keys()

    def row(self, channel):
        '''
        Cells of ``channel``, as a read-only mapping of block name to cell.
        '''
        if channel not in self._channel_names:
            raise KeyError(channel)
        return MappingProxyType({block: self._cells[channel, block]
                                 for block in self._block_names})

    def column(self, block):
        '''
        Cells of ``block``, as a read-only mapping of channel name to cell.
        '''
        if block not in self._block_names:
            raise KeyError(block)
        return MappingProxyType({channel: self._cells[channel, block]
                                 for channel in self._channel_names})

    def __repr__(self):
        return '<%s(%d channels x %d blocks)>' % ((self.__class__.__name__,) + self.shape)
