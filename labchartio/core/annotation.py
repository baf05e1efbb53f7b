'''
This module implements :class:`Annotation`, a comment or event placed by the
LabChart user at a sample position of a block, either on one channel or on
all channels of that block.

A comment placed on all channels is marked by the :data:`ALL_CHANNELS`
sentinel instead of a channel name, so it cannot be confused with a channel
whose title is empty.
'''

# the two kinds of comments, in the order of their LabChart type codes (1, 2)
ANNOTATION_KINDS = ('comment', 'event')

# columns of the LabChart comments table
ANNOTATION_FIELDS = ('channel', 'block', 'position', 'type', 'text')


class AllChannels:
    '''
    Channel of an annotation that applies to every channel of its block.

    There is a single instance, :data:`ALL_CHANNELS`.
    '''

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'ALL_CHANNELS'

    def __reduce__(self):
        return (AllChannels, ())


ALL_CHANNELS = AllChannels()


class Annotation:
    '''
    A comment or event of a LabChart recording.

    *Usage*::

        >>> from labchartio.core import Annotation, ALL_CHANNELS
        >>> ann = Annotation(ALL_CHANNELS, 'block_1', 100, 'comment', 'start')
        >>> ann.applies_to('Pressure', 'block_1')
        True

    *Attributes*:
        :channel: (str or :data:`ALL_CHANNELS`) channel name
        :block: (str) block name
        :position: (int) sample position in the block
        :kind: (str) one of :data:`ANNOTATION_KINDS`
        :text: (str) body of the comment

    Instances are immutable.
    '''

    __slots__ = ('_channel', '_block', '_position', '_kind', '_text')

    def __init__(self, channel, block, position, kind, text):
        if kind not in ANNOTATION_KINDS:
            raise ValueError('kind must be one of %s, not %r' % (ANNOTATION_KINDS, kind))
        self._channel = channel
        self._block = block
        self._position = int(position)
        self._kind = kind
        self._text = text

    @property
    def channel(self):
        return self._channel

    @property
    def block(self):
        return self._block

    @property
    def position(self):
        return self._position

    @property
    def kind(self):
        return self._kind

    @property
    def text(self):
        return self._text

    @property
    def applies_to_all_channels(self):
        return self._channel is ALL_CHANNELS

    def applies_to(self, channel, block):
        '''
        True if the annotation belongs to the cell of ``channel`` in ``block``:
        same block, and either the same channel or all channels.
        '''
        return self._block == block and (self.applies_to_all_channels or
                                         self._channel == channel)

    def to_dict(self):
        '''
        Return the annotation as a row of the LabChart comments table, keyed
        by :data:`ANNOTATION_FIELDS`. Comments on all channels get an empty
        channel name.
        '''
        channel = '' if self.applies_to_all_channels else self._channel
        return dict(zip(ANNOTATION_FIELDS,
                        (channel, self._block, self._position, self._kind, self._text)))

    def _key(self):
        return (self._channel, self._block, self._position, self._kind, self._text)

    def __eq__(self, other):
        if not isinstance(other, Annotation):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return '<%s(%r, %r, position=%d, %s: %r)>' % (self.__class__.__name__, self._channel,
                                                      self._block, self._position,
                                                      self._kind, self._text)
