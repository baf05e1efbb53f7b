"""
:mod:`labchartio.core` provides the classes holding a LabChart recording,
before (:class:`RawContainer`) and after (:class:`CellGrid`) restructuring.

Classes:

.. autoclass:: RawContainer

.. autoclass:: CellGrid
.. autoclass:: Cell
.. autoclass:: TimeSeries
.. autoclass:: Annotation

"""

from labchartio.core.exceptions import (
    LabChartError,
    UsageError,
    ShapeMismatchError,
    IndexOutOfRangeError,
    UnknownKindError,
    RangeError,
)
from labchartio.core.rawcontainer import RawContainer
from labchartio.core.timeseries import TimeSeries
from labchartio.core.annotation import (
    Annotation,
    AllChannels,
    ALL_CHANNELS,
    ANNOTATION_KINDS,
    ANNOTATION_FIELDS,
)
from labchartio.core.cell import Cell, RATES_UNITS
from labchartio.core.cellgrid import CellGrid
