"""
Exceptions raised while restructuring a LabChart export.

Every error derives from :class:`LabChartError` and from the builtin
exception closest in meaning, so callers may catch either.
"""


class LabChartError(Exception):
    pass


class UsageError(LabChartError, TypeError):
    """Wrong number of input arguments or requested outputs."""


class ShapeMismatchError(LabChartError, ValueError):
    """Metadata grids whose shapes disagree with ``datastart``."""


class IndexOutOfRangeError(LabChartError, IndexError):
    """A 1-based index field that does not reference a row of its table."""


class UnknownKindError(LabChartError, ValueError):
    """A comment type code outside of the known kinds."""


class RangeError(LabChartError, ValueError):
    """Invalid sample bounds for a channel/block slice."""
