"""
Module for reading LabChart recordings exported to MATLAB format (.mat).

The recording must be exported from LabChart with the "standard" format
and the "32-bit" option. Such a file holds flat arrays describing every
channel in every block (``datastart``, ``dataend``, ``samplerate``, ...),
a single buffer with all the samples (``data``) and the comments table
(``com``, ``comtext``). See :class:`labchartio.core.RawContainer`.

Empty channels or blocks are not supported.

Supported : Read

Example::

    >>> from labchartio.io import LabChartIO
    >>> r = LabChartIO(filename='recording.mat')
    >>> grid = r.read_grid()
    >>> cell = grid['Pressure', 'block_1']
    >>> cell.time_series, cell.unit, cell.annotations

Or, with the same behaviour as the MATLAB ``load_labchart`` function::

    >>> from labchartio.io import load_labchart
    >>> grid, raw = load_labchart('recording.mat', n_outputs=2)
"""

from packaging.version import Version

from labchartio.io.baseio import BaseIO
from labchartio.io.filepicker import ask_mat_filename
from labchartio.core import CellGrid, RawContainer, UsageError
from labchartio.restructure import restructure

MIN_SCIPY_VERSION = "1.0.0"


class LabChartIO(BaseIO):
    """
    Class for reading LabChart MATLAB exports (standard format, 32-bit).

    ``read_raw()`` gives the content of the file as exported, ``read_grid()``
    gives it restructured into one :class:`Cell` per channel and block.
    """

    is_readable = True
    is_writable = False

    readable_objects = [CellGrid, RawContainer]

    name = "LabChart MATLAB export"
    description = "LabChart data exported to .mat (standard format, 32-bit)"
    extensions = ["mat"]

    mode = "file"

    def __init__(self, filename=None):
        """
        Arguments:
            filename : the filename to read
        """
        import scipy.version

        if Version(scipy.version.version) < Version(MIN_SCIPY_VERSION):
            raise ImportError(
                "your scipy version is too old to support "
                + f"LabChartIO, you need at least {MIN_SCIPY_VERSION}. "
                + f"You have {scipy.version.version}"
            )

        BaseIO.__init__(self, filename)
        self._raw = None

    def read_raw(self):
        """
        Return the :class:`RawContainer` stored in the file. The file is
        read once, later calls return the same object.
        """
        import scipy.io

        if self._raw is None:
            self.logger.debug("Loading %s", self.filename)
            d = scipy.io.loadmat(self.filename, mat_dtype=True)
            self._raw = RawContainer.from_mapping(d, file_origin=self.filename)
            self.logger.debug("Loaded %r", self._raw)
        return self._raw

    def read_grid(self):
        """
        Return the recording restructured as a :class:`CellGrid`.
        """
        return restructure(self.read_raw())


def load_labchart(*args, n_outputs=1, file_picker=None):
    """
    Load a LabChart MATLAB export and restructure it.

    Parameters
    ----------
    file_path: str or Path, optional
        File to load. When missing, ``file_picker`` is called to choose it.
    n_outputs: int, default: 1
        1 to return the restructured :class:`CellGrid` only, 2 to return
        ``(grid, raw)`` where ``raw`` is the :class:`RawContainer` as exported.
    file_picker: callable, optional
        Called without arguments to choose the file when no path is given,
        must return a path or an empty value when cancelled. Defaults to a
        MAT-file selection dialog.

    Raises
    ------
    UsageError
        With more than one positional argument, ``n_outputs`` not 1 or 2,
        or a cancelled file selection. Raised before any file access.
    """
    if len(args) > 1:
        raise UsageError(f"Wrong number of input arguments: expected at most 1, got {len(args)}")
    if isinstance(n_outputs, bool) or not isinstance(n_outputs, int) or n_outputs not in (1, 2):
        raise UsageError(f"Wrong number of output arguments: expected 1 or 2, got {n_outputs!r}")

    if args:
        file_path = args[0]
    else:
        if file_picker is None:
            file_picker = ask_mat_filename
        file_path = file_picker()
        if not file_path:
            raise UsageError("No file selected")

    io = LabChartIO(filename=file_path)
    raw = io.read_raw()
    grid = restructure(raw)
    if n_outputs == 2:
        return grid, raw
    return grid
