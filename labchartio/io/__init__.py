"""
:mod:`labchartio.io` provides classes for reading LabChart data files.

Functions:

.. autofunction:: labchartio.io.load_labchart


Classes:

* :attr:`LabChartIO`


.. autoclass:: labchartio.io.LabChartIO

    .. autoattribute:: extensions

"""

from labchartio.io.labchartmatio import LabChartIO, load_labchart
