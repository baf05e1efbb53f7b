"""
baseio
======

Classes
-------

BaseIO        - abstract class which should be overridden, managing how a
                file will load its data

"""

from __future__ import annotations
from pathlib import Path
import logging

from labchartio import logging_handler
from labchartio.core import CellGrid, RawContainer

read_error = "This type is not supported by this file format for reading"


class BaseIO:
    """
    Generic class to handle the read methods of a file format.

    This is an abstract class that will be subclassed for each format.
    The key methods of the class are:
        - ``read()`` - Read the whole file, return a list of CellGrid objects
        - ``read_grid(**params)`` - Read the restructured CellGrid
        - ``read_raw(**params)`` - Read the RawContainer, as stored in the file

    Each class declares what can be read directly with **readable_objects**.
    """

    is_readable = False
    is_writable = False

    readable_objects = []

    name = "BaseIO"
    description = ""
    extensions = []

    mode = "file"  # or 'dir'

    def __init__(self, filename: str | Path = None, **kargs):
        self.filename = str(filename)
        # create a logger for the IO class
        fullname = self.__class__.__module__ + "." + self.__class__.__name__
        self.logger = logging.getLogger(fullname)
        # create a logger for 'labchartio' and add a handler to it if it doesn't
        # have one already.
        # (it will also not add one if the root logger has a handler)
        corename = self.__class__.__module__.split(".")[0]
        corelogger = logging.getLogger(corename)
        rootlogger = logging.getLogger()
        if not corelogger.handlers and not rootlogger.handlers:
            corelogger.addHandler(logging_handler)

    def read(self, **kargs):
        """
        Return all data from the file as a list of CellGrid

        Parameters
        ----------
        kargs: dict
            IO specific additional arguments

        Returns
        ------
        grid_list: list[labchartio.core.CellGrid]
            Returns all the data from the file as CellGrids
        """
        if CellGrid in self.readable_objects:
            return [self.read_grid(**kargs)]
        else:
            raise NotImplementedError

    def read_grid(self, **kargs):
        if CellGrid not in self.readable_objects:
            raise NotImplementedError(read_error)

    def read_raw(self, **kargs):
        if RawContainer not in self.readable_objects:
            raise NotImplementedError(read_error)
