"""
This module defines :class:`BaseObject`, the base class of the
:mod:`labchartio.core` classes.
"""


class BaseObject:
    """
    Base class of the recording objects (:class:`RawContainer`,
    :class:`TimeSeries`, :class:`Cell`, :class:`CellGrid`).

    Subclasses describe their fields with class attributes:
        :_necessary_attrs: (name, type[, ndim]) tuples of the fields every
                           instance holds.
        :_recommended_attrs: same layout, for optional fields. Subclasses
                             extend BaseObject._recommended_attrs.
        :_repr_pretty_attrs_keys_: fields shown by IPython pretty-printing.

    Subclasses call ``BaseObject.__init__(self, name=name,
    description=description, file_origin=file_origin)``.
    """

    _necessary_attrs = ()
    _recommended_attrs = (('name', str),
                          ('description', str),
                          ('file_origin', str))
    _repr_pretty_attrs_keys_ = ("name", "description", "file_origin")

    def __init__(self, name=None, description=None, file_origin=None):
        self.name = name
        self.description = description
        self.file_origin = file_origin

    def _has_repr_pretty_attrs_(self):
        return any(getattr(self, key) for key in self._repr_pretty_attrs_keys_)

    def _repr_pretty_attrs_(self, pp, cycle):
        for i, key in enumerate(key for key in self._repr_pretty_attrs_keys_
                                if getattr(self, key)):
            if i:
                pp.breakable()
            with pp.group(indent=1):
                pp.text(f"{key}: ")
                pp.pretty(getattr(self, key))

    def _repr_pretty_(self, pp, cycle):
        """
        Handle pretty-printing in IPython.
        """
        pp.text(self.__class__.__name__)
        if self._has_repr_pretty_attrs_():
            pp.breakable()
            self._repr_pretty_attrs_(pp, cycle)
