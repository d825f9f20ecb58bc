"""
This module provides a mixin implementing ``__repr__`` and ``__str__`` from the instance attributes.
"""

from typing import Any, Iterator


class AttributePrinting:
    """
    A mixin which renders an instance as ``ClassName(attr=value, ...)``.

    Public attributes are printed as they are.  A private attribute ``_name`` is printed as ``name`` through the
    public property of that name when the class defines one, and left out otherwise.  For the
    :class:`.QuaternionInterpolator` this prints the interpolation settings followed by ``original_options``,
    ``start`` and ``end``.

    ``repr`` uses the ``repr`` of each value and ``str`` uses its ``str``.  Newlines are stripped so the result is a
    single line.
    """

    def _printable_attributes(self) -> Iterator[tuple[str, Any]]:
        cls = type(self)

        for name, value in self.__dict__.items():
            if not name.startswith('_'):
                yield name, value
                continue

            public = name.lstrip('_')

            if isinstance(getattr(cls, public, None), property):
                yield public, getattr(self, public)

    def _build_representation(self, attribute_repr: bool) -> str:
        """
        Join the printable attributes into the class signature.

        :param attribute_repr: use ``repr`` instead of ``str`` for the values
        """

        render = repr if attribute_repr else str

        attributes = ', '.join(f'{name}={render(value)}'.replace('\n', '')
                               for name, value in self._printable_attributes())

        return f'{type(self).__name__}({attributes})'

    def __str__(self) -> str:
        return self._build_representation(False)

    def __repr__(self) -> str:
        return self._build_representation(True)
