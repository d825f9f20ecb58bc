"""
This module provides a mixin implementing ``==`` from the instance attributes.
"""

from typing import Any, Self

import numpy as np


class AttributeEqualityComparison:
    """
    A mixin which makes two instances equal when they are of the same class and every instance attribute matches.

    Numeric array attributes are compared with ``np.allclose``.  Everything else (including :class:`.Quaternion`
    values, which compare their components exactly) uses ``==``.

    Put this before any dataclass options base in the inheritance list.  Otherwise the ``__eq__`` generated for the
    dataclass wins and only the option fields are compared::

        class QuaternionInterpolator(UserOptionConfigured[InterpolatorOptions], AttributePrinting,
                                     AttributeEqualityComparison, InterpolatorOptions):
            ...

    Defining ``__eq__`` here removes the inherited ``__hash__``.  Classes that need to be hashable define their own
    over the same state.
    """

    def __eq__(self, other: Any) -> bool:

        if not isinstance(other, self.__class__):
            return NotImplemented

        if self.__dict__.keys() != other.__dict__.keys():
            return False

        return all(self.comparison_dictionary(other).values())

    @staticmethod
    def _value_comparison(val1: Any, val2: Any) -> bool:
        """
        Compare two attribute values.

        :param val1: the value from the first instance
        :param val2: the value from the second instance
        :return: whether the values match
        """

        if isinstance(val1, np.ndarray) and isinstance(val2, np.ndarray):
            if val1.shape != val2.shape:
                return False

            try:
                return bool(np.allclose(val1, val2))
            except TypeError:
                # non-numeric arrays
                return bool(np.all(val1 == val2))

        return bool(val1 == val2)

    def comparison_dictionary(self, other: Self) -> dict[str, bool]:
        """
        Map each attribute name to whether it matches between self and `other`.

        Useful for finding out why two instances are unequal.  Both instances are assumed to have the same attributes.

        :param other: the instance to compare with
        :return: the per attribute comparison results
        """

        return {key: self._value_comparison(value, other.__dict__[key]) for key, value in self.__dict__.items()}
