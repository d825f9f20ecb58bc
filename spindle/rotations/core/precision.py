r"""
This module defines the numeric capability the rotation routines are generic over.

Every routine in :mod:`spindle.rotations` works in either single (``np.float32``) or double (``np.float64``)
precision.  The constants that depend on the precision (most importantly the machine epsilon used by the degenerate
input checks) are stored exactly once per precision level in a :class:`Precision` instance, retrieved with
:func:`get_precision`.  Routines never hard code their own tolerances.

The precision of a computation is decided from its inputs by :func:`resolve_dtype`: typed numpy single precision
inputs keep the computation in single precision, anything else (including plain python floats and lists) is carried
out in double precision.
"""

from dataclasses import dataclass

from typing import Any

import numpy as np

from spindle._typing import FLOAT_DTYPE, SCALAR_OR_ARRAY


__all__ = ["Precision", "FLOAT32", "FLOAT64", "get_precision", "resolve_dtype"]


@dataclass(frozen=True)
class Precision:
    """
    The scalar constants for a single floating point precision level.

    Instances should not be created directly.  Use :func:`get_precision` (or the :data:`FLOAT32` and
    :data:`FLOAT64` constants) instead so that there is only ever one set of constants per precision.
    """

    dtype: np.dtype
    """
    The numpy dtype this precision level computes in
    """

    ZERO: np.floating
    """
    The additive identity
    """

    ONE: np.floating
    """
    The multiplicative identity
    """

    EPSILON: np.floating
    """
    The machine epsilon of the dtype.  Used as the tolerance for every degenerate input check.
    """

    PI: np.floating
    """
    Pi rounded to the dtype
    """

    @classmethod
    def for_dtype(cls, dtype: FLOAT_DTYPE) -> 'Precision':
        """
        Build the constants for `dtype`.

        :param dtype: the floating point dtype to build the constants for
        :return: the precision constants
        """

        dtype = np.dtype(dtype)

        return cls(dtype=dtype,
                   ZERO=dtype.type(0),
                   ONE=dtype.type(1),
                   EPSILON=np.finfo(dtype).eps,
                   PI=dtype.type(np.pi))

    def cast(self, value: SCALAR_OR_ARRAY) -> Any:
        """
        Convert `value` to this precision.

        Scalars are returned as numpy scalars, everything else as a new numpy array.

        :param value: The value to convert
        :return: the converted value
        """

        return np.array(value, dtype=self.dtype)[()]

    def clamp(self, value: SCALAR_OR_ARRAY, low: float, high: float) -> Any:
        """
        Clamp `value` into ``[low, high]`` in this precision.

        :param value: the value to clamp
        :param low: the lower bound
        :param high: the upper bound
        :return: the clamped value
        """

        return np.clip(self.cast(value), self.dtype.type(low), self.dtype.type(high))

    def is_zero(self, value: SCALAR_OR_ARRAY) -> bool:
        """
        Check whether `value` is within epsilon of zero.

        :param value: the scalar value to check
        :return: ``True`` if ``abs(value) <= EPSILON``
        """

        return bool(np.abs(value) <= self.EPSILON)


FLOAT32 = Precision.for_dtype(np.float32)
"""
Single precision constants
"""

FLOAT64 = Precision.for_dtype(np.float64)
"""
Double precision constants
"""

_PRECISIONS = {FLOAT32.dtype: FLOAT32, FLOAT64.dtype: FLOAT64}


def get_precision(dtype: FLOAT_DTYPE | None = None) -> Precision:
    """
    Retrieve the precision constants for a dtype.

    :param dtype: ``np.float32``, ``np.float64`` (or ``float``).  ``None`` means double precision.
    :return: The :class:`Precision` for the dtype
    :raises TypeError: if the dtype is not a supported floating point precision
    """

    if dtype is None:
        return FLOAT64

    try:
        key = np.dtype(dtype)
    except TypeError:
        raise TypeError(f'{dtype!r} is not a dtype')

    try:
        return _PRECISIONS[key]
    except KeyError:
        raise TypeError(f'Unsupported precision {key}.  Only float32 and float64 are supported')


def resolve_dtype(*values: Any) -> np.dtype:
    """
    Determine the dtype a computation on `values` should be carried out in.

    Only inputs which carry a floating point ``dtype`` (numpy arrays, numpy scalars, quaternions) take part in the
    decision.  If all of those are single precision the result is single precision, otherwise it is double
    precision.

    :param values: the inputs to the computation
    :return: either ``np.dtype('float32')`` or ``np.dtype('float64')``
    """

    typed = [np.dtype(value.dtype) for value in values
             if hasattr(value, 'dtype') and np.issubdtype(value.dtype, np.floating)]

    if typed and all(dtype == FLOAT32.dtype for dtype in typed):
        return FLOAT32.dtype

    return FLOAT64.dtype
