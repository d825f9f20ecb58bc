import numpy as np

from spindle._typing import ARRAY_LIKE, FLOAT_ARRAY, FLOAT_DTYPE

from spindle.rotations.core.errors import DegenerateVectorError
from spindle.rotations.core.precision import get_precision, resolve_dtype


def _check_array_and_shape(input: ARRAY_LIKE,
                           dtype: FLOAT_DTYPE | None = None,
                           first_axis_length: int | None = None) -> FLOAT_ARRAY:
    in_shape = np.shape(input)

    if not in_shape:
        raise ValueError('The input must be shaped')

    if first_axis_length is not None and in_shape[0] != first_axis_length:
        raise ValueError(f'The length of the first axis must be {first_axis_length}')

    if dtype is None:
        dtype = resolve_dtype(input)

    # always copy so that the caller's data is never modified
    return np.array(input, dtype=get_precision(dtype).dtype)


def _check_quaternion_array_and_shape(quaternion: ARRAY_LIKE, dtype: FLOAT_DTYPE | None = None) -> FLOAT_ARRAY:
    return _check_array_and_shape(quaternion, dtype, first_axis_length=4)


def _check_vector_array_and_shape(vector: ARRAY_LIKE, dtype: FLOAT_DTYPE | None = None) -> FLOAT_ARRAY:
    return _check_array_and_shape(vector, dtype, first_axis_length=3)


def normalize_vector(vector: ARRAY_LIKE, dtype: FLOAT_DTYPE | None = None) -> FLOAT_ARRAY:
    """
    Scale a single 3 element vector to unit length.

    :param vector: the vector to normalize
    :param dtype: the precision to work in.  If ``None`` it is determined from the input
    :return: the unit vector as a new array
    :raises DegenerateVectorError: if the vector has a numerically zero length
    """

    work_vector = _check_vector_array_and_shape(vector, dtype)

    precision = get_precision(work_vector.dtype)

    norm = np.linalg.norm(work_vector)

    if precision.is_zero(norm):
        raise DegenerateVectorError('Cannot normalize zero vector')

    return work_vector / norm
