r"""
Array level quaternion algebra.

All quaternions here are numpy arrays of the form :math:`[q_x, q_y, q_z, q_s]` (vector part first, scalar part last).
The algebraic routines (norms, conjugate, inverse, dot, the Hamilton product and vector rotation) are vectorized: a
4xn array is treated as n quaternions stored as columns.  The interpolation routines work on single quaternions.

The precision of every routine is determined from its inputs (see :func:`.resolve_dtype`) unless it is given
explicitly, and outputs always have that precision.
"""

import warnings

import numpy as np

from spindle._typing import ARRAY_LIKE, FLOAT_ARRAY, FLOAT_DTYPE, DatetimeLike

from spindle.rotations.core._helpers import _check_quaternion_array_and_shape, _check_vector_array_and_shape
from spindle.rotations.core.errors import ZeroNormError
from spindle.rotations.core.precision import get_precision, resolve_dtype

__all__ = ["SLERP_LINEAR_THRESHOLD",
           "quaternion_norm", "quaternion_norm_squared", "quaternion_normalize", "quaternion_conjugate",
           "quaternion_inverse", "quaternion_dot", "quaternion_multiplication", "rotate_vector",
           "interpolation_fraction",
           "lerp", "nlerp", "slerp"]


SLERP_LINEAR_THRESHOLD: float = 0.9995
"""
The cosine of the angle between two quaternions above which :func:`slerp` falls back to :func:`lerp`.
"""


def quaternion_norm(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    """
    The euclidean length of the quaternion(s) over all 4 components.

    :param quaternion: the quaternion(s) to get the norm of
    :return: the norm(s)
    """

    return np.linalg.norm(_check_quaternion_array_and_shape(quaternion), axis=0)


def quaternion_norm_squared(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    """
    The squared euclidean length of the quaternion(s).

    :param quaternion: the quaternion(s) to get the squared norm of
    :return: the squared norm(s)
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion)

    return (work_quaternion * work_quaternion).sum(axis=0)


def quaternion_normalize(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    """
    Scales the quaternion(s) to unit length.

    Unlike a sign normalization, the sign of the scalar component is left alone so that the result is simply
    ``q / ‖q‖``.

    :param quaternion: the quaternion(s) to normalize
    :return: The normalized quaternion(s)
    :raises ZeroNormError: if any of the quaternions has a numerically zero norm
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion)

    precision = get_precision(work_quaternion.dtype)

    norm = np.linalg.norm(work_quaternion, axis=0, keepdims=True)

    if (norm <= precision.EPSILON).any():
        raise ZeroNormError('Cannot normalize zero quaternion')

    return work_quaternion / norm


def quaternion_conjugate(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    Negates the vector portion of the quaternion(s).

    .. math::
        \mathbf{q}^*=\left[\begin{array}{c}-\mathbf{q}_v\\ q_s\end{array}\right]

    :param quaternion: the quaternion(s) to conjugate
    :return: the conjugate quaternion(s)
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion)

    # negate the vector portion
    work_quaternion[:3] *= -1

    return work_quaternion


def quaternion_inverse(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    This function provides the multiplicative inverse of the quaternion(s).

    The inverse is defined such that :math:`\mathbf{q}\otimes\mathbf{q}^{-1}=\mathbf{q}_I` where
    :math:`\mathbf{q}_I=\left[\begin{array}{cccc}0&0&0&1\end{array}\right]^T` is the identity quaternion.  It is given
    by

    .. math::
        \mathbf{q}^{-1} = \frac{\mathbf{q}^*}{\left\|\mathbf{q}\right\|^2}

    which reduces to the conjugate for unit (rotation) quaternions.  Non-unit quaternions are supported.

    :param quaternion: The quaternion(s) to be inverted
    :return: the inverse quaternion(s)
    :raises ZeroNormError: if any of the quaternions has a numerically zero squared norm
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion)

    precision = get_precision(work_quaternion.dtype)

    norm_squared = (work_quaternion * work_quaternion).sum(axis=0)

    if (norm_squared <= precision.EPSILON).any():
        raise ZeroNormError('Cannot invert zero quaternion')

    return quaternion_conjugate(work_quaternion) / norm_squared


def quaternion_dot(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> FLOAT_ARRAY:
    """
    The 4 dimensional inner product of two quaternions (or pairs of columns).

    For unit quaternions this is the cosine of half the angle between the two orientations (up to sign).

    :param quaternion_1: the first quaternion(s)
    :param quaternion_2: the second quaternion(s)
    :return: the dot product(s)
    """

    dtype = resolve_dtype(quaternion_1, quaternion_2)

    q1 = _check_quaternion_array_and_shape(quaternion_1, dtype)
    q2 = _check_quaternion_array_and_shape(quaternion_2, dtype)

    return (q1 * q2).sum(axis=0)


def quaternion_multiplication(quaternion_1_in: ARRAY_LIKE,
                              quaternion_2_in: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    This function performs the Hamilton product of two quaternions.

    The product is formed from the full 16 term expansion so that it remains exact for non-unit intermediate
    quaternions:

    .. math::
        \mathbf{q}_1\otimes\mathbf{q}_2=\left[\begin{array}{c}
        w_1x_2 + x_1w_2 + y_1z_2 - z_1y_2 \\
        w_1y_2 - x_1z_2 + y_1w_2 + z_1x_2 \\
        w_1z_2 + x_1y_2 - y_1x_2 + z_1w_2 \\
        w_1w_2 - x_1x_2 - y_1y_2 - z_1z_2\end{array}\right]

    With this convention the basis elements satisfy :math:`ij=k`, :math:`jk=i`, :math:`ki=j`, and composing
    rotations reads right to left, `q_from_A_to_C = quaternion_multiplication(q_from_B_to_C, q_from_A_to_B)`.

    This function is vectorized, therefore you can input multiple quaternions as a 4xn array where each column is an
    independent quaternion.

    :param quaternion_1_in: The first quaternion to multiply
    :param quaternion_2_in: The second quaternion to multiply
    :return: The Hamilton product of quaternion_1 and quaternion_2
    """

    dtype = resolve_dtype(quaternion_1_in, quaternion_2_in)

    x1, y1, z1, w1 = _check_quaternion_array_and_shape(quaternion_1_in, dtype)
    x2, y2, z2, w2 = _check_quaternion_array_and_shape(quaternion_2_in, dtype)

    components = np.broadcast_arrays(w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
                                     w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
                                     w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
                                     w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2)

    return np.stack(components, axis=0)


def rotate_vector(quaternion: ARRAY_LIKE, vector: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    Rotates vector(s) by the quaternion(s) using the sandwich product.

    .. math::
        \left[\begin{array}{c}\mathbf{v}'\\ 0\end{array}\right] = \mathbf{q}\otimes
        \left[\begin{array}{c}\mathbf{v}\\ 0\end{array}\right]\otimes\mathbf{q}^*

    The quaternion is not normalized first.  It must be a unit quaternion for the result to be a rotation.

    Either argument may hold multiple entries as columns (4xn quaternions or 3xn vectors) in which case the usual
    numpy broadcasting rules apply.

    :param quaternion: the rotation quaternion(s)
    :param vector: the vector(s) to rotate
    :return: the rotated vector(s)
    """

    dtype = resolve_dtype(quaternion, vector)

    work_quaternion = _check_quaternion_array_and_shape(quaternion, dtype)
    work_vector = _check_vector_array_and_shape(vector, dtype)

    # form the pure quaternion (v, 0)
    pure = np.concatenate([work_vector, np.zeros((1,) + work_vector.shape[1:], dtype=dtype)], axis=0)

    rotated = quaternion_multiplication(quaternion_multiplication(work_quaternion, pure),
                                        quaternion_conjugate(work_quaternion))

    return rotated[:3]


def interpolation_fraction(time: float | DatetimeLike,
                            time0: float | DatetimeLike,
                            time1: float | DatetimeLike) -> float:
    """
    Compute the fractional percent of the way from `time0` to `time1` that `time` sits at.

    :raises TypeError: if the times can't be subtracted and divided
    :raises ValueError: if `time0` and `time1` are the same time
    """

    try:
        span = time1 - time0  # type: ignore
        offset = time - time0  # type: ignore
    except TypeError:
        raise TypeError('time, time0, and time1 must support subtraction resulting in a type that supports true '
                        'division.  Typically this means they should all be floats or all be DatetimeLike objects')

    # zero length floats and timedeltas are both falsy
    if not span:
        raise ValueError(f'time0 and time1 must be different times to interpolate between them, got {time0!r} twice')

    try:
        return float(offset / span)
    except TypeError:
        raise TypeError('time, time0, and time1 must support subtraction resulting in a type that supports true '
                        'division.  Typically this means they should all be floats or all be DatetimeLike objects')


def _check_interpolation_inputs(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
                                dtype: FLOAT_DTYPE | None) -> tuple[FLOAT_ARRAY, FLOAT_ARRAY]:
    """
    Coerce the two end points of an interpolation to single quaternions of a common precision.
    """

    if dtype is None:
        dtype = resolve_dtype(quaternion0, quaternion1)

    q0 = _check_quaternion_array_and_shape(quaternion0, dtype)
    q1 = _check_quaternion_array_and_shape(quaternion1, dtype)

    if q0.ndim != 1 or q1.ndim != 1:
        raise ValueError('The interpolation routines work on single quaternions (1 dimensional arrays of length 4)')

    return q0, q1


def lerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
         time: float | DatetimeLike,
         time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
         dtype: FLOAT_DTYPE | None = None) -> FLOAT_ARRAY:
    r"""
    This function performs linear interpolation of quaternions followed by a lenient normalization.

    .. math::
        \mathbf{q}=\mathbf{q}_0(1-p)+\mathbf{q}_1p

    where :math:`p` is the fractional percent of the way between :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1`.  The
    result is then scaled to unit length.  If the blend has a zero norm (which cannot happen for unit end points
    unless they are opposite and ``p=0.5``) a ``RuntimeWarning`` is issued and the unnormalized blend is returned
    instead of raising.  Use :func:`nlerp` if you need the failure reported.

    As with :func:`nlerp` and :func:`slerp` you can either specify `time` as the fractional percent directly, or as
    an actual time between `time0` and `time1` (floats or datetimes).

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                 `time0` and `time1`
    :param time0: the time corresponding to the first quaternion
    :param time1: the time corresponding to the second quaternion
    :param dtype: the precision to work in.  If ``None`` it is determined from the inputs
    :return: The interpolated quaternion
    """

    dt = interpolation_fraction(time, time0, time1)

    q0, q1 = _check_interpolation_inputs(quaternion0, quaternion1, dtype)

    fraction = get_precision(q0.dtype).cast(dt)

    q = q0 * (1 - fraction) + q1 * fraction

    try:
        return quaternion_normalize(q)
    except ZeroNormError:
        warnings.warn('The linearly interpolated quaternion has zero norm.  Returning it unnormalized.',
                      RuntimeWarning)
        return q


def nlerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
          dtype: FLOAT_DTYPE | None = None) -> FLOAT_ARRAY:
    r"""
    This function performs normalized linear interpolation of quaternions.

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-p)+\mathbf{q}_1p}
        {\left\|\mathbf{q}_0(1-p)+\mathbf{q}_1p\right\|}

    This is the same computation as :func:`lerp` except that a zero norm blend is reported by raising
    :class:`.ZeroNormError` rather than silently returned.

    .. warning::
        NLERP is a very fast and efficient interpolation method that is fine for short interpolation intervals; however,
        it does not perform a constant angular velocity interpolation, therefore it is not well suited to interpolating
        between orientations that are far apart.  Use :func:`slerp` for those cases.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                 `time0` and `time1`
    :param time0: the time corresponding to the first quaternion
    :param time1: the time corresponding to the second quaternion
    :param dtype: the precision to work in.  If ``None`` it is determined from the inputs
    :return: The interpolated unit quaternion
    :raises ZeroNormError: if the linear blend has zero norm
    """

    dt = interpolation_fraction(time, time0, time1)

    q0, q1 = _check_interpolation_inputs(quaternion0, quaternion1, dtype)

    fraction = get_precision(q0.dtype).cast(dt)

    return quaternion_normalize(q0 * (1 - fraction) + q1 * fraction)


def slerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
          dtype: FLOAT_DTYPE | None = None,
          linear_threshold: float = SLERP_LINEAR_THRESHOLD) -> FLOAT_ARRAY:
    r"""
    This function performs spherical linear interpolation of quaternions.

    SLERP moves along the great circle arc connecting the two quaternions at a constant angular velocity:

    .. math::
        \theta = \text{cos}^{-1}(\mathbf{q}_0^T\mathbf{q}_1)\\
        \mathbf{q}=\mathbf{q}_0\frac{\text{sin}((1-p)\theta)}{\text{sin}(\theta)}+
        \mathbf{q}_1\frac{\text{sin}(p\theta)}{\text{sin}(\theta)}

    A few guards keep this numerically well behaved:

    * if the dot product is negative the second quaternion is negated so that the shorter arc is taken (:math:`q` and
      :math:`-q` are the same rotation),
    * if the dot product is above `linear_threshold` the quaternions are nearly parallel and :func:`lerp` is used
      instead to avoid dividing by a vanishing :math:`\text{sin}(\theta)`,
    * if :math:`\text{sin}(\theta)` is still within epsilon of zero the starting quaternion is returned.

    The inputs are not normalized.  They should be unit quaternions.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                 `time0` and `time1`
    :param time0: the time corresponding to the first quaternion
    :param time1: the time corresponding to the second quaternion
    :param dtype: the precision to work in.  If ``None`` it is determined from the inputs
    :param linear_threshold: the dot product above which linear interpolation is used
    :return: The interpolated quaternion
    """

    dt = interpolation_fraction(time, time0, time1)

    q0, q1 = _check_interpolation_inputs(quaternion0, quaternion1, dtype)

    precision = get_precision(q0.dtype)

    fraction = precision.cast(dt)

    # get the cosine of the angle between the quaternions
    cos_angle = (q0 * q1).sum()

    if cos_angle < 0:
        # negate the second quaternion to ensure the shorter path is taken
        q1 = -q1
        cos_angle = -cos_angle

    if cos_angle > linear_threshold:
        # the quaternions are really close so revert to lerp
        return lerp(q0, q1, dt, dtype=q0.dtype)

    angle = np.arccos(precision.clamp(cos_angle, -1, 1))

    sin_angle = np.sin(angle)

    if np.abs(sin_angle) < precision.EPSILON:
        return q0

    scale0 = np.sin((1 - fraction) * angle) / sin_angle
    scale1 = np.sin(fraction * angle) / sin_angle

    return q0 * scale0 + q1 * scale1
