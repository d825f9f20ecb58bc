# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Core conversion routines for rotation representations

This module contains core routines for converting between quaternions and the axis-angle, euler angle, rotation vector
and two vector (from-to) descriptions of a rotation.  All routines are implemented purely on numpy arrays (or array like
objects) and follow the precision of their inputs.
"""

import warnings

import numpy as np

from spindle._typing import ARRAY_LIKE, FLOAT_ARRAY, FLOAT_DTYPE, SCALAR_OR_ARRAY

from spindle.rotations.core._helpers import (_check_quaternion_array_and_shape, _check_vector_array_and_shape,
                                             normalize_vector)
from spindle.rotations.core.errors import ZeroNormError
from spindle.rotations.core.precision import get_precision, resolve_dtype
from spindle.rotations.core.quaternion_math import quaternion_normalize


__all__ = ['ANTIPARALLEL_AXIS_SWITCH',
           'axis_angle_to_quaternion', 'quaternion_to_axis_angle',
           'euler_to_quaternion', 'quaternion_to_euler',
           'rotvec_to_quaternion', 'quaternion_to_rotvec',
           'vectors_to_quaternion']


ANTIPARALLEL_AXIS_SWITCH: float = 0.9
"""
When building the rotation between two opposite vectors, the world x axis is used to construct the perpendicular
rotation axis unless the magnitude of the x component of the starting direction reaches this value, in which case the
world y axis is used.
"""


def axis_angle_to_quaternion(axis: ARRAY_LIKE, angle: SCALAR_OR_ARRAY,
                             dtype: FLOAT_DTYPE | None = None) -> FLOAT_ARRAY:
    r"""
    This function converts a rotation axis and angle into a rotation quaternion.

    .. math::
        \mathbf{q} = \left[\begin{array}{c} \text{sin}(\frac{\theta}{2})\hat{\mathbf{x}} \\
        \text{cos}(\frac{\theta}{2})\end{array}\right]

    The axis is expected to already be of unit length and is **not** normalized here.  Passing a non-unit axis
    produces a non-unit quaternion.  Normalize the axis first (see :func:`.normalize_vector`) when that can't be
    guaranteed.

    This function is vectorized: the axis may be a 3xn array with one angle per column.

    :param axis: the unit rotation axis(es)
    :param angle: the rotation angle(s) in radians
    :param dtype: the precision to work in.  If ``None`` it is determined from the inputs
    :return: the rotation quaternion(s)
    """

    if dtype is None:
        dtype = resolve_dtype(axis, angle)

    work_axis = _check_vector_array_and_shape(axis, dtype)

    half_angle = get_precision(dtype).cast(angle) / 2

    scalar = np.cos(half_angle)

    return np.concatenate([work_axis * np.sin(half_angle), np.reshape(scalar, (1,) + np.shape(scalar))], axis=0)


def quaternion_to_axis_angle(quaternion: ARRAY_LIKE) -> tuple[FLOAT_ARRAY, np.floating]:
    r"""
    This function converts a quaternion into its rotation axis and angle.

    The quaternion is normalized first.  Then

    .. math::
        \theta = 2\text{cos}^{-1}(q_s) \\
        \hat{\mathbf{x}} = \frac{\mathbf{q}_v}{\sqrt{1-q_s^2}}

    where the scalar component is clamped to :math:`[-1, 1]` before the arc cosine so that round off can't produce
    NaN.  When :math:`\sqrt{1-q_s^2}` is below epsilon there is no meaningful axis (the rotation is nearly the
    identity) and the canonical result ``([1, 0, 0], 0)`` is returned.

    :param quaternion: the quaternion to convert
    :return: the unit rotation axis and the rotation angle in radians
    :raises ZeroNormError: if the quaternion has a zero norm
    """

    normalized = quaternion_normalize(quaternion)

    if normalized.ndim != 1:
        raise ValueError('Only a single quaternion can be converted to axis-angle form at a time')

    precision = get_precision(normalized.dtype)

    scalar = precision.clamp(normalized[-1], -1, 1)

    angle = 2 * np.arccos(scalar)

    sin_half_angle = np.sqrt(1 - scalar * scalar)

    if sin_half_angle < precision.EPSILON:
        # the rotation angle is essentially zero, so any axis will do
        return np.array([1, 0, 0], dtype=precision.dtype), precision.ZERO

    return normalized[:3] / sin_half_angle, angle


def euler_to_quaternion(pitch: SCALAR_OR_ARRAY, yaw: SCALAR_OR_ARRAY, roll: SCALAR_OR_ARRAY,
                        dtype: FLOAT_DTYPE | None = None) -> FLOAT_ARRAY:
    r"""
    This function converts euler angles into a rotation quaternion.

    Roll is the rotation about the x axis, pitch about the y axis and yaw about the z axis, combined as
    :math:`\mathbf{q}=\mathbf{q}_z(\text{yaw})\otimes\mathbf{q}_y(\text{pitch})\otimes\mathbf{q}_x(\text{roll})`.
    Rather than performing the 2 quaternion multiplications the closed form half angle expression is used:

    .. math::
        \mathbf{q}=\left[\begin{array}{c}
        s_rc_pc_y - c_rs_ps_y \\
        c_rs_pc_y + s_rc_ps_y \\
        c_rc_ps_y - s_rs_pc_y \\
        c_rc_pc_y + s_rs_ps_y\end{array}\right]

    where :math:`s_*` and :math:`c_*` are the sine and cosine of half of the pitch, yaw or roll angle.

    This function is vectorized.  If arrays of angles are given the quaternions are returned as columns.

    :param pitch: the rotation about the y axis in radians
    :param yaw: the rotation about the z axis in radians
    :param roll: the rotation about the x axis in radians
    :param dtype: the precision to work in.  If ``None`` it is determined from the inputs
    :return: the rotation quaternion(s)
    """

    precision = get_precision(dtype if dtype is not None else resolve_dtype(pitch, yaw, roll))

    half_pitch = precision.cast(pitch) / 2
    half_yaw = precision.cast(yaw) / 2
    half_roll = precision.cast(roll) / 2

    cp, sp = np.cos(half_pitch), np.sin(half_pitch)
    cy, sy = np.cos(half_yaw), np.sin(half_yaw)
    cr, sr = np.cos(half_roll), np.sin(half_roll)

    components = np.broadcast_arrays(sr * cp * cy - cr * sp * sy,
                                     cr * sp * cy + sr * cp * sy,
                                     cr * cp * sy - sr * sp * cy,
                                     cr * cp * cy + sr * sp * sy)

    return np.stack(components, axis=0)


def quaternion_to_euler(quaternion: ARRAY_LIKE) -> tuple[SCALAR_OR_ARRAY, SCALAR_OR_ARRAY, SCALAR_OR_ARRAY]:
    r"""
    This function converts a quaternion to the (pitch, yaw, roll) euler angles used by :func:`euler_to_quaternion`.

    .. math::
        \text{roll} = \text{atan2}(2(q_sq_x+q_yq_z), 1-2(q_x^2+q_y^2)) \\
        \text{pitch} = \text{sin}^{-1}(2(q_sq_y-q_zq_x)) \\
        \text{yaw} = \text{atan2}(2(q_sq_z+q_xq_y), 1-2(q_y^2+q_z^2))

    When the argument of the arc sine reaches a magnitude of 1 (gimbal lock) pitch is clamped to :math:`\pm\pi/2`
    instead of returning NaN.

    The quaternion is normalized first.  This conversion never raises for a zero quaternion: it issues a
    ``RuntimeWarning`` and works with the unnormalized values instead.

    This function is vectorized so multiple quaternions can be converted simultaneously by specifying them as columns.

    :param quaternion: The quaternion(s) to be converted to euler angles
    :return: The pitch, yaw and roll angles in radians
    """

    try:
        work_quaternion = quaternion_normalize(quaternion)
    except ZeroNormError:
        warnings.warn('Unable to normalize the quaternion before converting to euler angles.  Using it as is.',
                      RuntimeWarning)
        work_quaternion = _check_quaternion_array_and_shape(quaternion)

    precision = get_precision(work_quaternion.dtype)

    x, y, z, w = work_quaternion

    roll = np.arctan2(2 * (w * x + y * z), 1 - 2 * (x * x + y * y))

    sin_pitch = 2 * (w * y - z * x)
    pitch = np.where(np.abs(sin_pitch) >= 1,
                     np.copysign(precision.PI / 2, sin_pitch),
                     np.arcsin(precision.clamp(sin_pitch, -1, 1)))[()]

    yaw = np.arctan2(2 * (w * z + x * y), 1 - 2 * (y * y + z * z))

    return pitch, yaw, roll


def rotvec_to_quaternion(rot_vec: ARRAY_LIKE, dtype: FLOAT_DTYPE | None = None) -> FLOAT_ARRAY:
    r"""
    This function converts a rotation vector :math:`\mathbf{v}=\theta\hat{\mathbf{x}}` into a rotation quaternion.

    .. math::
        \theta = \left\|\mathbf{v}\right\| \\
        \mathbf{q} = \left[\begin{array}{c} \text{sin}(\frac{\theta}{2})\frac{\mathbf{v}}{\theta} \\
        \text{cos}(\frac{\theta}{2})\end{array}\right]

    If :math:`\theta` is below epsilon the identity quaternion is returned.

    :param rot_vec: The rotation vector to convert to a rotation quaternion
    :param dtype: the precision to work in.  If ``None`` it is determined from the input
    :return: the rotation quaternion corresponding to the input rotation vector
    """

    work_vector = _check_vector_array_and_shape(rot_vec, dtype)

    if work_vector.ndim != 1:
        raise ValueError('Only a single rotation vector can be converted at a time')

    precision = get_precision(work_vector.dtype)

    theta = np.linalg.norm(work_vector)

    if theta < precision.EPSILON:
        return np.array([0, 0, 0, 1], dtype=precision.dtype)

    return axis_angle_to_quaternion(work_vector / theta, theta, dtype=precision.dtype)


def quaternion_to_rotvec(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    """
    This function converts a quaternion into a rotation vector (the unit axis scaled by the rotation angle).

    The identity quaternion gives the zero vector.  See :func:`quaternion_to_axis_angle` for details.

    :param quaternion: the rotation quaternion to be converted to the rotation vector
    :return: The rotation vector corresponding to the input rotation quaternion
    :raises ZeroNormError: if the quaternion has a zero norm
    """

    axis, angle = quaternion_to_axis_angle(quaternion)

    return axis * angle


def vectors_to_quaternion(from_vector: ARRAY_LIKE, to_vector: ARRAY_LIKE,
                          dtype: FLOAT_DTYPE | None = None) -> FLOAT_ARRAY:
    r"""
    This function computes the minimal rotation quaternion that rotates the direction of `from_vector` onto the
    direction of `to_vector`.

    Both vectors are normalized first.  Then, with :math:`d` the dot product of the two unit vectors,

    * if :math:`d \geq 1-\epsilon` the vectors already point the same way and the identity quaternion is returned,
    * if :math:`d \leq -1+\epsilon` the vectors are opposite.  Their cross product vanishes so any axis perpendicular
      to `from_vector` works.  It is built by crossing the world x axis with `from_vector` (or the world y axis when
      `from_vector` is within :data:`ANTIPARALLEL_AXIS_SWITCH` of the x axis) and the rotation is by :math:`\pi`,
    * otherwise the quaternion :math:`[\mathbf{f}\times\mathbf{t}, 1+d]` is formed and normalized.

    :param from_vector: the starting direction
    :param to_vector: the direction to rotate onto
    :param dtype: the precision to work in.  If ``None`` it is determined from the inputs
    :return: the unit rotation quaternion
    :raises DegenerateVectorError: if either vector has zero length
    """

    precision = get_precision(dtype if dtype is not None else resolve_dtype(from_vector, to_vector))

    from_unit = normalize_vector(from_vector, precision.dtype)
    to_unit = normalize_vector(to_vector, precision.dtype)

    cos_angle = from_unit @ to_unit

    if cos_angle >= 1 - precision.EPSILON:
        return np.array([0, 0, 0, 1], dtype=precision.dtype)

    if cos_angle <= -1 + precision.EPSILON:
        if np.abs(from_unit[0]) < ANTIPARALLEL_AXIS_SWITCH:
            reference = np.array([1, 0, 0], dtype=precision.dtype)
        else:
            reference = np.array([0, 1, 0], dtype=precision.dtype)

        axis = normalize_vector(np.cross(reference, from_unit), precision.dtype)

        return axis_angle_to_quaternion(axis, precision.PI, dtype=precision.dtype)

    return quaternion_normalize(np.concatenate([np.cross(from_unit, to_unit), [1 + cos_angle]]))
