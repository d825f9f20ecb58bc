from typing import Any, Iterator, Self

import numpy as np

from spindle.rotations.core._helpers import _check_quaternion_array_and_shape, normalize_vector
from spindle.rotations.core.conversions import (axis_angle_to_quaternion, quaternion_to_axis_angle,
                                                euler_to_quaternion, quaternion_to_euler,
                                                rotvec_to_quaternion, quaternion_to_rotvec, vectors_to_quaternion)
from spindle.rotations.core.precision import Precision, get_precision, resolve_dtype
from spindle.rotations.core.quaternion_math import (quaternion_normalize, quaternion_conjugate, quaternion_inverse,
                                                    quaternion_dot, quaternion_multiplication, rotate_vector,
                                                    lerp, nlerp, slerp)

from spindle._typing import ARRAY_LIKE, FLOAT_ARRAY, FLOAT_DTYPE, SCALAR_OR_ARRAY


def _check_components(data: FLOAT_ARRAY):
    if data.shape != (4,):
        raise ValueError(f'A quaternion holds exactly 4 scalar components but got values of shape {data.shape}.  '
                         'Use the functions in spindle.rotations.core for stacked inputs')


class Quaternion:
    """
    An immutable quaternion value, the primary way rotations are expressed in spindle.

    A quaternion stores 4 components ``(x, y, z, w)`` where ``(x, y, z)`` is the vector (imaginary) part and ``w`` is
    the scalar (real) part.  Unit quaternions represent rotations, and ``q`` and ``-q`` represent the same rotation.
    Non-unit quaternions are allowed as intermediate algebraic values.

    Quaternions are values: every operation returns a new instance and the stored components can't be modified, so
    instances can be freely shared (including across threads), hashed, and used as dictionary keys.

    The class offers constructors for the common rotation descriptions::

        >>> from spindle.rotations import Quaternion
        >>> from numpy import pi
        >>> quarter_turn_z = Quaternion.from_axis_angle([0, 0, 1], pi/2)
        >>> quarter_turn_z.rotate_vector([1, 0, 0])
        array([2.22044605e-16, 1.00000000e+00, 0.00000000e+00])

    operator overloading for the algebra (``*`` between quaternions is the Hamilton product, ``*`` with a number is
    scalar multiplication, and ``+``, ``-`` and unary ``-`` work component wise)::

        >>> quarter_turn_y = Quaternion.from_axis_angle([0, 1, 0], pi/2)
        >>> combined = quarter_turn_y * quarter_turn_z  # first about z, then about y

    and conversions and interpolation between orientations (:meth:`to_axis_angle`, :meth:`to_euler_angles`,
    :meth:`lerp`, :meth:`nlerp`, :meth:`slerp`).

    Every quaternion has a precision, either ``np.float32`` or ``np.float64`` (the default), which sets the dtype of
    the components and the epsilon used by the degenerate input checks.  Combining quaternions of different
    precisions promotes to double precision.

    Two caller responsibilities are not checked, in order to keep the common path fast: :meth:`from_axis_angle`
    expects a unit axis and :meth:`rotate_vector` expects a unit quaternion.  Use :meth:`from_axis_angle_safe` and
    :meth:`rotate_vector_safe` when the inputs can't be trusted.
    """

    __slots__ = ('_data',)

    _data: FLOAT_ARRAY

    # numpy scalars and arrays defer to our reflected operators instead of treating us as an array
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 1.0,
                 dtype: FLOAT_DTYPE | None = None):
        """
        :param x: the first (i) component of the vector part
        :param y: the second (j) component of the vector part
        :param z: the third (k) component of the vector part
        :param w: the scalar part
        :param dtype: the precision of the quaternion.  If ``None`` it is determined from the components.
        """

        precision = get_precision(dtype if dtype is not None else resolve_dtype(x, y, z, w))

        data = np.array([x, y, z, w], dtype=precision.dtype)
        _check_components(data)
        data.flags.writeable = False

        object.__setattr__(self, '_data', data)

    @classmethod
    def _from_array(cls, data: FLOAT_ARRAY) -> Self:
        """
        Wrap a length 4 component array without passing the values through the constructor.
        """

        instance = object.__new__(cls)

        data = np.array(data, dtype=get_precision(data.dtype).dtype)

        _check_components(data)

        data.flags.writeable = False

        object.__setattr__(instance, '_data', data)

        return instance

    @staticmethod
    def _coerce(other: 'Quaternion | ARRAY_LIKE') -> 'Quaternion':
        if isinstance(other, Quaternion):
            return other

        return Quaternion.from_vector4(other)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __delattr__(self, name: str):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    # ------------------------------------------------------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------------------------------------------------------

    @classmethod
    def identity(cls, dtype: FLOAT_DTYPE | None = None) -> Self:
        """
        The quaternion ``(0, 0, 0, 1)`` representing no rotation.

        :param dtype: the precision of the quaternion (double precision by default)
        """

        return cls(0, 0, 0, 1, dtype=get_precision(dtype).dtype)

    @classmethod
    def zero(cls, dtype: FLOAT_DTYPE | None = None) -> Self:
        """
        The quaternion ``(0, 0, 0, 0)``.

        This is an algebraic sentinel only.  It does not represent a rotation and can't be normalized or inverted.

        :param dtype: the precision of the quaternion (double precision by default)
        """

        return cls(0, 0, 0, 0, dtype=get_precision(dtype).dtype)

    @classmethod
    def from_axis_angle(cls, axis: ARRAY_LIKE, angle: float, dtype: FLOAT_DTYPE | None = None) -> Self:
        """
        Create the rotation of `angle` radians about `axis`.

        The axis must already be of unit length.  It is not normalized here (see :meth:`from_axis_angle_safe`).

        :param axis: the unit rotation axis as a length 3 array like
        :param angle: the rotation angle in radians
        :param dtype: the precision of the quaternion.  If ``None`` it is determined from the inputs
        :return: the rotation quaternion
        """

        return cls._from_array(axis_angle_to_quaternion(axis, angle, dtype=dtype))

    @classmethod
    def from_axis_angle_safe(cls, axis: ARRAY_LIKE, angle: float, dtype: FLOAT_DTYPE | None = None) -> Self:
        """
        Create the rotation of `angle` radians about `axis`, normalizing the axis first.

        :param axis: the rotation axis as a length 3 array like of any non-zero length
        :param angle: the rotation angle in radians
        :param dtype: the precision of the quaternion.  If ``None`` it is determined from the inputs
        :return: the unit rotation quaternion
        :raises DegenerateVectorError: if the axis has zero length
        """

        if dtype is None:
            dtype = resolve_dtype(axis, angle)

        return cls.from_axis_angle(normalize_vector(axis, dtype), angle, dtype=dtype)

    @classmethod
    def from_euler_angles(cls, pitch: float, yaw: float, roll: float, dtype: FLOAT_DTYPE | None = None) -> Self:
        """
        Create a rotation from euler angles.

        Roll rotates about x, pitch about y and yaw about z, applied roll first and yaw last.  See
        :func:`.euler_to_quaternion`.

        :param pitch: the rotation about the y axis in radians
        :param yaw: the rotation about the z axis in radians
        :param roll: the rotation about the x axis in radians
        :param dtype: the precision of the quaternion.  If ``None`` it is determined from the inputs
        :return: the rotation quaternion
        """

        return cls._from_array(euler_to_quaternion(pitch, yaw, roll, dtype=dtype))

    @classmethod
    def from_to_rotation(cls, from_vector: ARRAY_LIKE, to_vector: ARRAY_LIKE,
                         dtype: FLOAT_DTYPE | None = None) -> Self:
        """
        Create the smallest rotation taking the direction of `from_vector` onto the direction of `to_vector`.

        Opposite vectors are handled by rotating half a turn about an axis perpendicular to `from_vector`.  See
        :func:`.vectors_to_quaternion`.

        :param from_vector: the starting direction
        :param to_vector: the target direction
        :param dtype: the precision of the quaternion.  If ``None`` it is determined from the inputs
        :return: the unit rotation quaternion
        :raises DegenerateVectorError: if either vector has zero length
        """

        return cls._from_array(vectors_to_quaternion(from_vector, to_vector, dtype=dtype))

    @classmethod
    def from_vector4(cls, vector: ARRAY_LIKE, dtype: FLOAT_DTYPE | None = None) -> Self:
        """
        Interpret a 4 element ``(x, y, z, w)`` array like as a quaternion.

        No normalization or other validation of the values is performed.

        :param vector: the 4 components, scalar last
        :param dtype: the precision of the quaternion.  If ``None`` it is determined from the input
        :return: the quaternion
        :raises ValueError: if the input isn't a flat 4 element sequence
        """

        data = _check_quaternion_array_and_shape(vector, dtype)

        if data.ndim != 1:
            raise ValueError('A quaternion must be built from a 1 dimensional sequence of 4 values')

        return cls._from_array(data)

    @classmethod
    def from_rotation_vector(cls, rotation_vector: ARRAY_LIKE, dtype: FLOAT_DTYPE | None = None) -> Self:
        """
        Create a rotation from a rotation vector (the rotation axis scaled by the rotation angle in radians).

        :param rotation_vector: the 3 element rotation vector
        :param dtype: the precision of the quaternion.  If ``None`` it is determined from the input
        :return: the rotation quaternion
        """

        return cls._from_array(rotvec_to_quaternion(rotation_vector, dtype=dtype))

    # ------------------------------------------------------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------------------------------------------------------

    @property
    def x(self) -> np.floating:
        """The first (i) component of the vector part"""
        return self._data[0]

    @property
    def y(self) -> np.floating:
        """The second (j) component of the vector part"""
        return self._data[1]

    @property
    def z(self) -> np.floating:
        """The third (k) component of the vector part"""
        return self._data[2]

    @property
    def w(self) -> np.floating:
        """The scalar part"""
        return self._data[3]

    @property
    def dtype(self) -> np.dtype:
        """The numpy dtype of the components"""
        return self._data.dtype

    @property
    def precision(self) -> Precision:
        """The precision constants (epsilon, pi, ...) this quaternion computes with"""
        return get_precision(self._data.dtype)

    def vector_part(self) -> FLOAT_ARRAY:
        """
        The vector part ``(x, y, z)`` as a new array.
        """

        return self._data[:3].copy()

    def scalar_part(self) -> np.floating:
        """
        The scalar part ``w``.
        """

        return self._data[3]

    def to_vector4(self) -> FLOAT_ARRAY:
        """
        The 4 components ``(x, y, z, w)`` as a new array.
        """

        return self._data.copy()

    def astype(self, dtype: FLOAT_DTYPE) -> 'Quaternion':
        """
        Convert to a different precision.

        :param dtype: ``np.float32`` or ``np.float64``
        :return: the converted quaternion
        """

        return Quaternion._from_array(self._data.astype(get_precision(dtype).dtype))

    # ------------------------------------------------------------------------------------------------------------------
    # algebra
    # ------------------------------------------------------------------------------------------------------------------

    def norm(self) -> np.floating:
        """
        The euclidean length over all 4 components.
        """

        return np.linalg.norm(self._data)

    def norm_squared(self) -> np.floating:
        """
        The squared euclidean length over all 4 components.
        """

        return (self._data * self._data).sum()

    def normalize(self) -> 'Quaternion':
        """
        Scale to unit length.

        :return: the unit quaternion
        :raises ZeroNormError: if the norm is numerically zero
        """

        return Quaternion._from_array(quaternion_normalize(self._data))

    def conjugate(self) -> 'Quaternion':
        """
        Negate the vector part.  For unit quaternions this is the inverse rotation.
        """

        return Quaternion._from_array(quaternion_conjugate(self._data))

    def inverse(self) -> 'Quaternion':
        """
        The multiplicative inverse, the conjugate divided by the squared norm.

        :return: the inverse quaternion
        :raises ZeroNormError: if the squared norm is numerically zero
        """

        return Quaternion._from_array(quaternion_inverse(self._data))

    def dot(self, other: 'Quaternion | ARRAY_LIKE') -> np.floating:
        """
        The 4 dimensional inner product with `other`.

        :param other: the other quaternion
        :return: the dot product
        """

        return quaternion_dot(self._data, Quaternion._coerce(other)._data)

    def hamilton_product(self, other: 'Quaternion | ARRAY_LIKE') -> 'Quaternion':
        """
        The Hamilton product ``self ⊗ other``.

        When both are rotations the result applies `other` first and then `self`.

        :param other: the right hand quaternion
        :return: the product
        """

        return Quaternion._from_array(quaternion_multiplication(self._data, Quaternion._coerce(other)._data))

    def mul_scalar(self, scalar: float) -> 'Quaternion':
        """
        Multiply every component by `scalar`.
        """

        return Quaternion._from_array(self._data * self.precision.cast(scalar))

    def add(self, other: 'Quaternion | ARRAY_LIKE') -> 'Quaternion':
        """
        Component wise sum.
        """

        other = Quaternion._coerce(other)

        dtype = resolve_dtype(self, other)

        return Quaternion._from_array(self._data.astype(dtype) + other._data.astype(dtype))

    def sub(self, other: 'Quaternion | ARRAY_LIKE') -> 'Quaternion':
        """
        Component wise difference.
        """

        other = Quaternion._coerce(other)

        dtype = resolve_dtype(self, other)

        return Quaternion._from_array(self._data.astype(dtype) - other._data.astype(dtype))

    def negate(self) -> 'Quaternion':
        """
        Negate every component.  The result is the same rotation as self.
        """

        return Quaternion._from_array(-self._data)

    def __mul__(self, other: Any) -> 'Quaternion':

        if isinstance(other, Quaternion):
            return self.hamilton_product(other)

        elif isinstance(other, (int, float, np.integer, np.floating)):
            return self.mul_scalar(other)

        else:
            return NotImplemented

    def __rmul__(self, other: Any) -> 'Quaternion':

        # only scalars can end up here, quaternion * quaternion is handled by __mul__
        if isinstance(other, (int, float, np.integer, np.floating)):
            return self.mul_scalar(other)

        return NotImplemented

    def __add__(self, other: Any) -> 'Quaternion':

        if isinstance(other, Quaternion):
            return self.add(other)

        return NotImplemented

    def __sub__(self, other: Any) -> 'Quaternion':

        if isinstance(other, Quaternion):
            return self.sub(other)

        return NotImplemented

    def __neg__(self) -> 'Quaternion':
        return self.negate()

    # ------------------------------------------------------------------------------------------------------------------
    # rotation
    # ------------------------------------------------------------------------------------------------------------------

    def rotate_vector(self, vector: ARRAY_LIKE) -> FLOAT_ARRAY:
        """
        Rotate `vector` by this quaternion, ``q ⊗ (v, 0) ⊗ q*``.

        The quaternion is assumed to be unit length and is not normalized (see :meth:`rotate_vector_safe`).

        :param vector: a length 3 array like (or a 3xn array of column vectors)
        :return: the rotated vector(s)
        """

        return rotate_vector(self._data, vector)

    def rotate_vector_safe(self, vector: ARRAY_LIKE) -> FLOAT_ARRAY:
        """
        Rotate `vector` by the normalized version of this quaternion.

        :param vector: a length 3 array like (or a 3xn array of column vectors)
        :return: the rotated vector(s)
        :raises ZeroNormError: if this quaternion can't be normalized
        """

        return rotate_vector(quaternion_normalize(self._data), vector)

    # ------------------------------------------------------------------------------------------------------------------
    # conversions
    # ------------------------------------------------------------------------------------------------------------------

    def to_axis_angle(self) -> tuple[FLOAT_ARRAY, np.floating]:
        """
        The unit rotation axis and the rotation angle in radians.

        Rotations that are (numerically) the identity return the axis ``(1, 0, 0)`` and an angle of 0.

        :return: the axis and angle
        :raises ZeroNormError: if this quaternion can't be normalized
        """

        return quaternion_to_axis_angle(self._data)

    def to_euler_angles(self) -> tuple[np.floating, np.floating, np.floating]:
        """
        The ``(pitch, yaw, roll)`` euler angles in radians, the inverse of :meth:`from_euler_angles`.

        Pitch is clamped to ±π/2 at gimbal lock.  This never raises: a quaternion which can't be normalized is used as
        is (with a ``RuntimeWarning``).
        """

        return quaternion_to_euler(self._data)

    def to_rotation_vector(self) -> FLOAT_ARRAY:
        """
        The rotation axis scaled by the rotation angle.

        :raises ZeroNormError: if this quaternion can't be normalized
        """

        return quaternion_to_rotvec(self._data)

    # ------------------------------------------------------------------------------------------------------------------
    # interpolation
    # ------------------------------------------------------------------------------------------------------------------

    def lerp(self, other: 'Quaternion | ARRAY_LIKE', t: float) -> 'Quaternion':
        """
        Linearly interpolate the components towards `other` and normalize the result.

        If the blend can't be normalized it is returned as is (with a ``RuntimeWarning``) rather than raising.

        :param other: the end orientation
        :param t: the interpolation fraction, 0 gives self and 1 gives other
        :return: the interpolated quaternion
        """

        other = Quaternion._coerce(other)

        return Quaternion._from_array(lerp(self._data, other._data, t, dtype=resolve_dtype(self, other)))

    def nlerp(self, other: 'Quaternion | ARRAY_LIKE', t: float) -> 'Quaternion':
        """
        Linearly interpolate the components towards `other` and normalize the result.

        :param other: the end orientation
        :param t: the interpolation fraction, 0 gives self and 1 gives other
        :return: the interpolated unit quaternion
        :raises ZeroNormError: if the blend can't be normalized
        """

        other = Quaternion._coerce(other)

        return Quaternion._from_array(nlerp(self._data, other._data, t, dtype=resolve_dtype(self, other)))

    def slerp(self, other: 'Quaternion | ARRAY_LIKE', t: float) -> 'Quaternion':
        """
        Spherically interpolate towards `other` along the shorter arc at a constant angular velocity.

        :param other: the end orientation
        :param t: the interpolation fraction, 0 gives self and 1 gives other (or -other, the same rotation)
        :return: the interpolated quaternion
        """

        other = Quaternion._coerce(other)

        return Quaternion._from_array(slerp(self._data, other._data, t, dtype=resolve_dtype(self, other)))

    # ------------------------------------------------------------------------------------------------------------------
    # predicates
    # ------------------------------------------------------------------------------------------------------------------

    def is_unit(self) -> bool:
        """
        Whether the norm is within epsilon of 1.
        """

        return bool(np.abs(self.norm() - 1) < self.precision.EPSILON)

    def is_zero(self) -> bool:
        """
        Whether every component is within epsilon of 0.
        """

        return bool((np.abs(self._data) < self.precision.EPSILON).all())

    def angle(self) -> np.floating:
        """
        The rotation angle in radians, ``2 acos(|w|)``, in ``[0, π]``.

        The absolute value of the scalar part is used so ``q`` and ``-q`` give the same angle.
        """

        return 2 * np.arccos(self.precision.clamp(np.abs(self.w), 0, 1))

    def isclose(self, other: 'Quaternion | ARRAY_LIKE', atol: float | None = None,
                same_rotation: bool = False) -> bool:
        """
        Tolerant comparison of the components.

        :param other: the quaternion to compare with
        :param atol: the absolute tolerance per component.  Defaults to the square root of epsilon of the lower of the
                     two precisions.
        :param same_rotation: when ``True`` also accept ``-other``, since it represents the same rotation
        :return: whether the two are close
        """

        other = Quaternion._coerce(other)

        if atol is None:
            atol = float(np.sqrt(max(self.precision.EPSILON, other.precision.EPSILON)))

        if np.allclose(self._data, other._data, rtol=0, atol=atol):
            return True

        return same_rotation and bool(np.allclose(self._data, -other._data, rtol=0, atol=atol))

    # ------------------------------------------------------------------------------------------------------------------
    # python protocol
    # ------------------------------------------------------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:

        if not isinstance(other, Quaternion):
            return NotImplemented

        return bool((self._data == other._data).all())

    def __hash__(self) -> int:
        return hash(tuple(self._data.tolist()))

    def __iter__(self) -> Iterator[np.floating]:
        return iter(self._data)

    def __len__(self) -> int:
        return 4

    def __getitem__(self, item: int) -> SCALAR_OR_ARRAY:
        return self._data[item]

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> FLOAT_ARRAY:

        if copy:
            return np.array(self._data, dtype=dtype)

        return np.asarray(self._data, dtype=dtype)

    def __reduce__(self):
        return self.__class__.from_vector4, (self._data.copy(),)

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict) -> Self:
        return self

    def __repr__(self) -> str:
        return 'Quaternion({0!r}, {1!r}, {2!r}, {3!r}, dtype={4})'.format(*self._data.tolist(), self._data.dtype)

    def __str__(self) -> str:
        return str(self._data)
