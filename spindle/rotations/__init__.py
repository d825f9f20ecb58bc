import spindle.rotations.core
import spindle.rotations.interpolation
import spindle.rotations.quaternion

from spindle.rotations.core import *
from spindle.rotations.interpolation import InterpolatorOptions, QuaternionInterpolator
from spindle.rotations.quaternion import Quaternion

__all__ = ['ANTIPARALLEL_AXIS_SWITCH', 'SLERP_LINEAR_THRESHOLD',
           'axis_angle_to_quaternion', 'quaternion_to_axis_angle', 'euler_to_quaternion', 'quaternion_to_euler',
           'rotvec_to_quaternion', 'quaternion_to_rotvec', 'vectors_to_quaternion',
           'RotationError', 'ZeroNormError', 'DegenerateVectorError',
           'Precision', 'FLOAT32', 'FLOAT64', 'get_precision', 'resolve_dtype',
           'normalize_vector',
           'quaternion_norm', 'quaternion_norm_squared', 'quaternion_normalize', 'quaternion_conjugate',
           'quaternion_inverse', 'quaternion_dot', 'quaternion_multiplication', 'rotate_vector',
           'interpolation_fraction', 'lerp', 'nlerp', 'slerp',
           'InterpolatorOptions', 'QuaternionInterpolator', 'Quaternion']


r"""
This package defines a unit quaternion value type and the routines for building, combining, applying, converting and
interpolating rotations with it.

There are a few different rotation representations that are used in this package and their format is described as
follows:

.. _rotation-representation-table:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
quaternion         A 4 element rotation quaternion of the form
                   :math:`\mathbf{q}=\left[\begin{array}{c} q_x \\ q_y \\ q_z \\ q_s\end{array}\right]=
                   \left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\\
                   \text{cos}(\frac{\theta}{2})\end{array}\right]`
                   where :math:`\hat{\mathbf{x}}` is a 3 element unit vector representing the axis of rotation and
                   :math:`\theta` is the total angle to rotate about that vector.  Note that quaternions are not unique
                   in that the rotation represented by :math:`\mathbf{q}` is the same rotation represented by
                   :math:`-\mathbf{q}`.
axis-angle         A 3 element unit vector :math:`\hat{\mathbf{x}}` and the angle :math:`\theta` in radians to rotate
                   about it (right handed).
rotation vector    A 3 element rotation vector of the form :math:`\mathbf{v}=\theta\hat{\mathbf{x}}`.
euler angles       The three angles (pitch, yaw, roll) about the y, z, and x axes respectively.  Roll is applied first,
                   then pitch, then yaw: :math:`\mathbf{q}=\mathbf{q}_z(\text{yaw})\otimes
                   \mathbf{q}_y(\text{pitch})\otimes\mathbf{q}_x(\text{roll})`.
=================  =====================================================================================================

The :class:`.Quaternion` class is the primary tool that will be used by users.  It is an immutable value offering
constructors for each representation above (plus the rotation between two vectors), operator overloading for the
quaternion algebra (``*`` between quaternions is the Hamilton product), vector rotation, conversions back to the other
representations, and lerp/nlerp/slerp interpolation.

Everything works in single or double precision.  The epsilon used to detect degenerate input comes from the
:class:`.Precision` for the dtype in use.

Invalid geometric input (normalizing or inverting a zero quaternion, or using a zero vector as a direction) raises a
subclass of :class:`.RotationError`.  Two operations, :meth:`.Quaternion.lerp` and
:meth:`.Quaternion.to_euler_angles`, are lenient and issue a ``RuntimeWarning`` instead.

In addition, the array level versions of the routines are available for working directly with numpy arrays.  Many of
these are vectorized over 4xn arrays of quaternions.
"""
