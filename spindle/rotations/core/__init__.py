"""
This module contains fundamental mathematical operations and utilities for rotation
calculations. It has no dependencies on the higher level rotation modules to avoid circular imports.
All functions here are pure numpy operations that can be used as building blocks
for the :class:`.Quaternion` type and for vectorized work on many rotations at once.
"""

import spindle.rotations.core.conversions
import spindle.rotations.core.errors
import spindle.rotations.core.precision
import spindle.rotations.core.quaternion_math

from spindle.rotations.core._helpers import normalize_vector

from spindle.rotations.core.conversions import (ANTIPARALLEL_AXIS_SWITCH,
                                                axis_angle_to_quaternion, quaternion_to_axis_angle,
                                                euler_to_quaternion, quaternion_to_euler,
                                                rotvec_to_quaternion, quaternion_to_rotvec,
                                                vectors_to_quaternion)

from spindle.rotations.core.errors import RotationError, ZeroNormError, DegenerateVectorError

from spindle.rotations.core.precision import Precision, FLOAT32, FLOAT64, get_precision, resolve_dtype

from spindle.rotations.core.quaternion_math import (SLERP_LINEAR_THRESHOLD,
                                                    quaternion_norm, quaternion_norm_squared, quaternion_normalize,
                                                    quaternion_conjugate, quaternion_inverse, quaternion_dot,
                                                    quaternion_multiplication, rotate_vector,
                                                    interpolation_fraction, lerp, nlerp, slerp)

__all__ = ['ANTIPARALLEL_AXIS_SWITCH', 'SLERP_LINEAR_THRESHOLD',
           'axis_angle_to_quaternion', 'quaternion_to_axis_angle', 'euler_to_quaternion', 'quaternion_to_euler',
           'rotvec_to_quaternion', 'quaternion_to_rotvec', 'vectors_to_quaternion',
           'RotationError', 'ZeroNormError', 'DegenerateVectorError',
           'Precision', 'FLOAT32', 'FLOAT64', 'get_precision', 'resolve_dtype',
           'normalize_vector',
           'quaternion_norm', 'quaternion_norm_squared', 'quaternion_normalize', 'quaternion_conjugate',
           'quaternion_inverse', 'quaternion_dot', 'quaternion_multiplication', 'rotate_vector',
           'interpolation_fraction', 'lerp', 'nlerp', 'slerp']
