# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
Welcome to spindle

spindle provides the rotation algebra of a larger geometry toolkit: a unit quaternion type generic over single and
double precision, and the routines to build, compose, apply, convert and interpolate rotations with it.  See
:mod:`spindle.rotations`.
"""

from spindle.rotations import Quaternion, RotationError, ZeroNormError, DegenerateVectorError

__version__ = "0.1.0"

__all__ = ['Quaternion', 'RotationError', 'ZeroNormError', 'DegenerateVectorError']
