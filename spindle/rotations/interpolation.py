"""
This module provides a configurable front end to the quaternion interpolation primitives.

The :class:`QuaternionInterpolator` holds a start and an end orientation, and the times they correspond to, and
evaluates the selected primitive (:func:`.lerp`, :func:`.nlerp` or :func:`.slerp`) at any requested time.  Each
evaluation is independent and stateless so the same interpolator can be evaluated every frame (or from multiple
threads) without coordination.

Example::

    >>> from datetime import datetime
    >>> from spindle.rotations import Quaternion, QuaternionInterpolator, InterpolatorOptions
    >>> options = InterpolatorOptions(method='slerp', time0=datetime(2024, 1, 1, 0), time1=datetime(2024, 1, 1, 1))
    >>> start = Quaternion.identity()
    >>> end = Quaternion.from_axis_angle([0, 0, 1], 1.0)
    >>> interpolator = QuaternionInterpolator(start, end, options=options)
    >>> halfway = interpolator(datetime(2024, 1, 1, 0, 30))  # a rotation of 0.5 radians about z
"""

from dataclasses import dataclass

from typing import Sequence, get_args

import numpy as np

from spindle.rotations.core.quaternion_math import SLERP_LINEAR_THRESHOLD, interpolation_fraction, slerp
from spindle.rotations.quaternion import Quaternion

from spindle.utilities.options import UserOptions
from spindle.utilities.mixin_classes import AttributeEqualityComparison, AttributePrinting, UserOptionConfigured

from spindle._typing import ARRAY_LIKE, DatetimeLike, INTERPOLATION_METHODS


__all__ = ['InterpolatorOptions', 'QuaternionInterpolator']


@dataclass
class InterpolatorOptions(UserOptions):
    """
    The options for the :class:`QuaternionInterpolator`.
    """

    method: INTERPOLATION_METHODS = 'slerp'
    """
    Which interpolation primitive to use.

    ``'slerp'`` gives constant angular velocity, ``'nlerp'`` is cheaper but speeds up in the middle of the
    interval, and ``'lerp'`` is nlerp that returns the unnormalized blend instead of raising when it can't normalize.
    """

    time0: float | DatetimeLike = 0.0
    """
    The time corresponding to the start orientation.
    """

    time1: float | DatetimeLike = 1.0
    """
    The time corresponding to the end orientation.
    """

    clamp_fraction: bool = False
    """
    Whether to hold the end orientations for times outside of ``[time0, time1]`` instead of extrapolating.
    """

    linear_threshold: float = SLERP_LINEAR_THRESHOLD
    """
    The dot product between the end orientations above which slerp falls back to linear interpolation.
    """

    def __post_init__(self):
        if self.time0 == self.time1:
            raise ValueError(f'time0 and time1 must be different times, got {self.time0!r} for both')


class QuaternionInterpolator(UserOptionConfigured[InterpolatorOptions], AttributePrinting, AttributeEqualityComparison,
                             InterpolatorOptions):
    """
    Interpolates between a start and an end orientation at requested times.

    The interpolation method, the times the orientations correspond to, and the behavior outside of the interval are
    set through :class:`InterpolatorOptions`.  The settings are applied as attributes of the instance, so they can be
    changed after construction and restored with :meth:`reset_settings`.

    Calling the interpolator with a single time returns a :class:`.Quaternion`.  Calling it with a sequence of times
    returns a list of quaternions, one per time.

    Two interpolators are equal when their settings, original options and end orientations are all equal.
    """

    def __init__(self, start: Quaternion | ARRAY_LIKE, end: Quaternion | ARRAY_LIKE,
                 options: InterpolatorOptions | None = None):
        """
        :param start: the orientation at `time0`
        :param end: the orientation at `time1`
        :param options: the options to configure the interpolator with.  Defaults are used if ``None``
        """

        super().__init__(InterpolatorOptions, options=options)

        self._start = self._as_quaternion(start)
        self._end = self._as_quaternion(end)

        self._check_settings()

    @staticmethod
    def _as_quaternion(value: Quaternion | ARRAY_LIKE) -> Quaternion:
        if isinstance(value, Quaternion):
            return value

        return Quaternion.from_vector4(value)

    def _check_settings(self):
        if self.method not in get_args(INTERPOLATION_METHODS):
            raise ValueError(f'Unknown interpolation method {self.method!r}.  '
                             f'Must be one of {get_args(INTERPOLATION_METHODS)}')

        # raises for equal or incompatible times
        interpolation_fraction(self.time0, self.time0, self.time1)

    @property
    def start(self) -> Quaternion:
        """
        The orientation at `time0`.
        """

        return self._start

    @start.setter
    def start(self, value: Quaternion | ARRAY_LIKE):
        self._start = self._as_quaternion(value)

    @property
    def end(self) -> Quaternion:
        """
        The orientation at `time1`.
        """

        return self._end

    @end.setter
    def end(self, value: Quaternion | ARRAY_LIKE):
        self._end = self._as_quaternion(value)

    def fraction(self, time: float | DatetimeLike) -> float:
        """
        The fractional percent of the way from `time0` to `time1` that `time` sits at.

        If :attr:`clamp_fraction` is set the result is limited to ``[0, 1]``.

        :param time: the time of interest
        :return: the interpolation fraction
        :raises TypeError: if the time can't be combined with `time0` and `time1`
        """

        fraction = interpolation_fraction(time, self.time0, self.time1)

        if self.clamp_fraction:
            fraction = min(max(fraction, 0.0), 1.0)

        return fraction

    def interpolate(self, time: float | DatetimeLike) -> Quaternion:
        """
        Evaluate the configured interpolation primitive at a single time.

        :param time: the time to interpolate at
        :return: the interpolated orientation
        :raises ValueError: if the configured method is unknown or time0 and time1 are equal
        :raises ZeroNormError: if the method is ``'nlerp'`` and the blend can't be normalized
        """

        self._check_settings()

        fraction = self.fraction(time)

        if self.method == 'lerp':
            return self._start.lerp(self._end, fraction)

        elif self.method == 'nlerp':
            return self._start.nlerp(self._end, fraction)

        return Quaternion.from_vector4(slerp(np.asarray(self._start), np.asarray(self._end), fraction,
                                             linear_threshold=self.linear_threshold))

    def __hash__(self):
        return hash((tuple(self.options_dict.items()), self._start, self._end))

    def __call__(self, time: float | DatetimeLike | Sequence[float | DatetimeLike]) -> Quaternion | list[Quaternion]:
        """
        Evaluate at a single time or at each time of a sequence.

        :param time: the time(s) to interpolate at
        :return: the interpolated orientation(s)
        """

        if np.ndim(time) > 0:
            return [self.interpolate(t) for t in time]  # type: ignore

        return self.interpolate(time)  # type: ignore
