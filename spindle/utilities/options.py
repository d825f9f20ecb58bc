"""
This module provides the base class for the option dataclasses that configure spindle objects.

An options class is a dataclass deriving from :class:`UserOptions` and named ``<ClassName>Options``.  Its fields are
the settings of ``<ClassName>`` together with their defaults, for instance :class:`.InterpolatorOptions` holds the
interpolation method and the time span of a :class:`.QuaternionInterpolator`::

    >>> from spindle.rotations import InterpolatorOptions
    >>> options = InterpolatorOptions(method='nlerp', time1=10.0)
    >>> options.options_dict['method']
    'nlerp'

The configured class copies the fields onto itself as plain attributes (see :meth:`UserOptions.apply_options` and
:class:`.UserOptionConfigured`) so the settings can be inspected and changed on the instance directly.
"""

from dataclasses import dataclass, fields

from typing import Any

from abc import ABCMeta


@dataclass
class UserOptions(metaclass=ABCMeta):
    """
    Base class for option dataclasses.

    Subclasses only declare fields.  :meth:`override_options` can be overridden to reconcile fields that depend on
    each other before they are applied.
    """

    def override_options(self) -> None:
        """
        Adjust dependent fields before the options are read.  Does nothing by default.
        """

    def apply_options(self, target: object) -> None:
        """
        Set every option as an attribute of `target`, replacing any current value.

        :param target: the instance being configured
        """

        for name, value in self.options_dict.items():
            setattr(target, name, value)

    @property
    def options_dict(self) -> dict[str, Any]:
        """
        The dataclass fields and their current values, after :meth:`override_options` has run.
        """

        self.override_options()

        return {field.name: getattr(self, field.name) for field in fields(self)}
