"""
This package provides utilities shared across spindle, namely the :class:`.UserOptions` configuration layer and the
mixin classes used to build configurable, printable objects.
"""

from spindle.utilities.options import UserOptions
from spindle.utilities.mixin_classes import AttributeEqualityComparison, AttributePrinting, UserOptionConfigured

__all__ = ["UserOptions", "AttributeEqualityComparison", "AttributePrinting", "UserOptionConfigured"]
