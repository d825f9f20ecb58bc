"""
This package contains the mixin classes used to build configurable objects in spindle.
"""

from spindle.utilities.mixin_classes.attribute_equality_comparison import AttributeEqualityComparison
from spindle.utilities.mixin_classes.attribute_printing import AttributePrinting
from spindle.utilities.mixin_classes.user_option_configured import UserOptionConfigured

__all__ = ["AttributeEqualityComparison", "AttributePrinting", "UserOptionConfigured"]
