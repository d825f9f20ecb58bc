"""
This module provides the :class:`UserOptionConfigured` mixin which configures an instance from a :class:`.UserOptions`
dataclass and can restore that configuration later.

Configured classes list the mixin first, then any other mixins, then the options dataclass itself so that the option
fields are declared attributes of the class::

    class QuaternionInterpolator(UserOptionConfigured[InterpolatorOptions], AttributePrinting,
                                 AttributeEqualityComparison, InterpolatorOptions):

        def __init__(self, start, end, options=None):
            super().__init__(InterpolatorOptions, options=options)
            ...

After construction the settings are plain attributes (``interpolator.method = 'nlerp'``) and
``interpolator.reset_settings()`` puts back the ones it was built with.
"""

from typing import Generic, TypeVar

from spindle.utilities.options import UserOptions


OptionsT = TypeVar("OptionsT", bound=UserOptions)


class UserOptionConfigured(Generic[OptionsT]):
    """
    Mixin applying a :class:`.UserOptions` instance to self on construction and keeping it for
    :meth:`reset_settings`.

    When no options are given a default constructed `options_type` is used.
    """

    def __init__(self, options_type: type[OptionsT], *args, options: OptionsT | None = None, **kwargs) -> None:
        """
        :param options_type: the options dataclass of the configured class
        :param options: the options to apply.  Defaults of `options_type` are used if ``None``
        """

        super().__init__(*args, **kwargs)

        if options is None:
            options = options_type()

        options.apply_options(self)

        self._original_options: OptionsT = options

    def reset_settings(self) -> None:
        """
        Re-apply the options this instance was constructed with, discarding later changes to the settings.
        """

        self._original_options.apply_options(self)

    @property
    def original_options(self) -> OptionsT:
        """
        The options this instance was constructed with.

        This is the caller's object, not a copy, so changing it changes what :meth:`reset_settings` restores.
        """

        return self._original_options
