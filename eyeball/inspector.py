"""
Value inspection entry points.

Usage:
    >>> from eyeball.inspector import inspect
    >>> inspect({"number": 42, "string": "a"}, "t")   # writes to sys.stdout
    t: {number : 42, string : 'a'}

    >>> text = inspect([None], "null in array", stream=None)            # returns instead of writing
"""

# Standard library -----------------------------------------------------------------------------------------------------
import sys
from typing import Any, Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import analyze
from .options import InspectOptions, default_options, merge_options
from .sentinels import ifnotdefault


# Classes --------------------------------------------------------------------------------------------------------------

class Inspector:
    """
    Inspector with its own base options.

    Base options are the process defaults merged with the options given at construction. Every inspect()
    call merges its own overrides on top of a copy, so calls never affect each other.

    Examples:
        >>> quiet = Inspector(InspectOptions.plain(), stream=None)
        >>> quiet.inspect("something", "something")
        "something: 'something'"
        >>> quiet.inspect({"a": [1, 2]}, max_depth=1)
        '{a : [nested array]}'
    """

    def __init__(self, options: Mapping[str, Any] | InspectOptions | None = None, **overrides) -> None:
        self.options = merge_options(default_options(), options, overrides)

    def configure(self, options: Mapping[str, Any] | InspectOptions | None = None, **overrides) -> "Inspector":
        """
        Merge overrides into the base options of this inspector.

        Returns:
            Self, to allow chaining.
        """
        self.options = merge_options(self.options, options, overrides)
        return self

    def inspect(
            self,
            obj: Any,
            label: str | Mapping[str, Any] | InspectOptions | None = None,
            *,
            options: Mapping[str, Any] | InspectOptions | None = None,
            **overrides,
    ) -> str | None:
        """
        Render obj and write it to the configured stream, or return it.

        Args:
            obj: Any value.
            label: Text shown before the value as ``LABEL: ``. Any non-str value given in place of the label is
                taken as options (and ignored with a warning unless it is a mapping or InspectOptions); the
                label is then left empty.
            options: Overrides merged into the base options.
            overrides: Keyword overrides, merged last.

        Returns:
            The rendered text when the effective stream is None, otherwise None after writing the text
            followed by the line terminator.

        Raises:
            TypeError: If options are given both in place of the label and as options.
            LookupError: If a value is classified as a type name without a handler.
        """
        if label is not None and not isinstance(label, str):
            if options is not None:
                raise TypeError("options given twice, as label and as options")
            label, options = None, label

        opts = merge_options(self.options, options, overrides)
        text = analyze(obj, label, opts)

        if opts.stream is None:
            return text

        stream = ifnotdefault(opts.stream, default_factory=lambda: sys.stdout)
        stream.write(text + opts.nl)
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_depth={self.options.max_depth}, pretty_print={self.options.pretty_print})"


# Methods --------------------------------------------------------------------------------------------------------------

def inspect(
        obj: Any,
        label: str | Mapping[str, Any] | InspectOptions | None = None,
        *,
        options: Mapping[str, Any] | InspectOptions | None = None,
        **overrides,
) -> str | None:
    """
    Render obj with the process default options, see Inspector.inspect().

    Examples:
        >>> inspect({"hello": "moto"}, "small object", modifier=plain_modifier, stream=None)
        "small object: {hello : 'moto'}"
    """
    return Inspector().inspect(obj, label, options=options, **overrides)
