"""
Type classification: map a value to the semantic type name that selects its handler and style.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import datetime as dt
import functools
import inspect
import logging
import numbers
import re
from enum import StrEnum, unique
from typing import TYPE_CHECKING, Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import UNSET

if TYPE_CHECKING:
    from .options import InspectOptions

logger = logging.getLogger(__name__)

TypeRule = type | tuple[type, ...] | Callable[[Any], bool]


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class TypeName(StrEnum):
    """
    Built-in semantic type names.

    User registered type names are plain strings living next to these in the same tables.
    """
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    BYTES = "bytes"
    REGEXP = "regexp"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    NULL = "null"
    UNDEFINED = "undefined"
    FUNCTION = "function"


# Methods --------------------------------------------------------------------------------------------------------------

def classify(obj: Any, opts: "InspectOptions") -> str:
    """
    Return the semantic type name of obj.

    Primitives (``None``, ``UNSET``, bool, numbers, str, bytes, routines) map straight to their kind and
    never reach the structural rules. Any other value is tested against every rule of ``opts.types`` in
    registration order and the name of the LAST matching rule wins, so a specific rule registered after a
    general one overrides it. A value matching no rule at all is classified as ``"object"``.

    Examples:
        >>> opts = InspectOptions()
        >>> classify(None, opts)
        'null'
        >>> classify([1, 2], opts)
        'array'
        >>> classify(Point(1, 2), opts.with_type("point", Point))
        'point'
    """
    kind = primitive_kind(obj)
    if kind is not None:
        return kind

    matched = None
    for name, rule in opts.types.items():
        if rule_matches(rule, obj):
            matched = name

    if matched is None:
        logger.debug("no type rule matched %s instance, falling back to 'object'", type(obj).__name__)
        return TypeName.OBJECT
    return matched


def primitive_kind(obj: Any) -> TypeName | None:
    """Return the kind of a host primitive, None for composite values."""
    if obj is None:
        return TypeName.NULL
    if obj is UNSET:
        return TypeName.UNDEFINED
    # bool comes before numbers, it is a subclass of int
    if isinstance(obj, bool):
        return TypeName.BOOLEAN
    if isinstance(obj, numbers.Number):
        return TypeName.NUMBER
    if isinstance(obj, str):
        return TypeName.STRING
    if isinstance(obj, (bytes, bytearray)):
        return TypeName.BYTES
    if is_routine(obj):
        return TypeName.FUNCTION
    return None


def rule_matches(rule: TypeRule, obj: Any) -> bool:
    """
    Test obj against a structural rule.

    Classes and tuples of classes are matched with isinstance(), any other rule is called as a predicate.
    """
    if isinstance(rule, (type, tuple)):
        return isinstance(obj, rule)
    return bool(rule(obj))


def validate_rule(name: str, rule: Any) -> None:
    """
    Raises:
        TypeError: If rule is neither a class, a tuple of classes nor a callable.
    """
    if isinstance(rule, tuple):
        if all(isinstance(t, type) for t in rule):
            return
    elif isinstance(rule, type) or callable(rule):
        return
    raise TypeError(f"type rule {name!r} must be a class, a tuple of classes or a predicate, got {rule!r}")


def is_array(obj: Any) -> bool:
    """Ordered or unordered collections of items: sequences and sets, text excluded."""
    return isinstance(obj, (abc.Sequence, abc.Set)) and not isinstance(obj, (str, bytes, bytearray))


def is_routine(obj: Any) -> bool:
    """Functions, lambdas, builtins, methods and partials; classes and callable instances are not routines."""
    return inspect.isroutine(obj) or isinstance(obj, functools.partial)


def default_type_rules() -> dict[str, TypeRule]:
    """
    Structural rules in registration order, from the most general to the most specific.
    """
    return {
        TypeName.OBJECT: object,
        TypeName.ARRAY: is_array,
        TypeName.REGEXP: re.Pattern,
        TypeName.DATE: dt.date,
    }
