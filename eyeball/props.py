"""
Property filter: which (key, value) pairs of a composite value get rendered.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import logging
import re
from typing import TYPE_CHECKING, Any, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import classify

if TYPE_CHECKING:
    from .options import InspectOptions

logger = logging.getLogger(__name__)

SkipRule = str | re.Pattern


# Methods --------------------------------------------------------------------------------------------------------------

def filter_props(obj: Any, opts: "InspectOptions") -> list[tuple[str, Any]]:
    """
    Return the (key, value) pairs of obj that survive hiding and skipping.

    Enumerable members come first in their natural order: mapping items, or the public attributes an
    instance owns. When ``opts.hide.hidden`` is set, non-enumerable members (private instance attributes)
    follow. A pair is then dropped if the type name of its value is listed in ``opts.hide.types``, or if
    its key matches any of ``opts.skip``.

    Args:
        obj: A mapping or any object instance.
        opts: Effective options.

    Returns:
        Ordered list of (key text, value) pairs.

    Examples:
        >>> filter_props({"a": 1, "b": None, "secret": 2}, InspectOptions(skip=("secret",)))
        [('a', 1)]
    """
    pairs = own_members(obj, include_hidden=opts.hide.hidden)
    return [
        (key, value) for key, value in pairs
        if classify(value, opts) not in opts.hide.types and not is_skipped(key, opts.skip)
    ]


def own_members(obj: Any, include_hidden: bool = False) -> list[tuple[str, Any]]:
    """
    Collect the members an object owns, enumerable ones first.

    Mapping keys that are not strings are keyed by their repr(). For other objects, attributes come from
    ``__dict__`` and then from ``__slots__`` along the MRO; dunder names are never included and names with
    a leading underscore are non-enumerable. Unassigned slots are skipped.
    """
    if isinstance(obj, abc.Mapping):
        return [(k if isinstance(k, str) else repr(k), v) for k, v in obj.items()]

    enumerable: list[tuple[str, Any]] = []
    hidden: list[tuple[str, Any]] = []
    for name, value in _instance_attrs(obj):
        if name.startswith("_"):
            if include_hidden:
                hidden.append((name, value))
        else:
            enumerable.append((name, value))
    return enumerable + hidden


def is_skipped(key: str, rules: abc.Iterable[SkipRule]) -> bool:
    """True if key equals a literal rule or a pattern rule is found in key."""
    for rule in rules:
        if isinstance(rule, re.Pattern):
            if rule.search(key) is not None:
                return True
        elif rule == key:
            return True
    return False


# Private Methods ------------------------------------------------------------------------------------------------------

def _instance_attrs(obj: Any) -> Iterator[tuple[str, Any]]:
    seen = set()

    try:
        dict_ = vars(obj)
    except TypeError:
        dict_ = {}

    for name, value in dict_.items():
        if not isinstance(name, str) or _is_dunder(name):
            continue
        seen.add(name)
        yield name, value

    for name in _slot_names(type(obj)):
        if name in seen or _is_dunder(name):
            continue
        seen.add(name)
        try:
            value = getattr(obj, name)
        except AttributeError:
            logger.debug("slot %r of %s instance is unassigned, skipped", name, type(obj).__name__)
            continue
        yield name, value


def _slot_names(cls: type) -> Iterator[str]:
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            # Private slot names are mangled with the defining class name
            if slot.startswith("__") and not slot.endswith("__"):
                slot = f"_{klass.__name__.lstrip('_')}{slot}"
            yield slot


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")
