"""
Inspection options and their merge rules.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import functools
import logging
import re
from dataclasses import dataclass, field, fields, replace as dataclasses_replace
from types import MappingProxyType
from typing import IO, Any, Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import TypeName, TypeRule, default_type_rules, validate_rule
from .formatters import Handler, default_handlers
from .props import SkipRule
from .sentinels import DEFAULT, DefaultType
from .styles import Modifier, ansi_modifier, plain_modifier

logger = logging.getLogger(__name__)

# Sub-maps merged key by key, every other field is replaced as a whole
MERGED_FIELDS = ("styles", "hide", "types", "handlers")


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class HideOptions:
    """
    What gets omitted from object output.

    Attributes:
        hidden: Include non-enumerable members, i.e. private attributes with a leading underscore
        types: Type names whose values are dropped from objects entirely
    """
    hidden: bool = True
    types: frozenset[str] = frozenset({TypeName.FUNCTION, TypeName.UNDEFINED, TypeName.NULL})

    def __post_init__(self) -> None:
        if isinstance(self.types, str) or not isinstance(self.types, abc.Iterable):
            raise TypeError(f"hide.types must be an iterable of type names, got {self.types!r}")
        object.__setattr__(self, "hidden", bool(self.hidden))
        object.__setattr__(self, "types", frozenset(self.types))


@dataclass(frozen=True)
class InspectOptions:
    """
    Effective configuration of one inspection.

    Instances are immutable; ``merge()`` returns a new instance. The ``styles``, ``hide``, ``types`` and
    ``handlers`` sub-maps merge key by key, all other fields are replaced on merge.

    Attributes:
        styles: Style name -> ordered modifier names, e.g. ``{"symbol": ("bold", "blue")}``
        hide: Hiding rules, see HideOptions
        skip: Keys to leave out of objects, literal names or compiled patterns searched in the key
        types: Type name -> structural rule (class, tuple of classes or predicate); the last match wins
        handlers: Type name -> handler(value, type_name, depth, opts) returning text
        pretty_print: Explode composites over several lines when they are too long
        max_itemlen: Printable length of a composite's children above which it is exploded
        max_depth: Nesting level at which composites render as [nested object] / [nested array]
        indent: Indent unit, repeated once per nesting level
        nl: Line terminator
        stream: Writable text stream; DEFAULT means sys.stdout at write time, None returns the text instead
        modifier: Modifier registry, (modifier name, text) -> styled text

    Examples:
        >>> opts = InspectOptions().merge(max_depth=2, styles={"key": ["underline"]})
        >>> opts.styles["key"], opts.styles["string"]
        (('underline',), ('green',))

        >>> # Register a type with its own handler
        >>> opts = InspectOptions.plain().with_type("path", pathlib.PurePath, simple_handler)
    """
    styles: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: InspectOptions.default_styles())
    hide: HideOptions = field(default_factory=HideOptions)
    skip: tuple[SkipRule, ...] = ()
    types: Mapping[str, TypeRule] = field(default_factory=default_type_rules)
    handlers: Mapping[str, Handler] = field(default_factory=default_handlers)

    pretty_print: bool = True
    max_itemlen: int = 40
    max_depth: int = 5
    indent: str = "   "
    nl: str = "\n"

    stream: IO[str] | DefaultType | None = DEFAULT
    modifier: Modifier = ansi_modifier

    def __post_init__(self) -> None:
        """
        Normalize and validate fields.

        Raises:
            TypeError: If a field has the wrong type.
            ValueError: If max_depth < 1 or max_itemlen < 0.
        """
        # Depth cutoff is the only guard against cycles, so it must stay a positive int
        if not _is_int(self.max_depth):
            raise TypeError(f"max_depth must be an int, got {self.max_depth!r}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth}")
        if not _is_int(self.max_itemlen):
            raise TypeError(f"max_itemlen must be an int, got {self.max_itemlen!r}")
        if self.max_itemlen < 0:
            raise ValueError(f"max_itemlen must be non-negative, got {self.max_itemlen}")
        for name in ("indent", "nl"):
            if not isinstance(getattr(self, name), str):
                raise TypeError(f"{name} must be a str, got {getattr(self, name)!r}")
        if not callable(self.modifier):
            raise TypeError(f"modifier must be callable, got {self.modifier!r}")
        if self.stream is not None and self.stream is not DEFAULT and not callable(getattr(self.stream, "write", None)):
            raise TypeError(f"stream must be a writable text stream, DEFAULT or None, got {self.stream!r}")

        object.__setattr__(self, "pretty_print", bool(self.pretty_print))
        object.__setattr__(self, "styles", MappingProxyType(_normalize_styles(self.styles)))
        object.__setattr__(self, "hide", _as_hide(self.hide))
        object.__setattr__(self, "skip", _normalize_skip(self.skip))
        object.__setattr__(self, "types", MappingProxyType(_normalize_types(self.types)))
        object.__setattr__(self, "handlers", MappingProxyType(_normalize_handlers(self.handlers)))

    # Static Methods -----------------------------------

    @staticmethod
    def default_styles() -> dict[str, tuple[str, ...]]:
        """
        Default style assignments, any modifier name known to the modifier registry can be used.
        """
        return {
            "label": ("bold",),
            "key": ("bold",),
            "symbol": ("bold", "blue"),
            TypeName.OBJECT: ("blue",),
            TypeName.ARRAY: ("blue",),
            TypeName.FUNCTION: ("cyan",),
            TypeName.STRING: ("green",),
            TypeName.BYTES: ("green",),
            TypeName.NUMBER: ("yellow",),
            TypeName.BOOLEAN: ("yellow",),
            TypeName.REGEXP: ("red",),
            TypeName.DATE: ("magenta",),
            TypeName.NULL: ("grey",),
            TypeName.UNDEFINED: ("grey",),
        }

    # Class Methods ------------------------------------

    @classmethod
    def plain(cls) -> "InspectOptions":
        """Options producing uncolored text."""
        return cls(modifier=plain_modifier)

    @classmethod
    def compact(cls) -> "InspectOptions":
        """Options keeping every composite on a single line."""
        return cls(pretty_print=False)

    @classmethod
    def debug(cls) -> "InspectOptions":
        """Options for digging into deep structures: twice the depth and no hidden types."""
        return cls(max_depth=10, hide=HideOptions(hidden=True, types=frozenset()))

    # Methods ------------------------------------------

    def merge(self, *overrides: "Mapping[str, Any] | InspectOptions | None", **kwargs) -> "InspectOptions":
        """
        Return new options with overrides applied left to right, keyword overrides last.
        """
        return merge_options(self, *overrides, kwargs)

    def with_type(self, name: str, rule: TypeRule, handler: Handler | None = None) -> "InspectOptions":
        """
        Return new options with a structural type rule registered after the existing ones.

        Re-registering an existing name replaces its rule but keeps its position. The handler is optional
        when one is already registered under the name.
        """
        override: dict[str, Any] = {"types": {name: rule}}
        if handler is not None:
            override["handlers"] = {name: handler}
        return merge_options(self, override)

    def with_handler(self, name: str, handler: Handler) -> "InspectOptions":
        """Return new options with a handler registered or replaced for a type name."""
        return merge_options(self, {"handlers": {name: handler}})


# Methods --------------------------------------------------------------------------------------------------------------

@functools.cache
def default_options() -> InspectOptions:
    """The process wide defaults, built once on first use and never mutated."""
    return InspectOptions()


def merge_options(base: InspectOptions, *overrides: "Mapping[str, Any] | InspectOptions | None") -> InspectOptions:
    """
    Combine base options with zero or more overrides into new options.

    Overrides are applied left to right, later ones win. ``None`` overrides are skipped. For ``styles``,
    ``types`` and ``handlers`` an override only adds or replaces keys; ``hide`` is merged per field; any
    other field is replaced as a whole. Inputs are never mutated.

    Merging never raises. Overrides of the wrong shape are treated as empty, and unknown keys or values
    rejected by InspectOptions validation are dropped; each case is reported with a warning and the
    previous value is kept.

    Args:
        base: Options to start from.
        overrides: Mappings of field name -> value, or InspectOptions contributing only the fields (and
            sub-map keys) where they differ from the defaults.

    Returns:
        New InspectOptions.

    Examples:
        >>> opts = merge_options(InspectOptions(), {"max_depth": 2}, None, {"hide": {"hidden": False}})
        >>> opts.max_depth, opts.hide.hidden, sorted(opts.hide.types)
        (2, False, ['function', 'null', 'undefined'])
    """
    result = base
    for override in overrides:
        if override is None:
            continue
        items = _as_override_items(override)
        if items:
            result = _merge_one(result, items)
    return result


# Private Methods ------------------------------------------------------------------------------------------------------

_FIELD_NAMES = frozenset(f.name for f in fields(InspectOptions))


def _merge_one(base: InspectOptions, items: Mapping[str, Any]) -> InspectOptions:
    result = base
    for key, value in items.items():
        if key not in _FIELD_NAMES:
            logger.warning("unknown inspect option %r ignored", key)
            continue
        if key in MERGED_FIELDS and key != "hide":
            if value is None:
                continue
            if not isinstance(value, abc.Mapping):
                logger.warning("inspect option %r must be a mapping, got %r, ignored", key, value)
                continue
        # Each key is validated on its own so that one bad value does not discard the others
        try:
            if key == "hide":
                merged = _merge_hide(result.hide, value)
            elif key in MERGED_FIELDS:
                merged = {**getattr(result, key), **value}
            else:
                merged = value
            result = dataclasses_replace(result, **{key: merged})
        except (TypeError, ValueError) as exc:
            logger.warning("inspect option %r=%r ignored: %s", key, value, exc)
    return result


def _merge_hide(base: HideOptions, value: Any) -> HideOptions:
    if value is None:
        return base
    if isinstance(value, HideOptions):
        return value
    if not isinstance(value, abc.Mapping):
        logger.warning("inspect option 'hide' must be a mapping or HideOptions, got %r, ignored", value)
        return base
    known = {k: v for k, v in value.items() if k in ("hidden", "types")}
    for k in value.keys() - known.keys():
        logger.warning("unknown hide option %r ignored", k)
    return dataclasses_replace(base, **known)


def _as_override_items(override: Any) -> Mapping[str, Any]:
    if isinstance(override, InspectOptions):
        return _changed_fields(override)
    if isinstance(override, abc.Mapping):
        return override
    logger.warning("inspect options override must be a mapping or InspectOptions, got %r, ignored", override)
    return {}


def _changed_fields(opts: InspectOptions) -> dict[str, Any]:
    """
    Fields of opts that differ from the defaults, sub-maps reduced to their changed keys.
    """
    defaults = default_options()
    changed: dict[str, Any] = {}
    for f in fields(opts):
        value, default = getattr(opts, f.name), getattr(defaults, f.name)
        if value == default:
            continue
        if f.name == "hide":
            value = {k: getattr(value, k) for k in ("hidden", "types") if getattr(value, k) != getattr(default, k)}
        elif f.name in MERGED_FIELDS:
            value = {k: v for k, v in value.items() if k not in default or default[k] != v}
        changed[f.name] = value
    return changed


def _as_hide(value: Any) -> HideOptions:
    if isinstance(value, HideOptions):
        return value
    if isinstance(value, abc.Mapping):
        return HideOptions(**value)
    raise TypeError(f"hide must be HideOptions or a mapping, got {value!r}")


def _normalize_styles(styles: Mapping[str, Any]) -> dict[str, tuple[str, ...]]:
    if not isinstance(styles, abc.Mapping):
        raise TypeError(f"styles must be a mapping, got {styles!r}")
    result = {}
    for name, modifiers in styles.items():
        # A single modifier may be given without a list
        if isinstance(modifiers, str):
            modifiers = (modifiers,)
        elif modifiers is not None and not isinstance(modifiers, abc.Iterable):
            raise TypeError(f"style {name!r} must list modifier names, got {modifiers!r}")
        modifiers = tuple(modifiers or ())
        if not all(isinstance(m, str) for m in modifiers):
            raise TypeError(f"style {name!r} must list modifier names, got {modifiers!r}")
        result[name] = modifiers
    return result


def _normalize_skip(skip: Any) -> tuple[SkipRule, ...]:
    if skip is None:
        return ()
    if isinstance(skip, (str, re.Pattern)):
        return (skip,)
    if not isinstance(skip, abc.Iterable):
        raise TypeError(f"skip rules must be str or compiled re.Pattern, got {skip!r}")
    rules = tuple(skip)
    for rule in rules:
        if not isinstance(rule, (str, re.Pattern)):
            raise TypeError(f"skip rules must be str or compiled re.Pattern, got {rule!r}")
    return rules


def _normalize_types(types: Mapping[str, Any]) -> dict[str, TypeRule]:
    if not isinstance(types, abc.Mapping):
        raise TypeError(f"types must be a mapping, got {types!r}")
    for name, rule in types.items():
        validate_rule(name, rule)
    return dict(types)


def _normalize_handlers(handlers: Mapping[str, Any]) -> dict[str, Handler]:
    if not isinstance(handlers, abc.Mapping):
        raise TypeError(f"handlers must be a mapping, got {handlers!r}")
    for name, handler in handlers.items():
        if not callable(handler):
            raise TypeError(f"handler for {name!r} must be callable, got {handler!r}")
    return dict(handlers)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
