"""
Recursive, depth-bounded formatters that render a value tree into styled text.

``stringify()`` classifies a value and dispatches it to the handler registered for its type name. Composite
handlers recurse one level deeper per descent until ``max_depth`` is reached, which is also what stops
reference cycles. ``layout()`` keeps children on one line while they fit into ``max_itemlen`` printable
characters and explodes them one per line otherwise.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
import inspect
import logging
import re
from email.utils import format_datetime
from typing import TYPE_CHECKING, Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import TypeName, classify
from .props import filter_props
from .styles import printable_len, style

if TYPE_CHECKING:
    from .options import InspectOptions

logger = logging.getLogger(__name__)

Handler = Callable[[Any, str, int, "InspectOptions"], str]

_CONTROL_CHARS_RE = re.compile(r"[\x01-\x1f]")

# Parameter kinds counted by function arity, the ones a caller must fill positionally
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


# Methods --------------------------------------------------------------------------------------------------------------

def analyze(obj: Any, label: str | None, opts: "InspectOptions") -> str:
    """
    Render obj with an optional label.

    A non-empty label is prepended as ``LABEL: `` in the "label" style. Labels are never escaped.
    """
    prefix = style(f"{label}: ", "label", opts) if label else ""
    return prefix + stringify(obj, 0, opts)


def stringify(obj: Any, depth: int, opts: "InspectOptions") -> str:
    """
    Render obj at the given depth with the handler registered for its type name.

    Raises:
        LookupError: If no handler is registered for the type name of obj.
    """
    type_name = classify(obj, opts)
    try:
        handler = opts.handlers[type_name]
    except KeyError:
        raise LookupError(f"no handler registered for type name {str(type_name)!r}") from None
    return handler(obj, type_name, depth, opts)


def escape_str(s: str) -> str:
    """
    Make a string printable inside single quotes.

    Backslashes are doubled first so that the backslashes introduced by the other substitutions stay
    unambiguous; then newlines become ``\\n``, single quotes become ``\\'`` and any remaining control
    character 0x01-0x1F becomes a backslash with its three-digit octal code.

    Examples:
        >>> escape_str("a'b\\nc")
        "a\\\\'b\\\\nc"
        >>> escape_str("\\x01")
        '\\\\001'
    """
    s = s.replace("\\", "\\\\").replace("\n", "\\n").replace("'", "\\'")
    return _CONTROL_CHARS_RE.sub(lambda m: f"\\{ord(m.group()):03o}", s)


def layout(open_: str, close: str, strings: list[str], depth: int, opts: "InspectOptions") -> str:
    """
    Join rendered children between styled opening and closing tokens.

    Children stay inline, separated by ``", "``, unless pretty printing is enabled and their total
    printable length (plus 2 per child for the separator) exceeds ``opts.max_itemlen``. Exploded children
    go one per line, each after a newline and ``depth + 1`` indent units, the first one included.
    """
    total = sum(printable_len(s) + 2 for s in strings)

    if opts.pretty_print and total > opts.max_itemlen:
        sep = opts.nl + opts.indent * (depth + 1)
        body = sep + ("," + sep).join(strings)
    else:
        body = ", ".join(strings)

    return style(open_, "symbol", opts) + body + style(close, "symbol", opts)


# Handlers -------------------------------------------------------------------------------------------------------------

def simple_handler(obj: Any, type_name: str, depth: int, opts: "InspectOptions") -> str:
    """Plain str() of the value in the style of its type."""
    return style(str(obj), type_name, opts)


def type_handler(obj: Any, type_name: str, depth: int, opts: "InspectOptions") -> str:
    """Bracketed type name, for values that are nothing but their type: [null], [undefined]."""
    return style(f"[{type_name}]", type_name, opts)


def func_handler(obj: Any, type_name: str, depth: int, opts: "InspectOptions") -> str:
    name = getattr(obj, "__name__", "") or ""
    if not name or name == "<lambda>":
        name = "(lambda)"
    return style(f"[function {name}({_arity(obj)})]", type_name, opts)


def string_handler(obj: str, type_name: str, depth: int, opts: "InspectOptions") -> str:
    return style(f"'{escape_str(obj)}'", type_name, opts)


def bytes_handler(obj: bytes | bytearray, type_name: str, depth: int, opts: "InspectOptions") -> str:
    return style(repr(bytes(obj)), type_name, opts)


def date_handler(obj: dt.date, type_name: str, depth: int, opts: "InspectOptions") -> str:
    """RFC 1123 date in UTC, e.g. 'Tue, 15 Nov 1994 08:12:31 GMT'."""
    return style(_utc_string(obj), type_name, opts)


def regex_handler(obj: re.Pattern, type_name: str, depth: int, opts: "InspectOptions") -> str:
    pattern = obj.pattern if isinstance(obj.pattern, str) else obj.pattern.decode("latin-1")
    return style(f"/{pattern}/", type_name, opts)


def array_handler(obj: Any, type_name: str, depth: int, opts: "InspectOptions") -> str:
    """
    Elements of a sequence or set, one level deeper, between square brackets.
    """
    if len(obj) == 0:
        return style("[]", "symbol", opts)

    if depth >= opts.max_depth:
        logger.debug("max_depth=%d reached, %s not expanded", opts.max_depth, type(obj).__name__)
        return style("[nested array]", type_name, opts)

    strings = [stringify(item, depth + 1, opts) for item in obj]
    return layout("[", "]", strings, depth, opts)


def object_handler(obj: Any, type_name: str, depth: int, opts: "InspectOptions") -> str:
    """
    ``key : value`` entries of a mapping or object, one level deeper, between curly braces.

    Only members surviving filter_props() are rendered; with none left the result is ``{}``.
    """
    props = filter_props(obj, opts)
    if not props:
        return style("{}", "symbol", opts)

    if depth >= opts.max_depth:
        logger.debug("max_depth=%d reached, %s not expanded", opts.max_depth, type(obj).__name__)
        return style("[nested object]", type_name, opts)

    strings = [style(key, "key", opts) + " : " + stringify(value, depth + 1, opts) for key, value in props]
    return layout("{", "}", strings, depth, opts)


def default_handlers() -> dict[str, Handler]:
    """
    Handlers for every built-in type name.
    """
    return {
        TypeName.STRING: string_handler,
        TypeName.BYTES: bytes_handler,
        TypeName.NUMBER: simple_handler,
        TypeName.BOOLEAN: simple_handler,
        TypeName.DATE: date_handler,
        TypeName.NULL: type_handler,
        TypeName.UNDEFINED: type_handler,
        TypeName.REGEXP: regex_handler,
        TypeName.FUNCTION: func_handler,
        TypeName.OBJECT: object_handler,
        TypeName.ARRAY: array_handler,
    }


# Private Methods ------------------------------------------------------------------------------------------------------

def _arity(fn: Any) -> int:
    """Number of positional parameters without a default value."""
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        # Some builtins have no introspectable signature
        return 0
    return sum(1 for p in params if p.kind in _POSITIONAL and p.default is inspect.Parameter.empty)


def _utc_string(value: dt.date) -> str:
    if not isinstance(value, dt.datetime):
        value = dt.datetime.combine(value, dt.time())
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return format_datetime(value.astimezone(dt.timezone.utc), usegmt=True)
