"""
Text styling for inspection output.

A style is a named, ordered list of modifier names (``"symbol" -> ("bold", "blue")``). The modifier registry
turns one modifier name plus a text fragment into a new text fragment; the default registry emits ANSI SGR
sequences via colorama, so layout decisions measure text with ``printable_len()`` which ignores them.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re
from functools import reduce
from typing import TYPE_CHECKING, Callable

# Third-party ----------------------------------------------------------------------------------------------------------
from colorama import Fore, Style
from colorama.ansi import code_to_chars

if TYPE_CHECKING:
    from .options import InspectOptions

Modifier = Callable[[str, str], str]

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")

# Modifier name -> (start sequence, end sequence). Each end sequence resets only what its start set,
# so modifiers nest: blue(bold(text)) keeps the text bold after the color is closed.
ANSI_MODIFIERS: dict[str, tuple[str, str]] = {
    "bold": (Style.BRIGHT, Style.NORMAL),
    "dim": (Style.DIM, Style.NORMAL),
    "italic": (code_to_chars(3), code_to_chars(23)),
    "underline": (code_to_chars(4), code_to_chars(24)),
    "inverse": (code_to_chars(7), code_to_chars(27)),
    "black": (Fore.BLACK, Fore.RESET),
    "red": (Fore.RED, Fore.RESET),
    "green": (Fore.GREEN, Fore.RESET),
    "yellow": (Fore.YELLOW, Fore.RESET),
    "blue": (Fore.BLUE, Fore.RESET),
    "magenta": (Fore.MAGENTA, Fore.RESET),
    "cyan": (Fore.CYAN, Fore.RESET),
    "white": (Fore.WHITE, Fore.RESET),
    "grey": (Fore.LIGHTBLACK_EX, Fore.RESET),
}

# Semantic aliases
ANSI_MODIFIERS["gray"] = ANSI_MODIFIERS["grey"]
ANSI_MODIFIERS["success"] = ANSI_MODIFIERS["green"]
ANSI_MODIFIERS["warning"] = ANSI_MODIFIERS["yellow"]
ANSI_MODIFIERS["info"] = ANSI_MODIFIERS["blue"]
ANSI_MODIFIERS["error"] = ANSI_MODIFIERS["red"]


# Methods --------------------------------------------------------------------------------------------------------------

def ansi_modifier(name: str, text: str) -> str:
    """
    Wrap text into the ANSI start/end sequences of a modifier.

    Raises:
        ValueError: If the modifier name is not registered.

    Examples:
        >>> ansi_modifier("bold", "x")
        '\\x1b[1mx\\x1b[22m'
    """
    try:
        start, end = ANSI_MODIFIERS[name]
    except KeyError:
        raise ValueError(f"unknown style modifier {name!r}, expected one of {sorted(ANSI_MODIFIERS)}") from None
    return f"{start}{text}{end}"


def plain_modifier(name: str, text: str) -> str:
    """Modifier registry that never styles anything."""
    return text


def style(text: str, name: str, opts: "InspectOptions") -> str:
    """
    Apply the named style to text.

    Modifiers are applied in list order, each one wrapping the result of the previous one. An unregistered
    style name leaves text unchanged.

    Examples:
        >>> style("{", "symbol", InspectOptions())  # bold, then blue
        '\\x1b[34m\\x1b[1m{\\x1b[22m\\x1b[39m'
    """
    modifiers = opts.styles.get(name, ())
    return reduce(lambda memo, modifier: opts.modifier(modifier, memo), modifiers, text)


def strip_styles(s: str) -> str:
    """Remove ANSI style sequences from s."""
    return ANSI_ESCAPE_RE.sub("", s)


def printable_len(s: str) -> int:
    """Length of s as displayed, ANSI style sequences excluded."""
    return len(strip_styles(s))
