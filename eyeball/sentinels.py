"""
Sentinel objects for values that have no native Python spelling.

Sentinels:
    UNSET: An absent or unset value. Inspected as ``[undefined]``, distinct from ``None`` which is ``[null]``
    DEFAULT: Signals use of a default resolved late, e.g. the output stream bound to ``sys.stdout`` at write time

Helper Functions:
    ifnotdefault: Return default if value is DEFAULT, otherwise return value

Example:
    >>> record = {"name": "sensor", "parent": UNSET}
    >>> inspect(record, hide={"types": []}, modifier=plain_modifier, stream=None)
    "{name : 'sensor', parent : [undefined]}"
"""

from typing import Any, Callable, Final

__all__ = [
    'UNSET',
    'DEFAULT',
    'UnsetType',
    'DefaultType',
    'ifnotdefault',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for singleton sentinels compared by identity.
    """
    __slots__ = ('_name',)
    _instance = None

    def __new__(cls) -> '_SentinelBase':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __reduce__(self) -> tuple:
        """Unpickle to the same singleton."""
        return (self.__class__, ())


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType(_SentinelBase):
    """
    Sentinel type for UNSET.

    Classified as the ``undefined`` type name: a slot exists but nothing was ever assigned to it.
    """
    _instance: 'UnsetType | None' = None

    def __init__(self) -> None:
        self._name = "UNSET"

    def __bool__(self) -> bool:
        return False


class DefaultType(_SentinelBase):
    """
    Sentinel type for DEFAULT.

    Used by option fields whose default must be looked up when used rather than when defined.
    """
    _instance: 'DefaultType | None' = None

    def __init__(self) -> None:
        self._name = "DEFAULT"

    def __bool__(self) -> bool:
        """DEFAULT stands for a present value."""
        return True


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an absent value.

Use with identity check: `if value is UNSET:`
"""

DEFAULT: Final[DefaultType] = DefaultType()
"""
Sentinel asking for the late-bound default.
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def _if_sentinel(
        value: Any,
        sentinel: Any,
        *,
        default: Any = None,
        default_factory: Callable[[], Any] | None = None
) -> Any:
    """
    Return value if it is not the sentinel, otherwise the default.

    Raises:
        ValueError: If both default and default_factory are provided.
    """
    if value is not sentinel:
        return value

    if default_factory is not None and default is not None:
        raise ValueError("Cannot specify both default and default_factory")

    if default_factory is not None:
        return default_factory()

    return default


def ifnotdefault(value: Any, *, default: Any = None, default_factory: Callable[[], Any] | None = None) -> Any:
    """
    Return value if it's not DEFAULT, otherwise return default.

    Example:
        >>> import sys
        >>> stream = ifnotdefault(DEFAULT, default_factory=lambda: sys.stdout)
    """
    return _if_sentinel(value, DEFAULT, default=default, default_factory=default_factory)
