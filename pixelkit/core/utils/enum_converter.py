"""
Enum conversion utilities.

Provides standardized parsing of strings into enums,
with support for case-insensitive parsing. Engine entry points accept either
enum members or their string values and go through parse_enum.
"""

from typing import Any, Type, TypeVar

T = TypeVar("T")

_MISSING = object()


def parse_enum(value: Any, enum_class: Type[T], default: Any = _MISSING, normalize: bool = True) -> T:
    """
    Parse value to enum.

    Args:
        value: Value to parse (string, enum, int or None)
        enum_class: Enum class to parse to
        default: Value returned for None; if omitted, None is rejected
        normalize: Whether to lowercase strings before parsing
            (for case-insensitive matching)

    Returns:
        Parsed enum value

    Raises:
        ValueError: If the value does not name a member of enum_class

    Example:
        >>> parse_enum("REFLECT", BorderMode)
        >>> # Returns BorderMode.REFLECT for "reflect", "Reflect", "REFLECT"
    """
    # Already an enum instance
    if isinstance(value, enum_class):
        return value

    if value is None:
        if default is _MISSING:
            raise ValueError(f"Missing {enum_class.__name__} value")
        return default

    try:
        str_value = value.lower() if normalize and isinstance(value, str) else value
        return enum_class(str_value)
    except (ValueError, AttributeError):
        choices = ", ".join(str(member.value) for member in enum_class)
        raise ValueError(f"Invalid {enum_class.__name__}: {value!r} (expected one of: {choices})") from None

