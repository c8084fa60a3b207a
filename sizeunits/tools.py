#
# SizeUnits Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any) -> str:
    """
    Format type information for exception messages.

    Args:
        obj: A type or an instance; instances are formatted by their type.

    Returns:
        Formatted type string like "<type: int>".

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(float)
        '<type: float>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)
    type_name = getattr(target_type, "__name__", str(target_type))
    return _fmt_format_pair("type", type_name)


def fmt_value(x: Any, *, max_repr: int = 120) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    A ``>`` inside the repr is escaped so the pair stays unambiguous.

    Args:
        x: Any Python object to format.
        max_repr: Maximum length of the value's repr before truncation.

    Returns:
        Formatted string like "<int: 42>".

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("12 KiB")
        "<str: '12 KiB'>"
    """
    t = type(x).__name__
    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    base_repr = base_repr.replace(">", "\\>")

    if max_repr > 0 and len(base_repr) > max_repr:
        base_repr = base_repr[:max_repr] + "..."
    return _fmt_format_pair(t, base_repr)


def utf8_char_at(data: bytes, index: int) -> str:
    """
    Decode the full UTF-8 character whose first byte is at ``data[index]``.

    Malformed sequences decode to the replacement character so a diagnostic can
    always be produced.

    Examples:
        >>> utf8_char_at("1 €".encode(), 2)
        '€'
    """
    lead = data[index]
    if lead < 0x80:
        length = 1
    elif lead >> 5 == 0b110:
        length = 2
    elif lead >> 4 == 0b1110:
        length = 3
    elif lead >> 3 == 0b11110:
        length = 4
    else:
        length = 1
    return data[index:index + length].decode("utf-8", errors="replace")[:1]


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_format_pair(type_name: str, value_repr: str) -> str:
    return f"<{type_name}: {value_repr}>"
