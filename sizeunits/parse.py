"""
Byte-level parsers for size strings and unit suffixes.

A size string is ``<digits>['.'<digits>][spaces][unit]`` after trimming. The
numeric literal is accumulated into an exact Decimal, the remaining bytes are
matched against the unit grammar by a small recursive-descent parser:

    unit   := EOF | ('B'|'b') b_tail | LETTER ib_tail
    ib_tail:= EOF | ('i'|'I') EOF | ('i'|'I')? ('B'|'b') b_tail
    b_tail := EOF | 'i' 't' ['s'] EOF            (case-insensitive "it"/"its")

LETTER is one of K M G T P E, plus Z Y in wide mode, matched case-insensitively.
Input is scanned as UTF-8 bytes; a multi-byte character is decoded only to report
it in a UnitParseError or NotNumberError.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from decimal import Decimal

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import NoValueError, NotNumberError, NumberTooLongError, UnitParseError
from .numeric import MAX_MANTISSA, MAX_SCALE, scale_decimal
from .tools import fmt_type, utf8_char_at
from .units import Unit, magnitude_letters


# Classes --------------------------------------------------------------------------------------------------------------

class ByteCursor:
    """
    Forward-only cursor over the UTF-8 encoding of a string.

    ``next()`` yields one-byte ``bytes`` objects so ASCII tests read naturally
    (``b == b"B"``, ``b.isdigit()``, ``b.upper()``).
    """
    __slots__ = ("data", "pos")

    def __init__(self, text: str | bytes):
        self.data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        self.pos = 0

    def next(self) -> bytes | None:
        if self.pos >= len(self.data):
            return None
        self.pos += 1
        return self.data[self.pos - 1:self.pos]

    def last_char(self) -> str:
        """Full character whose first byte was returned by the latest ``next()``."""
        return utf8_char_at(self.data, self.pos - 1)


# Methods --------------------------------------------------------------------------------------------------------------

def parse_unit(text: str, *, ignore_case: bool = False, prefer_byte: bool = True) -> Unit:
    """
    Parse a complete unit suffix, the input must already be trimmed.

    Raises:
        UnitParseError: If the text is not a unit.
    """
    cursor = ByteCursor(text)
    return read_unit(cursor.next(), cursor, ignore_case=ignore_case, prefer_byte=prefer_byte)


def parse_quantity(text: str, *, ignore_case: bool = False, prefer_byte: bool = False) -> tuple[Decimal, Unit]:
    """
    Split a size string into its exact numeric value and its unit.

    Args:
        text: Size text such as ``"1.2 KiB"``; surrounding whitespace is ignored.
        ignore_case: Treat ``b`` and ``B`` alike, as a byte indicator.
        prefer_byte: Resolve a missing or ambiguous unit to bytes instead of bits.

    Returns:
        Tuple of (value, unit). The value is not yet scaled by the unit.

    Raises:
        TypeError: If text is not a str.
        ValueParseError: If the numeric literal is missing or malformed.
        UnitParseError: If the unit suffix is malformed.

    Examples:
        >>> parse_quantity("1.2kb")
        (Decimal('1.2'), <Unit.KBIT: 'Kb'>)
        >>> parse_quantity("2 kib", ignore_case=True, prefer_byte=True)
        (Decimal('2'), <Unit.KIB: 'KiB'>)
    """
    if not isinstance(text, str):
        raise TypeError(f"size text must be a str, but got {fmt_type(text)}")

    cursor = ByteCursor(text.strip())
    value, first = read_number(cursor)
    unit = read_unit(first, cursor, ignore_case=ignore_case, prefer_byte=prefer_byte)
    return value, unit


def read_number(cursor: ByteCursor) -> tuple[Decimal, bytes | None]:
    """
    Read an unsigned decimal literal and the spaces that follow it.

    Returns:
        Tuple of (value, first unit byte or None at end of input).

    Raises:
        NoValueError: If the input is empty.
        NotNumberError: If the input does not start with a digit or a '.' is not followed by a digit.
        NumberTooLongError: If the literal does not fit a 96-bit mantissa with at most 28 fractional digits.
    """
    b = cursor.next()
    if b is None:
        raise NoValueError()
    if not b.isdigit():
        raise NotNumberError(cursor.last_char())

    mantissa = int(b)
    scale = 0

    while True:
        b = cursor.next()
        if b is None:
            return scale_decimal(mantissa, scale), None
        if b.isdigit():
            mantissa = mantissa * 10 + int(b)
            if mantissa > MAX_MANTISSA:
                raise NumberTooLongError()
        elif b == b".":
            break
        elif b == b" ":
            return scale_decimal(mantissa, scale), _skip_spaces(cursor)
        else:
            return scale_decimal(mantissa, scale), b

    # Fractional part; at least one digit is required
    while True:
        b = cursor.next()
        if b is None:
            if scale == 0:
                # "1." reports the dot itself
                raise NotNumberError(".")
            return scale_decimal(mantissa, scale), None
        if b.isdigit():
            scale += 1
            if scale > MAX_SCALE:
                raise NumberTooLongError()
            mantissa = mantissa * 10 + int(b)
            continue
        if scale == 0:
            raise NotNumberError(cursor.last_char())
        if b == b" ":
            return scale_decimal(mantissa, scale), _skip_spaces(cursor)
        return scale_decimal(mantissa, scale), b


def read_unit(first: bytes | None, cursor: ByteCursor, *, ignore_case: bool, prefer_byte: bool) -> Unit:
    """
    Read a unit suffix whose first byte was already taken from the cursor.

    Args:
        first: First byte of the suffix, None at end of input.
        cursor: Cursor positioned after ``first``.
        ignore_case: Treat ``b`` and ``B`` alike, as a byte indicator.
        prefer_byte: Resolve a missing or bare-letter suffix to bytes instead of bits.

    Raises:
        UnitParseError: On the first byte that does not fit the grammar.
    """
    if first is None:
        return Unit.B if prefer_byte else Unit.BIT

    letter = first.upper()
    if letter == b"B":
        byte = _read_b_tail(cursor, ignore_case or first == b"B")
        return Unit.B if byte else Unit.BIT

    letters = magnitude_letters()
    prefix = letter.decode("ascii", errors="replace")
    if prefix in letters:
        binary, byte = _read_ib_tail(cursor, ignore_case, prefer_byte)
        return Unit(f"{prefix}{'i' if binary else ''}{'B' if byte else 'b'}")

    raise UnitParseError(cursor.last_char(), ("B", *letters), also_expect_no_character=True)


# Private Methods ------------------------------------------------------------------------------------------------------

def _skip_spaces(cursor: ByteCursor) -> bytes | None:
    b = cursor.next()
    while b == b" ":
        b = cursor.next()
    return b


def _read_ib_tail(cursor: ByteCursor, ignore_case: bool, default_byte: bool) -> tuple[bool, bool]:
    """Read what follows a magnitude letter, returns (binary, byte)."""
    b = cursor.next()
    if b is None:
        return False, default_byte

    binary = b in (b"i", b"I")
    if binary:
        b = cursor.next()
        if b is None:
            return True, default_byte

    if b in (b"b", b"B"):
        return binary, _read_b_tail(cursor, ignore_case or b == b"B")

    if ignore_case:
        expected = ("B",) if default_byte else ("b",)
    else:
        expected = ("B", "b")
    raise UnitParseError(cursor.last_char(), expected, also_expect_no_character=True)


def _read_b_tail(cursor: ByteCursor, byte: bool) -> bool:
    """Read the optional "it"/"its" after a b/B, returns True for a byte unit."""
    b = cursor.next()
    if b is None:
        return byte
    if b.lower() != b"i":
        raise UnitParseError(cursor.last_char(), ("i",), also_expect_no_character=True)

    b = cursor.next()
    if b is None:
        raise UnitParseError("i", (), also_expect_no_character=True)
    if b.lower() != b"t":
        raise UnitParseError(cursor.last_char(), ("t",), also_expect_no_character=False)

    b = cursor.next()
    if b is None:
        return False
    if b.lower() != b"s":
        raise UnitParseError(cursor.last_char(), ("s",), also_expect_no_character=True)

    b = cursor.next()
    if b is None:
        return False
    raise UnitParseError(cursor.last_char(), (), also_expect_no_character=True)
