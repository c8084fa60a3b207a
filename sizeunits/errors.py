"""
Exceptions raised while building, converting and parsing bit/byte sizes.

All exceptions derive from SizeError, which is a ValueError, so callers that only
care about "bad input" can catch ValueError. Parsing failures carry structured
details (offending character, expected characters, offending number) so a precise
diagnostic can be produced without re-parsing the input.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from decimal import Decimal
from typing import Iterable

__all__ = [
    'SizeError',
    'ExceededBoundsError',
    'IntegerConversionError',
    'ParseError',
    'ValueParseError',
    'NoValueError',
    'NotNumberError',
    'NumberTooLongError',
    'ValueExceededBoundsError',
    'UnitParseError',
]


# Classes --------------------------------------------------------------------------------------------------------------

class SizeError(ValueError):
    """Base class for all size errors."""


class ExceededBoundsError(SizeError):
    """
    The requested or computed magnitude is outside [0, MAX] of the target size type.

    Attributes:
        value: The offending value when known, otherwise None.
    """

    def __init__(self, message: str | None = None, *, value: object = None) -> None:
        self.value = value
        super().__init__(message or "value exceeds the valid range")


class IntegerConversionError(SizeError, OverflowError):
    """
    The magnitude does not fit into the requested fixed-width integer type.

    Attributes:
        magnitude: The magnitude that failed to convert.
        bits: Width of the requested unsigned integer type.
    """

    def __init__(self, magnitude: int, bits: int) -> None:
        self.magnitude = magnitude
        self.bits = bits
        super().__init__(f"magnitude {magnitude} does not fit into an unsigned {bits}-bit integer")


class ParseError(SizeError):
    """Base class for errors raised when parsing a size or a unit string."""


class ValueParseError(ParseError):
    """The numeric part of a size string is malformed or out of range."""


class NoValueError(ValueParseError):
    def __init__(self) -> None:
        super().__init__("no value can be found")


class NotNumberError(ValueParseError):
    """
    A character was found where a digit was required.

    Attributes:
        character: The offending character.
    """

    def __init__(self, character: str) -> None:
        self.character = character
        super().__init__(f"the character {character!r} is not a number")


class NumberTooLongError(ValueParseError):
    def __init__(self) -> None:
        super().__init__("value number is too long")


class ValueExceededBoundsError(ValueParseError, ExceededBoundsError):
    """
    The parsed number, scaled by its unit, does not fit into the size type.

    Attributes:
        value: The parsed number before scaling by the unit.
    """

    def __init__(self, value: Decimal) -> None:
        ExceededBoundsError.__init__(self, f"the value {value} exceeds the valid range", value=value)


class UnitParseError(ParseError):
    """
    An unexpected character was found in a unit suffix.

    Attributes:
        character: The offending character, decoded from the input.
        expected_characters: Characters that would have been accepted at that position.
        also_expect_no_character: True if the end of input was also acceptable there.
    """

    def __init__(
            self,
            character: str,
            expected_characters: Iterable[str] = (),
            also_expect_no_character: bool = False,
    ) -> None:
        self.character = character
        self.expected_characters = tuple(expected_characters)
        self.also_expect_no_character = also_expect_no_character
        super().__init__(self._message())

    def _message(self) -> str:
        options = [repr(c) for c in self.expected_characters]
        if self.also_expect_no_character:
            options.append("no character")

        if not self.expected_characters:
            return f"the character {self.character!r} is incorrect (no character is expected)"

        if len(options) == 1:
            expected = options[0]
        else:
            expected = f"{', '.join(options[:-1])} or {options[-1]}"
        return f"the character {self.character!r} is incorrect ({expected} is expected)"
