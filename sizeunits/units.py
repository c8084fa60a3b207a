#
# SizeUnits Units of Measurement
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_value


# Configuration --------------------------------------------------------------------------------------------------------

@dataclass
class SizeConf:
    """
    Runtime configuration shared by units, parsers and size types.

    Attributes:
        wide: Wide mode. Magnitudes are bounded by 10**27 - 1 and Zetta/Yotta units are
            available. In narrow mode magnitudes are bounded by 2**64 - 1 and Zetta/Yotta
            units are rejected by the parser and excluded from every unit table.
        default_precision: Fractional digits used by exact-unit formatting when none is given.
        max_precision: Upper bound for the recoverable-unit search precision.
    """
    wide: bool = True
    default_precision: int = 3
    max_precision: int = 28

    @property
    def max_magnitude(self) -> int:
        return WIDE_MAX if self.wide else NARROW_MAX


WIDE_MAX = 10 ** 27 - 1
NARROW_MAX = 2 ** 64 - 1

size_conf = SizeConf()


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class UnitType(StrEnum):
    """
    Unit families considered by the appropriate-unit search.

    Attributes:
        BINARY (str)  : Powers of 2 only - Kib, MiB, ...
        DECIMAL (str) : Powers of 10 only - Kb, MB, ...
        BOTH (str)    : Every multiple, ordered by magnitude
    """
    BINARY = "binary"
    DECIMAL = "decimal"
    BOTH = "both"


# @formatter:off
@unique
class Unit(StrEnum):
    """
    Closed set of bit and byte units.

    The member value is the canonical symbol: bit units end in a lowercase ``b``,
    byte units in an uppercase ``B``, binary multiples carry an ``i``.

    Examples:
        >>> Unit.KIB.as_bits()
        8192
        >>> str(Unit.MBIT)
        'Mb'
    """
    BIT = "b"
    B = "B"

    KBIT = "Kb"
    KIBIT = "Kib"
    KB = "KB"
    KIB = "KiB"

    MBIT = "Mb"
    MIBIT = "Mib"
    MB = "MB"
    MIB = "MiB"

    GBIT = "Gb"
    GIBIT = "Gib"
    GB = "GB"
    GIB = "GiB"

    TBIT = "Tb"
    TIBIT = "Tib"
    TB = "TB"
    TIB = "TiB"

    PBIT = "Pb"
    PIBIT = "Pib"
    PB = "PB"
    PIB = "PiB"

    EBIT = "Eb"
    EIBIT = "Eib"
    EB = "EB"
    EIB = "EiB"

    ZBIT = "Zb"
    ZIBIT = "Zib"
    ZB = "ZB"
    ZIB = "ZiB"

    YBIT = "Yb"
    YIBIT = "Yib"
    YB = "YB"
    YIB = "YiB"
# @formatter:on

    # Metadata ---------------------------------------------------------------------------------------------------------

    @property
    def prefix(self) -> str:
        """Magnitude letter of the unit, empty for the base units."""
        return "" if self in (Unit.BIT, Unit.B) else self.value[0]

    @property
    def is_bit(self) -> bool:
        return self.value.endswith("b")

    @property
    def is_binary_multiple(self) -> bool:
        """True for powers of 2, including the byte base unit (2**3 bits)."""
        return self is Unit.B or "i" in self.value

    @property
    def is_wide(self) -> bool:
        """True for the Zetta and Yotta units that only exist in wide mode."""
        return self.prefix in _WIDE_PREFIXES

    def as_bits(self) -> int:
        """
        Exact magnitude of the unit in bits.

        Raises:
            ValueError: If the unit is a Zetta/Yotta unit and wide mode is off.
        """
        self._check_available()
        return UNIT_BITS[self]

    def as_bytes(self) -> int:
        """Exact magnitude of the unit in bytes, 0 for a single bit."""
        return self.as_bits() >> 3

    # Tables -----------------------------------------------------------------------------------------------------------

    @classmethod
    def multiples(cls) -> list[Self]:
        """All multiples, ascending by magnitude: Kbit, Kibit, KB, KiB, Mbit, ..."""
        return [u for u in _MULTIPLES if size_conf.wide or not u.is_wide]

    @classmethod
    def multiples_bits(cls) -> list[Self]:
        """Bit multiples, ascending by magnitude: Kbit, Kibit, Mbit, Mibit, ..."""
        return [u for u in cls.multiples() if u.is_bit]

    @classmethod
    def multiples_bytes(cls) -> list[Self]:
        """Byte multiples, ascending by magnitude: KB, KiB, MB, MiB, ..."""
        return [u for u in cls.multiples() if not u.is_bit]

    @classmethod
    def available(cls) -> list[Self]:
        """Every unit usable under the active configuration, base units first."""
        return [cls.BIT, cls.B, *cls.multiples()]

    # Parsing ----------------------------------------------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str, ignore_case: bool = False, prefer_byte: bool = True) -> Self:
        """
        Parse a unit symbol such as ``"KiB"``, ``"kb"``, ``"Mibit"`` or ``""``.

        Magnitude letters are always case-insensitive. The case of the trailing ``b``
        selects bit (``b``) or byte (``B``) unless ``ignore_case`` is set, in which
        case the unit is a byte unit. An empty string or a bare magnitude letter
        resolves to a byte or a bit unit according to ``prefer_byte``.

        Args:
            text: Unit text; surrounding whitespace is ignored.
            ignore_case: Treat ``b`` and ``B`` alike, as a byte indicator.
            prefer_byte: Resolve ambiguous input to byte units instead of bit units.

        Returns:
            The parsed Unit.

        Raises:
            TypeError: If text is not a str.
            UnitParseError: If text is not a valid unit.

        Examples:
            >>> Unit.parse("Ki")
            <Unit.KIB: 'KiB'>
            >>> Unit.parse("kbits", prefer_byte=False)
            <Unit.KBIT: 'Kb'>
        """
        from .parse import parse_unit

        if not isinstance(text, str):
            raise TypeError(f"unit text must be a str, but got {fmt_value(text)}")
        return parse_unit(text.strip(), ignore_case=ignore_case, prefer_byte=prefer_byte)

    @classmethod
    def from_str(cls, text: str) -> Self:
        """Parse with the default flags: case-sensitive, byte-preferring."""
        return cls.parse(text)

    # Private Methods --------------------------------------------------------------------------------------------------

    def _check_available(self) -> None:
        if self.is_wide and not size_conf.wide:
            raise ValueError(f"unit {fmt_value(self.value)} requires wide mode")


# Unit tables ----------------------------------------------------------------------------------------------------------

_PREFIX_EXPONENTS = {"": 0, "K": 1, "M": 2, "G": 3, "T": 4, "P": 5, "E": 6, "Z": 7, "Y": 8}
_WIDE_PREFIXES = ("Z", "Y")


def _unit_bits(unit: Unit) -> int:
    base = 1024 if "i" in unit.value else 1000
    bits = base ** _PREFIX_EXPONENTS[unit.prefix]
    return bits if unit.is_bit else bits * 8


# Exact bit magnitudes of every unit, independent of the wide-mode gate
UNIT_BITS = {u: _unit_bits(u) for u in Unit}

# Member order within each prefix group is already ascending: Kb < Kib < KB < KiB
_MULTIPLES = tuple(u for u in Unit if u.prefix)

MAGNITUDE_LETTERS = tuple(p for p in _PREFIX_EXPONENTS if p)


def magnitude_letters() -> tuple[str, ...]:
    """Magnitude letters accepted under the active configuration."""
    if size_conf.wide:
        return MAGNITUDE_LETTERS
    return tuple(p for p in MAGNITUDE_LETTERS if p not in _WIDE_PREFIXES)
