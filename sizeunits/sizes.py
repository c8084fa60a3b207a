"""
Exact bit and byte size value types.

BitSize and ByteSize wrap a non-negative integer magnitude (bits or bytes). The
magnitude is the only source of truth: construction, parsing and arithmetic are
checked against the active bounds, fractional inputs are rounded up so a size is
never under-represented, and every unit-selection algorithm works on the exact
integer.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import warnings
from decimal import Decimal
from dataclasses import dataclass
from typing import Any, ClassVar, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .display import Align, SizeFormat, Spacing, format_size
from .errors import ExceededBoundsError, IntegerConversionError, ValueExceededBoundsError
from .numeric import ceil_to_int, exact_div, exact_mul, quantize_fraction, strip_decimal, to_decimal
from .parse import parse_quantity
from .tools import fmt_type, fmt_value
from .units import UNIT_BITS, Unit, UnitType, size_conf

__all__ = ["BitSize", "ByteSize"]

_UINT_WIDTHS = (8, 16, 32, 64, 128)


# Classes --------------------------------------------------------------------------------------------------------------

class _Bound:
    """Class-level MIN/MAX resolved against size_conf on every access."""

    def __init__(self, upper: bool):
        self.upper = upper

    def __get__(self, obj, owner):
        return owner.from_int_unchecked(size_conf.max_magnitude if self.upper else 0)


@dataclass(frozen=True, slots=True, eq=False)
class Size:
    """
    Shared implementation of BitSize and ByteSize.

    Subclasses define the base unit and how a unit maps onto their magnitude;
    everything else (construction, arithmetic, conversion, unit selection,
    formatting) is implemented once here.

    Attributes:
        magnitude: Exact count of bits or bytes.

    Raises:
        TypeError: If magnitude is not an int.
        ExceededBoundsError: If magnitude is negative or larger than MAX.
    """
    magnitude: int

    BASE_UNIT: ClassVar[Unit]
    MIN: ClassVar[_Bound] = _Bound(upper=False)
    MAX: ClassVar[_Bound] = _Bound(upper=True)

    def __post_init__(self):
        _check_int(self.magnitude, "magnitude")
        _check_bounds(self.magnitude)

    # Unit magnitudes --------------------------------------------------------------------------------------------------

    @classmethod
    def unit_magnitude(cls, unit: Unit) -> int:
        """Magnitude of one ``unit`` expressed in this type's base unit."""
        raise NotImplementedError

    @classmethod
    def own_multiples(cls) -> list[Unit]:
        """Multiples of the same kind as this type, ascending."""
        raise NotImplementedError

    # Construction -----------------------------------------------------------------------------------------------------

    @classmethod
    def from_int_unchecked(cls, magnitude: int) -> Self:
        """
        Create a size without any type or bounds checks.

        The caller guarantees that magnitude is a non-negative int not larger than MAX.
        """
        obj = object.__new__(cls)
        object.__setattr__(obj, "magnitude", magnitude)
        return obj

    @classmethod
    def from_int(cls, size: int) -> Self:
        """
        Create a size from an integer count of the base unit.

        Raises:
            TypeError: If size is not an int.
            ExceededBoundsError: If size is negative or larger than MAX.
        """
        return cls.from_int_with_unit(size, cls.BASE_UNIT)

    @classmethod
    def from_int_with_unit(cls, size: int, unit: Unit) -> Self:
        """
        Create a size from an integer count of ``unit``.

        A byte size built from a number of bits that is not a multiple of 8 is rounded up.

        Examples:
            >>> BitSize.from_int_with_unit(15, Unit.MBIT)
            BitSize(magnitude=15000000)
            >>> ByteSize.from_int_with_unit(9, Unit.BIT)
            ByteSize(magnitude=2)
        """
        _check_int(size, "size")
        unit = _check_unit(unit)
        if size < 0:
            raise ExceededBoundsError(f"the value {size} exceeds the valid range", value=size)

        if unit is cls.BASE_UNIT:
            magnitude = size
        elif unit is Unit.BIT:
            magnitude = -(-size // 8)
        else:
            magnitude = size * cls.unit_magnitude(unit)
        return cls._checked(magnitude, size)

    @classmethod
    def from_float(cls, size: float) -> Self:
        """
        Create a size from a float count of the base unit, rounding up.

        Examples:
            >>> BitSize.from_float(15.2)
            BitSize(magnitude=16)
        """
        return cls.from_float_with_unit(size, cls.BASE_UNIT)

    @classmethod
    def from_float_with_unit(cls, size: float, unit: Unit) -> Self:
        """
        Create a size from a float count of ``unit``, rounding the product up.

        The float is taken at its shortest decimal repr, so ``0.1`` Kbit is 100 bits.

        Raises:
            TypeError: If size is not a float or an int.
            ExceededBoundsError: If size is negative, not finite, or the result exceeds MAX.
        """
        if isinstance(size, bool) or not isinstance(size, (int, float)):
            raise TypeError(f"size must be a float, but got {fmt_type(size)}")
        return cls.from_decimal_with_unit(_as_decimal(size), unit)

    @classmethod
    def from_decimal(cls, size: Decimal) -> Self:
        return cls.from_decimal_with_unit(size, cls.BASE_UNIT)

    @classmethod
    def from_decimal_with_unit(cls, size: Decimal | int | float, unit: Unit) -> Self:
        """
        Create a size from an exact decimal count of ``unit``, rounding the product up.

        Raises:
            TypeError: If size is not a Decimal, int or float.
            ExceededBoundsError: If size is negative, not finite, or the result exceeds MAX.
        """
        value = _as_decimal(size)
        magnitude = cls._magnitude_from_decimal(value, _check_unit(unit))
        if magnitude is None:
            raise ExceededBoundsError(f"the value {value} exceeds the valid range", value=value)
        return cls.from_int_unchecked(magnitude)

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse a size string, see subclasses for the unit rules."""
        raise NotImplementedError

    @classmethod
    def rounded_up_magnitude(cls, value: Decimal, unit: Unit) -> int:
        """
        Magnitude of ``value`` x ``unit`` rounded up, without any bounds check.

        Examples:
            >>> ByteSize.rounded_up_magnitude(Decimal("1.1"), Unit.BIT)
            1
            >>> BitSize.rounded_up_magnitude(Decimal("16.0"), Unit.EIBIT)
            18446744073709551616
        """
        if unit is cls.BASE_UNIT:
            scaled = value
        elif unit is Unit.BIT:
            scaled = exact_div(value, 8)
        else:
            scaled = exact_mul(value, cls.unit_magnitude(unit))
        return ceil_to_int(scaled)

    # Conversion -------------------------------------------------------------------------------------------------------

    def as_int(self) -> int:
        return self.magnitude

    def as_u64(self) -> int:
        """Magnitude saturated to the largest unsigned 64-bit integer."""
        return self.as_uint(64)

    def as_u64_checked(self) -> int:
        """
        Magnitude as an unsigned 64-bit integer.

        Raises:
            IntegerConversionError: If the magnitude does not fit 64 bits.
        """
        return self.as_uint(64, checked=True)

    def as_uint(self, bits: int, checked: bool = False) -> int:
        """
        Magnitude as an unsigned integer of the given width.

        Args:
            bits: Integer width, one of 8, 16, 32, 64, 128.
            checked: Raise instead of saturating when the magnitude does not fit.

        Raises:
            ValueError: If bits is not a supported width.
            IntegerConversionError: If checked and the magnitude does not fit.
        """
        if bits not in _UINT_WIDTHS:
            raise ValueError(f"bits must be one of {_UINT_WIDTHS} but found {fmt_value(bits)}")

        limit = 2 ** bits - 1
        if self.magnitude <= limit:
            return self.magnitude
        if checked:
            raise IntegerConversionError(self.magnitude, bits)
        return limit

    def __int__(self) -> int:
        return self.magnitude

    # Arithmetic -------------------------------------------------------------------------------------------------------

    def add(self, other: Self) -> Self:
        """
        Raises:
            ExceededBoundsError: If the sum exceeds MAX.
        """
        self._check_same_kind(other)
        return self._checked(self.magnitude + other.magnitude)

    def subtract(self, other: Self) -> Self:
        """
        Raises:
            ExceededBoundsError: If other is larger than self.
        """
        self._check_same_kind(other)
        if other.magnitude > self.magnitude:
            raise ExceededBoundsError(
                f"cannot subtract {other.magnitude} from {self.magnitude}, the result would be negative",
                value=self.magnitude - other.magnitude,
            )
        return self.from_int_unchecked(self.magnitude - other.magnitude)

    def multiply(self, factor: int) -> Self:
        """
        Raises:
            ExceededBoundsError: If the product exceeds MAX.
        """
        _check_int(factor, "factor")
        _check_non_negative(factor, "factor")
        return self._checked(self.magnitude * factor)

    def divide(self, divisor: int) -> Self:
        """
        Floor division by a non-negative integer.

        Raises:
            ZeroDivisionError: If divisor is zero.
        """
        _check_int(divisor, "divisor")
        _check_non_negative(divisor, "divisor")
        if divisor == 0:
            raise ZeroDivisionError(f"cannot divide {type(self).__name__} by zero")
        return self.from_int_unchecked(self.magnitude // divisor)

    def __add__(self, other: Any) -> Self:
        if type(other) is not type(self):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> Self:
        if type(other) is not type(self):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: Any) -> Self:
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __floordiv__(self, other: Any) -> Self:
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return self.divide(other)

    # Comparison -------------------------------------------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        other_magnitude = self._comparable(other)
        if other_magnitude is None:
            return NotImplemented
        return self.magnitude == other_magnitude

    def __lt__(self, other: Any) -> bool:
        other_magnitude = self._comparable(other)
        if other_magnitude is None:
            return NotImplemented
        return self.magnitude < other_magnitude

    def __le__(self, other: Any) -> bool:
        other_magnitude = self._comparable(other)
        if other_magnitude is None:
            return NotImplemented
        return self.magnitude <= other_magnitude

    def __gt__(self, other: Any) -> bool:
        other_magnitude = self._comparable(other)
        if other_magnitude is None:
            return NotImplemented
        return self.magnitude > other_magnitude

    def __ge__(self, other: Any) -> bool:
        other_magnitude = self._comparable(other)
        if other_magnitude is None:
            return NotImplemented
        return self.magnitude >= other_magnitude

    def __hash__(self) -> int:
        return hash(self.magnitude)

    # Unit selection ---------------------------------------------------------------------------------------------------

    def get_exact_unit(self, allow_cross_kind: bool = False) -> tuple[int, Unit]:
        """
        Largest unit that divides the magnitude evenly.

        Args:
            allow_cross_kind: Also consider units of the other kind (byte units for a
                bit size, bit units for a byte size).

        Returns:
            Tuple of (integer quotient, unit); (magnitude, base unit) if no multiple divides it.

        Examples:
            >>> BitSize(3145728).get_exact_unit(True)
            (3, <Unit.MIBIT: 'Mib'>)
            >>> ByteSize(375000).get_exact_unit(True)
            (3, <Unit.MBIT: 'Mb'>)
        """
        m = self.magnitude
        for unit in reversed(self._candidates(allow_cross_kind)):
            u = self.unit_magnitude(unit)
            if m >= u and m % u == 0:
                return m // u, unit
        return m, self.BASE_UNIT

    def get_recoverable_unit(self, allow_cross_kind: bool = False, precision: int | None = None) -> tuple[Decimal, Unit]:
        """
        Largest unit whose value, rounded to ``precision`` fractional digits, reconstructs the magnitude.

        Args:
            allow_cross_kind: Also consider units of the other kind.
            precision: Fractional digits of the value, default size_conf.default_precision.
                Values above size_conf.max_precision are clamped with a warning.

        Returns:
            Tuple of (exact Decimal value, unit); (magnitude, base unit) if no unit qualifies.

        Examples:
            >>> BitSize(3670016).get_recoverable_unit(False, 3)
            (Decimal('3.5'), <Unit.MIBIT: 'Mib'>)
            >>> ByteSize(123456).get_recoverable_unit(False, 3)
            (Decimal('123.456'), <Unit.KB: 'KB'>)
        """
        precision = _check_precision(precision)
        m = self.magnitude

        for unit in reversed(self._candidates(allow_cross_kind)):
            u = self.unit_magnitude(unit)
            if m < u:
                continue
            quotient = quantize_fraction(exact_div(m, u), precision)
            if exact_mul(quotient, u) == m:
                return strip_decimal(quotient), unit
        return Decimal(m), self.BASE_UNIT

    def get_appropriate_unit(self, unit_type: UnitType = UnitType.BOTH):
        """
        Largest unit of the same kind not larger than the magnitude, as an adjusted value.

        The value is a float and may be rounded; use get_recoverable_unit() for an exact result.

        Args:
            unit_type: Consider binary multiples, decimal multiples or both.

        Examples:
            >>> str(BitSize(15000000).get_appropriate_unit(UnitType.DECIMAL))
            '15 Mb'
            >>> str(BitSize(15000000).get_appropriate_unit(UnitType.BINARY))
            '14.30511474609375 Mib'
        """
        unit_type = UnitType(unit_type)
        units = list(reversed(self.own_multiples()))
        if unit_type == UnitType.BINARY:
            units = units[0::2]
        elif unit_type == UnitType.DECIMAL:
            units = units[1::2]

        m = self.magnitude
        for unit in units:
            if m >= self.unit_magnitude(unit):
                return self.get_adjusted_unit(unit)
        return self.get_adjusted_unit(self.BASE_UNIT)

    def get_adjusted_unit(self, unit: Unit):
        """
        Express the magnitude as a float count of ``unit``.

        Examples:
            >>> str(BitSize.from_int_with_unit(1555, Unit.KBIT).get_adjusted_unit(Unit.MBIT))
            '1.555 Mb'
        """
        unit = _check_unit(unit)
        value = self.magnitude * UNIT_BITS[self.BASE_UNIT] / unit.as_bits()
        return self._adjusted(value, unit)

    @classmethod
    def _adjusted(cls, value: float, unit: Unit):
        raise NotImplementedError

    # Formatting -------------------------------------------------------------------------------------------------------

    def format(
            self,
            *,
            exact: bool = False,
            width: int | None = None,
            precision: int | None = None,
            align: Align | str | None = None,
            fill: str = " ",
            spacing: Spacing | str = Spacing.NORMAL,
    ) -> str:
        """
        Keyword form of format(size, spec).

        Examples:
            >>> BitSize(10240).format(exact=True, width=10, align=">")
            '    10 Kib'
        """
        fmt = SizeFormat(fill=fill, align=align, spacing=spacing, exact=exact, width=width, precision=precision)
        return format_size(self, fmt)

    def __format__(self, format_spec: str) -> str:
        return format_size(self, SizeFormat.parse(format_spec))

    def __str__(self) -> str:
        return str(self.magnitude)

    # Private Methods --------------------------------------------------------------------------------------------------

    @classmethod
    def _checked(cls, magnitude: int, value: Any = None) -> Self:
        if not 0 <= magnitude <= size_conf.max_magnitude:
            shown = magnitude if value is None else value
            raise ExceededBoundsError(f"the value {shown} exceeds the valid range", value=shown)
        return cls.from_int_unchecked(magnitude)

    @classmethod
    def _magnitude_from_decimal(cls, value: Decimal, unit: Unit) -> int | None:
        magnitude = cls.rounded_up_magnitude(value, unit)
        if magnitude > size_conf.max_magnitude:
            return None
        return magnitude

    @classmethod
    def _candidates(cls, allow_cross_kind: bool) -> list[Unit]:
        return Unit.multiples() if allow_cross_kind else cls.own_multiples()

    @classmethod
    def _parse(cls, text: str, ignore_case: bool, prefer_byte: bool) -> Self:
        value, unit = parse_quantity(text, ignore_case=ignore_case, prefer_byte=prefer_byte)
        magnitude = cls._magnitude_from_decimal(value, unit)
        if magnitude is None:
            raise ValueExceededBoundsError(value)
        return cls.from_int_unchecked(magnitude)

    def _check_same_kind(self, other: Any) -> None:
        if type(other) is not type(self):
            raise TypeError(f"expected {fmt_type(self)} operand, but got {fmt_type(other)}")

    def _comparable(self, other: Any) -> int | None:
        if type(other) is type(self):
            return other.magnitude
        if isinstance(other, int) and not isinstance(other, bool):
            return other
        return None


class BitSize(Size):
    """
    A size counted in bits.

    Parsing is case-sensitive for the bit/byte indicator and a missing unit means bits.

    Examples:
        >>> BitSize.parse("123Kib")
        BitSize(magnitude=125952)
        >>> BitSize.parse("1.2kB").as_int()
        9600
        >>> f"{BitSize(10240):#}"
        '10 Kib'
    """
    __slots__ = ()

    BASE_UNIT = Unit.BIT

    @classmethod
    def unit_magnitude(cls, unit: Unit) -> int:
        return unit.as_bits()

    @classmethod
    def own_multiples(cls) -> list[Unit]:
        return Unit.multiples_bits()

    @classmethod
    def parse(cls, text: str) -> Self:
        """
        Parse a size string such as ``"123Kib"``, ``"1.2 kB"`` or ``"16 Eb"``.

        Raises:
            ValueParseError: If the number is missing, malformed, or out of range.
            UnitParseError: If the unit suffix is malformed.
        """
        return cls._parse(text, ignore_case=False, prefer_byte=False)

    @classmethod
    def from_byte_size(cls, size: "ByteSize") -> Self:
        """
        Raises:
            ExceededBoundsError: If the size in bits exceeds MAX.
        """
        if not isinstance(size, ByteSize):
            raise TypeError(f"expected ByteSize, but got {fmt_type(size)}")
        return cls._checked(size.magnitude * 8)

    def to_byte_size(self) -> "ByteSize":
        """Whole bytes, rounded up."""
        return ByteSize.from_bit_size(self)

    @classmethod
    def _adjusted(cls, value: float, unit: Unit):
        from .adjusted import AdjustedBit

        return AdjustedBit(value, unit)


class ByteSize(Size):
    """
    A size counted in bytes.

    A missing unit means bytes. The bit/byte indicator is case-sensitive unless
    ``ignore_case`` is passed to parse(), in which case it always means bytes.

    Examples:
        >>> ByteSize.parse("50.84 MB")
        ByteSize(magnitude=50840000)
        >>> ByteSize.parse("1.2kb").as_int()
        150
        >>> ByteSize.parse("1.2kb", ignore_case=True).as_int()
        1200
    """
    __slots__ = ()

    BASE_UNIT = Unit.B

    @classmethod
    def unit_magnitude(cls, unit: Unit) -> int:
        return unit.as_bytes()

    @classmethod
    def own_multiples(cls) -> list[Unit]:
        return Unit.multiples_bytes()

    @classmethod
    def parse(cls, text: str, ignore_case: bool = False) -> Self:
        """
        Parse a size string such as ``"123KiB"``, ``"50.84 MB"`` or ``"1.2 kb"``.

        Args:
            text: Size text; surrounding whitespace is ignored.
            ignore_case: Treat ``b`` as a byte indicator too.

        Raises:
            ValueParseError: If the number is missing, malformed, or out of range.
            UnitParseError: If the unit suffix is malformed.
        """
        return cls._parse(text, ignore_case=ignore_case, prefer_byte=True)

    @classmethod
    def from_bit_size(cls, size: BitSize) -> Self:
        """Whole bytes, rounded up."""
        if not isinstance(size, BitSize):
            raise TypeError(f"expected BitSize, but got {fmt_type(size)}")
        return cls.from_int_unchecked(-(-size.magnitude // 8))

    def to_bit_size(self) -> BitSize:
        return BitSize.from_byte_size(self)

    @classmethod
    def _adjusted(cls, value: float, unit: Unit):
        from .adjusted import AdjustedByte

        return AdjustedByte(value, unit)


# Named constants ------------------------------------------------------------------------------------------------------

# @formatter:off
_PREFIX_NAMES = {
    "K": ("KILO", "KIBI"), "M": ("MEGA", "MEBI"), "G": ("GIGA", "GIBI"), "T": ("TERA", "TEBI"),
    "P": ("PETA", "PEBI"), "E": ("EXA", "EXBI"), "Z": ("ZETTA", "ZEBI"), "Y": ("YOTTA", "YOBI"),
}
# @formatter:on


def _constant_name(unit: Unit) -> str:
    decimal_name, binary_name = _PREFIX_NAMES[unit.prefix]
    name = binary_name if "i" in unit.value else decimal_name
    return name + ("BIT" if unit.is_bit else "BYTE")


BitSize.BIT = BitSize.from_int_unchecked(1)
ByteSize.BYTE = ByteSize.from_int_unchecked(1)

for _unit in Unit:
    if _unit.prefix:
        setattr(BitSize, _constant_name(_unit), BitSize.from_int_unchecked(UNIT_BITS[_unit]))
        setattr(ByteSize, _constant_name(_unit), ByteSize.from_int_unchecked(UNIT_BITS[_unit] // 8))
del _unit


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_int(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, but got {fmt_type(value)}")


def _check_non_negative(value: int, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, but got {fmt_value(value)}")


def _check_bounds(magnitude: int) -> None:
    if not 0 <= magnitude <= size_conf.max_magnitude:
        raise ExceededBoundsError(f"the value {magnitude} exceeds the valid range", value=magnitude)


def _check_unit(unit: Any) -> Unit:
    if isinstance(unit, Unit):
        return unit
    if isinstance(unit, str):
        return Unit(unit)
    raise TypeError(f"unit must be a Unit, but got {fmt_type(unit)}")


def _as_decimal(size: Any) -> Decimal:
    try:
        return to_decimal(size)
    except ValueError as exc:
        raise ExceededBoundsError(f"the value {size!r} exceeds the valid range", value=size) from exc


def _check_precision(precision: int | None) -> int:
    if precision is None:
        return size_conf.default_precision

    _check_int(precision, "precision")
    _check_non_negative(precision, "precision")
    if precision > size_conf.max_precision:
        warnings.warn(
            f"precision {precision} is larger than {size_conf.max_precision} and was clamped",
            UserWarning, stacklevel=3,
        )
        return size_conf.max_precision
    return precision
