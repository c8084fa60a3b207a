"""
Adjusted (value, unit) pairs produced by unit selection.

An adjusted value is a float count of a unit, meant for display. It is not a
source of truth: equality and ordering compare the rounded-up magnitudes of both sides.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import dataclass
from typing import Any, ClassVar, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .display import Align, SizeFormat, Spacing, format_adjusted
from .numeric import to_decimal
from .sizes import BitSize, ByteSize, Size
from .tools import fmt_type, fmt_value
from .units import Unit, UnitType, size_conf


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class Adjusted:
    """
    Shared implementation of AdjustedBit and AdjustedByte.

    Attributes:
        value: Float count of unit, non-negative and finite.
        unit: Unit the value is expressed in.

    Raises:
        TypeError: If value is not a number or unit is not a Unit.
        ValueError: If value is negative or not finite.
    """
    value: float
    unit: Unit

    SIZE_TYPE: ClassVar[type[Size]]

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(f"value must be a float, but got {fmt_type(self.value)}")
        if not math.isfinite(self.value) or self.value < 0:
            raise ValueError(f"value must be finite and non-negative, but got {fmt_value(self.value)}")
        if not isinstance(self.unit, Unit):
            raise TypeError(f"unit must be a Unit, but got {fmt_type(self.unit)}")
        object.__setattr__(self, "value", float(self.value))

    @classmethod
    def from_size(cls, size: Size, unit_type: UnitType = UnitType.BOTH) -> Self:
        """Appropriate unit of a size, see Size.get_appropriate_unit()."""
        if not isinstance(size, cls.SIZE_TYPE):
            raise TypeError(f"expected {cls.SIZE_TYPE.__name__}, but got {fmt_type(size)}")
        return size.get_appropriate_unit(unit_type)

    def get_value(self) -> float:
        return self.value

    def get_unit(self) -> Unit:
        return self.unit

    def to_size(self) -> Size:
        """
        Exact size of value x unit, rounded up and saturated to MAX.

        The result may differ from the size this value was derived from by float rounding,
        which can push a value derived from a size near MAX just above it.
        """
        return self.SIZE_TYPE.from_int_unchecked(min(self._magnitude(), size_conf.max_magnitude))

    # Comparison -------------------------------------------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._magnitude() == other._magnitude()

    def __lt__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._magnitude() < other._magnitude()

    def __le__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._magnitude() <= other._magnitude()

    def __gt__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._magnitude() > other._magnitude()

    def __ge__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._magnitude() >= other._magnitude()

    def __hash__(self) -> int:
        return hash(self._magnitude())

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
        """Keyword form of format(adjusted, spec); ``exact`` drops trailing fractional zeros."""
        fmt = SizeFormat(fill=fill, align=align, spacing=spacing, exact=exact, width=width, precision=precision)
        return format_adjusted(self.value, self.unit, fmt)

    def __format__(self, format_spec: str) -> str:
        return format_adjusted(self.value, self.unit, SizeFormat.parse(format_spec))

    def __str__(self) -> str:
        return format_adjusted(self.value, self.unit, SizeFormat())

    def __float__(self) -> float:
        return self.value

    # Private Methods --------------------------------------------------------------------------------------------------

    def _magnitude(self) -> int:
        """Rounded-up magnitude of value x unit, unbounded so that comparison never fails."""
        return self.SIZE_TYPE.rounded_up_magnitude(to_decimal(self.value), self.unit)


class AdjustedBit(Adjusted):
    """
    A float count of a unit derived from a BitSize.

    Examples:
        >>> a = AdjustedBit.parse("10000")
        >>> str(a), f"{a:.2}"
        ('9.765625 Kib', '9.77 Kib')
    """
    SIZE_TYPE = BitSize

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse like BitSize.parse() and pick the appropriate unit among all multiples."""
        return BitSize.parse(text).get_appropriate_unit(UnitType.BOTH)

    def get_bit(self) -> BitSize:
        return self.to_size()


class AdjustedByte(Adjusted):
    """
    A float count of a unit derived from a ByteSize.

    Examples:
        >>> str(ByteSize(15000000).get_appropriate_unit(UnitType.DECIMAL))
        '15 MB'
    """
    SIZE_TYPE = ByteSize

    @classmethod
    def parse(cls, text: str, ignore_case: bool = False) -> Self:
        """Parse like ByteSize.parse() and pick the appropriate unit among all multiples."""
        return ByteSize.parse(text, ignore_case=ignore_case).get_appropriate_unit(UnitType.BOTH)

    def get_byte(self) -> ByteSize:
        return self.to_size()
