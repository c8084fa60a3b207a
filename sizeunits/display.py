"""
Display formatting for bit/byte sizes and adjusted (value, unit) pairs.
"""

# ## Format spec
#
# Sizes and adjusted values accept `[[fill]align][+|-][#][width][.precision]` in format()
# and f-strings:
#
#   align      : "<" left (default), ">" right, "^" center; pads the value, never the unit
#   + / -      : wide spacing (unit right-padded to a 4-column field) / compact (no space)
#   #          : sizes render with the exact recoverable unit; adjusted values drop
#                trailing fractional zeros after rounding
#   width      : total width of value, spacing and unit
#   precision  : fractional digits (exact-unit default: size_conf.default_precision)
#
# Without "#", a size formats as its plain integer magnitude.

# Standard library -----------------------------------------------------------------------------------------------------
import re
from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Any, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import fmt_decimal, fmt_float, round_fractional_part, strip_decimal
from .tools import fmt_value
from .units import Unit, size_conf


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Align(StrEnum):
    LEFT = "<"
    RIGHT = ">"
    CENTER = "^"


@unique
class Spacing(StrEnum):
    """
    Space between value and unit.

    Attributes:
        NORMAL (str)  : One space - "10 Kib"
        WIDE (str)    : Unit right-aligned in a 4-column field - "10  Kb"
        COMPACT (str) : No space - "10Kib"
    """
    NORMAL = ""
    WIDE = "+"
    COMPACT = "-"


_SPEC_PATTERN = re.compile(
    r"(?:(?P<fill>.)?(?P<align>[<>^]))?"
    r"(?P<spacing>[+-])?"
    r"(?P<exact>#)?"
    r"(?P<width>\d+)?"
    r"(?:\.(?P<precision>\d+))?",
    re.DOTALL,
)


@dataclass(frozen=True)
class SizeFormat:
    """
    Formatting controls for sizes and adjusted values.

    Attributes:
        fill: Padding character used when width is larger than the rendered text.
        align: Alignment of the value within its padded field, left when None.
        spacing: Space between value and unit.
        exact: Exact-unit rendering for sizes, trailing-zero trimming for adjusted values.
        width: Minimum total width of the rendered text.
        precision: Number of fractional digits.

    Example:
        >>> SizeFormat.parse(">+#10.2")
        SizeFormat(fill=' ', align=<Align.RIGHT: '>'>, spacing=<Spacing.WIDE: '+'>, exact=True, width=10, precision=2)

    Raises:
        ValueError: If a field is out of range or the spec cannot be parsed.
    """
    fill: str = " "
    align: Align | None = None
    spacing: Spacing = Spacing.NORMAL
    exact: bool = False
    width: int | None = None
    precision: int | None = None

    def __post_init__(self):
        if not isinstance(self.fill, str) or len(self.fill) != 1:
            raise ValueError(f"fill must be a single character but found {fmt_value(self.fill)}")

        if self.align is not None:
            object.__setattr__(self, "align", Align(self.align))
        object.__setattr__(self, "spacing", Spacing(self.spacing))

        for name in ("width", "precision"):
            v = getattr(self, name)
            if v is not None and (isinstance(v, bool) or not isinstance(v, int) or v < 0):
                raise ValueError(f"{name} must be a non-negative int or None but found {fmt_value(v)}")

    @classmethod
    def parse(cls, spec: str) -> Self:
        """Parse a `[[fill]align][+|-][#][width][.precision]` format spec."""
        match = _SPEC_PATTERN.fullmatch(spec)
        if match is None:
            raise ValueError(f"invalid format specifier {fmt_value(spec)} for a size")

        groups = match.groupdict()
        return cls(
            fill=groups["fill"] or " ",
            align=groups["align"],
            spacing=groups["spacing"] or Spacing.NORMAL,
            exact=groups["exact"] is not None,
            width=int(groups["width"]) if groups["width"] else None,
            precision=int(groups["precision"]) if groups["precision"] else None,
        )

    def space_length(self, unit: Unit) -> int:
        if self.spacing == Spacing.WIDE:
            return 4 - len(unit)
        if self.spacing == Spacing.COMPACT:
            return 0
        return 1

    def pad(self, text: str, width: int) -> str:
        align = self.align or Align.LEFT
        return format(text, f"{self.fill}{align}{width}")

    def int_spec(self) -> str:
        """Spec for the plain integer magnitude; precision does not apply to integers."""
        spec = f"{self.fill}{self.align}" if self.align else ""
        if self.spacing == Spacing.WIDE:
            spec += "+"
        if self.width is not None:
            spec += str(self.width)
        return spec


# Methods --------------------------------------------------------------------------------------------------------------

def format_size(size: Any, fmt: SizeFormat) -> str:
    """
    Render a BitSize or ByteSize.

    Plain mode renders the integer magnitude. Exact mode renders the largest unit of
    the same kind whose value, rounded to the precision, reconstructs the magnitude.

    Examples:
        >>> format_size(BitSize(10240), SizeFormat.parse("#"))
        '10 Kib'
        >>> format_size(BitSize(3211776), SizeFormat.parse("#.6"))
        '3.211776 Mb'
    """
    if not fmt.exact:
        return format(size.as_int(), fmt.int_spec())

    precision = size_conf.default_precision if fmt.precision is None else fmt.precision
    value, unit = size.get_recoverable_unit(False, precision)
    text = fmt_decimal(strip_decimal(value))
    return _join(text, unit, fmt)


def format_adjusted(value: float, unit: Unit, fmt: SizeFormat) -> str:
    """
    Render an adjusted (value, unit) pair with native float formatting.

    Examples:
        >>> format_adjusted(9.765625, Unit.KIBIT, SizeFormat.parse(".2"))
        '9.77 Kib'
        >>> format_adjusted(10.0, Unit.KBIT, SizeFormat.parse("#.2"))
        '10 Kb'
    """
    precision = fmt.precision
    if precision is None:
        text = fmt_float(value)
    elif fmt.exact:
        text = fmt_float(round_fractional_part(value, precision))
    elif unit in (Unit.BIT, Unit.B) and not _is_padded(unit, fmt):
        # Whole bits and bytes keep their shortest form unless a field is padded
        text = fmt_float(value)
    else:
        text = f"{value:.{precision}f}"
    return _join(text, unit, fmt)


# Private Methods ------------------------------------------------------------------------------------------------------

def _is_padded(unit: Unit, fmt: SizeFormat) -> bool:
    return fmt.width is not None and fmt.width > len(unit) + fmt.space_length(unit) + 1


def _join(text: str, unit: Unit, fmt: SizeFormat) -> str:
    spaces = fmt.space_length(unit)
    if _is_padded(unit, fmt):
        text = fmt.pad(text, fmt.width - len(unit) - spaces)
    return f"{text}{' ' * spaces}{unit}"
