"""
Exact decimal arithmetic and float rendering for bit/byte sizes.

Magnitudes are exact integers. Every computation that can produce a fractional
value (parsing "1.2kb", scaling by a unit, searching for a recoverable unit) runs
on decimal.Decimal in a dedicated context so no binary floating-point error leaks
into a magnitude. Floats only appear in adjusted values, which are approximate by
contract, and are rendered here in their shortest round-tripping form.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from decimal import Context, Decimal, ROUND_CEILING, ROUND_HALF_EVEN, ROUND_HALF_UP, localcontext

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type, fmt_value

# Minimum exact decimal context, widened per operation for longer operands
EXACT_CONTEXT = Context(prec=80, rounding=ROUND_HALF_EVEN)

# Numeric literals are accumulated into a 96-bit mantissa with at most 28 fractional digits
MAX_MANTISSA = 2 ** 96 - 1
MAX_SCALE = 28

# Float rounding helpers never look past this many fractional digits
MAX_FLOAT_PRECISION = 16


# Methods --------------------------------------------------------------------------------------------------------------

def to_decimal(value: int | float | Decimal) -> Decimal:
    """
    Convert a non-negative number to an exact Decimal.

    Floats are converted through their shortest repr, so ``0.1`` becomes
    ``Decimal('0.1')`` rather than its binary expansion.

    Args:
        value: int, float or Decimal. bool is rejected.

    Returns:
        Exact Decimal equal to value.

    Raises:
        TypeError: If value is not an int, float or Decimal.
        ValueError: If value is negative, NaN or infinite.

    Examples:
        >>> to_decimal(0.1)
        Decimal('0.1')
        >>> to_decimal(15)
        Decimal('15')
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise TypeError(f"expected int, float or Decimal, but got {fmt_type(value)}")

    if isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"value must be finite, but got {fmt_value(value)}")
        result = Decimal(repr(value))
    else:
        if not value.is_finite():
            raise ValueError(f"value must be finite, but got {fmt_value(value)}")
        result = value

    if result < 0:
        raise ValueError(f"value must be non-negative, but got {fmt_value(value)}")
    return result


def ceil_to_int(value: Decimal) -> int:
    """Round a non-negative Decimal up to the next integer."""
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def exact_mul(a: Decimal | int, b: Decimal | int) -> Decimal:
    """Multiply without rounding; the context grows with the operands' digit counts."""
    a, b = Decimal(a), Decimal(b)
    with localcontext(_context_for(_digits(a) + _digits(b))):
        return a * b


def exact_div(a: Decimal | int, b: Decimal | int) -> Decimal:
    """
    Divide with enough digits to keep every terminating quotient exact.

    Quotients by powers of 2 and 10 (every unit magnitude) terminate and are exact;
    other quotients are rounded at the context precision.
    """
    a, b = Decimal(a), Decimal(b)
    with localcontext(_context_for(_digits(a) + 4 * _digits(b))):
        return a / b


def scale_decimal(mantissa: int, scale: int) -> Decimal:
    """
    Exact ``mantissa * 10**-scale``.

    Examples:
        >>> scale_decimal(11, 1)
        Decimal('1.1')
    """
    return Decimal(mantissa).scaleb(-scale, _context_for(len(str(mantissa))))


def quantize_fraction(value: Decimal, precision: int) -> Decimal:
    """
    Round the fractional part of value to precision digits, ties to even.

    Examples:
        >>> quantize_fraction(Decimal("3136.5"), 0)
        Decimal('3136')
        >>> quantize_fraction(Decimal("123.4564"), 3)
        Decimal('123.456')
    """
    with localcontext(_context_for(_digits(value) + precision)):
        return value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_EVEN)


def strip_decimal(value: Decimal) -> Decimal:
    """
    Remove trailing fractional zeros without switching to exponent notation.

    Examples:
        >>> strip_decimal(Decimal("3.500"))
        Decimal('3.5')
        >>> strip_decimal(Decimal("100"))
        Decimal('100')
    """
    context = _context_for(_digits(value))
    if value == value.to_integral_value():
        return value.quantize(Decimal(1), context=context)
    return value.normalize(context)


def fmt_decimal(value: Decimal) -> str:
    """Render a Decimal in positional notation: ``Decimal('1E+2')`` becomes ``'100'``."""
    return format(value, "f")


def round_half_away(value: float) -> float:
    """Round to the nearest integer, ties away from zero."""
    return float(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def round_fractional_part(value: float, precision: int) -> float:
    """
    Round a float to precision fractional digits, ties away from zero.

    Precision larger than 16 is treated as 16.

    Examples:
        >>> round_fractional_part(9.765625, 2)
        9.77
        >>> round_fractional_part(2.5, 0)
        3.0
    """
    if precision > MAX_FLOAT_PRECISION:
        precision = MAX_FLOAT_PRECISION
    elif precision == 0:
        return round_half_away(value)

    scale = 10.0 ** precision
    return round_half_away(value * scale) / scale


def fmt_float(value: float) -> str:
    """
    Render a float in its shortest form, without exponent and without a trailing ``.0``.

    Examples:
        >>> fmt_float(15.0)
        '15'
        >>> fmt_float(14.30511474609375)
        '14.30511474609375'
        >>> fmt_float(1e26)
        '100000000000000000000000000'
    """
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


# Private Methods ------------------------------------------------------------------------------------------------------

def _digits(value: Decimal) -> int:
    """Number of digits of value in positional notation, ignoring leading fractional zeros."""
    _, digits, exponent = value.as_tuple()
    return len(digits) + max(exponent, 0)


def _context_for(digits: int) -> Context:
    return Context(prec=max(EXACT_CONTEXT.prec, digits + 1), rounding=ROUND_HALF_EVEN)
