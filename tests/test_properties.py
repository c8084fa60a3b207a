#
# SizeUnits - Property Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
from hypothesis import given, strategies as st, settings

# Local ----------------------------------------------------------------------------------------------------------------
from sizeunits.errors import ExceededBoundsError
from sizeunits.sizes import BitSize, ByteSize
from sizeunits.units import Unit, UnitType

WIDE_MAX = 10 ** 27 - 1

magnitudes = st.integers(min_value=0, max_value=WIDE_MAX)
small_magnitudes = st.integers(min_value=0, max_value=2 ** 64)
size_types = st.sampled_from([BitSize, ByteSize])
precisions = st.integers(min_value=0, max_value=28)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestExactProperties:

    @settings(max_examples=200, deadline=None)
    @given(size_types, magnitudes, st.booleans())
    def test_exact_unit_divides(self, size_type, m, allow):
        size = size_type(m)
        quotient, unit = size.get_exact_unit(allow)
        if unit is size_type.BASE_UNIT:
            assert quotient == m
        else:
            assert quotient * size_type.unit_magnitude(unit) == m

    @settings(max_examples=200, deadline=None)
    @given(size_types, magnitudes, st.booleans(), precisions)
    def test_recoverable_unit_reconstructs(self, size_type, m, allow, precision):
        size = size_type(m)
        value, unit = size.get_recoverable_unit(allow, precision)
        assert size_type.from_decimal_with_unit(value, unit) == size

    @settings(max_examples=200, deadline=None)
    @given(size_types, magnitudes)
    def test_recoverable_not_smaller_than_exact(self, size_type, m):
        size = size_type(m)
        _, exact_unit = size.get_exact_unit()
        _, recoverable_unit = size.get_recoverable_unit(False, 3)
        assert size_type.unit_magnitude(recoverable_unit) >= size_type.unit_magnitude(exact_unit)


class TestParseProperties:

    @settings(max_examples=200, deadline=None)
    @given(magnitudes)
    def test_plain_integer_round_trip(self, m):
        assert BitSize.parse(str(m)).as_int() == m
        assert ByteSize.parse(str(m)).as_int() == m

    @settings(max_examples=200, deadline=None)
    @given(magnitudes)
    def test_exact_format_round_trip_bits(self, m):
        size = BitSize(m)
        assert BitSize.parse(f"{size:#}") == size

    @settings(max_examples=200, deadline=None)
    @given(magnitudes)
    def test_exact_format_round_trip_bytes(self, m):
        size = ByteSize(m)
        assert ByteSize.parse(f"{size:#}") == size

    @settings(max_examples=100, deadline=None)
    @given(st.integers(min_value=0, max_value=99), st.sampled_from(Unit.multiples()))
    def test_parse_matches_from_int_with_unit(self, n, unit):
        text = f"{n} {unit.value}"
        assert BitSize.parse(text) == BitSize.from_int_with_unit(n, unit)


class TestConversionProperties:

    @settings(max_examples=200, deadline=None)
    @given(magnitudes)
    def test_bits_to_bytes_rounds_up(self, m):
        nbytes = BitSize(m).to_byte_size().as_int()
        assert m <= nbytes * 8 < m + 8

    @settings(max_examples=200, deadline=None)
    @given(st.integers(min_value=0, max_value=WIDE_MAX // 8))
    def test_bytes_to_bits_exact(self, m):
        assert ByteSize(m).to_bit_size().as_int() == m * 8

    @settings(max_examples=100, deadline=None)
    @given(size_types, st.integers(min_value=WIDE_MAX + 1, max_value=WIDE_MAX * 10))
    def test_out_of_range_rejected(self, size_type, m):
        with pytest.raises(ExceededBoundsError):
            size_type.from_int(m)

    @settings(max_examples=100, deadline=None)
    @given(size_types, small_magnitudes, small_magnitudes)
    def test_add_subtract(self, size_type, a, b):
        total = size_type(a) + size_type(b)
        assert total.as_int() == a + b
        assert total - size_type(b) == size_type(a)


class TestAppropriateProperties:

    @settings(max_examples=200, deadline=None)
    @given(size_types, magnitudes, st.sampled_from(list(UnitType)))
    def test_largest_unit_not_above_magnitude(self, size_type, m, unit_type):
        adjusted = size_type(m).get_appropriate_unit(unit_type)
        if adjusted.unit is size_type.BASE_UNIT:
            assert adjusted.value == float(m)
        else:
            assert size_type.unit_magnitude(adjusted.unit) <= m
            assert adjusted.value >= 1.0
            assert adjusted.unit.is_bit == (size_type is BitSize)

    @settings(max_examples=100, deadline=None)
    @given(magnitudes, magnitudes)
    def test_ordering_preserved(self, a, b):
        if a <= b:
            assert BitSize(a) <= BitSize(b)
        else:
            assert BitSize(a) > BitSize(b)

    @settings(max_examples=200, deadline=None)
    @given(size_types, magnitudes, magnitudes, st.sampled_from(list(UnitType)))
    def test_selection_is_monotonic(self, size_type, a, b, unit_type):
        low, high = sorted((a, b))
        low_unit = size_type(low).get_appropriate_unit(unit_type).unit
        high_unit = size_type(high).get_appropriate_unit(unit_type).unit
        assert size_type.unit_magnitude(low_unit) <= size_type.unit_magnitude(high_unit)


class TestCeilingProperties:

    @settings(max_examples=200, deadline=None)
    @given(size_types, st.floats(min_value=0.0, max_value=1e15, allow_nan=False, allow_infinity=False))
    def test_from_float_never_under_represents(self, size_type, x):
        magnitude = size_type.from_float(x).as_int()
        assert magnitude >= x
        assert magnitude - 1 < x
