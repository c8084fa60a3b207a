#
# SizeUnits - Tools Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from sizeunits import tools
from sizeunits.tools import fmt_type, fmt_value, utf8_char_at


# Classes --------------------------------------------------------------------------------------------------------------

class AnyUserClass:
    """A simple class for testing user-defined types"""
    pass


class BadRepr:
    def __repr__(self):
        raise RuntimeError("boom")


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFmtType:
    @pytest.mark.parametrize(
        "obj,expected",
        [
            (42, "<type: int>"),
            (int, "<type: int>"),
            ("12 KiB", "<type: str>"),
            (AnyUserClass(), "<type: AnyUserClass>"),
        ],
        ids=["instance", "type", "str", "user-class"],
    )
    def test_ascii(self, obj, expected):
        assert fmt_type(obj) == expected

    def test_no_style_option(self):
        with pytest.raises(TypeError):
            fmt_type(1.5, style="equal")
        assert not hasattr(tools, "FmtStyle")


class TestFmtValue:
    def test_basic(self):
        assert fmt_value(42) == "<int: 42>"
        assert fmt_value("12 KiB") == "<str: '12 KiB'>"

    def test_escapes_angle(self):
        assert fmt_value(">") == "<str: '\\>'>"

    def test_truncates(self):
        out = fmt_value("x" * 50, max_repr=10)
        assert out == "<str: 'xxxxxxxxx...>"

    def test_no_truncation_when_disabled(self):
        assert fmt_value("x" * 50, max_repr=0) == "<str: '" + "x" * 50 + "'>"

    def test_repr_failure(self):
        out = fmt_value(BadRepr())
        assert "repr failed: RuntimeError" in out


class TestUtf8CharAt:
    @pytest.mark.parametrize(
        "text,index,expected",
        [
            ("1 b", 2, "b"),
            ("1 €", 2, "€"),
            ("1 µ", 2, "µ"),
            ("x😀", 1, "😀"),
        ],
        ids=["ascii", "three-byte", "two-byte", "four-byte"],
    )
    def test_decodes(self, text, index, expected):
        assert utf8_char_at(text.encode("utf-8"), index) == expected

    def test_continuation_byte(self):
        assert utf8_char_at("€".encode("utf-8"), 1) == "�"
