"""Tests for conversion errors and their formatting."""

from vba2js.core.errors import (
    ConversionError,
    UnbalancedNestingError,
    WithStackUnderflowError,
    format_conversion_error,
)


SOURCE = "a\nb\nc\nd\ne\nf\n"


class TestConversionError:

    def test_message_only(self):
        assert str(ConversionError("Broken")) == "Broken"

    def test_with_location(self):
        error = ConversionError("Broken", 4, "x = ")
        assert str(error) == "Broken at line 4 (x = )"

    def test_locate_fills_missing_location(self):
        error = WithStackUnderflowError("No With").locate(7, "End With")
        assert error.line_number == 7
        assert error.line == "End With"

    def test_locate_keeps_existing_location(self):
        error = ConversionError("Broken", 2, "first").locate(9, "later")
        assert error.line_number == 2
        assert error.line == "first"

    def test_unbalanced_nesting(self):
        error = UnbalancedNestingError(2)
        assert error.message == "Statement nesting error: depth = 2"
        assert error.details == {"depth": 2}
        assert isinstance(error, ConversionError)


class TestFormatConversionError:

    def test_excerpt_marks_failing_line(self):
        error = ConversionError("Broken", 3, "c")
        text = format_conversion_error(error, SOURCE)

        assert text.splitlines() == [
            "ConversionError: Broken at line 3 (c)",
            "    1: a",
            "    2: b",
            ">   3: c",
            "    4: d",
            "    5: e",
        ]

    def test_excerpt_is_clipped_at_end(self):
        error = ConversionError("Broken", 6)
        lines = format_conversion_error(error, SOURCE, context=1).splitlines()
        assert lines[1:] == ["    5: e", ">   6: f"]

    def test_without_line_number(self):
        error = ConversionError("Broken")
        assert format_conversion_error(error, SOURCE) == "ConversionError: Broken"

    def test_line_past_end_of_source(self):
        error = ConversionError("Unexpected end of input", 7, "(EOF)")
        lines = format_conversion_error(error, SOURCE, context=1).splitlines()
        assert lines[1:] == ["    6: f"]
