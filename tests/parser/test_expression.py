"""Tests for the expression parser."""

import pytest

from vba2js.core.errors import WithStackUnderflowError
from vba2js.parser.expression import ExpressionParser, add_paren


class TestOperators:
    """Test operator translation and precedence."""

    @pytest.mark.parametrize("source,expected", [
        ("a = b", "a === b"),
        ("a <> b", "a !== b"),
        ("a <= b", "a <= b"),
        ("a >= b", "a >= b"),
        ("a & b", "a + b"),
        ("a Mod b", "a % b"),
        ("a \\ b", "a / b"),
        ("a Xor b", "a ^ b"),
        ("a And b Or c", "a && b || c"),
        ("a AndAlso b", "a && b"),
        ("x Is y", "x === y"),
        ("x IsNot y", "x !== y"),
        ("&H1F + 1", "0x1F + 1"),
    ])
    def test_binary(self, parse_expression, source, expected):
        assert parse_expression(source) == expected

    def test_not_simple_operand(self, parse_expression):
        assert parse_expression("Not done") == "!done"

    def test_not_parenthesizes_comparison(self, parse_expression):
        assert parse_expression("Not a = b") == "!(a === b)"

    def test_not_binds_looser_than_and_operand(self, parse_expression):
        assert parse_expression("Not a And b") == "!a && b"

    def test_like_becomes_call(self, parse_expression):
        assert parse_expression('name Like "A*"') == 'Like(name, "A*")'

    def test_power(self, parse_expression):
        assert parse_expression("2 ^ 3") == "Math.pow(2, 3)"

    def test_power_is_right_recursive(self, parse_expression):
        assert parse_expression("2 ^ 3 ^ 2") == "Math.pow(2, Math.pow(3, 2))"

    def test_power_negative_exponent(self, parse_expression):
        assert parse_expression("x ^ -1") == "Math.pow(x, -1)"

    def test_custom_power_function(self, parse_expression):
        assert parse_expression("a ^ b", pow_function="pow") == "pow(a, b)"

    def test_unary_minus(self, parse_expression):
        assert parse_expression("-x + 1") == "-x + 1"

    def test_parentheses(self, parse_expression):
        assert parse_expression("(a + b) * c") == "(a + b) * c"

    def test_new(self, parse_expression):
        assert parse_expression("New Collection") == "new Collection"

    def test_stops_at_keyword(self, make_line, fresh_state):
        """Test that statement keywords are left for the caller."""
        line = make_line("1 To 10")
        assert ExpressionParser(line, fresh_state).expression() == "1"
        assert line.peek().value == "To"


class TestLiterals:
    """Test literal values."""

    @pytest.mark.parametrize("source,expected", [
        ("True", "true"),
        ("false", "false"),
        ("Nothing", "null"),
        ("Null", "null"),
        ("Empty", '""'),
    ])
    def test_keyword_literals(self, parse_expression, source, expected):
        assert parse_expression(source) == expected

    def test_comparison_with_nothing(self, parse_expression):
        assert parse_expression("obj Is Nothing") == "obj === null"

    def test_member_named_like_literal_is_kept(self, parse_expression):
        assert parse_expression("cell.Empty") == "cell.Empty"

    def test_string(self, parse_expression):
        assert parse_expression('"a" & "b"') == '"a" + "b"'


class TestNames:
    """Test names, calls and subscripts."""

    def test_call(self, parse_expression):
        assert parse_expression("f(1, 2)") == "f(1, 2)"

    def test_known_array_subscript(self, parse_expression, fresh_state):
        fresh_state.add_global_array("grid")
        assert parse_expression("grid(1, 2)", fresh_state) == "grid[1][2]"

    def test_local_array_subscript(self, parse_expression, fresh_state):
        fresh_state.enter_routine()
        fresh_state.register_array("buf")
        assert parse_expression("buf(i + 1)", fresh_state) == "buf[i + 1]"

    def test_unknown_name_stays_a_call(self, parse_expression, fresh_state):
        fresh_state.add_global_array("grid")
        assert parse_expression("other(1)", fresh_state) == "other(1)"

    def test_omitted_arguments(self, parse_expression):
        assert parse_expression("f(, 2)") == "f(undefined, 2)"
        assert parse_expression("f(1, )") == "f(1, undefined)"

    def test_custom_empty_argument(self, parse_expression):
        assert parse_expression("f(, 2)", empty_argument="null") == "f(null, 2)"

    def test_member_chain(self, parse_expression):
        assert parse_expression('Sheets("Data").Range("A1").Value') == 'Sheets("Data").Range("A1").Value'

    def test_second_argument_group(self, parse_expression):
        assert parse_expression('Range("A1")(2)') == 'Range("A1")(2)'

    def test_with_prefix(self, parse_expression, fresh_state):
        fresh_state.push_with("ws")
        assert parse_expression('.Range("A1").Value', fresh_state) == 'ws.Range("A1").Value'

    def test_leading_dot_without_with(self, parse_expression):
        with pytest.raises(WithStackUnderflowError):
            parse_expression(".Value")

    def test_named_argument(self, parse_expression):
        assert parse_expression('MsgBox(Prompt:="hi")') == 'MsgBox("Prompt :=", "hi")'

    def test_nested_call_argument(self, parse_expression):
        assert parse_expression("f(g(1), 2)") == "f(g(1), 2)"


class TestArgumentLists:
    """Test standalone list parsing used by statements."""

    def test_bare_argument_list(self, make_line, fresh_state):
        parser = ExpressionParser(make_line('"a", b, , 3'), fresh_state)
        assert parser.bare_argument_list() == ['"a"', "b", "undefined", "3"]

    def test_bare_argument_list_stops_at_separator(self, make_line, fresh_state):
        line = make_line("a, b: c")
        assert ExpressionParser(line, fresh_state).bare_argument_list() == ["a", "b"]
        assert line.peek().value == ":"

    def test_dimension_list(self, make_line, fresh_state):
        parser = ExpressionParser(make_line("(1 To 5, 3)"), fresh_state)
        assert parser.dimension_list() == [("1", "5"), (None, "3")]

    def test_empty_dimension_list(self, make_line, fresh_state):
        line = make_line("() As String")
        assert ExpressionParser(line, fresh_state).dimension_list() == []
        assert line.peek().value == "As"

    def test_expression_list(self, make_line, fresh_state):
        parser = ExpressionParser(make_line("(a, b + 1)"), fresh_state)
        assert parser.expression_list() == "(a, b + 1)"


class TestAddParen:

    def test_simple_operand_unchanged(self):
        assert add_paren("x") == "x"

    def test_operator_wrapped(self):
        assert add_paren("a + b") == "(a + b)"
