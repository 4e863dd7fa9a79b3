"""
Precedence-climbing expression parser.

Each level returns translated target text and leaves the line positioned on
the first token it did not understand, so callers can carry on with
statement-level keywords such as Then, To or Step.

Precedence, loosest first:
    logical (And, Or, Xor) > Not > relational (incl. Like) >
    additive/concatenation/shift > unary sign > exponent > factor
"""

import re
from typing import Optional

from .operators import (
    ARITHMETIC_OPS,
    LITERALS,
    LOGICAL_OPS,
    RELATIONAL_OPS,
    fix_operator,
)
from .state import TranslationState
from .tokenizer import LogicalLine, TokenType

_OPERATOR_CHARS = re.compile(r"[-+*/%^<>=!&|]")
_MEMBER_NAME = re.compile(r"[A-Za-z_]\w*\$?")
_LITERAL_TYPES = (TokenType.NUMBER, TokenType.STRING, TokenType.DATE, TokenType.HEX)


class ExpressionParser:
    """Translate expressions read from a LogicalLine."""

    def __init__(
        self,
        line: LogicalLine,
        state: TranslationState,
        empty_argument: str = "undefined",
        pow_function: str = "Math.pow",
    ):
        self.line = line
        self.state = state
        self.empty_argument = empty_argument
        self.pow_function = pow_function

    def expression(self) -> str:
        """Parse a full expression, including a named argument ``name := value``."""
        expression = self._logical()
        if self.line.at(":="):
            self.line.consume()
            expression = f'"{expression} :=", {self._negation()}'
        return expression

    # ------------------------------------------------------------------
    # Precedence levels
    # ------------------------------------------------------------------

    def _logical(self) -> str:
        expression = self._negation()
        while self.line.peek().value in LOGICAL_OPS:
            operator = fix_operator(self.line.consume().value)
            expression += operator + self._negation()
        return expression

    def _negation(self) -> str:
        expression = "" if self.line.at("Not") else self._relational()
        while self.line.at("Not"):
            self.line.consume()
            expression += "!" + add_paren(self._negation())
        return expression

    def _relational(self) -> str:
        expression = self._additive()
        while self.line.peek().value in RELATIONAL_OPS:
            operator = self.line.consume().value
            if operator == "Like":
                expression = f"Like({expression}, {self._additive()})"
            else:
                expression += fix_operator(operator) + self._additive()
        return expression

    def _additive(self) -> str:
        expression = self._unary()
        while self.line.peek().value in ARITHMETIC_OPS:
            operator = fix_operator(self.line.consume().value)
            expression += operator + self._unary()
        return expression

    def _unary(self) -> str:
        sign = ""
        while self.line.at("+", "-"):
            sign += self.line.consume().value
        return sign + self._power()

    def _power(self) -> str:
        base = self._factor()
        if self.line.at("^"):
            self.line.consume()
            # Right-recursive: 2 ^ 3 ^ 2 nests to the right
            base = f"{self.pow_function}({base}, {self._unary()})"
        return base

    def _factor(self) -> str:
        token = self.line.peek()

        if token.type in (TokenType.END_OF_LINE, TokenType.END_OF_INPUT):
            return ""
        if token.type is TokenType.IDENTIFIER or token.value == ".":
            return self.get_name()
        if token.type in _LITERAL_TYPES:
            return self.line.consume().value
        if token.value == "Not":
            return self._negation()
        if token.value == "New":
            self.line.consume()
            return "new " + self._factor()
        if token.value == "(":
            return self._parenthesized()
        return fix_operator(self.line.consume().value)

    def _parenthesized(self) -> str:
        self.line.eat("(")
        items = [self.expression()]
        while self.line.at(","):
            self.line.consume()
            items.append(self.expression())
        if self.line.at(")"):
            self.line.consume()
        return "(" + ", ".join(items) + ")"

    # ------------------------------------------------------------------
    # Names and argument lists
    # ------------------------------------------------------------------

    def get_name(self, member: bool = False) -> str:
        """
        Parse a (possibly qualified) name with its arguments.

        A leading "." is resolved against the innermost With target.
        Arguments of known arrays become subscripts, everything else a call.
        A trailing member chain is followed to its end.
        """
        line = self.line
        if line.at("."):
            line.consume()
            return self.state.current_with() + "." + self.get_name(member=True)

        token = line.peek()
        if not (
            token.type is TokenType.IDENTIFIER
            or (member and _MEMBER_NAME.fullmatch(token.value))
        ):
            return ""

        name = line.consume().value
        plain = True

        if line.at("("):
            arguments = self.argument_list()
            if self.state.is_array(name):
                name += "".join(f"[{argument}]" for argument in arguments)
            else:
                name += "(" + ", ".join(arguments) + ")"
            plain = False
            # Range("A1")(2)
            if line.at("("):
                name += self.expression_list()

        while line.at("."):
            line.consume()
            name += "." + self.get_name(member=True)
            plain = False

        if plain and not member and name in LITERALS:
            return LITERALS[name]
        return name

    def argument_list(self) -> list[str]:
        """
        Parse ``( arg, arg, ... )`` into translated arguments.

        Omitted arguments, as in ``f(, 2)`` or ``f(1, )``, become the
        configured placeholder.
        """
        self.line.eat("(")
        arguments = self._collect_arguments(closing=")")
        if self.line.at(")"):
            self.line.consume()
        return arguments

    def bare_argument_list(self) -> list[str]:
        """
        Parse the unparenthesized arguments of a call statement (``Foo a, b``).

        Stops at the end of the line, a keyword or a ":" statement separator.
        """
        return self._collect_arguments(closing=None)

    def _collect_arguments(self, closing: Optional[str]) -> list[str]:
        arguments: list[str] = []
        current: Optional[str] = None

        while True:
            token = self.line.peek()
            if token.type in (TokenType.END_OF_LINE, TokenType.END_OF_INPUT):
                break
            if closing is not None and token.value == closing:
                break
            if closing is None and (token.type is TokenType.KEYWORD or token.value == ":"):
                break
            if token.value == ",":
                self.line.consume()
                arguments.append(current if current is not None else self.empty_argument)
                current = None
                continue
            part = self.expression()
            current = part if current is None else f"{current} {part}"

        if current is not None:
            arguments.append(current)
        elif arguments:
            arguments.append(self.empty_argument)
        return arguments

    def expression_list(self) -> str:
        """Parse a parenthesized argument list into call syntax."""
        return "(" + ", ".join(self.argument_list()) + ")"

    def dimension_list(self) -> list[tuple[Optional[str], str]]:
        """
        Parse array bounds ``(u1, l2 To u2, ...)``.

        Returns:
            (lower, upper) pairs; lower is None when no "To" is given.
            An empty list means a dynamic array.
        """
        line = self.line
        line.eat("(")
        bounds: list[tuple[Optional[str], str]] = []

        while not line.at(")") and not line.at_end():
            if line.at(","):
                line.consume()
                continue
            first = self.expression()
            if line.at("To"):
                line.consume()
                bounds.append((first, self.expression()))
            else:
                bounds.append((None, first))

        if line.at(")"):
            line.consume()
        return bounds


def add_paren(expression: str) -> str:
    """Wrap ``expression`` in parentheses when it contains an operator."""
    if _OPERATOR_CHARS.search(expression):
        return f"({expression})"
    return expression
