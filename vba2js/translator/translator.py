"""
VBA → JavaScript statement translator.

A recursive-descent translator over logical lines. The dispatcher looks at
the first token of the current line and hands off to one handler per
construct; block handlers emit a header, call back into the dispatcher
until their terminator shows up, then emit the closing brace.

The translation is syntactic. Constructs with no JavaScript counterpart
are emitted as commented-out "untouched" lines instead of failing, so one
unsupported statement never aborts a conversion.
"""

import re
from typing import Iterable, Optional, Union

from vba2js.core.config import Settings, get_settings
from vba2js.core.errors import (
    ConversionError,
    UnbalancedNestingError,
    UnexpectedEndOfInputError,
    WithStackUnderflowError,
)
from vba2js.core.logging import get_context_logger
from vba2js.parser.expression import ExpressionParser
from vba2js.parser.operators import END_OF_INPUT, fix_operator
from vba2js.parser.state import TranslationState
from vba2js.parser.tokenizer import LogicalLine, TokenType

from .preprocessor import LinePreprocessor, PreprocessResult, split_comment

logger = get_context_logger(__name__, component="translator")

_SIMPLE_OPERAND = re.compile(r'\w+|"[^"]*"')
_INTEGER = re.compile(r"\d+")
_CASE_COMPARISONS = frozenset({"<", ">", "=", "<=", ">=", "<>"})
_LOOP_EXITS = frozenset({"For", "Do", "While"})
_DECLARATIONS = frozenset({"Dim", "ReDim", "Global", "Const"})


def parenthesize(text: str) -> str:
    """Put parens around ``text`` unless it is a single word or string literal."""
    if _SIMPLE_OPERAND.fullmatch(text):
        return text
    return f"({text})"


def untouched(text: str) -> str:
    """Comment out a statement the translator passes through unchanged."""
    return f"// {text}; // UNTOUCHED"


def loop_variable(index: int) -> str:
    """
    Name of the synthesized loop variable for array dimension ``index``.

    Source identifiers cannot start with "_", so these never collide with
    user names: _a ... _z, then _aa, _ab, ...
    """
    letters = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("a") + remainder) + letters
    return "_" + letters


def array_size(upper: str) -> str:
    """JavaScript array length for an inclusive upper bound."""
    if _INTEGER.fullmatch(upper):
        return str(int(upper) + 1)
    return f"{upper} + 1"


class VbaTranslator:
    """
    Translate VBA source into JavaScript.

    A translator may be reused; every call to :meth:`convert` starts from
    a fresh TranslationState.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.preprocessor = LinePreprocessor()
        self.state = TranslationState()
        self.output: list[str] = []
        self._source: PreprocessResult = PreprocessResult(lines=[END_OF_INPUT])
        self._index = -1
        self._comment_emitted = False
        self.line = LogicalLine.end_of_input()
        self.expr = self._expression_parser(self.line)

    def convert(self, source: Union[str, Iterable[str]]) -> str:
        """
        Convert VBA source to JavaScript.

        Args:
            source: Source text, or an iterable of source lines

        Returns:
            Generated JavaScript, one statement per line; "" for empty input

        Raises:
            ConversionError: On input the translator cannot make sense of
        """
        lines = source.splitlines() if isinstance(source, str) else list(source)
        if not lines:
            return ""

        self.state = TranslationState()
        self.output = []
        self._source = self.preprocessor.preprocess(lines)
        self._index = -1

        logger.info(
            "Converting VBA source",
            extra_data={"lines": len(lines), "logical_lines": len(self._source.lines) - 1},
        )

        try:
            self._advance()
            while not self.line.is_end_of_input:
                self._translate()

            if self.state.depth != 0:
                raise UnbalancedNestingError(self.state.depth)
        except ConversionError as error:
            error.locate(self._source.physical_line(self._index), self.line.original.strip())
            raise

        logger.info("Conversion finished", extra_data={"output_lines": len(self.output)})
        return "\n".join(self.output) + "\n"

    # ------------------------------------------------------------------
    # Line handling and output
    # ------------------------------------------------------------------

    def _expression_parser(self, line: LogicalLine) -> ExpressionParser:
        return ExpressionParser(
            line,
            self.state,
            empty_argument=self.settings.EMPTY_ARGUMENT,
            pow_function=self.settings.POW_FUNCTION,
        )

    def _advance(self) -> None:
        """Move to the next logical line."""
        self._index += 1
        self._comment_emitted = False
        number = self._source.physical_line(self._index)
        if self._index >= len(self._source.lines) - 1:
            self.line = LogicalLine.end_of_input(number)
        else:
            self.line = LogicalLine(
                self._source.lines[self._index],
                number,
                max_lookahead=self.settings.MAX_LOOKAHEAD,
            )
        self.expr = self._expression_parser(self.line)

    def _reparse(self, text: str) -> None:
        """Replace the current line with rewritten text of the same logical line."""
        self.line = LogicalLine(text, self.line.line_number, max_lookahead=self.settings.MAX_LOOKAHEAD)
        self.expr = self._expression_parser(self.line)

    def _finish_statement(self) -> None:
        """Continue after a ":" separator, otherwise move to the next line."""
        if self.line.at(":"):
            self.line.consume()
        else:
            self._advance()

    def _emit(self, *pieces: str) -> None:
        """Append one output line; the source comment goes on the first one only."""
        text = "".join(pieces)

        if self.line.has_comment and not self._comment_emitted:
            comment = self.line.comment.strip()
            text = f"{text} // {comment}" if text else f"// {comment}"
        self._comment_emitted = True

        indent = self.settings.INDENT_UNIT * self.state.depth if text else ""
        self.output.append((indent + text).rstrip())

    def _untouched(self, text: str) -> None:
        logger.warning(
            "Statement left untouched",
            extra_data={"line": self.line.line_number, "text": text},
        )
        self._emit(untouched(text))

    def _body(self, *terminators: str) -> None:
        """Translate statements until one of ``terminators`` is next."""
        while not self.line.at(*terminators):
            self._translate()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _translate(self) -> None:
        """Translate the statement at the current position."""
        token = self.line.peek()
        logger.debug(
            "Dispatching statement",
            extra_data={"line": self.line.line_number, "token": token.value},
        )

        if token.type is TokenType.END_OF_INPUT:
            raise UnexpectedEndOfInputError(
                "Unexpected end of input",
                self._source.physical_line(self._index),
                END_OF_INPUT,
            )

        value = token.value
        if token.type is TokenType.END_OF_LINE:
            self._translate_empty()
        elif value in _DECLARATIONS:
            self._translate_dim()
        elif value == "If":
            self._translate_if()
        elif value == "For":
            self._translate_for()
        elif value == "Do":
            self._translate_do()
        elif value == "While":
            self._translate_while()
        elif value == "Sub":
            self._translate_sub()
        elif value == "Function":
            self._translate_function()
        elif value == "Call":
            self._translate_call()
        elif value == "Select":
            self._translate_select()
        elif token.type is TokenType.EXIT:
            self._translate_exit()
        elif value == "With":
            self._translate_with()
        elif value == "Type":
            self._translate_type()
        elif token.type is TokenType.PUNT:
            self._translate_punt()
        elif token.type is TokenType.ON_ERROR:
            self._translate_on_error()
        elif token.type is TokenType.IDENTIFIER or value == ".":
            self._translate_assignment_or_call()
        elif value == "End With" and self.state.with_depth == 0:
            raise WithStackUnderflowError("End With without matching With")
        else:
            self._translate_other()

    def _translate_empty(self) -> None:
        """Blank line, or a line holding only a comment."""
        if not self._comment_emitted:
            self._emit("")
        self._advance()

    def _translate_other(self) -> None:
        self._untouched(self.line.rest())
        self._advance()

    def _translate_punt(self) -> None:
        self._untouched(self.line.rest())
        self._advance()

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _translate_dim(self) -> None:
        """Dim x As T, y(10) As T, z As T = expr."""
        kind = self.line.consume().value

        while True:
            preserve = False
            if self.line.at("Preserve"):
                self.line.consume()
                preserve = True

            name = self.line.consume().value
            bounds = self.expr.dimension_list() if self.line.at("(") else None

            vtype = ""
            construct = False
            if self.line.at("As"):
                self.line.consume()
                if self.line.at("New"):
                    self.line.consume()
                    construct = True
                vtype = self.expr.get_name()
                # Dim s As String * 100
                if self.line.at("*"):
                    self.line.consume()
                    vtype += " * " + self.expr.expression()

            initializer = None
            items = None
            if self.line.at("="):
                self.line.consume()
                if self.line.at("{"):
                    items = self._brace_items()
                else:
                    initializer = self.expr.expression()

            if kind == "ReDim" and bounds is not None:
                self._redim(name, bounds, vtype, preserve)
            elif bounds is not None or items is not None:
                self._declare_array(name, bounds or [], vtype, items)
            else:
                self._declare_scalar(name, vtype, construct, initializer)

            if not self.line.at(","):
                break
            self.line.consume()

        self._finish_statement()

    def _brace_items(self) -> list[str]:
        self.line.eat("{")
        items = []
        while not self.line.at("}") and not self.line.at_end():
            if self.line.at(","):
                self.line.consume()
                continue
            items.append(self.expr.expression())
        if self.line.at("}"):
            self.line.consume()
        return items

    @staticmethod
    def _type_comment(vtype: str) -> str:
        return f" // {vtype}" if vtype else ""

    def _declare_scalar(self, name: str, vtype: str, construct: bool, initializer: Optional[str]) -> None:
        if initializer is not None:
            self._emit("var ", name, " = ", initializer, ";", self._type_comment(vtype))
        elif self.state.is_type_name(vtype) or construct:
            self._emit("var ", name, " = new ", vtype, "();")
        else:
            self._emit("var ", name, ";", self._type_comment(vtype))

    def _declare_array(self, name: str, bounds: list, vtype: str, items: Optional[list[str]]) -> None:
        sizes = [array_size(upper) for _, upper in bounds]
        comment = self._type_comment(vtype)

        if items is not None:
            self._emit("var ", name, " = [", ", ".join(items), "];", comment)
        elif not sizes:
            self._emit("var ", name, " = new Array();", comment)
        elif len(sizes) == 1:
            self._emit("var ", name, " = new Array(", sizes[0], ");", comment)
        else:
            self._multi_dim_array(name, sizes, comment)

        self.state.register_array(name)

    def _redim(self, name: str, bounds: list, vtype: str, preserve: bool) -> None:
        sizes = [array_size(upper) for _, upper in bounds]

        if not self.state.is_array(name):
            comment = self._type_comment(vtype) + " // ReDim decl"
            if len(sizes) > 1:
                self._multi_dim_array(name, sizes, comment)
            else:
                self._emit("var ", name, " = new Array(", ", ".join(sizes), ");", comment)
            self.state.register_array(name)
        elif len(sizes) > 1:
            self._multi_dim_array(name, sizes, self._type_comment(vtype), declare=False)
        elif preserve:
            self._emit(name, ".length = ", sizes[0] if sizes else "0", ";")
        else:
            self._emit(name, " = new Array(", ", ".join(sizes), ");")

    def _multi_dim_array(self, name: str, sizes: list[str], comment: str, declare: bool = True) -> None:
        """Allocate an array of arrays, one nested loop per extra dimension."""
        self._emit("var " if declare else "", name, " = new Array(", sizes[0], ");", comment)

        subscript = ""
        for dimension in range(1, len(sizes)):
            index = loop_variable(dimension - 1)
            self._emit("for (var ", index, " = 0; ", index, " < ", sizes[dimension - 1], "; ++", index, ") {")
            self.state.indent()
            subscript += f"[{index}]"
            self._emit(name, subscript, " = new Array(", sizes[dimension], ");")

        for _ in range(1, len(sizes)):
            self.state.undent()
            self._emit("}")

    # ------------------------------------------------------------------
    # Control flow
    # ------------------------------------------------------------------

    def _translate_if(self) -> None:
        """If ... Then / [ElseIf ... Then] / [Else] / End If."""
        self.line.eat("If")
        condition = self.expr.expression()
        self.line.eat("Then")
        self._emit("if (", condition, ") {")
        self.state.indent()
        self._advance()
        self._body("End If", "Else", "ElseIf")

        while self.line.at("ElseIf"):
            self.line.eat("ElseIf")
            self.state.undent()
            condition = self.expr.expression()
            self.line.eat("Then")
            self._emit("} else if (", condition, ") {")
            self.state.indent()
            self._advance()
            self._body("End If", "Else", "ElseIf")

        if self.line.at("Else"):
            self.line.eat("Else")
            self.state.undent()
            self._emit("} else {")
            self.state.indent()
            self._advance()
            self._body("End If")

        self.line.eat("End If")
        self.state.undent()
        self._emit("}")
        self._advance()

    def _translate_for(self) -> None:
        """For i = start To stop [Step s] ... Next."""
        self.line.eat("For")
        if self.line.at("Each"):
            self._translate_for_each()
            return

        var = self.line.consume().value
        self.line.eat("=")
        start = self.expr.expression()
        direction = self.line.consume().value
        stop = self.expr.expression()

        if direction == "To":
            relation, increment = "<=", "+="
        else:  # Downto
            relation, increment = ">=", "-="

        if self.line.at("Step"):
            self.line.consume()
            step = self.expr.expression()
            if step.startswith("-"):
                relation, increment = ">=", "+="
        else:
            step = "1"

        if (step, increment) in (("1", "+="), ("-1", "-=")):
            update = "++" + var
        elif (step, increment) in (("1", "-="), ("-1", "+=")):
            update = "--" + var
        else:
            update = f"{var} {increment} {step}"

        self._emit("for (var ", var, " = ", start, "; ", var, " ", relation, " ", stop, "; ", update, ") {")
        self.state.indent()
        self._advance()
        self._body("Next")
        self.state.undent()
        self._emit("}")
        self._advance()

    def _translate_for_each(self) -> None:
        """For Each x In collection ... Next."""
        self.line.eat("Each")
        var = self.line.consume().value
        if self.line.at("As"):
            self.line.consume()
            self.expr.get_name()
        self.line.eat("In")
        collection = self.expr.expression()

        self._emit("for (var ", var, " in ", collection, ") {")
        self.state.indent()
        self._advance()
        self._body("Next")
        self.state.undent()
        self._emit("}")
        self._advance()

    def _translate_do(self) -> None:
        """Do [While|Until c] ... Loop [While|Until c]."""
        self.line.eat("Do")
        if self.line.at("While"):
            self.line.consume()
            self._emit("while (", self.expr.expression(), ") {")
        elif self.line.at("Until"):
            self.line.consume()
            self._emit("while (!(", self.expr.expression(), ")) {")
        else:
            self._emit("while (true) {")

        self._advance()
        self.state.indent()
        self._body("Loop")
        self.line.eat("Loop")

        if self.line.at("While"):
            self.line.consume()
            self._emit("if (!(", self.expr.expression(), "))")
            self._indented_break()
        elif self.line.at("Until"):
            self.line.consume()
            self._emit("if (", self.expr.expression(), ")")
            self._indented_break()

        self.state.undent()
        self._emit("}")
        self._advance()

    def _indented_break(self) -> None:
        self.state.indent()
        self._emit("break;")
        self.state.undent()

    def _translate_while(self) -> None:
        """While c ... Wend / End While."""
        self.line.eat("While")
        self._emit("while (", self.expr.expression(), ") {")
        self._advance()
        self.state.indent()
        self._body("End While", "Wend")
        self.line.consume()
        self.state.undent()
        self._emit("}")
        self._advance()

    def _translate_select(self) -> None:
        """Select Case e / Case ... / [Case Else] / End Select."""
        self.line.eat("Select")
        self.line.eat("Case")
        subject = parenthesize(self.expr.expression())
        if self.line.has_comment:
            self._emit("")
        self._advance()

        clauses = 0
        while not self.line.at("End Select"):
            if self.line.at("Case"):
                self._translate_case(subject, first=clauses == 0)
                clauses += 1
            else:
                self._translate()

        self.line.eat("End Select")
        if clauses:
            self._emit("}")
        self._advance()

    def _translate_case(self, subject: str, first: bool) -> None:
        """One Case clause; alternatives are OR'd together."""
        self.line.eat("Case")
        chain = "" if first else "} else "

        if self.line.at("Else"):
            self.line.consume()
            self._emit("{" if first else "} else {")
        else:
            alternatives = []
            while not self.line.at_end() and not self.line.at(":"):
                alternatives.append(self._case_alternative(subject))
                if self.line.at(","):
                    self.line.consume()
            self._emit(chain, "if (", " || ".join(alternatives), ") {")

        self.state.indent()
        if self.line.at(":"):
            # Case 1: x = 1
            self.line.consume()
            if self.line.at_end():
                self._advance()
            else:
                self._translate()
        else:
            self._advance()
        self._body("Case", "End Select")
        self.state.undent()

    def _case_alternative(self, subject: str) -> str:
        if self.line.at("Is"):
            self.line.consume()

        token = self.line.peek()
        if token.type is TokenType.OPERATOR and token.value in _CASE_COMPARISONS:
            operator = fix_operator(self.line.consume().value).strip()
            return f"{subject} {operator} {parenthesize(self.expr.expression())}"

        low = self.expr.expression()
        if self.line.at("To"):
            self.line.consume()
            high = self.expr.expression()
            return f"{subject} >= {low} && {subject} <= {high}"
        return f"{subject} === {parenthesize(low)}"

    # ------------------------------------------------------------------
    # Routines
    # ------------------------------------------------------------------

    def _parameter_list(self) -> str:
        """
        Translate a Sub/Function parameter list.

        ByVal is dropped; ByRef, Optional and ParamArray survive as comments,
        as do default values. Array parameters are registered as arrays.
        """
        if not self.line.at("("):
            return ""
        self.line.eat("(")

        parameters = []
        while not self.line.at(")") and not self.line.at_end():
            marker = ""
            while self.line.at("ByRef", "ByVal", "Optional", "ParamArray"):
                modifier = self.line.consume().value
                if modifier != "ByVal":
                    marker += f"/*{modifier}*/"

            name = self.line.consume().value
            if self.line.at("("):
                self.expr.argument_list()
                self.state.register_array(name)

            parameter = marker + name
            if self.line.at("As"):
                self.line.consume()
                self.expr.get_name()
            if self.line.at("="):
                self.line.consume()
                parameter += f" /*= {self.expr.expression()}*/"

            parameters.append(parameter)
            if self.line.at(","):
                self.line.consume()

        if self.line.at(")"):
            self.line.consume()
        return ", ".join(parameters)

    def _translate_sub(self) -> None:
        """Sub name(params) ... End Sub."""
        self.state.enter_routine()
        self.line.eat("Sub")
        name = self.line.consume().value
        parameters = self._parameter_list()

        self._emit("function ", name, "(", parameters, ") {")
        self.state.indent()
        self._advance()
        self._body("End Sub")

        self.line.eat("End Sub")
        self.state.undent()
        self._emit("}")
        self.state.leave_routine()
        self._advance()

    def _translate_function(self) -> None:
        """
        Function name(params) [As T] ... End Function.

        VBA returns a value by assigning to the function's own name, so a
        return variable is declared on entry and returned on exit.
        """
        self.state.enter_routine()
        self.line.eat("Function")
        enclosing = self.state.function_name
        self.state.function_name = self.line.consume().value
        parameters = self._parameter_list()

        return_type = ""
        if self.line.at("As"):
            self.line.consume()
            return_type = self.line.rest()

        result = self.state.return_variable
        self._emit("function ", self.state.function_name, "(", parameters, ") {", self._type_comment(return_type))
        self.state.indent()
        self._emit("var ", result, ' = ""; // Stores return value')
        self._advance()
        self._body("End Function")

        self.line.eat("End Function")
        self._emit("return ", result, ";")
        self.state.undent()
        self._emit("}")
        self.state.function_name = enclosing
        self.state.leave_routine()
        self._advance()

    def _translate_exit(self) -> None:
        """Exit For/Do/While/Sub/Function."""
        self.line.consume()
        target = self.line.consume().value

        if target in _LOOP_EXITS:
            self._emit("break;")
        elif target == "Sub":
            self._emit("return;")
        elif target == "Function":
            self._emit("return ", self.state.return_variable, ";")
        else:
            self._untouched(f"Exit {target} {self.line.rest()}".rstrip())
        self._finish_statement()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _translate_assignment_or_call(self, rewrapped: bool = False) -> None:
        """
        Translate ``foo``, ``foo(bar)``, ``foo bar, baz`` and ``x = expr``.

        Whether a name is called or assigned is decided from the single
        token that follows it.
        """
        name = self.expr.get_name()

        if self.line.at(":"):
            # Label
            self._untouched(f"{name} {self.line.rest()}")
            self._advance()
            return

        if self.line.at(",") and not rewrapped:
            # foo (a), (b) becomes foo((a), (b))
            code, comment = split_comment(self.line.original.strip())
            head, _, tail = code.partition(" ")
            if tail:
                self._reparse(f"{head}({tail.strip()}) {comment}".rstrip())
                self._translate_assignment_or_call(rewrapped=True)
                return

        token = self.line.peek()
        if token.value == "=":
            self.line.consume()
            if self.state.function_name and name == self.state.function_name:
                name = self.state.return_variable
            if self.line.at("Array"):
                self.state.register_array(name)
                statement = f"{name} = new {self.expr.expression()}"
            else:
                statement = f"{name} = {self.expr.expression()}"
        elif token.type in (TokenType.IDENTIFIER, TokenType.NUMBER, TokenType.STRING) or token.value == "-":
            # foo bar, glop
            statement = f"{name}({', '.join(self.expr.bare_argument_list())})"
        else:
            rest = self.line.rest()
            if not rest and not name.endswith(")"):
                statement = name + "()"
            else:
                statement = f"{name} {rest}"

        self._emit(statement.strip(), ";")
        self._finish_statement()

    def _translate_call(self) -> None:
        """Call foo / Call foo(a, b) / Call foo a, b."""
        self.line.eat("Call")
        name = self.expr.get_name()

        if self.line.at_end() or self.line.at(":"):
            self._emit(name if name.endswith(")") else name + "()", ";")
        else:
            self._emit(name, "(", ", ".join(self.expr.bare_argument_list()), ");")
        self._finish_statement()

    def _translate_on_error(self) -> None:
        """
        On Error GoTo label.

        Approximated as try/catch: statements up to the label are guarded,
        statements from the label to the end of the routine handle the error.
        """
        self.line.consume()
        # GoTo is a punt token and keeps its source casing
        if self.line.peek().value.lower() != "goto":
            self._untouched(f"On Error {self.line.rest()}")
            self._advance()
            return

        self.line.consume()
        label = self.line.consume().value
        routine_end = ("End Sub", "End Function")

        self._emit("try {")
        self.state.indent()
        self._advance()
        while not self._at_label(label) and not self.line.at(*routine_end):
            self._translate()

        if self._at_label(label):
            self._advance()
        self.state.undent()
        self._emit("} catch (e) { // ", label)
        self.state.indent()
        self._body(*routine_end)
        self.state.undent()
        self._emit("}")

    def _at_label(self, label: str) -> bool:
        return self.line.peek().value.lower() == label.lower()

    def _translate_with(self) -> None:
        """With target ... End With: members with a leading "." get the target prefixed."""
        self.line.eat("With")
        target = self.expr.get_name()
        self.state.push_with(target)
        self._emit("// With ", target)
        self._advance()
        self._body("End With")

        self.line.eat("End With")
        self.state.pop_with()
        self._advance()

    def _translate_type(self) -> None:
        """Type Name / members / End Type → constructor plus prototype fields."""
        self.line.eat("Type")
        type_name = self.line.consume().value
        self.state.add_type_name(type_name)
        self._emit("var ", type_name, " = function() {}; // Creates an empty class")
        self._advance()

        while not self.line.at("End Type"):
            if self.line.peek().type is TokenType.END_OF_INPUT:
                raise UnexpectedEndOfInputError(
                    f"Unexpected end of input inside Type {type_name}",
                    self._source.physical_line(self._index),
                    END_OF_INPUT,
                )
            self._type_member(type_name)
            self._advance()

        self.line.eat("End Type")
        self._advance()

    def _type_member(self, type_name: str) -> None:
        if self.line.at_end():
            if not self._comment_emitted:
                self._emit("")
            return
        if self.line.at("Dim"):
            self.line.consume()

        member = f"{type_name}.prototype.{self.line.consume().value}"
        bounds = self.expr.dimension_list() if self.line.at("(") else None

        vtype = ""
        if self.line.at("As"):
            self.line.consume()
            if self.line.at("New"):
                self.line.consume()
            vtype = self.expr.get_name()

        if bounds is not None:
            sizes = [array_size(upper) for _, upper in bounds]
            if len(sizes) > 1:
                self._multi_dim_array(member, sizes, self._type_comment(vtype), declare=False)
            else:
                self._emit(member, " = new Array(", ", ".join(sizes), ");", self._type_comment(vtype))
        elif self.state.is_type_name(vtype):
            self._emit(member, " = new ", vtype, "();")
        else:
            self._emit(member, ";", self._type_comment(vtype))


def convert(source: Union[str, Iterable[str]], settings: Optional[Settings] = None) -> str:
    """Convert VBA source to JavaScript with a fresh translator."""
    return VbaTranslator(settings).convert(source)
