"""
Tokenizer for one logical line of VBA source.

A LogicalLine holds the canonicalised text of a single statement and an
explicit read offset into it. Tokens are produced on demand by walking an
ordered table of (pattern, TokenType) rules and taking the first match, so
rule order is significant: word-bounded keyword operators must be tried
before identifiers, and two-character operators before the single-character
fallback.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto

from vba2js.core.errors import RunawayLookaheadError, UnknownTokenError
from vba2js.core.logging import get_logger

from .operators import END_OF_INPUT, canonical_keyword

logger = get_logger(__name__)


class TokenType(Enum):
    """Token classifications, in no particular order."""

    IDENTIFIER = auto()
    OPERATOR = auto()
    NUMBER = auto()
    STRING = auto()
    DATE = auto()
    HEX = auto()
    KEYWORD = auto()  # Then, Else, To, Step, As, ...
    BLOCK_END = auto()  # End If, End Sub, ...
    EXIT = auto()
    TYPE = auto()  # Type, End Type
    DISCARD = auto()  # visibility/assignment modifiers with no meaning
    PUNT = auto()  # statements passed through untranslated
    ON_ERROR = auto()
    CHAR = auto()
    END_OF_LINE = auto()
    END_OF_INPUT = auto()


@dataclass
class Token:
    """
    A single token of a logical line.

    Attributes:
        type: The token type
        value: The (possibly rewritten) token text
        pos: Offset of the token in the canonical line text
    """

    type: TokenType
    value: str
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, '{self.value}', pos={self.pos})"


def _rule(pattern: str, token_type: TokenType) -> tuple[re.Pattern[str], TokenType]:
    return re.compile(pattern, re.IGNORECASE), token_type


# Ordered lexer rules; the first matching rule wins
RULES: list[tuple[re.Pattern[str], TokenType]] = [
    _rule(r"(?:Mod|IsNot|Is|Not|AndAlso|And|OrElse|Or|Xor|Eqv|Like|New)\b", TokenType.OPERATOR),
    _rule(r"End\s+(?:If|Sub|Function|While|With|Select)\b", TokenType.BLOCK_END),
    _rule(r"Exit\b", TokenType.EXIT),
    _rule(r"(?:Private|Public|Static|Friend|Let|Set)\b", TokenType.DISCARD),
    _rule(r"(?:Attribute|Option|Declare)\b", TokenType.PUNT),
    _rule(
        r"(?:Open\b.*\bFor\b|Close\s*#|Print\s*#|Line\s+Input\s*#|Write\s*#|Input\s*#|Get\s*#|Put\s*#)",
        TokenType.PUNT,
    ),
    _rule(r"(?:On\s+Error\s+(?:Resume\s+Next|GoTo\s+0)|Resume|GoTo)\b", TokenType.PUNT),
    _rule(r"On\s+Error\b", TokenType.ON_ERROR),
    _rule(r"(?:Then|Else|To|Downto|Step|As|ByVal|ByRef)\b", TokenType.KEYWORD),
    _rule(r"(?:Type|End\s+Type)\b", TokenType.TYPE),
    _rule(r"[a-z]\w*\$?", TokenType.IDENTIFIER),
    _rule(r"#\d+/\d+/\d+(?:\s+[\d:]+(?:\s*[ap]m)?)?#", TokenType.DATE),
    _rule(r"(?:\d+\.?\d*|\.\d+)(?:e[-+]?\d+)?[&#!@%]?", TokenType.NUMBER),
    _rule(r"&h[0-9a-f]+&?", TokenType.HEX),
    _rule(r"<>|<=|>=|:=|<<|>>", TokenType.OPERATOR),
    _rule(r"[*^/\\+\-&=><]", TokenType.OPERATOR),
    _rule(r'"[^"]*"', TokenType.STRING),
    _rule(r".", TokenType.CHAR),
    _rule(r"\Z", TokenType.END_OF_LINE),
]

# Token types whose text is recased against the keyword table
_CASED_TYPES = frozenset({
    TokenType.IDENTIFIER,
    TokenType.OPERATOR,
    TokenType.KEYWORD,
    TokenType.BLOCK_END,
    TokenType.EXIT,
    TokenType.TYPE,
    TokenType.ON_ERROR,
})

# Lexical rewrites applied once per line, before tokenizing
_CANONICAL_REWRITES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^(?:(?:Public|Private|Friend|Static)\s+)+(?=(?:Sub|Function|Property|Type|Declare|Enum)\b)", re.I), ""),
    (re.compile(r"^Property\s+(Get|Let|Set)\s+", re.I), r"Function \1"),
    (re.compile(r"^End\s+Property\b", re.I), "End Function"),
    (re.compile(r"^Exit\s+Property\b", re.I), "Exit Function"),
    (re.compile(r"^(?:Public|Private|Friend|Global)\s+Const\b", re.I), "Const"),
    (re.compile(r"^(?:Public|Private|Friend)\s+(?=(?:Dim|Global)\b)", re.I), ""),
    (re.compile(r"^(?:Public|Private|Friend|Static)\b", re.I), "Dim"),
]

_REM_COMMENT = re.compile(r"^rem(?:\s|$)", re.IGNORECASE)


class LogicalLine:
    """
    Cursor over one logical line of source.

    The constructor separates the trailing comment, normalises string
    literals for the target language and canonicalises a few lexical forms.
    After that the canonical text never changes; only ``pos`` moves forward
    as tokens are consumed.
    """

    def __init__(self, original: str, line_number: int = 0, max_lookahead: int = 1000):
        """
        Initialize a line.

        Args:
            original: Raw source text of the logical line
            line_number: 1-based source line number (for error reporting)
            max_lookahead: Maximum number of peeks before giving up on the line
        """
        self.original = original
        self.line_number = line_number
        self.max_lookahead = max_lookahead
        self.comment = ""
        self.peek_count = 0
        self.token = ""
        self.token_type = TokenType.END_OF_LINE
        self.pos = 0
        self._end_of_input = False
        self.text = self._canonicalize(self._split_comment(original.strip()))

    @classmethod
    def end_of_input(cls, line_number: int = 0) -> "LogicalLine":
        """Create the sentinel line that follows the last source line."""
        line = cls("", line_number)
        line.original = END_OF_INPUT
        line._end_of_input = True
        return line

    @property
    def is_end_of_input(self) -> bool:
        return self._end_of_input

    @property
    def has_comment(self) -> bool:
        return bool(self.comment)

    @property
    def peek_type(self) -> TokenType:
        """Type of the most recently scanned token."""
        return self.token_type

    # ------------------------------------------------------------------
    # Token access
    # ------------------------------------------------------------------

    def peek(self) -> Token:
        """
        Return the next token without consuming it.

        Raises:
            RunawayLookaheadError: If the line has been peeked too often
        """
        if self._end_of_input:
            return self._end_token()

        self.peek_count += 1
        if self.peek_count > self.max_lookahead:
            raise RunawayLookaheadError(
                f"Looping because of illegal input: {self.original.strip()}",
                self.line_number,
                self.original.strip(),
            )
        return self._scan(advance=False)

    def consume(self) -> Token:
        """Return the next token and advance past it."""
        if self._end_of_input:
            return self._end_token()
        return self._scan(advance=True)

    def eat(self, expected: str) -> Token:
        """
        Step over a token the caller has already identified as ``expected``.

        A different token is still consumed, so malformed input degrades
        instead of stalling; the mismatch is logged.
        """
        token = self.consume()
        if token.value != expected:
            logger.debug(
                "Expected %r but found %r at line %d: %s",
                expected, token.value, self.line_number, self.original.strip(),
            )
        return token

    def at(self, *values: str) -> bool:
        """Check whether the next token's text is one of ``values``."""
        return self.peek().value in values

    def at_end(self) -> bool:
        """Check whether nothing but the end of the line (or input) remains."""
        return self.peek().type in (TokenType.END_OF_LINE, TokenType.END_OF_INPUT)

    def rest(self) -> str:
        """Consume and return whatever remains of the canonical text."""
        if self._end_of_input:
            return ""
        remainder = self.text[self.pos:].strip()
        self.pos = len(self.text)
        return remainder

    def _end_token(self) -> Token:
        self.token = END_OF_INPUT
        self.token_type = TokenType.END_OF_INPUT
        return Token(TokenType.END_OF_INPUT, END_OF_INPUT, self.pos)

    def _skip_space(self, pos: int) -> int:
        while pos < len(self.text) and self.text[pos].isspace():
            pos += 1
        return pos

    def _scan(self, advance: bool) -> Token:
        pos = self._skip_space(self.pos)

        while True:
            for pattern, token_type in RULES:
                match = pattern.match(self.text, pos)
                if match:
                    break
            else:
                raise UnknownTokenError(
                    f"Unknown token, can't parse: {self.text[pos:]}",
                    self.line_number,
                    self.original.strip(),
                )

            if token_type is not TokenType.DISCARD:
                break
            # Drop the modifier and look again
            pos = self._skip_space(match.end())
            if advance:
                self.pos = pos

        value = match.group()
        end = match.end()

        if token_type is TokenType.STRING:
            end = self._string_end(pos)
            value = self.text[pos:end]
        elif token_type is TokenType.DATE:
            value = '"' + value[1:-1] + '"'
        elif token_type is TokenType.HEX:
            value = "0x" + value[2:].rstrip("&")
        elif token_type is TokenType.NUMBER:
            value = value.rstrip("&#!@%")
        elif token_type in (TokenType.BLOCK_END, TokenType.TYPE, TokenType.ON_ERROR):
            value = " ".join(value.split())
        elif value == "!":
            # Bang member access: rs!Field
            value = "."

        if token_type in _CASED_TYPES:
            value = canonical_keyword(value)

        if advance:
            self.pos = end

        self.token = value
        self.token_type = token_type
        return Token(token_type, value, pos)

    def _string_end(self, start: int) -> int:
        """Find the end of the string literal at ``start``, skipping escaped quotes."""
        i = start + 1
        while i < len(self.text):
            if self.text[i] == '"':
                return i + 1
            if self.text[i] == "\\":
                i += 1
            i += 1
        return len(self.text)

    # ------------------------------------------------------------------
    # Line canonicalisation
    # ------------------------------------------------------------------

    def _split_comment(self, line: str) -> str:
        """
        Separate the trailing comment and normalise literals.

        Strings are rewritten for the target language ("" becomes \\" and a
        backslash is escaped), and Excel's [A1] shorthand becomes Range("A1").
        """
        if _REM_COMMENT.match(line):
            self.comment = line[3:].strip()
            return ""

        parts: list[str] = []
        i = 0
        while i < len(line):
            char = line[i]
            if char == "'":
                self.comment = line[i + 1:].strip()
                break
            if char == '"':
                literal, i = self._read_string(line, i)
                parts.append(literal)
            elif char == "[":
                literal, i = self._read_bracketed(line, i)
                parts.append(literal)
            else:
                parts.append(char)
                i += 1
        return "".join(parts).strip()

    @staticmethod
    def _read_string(line: str, start: int) -> tuple[str, int]:
        parsed = ['"']
        i = start + 1
        while i < len(line):
            char = line[i]
            if char == "\\":
                parsed.append("\\\\")
                i += 1
            elif char == '"' and line[i + 1:i + 2] == '"':
                parsed.append('\\"')
                i += 2
            elif char == '"':
                parsed.append('"')
                return "".join(parsed), i + 1
            else:
                parsed.append(char)
                i += 1
        # Unterminated literal: close it at end of line
        parsed.append('"')
        return "".join(parsed), i

    @staticmethod
    def _read_bracketed(line: str, start: int) -> tuple[str, int]:
        inside: list[str] = []
        i = start + 1
        while i < len(line) and line[i] != "]":
            inside.append("." if line[i] == "!" else line[i])
            i += 1
        return 'Range("' + "".join(inside) + '")', i + 1

    @staticmethod
    def _canonicalize(text: str) -> str:
        for pattern, replacement in _CANONICAL_REWRITES:
            text = pattern.sub(replacement, text)
        return text
