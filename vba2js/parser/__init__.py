"""
Lexing and expression parsing for VBA source.

- operators: operator substitution and keyword tables
- tokenizer: LogicalLine cursor and the ordered lexer rules
- state: per-conversion TranslationState
- expression: precedence-climbing ExpressionParser
"""

from .operators import END_OF_INPUT, fix_operator, canonical_keyword
from .tokenizer import LogicalLine, Token, TokenType
from .state import TranslationState
from .expression import ExpressionParser

__all__ = [
    "END_OF_INPUT",
    "fix_operator",
    "canonical_keyword",
    "LogicalLine",
    "Token",
    "TokenType",
    "TranslationState",
    "ExpressionParser",
]
