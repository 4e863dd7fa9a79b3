"""
Conversion exceptions and error formatting.

Every error here is fatal for the whole conversion. Statements the translator
recognises but cannot translate are not errors: they are emitted as
commented-out "untouched" lines instead.
"""

from typing import Any, Dict, Optional


class ConversionError(Exception):
    """Base exception for conversion failures"""

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.line_number = line_number
        self.line = line
        self.details = details or {}
        super().__init__(self.message)

    def locate(self, line_number: int, line: Optional[str]) -> "ConversionError":
        """Attach a source location if the error does not carry one yet."""
        if self.line_number is None:
            self.line_number = line_number
        if self.line is None:
            self.line = line
        return self

    def __str__(self) -> str:
        text = self.message
        if self.line_number is not None:
            text += f" at line {self.line_number}"
        if self.line is not None:
            text += f" ({self.line})"
        return text


class UnknownTokenError(ConversionError):
    """Raised when no lexer rule matches the remaining input"""


class RunawayLookaheadError(ConversionError):
    """Raised when a single line is peeked more often than the lookahead ceiling"""


class UnexpectedEndOfInputError(ConversionError):
    """Raised when input ends while a block construct is still open"""


class UnbalancedNestingError(ConversionError):
    """Raised when the indent depth is nonzero after the last statement"""

    def __init__(self, depth: int, **kwargs: Any):
        super().__init__(
            f"Statement nesting error: depth = {depth}",
            details={"depth": depth},
            **kwargs
        )


class WithStackUnderflowError(ConversionError):
    """Raised when a With target is requested or closed but none is open"""


def format_conversion_error(error: ConversionError, source: str, context: int = 2) -> str:
    """
    Format a conversion error with an excerpt of the offending source.

    Args:
        error: The conversion error
        source: Original source text
        context: Number of lines shown before and after the failing line

    Returns:
        Error message followed by a numbered source listing
    """
    message = f"{error.__class__.__name__}: {error}"
    if error.line_number is None or not source:
        return message

    lines = source.splitlines()
    first = max(1, error.line_number - context)
    last = min(len(lines), error.line_number + context)

    listing = []
    for number in range(first, last + 1):
        marker = ">" if number == error.line_number else " "
        listing.append(f"{marker}{number:4d}: {lines[number - 1]}")

    if not listing:
        return message
    return message + "\n" + "\n".join(listing)
