"""
Line preprocessor.

Turns raw source lines into the logical-line stream the translator walks:
- Continuation lines (ending in " _") are merged into one
- One-line If ... Then ... [Else ...] is expanded into block form
- The end-of-input sentinel is appended

Alongside the lines, a line map records the physical (1-based) source line
each logical line started on, so errors can point back at the source.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable

from vba2js.parser.operators import END_OF_INPUT

_CONTINUATION = re.compile(r"(?:(.*\s)|)_$")
_IF_HEADER = re.compile(r"If\b", re.IGNORECASE)
_THEN_WITH_BODY = re.compile(r"\bThen\s+(?=\S)", re.IGNORECASE)
_ELSE = re.compile(r"\bElse\b", re.IGNORECASE)


@dataclass
class PreprocessResult:
    """Result of preprocessing a source file."""

    lines: list[str]
    """Logical lines, terminated by the end-of-input sentinel"""

    line_map: dict[int, int] = field(default_factory=dict)
    """Map from logical line index to 1-based physical source line"""

    def physical_line(self, index: int) -> int:
        """Return the source line number for logical line ``index``."""
        if index in self.line_map:
            return self.line_map[index]
        # Sentinel: one past the last mapped line
        return max(self.line_map.values(), default=0) + 1


def split_comment(line: str) -> tuple[str, str]:
    """
    Split ``line`` into code and trailing comment.

    A quote inside a string literal does not start a comment. The returned
    comment includes its leading quote, or is empty.
    """
    in_string = False
    for i, char in enumerate(line):
        if char == '"':
            in_string = not in_string
        elif char == "'" and not in_string:
            return line[:i].rstrip(), line[i:]
    return line, ""


def mask_strings(code: str) -> str:
    """
    Blank out the contents of string literals, keeping the quotes.

    The result has the same length as ``code``, so match offsets found in
    it can be used to slice the original.
    """
    masked = []
    in_string = False
    for char in code:
        if char == '"':
            in_string = not in_string
            masked.append(char)
        else:
            masked.append("_" if in_string else char)
    return "".join(masked)


def is_one_line_if(code: str) -> bool:
    """Check whether ``code`` is an If statement with its body on the same line."""
    code, _ = split_comment(code)
    return bool(_IF_HEADER.match(code) and _THEN_WITH_BODY.search(mask_strings(code)))


class LinePreprocessor:
    """Prepare raw source lines for translation."""

    def preprocess(self, lines: Iterable[str]) -> PreprocessResult:
        merged, line_map = self._merge_continuations(lines)

        result = PreprocessResult(lines=[], line_map={})
        for physical, line in zip(line_map, merged):
            for expanded in self._expand(line):
                result.line_map[len(result.lines)] = physical
                result.lines.append(expanded)

        result.lines.append(END_OF_INPUT)
        return result

    @staticmethod
    def _merge_continuations(lines: Iterable[str]) -> tuple[list[str], list[int]]:
        merged: list[str] = []
        starts: list[int] = []
        pending = None

        for number, raw in enumerate(lines, start=1):
            if raw is None:
                continue
            line = raw.strip()
            if pending is not None:
                text, start = pending
                line = text + line
            else:
                start = number

            match = _CONTINUATION.fullmatch(line)
            if match:
                pending = (match.group(1) or "", start)
                continue

            pending = None
            merged.append(line)
            starts.append(start)

        # Continuation on the very last line
        if pending is not None:
            text, start = pending
            merged.append(text.strip())
            starts.append(start)

        return merged, starts

    def _expand(self, line: str) -> list[str]:
        """Expand a one-line If into block form (recursively)."""
        if not is_one_line_if(line):
            return [line]

        code, comment = split_comment(line)
        masked = mask_strings(code)
        then = _THEN_WITH_BODY.search(masked)
        header = code[:then.start()] + "Then"
        if comment:
            header += " " + comment
        body = code[then.end():]

        else_match = _ELSE.search(masked[then.end():])
        if else_match:
            then_part = body[:else_match.start()].strip()
            else_part = body[else_match.end():].strip()
        else:
            then_part = body.strip()
            else_part = None

        expanded = [header, *self._expand(then_part)]
        if else_part is not None:
            expanded.append("Else")
            if else_part:
                expanded.extend(self._expand(else_part))
        expanded.append("End If")
        return expanded
