"""
Shared pytest fixtures for the vba2js test suite.

This module provides:
- Settings isolated from the developer's environment and .env file
- Helpers to convert source lines and to tokenize or parse a single line
"""

import pytest

from vba2js.core.config import Settings
from vba2js.parser.expression import ExpressionParser
from vba2js.parser.state import TranslationState
from vba2js.parser.tokenizer import LogicalLine
from vba2js.translator.translator import VbaTranslator


@pytest.fixture
def settings(monkeypatch):
    """Default settings, unaffected by VBA2JS_* environment variables."""
    for name in list(Settings.model_fields):
        monkeypatch.delenv(f"VBA2JS_{name}", raising=False)
    return Settings(_env_file=None)


@pytest.fixture
def fresh_state():
    """An empty TranslationState."""
    return TranslationState()


@pytest.fixture
def convert_lines(settings):
    """Convert source lines and return the generated JavaScript split into lines."""
    def _convert(*lines: str, **overrides) -> list[str]:
        active = settings.model_copy(update=overrides) if overrides else settings
        return VbaTranslator(active).convert(list(lines)).splitlines()
    return _convert


@pytest.fixture
def make_line():
    """Build a LogicalLine from source text."""
    def _make(text: str, max_lookahead: int = 1000) -> LogicalLine:
        return LogicalLine(text, line_number=1, max_lookahead=max_lookahead)
    return _make


@pytest.fixture
def parse_expression(make_line, fresh_state):
    """Translate a single expression; the state fixture is shared with the test."""
    def _parse(text: str, state: TranslationState | None = None, **options) -> str:
        parser = ExpressionParser(make_line(text), state or fresh_state, **options)
        return parser.expression()
    return _parse
