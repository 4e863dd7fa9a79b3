"""
vba2js translator - statement-level VBA → JavaScript conversion

Preprocesses source lines into logical lines, then translates them one
statement at a time.
"""

from .preprocessor import LinePreprocessor, PreprocessResult
from .translator import VbaTranslator, convert
from .cli import convert_file

__all__ = [
    "LinePreprocessor",
    "PreprocessResult",
    "VbaTranslator",
    "convert",
    "convert_file",
]
