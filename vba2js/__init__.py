"""vba2js - syntactic VBA to JavaScript translator.

Subpackages:
- vba2js.parser: lexer, translation state and expression parser
- vba2js.translator: line preprocessor, statement translator and CLI
- vba2js.core: configuration, logging and errors
"""

__version__ = "0.1.0"

from .core.errors import ConversionError
from .translator import VbaTranslator, convert, convert_file

__all__ = ["ConversionError", "VbaTranslator", "convert", "convert_file"]
