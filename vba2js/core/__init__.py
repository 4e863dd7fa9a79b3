"""Core utilities package"""

from .config import Settings, get_settings
from .logging import setup_logging, get_logger, get_context_logger
from .errors import (
    ConversionError,
    UnknownTokenError,
    RunawayLookaheadError,
    UnexpectedEndOfInputError,
    UnbalancedNestingError,
    WithStackUnderflowError,
    format_conversion_error,
)

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "ConversionError",
    "UnknownTokenError",
    "RunawayLookaheadError",
    "UnexpectedEndOfInputError",
    "UnbalancedNestingError",
    "WithStackUnderflowError",
    "format_conversion_error",
]
