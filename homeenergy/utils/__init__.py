"""Utility modules."""

from .logging_config import (
    setup_logging,
    ConsoleFormatter,
    JsonLineFormatter,
)
from .validation import (
    ValidationError,
    ParsedInput,
    parse_input_record,
    load_input_record,
    validate_sort_key,
    validate_top,
)

__all__ = [
    # Logging
    "setup_logging",
    "ConsoleFormatter",
    "JsonLineFormatter",
    # Validation
    "ValidationError",
    "ParsedInput",
    "parse_input_record",
    "load_input_record",
    "validate_sort_key",
    "validate_top",
]
