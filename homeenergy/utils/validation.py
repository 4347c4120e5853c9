"""
Input validation utilities for the Home Energy Calculator.

The calculation engine itself never raises on bad values; this module
guards the boundary where a persisted input file is read.

Usage:
    from homeenergy.utils.validation import load_input_record, ValidationError

    parsed = load_input_record("house.json")
    record = parsed.record
"""

import difflib
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from ..core.models import InputRecord

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = "", suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field = field
        self.suggestions = suggestions or []


@dataclass
class ParsedInput:
    """A parsed input record plus the top-level keys that were ignored."""

    record: InputRecord
    ignored_fields: List[str] = field(default_factory=list)


VALID_SORT_KEYS = ("cost", "co2")


def _close_matches(key: str) -> List[str]:
    return difflib.get_close_matches(key, sorted(InputRecord.accepted_keys()), n=1, cutoff=0.75)


def parse_input_record(data: Union[str, bytes, Mapping[str, Any]]) -> ParsedInput:
    """
    Parse a serialized input record.

    Args:
        data: JSON text, or an already-decoded mapping

    Returns:
        ParsedInput with the record and any ignored keys

    Raises:
        ValidationError: If the text is not JSON or does not hold a JSON object
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Input is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
                field="input",
                suggestions=["Export the input from the calculator or start from `homeenergy defaults`"],
            ) from e
        except UnicodeDecodeError as e:
            raise ValidationError(
                f"Input bytes are not UTF-8 encoded JSON: {e.reason} at byte {e.start}",
                field="input",
                suggestions=["Save the input file as UTF-8"],
            ) from e

    if not isinstance(data, Mapping):
        raise ValidationError(
            f"Input must be a JSON object, got {type(data).__name__}",
            field="input",
            suggestions=['Wrap the fields in an object like {"floorArea_ft2": 1800}'],
        )

    accepted = InputRecord.accepted_keys()
    ignored = [key for key in data if key not in accepted]
    for key in ignored:
        hint = _close_matches(str(key))
        if hint:
            logger.warning(f"Ignoring unknown input field {key!r} (did you mean {hint[0]!r}?)")
        else:
            logger.warning(f"Ignoring unknown input field {key!r}")

    record = InputRecord.model_validate(dict(data))
    return ParsedInput(record=record, ignored_fields=ignored)


def load_input_record(path: Union[str, Path]) -> ParsedInput:
    """
    Read and parse an input record from a JSON file.

    Raises:
        ValidationError: If the file cannot be read or parsed
    """
    path = Path(path)
    if not path.is_file():
        raise ValidationError(
            f"Input file not found: {path}",
            field="path",
            suggestions=["Check the path, or pass '-' to read from stdin"],
        )
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(f"Cannot read {path}: {e}", field="path") from e

    return parse_input_record(text)


def validate_sort_key(sort_key: str) -> str:
    """
    Validate a recommendation ranking key.

    Returns:
        Normalized key ("cost" or "co2")

    Raises:
        ValidationError: If the key is unknown
    """
    normalized = (sort_key or "").strip().lower()
    if normalized not in VALID_SORT_KEYS:
        raise ValidationError(
            f"Invalid sort key '{sort_key}'",
            field="sort",
            suggestions=[f"Valid keys are: {', '.join(VALID_SORT_KEYS)}"],
        )
    return normalized


def validate_top(top: int) -> int:
    """Validate the number of recommendations requested."""
    if top < 0:
        raise ValidationError(
            f"Number of recommendations must be >= 0, got {top}",
            field="top",
        )
    return top
