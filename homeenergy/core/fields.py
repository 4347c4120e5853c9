"""
Lenient field types shared by the input schema.

Serialized inputs come from hand-edited JSON and form state, so numeric
fields never fail validation: unparseable values become NaN and are left
for the fallback resolver to replace.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import BeforeValidator
from typing_extensions import Annotated

from .units import to_number


def _coerce_number(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return to_number(value, math.nan)


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


# Optional float that accepts anything; junk becomes NaN
Number = Annotated[Optional[float], BeforeValidator(_coerce_number)]

# Free text that accepts anything; None becomes ""
Text = Annotated[str, BeforeValidator(_coerce_text)]


def _coerce_optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


# Optional free text; None stays None
OptionalText = Annotated[Optional[str], BeforeValidator(_coerce_optional_text)]
