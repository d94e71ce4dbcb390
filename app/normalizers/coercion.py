"""Lenient readers for untyped JSON payload values.

Every helper is total: a missing or wrongly typed value yields the default
(empty string, 0.0, empty mapping or None) instead of raising.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

# Numeric timestamps at or below this are treated as garbage, not epoch seconds
MIN_UNIX_SECONDS = 1e9


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a JSON number
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def as_string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def as_mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def parse_number(value: Any) -> float:
    """Coerce float, int, Decimal or numeric strings to float; anything else is 0.0.

    Values that overflow to infinity, and NaN, are also 0.0.
    """
    if not (_is_number(value) or isinstance(value, str)):
        return 0.0
    try:
        number = float(value)
    except (OverflowError, InvalidOperation, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def number_to_ref(value: Any) -> str:
    """Render an identifier that may arrive as a string or a number.

    Floats are truncated toward zero; Decimals keep their literal digits.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return ""
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if math.isfinite(value) else ""
    if isinstance(value, Decimal):
        return str(value)
    return ""


def parse_unix_seconds(value: Any) -> Optional[datetime]:
    if not _is_number(value):
        return None
    try:
        seconds = float(value)
        if not seconds > MIN_UNIX_SECONDS:
            return None
        return datetime.fromtimestamp(int(seconds), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def parse_rfc3339(value: str) -> Optional[datetime]:
    # RFC3339 needs a full date-time with an explicit offset
    if "T" not in value.upper():
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00").replace("z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed.astimezone(timezone.utc)


def parse_time(value: Any) -> Optional[datetime]:
    """Parse an RFC3339 string or Unix seconds into an aware UTC datetime."""
    if isinstance(value, str):
        return parse_rfc3339(value)
    return parse_unix_seconds(value)
