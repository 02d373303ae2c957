"""Parameter Parsing - lenient conversion of raw query-string values.

Invariants:
    - Never raises for ints/flags: malformed input maps to None (caller decides default)
    - parse_date raises FieldValidationError: a malformed date is a caller mistake
"""

from datetime import date

from pdtracker.core.errors import FieldValidationError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def blank_to_none(value: object) -> str | None:
    """Trim strings; blank or None becomes None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_int_or_none(value: object) -> int | None:
    """Parse a base-10 integer; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = blank_to_none(value)
    if text is None:
        return None
    try:
        return int(text, 10)
    except ValueError:
        return None


def parse_positive_id(value: object) -> int | None:
    """Ids are positive integers; zero, negatives and junk are absent."""
    parsed = parse_int_or_none(value)
    if parsed is None or parsed <= 0:
        return None
    return parsed


def parse_flag(value: object) -> bool | None:
    """Tri-state flag: True, False, or None when unset/unrecognized."""
    if isinstance(value, bool):
        return value
    text = blank_to_none(value)
    if text is None:
        return None
    lowered = text.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


def parse_date(value: object, field: str) -> date | None:
    """Parse an ISO YYYY-MM-DD date; blank is None."""
    if isinstance(value, date):
        return value
    text = blank_to_none(value)
    if text is None:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise FieldValidationError(
            f"{field} must be a date in YYYY-MM-DD format", field=field,
        )


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def split_csv(value: object) -> tuple[str, ...]:
    """Split a comma-separated filter into distinct trimmed values, order kept."""
    text = blank_to_none(value)
    if text is None:
        return ()
    seen: dict[str, None] = {}
    for part in text.split(","):
        part = part.strip()
        if part:
            seen.setdefault(part, None)
    return tuple(seen)
