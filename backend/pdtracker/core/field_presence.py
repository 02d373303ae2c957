"""Field Presence - tagged option type for partial updates.

Invariants:
    - A field is either ABSENT (caller did not send it) or Present(value)
    - Present(None) means "explicitly set to null", distinct from ABSENT
    - ABSENT is a singleton; compare with `is`
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class _Absent:
    """Marker for a field the caller did not supply."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass(frozen=True)
class Present(Generic[T]):
    """A field the caller supplied, possibly with a null value."""
    value: T


FieldValue = Union[Present[T], _Absent]


def is_present(field_value: "FieldValue") -> bool:
    return isinstance(field_value, Present)


def value_or(field_value: "FieldValue", default):
    """Unwrap a Present value, or return default when ABSENT."""
    if isinstance(field_value, Present):
        return field_value.value
    return default
