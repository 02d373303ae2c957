"""Venue Rule - a PD record's venue is a known Venue reference XOR free text.

Invariants:
    - At most one of venue_id / venue_other is non-null after any write
    - Writing VenueID (any value) always rewrites venue_other in the same write:
      None when VenueID is non-null, else the supplied VenueOther (or None)
    - Writing only VenueOther never clears venue_id; if venue_id is set and the
      new VenueOther is non-blank the write is rejected
    - A write touching the venue must leave a venue selected (reference or text)
    - Blank VenueOther normalizes to None
"""

from dataclasses import dataclass

from pdtracker.core.errors import FieldValidationError
from pdtracker.core.field_presence import FieldValue, Present, is_present, value_or
from pdtracker.core.parse_params import blank_to_none

VENUE_REQUIRED_MESSAGE = "A venue is required: choose a venue or enter Venue Other."


@dataclass(frozen=True)
class VenueState:
    """The pair of venue columns on a record."""
    venue_id: int | None = None
    venue_other: str | None = None

    @property
    def is_selected(self) -> bool:
        return self.venue_id is not None or self.venue_other is not None


def normalize_venue_other(value: object) -> str | None:
    return blank_to_none(value)


def require_venue_selection(state: VenueState) -> None:
    """Reject a venue pair with neither reference nor free text."""
    if not state.is_selected:
        raise FieldValidationError(VENUE_REQUIRED_MESSAGE, field="VenueID")


def resolve_new_venue(venue_id: int | None, venue_other: object) -> VenueState:
    """Venue pair for a brand-new record."""
    other = None if venue_id is not None else normalize_venue_other(venue_other)
    state = VenueState(venue_id, other)
    require_venue_selection(state)
    return state


def resolve_venue_write(
    venue_id: FieldValue,
    venue_other: FieldValue,
    current: VenueState,
) -> dict[str, object]:
    """Column assignments for a partial update touching the venue.

    Returns an empty dict when neither venue key was supplied.
    """
    if is_present(venue_id):
        new_id = venue_id.value
        other = (
            normalize_venue_other(value_or(venue_other, None))
            if new_id is None else None
        )
        assignments: dict[str, object] = {"venue_id": new_id, "venue_other": other}
    elif isinstance(venue_other, Present):
        other = normalize_venue_other(venue_other.value)
        if other is not None and current.venue_id is not None:
            raise FieldValidationError(
                "VenueOther cannot be set while the record references a venue; "
                "send VenueID: null together with VenueOther.",
                field="VenueOther",
            )
        assignments = {"venue_other": other}
    else:
        return {}

    resulting = VenueState(
        assignments.get("venue_id", current.venue_id),
        assignments.get("venue_other", current.venue_other),
    )
    require_venue_selection(resulting)
    return assignments


def venue_display(
    venue_id: int | None, venue_name: str | None, venue_other: str | None,
) -> str | None:
    """Venue name when referenced, else the free text."""
    if venue_id is not None:
        return venue_name
    return venue_other
