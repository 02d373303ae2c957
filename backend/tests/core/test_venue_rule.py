"""Venue Rule - tests for venue reference vs free-text exclusivity.

Tests cover:
    - VenueID present always rewrites VenueOther in the same write
    - Only VenueOther present never clears venue_id
    - Every write leaves a venue selected
    - Display prefers the venue name when referenced
"""

import pytest

from pdtracker.core.errors import FieldValidationError
from pdtracker.core.field_presence import ABSENT, Present
from pdtracker.core.venue_rule import (
    VenueState,
    resolve_new_venue,
    resolve_venue_write,
    venue_display,
)


# ─── resolve_venue_write ────────────────────────────────────────

def test_setting_venue_id_clears_free_text():
    current = VenueState(venue_id=None, venue_other="Town Hall")
    assignments = resolve_venue_write(Present(5), ABSENT, current)
    assert assignments == {"venue_id": 5, "venue_other": None}


def test_venue_id_wins_when_both_supplied():
    assignments = resolve_venue_write(Present(5), Present("Ignored"), VenueState())
    assert assignments == {"venue_id": 5, "venue_other": None}


def test_clearing_venue_id_takes_supplied_free_text():
    current = VenueState(venue_id=3)
    assignments = resolve_venue_write(Present(None), Present("  Online  "), current)
    assert assignments == {"venue_id": None, "venue_other": "Online"}


def test_clearing_venue_id_without_free_text_rejected():
    current = VenueState(venue_id=3)
    with pytest.raises(FieldValidationError):
        resolve_venue_write(Present(None), ABSENT, current)


def test_clearing_venue_id_with_blank_free_text_rejected():
    with pytest.raises(FieldValidationError):
        resolve_venue_write(Present(None), Present("   "), VenueState(venue_id=3))


def test_only_free_text_keeps_venue_id_untouched():
    current = VenueState(venue_id=None, venue_other="Old place")
    assignments = resolve_venue_write(ABSENT, Present("New place"), current)
    assert assignments == {"venue_other": "New place"}
    assert "venue_id" not in assignments


def test_free_text_while_venue_referenced_rejected():
    with pytest.raises(FieldValidationError):
        resolve_venue_write(ABSENT, Present("Elsewhere"), VenueState(venue_id=2))


def test_blank_free_text_while_venue_referenced_is_allowed():
    assignments = resolve_venue_write(ABSENT, Present(""), VenueState(venue_id=2))
    assert assignments == {"venue_other": None}


def test_clearing_only_free_text_leaves_nothing_rejected():
    with pytest.raises(FieldValidationError):
        resolve_venue_write(ABSENT, Present(None), VenueState(venue_other="Hall"))


def test_no_venue_keys_means_no_assignments():
    assert resolve_venue_write(ABSENT, ABSENT, VenueState()) == {}


# ─── resolve_new_venue ──────────────────────────────────────────

def test_new_record_with_reference():
    assert resolve_new_venue(4, "text") == VenueState(4, None)


def test_new_record_with_free_text():
    assert resolve_new_venue(None, " Zoom ") == VenueState(None, "Zoom")


def test_new_record_without_venue_rejected():
    with pytest.raises(FieldValidationError):
        resolve_new_venue(None, "")


# ─── venue_display ──────────────────────────────────────────────

def test_display_prefers_venue_name():
    assert venue_display(1, "Main Campus", None) == "Main Campus"


def test_display_falls_back_to_free_text():
    assert venue_display(None, None, "Community Hall") == "Community Hall"
