"""Roster Filters - staff list filters and the create/update field whitelist.

Invariants:
    - search is a case-insensitive "name contains" term, or None
    - campus/position/sector are sets of accepted values (OR within, AND across)
    - include_archived defaults to False
    - StaffFields.name is never blank; tonumber is a 32-bit int or None
"""

from dataclasses import dataclass

from pdtracker.core.domain_types import MAX_INT32
from pdtracker.core.errors import FieldValidationError
from pdtracker.core.parse_params import blank_to_none, parse_flag, split_csv


@dataclass(frozen=True)
class RosterFilters:
    search: str | None = None
    campuses: tuple[str, ...] = ()
    positions: tuple[str, ...] = ()
    sectors: tuple[str, ...] = ()
    include_archived: bool = False


def parse_roster_filters(
    include_archived: object = None,
    search: object = None,
    campus: object = None,
    position: object = None,
    sector: object = None,
) -> RosterFilters:
    return RosterFilters(
        search=blank_to_none(search),
        campuses=split_csv(campus),
        positions=split_csv(position),
        sectors=split_csv(sector),
        include_archived=parse_flag(include_archived) is True,
    )


@dataclass(frozen=True)
class StaffFields:
    """Whitelisted staff attributes for create/update."""
    name: str
    campus1: str | None = None
    campus2: str | None = None
    position: str | None = None
    sector: str | None = None
    tonumber: int | None = None


def _check_tonumber_range(value: int) -> int:
    if not -MAX_INT32 - 1 <= value <= MAX_INT32:
        raise FieldValidationError("TONumber is out of range.", field="tonumber")
    return value


def parse_tonumber(value: object) -> int | None:
    """TONumber must be an integer, blank, or null."""
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return _check_tonumber_range(value)
    if isinstance(value, float) and value.is_integer():
        return _check_tonumber_range(int(value))
    text = blank_to_none(value)
    if text is None:
        return None
    try:
        parsed = int(text, 10)
    except ValueError:
        raise FieldValidationError("TONumber must be a whole number.", field="tonumber")
    return _check_tonumber_range(parsed)


def build_staff_fields(
    name: object,
    campus1: object = None,
    campus2: object = None,
    position: object = None,
    sector: object = None,
    tonumber: object = None,
) -> StaffFields:
    clean_name = blank_to_none(name)
    if clean_name is None:
        raise FieldValidationError("Name is required.", field="name")
    return StaffFields(
        name=clean_name,
        campus1=blank_to_none(campus1),
        campus2=blank_to_none(campus2),
        position=blank_to_none(position),
        sector=blank_to_none(sector),
        tonumber=parse_tonumber(tonumber),
    )
