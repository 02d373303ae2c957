"""Display formatting for the single supported locale (en-AU)."""

from datetime import date, datetime
from decimal import Decimal


def format_date_dmy(value: date | datetime | str | None) -> str:
    """DD/MM/YYYY; ISO strings accepted, anything unparseable is ''."""
    if value is None:
        return ""
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value[:10])
        except ValueError:
            return ""
    return value.strftime("%d/%m/%Y")


def format_hours(value: Decimal | None) -> str:
    if value is None:
        return ""
    return f"{value:.2f}"



def dated_filename(stem: str, extension: str, on: date | None = None) -> str:
    """Download name stamped with the ISO date, e.g. pd-records-2025-03-04.csv."""
    return f"{stem}-{(on or date.today()).isoformat()}.{extension}"
