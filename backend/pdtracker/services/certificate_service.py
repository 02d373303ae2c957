"""Certificate Service - filtered PD rows to a paginated certificate PDF.

Invariants:
    - Uses the same RecordQuery as listing, with the page window ignored
    - No matching rows -> ResourceNotFoundError (nothing is rendered)
    - One printed page per CertificatePage, in composer order
    - Logo embedded as a data URI when the configured file exists, otherwise the
      school name is printed in its place

Design Decisions:
    - Jinja2 with HTML autoescaping: titles and venue text are user input
    - HTML rendering is synchronous and cheap; only PDF conversion is off-loaded
"""

import base64
import logging
import mimetypes
from datetime import date
from pathlib import Path

from jinja2 import Environment, PackageLoader, select_autoescape
from sqlalchemy.ext.asyncio import AsyncSession

from pdtracker.config import Settings
from pdtracker.core.certificate_composer import CertificatePage, compose_certificate_pages
from pdtracker.core.errors import ResourceNotFoundError
from pdtracker.core.formatting import format_date_dmy, format_hours
from pdtracker.core.record_query import RecordQuery
from pdtracker.infrastructure.pdf_renderer import render_pdf
from pdtracker.services.pd_record_repository import PDRecordRepository

logger = logging.getLogger(__name__)

NO_RECORDS_MESSAGE = "No records found for the selected filters."

_env = Environment(
    loader=PackageLoader("pdtracker", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["dmy"] = format_date_dmy
_env.filters["hours"] = format_hours


def logo_data_uri(path: str | None) -> str | None:
    """Inline image for the certificate header, or None when unavailable."""
    if not path:
        return None
    logo = Path(path)
    if not logo.is_file():
        return None
    mime, _ = mimetypes.guess_type(logo.name)
    encoded = base64.b64encode(logo.read_bytes()).decode("ascii")
    return f"data:{mime or 'image/png'};base64,{encoded}"


def render_certificate_html(
    pages: list[CertificatePage],
    settings: Settings,
    generated_on: date | None = None,
) -> str:
    template = _env.get_template("certificates.html")
    return template.render(
        pages=pages,
        title=settings.certificate_title,
        school_name=settings.certificate_school_name,
        logo_uri=logo_data_uri(settings.certificate_logo_path),
        generated_on=generated_on or date.today(),
    )


class CertificateService:

    def __init__(self, db: AsyncSession, settings: Settings):
        self.records = PDRecordRepository(db)
        self.settings = settings

    async def build_pdf(self, query: RecordQuery) -> bytes:
        rows = await self.records.list_certificate_rows(query)
        if not rows:
            raise ResourceNotFoundError(NO_RECORDS_MESSAGE, "pd_record")

        pages = compose_certificate_pages(rows, self.settings.certificate_rows_per_page)
        html = render_certificate_html(pages, self.settings)
        logger.info(
            f"Composed {len(pages)} certificate pages from {len(rows)} rows",
            extra={"row_count": len(rows), "page_count": len(pages)},
        )
        return await render_pdf(html)
