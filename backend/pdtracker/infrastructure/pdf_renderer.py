"""PDF Renderer - HTML/CSS document to PDF bytes via WeasyPrint.

Invariants:
    - Input is a complete HTML document; output is the PDF byte string
    - Rendering runs in a worker thread so the event loop is never blocked

Design Decisions:
    - WeasyPrint imported lazily: its import cost (font config, cairo/pango) is
      paid on the first certificate request, not at application startup
"""

import logging

from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


def render_pdf_sync(html: str, base_url: str | None = None) -> bytes:
    """Render HTML to PDF bytes (blocking)."""
    from weasyprint import HTML

    return HTML(string=html, base_url=base_url).write_pdf()


async def render_pdf(html: str, base_url: str | None = None) -> bytes:
    """Render HTML to PDF bytes without blocking the event loop."""
    pdf_bytes = await run_in_threadpool(render_pdf_sync, html, base_url)
    logger.info(f"Rendered PDF ({len(pdf_bytes)} bytes)")
    return pdf_bytes
