"""Render module routes - the raw HTML gateway."""

from fastapi import APIRouter, Depends, Request, Response

from pdfgateway.config import get_settings
from pdfgateway.modules.browser import BrowserSessionManager, get_browser_manager
from pdfgateway.shared.cancellation import cancel_on_disconnect
from pdfgateway.shared.errors import ValidationError
from pdfgateway.shared.logging import get_logger
from pdfgateway.shared.responses import pdf_response, sanitize_filename

from .schemas import PdfOptions, RenderPdfRequest
from .service import RenderService

logger = get_logger(__name__)
router = APIRouter(tags=["render"])


TEST_HTML = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>PDF Gateway test page</title>
  <style>
    body { font-family: Arial, sans-serif; margin: 40px; }
    .banner { background: #007bff; color: white; padding: 20px; border-radius: 8px; }
  </style>
</head>
<body>
  <div class="banner"><h1>PDF Gateway</h1></div>
  <p>If you can read this, Chromium rendered the test page.</p>
</body>
</html>
"""


def get_render_service(
    manager: BrowserSessionManager = Depends(get_browser_manager),
) -> RenderService:
    """Dependency injection for service."""
    return RenderService(manager, default_timeout_ms=get_settings().render_timeout_ms)


@router.post("/generate-pdf")
async def generate_pdf(
    request: Request,
    body: RenderPdfRequest | None = None,
    service: RenderService = Depends(get_render_service),
) -> Response:
    """
    Render caller-supplied HTML to PDF in the shared browser.

    Returns the PDF as an attachment.
    """
    if body is None or not body.html or not body.html.strip():
        raise ValidationError("HTML content is required", code="MISSING_HTML")

    filename = sanitize_filename(body.filename)
    logger.info(f"Rendering {len(body.html)} chars of HTML as {filename}")

    pdf_bytes = await cancel_on_disconnect(
        request,
        service.html_to_pdf(body.html, body.options),
        poll_interval=get_settings().disconnect_poll_interval,
    )
    return pdf_response(pdf_bytes, filename)


@router.get("/test-pdf")
async def test_pdf(service: RenderService = Depends(get_render_service)) -> Response:
    """Render a canned page through the same path, for smoke tests."""
    pdf_bytes = await service.html_to_pdf(TEST_HTML, PdfOptions())
    return pdf_response(pdf_bytes, "test.pdf")
