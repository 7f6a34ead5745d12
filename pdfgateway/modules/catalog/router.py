"""Catalog module routes."""

from fastapi import APIRouter, Depends, Request, Response

from pdfgateway.config import get_settings
from pdfgateway.modules.browser import BrowserSessionManager, get_browser_manager
from pdfgateway.modules.render.router import get_render_service
from pdfgateway.modules.render.service import RenderService
from pdfgateway.shared.cancellation import cancel_on_disconnect
from pdfgateway.shared.logging import get_logger
from pdfgateway.shared.responses import pdf_response

from .schemas import CatalogPdfRequest
from .service import CatalogService

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["catalog"])


SAMPLE_CATALOG = {
    "products": [
        {
            "id": "1",
            "name": "Producto de Prueba",
            "image_url": "https://via.placeholder.com/300x300.png?text=TEST",
            "price_retail": 199.99,
            "description": "Descripción de prueba",
        }
    ],
    "businessInfo": {
        "business_name": "Test Business",
        "phone": "+52 1234567890",
        "email": "test@example.com",
    },
    "template": {
        "displayName": "Test Template",
        "productsPerPage": 6,
        "layout": {"columns": 3},
        "colors": {
            "primary": "#007bff",
            "secondary": "#6c757d",
            "accent": "#17a2b8",
            "background": "#ffffff",
            "text": "#333333",
        },
    },
}


def get_service(
    manager: BrowserSessionManager = Depends(get_browser_manager),
    renderer: RenderService = Depends(get_render_service),
) -> CatalogService:
    """Dependency injection for service."""
    return CatalogService(manager, renderer)


@router.post("/generate-pdf")
async def generate_catalog_pdf(
    request: Request,
    body: CatalogPdfRequest | None = None,
    service: CatalogService = Depends(get_service),
) -> Response:
    """
    Render a product catalog to PDF.

    Returns the PDF as an attachment named catalogo-<business name>.pdf.
    """
    body = body or CatalogPdfRequest()
    service.validate(body)

    pdf_bytes, filename = await cancel_on_disconnect(
        request,
        service.generate_pdf(body),
        poll_interval=get_settings().disconnect_poll_interval,
    )
    return pdf_response(pdf_bytes, filename)


@router.post("/test-pdf")
async def test_catalog_pdf(
    request: Request,
    service: CatalogService = Depends(get_service),
) -> Response:
    """Replay a fixed sample catalog through the main handler."""
    body = CatalogPdfRequest.model_validate(SAMPLE_CATALOG)
    return await generate_catalog_pdf(request=request, body=body, service=service)
