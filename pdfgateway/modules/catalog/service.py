"""
Catalog service - validate, template, print in a throwaway browser.
"""

import re

from pdfgateway.modules.browser import BrowserSessionManager
from pdfgateway.modules.render.service import CATALOG_VIEWPORT, RenderService
from pdfgateway.shared.errors import ValidationError
from pdfgateway.shared.logging import get_logger

from .schemas import BusinessInfo, CatalogPdfRequest, ProductRecord, StyleTemplate
from .templater import render_catalog_html

logger = get_logger(__name__)


def catalog_filename(business_name: str) -> str:
    """catalogo-<name>.pdf with every non-alphanumeric character replaced by "_"."""
    return f"catalogo-{re.sub(r'[^a-zA-Z0-9]', '_', business_name)}.pdf"


class CatalogService:
    """Service for rendering product catalogs."""

    def __init__(self, sessions: BrowserSessionManager, renderer: RenderService):
        self.sessions = sessions
        self.renderer = renderer

    def validate(self, req: CatalogPdfRequest) -> tuple[list[ProductRecord], BusinessInfo]:
        """Reject incomplete requests before any browser work happens."""
        if not req.products:
            raise ValidationError(
                "A non-empty products array is required",
                code="INVALID_PRODUCTS",
            )
        if req.business_info is None or not (req.business_info.business_name or "").strip():
            raise ValidationError(
                "Business information with business_name is required",
                code="MISSING_BUSINESS_INFO",
            )
        return req.products, req.business_info

    def build_html(self, req: CatalogPdfRequest) -> str:
        products, business_info = self.validate(req)
        return render_catalog_html(products, business_info, StyleTemplate.from_raw(req.template))

    async def generate_pdf(self, req: CatalogPdfRequest) -> tuple[bytes, str]:
        """
        Render the catalog to PDF.

        A fresh browser is launched for this request and closed afterwards,
        whatever the outcome.

        Returns:
            (pdf_bytes, filename)
        """
        html = self.build_html(req)
        business_name = req.business_info.business_name
        logger.info(f"Generating catalog PDF for {len(req.products)} products")

        async with self.sessions.isolated_browser() as browser:
            pdf_bytes = await self.renderer.html_to_pdf(
                html,
                req.options,
                browser=browser,
                viewport=CATALOG_VIEWPORT,
            )

        logger.info("Catalog PDF generated")
        return pdf_bytes, catalog_filename(business_name)
