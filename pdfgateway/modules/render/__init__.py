"""Render module - HTML to PDF rendering using Playwright."""

from .router import router
from .schemas import PdfMargin, PdfOptions, RenderPdfRequest, Viewport
from .service import CATALOG_VIEWPORT, GATEWAY_VIEWPORT, RenderService

__all__ = [
    "router",
    "RenderService",
    "RenderPdfRequest",
    "PdfOptions",
    "PdfMargin",
    "Viewport",
    "GATEWAY_VIEWPORT",
    "CATALOG_VIEWPORT",
]
