"""Catalog module - product catalogs rendered to PDF."""

from .router import router
from .schemas import BusinessInfo, CatalogPdfRequest, ProductRecord, StyleTemplate
from .service import CatalogService, catalog_filename
from .templater import format_price, render_catalog_html

__all__ = [
    "router",
    "CatalogService",
    "CatalogPdfRequest",
    "ProductRecord",
    "BusinessInfo",
    "StyleTemplate",
    "catalog_filename",
    "format_price",
    "render_catalog_html",
]
