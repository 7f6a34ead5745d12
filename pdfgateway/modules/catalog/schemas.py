"""
Catalog module schemas.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pdfgateway.modules.render.schemas import PdfOptions

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

MAX_COLUMNS = 12


# =============================================================================
# REQUEST
# =============================================================================

class ProductRecord(BaseModel):
    """One catalog entry. Only presence is checked."""
    id: str | int | None = None
    name: str
    image_url: str | None = None
    price_retail: float | str | None = None
    description: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _numeric_name_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class BusinessInfo(BaseModel):
    """Business metadata printed in the catalog header and footer."""
    business_name: str | None = None
    phone: str | None = None
    email: str | None = None


class CatalogPdfRequest(BaseModel):
    """Request to render a product catalog to PDF."""

    model_config = ConfigDict(populate_by_name=True)

    products: list[ProductRecord] | None = None
    business_info: BusinessInfo | None = Field(default=None, alias="businessInfo")
    template: dict[str, Any] | None = Field(
        default=None,
        description="Style template; unknown or invalid fields fall back to defaults",
    )
    options: PdfOptions = Field(default_factory=PdfOptions)


# =============================================================================
# STYLE TEMPLATE
# =============================================================================

class TemplateColors(BaseModel):
    primary: str = "#007bff"
    secondary: str = "#6c757d"
    accent: str = "#dee2e6"
    background: str = "#ffffff"
    text: str = "#333333"


class StyleTemplate(BaseModel):
    """Normalized style template with every field resolved."""
    display_name: str = "Premium"
    products_per_page: int = 6
    columns: int = 3
    colors: TemplateColors = Field(default_factory=TemplateColors)

    @classmethod
    def from_raw(cls, raw: Any) -> "StyleTemplate":
        """
        Build a template from caller JSON, never failing.

        Accepts the camelCase shape callers send
        ({displayName, productsPerPage, layout: {columns}, colors: {...}}).
        """
        if not isinstance(raw, dict):
            return cls()

        defaults = cls()
        layout = raw.get("layout") if isinstance(raw.get("layout"), dict) else {}
        raw_colors = raw.get("colors") if isinstance(raw.get("colors"), dict) else {}

        display_name = raw.get("displayName")
        colors = {
            key: _normalize_color(raw_colors.get(key), default)
            for key, default in defaults.colors.model_dump().items()
        }

        return cls(
            display_name=display_name if isinstance(display_name, str) and display_name.strip() else defaults.display_name,
            products_per_page=_positive_int(raw.get("productsPerPage"), defaults.products_per_page),
            columns=min(_positive_int(layout.get("columns"), defaults.columns), MAX_COLUMNS),
            colors=TemplateColors(**colors),
        )


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number > 0 else default


def _normalize_color(value: Any, default: str) -> str:
    """Accept #rgb or #rrggbb, expanded to #rrggbb so alpha suffixes can be appended."""
    if not isinstance(value, str) or not _HEX_COLOR.match(value.strip()):
        return default
    value = value.strip().lower()
    if len(value) == 4:
        value = "#" + "".join(c * 2 for c in value[1:])
    return value
