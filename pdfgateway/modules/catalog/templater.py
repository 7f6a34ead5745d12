"""
Catalog templater - product list + business info -> HTML document.

Pure string construction: no I/O beyond loading the packaged template once.
All caller-supplied text is HTML-escaped by Jinja2's autoescaping.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from functools import lru_cache
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape

from .schemas import BusinessInfo, ProductRecord, StyleTemplate

PLACEHOLDER_IMAGE = "https://via.placeholder.com/300x300.png?text=Sin+Imagen"
TEMPLATE_NAME = "catalog.html"

_PRICE_QUANTUM = Decimal("0.001")


def format_price(value: Any) -> str:
    """
    Format a price with es-MX grouping: "," for thousands, "." for decimals,
    at most three fraction digits and no trailing zeros.

    >>> format_price(1234.5)
    '1,234.5'
    >>> format_price(1000)
    '1,000'
    """
    if value is None or isinstance(value, bool):
        return "0"
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return "0"
    if not number.is_finite():
        return "0"

    # Room for every integer digit plus the three fraction digits
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + 5)
        rounded = number.quantize(_PRICE_QUANTUM, rounding=ROUND_HALF_UP)

    text = f"{rounded:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("pdfgateway.modules.catalog", "templates"),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["price"] = format_price
    return env


def render_catalog_html(
    products: list[ProductRecord],
    business_info: BusinessInfo,
    template: StyleTemplate | dict[str, Any] | None = None,
) -> str:
    """
    Render the catalog document.

    Args:
        products: Products in display order, one card each
        business_info: Business name and contact details
        template: Normalized template, or raw caller JSON (lenient parsing)

    Returns:
        Complete HTML document
    """
    if not isinstance(template, StyleTemplate):
        template = StyleTemplate.from_raw(template)

    return _environment().get_template(TEMPLATE_NAME).render(
        products=products,
        business=business_info,
        template=template,
        colors=template.colors,
        placeholder_image=PLACEHOLDER_IMAGE,
    )
