"""Tests for the catalog templater."""

import pytest

from pdfgateway.modules.catalog import (
    BusinessInfo,
    ProductRecord,
    StyleTemplate,
    format_price,
    render_catalog_html,
)
from pdfgateway.modules.catalog.templater import PLACEHOLDER_IMAGE


def products(*names: str) -> list[ProductRecord]:
    return [
        ProductRecord(id=str(i), name=name, image_url=f"https://img.example/{i}.png", price_retail=10 * (i + 1))
        for i, name in enumerate(names)
    ]


BUSINESS = BusinessInfo(business_name="Mi Tienda", phone="+52 555 0100", email="ventas@mitienda.mx")


class TestRenderCatalogHtml:
    """render_catalog_html output."""

    def test_one_card_per_product_in_order(self) -> None:
        html = render_catalog_html(products("Alpha", "Bravo", "Charlie", "Delta"), BUSINESS, None)

        assert html.count('class="product-card"') == 4
        positions = [html.index(f'class="product-name">{name}<') for name in ("Alpha", "Bravo", "Charlie", "Delta")]
        assert positions == sorted(positions)

    def test_three_products_two_columns(self) -> None:
        html = render_catalog_html(
            products("Taza", "Plato", "Vaso"),
            BUSINESS,
            {"layout": {"columns": 2}},
        )

        assert "grid-template-columns: repeat(2, 1fr)" in html
        assert html.count('class="product-name"') == 3

    def test_header_and_footer(self) -> None:
        html = render_catalog_html(products("Taza"), BUSINESS, {"displayName": "Verano"})

        assert '<h1 class="business-name">Mi Tienda</h1>' in html
        assert "Catálogo Verano" in html
        assert "+52 555 0100" in html
        assert "ventas@mitienda.mx" in html
        assert "1 productos" in html

    def test_defaults_without_template(self) -> None:
        html = render_catalog_html(products("Taza"), BusinessInfo(business_name="X"), None)

        assert "repeat(3, 1fr)" in html
        assert "Catálogo Premium" in html
        assert "#007bff" in html

    def test_template_colors_applied(self) -> None:
        html = render_catalog_html(
            products("Taza"),
            BUSINESS,
            {"colors": {"primary": "#112233", "accent": "#abc"}},
        )

        assert "color: #112233;" in html
        assert "border: 2px solid #aabbcc;" in html
        assert "background: #aabbcc40;" in html

    def test_price_formatted_with_prefix(self) -> None:
        items = [ProductRecord(name="Sofa", price_retail=12500.5)]

        html = render_catalog_html(items, BUSINESS, None)

        assert '<div class="product-price">$12,500.5</div>' in html

    def test_placeholder_image_when_missing(self) -> None:
        html = render_catalog_html([ProductRecord(name="Sin foto")], BUSINESS, None)

        assert f'src="{PLACEHOLDER_IMAGE}"' in html

    def test_description_rendered_when_present(self) -> None:
        html = render_catalog_html(
            [ProductRecord(name="Taza", description="Cerámica artesanal")],
            BUSINESS,
            None,
        )

        assert "Cerámica artesanal" in html

    def test_caller_text_is_escaped(self) -> None:
        items = [ProductRecord(name="<script>alert(1)</script>", image_url='x" onerror="alert(1)')]
        business = BusinessInfo(business_name="Tom & Jerry <b>")

        html = render_catalog_html(items, business, None)

        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert 'onerror="alert(1)"' not in html
        assert "Tom &amp; Jerry &lt;b&gt;" in html

    def test_numeric_product_name_displayed(self) -> None:
        html = render_catalog_html([ProductRecord.model_validate({"name": 501})], BUSINESS, None)

        assert 'class="product-name">501<' in html

    def test_deterministic(self) -> None:
        items = products("A", "B")

        assert render_catalog_html(items, BUSINESS, None) == render_catalog_html(items, BUSINESS, None)


class TestStyleTemplate:
    """Lenient template parsing."""

    def test_full_template(self) -> None:
        template = StyleTemplate.from_raw({
            "displayName": "Test Template",
            "productsPerPage": 9,
            "layout": {"columns": 4},
            "colors": {"primary": "#FF0000", "text": "#333"},
        })

        assert template.display_name == "Test Template"
        assert template.products_per_page == 9
        assert template.columns == 4
        assert template.colors.primary == "#ff0000"
        assert template.colors.text == "#333333"
        assert template.colors.secondary == "#6c757d"

    @pytest.mark.parametrize("raw", [None, [], "dark", 3])
    def test_non_object_falls_back(self, raw) -> None:
        assert StyleTemplate.from_raw(raw) == StyleTemplate()

    @pytest.mark.parametrize("columns", [0, -2, "many", None, True, 2.5e9, float("inf"), float("-inf"), float("nan")])
    def test_bad_columns_fall_back_or_clamp(self, columns) -> None:
        template = StyleTemplate.from_raw({"layout": {"columns": columns}})

        assert 1 <= template.columns <= 12

    def test_infinite_products_per_page_falls_back(self) -> None:
        assert StyleTemplate.from_raw({"productsPerPage": float("inf")}).products_per_page == 6

    def test_layout_not_object(self) -> None:
        assert StyleTemplate.from_raw({"layout": "grid"}).columns == 3

    @pytest.mark.parametrize("color", ["red; } body { display:none", "#12", "rgb(0,0,0)", 255, ""])
    def test_invalid_colors_fall_back(self, color) -> None:
        template = StyleTemplate.from_raw({"colors": {"background": color}})

        assert template.colors.background == "#ffffff"


class TestFormatPrice:
    """es-MX number formatting."""

    @pytest.mark.parametrize("value, expected", [
        (199.99, "199.99"),
        (1000, "1,000"),
        (1234567.891, "1,234,567.891"),
        (12.3456, "12.346"),
        (0.5, "0.5"),
        (10.10, "10.1"),
        ("2500", "2,500"),
        (-1500.25, "-1,500.25"),
        (0, "0"),
        (1e30, "1" + ",000" * 10),
        ("1e26", "100" + ",000" * 8),
    ])
    def test_formats(self, value, expected) -> None:
        assert format_price(value) == expected

    @pytest.mark.parametrize("value", [None, "gratis", "nan", "inf", True])
    def test_unparseable_is_zero(self, value) -> None:
        assert format_price(value) == "0"
