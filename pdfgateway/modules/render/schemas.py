"""Render module schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]

# Puppeteer readiness names accepted for compatibility with existing callers
WAIT_UNTIL_ALIASES = {
    "networkidle0": "networkidle",
    "networkidle2": "networkidle",
}

DEFAULT_MARGIN = "10mm"


class PdfMargin(BaseModel):
    """Page margins in CSS units."""

    top: str = DEFAULT_MARGIN
    right: str = DEFAULT_MARGIN
    bottom: str = DEFAULT_MARGIN
    left: str = DEFAULT_MARGIN


class PdfOptions(BaseModel):
    """Page configuration handed to the browser's PDF call."""

    model_config = ConfigDict(populate_by_name=True)

    format: str = Field(default="A4", description="Paper format: A4, Letter, Legal, Tabloid...")
    margin: PdfMargin = Field(default_factory=PdfMargin)
    landscape: bool = False
    print_background: bool = Field(
        default=True,
        alias="printBackground",
        description="Include background colors and images",
    )
    prefer_css_page_size: bool = Field(
        default=True,
        alias="preferCSSPageSize",
        description="Let @page size in the document win over format",
    )
    wait_until: WaitUntil = Field(
        default="networkidle",
        alias="waitUntil",
        description="Readiness condition before printing",
    )
    timeout: int | None = Field(
        default=None,
        ge=1000,
        le=300000,
        description="Content load timeout in milliseconds (defaults to the service setting)",
    )

    @field_validator("wait_until", mode="before")
    @classmethod
    def _map_puppeteer_wait_until(cls, value: object) -> object:
        if isinstance(value, list):
            value = value[0] if value else "networkidle"
        if isinstance(value, str):
            return WAIT_UNTIL_ALIASES.get(value, value)
        return value


class Viewport(BaseModel):
    width: int
    height: int
    device_scale_factor: float = 1


class RenderPdfRequest(BaseModel):
    """Request to render caller-supplied HTML to PDF."""

    html: str | None = Field(default=None, description="HTML document to render")
    options: PdfOptions = Field(default_factory=PdfOptions)
    filename: str | None = Field(default=None, description="Suggested download filename")
