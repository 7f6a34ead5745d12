"""Render service - HTML to PDF using Playwright."""

import time

from playwright.async_api import Browser
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from pdfgateway.modules.browser import BrowserSessionManager
from pdfgateway.shared.errors import RenderError, RenderTimeoutError
from pdfgateway.shared.logging import get_logger

from .schemas import PdfOptions, Viewport

logger = get_logger(__name__)


GATEWAY_VIEWPORT = Viewport(width=1200, height=800, device_scale_factor=1)
CATALOG_VIEWPORT = Viewport(width=1200, height=1600, device_scale_factor=2)

# Browsers drop backgrounds when printing unless told otherwise
PRINT_COLOR_ADJUST_CSS = """
* {
  -webkit-print-color-adjust: exact !important;
  print-color-adjust: exact !important;
  color-adjust: exact !important;
}
"""


class RenderService:
    """Service for rendering HTML to PDF using Playwright."""

    def __init__(self, sessions: BrowserSessionManager, default_timeout_ms: int = 30000):
        self.sessions = sessions
        self.default_timeout_ms = default_timeout_ms

    async def html_to_pdf(
        self,
        html: str,
        options: PdfOptions | None = None,
        browser: Browser | None = None,
        viewport: Viewport = GATEWAY_VIEWPORT,
    ) -> bytes:
        """
        Render an HTML document to PDF bytes.

        Args:
            html: HTML document to render
            options: Page format, margins, readiness condition and timeout
            browser: Browser to open the page in; the shared one when omitted
            viewport: Viewport size and device scale factor

        Returns:
            PDF bytes

        Raises:
            LaunchError: the shared browser could not be started
            RenderTimeoutError: the document did not become ready in time
            RenderError: any other page or PDF failure
        """
        options = options or PdfOptions()
        timeout = options.timeout if options.timeout is not None else self.default_timeout_ms

        if browser is None:
            browser = await self.sessions.get_browser()

        start = time.perf_counter()
        try:
            page = await browser.new_page(
                viewport={"width": viewport.width, "height": viewport.height},
                device_scale_factor=viewport.device_scale_factor,
            )
        except Exception as e:
            raise RenderError("PDF generation failed", details=str(e)) from e

        try:
            await page.set_content(html, wait_until=options.wait_until, timeout=timeout)
            await page.add_style_tag(content=PRINT_COLOR_ADJUST_CSS)

            pdf_bytes = await page.pdf(
                format=options.format,
                margin=options.margin.model_dump(),
                landscape=options.landscape,
                print_background=options.print_background,
                prefer_css_page_size=options.prefer_css_page_size,
            )
        except PlaywrightTimeoutError as e:
            logger.error(f"Render timed out after {timeout}ms")
            raise RenderTimeoutError(
                f"PDF generation timed out after {timeout}ms", details=str(e)
            ) from e
        except Exception as e:
            logger.error(f"PDF render failed: {e}")
            raise RenderError("PDF generation failed", details=str(e)) from e
        finally:
            try:
                await page.close()
            except Exception as e:
                logger.warning(f"Page close failed: {e}")

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(f"Generated PDF: {len(pdf_bytes)} bytes in {elapsed_ms}ms")
        return pdf_bytes
