"""
Pytest configuration and fixtures.

Playwright is never started: the browser session manager receives a fake
playwright factory whose browser hands out AsyncMock pages.
"""

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pdfgateway.app import build_app
from pdfgateway.config import Settings, reset_settings
from pdfgateway.modules.browser import BrowserSessionManager

FAKE_PDF = b"%PDF-1.4 fake pdf content"


def make_page(pdf_bytes: bytes = FAKE_PDF) -> AsyncMock:
    """A Playwright Page stand-in; every coroutine method is an AsyncMock."""
    page = AsyncMock()
    page.pdf.return_value = pdf_bytes
    return page


def make_browser(page: AsyncMock | None = None) -> AsyncMock:
    browser = AsyncMock()
    browser.new_page.return_value = page or make_page()
    return browser


def make_playwright_factory(browser: AsyncMock) -> tuple[MagicMock, MagicMock]:
    """
    Fake for playwright.async_api.async_playwright.

    Returns (factory, playwright) so tests can assert on launches and stops.
    """
    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()

    factory = MagicMock()
    factory.return_value.start = AsyncMock(return_value=playwright)
    return factory, playwright


@pytest.fixture(autouse=True)
def _reset_settings() -> Iterator[None]:
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="production",
        rate_limit_enabled=True,
        rate_limit_max_requests=1000,
        disconnect_poll_interval=0.05,
    )


@pytest.fixture
def page() -> AsyncMock:
    return make_page()


@pytest.fixture
def browser(page: AsyncMock) -> AsyncMock:
    return make_browser(page)


@pytest.fixture
def playwright_factory(browser: AsyncMock) -> tuple[MagicMock, MagicMock]:
    return make_playwright_factory(browser)


@pytest.fixture
def browser_manager(playwright_factory: tuple[MagicMock, MagicMock]) -> BrowserSessionManager:
    factory, _ = playwright_factory
    return BrowserSessionManager(playwright_factory=factory)


@pytest.fixture
def app(settings: Settings, browser_manager: BrowserSessionManager) -> FastAPI:
    return build_app(settings, browser_manager=browser_manager)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client with the lifespan running (startup and shutdown)."""
    with TestClient(app) as test_client:
        yield test_client
