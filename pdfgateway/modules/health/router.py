"""Health module routes."""

import time

import psutil
from fastapi import APIRouter, Depends, Request

from pdfgateway import SERVICE_NAME, __version__
from pdfgateway.modules.browser import BrowserSessionManager, get_browser_manager
from pdfgateway.shared.time import utcnow_iso

from .schemas import BrowserStatus, HealthResponse, MemoryUsage

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(
    request: Request,
    manager: BrowserSessionManager = Depends(get_browser_manager),
) -> HealthResponse:
    """
    Report process health.

    Reads state only; never launches the browser.
    """
    mem = psutil.Process().memory_info()
    return HealthResponse(
        status="ok",
        service=SERVICE_NAME,
        timestamp=utcnow_iso(),
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
        memory=MemoryUsage(rss=mem.rss, vms=mem.vms),
        version=__version__,
        browser=BrowserStatus(**manager.status()),
    )
