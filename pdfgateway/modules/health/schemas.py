"""Health module schemas."""

from pydantic import BaseModel


class MemoryUsage(BaseModel):
    rss: int
    vms: int


class BrowserStatus(BaseModel):
    running: bool
    closed: bool
    launch_count: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    service: str
    timestamp: str
    uptime: float
    memory: MemoryUsage
    version: str
    browser: BrowserStatus
