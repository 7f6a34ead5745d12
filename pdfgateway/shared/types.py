"""Shared types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Per-request context attached by the HTTP middleware."""

    request_id: str
    client_ip: str | None = None
    path: str | None = None
