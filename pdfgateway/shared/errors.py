"""
Error taxonomy.

Every error carries an HTTP status and a machine-readable code; the app-level
exception handler turns them into JSON bodies.
"""

from typing import Any


class PdfGatewayError(Exception):
    """Base class for errors surfaced to HTTP callers."""

    http_status: int = 500
    code: str = "INTERNAL_ERROR"
    reason: str | None = None

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details is not None:
            data["details"] = self.details
        if self.reason is not None:
            data["reason"] = self.reason
        return data


class ValidationError(PdfGatewayError):
    """Missing or malformed request fields."""

    http_status = 400
    code = "VALIDATION_ERROR"


class PdfGenerationError(PdfGatewayError):
    """Any failure while producing a PDF."""

    code = "PDF_GENERATION_ERROR"
    reason = "RENDER_FAILED"


class LaunchError(PdfGenerationError):
    """The browser process could not be started."""

    reason = "BROWSER_LAUNCH_FAILED"


class RenderTimeoutError(PdfGenerationError):
    """Content did not reach the readiness condition in time."""

    reason = "RENDER_TIMEOUT"


class RenderError(PdfGenerationError):
    """Page operation or PDF production failed."""

    reason = "RENDER_FAILED"


class ClientDisconnectedError(PdfGatewayError):
    """The caller went away before the render finished."""

    http_status = 499
    code = "CLIENT_DISCONNECTED"


class RateLimitExceededError(PdfGatewayError):
    http_status = 429
    code = "RATE_LIMITED"
