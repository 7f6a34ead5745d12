"""Health module - liveness and process stats."""

from .router import router

__all__ = ["router"]
