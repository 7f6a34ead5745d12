"""
PDF Gateway entrypoint - runs uvicorn server.
"""

import uvicorn

from pdfgateway.app import build_app
from pdfgateway.config import get_settings


def main() -> None:
    """Run the PDF Gateway server."""
    settings = get_settings()
    app = build_app(settings)

    print(f"Starting PDF Gateway on http://{settings.host}:{settings.port}")
    print(f"Health check: http://{settings.host}:{settings.port}/health")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
