"""ASGI entry point for the covered-call yield service."""

from __future__ import annotations

import logging

import uvicorn

from .app import create_app
from .config import get_settings

app = create_app()


def main() -> None:
    """Run the service under uvicorn using the configured host and port."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
