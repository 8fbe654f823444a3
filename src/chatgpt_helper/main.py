"""Console entry point: configure logging and serve the helper API."""

from __future__ import annotations

import logging

import uvicorn

from chatgpt_helper.infrastructure.config import get_settings

_LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


def main() -> None:
    """Start the uvicorn ASGI server on the configured host and port."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=_LOG_FORMAT)
    uvicorn.run(
        "chatgpt_helper.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
