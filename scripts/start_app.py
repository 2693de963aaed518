#!/usr/bin/env python3
"""Start the forum API under uvicorn, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from forum.config import Settings
from forum.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)

    try:
        logfire.info("Starting forum API", host=settings.host, port=settings.port)
        uvicorn.run(
            "forum.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
