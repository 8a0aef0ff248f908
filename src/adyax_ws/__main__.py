"""Entry point for running the service as a module: python -m adyax_ws"""

import logging
import os
import sys

import uvicorn

from adyax_ws.config import settings


def main():
    """Run the REST API server."""
    port_source = "default (19200)"
    if "PORT" in os.environ:
        port_source = "PORT environment variable"
    elif "ADYAX_WS_PORT" in os.environ:
        port_source = "ADYAX_WS_PORT environment variable"

    print(f"Starting adyax-ws on port {settings.port} (from {port_source})")

    # Startup failures already print their own explanation
    if not settings.debug:
        logging.getLogger("uvicorn.error").setLevel(logging.CRITICAL)

    try:
        uvicorn.run(
            "adyax_ws.api.main:app",
            host=settings.host,
            port=settings.port,
            reload=settings.debug,
            log_level=settings.log_level.lower() if settings.debug else "critical",
        )
    except SystemExit:
        sys.exit(1)


if __name__ == "__main__":
    main()
