"""
Main module entry point.

This allows running the API server as: python -m fleetview.main
"""

import uvicorn

from .config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "fleetview.main.app:app",
        host=settings.service.host,
        port=settings.service.port,
        reload=settings.service.reload,
        log_level=settings.logging.level.value.lower(),
    )


if __name__ == "__main__":
    main()
