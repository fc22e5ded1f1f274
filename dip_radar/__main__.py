"""Command-line entry point for the dip_radar API server."""

import uvicorn

from dip_radar.config import load_server_settings


def main():
    """Run the dip_radar API server."""
    settings = load_server_settings()
    uvicorn.run(
        "dip_radar.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
