"""Main entry point for running the PaperContest API with uvicorn."""

import os

import uvicorn
from loguru import logger

from papercontest.core.config import get_settings
from papercontest.core.logging import setup_logging

# Route uvicorn's own loggers through Loguru
UVICORN_LOG_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "default": {"class": "papercontest.core.logging.InterceptHandler"},
    },
    "loggers": {
        name: {"handlers": ["default"], "level": "INFO", "propagate": False}
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
    },
}


def main() -> None:
    """Run the API server."""
    settings = get_settings()
    setup_logging(settings)

    # Container platforms (Cloud Run, PM2 clusters) pass the port via PORT
    port = int(os.environ.get("PORT", settings.api_port))
    mode = "development mode with auto-reload" if settings.debug else "production mode"
    logger.info("Starting Uvicorn on http://{}:{} ({})", settings.api_host, port, mode)
    if settings.docs_url:
        logger.info(
            "API docs at http://{}:{}{}", settings.api_host, port, settings.docs_url
        )

    uvicorn.run(
        "papercontest.api.main:app",
        host=settings.api_host,
        port=port,
        reload=settings.debug,
        log_config=UVICORN_LOG_CONFIG,
    )


if __name__ == "__main__":
    main()
