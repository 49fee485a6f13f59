"""Server entrypoint: `python -m src.api.main` or the `public-library-api` script."""

from __future__ import annotations

import logging

import uvicorn

from src.api.api_config import get_api_config
from src.common.logging import configure_logging
from src.common.settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging()
    config = get_api_config()
    logger.info("Starting server on %s:%s", config.host, config.port)
    uvicorn.run(
        "src.api.app:app",
        host=config.host,
        port=config.port,
        log_level=get_settings().LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
