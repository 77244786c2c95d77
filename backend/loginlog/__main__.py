"""Run the capture server: ``python -m loginlog``."""

import logging

import uvicorn

from loginlog.core.config import settings
from loginlog.core.logging import setup_logging

logger = logging.getLogger("loginlog")

ENDPOINTS = (
    ("POST", "/api/login", "Submit login data"),
    ("GET", "/api/login-attempts", "View recent attempts"),
    ("DELETE", "/api/login-attempts", "Clear all data"),
)


def main() -> None:
    setup_logging()
    logger.info(f"Server running on http://{settings.HOST}:{settings.PORT}")
    logger.info("API endpoints:")
    for method, path, description in ENDPOINTS:
        logger.info(f"   {method} {path} - {description}")

    uvicorn.run(
        "loginlog.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # keep the logging configured above
    )


if __name__ == "__main__":
    main()
