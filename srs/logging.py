"""
Logging setup for the scheduler package.

Library modules only ask structlog for a logger; applications and scripts
call configure_logging() once at startup.
"""

import logging
import os

import structlog


def configure_logging(level: str | None = None) -> None:
    """Configure structlog with a stdlib backend and JSON output.

    Args:
        level: Log level name (defaults to SRS_LOG_LEVEL, then INFO)
    """
    level_name = (level or os.getenv("SRS_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO))
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


logger = structlog.get_logger("srs")
