"""Logging configuration."""

import logging
import sys
from typing import Optional

from folio.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging to stdout.

    `level` overrides the configured log level. Retry warnings and failed
    fetches from the market data layer surface at WARNING and ERROR.
    """
    level_name = (level or get_settings().log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)

    logging.getLogger("folio").debug("Logging configured at %s", level_name)
