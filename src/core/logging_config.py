"""Logging setup. Modules only ever call logging.getLogger(__name__); the entrypoint calls configure_logging once."""

import logging
from typing import Optional

from src.core.config import Settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or Settings.from_env().log_level,
        format=LOG_FORMAT,
    )
