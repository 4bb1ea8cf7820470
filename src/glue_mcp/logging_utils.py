from __future__ import annotations

import logging
from typing import Any

from .config import ObservabilityConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_AWS_LOGGERS = ("boto3", "botocore", "urllib3")


def configure_logging(observability: ObservabilityConfig) -> None:
    """Set the root log level from config; ``log_level`` is validated by ``load_config``."""
    level = observability.log_level.upper()
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    if level == "DEBUG":
        # boto logs every request and response at debug.
        for name in _AWS_LOGGERS:
            logging.getLogger(name).setLevel(logging.INFO)


def log_extra(**kwargs: Any) -> dict[str, Any]:
    return {k: v for k, v in kwargs.items() if v is not None}
