from __future__ import annotations

import logging as py_logging
import sys
from typing import Optional

import structlog

from fresh_powder.config import LoggingConfig, app_config

_configured = False

# Request lines are already logged as ``http.fetch`` with a trace id.
_NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """Configure structlog once; log lines go to stderr, leaving stdout for data."""
    global _configured
    if _configured:
        return

    config = config or app_config.logging
    level = getattr(py_logging, str(config.level).upper(), py_logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if config.json else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    py_logging.basicConfig(level=level, stream=sys.stderr, format="%(message)s")
    for name in _NOISY_LOGGERS:
        py_logging.getLogger(name).setLevel(max(level, py_logging.WARNING))
    _configured = True


def get_logger(name: str = __name__):
    if not _configured:
        setup_logging()
    return structlog.get_logger(name)
