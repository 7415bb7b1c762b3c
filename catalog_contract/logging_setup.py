"""Logging for harness runs.

The harness's own loggers (everything under `catalog_contract`) go to one
stdout handler at the level chosen in `HarnessConfig.log_level`. Request
lines from the helper therefore appear only when the run asks for INFO or
lower. Third-party chatter (httpx, httpcore, behave, uvicorn access lines)
stays at WARNING whatever the harness level is.
"""
from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any, Dict, Optional

HARNESS_LOGGER = "catalog_contract"
DEFAULT_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
QUIET_LOGGERS = ("httpx", "httpcore", "behave", "uvicorn.access")
MIRROR_LOGGERS = ("uvicorn", "uvicorn.error")


def build_logging_config(level: str = DEFAULT_LEVEL) -> Dict[str, Any]:
    level = level.strip().upper()
    loggers: Dict[str, Dict[str, Any]] = {name: {"level": "WARNING"} for name in QUIET_LOGGERS}
    loggers[HARNESS_LOGGER] = {"level": level, "handlers": ["console"], "propagate": False}
    for name in MIRROR_LOGGERS:
        loggers[name] = {"level": "INFO", "handlers": ["console"], "propagate": False}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"harness": {"format": LOG_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "harness",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
        "loggers": loggers,
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Install the harness handlers once; later calls only adjust the level.

    When a runner (pytest, or behave with capture) already owns the root
    logger, no handlers are added and records keep propagating to it.
    """
    harness = logging.getLogger(HARNESS_LOGGER)
    if logging.getLogger().handlers or harness.handlers:
        if level:
            harness.setLevel(level.strip().upper())
        return
    dictConfig(build_logging_config(level or DEFAULT_LEVEL))


__all__ = ["build_logging_config", "configure_logging"]
