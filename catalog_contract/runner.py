"""Headless entry point: run the behave scenario suite.

Loads the harness configuration once, then hands the configured feature
path plus any extra command-line arguments to behave. The exit code is
behave's own: 0 when every scenario passes.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

from behave.__main__ import main as behave_main

from catalog_contract.config import load_config
from catalog_contract.logging_setup import configure_logging


logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    cfg = load_config()
    configure_logging(cfg.log_level)
    extra = list(sys.argv[1:] if argv is None else argv)
    logger.info(
        "runner.start base_url=%s features=%s retries=%d",
        cfg.base_url,
        cfg.spec_pattern,
        cfg.retries,
    )
    return int(behave_main([cfg.spec_pattern, *extra]) or 0)


__all__ = ["main"]
