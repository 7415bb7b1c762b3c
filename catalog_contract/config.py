"""Configuration utilities for the catalog contract harness.

This module loads harness configuration with the following rules:
- Primary source: `harness_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.

The resulting `HarnessConfig` is frozen; it is loaded once before any
scenario runs and passed explicitly to the request helper.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_HARNESS_CONFIG = Path("harness_config.json")
DEFAULT_BASE_URL = "https://dummyjson.com"
DEFAULT_SPEC_PATTERN = "tests/integration/features"
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: log and ignore unreadable override
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class HarnessConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str = Field(default=DEFAULT_BASE_URL)
    spec_pattern: str = Field(default=DEFAULT_SPEC_PATTERN)
    retries: int = Field(default=1, ge=0)
    record_failures: bool = Field(default=False)
    request_timeout: Optional[float] = Field(default=None, gt=0)
    log_level: str = Field(default="INFO")

    @field_validator("base_url")
    @classmethod
    def base_url_must_be_absolute(cls, v: str) -> str:
        parsed = urlparse(str(v).strip())
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError("base_url must be an absolute http(s) URL")
        return str(v).strip().rstrip("/")

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        name = str(v).strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"log_level must be a logging level name, got {v!r}")
        return name

    @field_validator("spec_pattern")
    @classmethod
    def spec_pattern_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("spec_pattern must be a non-empty string")
        return v.strip()

    @property
    def max_attempts(self) -> int:
        """Total runs allowed for one scenario: the first try plus retries."""
        return self.retries + 1


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:  # pragma: no cover - defensive
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def _as_bool(text: Optional[str]) -> bool:
    return str(text).strip().lower() in {"1", "true", "yes", "on"}


def load_config() -> HarnessConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) harness_config.json at project root
    4) Safe defaults targeting the public DummyJSON service
    """

    base = _read_json_file(ROOT_HARNESS_CONFIG)

    def _base(key: str, default: Optional[str] = None) -> Optional[str]:
        val = base.get(key) if isinstance(base, dict) else None
        return str(val) if val is not None else default

    base_url = _env("CATALOG_BASE_URL") or _read_config_file("base_url") or _base("base_url", DEFAULT_BASE_URL)
    spec_pattern = _env("CATALOG_SPEC_PATTERN") or _read_config_file("spec_pattern") or _base("spec_pattern", DEFAULT_SPEC_PATTERN)
    retries_text = _env("CATALOG_RETRIES") or _read_config_file("retries") or _base("retries", "1")
    record_text = _env("CATALOG_RECORD_FAILURES") or _read_config_file("record_failures") or _base("record_failures", "false")
    timeout_text = _env("CATALOG_REQUEST_TIMEOUT") or _read_config_file("request_timeout") or _base("request_timeout")
    level_text = _env("CATALOG_LOG_LEVEL") or _read_config_file("log_level") or _base("log_level", "INFO")

    try:
        cfg = HarnessConfig(
            base_url=base_url,
            spec_pattern=spec_pattern,
            retries=str(retries_text).strip(),
            record_failures=_as_bool(record_text),
            request_timeout=(str(timeout_text).strip() if timeout_text else None),
            log_level=level_text,
        )
        return cfg
    except PydanticValidationError as e:
        logger.error("Invalid harness configuration: %s", e)
        raise


__all__ = [
    "HarnessConfig",
    "load_config",
]
