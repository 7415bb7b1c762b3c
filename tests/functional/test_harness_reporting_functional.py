"""Functional tests for how the harness reports runs and failures.

Covers the logging layout built from `HarnessConfig.log_level` and the
failure classification the behave hooks print and record. The hooks module
is loaded from its file because behave, not a package, owns that directory.
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path

import httpx
import pytest

from catalog_contract.http.client import ResponseDescriptor, TransportFailure
from catalog_contract.logging_setup import HARNESS_LOGGER, build_logging_config, configure_logging
from catalog_contract.logic.contracts import ContractViolation


ENVIRONMENT_FILE = Path(__file__).resolve().parents[1] / "integration" / "features" / "environment.py"


@pytest.fixture(scope="module")
def behave_hooks():
    spec = importlib.util.spec_from_file_location("catalog_behave_environment", ENVIRONMENT_FILE)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def harness_logger_level():
    harness = logging.getLogger(HARNESS_LOGGER)
    saved = harness.level
    yield harness
    harness.setLevel(saved)


def test_logging_config_follows_the_harness_level() -> None:
    cfg = build_logging_config("debug")
    loggers = cfg["loggers"]
    assert loggers[HARNESS_LOGGER] == {"level": "DEBUG", "handlers": ["console"], "propagate": False}
    for quiet in ("httpx", "httpcore", "behave", "uvicorn.access"):
        assert loggers[quiet]["level"] == "WARNING"
    assert cfg["root"]["level"] == "WARNING"


def test_configure_logging_defers_to_an_existing_root_handler(harness_logger_level) -> None:
    # pytest's capture handler already sits on the root logger here
    assert logging.getLogger().handlers
    configure_logging("warning")
    assert harness_logger_level.level == logging.WARNING
    assert not harness_logger_level.handlers


def test_transport_and_contract_failures_are_reported_as_different_kinds(behave_hooks) -> None:
    request = httpx.Request("GET", "https://catalog.test/products")
    transport = TransportFailure("GET", "/products", httpx.ConnectError("refused", request=request))
    resp = ResponseDescriptor(status=500, body={}, method="GET", path="/products")
    contract = ContractViolation("status in [200]", 500, response=resp)

    assert behave_hooks._failure_kind(transport) == "transport"
    assert behave_hooks._failure_kind(contract) == "contract"
    assert behave_hooks._failure_kind(AssertionError("plain assert")) == "contract"
    assert behave_hooks._failure_kind(KeyError("category")) == "error"
    assert behave_hooks._failure_kind(None) == "error"
