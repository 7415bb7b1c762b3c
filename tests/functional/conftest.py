from __future__ import annotations

"""Functional test bootstrap for the catalog contract harness.

Functional tests never touch the network: oracles run against the offline
catalog mirror through FastAPI's TestClient (an httpx.Client subclass, so it
can be injected straight into the request helper), and transport-level
behaviour is exercised with httpx.MockTransport.

This file is intentionally scoped under tests/functional/ so the behave
suite under tests/integration/ is unaffected.
"""

import os
from typing import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from catalog_contract.config import HarnessConfig
from catalog_contract.stub import create_app


MIRROR_BASE_URL = "http://testserver"


@pytest.fixture(scope="session")
def mirror_client() -> Iterator[TestClient]:
    """Session-level mirror; the seed is never mutated so sharing is safe."""
    with TestClient(create_app(), base_url=MIRROR_BASE_URL) as client:
        yield client


@pytest.fixture
def harness_config() -> HarnessConfig:
    return HarnessConfig(base_url="https://catalog.test", retries=1)


@pytest.fixture
def mock_client() -> Iterator[Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]]:
    """Build an httpx client whose transport is the given handler."""
    opened = []

    def _build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler), base_url="https://catalog.test")
        opened.append(client)
        return client

    yield _build
    for client in opened:
        client.close()


@pytest.fixture
def isolated_config_env(tmp_path, monkeypatch) -> None:
    """Run config loading from an empty directory with no CATALOG_* overrides."""
    for key in list(os.environ):
        if key.startswith("CATALOG_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
