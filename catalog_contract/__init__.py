"""Contract test harness for the DummyJSON product catalog API.

The package exposes the request helper used by every scenario, the
configuration loader, and the contract oracles the scenarios enforce.
Gherkin scenarios live under `tests/integration/features/`; the offline
catalog mirror lives in `catalog_contract.stub`.
"""

from __future__ import annotations

from catalog_contract.config import HarnessConfig, load_config
from catalog_contract.http.client import (
    HttpMethod,
    RequestSpec,
    ResponseDescriptor,
    TransportFailure,
    issue,
)

__all__ = [
    "HarnessConfig",
    "HttpMethod",
    "RequestSpec",
    "ResponseDescriptor",
    "TransportFailure",
    "issue",
    "load_config",
]
