"""Request helper shared by every catalog scenario.

One polymorphic operation, `issue(method, path, body)`, wraps httpx so call
sites stay uniform across verbs. The helper never treats an HTTP status as a
failure: it always returns a `ResponseDescriptor` and leaves pass/fail to the
caller. Only transport-level problems (DNS, refused connection, timeout)
raise, as `TransportFailure`.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from catalog_contract.config import HarnessConfig, load_config


logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class HttpMethod(str, enum.Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def coerce(cls, value: Union["HttpMethod", str]) -> "HttpMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"Unsupported HTTP method {value!r}; expected one of {allowed}") from None

    @property
    def is_mutating(self) -> bool:
        return self is not HttpMethod.GET


class TransportFailure(Exception):
    """The HTTP exchange could not complete; no status code exists."""

    def __init__(self, method: str, path: str, cause: BaseException) -> None:
        super().__init__(f"{method} {path} failed before a response was received: {type(cause).__name__}: {cause}")
        self.method = method
        self.path = path
        self.cause = cause


@dataclass(frozen=True)
class RequestSpec:
    method: HttpMethod
    path: str
    body: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod.coerce(self.method))
        path = str(self.path or "").strip()
        if not path or not path.startswith("/") or "://" in path:
            raise ValueError(f"path must be a non-empty relative URL fragment, got {self.path!r}")
        object.__setattr__(self, "path", path)
        if self.body is not None and not self.method.is_mutating:
            raise ValueError(f"{self.method.value} requests do not carry a body")


@dataclass(frozen=True)
class ResponseDescriptor:
    status: int
    body: Any
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = ""
    path: str = ""

    @property
    def content_type(self) -> str:
        for key, value in self.headers.items():
            if key.lower() == "content-type":
                return value
        return ""

    def preview(self, limit: int = 200) -> str:
        text = repr(self.body)
        return text[:limit] + ("…" if len(text) > limit else "")


def _parse_body(resp: httpx.Response) -> Any:
    ctype = resp.headers.get("content-type", "")
    if "json" in ctype.lower():
        try:
            return resp.json()
        except ValueError:
            return resp.text
    return resp.text


def _send(client: httpx.Client, spec: RequestSpec, timeout: Any = httpx.USE_CLIENT_DEFAULT) -> httpx.Response:
    return client.request(
        spec.method.value,
        spec.path,
        headers={"Content-Type": JSON_CONTENT_TYPE},
        json=(dict(spec.body) if spec.body is not None else None),
        timeout=timeout,
    )


def issue(
    method: Union[HttpMethod, str],
    path: str,
    body: Optional[Mapping[str, Any]] = None,
    *,
    config: Optional[HarnessConfig] = None,
    client: Optional[httpx.Client] = None,
) -> ResponseDescriptor:
    """Issue one request against the catalog and describe the outcome.

    - `path` is appended to `config.base_url`; when `client` is given (for
      example a FastAPI TestClient bound to the mirror) the path is sent
      relative to that client's own base URL instead.
    - Never raises on HTTP status; `TransportFailure` signals that no response
      was received at all.
    - A fresh httpx client is opened per call unless one is injected.
    """
    spec = RequestSpec(method=method, path=path, body=body)
    try:
        if client is not None:
            resp = _send(client, spec)
        else:
            cfg = config or load_config()
            timeout = httpx.Timeout(cfg.request_timeout) if cfg.request_timeout else httpx.USE_CLIENT_DEFAULT
            with httpx.Client(base_url=cfg.base_url) as fresh:
                resp = _send(fresh, spec, timeout)
    except httpx.TransportError as exc:
        logger.error("[HTTP] %s %s -> transport failure: %s", spec.method.value, spec.path, exc)
        raise TransportFailure(spec.method.value, spec.path, exc) from exc

    descriptor = ResponseDescriptor(
        status=resp.status_code,
        body=_parse_body(resp),
        headers={k: v for k, v in resp.headers.items()},
        method=spec.method.value,
        path=spec.path,
    )
    logger.info(
        "[HTTP] %s %s -> %s ct=%s",
        descriptor.method,
        descriptor.path,
        descriptor.status,
        descriptor.content_type or "-",
    )
    return descriptor


__all__ = [
    "HttpMethod",
    "RequestSpec",
    "ResponseDescriptor",
    "TransportFailure",
    "issue",
]
