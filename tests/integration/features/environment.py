"""Behave environment hooks for the product catalog scenario suite.

Loads the harness configuration once before any feature runs and publishes
it on the context; every step passes it explicitly to the request helper.
When the configured base URL points at localhost and nothing is listening,
the hook boots the offline catalog mirror with uvicorn on a free port and
tears it down after the run. Failed scenarios are retried per the
configured retry count.
"""

from __future__ import annotations

import json
import os
import socket
import subprocess
import sys
import time
import traceback
from typing import Any
from urllib.parse import urlparse

import httpx
from behave.contrib.scenario_autoretry import patch_scenario_with_autoretry
from dotenv import load_dotenv

from catalog_contract.config import load_config
from catalog_contract.http.client import TransportFailure
from catalog_contract.logging_setup import configure_logging


FAILURE_LOG = os.path.join("logs", "behave_failures.jsonl")


def _is_listening(base_url: str) -> bool:
    try:
        with httpx.Client(timeout=2.0) as client:
            client.get(base_url + "/health", headers={"Accept": "*/*"})
            return True
    except httpx.HTTPError:
        return False


def _choose_free_port(host: str) -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _boot_mirror(context: Any, host: str) -> str:
    port = _choose_free_port(host)
    base = f"http://{host}:{port}"
    uvicorn_cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "catalog_contract.stub.main:create_app",
        "--factory",
        "--host",
        host,
        "--port",
        str(port),
        "--log-level",
        "warning",
    ]
    context._mirror_proc = subprocess.Popen(
        uvicorn_cmd,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        env=os.environ.copy(),
    )
    deadline = time.time() + 10.0
    while time.time() < deadline:
        if _is_listening(base):
            break
        time.sleep(0.2)
    else:
        raise AssertionError(f"Catalog mirror did not start at {base}")
    print(f"[env] started catalog mirror at {base}")
    return base


def before_all(context: Any) -> None:
    """Load configuration and make sure the catalog under test is reachable."""
    # Never override variables that are already set in the environment
    load_dotenv(override=False)
    cfg = load_config()
    configure_logging(cfg.log_level)

    parsed = urlparse(cfg.base_url)
    host_is_local = parsed.hostname in {"localhost", "127.0.0.1"}
    context._mirror_proc = None
    if host_is_local and not _is_listening(cfg.base_url):
        base = _boot_mirror(context, parsed.hostname or "127.0.0.1")
        cfg = cfg.model_copy(update={"base_url": base})

    context.harness_config = cfg
    print(f"[env] base_url={cfg.base_url} retries={cfg.retries} record_failures={cfg.record_failures}")


def after_all(context: Any) -> None:
    """Terminate the mirror process if this module started one."""
    proc = getattr(context, "_mirror_proc", None)
    if proc is not None:
        try:
            proc.terminate()
            try:
                proc.wait(timeout=5)
            except subprocess.TimeoutExpired:
                proc.kill()
        finally:
            context._mirror_proc = None


def before_feature(context: Any, feature: Any) -> None:
    attempts = context.harness_config.max_attempts
    if attempts <= 1:
        return
    for scenario in feature.scenarios:
        patch_scenario_with_autoretry(scenario, max_attempts=attempts)


def before_scenario(context: Any, scenario: Any) -> None:
    # Per-scenario scratch space; behave drops it when the scenario ends
    context.vars = {}
    context.last_response = None
    context.scenario = scenario


def _failure_kind(exc: Any) -> str:
    if isinstance(exc, TransportFailure):
        return "transport"
    if isinstance(exc, AssertionError):
        return "contract"
    return "error"


def _record_failure(context: Any, record: dict) -> None:
    if not context.harness_config.record_failures:
        return
    os.makedirs(os.path.dirname(FAILURE_LOG), exist_ok=True)
    with open(FAILURE_LOG, "a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, ensure_ascii=False) + "\n")


def after_step(context: Any, step: Any) -> None:
    """Emit one result line per step, plus diagnostics when a step fails."""
    status_upper = str(getattr(step.status, "name", step.status)).upper()
    print(f"[behave] STEP {status_upper}: {step.name}")
    if status_upper not in {"FAILED", "ERROR"}:
        return

    scenario = getattr(context, "scenario", None)
    feature_name = getattr(getattr(scenario, "feature", None), "name", "<unknown>")
    scenario_name = getattr(scenario, "name", "<unknown>")
    exc = getattr(step, "exception", None)
    kind = _failure_kind(exc)
    print(f"[behave] STEP FAILED ({kind}) in feature=\"{feature_name}\" scenario=\"{scenario_name}\": {step.name} @ {step.location}")
    if exc is not None:
        print(f"[behave] STEP EXCEPTION: {type(exc).__name__}: {exc}")
    tb = getattr(step, "exc_traceback", None)
    if tb is not None:
        for frag in traceback.format_tb(tb)[-3:]:
            frag_line = " ".join(line.strip() for line in frag.strip().splitlines())
            print(f"[behave] TRACE TAIL: {frag_line}")

    last = getattr(context, "last_response", None)
    snapshot = None
    if last is not None:
        snapshot = {"method": last.method, "path": last.path, "status": last.status}
        print(
            f"[behave] LAST_RESPONSE: method={last.method} path={last.path} status={last.status} "
            f"ct={last.content_type or '-'}"
        )
        print(f"[behave] BODY_PREVIEW: {last.preview()}")

    _record_failure(
        context,
        {
            "feature": feature_name,
            "scenario": scenario_name,
            "step_name": step.name,
            "location": str(step.location),
            "failure_kind": kind,
            "exception_class": type(exc).__name__ if exc is not None else None,
            "exception_message": str(exc) if exc is not None else None,
            "last_response": snapshot,
        },
    )


def after_scenario(context: Any, scenario: Any) -> None:
    status_upper = str(getattr(scenario.status, "name", scenario.status)).upper()
    print(f"[behave] SCENARIO {status_upper}: {scenario.name}")
