"""Offline mirror of the product catalog API (FastAPI)."""

from __future__ import annotations

from catalog_contract.stub.main import create_app

__all__ = ["create_app"]
