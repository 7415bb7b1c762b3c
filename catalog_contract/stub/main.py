"""Application factory for the offline catalog mirror.

Serves the same product endpoints as the public catalog over a fixed seed so
the scenario suite and the functional tests can run without network access.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from catalog_contract.logging_setup import configure_logging
from catalog_contract.stub.routes import router


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Catalog mirror", version="1.0.0")

    @app.get("/health", include_in_schema=False)
    def health() -> dict:
        return {"status": "ok"}

    app.include_router(router)
    logger.info("mirror.app.created routes=%d", len(app.routes))
    return app
