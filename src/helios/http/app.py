"""FastAPI application exposing exact-word lookup."""

from __future__ import annotations

from fastapi import FastAPI, Query, Request

import helios
from helios.index.query import QueryEngine


def create_app(engine: QueryEngine) -> FastAPI:
    """Build the app around an already-built, read-only query engine."""
    app = FastAPI(
        title="helios",
        version=helios.__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.engine = engine

    @app.get("/search")
    def search(request: Request, q: str = Query(...)) -> list[str]:
        query_engine: QueryEngine = request.app.state.engine
        return query_engine.lookup(q)

    return app
