#!/usr/bin/env python3
"""
Metrics HTTP Server
FastAPI application serving exposition text on /metrics/
"""

import logging
import time
from typing import List

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import HTTP_CONCURRENCY
from .exporter import MetricsExporter, join_exports

logger = logging.getLogger(__name__)


def create_app(exporter: MetricsExporter, concurrency: int = HTTP_CONCURRENCY) -> FastAPI:
    app = FastAPI(title="Nym nodes and addresses exporter")

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} "
            f"({(time.time() - start_time) * 1000:.1f}ms)"
        )
        return response

    @app.get("/metrics/", response_class=PlainTextResponse)
    async def metrics(
        id: List[int] = Query(default=[]),
        address: List[str] = Query(default=[]),
    ) -> PlainTextResponse:
        """Exposition text for every requested node ID and account address"""
        exports = await exporter.export_batch(node_ids=id, addresses=address, concurrency=concurrency)
        return PlainTextResponse(join_exports(exports))

    return app
