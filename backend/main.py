"""FastAPI backend wiring for the turnover collision engine.

Serves the derived collision views (critical days, priority watch, day
drill-down, operations board) to the dashboard client. The snapshot is
pushed in by the client or an import job; nothing is persisted here.
"""
from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from turnover.config import load_config
from .turnover_router import router as turnover_router


# ---------------------------------------------------------------------------
# FastAPI init + CORS
# ---------------------------------------------------------------------------

app = FastAPI(title="Turnover Backend", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(turnover_router, prefix="/api/turnover", tags=["turnover"])

logger = logging.getLogger("turnover.backend")
if not logger.handlers:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")


@app.middleware("http")
async def telemetry_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration = time.perf_counter() - start
    response.headers["X-Process-Time"] = f"{duration:.2f}s"
    logger.info("[HTTP] %s %s took %.2fs", request.method, request.url.path, duration)
    return response


@app.on_event("startup")
async def _log_config() -> None:
    config = load_config()
    logger.info(
        "Turnover backend ready: priority marker=%r | max critical days=%s",
        config.priority_marker, config.max_critical_days,
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
