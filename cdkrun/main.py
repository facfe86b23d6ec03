"""FastAPI entrypoint."""

import logging

import uvicorn
from fastapi import FastAPI
from cdkrun.config import ENABLE_PROMETHEUS, ENABLE_OTEL
from cdkrun.observability.prometheus_metrics import router as metrics_router
from cdkrun.observability.otel_tracing import init_tracer
from cdkrun.api.routes import router as invoke_router

# ──────────────────────── logging ──────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ───────────────────────── FastAPI app ─────────────────────

app = FastAPI(title="cdkrun API", description="Run deployed CDK constructs by construct path")

# Prometheus / OTEL 初始化
if ENABLE_OTEL:
    init_tracer("cdkrun")

if ENABLE_PROMETHEUS:
    app.include_router(metrics_router)

app.include_router(invoke_router)


@app.get("/")
async def root():  # pragma: no cover
    return {"message": "cdkrun API is running"}


# ─────────────────────────── run uvicorn ────────────────────
if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=False)
