"""
Prometheus metric definitions  +  /metrics route (multiprocess-ready)
--------------------------------------------------------------------
• 若设置环境变量  PROMETHEUS_MULTIPROC_DIR=<dir>：
    - 使用 multiprocess Collector 聚合所有进程写入的 .db 文件
• 否则回退为单进程默认注册表
"""

import os

from fastapi import APIRouter, Response
from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CollectorRegistry,
    multiprocess,
)

from cdkrun.config import ENABLE_PROMETHEUS

router = APIRouter()

# ────────── Registry 处理 ───────────────────────────────────
if os.getenv("PROMETHEUS_MULTIPROC_DIR"):
    _REGISTRY: CollectorRegistry | None = CollectorRegistry()
    multiprocess.MultiProcessCollector(_REGISTRY)
else:
    _REGISTRY = None  # 使用默认全局 registry
# ───────────────────────────────────────────────────────────

# ────────── Metric definitions ─────────────────────────────
EXECUTIONS = Counter(
    "cdkrun_executions_total",
    "Executions finished, by resource type and outcome",
    ["resource_type", "status"],
    registry=_REGISTRY,
)

EXECUTION_DURATION = Histogram(
    "cdkrun_execution_duration_seconds",
    "Wall time of a blocking execute() call (seconds)",
    ["resource_type"],
    buckets=(0.1, 0.5, 1, 2, 5, 10, 30, 60, 300, 900),
    registry=_REGISTRY,
)

STATE_MACHINE_POLLS = Counter(
    "cdkrun_state_machine_polls_total",
    "describe_execution calls made while waiting for a state machine",
    registry=_REGISTRY,
)
# ───────────────────────────────────────────────────────────

# ────────── /metrics endpoint ──────────────────────────────
if ENABLE_PROMETHEUS:
    @router.get("/metrics")
    def metrics() -> Response:            # pragma: no cover
        """Prometheus scrape endpoint."""
        return Response(
            generate_latest(_REGISTRY) if _REGISTRY else generate_latest(),
            media_type="text/plain",
        )

__all__ = [
    "router",
    "EXECUTIONS",
    "EXECUTION_DURATION",
    "STATE_MACHINE_POLLS",
    "_REGISTRY",
]
