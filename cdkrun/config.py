import os
from typing import Optional

# Feature toggles
ENABLE_PROMETHEUS: bool = os.getenv("ENABLE_PROMETHEUS", "true").lower() == "true"
ENABLE_OTEL: bool = os.getenv("ENABLE_OTEL", "false").lower() == "true"

# OpenTelemetry exporter endpoint
OTEL_EXPORTER_ENDPOINT: str = os.getenv(
    "OTEL_EXPORTER_OTLP_ENDPOINT",
    "http://localhost:4318/v1/traces",
)

# Where `cdk synth` writes the cloud assembly
ASSEMBLY_DIR: str = os.getenv("CDKRUN_ASSEMBLY_DIR", "cdk.out")

# State machine polling
POLL_INTERVAL_SECONDS: float = float(os.getenv("CDKRUN_POLL_INTERVAL", "0.5"))

def parse_timeout(raw: Optional[str]) -> Optional[float]:
    """Empty means no timeout; anything else must be a positive number of seconds."""
    if not raw:
        return None
    value = float(raw)
    if value <= 0:
        raise ValueError(f"CDKRUN_EXECUTE_TIMEOUT must be positive, got {raw!r}")
    return value

# 未设置时不限时（与 RUNNING 状态一直轮询的行为一致）
EXECUTE_TIMEOUT_SECONDS: Optional[float] = parse_timeout(os.getenv("CDKRUN_EXECUTE_TIMEOUT"))

# AWS session
AWS_PROFILE: Optional[str] = os.getenv("AWS_PROFILE")
AWS_REGION: Optional[str] = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
