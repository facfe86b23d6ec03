"""OpenTelemetry tracer initialization."""

from importlib.metadata import PackageNotFoundError, version

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

from cdkrun.config import AWS_REGION, ENABLE_OTEL, OTEL_EXPORTER_ENDPOINT

_initialized = False


def _service_version() -> str:
    try:
        return version("cdkrun")
    except PackageNotFoundError:
        return "unknown"


def init_tracer(service_name: str = "cdkrun") -> bool:
    """
    Install an OTLP tracer provider if ENABLE_OTEL is true.

    Safe to call from every CLI invocation and app start; only the first call
    installs the provider. Returns whether tracing is active.
    """
    global _initialized
    if not ENABLE_OTEL:
        return False
    if _initialized:
        return True

    attributes = {
        "service.name": service_name,
        "service.version": _service_version(),
    }
    if AWS_REGION:
        attributes["cloud.provider"] = "aws"
        attributes["cloud.region"] = AWS_REGION

    provider = TracerProvider(resource=Resource.create(attributes))
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=OTEL_EXPORTER_ENDPOINT))
    )
    trace.set_tracer_provider(provider)

    _initialized = True
    return True
