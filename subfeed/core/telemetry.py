"""
Telemetry configuration (Metrics & Tracing).
Sets up Prometheus instrumentation, pipeline metrics and OpenTelemetry.
"""
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from subfeed.config import get_settings

# -----------------------------------------------------------------------------
# Pipeline metrics
# -----------------------------------------------------------------------------

PIPELINE_RUNS = Counter(
    "subfeed_pipeline_runs_total",
    "Feed assembly and search runs by outcome",
    ["pipeline", "outcome"],
)
PIPELINE_DURATION = Histogram(
    "subfeed_pipeline_duration_seconds",
    "Wall time of feed assembly and search runs",
    ["pipeline"],
)
SHORT_FORM_FILTERED = Counter(
    "subfeed_short_form_filtered_total",
    "Videos dropped by the short-form classifier",
    ["pipeline"],
)


def record_run(pipeline: str, outcome: str, elapsed_sec: float = 0.0, filtered: int = 0) -> None:
    """Record one pipeline run."""
    PIPELINE_RUNS.labels(pipeline=pipeline, outcome=outcome).inc()
    if outcome == "completed":
        PIPELINE_DURATION.labels(pipeline=pipeline).observe(elapsed_sec)
    if filtered:
        SHORT_FORM_FILTERED.labels(pipeline=pipeline).inc(filtered)


def get_tracer(name: str) -> trace.Tracer:
    """Tracer from the global provider (no-op unless OTEL is enabled)."""
    return trace.get_tracer(name)


def setup_telemetry(app: FastAPI) -> None:
    """
    Setup Observability (Metrics & Tracing).

    1. Prometheus Metrics via /metrics
    2. OpenTelemetry Tracing via OTLP
    """
    settings = get_settings()

    if settings.ENABLE_PROMETHEUS:
        instrumentator = Instrumentator(
            should_group_status_codes=False,
            should_ignore_untemplated=True,
            should_respect_env_var=True,
            should_instrument_requests_inprogress=True,
            excluded_handlers=["/metrics", "/health", "/health/ready"],
            env_var_name="ENABLE_METRICS",
            inprogress_name="inprogress",
            inprogress_labels=True,
        )
        instrumentator.instrument(app).expose(app, include_in_schema=False)

    if settings.ENABLE_OTEL:
        resource = Resource.create(attributes={
            "service.name": settings.APP_NAME,
            "service.version": settings.APP_VERSION,
            "deployment.environment": "production" if not settings.DEBUG else "development",
        })

        provider = TracerProvider(resource=resource)
        # Default endpoint is localhost:4317
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))
        trace.set_tracer_provider(provider)

        FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
