from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from qrmenu.infrastructure.settings import app_env

logger = logging.getLogger(__name__)

SERVICE_VERSION_VALUE = "0.1.0"
# Probes and scrapes would drown the order traces.
EXCLUDED_URLS = "/health/live,/health/ready,/metrics"

_provider: TracerProvider | None = None


def _build_provider() -> TracerProvider:
    resource = Resource.create(
        {
            SERVICE_NAME: os.getenv("OTEL_SERVICE_NAME", "qrmenu"),
            SERVICE_VERSION: SERVICE_VERSION_VALUE,
            "deployment.environment": app_env(),
        }
    )
    provider = TracerProvider(resource=resource)

    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not endpoint:
        return provider
    try:
        exporter = OTLPSpanExporter(endpoint=endpoint, insecure=endpoint.startswith("http://"))
    except Exception:
        logger.exception("otel_exporter_setup_failed")
        return provider
    provider.add_span_processor(BatchSpanProcessor(exporter))
    return provider


def configure_otel(app: FastAPI) -> None:
    """Install the process tracer provider once and instrument ``app`` with it."""
    global _provider
    if _provider is None:
        _provider = _build_provider()
        trace.set_tracer_provider(_provider)
        set_global_textmap(TraceContextTextMapPropagator())

    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=_provider,
        excluded_urls=EXCLUDED_URLS,
    )
