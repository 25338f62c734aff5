from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

logger = logging.getLogger(__name__)

_TRACER_PROVIDER: TracerProvider | None = None


def sampling_ratio() -> float:
    raw_value = os.getenv("OTEL_TRACES_SAMPLER_RATIO", "1.0")
    try:
        ratio = float(raw_value)
    except ValueError:
        logger.warning("otel_invalid_sampler_ratio value=%s", raw_value)
        return 1.0
    return min(max(ratio, 0.0), 1.0)


def build_tracer_provider(
    service_name: str | None = None,
    endpoint: str | None = None,
) -> TracerProvider:
    """Tracer provider honoring the parent's sampling decision.

    Spans are only exported when an OTLP endpoint is given; a broken exporter
    setup leaves tracing in-process.
    """
    provider = TracerProvider(
        resource=Resource.create({SERVICE_NAME: service_name or "rms-api"}),
        sampler=ParentBased(TraceIdRatioBased(sampling_ratio())),
    )
    if endpoint:
        try:
            exporter = OTLPSpanExporter(
                endpoint=endpoint,
                insecure=endpoint.startswith("http://"),
            )
            provider.add_span_processor(BatchSpanProcessor(exporter))
        except Exception:
            logger.exception("otel_exporter_setup_failed")
    return provider


def configure_otel(app: FastAPI) -> TracerProvider:
    global _TRACER_PROVIDER
    if _TRACER_PROVIDER is not None:
        return _TRACER_PROVIDER

    provider = build_tracer_provider(
        service_name=os.getenv("OTEL_SERVICE_NAME"),
        endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "").strip() or None,
    )
    trace.set_tracer_provider(provider)
    set_global_textmap(TraceContextTextMapPropagator())
    FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
    PymongoInstrumentor().instrument(tracer_provider=provider)
    _TRACER_PROVIDER = provider
    return provider


def flush_traces(timeout_millis: int = 5000) -> None:
    if _TRACER_PROVIDER is not None:
        _TRACER_PROVIDER.force_flush(timeout_millis=timeout_millis)
