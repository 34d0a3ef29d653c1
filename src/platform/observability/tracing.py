"""
OpenTelemetry tracing for the API and the reconcile job.

Spans are exported over OTLP when OTEL_EXPORTER_OTLP_ENDPOINT is set; with
OTEL_CONSOLE_EXPORT=true they are also printed. Without either, spans are
still created (use cases call trace.get_tracer) but go nowhere.
"""

import os
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON


class TracingConfig:
    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: str | None = None,
        enable_console: bool = False,
    ) -> None:
        self.service_name = service_name
        self.otlp_endpoint = otlp_endpoint or os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT')
        self.enable_console = (
            enable_console or os.getenv('OTEL_CONSOLE_EXPORT', 'false').lower() == 'true'
        )
        self._provider: TracerProvider | None = None

    def setup(self) -> None:
        # Sample everything here; volume control belongs in the collector
        self._provider = TracerProvider(
            resource=Resource(attributes={SERVICE_NAME: self.service_name}), sampler=ALWAYS_ON
        )
        if self.otlp_endpoint:
            self._provider.add_span_processor(
                BatchSpanProcessor(OTLPSpanExporter(endpoint=self.otlp_endpoint))
            )
        if self.enable_console:
            self._provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        trace.set_tracer_provider(self._provider)

    @staticmethod
    def instrument_fastapi(*, app: Any, excluded_urls: str = 'health,metrics') -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded_urls)

    @staticmethod
    def instrument_sqlalchemy(*, engine: Any) -> None:
        # AsyncEngine wraps a sync engine that carries the event hooks
        SQLAlchemyInstrumentor().instrument(engine=getattr(engine, 'sync_engine', engine))

    def shutdown(self) -> None:
        if self._provider:
            self._provider.shutdown()
