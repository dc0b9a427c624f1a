from __future__ import annotations

from logging import Filter, LogRecord, getLogger
from typing import TYPE_CHECKING
from os import environ

from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.propagate import set_global_textmap, extract
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExportResult,
    ReadableSpan
)
from opentelemetry.sdk.trace import (
    TracerProvider,
    Tracer
)
from opentelemetry.trace import (
    get_tracer as _get_tracer,
    set_tracer_provider,
    SpanKind,
    Span,
    get_current_span
)
from opentelemetry.sdk.metrics.export import (
    PeriodicExportingMetricReader
)
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.metrics import (
    get_meter as _get_meter,
    set_meter_provider,
    Counter
)

from .env import INSTANCE


if TYPE_CHECKING:
    from collections.abc import Sequence

    from opentelemetry.util._decorator import _AgnosticContextManager
    from opentelemetry.context import Context


__all__ = (
    'SpanKind',
    'cx',
    'get_counter',
    'get_tracer',
    'init_otel',
    'span',
)


set_global_textmap(TraceContextTextMapPropagator())

TRACER_NAME = 'interhook'
OTLP_ENDPOINT_VARS = (
    'OTEL_EXPORTER_OTLP_ENDPOINT',
    'OTEL_EXPORTER_OTLP_TRACES_ENDPOINT'
)

otel_resource: Resource | None = None


class SuppressMissingModuleNameError(Filter):
    def filter(self, record: LogRecord) -> bool:
        return 'get_tracer called with missing module name.' not in str(record.msg)


class SimpleConsoleSpanExporter(ConsoleSpanExporter):
    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        for span in spans:
            if span.parent is not None:
                continue

            self.out.write(span.name + '\n')

        self.out.flush()

        return SpanExportResult.SUCCESS


def get_tracer(name: str | None = None) -> Tracer:
    return _get_tracer(name or TRACER_NAME)


def get_counter(name: str) -> Counter:
    if otel_resource is None:
        # ? no-op meter until init_otel is called
        return _get_meter(TRACER_NAME).create_counter(name)

    return _get_meter(
        str(otel_resource.attributes.get('service.name')),
        str(otel_resource.attributes.get('service.version'))
    ).create_counter(name)


def span(
    name: str,
    tracer_name: str | None = None,
    context: Context | None = None,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict | None = None,
    parent: str | None = None,
    **kwargs  # noqa: ANN003
) -> _AgnosticContextManager[Span]:
    if context and parent:
        raise ValueError('context and parent are mutually exclusive')

    return get_tracer(tracer_name).start_as_current_span(
        name,
        context=context or (
            extract({'traceparent': parent})
            if parent else None),
        kind=kind,
        attributes=attributes,
        **kwargs
    )


def init_otel(name: str, version: str, dev: bool = True) -> None:
    global otel_resource

    otel_resource = Resource({
        'service.name': name,
        'service.version': version,
        'service.instance.id': INSTANCE,
        'deployment.environment.name': (
            'dev' if dev else 'prod'
        )
    })

    tracer_provider = TracerProvider(resource=otel_resource)

    set_tracer_provider(tracer_provider)

    getLogger(
        'opentelemetry.sdk.trace'
    ).addFilter(
        SuppressMissingModuleNameError()
    )

    # ? only export when a collector is configured, console otherwise
    if any(environ.get(var) for var in OTLP_ENDPOINT_VARS):
        set_meter_provider(MeterProvider(
            resource=otel_resource,
            metric_readers=[
                PeriodicExportingMetricReader(
                    OTLPMetricExporter(),
                    60000
                )
            ]
        ))

        tracer_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter())
        )

    tracer_provider.add_span_processor(
        BatchSpanProcessor(SimpleConsoleSpanExporter())
    )


def cx() -> Span:
    return get_current_span()
