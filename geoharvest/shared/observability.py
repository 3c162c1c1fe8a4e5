# geoharvest\shared\observability.py
import sys
from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from geoharvest.shared.config import Settings, settings

_provider: Optional[TracerProvider] = None


def setup_observability(app_settings: Optional[Settings] = None) -> TracerProvider:
    """
    Configures OpenTelemetry for a run.

    1. Sets the Global Tracer Provider, so use case spans record and every
       log line carries a real trace_id / span_id.
    2. With TRACE_EXPORT enabled, prints finished spans to stderr.

    The global provider can only be set once per process; later calls
    return the provider installed first.
    """
    global _provider
    if _provider is not None:
        return _provider

    app_settings = app_settings or settings

    # 1. Define Resource (Service Name identity)
    resource = Resource.create(attributes={
        "service.name": app_settings.APP_NAME,
        "service.environment": app_settings.APP_ENV.value,
    })

    # 2. Initialize the Tracer Provider
    provider = TracerProvider(resource=resource)

    # 3. Configure the Exporter (stderr, like the logs)
    if app_settings.TRACE_EXPORT:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))

    trace.set_tracer_provider(provider)
    _provider = provider
    return provider


def get_tracer(name: str):
    """
    Utility to get a tracer for manual instrumentation in Use Cases.
    Usage:
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("my_custom_logic"):
            ...

    Tracers fetched before setup_observability() delegate to the provider
    once it is installed.
    """
    return trace.get_tracer(name)
