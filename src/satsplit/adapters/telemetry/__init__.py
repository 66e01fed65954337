from .console import ConsoleTelemetrySink
from .memory import InMemoryTelemetrySink
from .otel_span import OtelSpanEventSink

__all__ = [
    "ConsoleTelemetrySink",
    "InMemoryTelemetrySink",
    "OtelSpanEventSink",
]
