from .event_factory import make_event
from .hub import TelemetryHub
from .run_context import RunTelemetry, new_run_id

__all__ = [
    "make_event",
    "new_run_id",
    "TelemetryHub",
    "RunTelemetry",
]
