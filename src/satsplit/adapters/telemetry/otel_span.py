from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from opentelemetry import trace as otel_trace
from opentelemetry.trace.status import Status, StatusCode

from satsplit.ports.telemetry import TelemetryEvent, TelemetryLevel, TelemetrySink

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _to_attribute(value: Any) -> Any:
    """Coerce a payload value into something OTel accepts as an attribute."""
    if isinstance(value, (bool, str, float)):
        return value
    if isinstance(value, int):
        # sat amounts and splits are u64, OTel ints are i64
        return value if _I64_MIN <= value <= _I64_MAX else str(value)
    if isinstance(value, (list, tuple)):
        items = [_to_attribute(v) for v in value]
        if items and len({type(v) for v in items}) == 1 and not isinstance(items[0], (list, tuple)):
            return tuple(items)
        return str(list(value))
    return str(value)


def _flatten(prefix: str, data: Mapping[str, Any] | None) -> dict[str, Any]:
    return {f"{prefix}.{k}": _to_attribute(v) for k, v in dict(data or {}).items() if v is not None}


@dataclass(slots=True)
class OtelSpanEventSink(TelemetrySink):
    """Attach events to whatever OpenTelemetry span is current.

    Nothing is recorded outside a recording span, so with the bare
    `opentelemetry-api` (no SDK configured) this sink is a no-op.
    """

    enabled_flag: bool = True
    channels: set[str] = field(default_factory=lambda: {"audit", "ops"})
    min_level: TelemetryLevel = TelemetryLevel.INFO

    def enabled(self, channel: str, level: TelemetryLevel, name: str | None = None) -> bool:
        _ = name
        if not self.enabled_flag or channel not in self.channels:
            return False
        return TelemetryLevel.coerce(level).at_least(self.min_level)

    def emit(self, event: TelemetryEvent) -> None:
        span = otel_trace.get_current_span()
        if not span.is_recording():
            return

        attributes: dict[str, Any] = {
            "satsplit.run_id": event.run_id,
            "satsplit.channel": event.channel,
            "satsplit.level": event.level.value,
        }
        attributes.update(_flatten("satsplit.scope", event.scope))
        attributes.update(_flatten("satsplit.payload", event.payload))

        span.add_event(
            event.name,
            attributes=attributes,
            timestamp=int(event.ts_utc.timestamp() * 1_000_000_000),
        )
        if event.level is TelemetryLevel.ERROR:
            span.set_status(Status(StatusCode.ERROR, str(event.payload.get("error", ""))))
