from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from satsplit.ports.telemetry import TelemetryEvent, TelemetryLevel


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def make_event(
    *,
    run_id: str,
    name: str,
    level: str | TelemetryLevel,
    channel: str,
    scope: Mapping[str, Any] | None = None,
    payload: Mapping[str, Any] | None = None,
) -> TelemetryEvent:
    return TelemetryEvent(
        ts_utc=now_utc(),
        run_id=str(run_id),
        name=str(name),
        level=TelemetryLevel.coerce(level),
        channel=str(channel),
        scope=dict(scope or {}),
        payload=dict(payload or {}),
    )


def with_scope(event: TelemetryEvent, scope: Mapping[str, Any] | None) -> TelemetryEvent:
    """Copy of `event` whose scope is `scope` overlaid by the event's own scope."""
    merged = dict(scope or {})
    merged.update(dict(event.scope or {}))
    return TelemetryEvent(
        ts_utc=event.ts_utc,
        run_id=event.run_id,
        name=event.name,
        level=event.level,
        channel=event.channel,
        scope=merged,
        payload=dict(event.payload or {}),
    )
