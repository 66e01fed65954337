from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any

from satsplit.ports.telemetry import TelemetryEvent, TelemetryLevel, TelemetrySink

_SCOPE_KEYS = ("phase", "recipient")
_PAYLOAD_KEYS = (
    "total_sats",
    "allocated_sats",
    "recipients_count",
    "remote_percentage",
    "splits",
    "num_sats",
    "error",
)


def _short(v: Any, limit: int = 80) -> str:
    s = str(v)
    return s if len(s) <= limit else (s[: limit - 3] + "...")


def _summarize(event: TelemetryEvent) -> str:
    scope = dict(event.scope or {})
    payload = dict(event.payload or {})

    parts = [f"{k}={_short(scope[k], 40)}" for k in _SCOPE_KEYS if scope.get(k) not in (None, "")]
    parts += [f"{k}={_short(payload[k])}" for k in _PAYLOAD_KEYS if k in payload]

    if not parts and payload:
        parts.append(f"payload_keys={list(payload.keys())[:8]}")
    return " ".join(parts)


@dataclass(slots=True)
class ConsoleTelemetrySink(TelemetrySink):
    """One line per event. Off unless enabled in config."""

    enabled_flag: bool = False
    channels: set[str] = field(default_factory=lambda: {"ops"})
    min_level: TelemetryLevel = TelemetryLevel.INFO
    stream: Any = sys.stdout

    def enabled(self, channel: str, level: TelemetryLevel, name: str | None = None) -> bool:
        _ = name
        if not self.enabled_flag or channel not in self.channels:
            return False
        return TelemetryLevel.coerce(level).at_least(self.min_level)

    def emit(self, event: TelemetryEvent) -> None:
        msg = f"[{event.level.value}][{event.channel}][{event.run_id[:8]}] {event.name}"
        summary = _summarize(event)
        if summary:
            msg = f"{msg} {summary}"
        self.stream.write(msg + "\n")
        self.stream.flush()
