from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Protocol


class TelemetryLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @classmethod
    def coerce(cls, value: str | "TelemetryLevel" | None) -> "TelemetryLevel":
        if isinstance(value, TelemetryLevel):
            return value
        v = (value or "INFO").upper().strip()
        if v == "WARNING":
            v = "WARN"
        try:
            return TelemetryLevel(v)
        except ValueError:
            return TelemetryLevel.INFO

    def rank(self) -> int:
        return _RANKS[self]

    def at_least(self, other: str | "TelemetryLevel") -> bool:
        return self.rank() >= TelemetryLevel.coerce(other).rank()


_RANKS = {
    TelemetryLevel.DEBUG: 10,
    TelemetryLevel.INFO: 20,
    TelemetryLevel.WARN: 30,
    TelemetryLevel.ERROR: 40,
}


@dataclass(frozen=True, slots=True)
class TelemetryEvent:
    """One payout event.

    `scope` identifies what the event is about (recipient, phase) and
    `payload` carries the numbers. Both must be JSON-serialisable.
    """

    ts_utc: datetime
    run_id: str
    name: str
    level: TelemetryLevel
    channel: str
    scope: Mapping[str, Any] | None
    payload: Mapping[str, Any]


class TelemetrySink(Protocol):
    """Adapter-side sink with its own channel/level filter."""

    def enabled(self, channel: str, level: TelemetryLevel, name: str | None = None) -> bool: ...

    def emit(self, event: TelemetryEvent) -> None: ...


class TelemetryPort(Protocol):
    """What the application talks to: a fan-out over sinks."""

    def emit(self, event: TelemetryEvent) -> None: ...

    def enabled(self, channel: str, level: str | TelemetryLevel) -> bool: ...

    def child(self, scope: Mapping[str, Any]) -> "TelemetryPort": ...
