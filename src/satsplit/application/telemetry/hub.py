from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from satsplit.application.telemetry.event_factory import with_scope
from satsplit.ports.telemetry import TelemetryEvent, TelemetryLevel, TelemetryPort, TelemetrySink

_log = logging.getLogger(__name__)


@dataclass(slots=True)
class TelemetryHub(TelemetryPort):
    """Fan-out hub.

    Forwards events to every sink that accepts them. A failing sink is
    logged and skipped; telemetry never breaks a payout.
    """

    sinks: list[TelemetrySink]
    base_scope: Mapping[str, Any] | None = None

    def emit(self, event: TelemetryEvent) -> None:
        merged = with_scope(event, self.base_scope)
        for s in list(self.sinks):
            try:
                if s.enabled(merged.channel, merged.level, merged.name):
                    s.emit(merged)
            except Exception:
                _log.debug("telemetry sink %r failed on %s", s, merged.name, exc_info=True)

    def enabled(self, channel: str, level: str | TelemetryLevel) -> bool:
        lv = TelemetryLevel.coerce(level)
        for s in list(self.sinks):
            try:
                if s.enabled(str(channel), lv, None):
                    return True
            except Exception:
                continue
        return False

    def child(self, scope: Mapping[str, Any]) -> TelemetryPort:
        merged = dict(self.base_scope or {})
        merged.update(dict(scope or {}))
        return TelemetryHub(sinks=self.sinks, base_scope=merged)

    def close(self) -> None:
        for s in list(self.sinks):
            close = getattr(s, "close", None)
            if callable(close):
                try:
                    close()
                except Exception:
                    _log.debug("telemetry sink %r failed to close", s, exc_info=True)
