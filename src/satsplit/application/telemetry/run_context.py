from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Mapping

from satsplit.application.telemetry.event_factory import make_event
from satsplit.ports.telemetry import TelemetryLevel, TelemetryPort

_log = logging.getLogger(__name__)


def new_run_id() -> str:
    return uuid.uuid4().hex


@dataclass(slots=True)
class RunTelemetry:
    """Emits events for a single payout run_id."""

    port: TelemetryPort | None
    run_id: str
    base_scope: Mapping[str, Any] | None = None

    def enabled(self, channel: str, level: str | TelemetryLevel) -> bool:
        if self.port is None:
            return False
        return self.port.enabled(channel, level)

    def emit(
        self,
        *,
        name: str,
        channel: str,
        level: str | TelemetryLevel = TelemetryLevel.INFO,
        scope: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> None:
        if self.port is None:
            return

        merged_scope = dict(self.base_scope or {})
        if scope:
            merged_scope.update(dict(scope))

        try:
            self.port.emit(
                make_event(
                    run_id=self.run_id,
                    name=name,
                    level=level,
                    channel=channel,
                    scope=merged_scope,
                    payload=payload,
                )
            )
        except Exception:
            _log.debug("dropping telemetry event %s", name, exc_info=True)

    def child(self, scope: Mapping[str, Any]) -> "RunTelemetry":
        merged = dict(self.base_scope or {})
        merged.update(dict(scope or {}))
        return RunTelemetry(port=self.port, run_id=self.run_id, base_scope=merged)
