from __future__ import annotations

import logging
import sys
from contextlib import nullcontext

from opentelemetry import trace as otel_trace
from pydantic import ValidationError

from satsplit.shared.config import load_config, AppConfig
from satsplit.adapters.telemetry.console import ConsoleTelemetrySink
from satsplit.adapters.telemetry.otel_span import OtelSpanEventSink
from satsplit.application.telemetry.hub import TelemetryHub
from satsplit.application.telemetry.run_context import RunTelemetry, new_run_id
from satsplit.application.payout.config import build_payout_request
from satsplit.application.services.payout_planner import plan_payout
from satsplit.application.services.report import render_plan
from satsplit.domain.payments.types import PayoutPlan
from satsplit.domain.splits.types import RecipientsToSplitsError
from satsplit.ports.telemetry import TelemetryLevel


def run_app(config_path: str) -> PayoutPlan:
    try:
        cfg = load_config(config_path)
    except (FileNotFoundError, ValidationError) as e:
        raise SystemExit(f"Invalid config {config_path}: {e}")

    logging.basicConfig(
        level=getattr(logging, cfg.logging.level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        request = build_payout_request(cfg)
    except RuntimeError as e:
        raise SystemExit(str(e))

    hub = _build_telemetry(cfg)
    run_id = new_run_id()
    telemetry = RunTelemetry(port=hub, run_id=run_id, base_scope={"config": config_path})

    span = (
        otel_trace.get_tracer("satsplit").start_as_current_span(
            "satsplit.payout", attributes={"satsplit.run_id": run_id}
        )
        if cfg.telemetry.otel_enabled
        else nullcontext()
    )
    try:
        with span:
            plan = plan_payout(
                request.recipients,
                request.total_sats,
                remote=request.remote_recipients,
                remote_percentage=request.remote_percentage,
                telemetry=telemetry,
            )
    except RecipientsToSplitsError as e:
        raise SystemExit(f"Cannot split payment: {e}")
    finally:
        hub.close()

    print(render_plan(plan))
    return plan


def _build_telemetry(cfg: AppConfig) -> TelemetryHub:
    sinks = []
    telemetry_cfg = cfg.telemetry

    if bool(telemetry_cfg.console_enabled):
        sinks.append(
            ConsoleTelemetrySink(
                enabled_flag=True,
                channels=set(telemetry_cfg.console_channels or ["ops"]),
                min_level=TelemetryLevel.coerce(telemetry_cfg.console_min_level),
                stream=sys.stderr,
            )
        )

    if bool(telemetry_cfg.otel_enabled):
        sinks.append(
            OtelSpanEventSink(
                enabled_flag=True,
                channels=set(telemetry_cfg.otel_channels or ["audit", "ops"]),
                min_level=TelemetryLevel.coerce(telemetry_cfg.otel_min_level),
            )
        )

    return TelemetryHub(sinks=sinks)


if __name__ == "__main__":
    if len(sys.argv) != 2:
        raise SystemExit("usage: python -m satsplit.bootstrap.main <config.yaml>")
    run_app(sys.argv[1])
