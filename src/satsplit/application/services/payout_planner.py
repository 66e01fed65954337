from __future__ import annotations

import copy
from typing import List, Sequence

from satsplit.application.telemetry.run_context import RunTelemetry, new_run_id
from satsplit.domain.payments.types import PaymentRecipientInfo, PayoutPlan, ValueRecipient
from satsplit.domain.splits.allocator import compute_sat_recipients_generic
from satsplit.domain.splits.normalizer import fee_recipients_to_splits_generic
from satsplit.domain.splits.remote import use_remote_splits_generic
from satsplit.ports.telemetry import TelemetryLevel
from satsplit.shared.decorators import logged


def mix_remote_recipients(
    local: Sequence[ValueRecipient],
    remote: Sequence[ValueRecipient],
    remote_percentage: int,
) -> List[ValueRecipient]:
    """
    Local recipients followed by remote ones, with share splits rescaled so
    that remote shares get `remote_percentage` of the share pool.

    Fee recipients keep their percentage untouched: they are taken off the
    top of the whole payment later, when fees are normalized.
    """
    combined = list(local) + list(remote)
    share_idx = [i for i, r in enumerate(combined) if not r.fee]
    local_shares = [combined[i] for i in share_idx if i < len(local)]
    remote_shares = [combined[i] for i in share_idx if i >= len(local)]

    mixed = use_remote_splits_generic(local_shares, remote_shares, remote_percentage)

    out = [copy.copy(r) for r in combined]
    for i, r in zip(share_idx, mixed):
        out[i] = r
    return out


@logged
def plan_payout(
    local: Sequence[ValueRecipient],
    total_sats: int,
    *,
    remote: Sequence[ValueRecipient] | None = None,
    remote_percentage: int = 0,
    telemetry: RunTelemetry | None = None,
) -> PayoutPlan:
    """
    Work out how many sats each recipient gets.

    Remote mixing (when `remote` is given), then fee normalization, then
    sat allocation. The plan lists local recipients first, then remote ones,
    each in the order given. Split errors propagate to the caller.
    """
    run = telemetry or RunTelemetry(port=None, run_id=new_run_id())
    recipients_count = len(local) + len(remote or [])
    run.emit(
        name="payout.plan.started",
        channel="audit",
        payload={
            "total_sats": total_sats,
            "recipients_count": recipients_count,
            "remote_percentage": remote_percentage if remote else 0,
        },
    )

    try:
        if remote:
            recipients = mix_remote_recipients(local, remote, remote_percentage)
            run.emit(
                name="payout.remote.mixed",
                channel="ops",
                level=TelemetryLevel.DEBUG,
                scope={"phase": "remote"},
                payload={"splits": [r.split for r in recipients]},
            )
        else:
            recipients = [copy.copy(r) for r in local]

        normalized = fee_recipients_to_splits_generic(recipients)
        run.emit(
            name="payout.splits.normalized",
            channel="ops",
            scope={"phase": "normalize"},
            payload={"splits": [r.split for r in normalized]},
        )

        sats = compute_sat_recipients_generic(normalized, total_sats)
    except Exception as e:
        run.emit(
            name="payout.plan.failed",
            channel="ops",
            level=TelemetryLevel.ERROR,
            payload={"error": str(e), "error_type": type(e).__name__},
        )
        raise

    plan = PayoutPlan(
        total_sats=total_sats,
        payments=[PaymentRecipientInfo(recipient=r, num_sats=n) for r, n in zip(normalized, sats)],
    )

    if run.enabled("audit", TelemetryLevel.DEBUG):
        for p in plan.payments:
            run.emit(
                name="payout.recipient.allocated",
                channel="audit",
                level=TelemetryLevel.DEBUG,
                scope={"recipient": p.recipient.name},
                payload={"num_sats": p.num_sats, "split": p.recipient.split},
            )

    run.emit(
        name="payout.plan.finished",
        channel="audit",
        payload={"total_sats": total_sats, "allocated_sats": plan.allocated_sats},
    )
    return plan
