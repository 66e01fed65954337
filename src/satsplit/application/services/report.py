from __future__ import annotations

import pandas as pd

from satsplit.domain.payments.types import PayoutPlan

COLUMNS = ["name", "address", "split", "fee", "num_sats"]


def plan_to_frame(plan: PayoutPlan) -> pd.DataFrame:
    """One row per payment, plus each recipient's share of the total in percent."""
    rows = [
        {
            "name": p.recipient.name,
            "address": p.recipient.address,
            "split": p.recipient.split,
            "fee": p.recipient.fee,
            "num_sats": p.num_sats,
        }
        for p in plan.payments
    ]
    df = pd.DataFrame(rows, columns=COLUMNS)
    if plan.total_sats > 0:
        df["share_pct"] = [round(100.0 * n / plan.total_sats, 4) for n in df["num_sats"]]
    else:
        df["share_pct"] = 0.0
    return df


def render_plan(plan: PayoutPlan) -> str:
    df = plan_to_frame(plan)
    table = df.to_string(index=False) if not df.empty else "(no recipients)"
    return f"{table}\n\ntotal: {plan.allocated_sats}/{plan.total_sats} sats"
