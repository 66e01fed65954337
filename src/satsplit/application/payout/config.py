from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from satsplit.domain.payments.types import ValueRecipient
from satsplit.shared.config import AppConfig, RecipientCfg


@dataclass(frozen=True, slots=True)
class PayoutRequest:
    """Normalized payout input, decoupled from YAML and pydantic."""

    total_sats: int
    recipients: List[ValueRecipient]
    remote_recipients: List[ValueRecipient] | None = None
    remote_percentage: int = 0


def _to_recipients(items: Iterable[RecipientCfg]) -> List[ValueRecipient]:
    return [
        ValueRecipient(
            name=str(r.name or r.address),
            address=str(r.address),
            split=int(r.split),
            fee=bool(r.fee),
            custom_key=r.custom_key,
            custom_value=r.custom_value,
        )
        for r in items
    ]


def build_payout_request(cfg: AppConfig) -> PayoutRequest:
    """Build a PayoutRequest from the loaded AppConfig."""
    payout = cfg.payout
    if payout.total_sats is None:
        raise RuntimeError(
            "No payout amount configured. Set payout.total_sats in your YAML or SATSPLIT_TOTAL_SATS."
        )
    if not payout.recipients:
        raise RuntimeError("No recipients configured. Please set payout.recipients in your YAML.")

    remote = payout.remote
    return PayoutRequest(
        total_sats=int(payout.total_sats),
        recipients=_to_recipients(payout.recipients),
        remote_recipients=_to_recipients(remote.recipients) if remote and remote.recipients else None,
        remote_percentage=int(remote.percentage) if remote else 0,
    )
