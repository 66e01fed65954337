from __future__ import annotations

from typing import Iterable, List

from satsplit.domain.payments.types import PaymentRecipientInfo


def clip_recipients_at_amount(
    total_sats: int,
    recipients: Iterable[PaymentRecipientInfo],
) -> List[PaymentRecipientInfo]:
    """
    Keep recipients, in order, while their running total stays within
    `total_sats`. Stops at the first one that would exceed it.

    Useful to double-check that forwarded sats never exceed received sats.
    """
    sent = 0
    clipped: List[PaymentRecipientInfo] = []
    for r in recipients:
        sent += r.num_sats
        if sent > total_sats:
            break
        clipped.append(r)
    return clipped
