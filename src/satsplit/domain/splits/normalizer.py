from __future__ import annotations

import copy
from typing import List, Sequence, TypeVar

from satsplit.domain.splits.numeric import check_u64, fit_u64, reduce_by_gcd
from satsplit.domain.splits.types import (
    FeeIs100ButNonFeeRecipientsExist,
    PercentageBased,
    RecipientKind,
    ShareBased,
    SplitRecipient,
    TotalFeeExceeds100,
)

T = TypeVar("T", bound=SplitRecipient)


def fee_recipients_to_splits(recipients: Sequence[RecipientKind]) -> List[int]:
    """
    Convert share- and percentage-based recipients into share-like splits.

    Percentage-based recipients end up with exactly their percentage of the
    whole. Share-based recipients split what is left and keep the same ratios
    between themselves.

        >>> fee_recipients_to_splits([ShareBased(50), ShareBased(50), PercentageBased(1)])
        [99, 99, 2]

    That is 99/200 = 49.5% for each share recipient and 2/200 = 1% for the fee.

    Raises `TotalFeeExceeds100` when percentages add up to more than 100, and
    `FeeIs100ButNonFeeRecipientsExist` when they add up to exactly 100 while
    share-based recipients are present.
    """
    total_percentage = 0
    total_shares = 0
    has_share_recipients = False
    for r in recipients:
        if isinstance(r, PercentageBased):
            total_percentage += check_u64(r.percentage, "percentage")
        elif isinstance(r, ShareBased):
            total_shares += check_u64(r.shares, "shares")
            has_share_recipients = True
        else:
            raise TypeError(f"not a recipient kind: {r!r}")

    if total_percentage > 100:
        raise TotalFeeExceeds100()
    if total_percentage == 100 and has_share_recipients:
        raise FeeIs100ButNonFeeRecipientsExist()

    remaining_percentage = 100 - total_percentage

    raw: List[int] = []
    for r in recipients:
        if isinstance(r, ShareBased):
            raw.append(r.shares * remaining_percentage)
        elif has_share_recipients:
            # common denominator: total_shares * 100
            raw.append(r.percentage * total_shares)
        else:
            raw.append(r.percentage)

    return fit_u64(reduce_by_gcd(raw))


def fee_recipients_to_splits_generic(recipients: Sequence[T]) -> List[T]:
    """
    Same as `fee_recipients_to_splits` for values that implement both
    `to_recipient_kind()` and `set_split()`.

    Returns shallow copies carrying the new splits; the inputs are untouched.
    """
    kinds = [r.to_recipient_kind() for r in recipients]
    splits = fee_recipients_to_splits(kinds)

    out: List[T] = []
    for recipient, split in zip(recipients, splits):
        recipient = copy.copy(recipient)
        recipient.set_split(split)
        out.append(recipient)
    return out
