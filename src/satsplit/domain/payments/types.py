from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from satsplit.domain.splits.types import PercentageBased, RecipientKind, ShareBased


@dataclass
class ValueRecipient:
    """
    One entry of a value block.

    `split` is a share count, unless `fee` is set, in which case it is a
    percentage of the whole payment taken off the top.
    `custom_key`/`custom_value` route the payment to a sub-account behind
    the same node (e.g. a wallet provider's custom record).
    """
    name: str
    address: str
    split: int
    fee: bool = False
    custom_key: Optional[str] = None
    custom_value: Optional[str] = None

    def get_split(self) -> int:
        return self.split

    def set_split(self, split: int) -> None:
        self.split = int(split)

    def to_recipient_kind(self) -> RecipientKind:
        if self.fee:
            return PercentageBased(percentage=self.split)
        return ShareBased(shares=self.split)


@dataclass
class PaymentRecipientInfo:
    """A recipient together with the number of sats it is going to receive."""
    recipient: ValueRecipient
    num_sats: int


@dataclass
class PayoutPlan:
    total_sats: int
    payments: List[PaymentRecipientInfo]

    @property
    def allocated_sats(self) -> int:
        return sum(p.num_sats for p in self.payments)
