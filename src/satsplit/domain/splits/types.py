from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Union, runtime_checkable


@dataclass(frozen=True, slots=True)
class ShareBased:
    """
    Recipient entitled to a part of the payment relative to the other
    share-based recipients only.
    """
    shares: int


@dataclass(frozen=True, slots=True)
class PercentageBased:
    """
    Recipient entitled to a fixed percentage of the whole payment, taken off
    the top before share-based recipients are served (a "fee").
    """
    percentage: int


RecipientKind = Union[ShareBased, PercentageBased]


@runtime_checkable
class HasSplit(Protocol):
    """Anything that carries a split and can have it replaced."""

    def get_split(self) -> int: ...

    def set_split(self, split: int) -> None: ...


@runtime_checkable
class HasRecipientKind(Protocol):
    """Anything that knows whether it is share- or percentage-based."""

    def to_recipient_kind(self) -> RecipientKind: ...


class SplitsErrorKind(str, Enum):
    TOTAL_FEE_EXCEEDS_100 = "total_fee_exceeds_100"
    FEE_IS_100_BUT_NON_FEE_RECIPIENTS_EXIST = "fee_is_100_but_non_fee_recipients_exist"


class RecipientsToSplitsError(ValueError):
    """Recipients cannot be converted into share-like splits."""

    kind: SplitsErrorKind

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    default_message = "Recipients cannot be converted into splits"


class TotalFeeExceeds100(RecipientsToSplitsError):
    kind = SplitsErrorKind.TOTAL_FEE_EXCEEDS_100
    default_message = "Total fees exceeds 100%"


class FeeIs100ButNonFeeRecipientsExist(RecipientsToSplitsError):
    kind = SplitsErrorKind.FEE_IS_100_BUT_NON_FEE_RECIPIENTS_EXIST
    default_message = "Total fees equal 100%, but non-fee recipients exist"


class AllocationInvariantError(AssertionError):
    """Allocated sats do not add up to the budget. Always a bug."""


@runtime_checkable
class SplitRecipient(HasSplit, HasRecipientKind, Protocol):
    """A recipient that fee normalization can read from and write back to."""
