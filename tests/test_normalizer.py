from __future__ import annotations

import unittest

import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from satsplit.domain.payments.types import ValueRecipient
from satsplit.domain.splits.normalizer import fee_recipients_to_splits, fee_recipients_to_splits_generic
from satsplit.domain.splits.numeric import U64_MAX
from satsplit.domain.splits.types import (
    FeeIs100ButNonFeeRecipientsExist,
    PercentageBased,
    RecipientsToSplitsError,
    ShareBased,
    SplitRecipient,
    SplitsErrorKind,
    TotalFeeExceeds100,
)


class TestFeeRecipientsToSplits(unittest.TestCase):
    def test_one_percent_fee(self) -> None:
        recipients = [ShareBased(50), ShareBased(50), PercentageBased(1)]
        # 99/200 = 49.5% each, 2/200 = 1%
        self.assertEqual([99, 99, 2], fee_recipients_to_splits(recipients))

    def test_shares_only_are_reduced(self) -> None:
        self.assertEqual([1, 2], fee_recipients_to_splits([ShareBased(3), ShareBased(6)]))

    def test_percentages_only_stand_alone(self) -> None:
        self.assertEqual([1, 2], fee_recipients_to_splits([PercentageBased(10), PercentageBased(20)]))
        self.assertEqual([1], fee_recipients_to_splits([PercentageBased(100)]))
        self.assertEqual([1, 1], fee_recipients_to_splits([PercentageBased(50), PercentageBased(50)]))

    def test_mixed_keeps_ratios_and_fee_total(self) -> None:
        recipients = [
            ShareBased(1),
            ShareBased(2),
            ShareBased(3),
            PercentageBased(5),
            PercentageBased(10),
        ]
        splits = fee_recipients_to_splits(recipients)
        self.assertEqual([17, 34, 51, 6, 12], splits)
        # fees get exactly 15% of the whole
        self.assertEqual(15 * sum(splits), 100 * (splits[3] + splits[4]))

    def test_zeros_stay_zero(self) -> None:
        recipients = [ShareBased(0), ShareBased(10), PercentageBased(0)]
        self.assertEqual([0, 1, 0], fee_recipients_to_splits(recipients))
        self.assertEqual([0, 0], fee_recipients_to_splits([ShareBased(0), ShareBased(0)]))

    def test_empty(self) -> None:
        self.assertEqual([], fee_recipients_to_splits([]))

    def test_total_fee_exceeds_100(self) -> None:
        with self.assertRaises(TotalFeeExceeds100) as ctx:
            fee_recipients_to_splits([PercentageBased(60), PercentageBased(50)])
        self.assertEqual(SplitsErrorKind.TOTAL_FEE_EXCEEDS_100, ctx.exception.kind)
        self.assertEqual("Total fees exceeds 100%", str(ctx.exception))

        with self.assertRaises(RecipientsToSplitsError):
            fee_recipients_to_splits([ShareBased(1), PercentageBased(101)])

    def test_fee_is_100_with_share_recipients(self) -> None:
        with self.assertRaises(FeeIs100ButNonFeeRecipientsExist) as ctx:
            fee_recipients_to_splits([PercentageBased(100), ShareBased(1)])
        self.assertEqual(
            SplitsErrorKind.FEE_IS_100_BUT_NON_FEE_RECIPIENTS_EXIST,
            ctx.exception.kind,
        )
        self.assertIsInstance(ctx.exception, ValueError)

    def test_renormalizing_is_stable(self) -> None:
        first = fee_recipients_to_splits([ShareBased(50), ShareBased(50), PercentageBased(1)])
        again = fee_recipients_to_splits([ShareBased(s) for s in first])
        self.assertEqual(first, again)

    def test_oversized_splits_are_rescaled(self) -> None:
        recipients = [ShareBased(U64_MAX), ShareBased(U64_MAX - 1), PercentageBased(1)]
        with self.assertLogs("satsplit.domain.splits.numeric", level="WARNING"):
            splits = fee_recipients_to_splits(recipients)

        self.assertEqual(U64_MAX, splits[0])
        self.assertTrue(all(0 <= s <= U64_MAX for s in splits))
        self.assertAlmostEqual(2 / 99, splits[2] / splits[0], places=9)

    def test_rejects_unknown_kinds(self) -> None:
        with self.assertRaises(TypeError):
            fee_recipients_to_splits([ShareBased(1), 5])  # type: ignore[list-item]


class TestFeeRecipientsToSplitsGeneric(unittest.TestCase):
    def test_value_recipient_is_a_split_recipient(self) -> None:
        self.assertIsInstance(ValueRecipient(name="a", address="a", split=1), SplitRecipient)
        self.assertEqual(PercentageBased(5), ValueRecipient(name="f", address="f", split=5, fee=True).to_recipient_kind())

    def test_writes_splits_back_on_copies(self) -> None:
        recipients = [
            ValueRecipient(name="a", address="addr-a", split=50),
            ValueRecipient(name="b", address="addr-b", split=50),
            ValueRecipient(name="fee", address="addr-fee", split=1, fee=True),
        ]
        out = fee_recipients_to_splits_generic(recipients)

        self.assertEqual([99, 99, 2], [r.split for r in out])
        self.assertEqual(["a", "b", "fee"], [r.name for r in out])
        self.assertTrue(out[2].fee)
        self.assertEqual([50, 50, 1], [r.split for r in recipients])

    def test_errors_propagate(self) -> None:
        recipients = [
            ValueRecipient(name="a", address="addr-a", split=1),
            ValueRecipient(name="fee", address="addr-fee", split=100, fee=True),
        ]
        with self.assertRaises(FeeIs100ButNonFeeRecipientsExist):
            fee_recipients_to_splits_generic(recipients)


if __name__ == "__main__":
    unittest.main()
