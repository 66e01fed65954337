from __future__ import annotations

from typing import Iterable, List, Sequence

from satsplit.domain.splits.numeric import check_u64, check_u64_all
from satsplit.domain.splits.types import AllocationInvariantError, HasSplit


def compute_sat_recipients(splits: Sequence[int], total_sats: int) -> List[int]:
    """
    Distribute `total_sats` over recipients in proportion to their splits.

    The result always adds up to `total_sats`. Every recipient with a
    non-zero split gets at least one sat whenever there are enough sats, so
    that all of them receive the metadata attached to the payment. When
    there are not enough sats, recipients with higher splits win, and among
    equal splits the earlier one wins.

        >>> compute_sat_recipients([60, 40], 1000)
        [600, 400]
        >>> compute_sat_recipients([1, 99], 10)
        [1, 9]
        >>> compute_sat_recipients([1, 99], 1)
        [0, 1]
    """
    splits = check_u64_all(splits, "split")
    total_sats = check_u64(total_sats, "total_sats")

    num_recipients = len(splits)
    if num_recipients == 0:
        return []
    if total_sats == 0:
        return [0] * num_recipients

    total_split = sum(splits)

    # exact division, nothing to round
    if 0 not in splits and total_sats % total_split == 0:
        return [split * total_sats // total_split for split in splits]

    if total_split == 0:
        # all splits are zero: spread evenly, earlier recipients get the odd sats
        even, rest = divmod(total_sats, num_recipients)
        sats = [even + (1 if i < rest else 0) for i in range(num_recipients)]
    else:
        sats = [split * total_sats // total_split for split in splits]
        for i, split in enumerate(splits):
            if split > 0 and sats[i] == 0:
                sats[i] = 1

        balance = total_sats - sum(sats)
        if balance < 0:
            _take_excess(sats, splits, -balance)
        elif balance > 0:
            _give_remainder(sats, splits, balance)

    allocated = sum(sats)
    if allocated != total_sats:
        raise AllocationInvariantError(
            f"allocated {allocated} sats out of {total_sats} for splits {splits}"
        )
    return sats


def _take_excess(sats: List[int], splits: Sequence[int], excess: int) -> None:
    """
    Remove `excess` sats, smallest splits first (ties: later position first).

    Removal is round-robin, not weighted: each sweep takes one sat from every
    recipient still holding two or more, in that order, so a large split
    loses the same number of sats per sweep as a small one. Only when nobody
    holds two or more are recipients taken down from one sat to zero.

    Full sweeps are applied in bulk, so the cost is one sort.
    """
    order = sorted(range(len(splits)), key=lambda i: (splits[i], -i))

    # sats each recipient can give before dropping to one
    spare = {i: sats[i] - 1 for i in order if sats[i] >= 2}
    total_spare = sum(spare.values())

    if excess >= total_spare:
        for i in spare:
            sats[i] = 1
        excess -= total_spare
    else:
        # number of full sweeps that fit in `excess`
        sweeps = 0
        drained = 0
        remaining = len(spare)
        for value in sorted(spare.values()):
            if drained + remaining * value > excess:
                sweeps = (excess - drained) // remaining
                break
            drained += value
            remaining -= 1
        for i, value in spare.items():
            taken = min(value, sweeps)
            sats[i] -= taken
            excess -= taken
        # last partial sweep
        for i in order:
            if excess == 0:
                break
            if spare.get(i, 0) > sweeps:
                sats[i] -= 1
                excess -= 1
        return

    for i in order:
        if excess == 0:
            break
        if sats[i] == 1:
            sats[i] = 0
            excess -= 1
    if excess > 0:
        raise AllocationInvariantError(f"cannot remove {excess} more sats from {sats}")


def _give_remainder(sats: List[int], splits: Sequence[int], remainder: int) -> None:
    """Add `remainder` sats one at a time, largest splits first (ties: earlier position)."""
    order = sorted(range(len(splits)), key=lambda i: (-splits[i], i))
    while remainder > 0:
        for i in order:
            if remainder == 0:
                break
            sats[i] += 1
            remainder -= 1


def compute_sat_recipients_generic(values: Iterable[HasSplit], total_sats: int) -> List[int]:
    """Same as `compute_sat_recipients`, reading splits from any `HasSplit` values."""
    return compute_sat_recipients([v.get_split() for v in values], total_sats)
