from __future__ import annotations

import copy
from typing import List, Sequence, Tuple, TypeVar

from satsplit.domain.splits.numeric import check_u64, check_u64_all, fit_u64, gcd_of_nonzero, reduce_by
from satsplit.domain.splits.types import HasSplit

T = TypeVar("T", bound=HasSplit)


def use_remote_splits(
    local_splits: Sequence[int],
    remote_splits: Sequence[int],
    remote_percentage: int,
) -> Tuple[List[int], List[int]]:
    """
    Scale two split vectors so that `remote_splits` make up `remote_percentage`
    of the total and `local_splits` make up the rest. Ratios inside each
    vector are preserved.

        >>> use_remote_splits([50, 50], [1], 90)
        ([1, 1], [18])

    18/(18+1+1) = 90% for the remote recipient, 1/20 = 5% for each local one.
    """
    local_splits = check_u64_all(local_splits)
    remote_splits = check_u64_all(remote_splits)
    remote_percentage = min(check_u64(remote_percentage, "remote_percentage"), 100)
    local_percentage = 100 - remote_percentage

    total_local = sum(local_splits)
    total_remote = sum(remote_splits)

    if total_local == 0 or total_remote == 0:
        # one side is empty, there is nothing to weigh it against
        divisor = gcd_of_nonzero(local_splits + remote_splits)
        return reduce_by(local_splits, divisor), reduce_by(remote_splits, divisor)

    # cross-multiply instead of dividing to stay exact
    scaled_local = [s * local_percentage * total_remote for s in local_splits]
    scaled_remote = [s * remote_percentage * total_local for s in remote_splits]

    divisor = gcd_of_nonzero(scaled_local + scaled_remote)
    reduced = fit_u64(reduce_by(scaled_local + scaled_remote, divisor))
    return reduced[: len(scaled_local)], reduced[len(scaled_local):]


def use_remote_splits_generic(
    local_values: Sequence[T],
    remote_values: Sequence[T],
    remote_percentage: int,
) -> List[T]:
    """
    Same as `use_remote_splits` for `HasSplit` values. Returns copies of the
    local values followed by copies of the remote values, with new splits.
    """
    new_local, new_remote = use_remote_splits(
        [v.get_split() for v in local_values],
        [v.get_split() for v in remote_values],
        remote_percentage,
    )

    out: List[T] = []
    for value, split in zip(list(local_values) + list(remote_values), new_local + new_remote):
        value = copy.copy(value)
        value.set_split(split)
        out.append(value)
    return out
