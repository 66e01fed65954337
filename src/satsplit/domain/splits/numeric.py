from __future__ import annotations

import logging
import math
from functools import reduce
from typing import Iterable, List, Sequence

_log = logging.getLogger(__name__)

# Splits and sat amounts are unsigned 64-bit values on the wire.
U64_MAX = 2**64 - 1


def gcd(a: int, b: int) -> int:
    return math.gcd(a, b)


def gcd_of_nonzero(values: Iterable[int]) -> int:
    """GCD of the non-zero values, or 0 when there are none."""
    return reduce(gcd, (v for v in values if v != 0), 0)


def reduce_by(values: Sequence[int], divisor: int) -> List[int]:
    if divisor <= 1:
        return list(values)
    return [0 if v == 0 else v // divisor for v in values]


def reduce_by_gcd(values: Sequence[int]) -> List[int]:
    """Express the same ratios in the smallest integers. Zeros stay zero."""
    return reduce_by(values, gcd_of_nonzero(values))


def fit_u64(values: Sequence[int]) -> List[int]:
    """
    Scale values down so the largest one is 2**64-1, if any does not fit.

    Lossy: goes through floats and rounds to nearest. Only pathological
    inputs (splits close to 2**64) ever need this.
    """
    max_value = max(values, default=0)
    if max_value <= U64_MAX:
        return list(values)
    scale = float(U64_MAX) / float(max_value)
    _log.warning(
        "splits do not fit 64 bits after reduction (max=%d), rescaling by %.3e",
        max_value,
        scale,
    )
    # float(U64_MAX) rounds up to 2**64
    return [min(U64_MAX, round(v * scale)) for v in values]


def check_u64(value: int, what: str = "value") -> int:
    # bool is an int subclass but never a meaningful split
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an int, got {type(value).__name__}")
    if value < 0 or value > U64_MAX:
        raise ValueError(f"{what} out of range [0, 2**64-1]: {value}")
    return value


def check_u64_all(values: Iterable[int], what: str = "split") -> List[int]:
    return [check_u64(v, what) for v in values]
