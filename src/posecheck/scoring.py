"""
Scoring curves that turn measured angles into 0-100 scores.

Two curve shapes are supported by ``linear_score``:

- descending (``min > max``): values at or below ``max`` score 100, values at
  or above ``min`` score 0, linear in between.
- ascending (``min <= max``): anchored at zero, values at or above ``max``
  score 100. The ``min`` bound is not used in this branch.

Sub-scores that could not be computed are carried as ``NOT_COMPUTED`` and are
left out of ``average_score``.
"""

import math
from typing import Iterable, Optional, Sequence

# 계산 불가 sub-score 표시값
NOT_COMPUTED = -1

_RANKS = "ABCDEFGHI"


def round_half_up(value: float) -> int:
    """0.5는 항상 올림 (Python round()의 banker's rounding 대신)"""
    return int(math.floor(value + 0.5))


def linear_score(value: Optional[float], min_value: float, max_value: float) -> int:
    if value is None:
        return 0

    if min_value > max_value:
        if value <= max_value:
            return 100
        if value >= min_value:
            return 0
        return round_half_up((value - min_value) / (max_value - min_value) * 100)

    # ascending: min_value is intentionally ignored
    if value <= 0:
        return 0
    if value >= max_value:
        return 100
    return round_half_up(value * 100 / max_value)


def average_score(scores: Iterable[int]) -> int:
    valid = [s for s in scores if s >= 0]
    if not valid:
        return 0
    return round_half_up(sum(valid) / len(valid))


def sub_score(values: Sequence[Optional[float]], definitions: Sequence) -> int:
    """
    Score each (value, definition) pair and average them into one sub-score.

    Absent values inside a partially measured group score 0; a group in which
    nothing could be measured is NOT_COMPUTED.
    """
    if all(v is None for v in values):
        return NOT_COMPUTED
    return average_score(
        linear_score(v, d.min, d.max) for v, d in zip(values, definitions)
    )


def rank(score: float) -> str:
    """점수 -> A~J 등급 (10점 단위)"""
    for i, letter in enumerate(_RANKS):
        if score >= 90 - i * 10:
            return letter
    return "J"
