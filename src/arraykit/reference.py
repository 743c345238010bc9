"""Reference implementations of the array helpers.

Slow, obviously-correct versions used as oracles when checking
``arraykit.arrays``. They favour plain loops and list membership over
anything clever; inputs stay small during checking.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import TypeVar

from arraykit._decorators import spec

H = TypeVar("H", bound=Hashable)


@spec
def remove_duplicates(xs: Sequence[H]) -> list[H]:
    out: list[H] = []
    for x in xs:
        if x not in out:
            out.append(x)
    return out


@spec
def sort_numbers(xs: Sequence[float]) -> list[float]:
    # Selection sort: repeatedly take the smallest remaining value. NaN is
    # unordered, so NaNs are set aside and appended in their original order.
    nans = [x for x in xs if x != x]
    remaining = [x for x in xs if x == x]
    out: list[float] = []
    while remaining:
        smallest = remaining[0]
        for x in remaining[1:]:
            if x < smallest:
                smallest = x
        remaining.remove(smallest)
        out.append(smallest)
    return out + nans


@spec
def sum_positive_numbers(xs: Sequence[float]) -> float:
    total: float = 0
    for x in xs:
        if x > 0:
            total = total + x
    return total


@spec
def group_by_parity(xs: Sequence[int]) -> dict[str, list[int]]:
    return {
        "even": [x for x in xs if x % 2 == 0],
        "odd": [x for x in xs if x % 2 != 0],
    }


@spec
def find_common_elements(xs: Sequence[H], ys: Sequence[H]) -> list[H]:
    out: list[H] = []
    for x in xs:
        if x in ys and x not in out:
            out.append(x)
    return out
