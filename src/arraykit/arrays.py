"""Array helpers: deduplication, numeric sort, positive sum, parity
grouping and intersection.

Every helper is pure and returns a new object; inputs are never modified.
Each one carries its properties as contracts (see ``arraykit.check_module``)
and is checked against the matching function in ``arraykit.reference``.
"""

from __future__ import annotations

import dataclasses
import math
from collections import Counter
from collections.abc import Hashable, Sequence
from typing import TypeVar

from arraykit import reference
from arraykit._decorators import against, ensures, pure

H = TypeVar("H", bound=Hashable)


@dataclasses.dataclass
class ParityGroups:
    even: list[int] = dataclasses.field(default_factory=list)
    odd: list[int] = dataclasses.field(default_factory=list)

    def as_dict(self) -> dict[str, list[int]]:
        return {"even": list(self.even), "odd": list(self.odd)}


# ---------------------------------------------------------------------------
# contract predicates
# ---------------------------------------------------------------------------

def no_repeats(xs: Sequence[Hashable]) -> bool:
    return len(set(xs)) == len(xs)


def is_nondecreasing(xs: Sequence[float]) -> bool:
    """True when xs ascends, allowing a run of NaNs at the end."""
    n = len(xs)
    while n and xs[n - 1] != xs[n - 1]:
        n -= 1
    return all(xs[i] <= xs[i + 1] for i in range(n - 1))


def _nan_last(x: float) -> tuple[bool, float]:
    return (x != x, x)


def is_permutation(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    return len(a) == len(b) and Counter(a) == Counter(b)


def _close(got: float, want: float) -> bool:
    return got == want or math.isclose(got, want, rel_tol=1e-9, abs_tol=1e-9)


def _same_groups(got: ParityGroups, want: dict[str, list[int]]) -> bool:
    return got.as_dict() == want


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------

@pure
@against(reference.remove_duplicates, max_examples=300)
@ensures(lambda xs, result: no_repeats(result))
@ensures(lambda xs, result: set(result) == set(xs))
@ensures(lambda xs, result: len(result) <= len(xs))
def remove_duplicates(xs: Sequence[H]) -> list[H]:
    """Distinct values of ``xs`` in order of first occurrence."""
    return list(dict.fromkeys(xs))


@pure
@against(reference.sort_numbers, max_examples=300)
@ensures(lambda xs, result: is_nondecreasing(result))
@ensures(lambda xs, result: is_permutation(xs, result))
def sort_numbers(xs: Sequence[float]) -> list[float]:
    """Ascending copy of ``xs``; NaNs keep their relative order at the end."""
    return sorted(xs, key=_nan_last)


@pure
@against(reference.sum_positive_numbers, eq=_close, max_examples=300)
@ensures(lambda xs, result: result >= 0)
def sum_positive_numbers(xs: Sequence[float]) -> float:
    """Sum of the elements strictly greater than zero; 0 when there are none."""
    return sum(x for x in xs if x > 0)


@pure
@against(reference.group_by_parity, eq=_same_groups, max_examples=300)
@ensures(lambda xs, result: all(x % 2 == 0 for x in result.even))
@ensures(lambda xs, result: all(x % 2 != 0 for x in result.odd))
@ensures(lambda xs, result: Counter(result.even) + Counter(result.odd) == Counter(xs))
def group_by_parity(xs: Sequence[int]) -> ParityGroups:
    """Split ``xs`` into even and odd values, keeping their relative order."""
    groups = ParityGroups()
    for x in xs:
        (groups.odd if x % 2 else groups.even).append(x)
    return groups


@pure
@against(reference.find_common_elements, max_examples=300)
@ensures(lambda xs, ys, result: no_repeats(result))
@ensures(lambda xs, ys, result: set(result) <= set(xs) & set(ys))
def find_common_elements(xs: Sequence[H], ys: Sequence[H]) -> list[H]:
    """Values present in both sequences, once each, in first-occurrence order of ``xs``.

    Membership counts, multiplicity does not: ``[1, 1]`` and ``[1]`` share ``[1]``.
    """
    wanted = set(ys)
    common: list[H] = []
    for x in xs:
        if x in wanted:
            common.append(x)
            # drop it so later repeats in xs are skipped
            wanted.discard(x)
    return common
