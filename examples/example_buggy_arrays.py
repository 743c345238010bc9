"""Array helpers with planted bugs, one kind of violation each.

Bug: `dedupe()` goes through a set, so first-occurrence order is lost.
Bug: `sort_in_place()` sorts its argument instead of a copy.
Bug: `positive_total()` adds the negatives it was meant to skip.
Bug: `split_parity()` prints while it works.
Bug: `shared()` lets repeats from xs leak into the result.
"""

from __future__ import annotations

from collections.abc import Sequence

from arraykit import ParityGroups, against, ensures, pure, reference


@against(reference.remove_duplicates, max_examples=300)
@ensures(lambda xs, result: len(result) == len(set(result)))
def dedupe(xs: list[int]) -> list[int]:
    return list(set(xs))


@pure
@against(reference.sort_numbers)
def sort_in_place(xs: list[int]) -> list[int]:
    xs.sort()
    return xs


@against(reference.sum_positive_numbers)
@ensures(lambda xs, result: result >= 0)
def positive_total(xs: Sequence[int]) -> int:
    return sum(x for x in xs if x != 0)


@pure
def split_parity(xs: Sequence[int]) -> ParityGroups:
    groups = ParityGroups()
    for x in xs:
        print(x)
        (groups.odd if x % 2 else groups.even).append(x)
    return groups


@against(reference.find_common_elements)
def shared(xs: list[int], ys: list[int]) -> list[int]:
    wanted = set(ys)
    return [x for x in xs if x in wanted]


@against(reference.remove_duplicates)
@ensures(lambda xs, result: len(result) <= len(xs))
def distinct(xs: list[int]) -> list[int]:
    """Correct."""
    return list(dict.fromkeys(xs))
