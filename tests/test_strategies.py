"""Tests for deriving Hypothesis strategies from type hints."""

from __future__ import annotations

import dataclasses
from collections.abc import Hashable, Sequence
from typing import Optional, TypeVar

import pytest
from hypothesis import find, given, settings
from hypothesis import strategies as st

from arraykit import ParityGroups, register_strategy, register_strategy_factory
from arraykit._strategies import (
    _STRATEGY_FACTORY_OVERRIDES,
    _STRATEGY_OVERRIDES,
    strategy_for_function,
    strategy_for_type,
)

H = TypeVar("H", bound=Hashable)
Num = TypeVar("Num", int, float)


@dataclasses.dataclass
class Point:
    x: int
    y: int


class Marker:
    pass


@pytest.fixture(autouse=True)
def _clean_overrides():
    yield
    _STRATEGY_OVERRIDES.pop(Marker, None)
    _STRATEGY_FACTORY_OVERRIDES.pop(Marker, None)


class TestStrategyForType:
    @settings(max_examples=30)
    @given(strategy_for_type(Sequence[int], max_list_size=4))
    def test_sequence_of_int(self, xs):
        assert isinstance(xs, list)
        assert len(xs) <= 4
        assert all(isinstance(x, int) for x in xs)

    @settings(max_examples=30)
    @given(strategy_for_type(Sequence[float]))
    def test_floats_are_finite(self, xs):
        assert all(x == x and abs(x) != float("inf") for x in xs)

    @settings(max_examples=30)
    @given(strategy_for_type(list[H]))
    def test_unconstrained_typevar_draws_ints(self, xs):
        assert all(type(x) is int for x in xs)

    @settings(max_examples=30)
    @given(strategy_for_type(Num))
    def test_constrained_typevar(self, x):
        assert isinstance(x, (int, float))

    @settings(max_examples=30)
    @given(strategy_for_type(tuple[int, ...], max_list_size=3))
    def test_variadic_tuple(self, t):
        assert isinstance(t, tuple)
        assert len(t) <= 3

    @settings(max_examples=30)
    @given(strategy_for_type(Optional[str]))
    def test_optional(self, v):
        assert v is None or isinstance(v, str)

    @settings(max_examples=30)
    @given(strategy_for_type(dict[str, set[int]]))
    def test_nested_containers(self, d):
        assert all(isinstance(k, str) and isinstance(v, set) for k, v in d.items())

    @settings(max_examples=30)
    @given(strategy_for_type(Point))
    def test_dataclass(self, p):
        assert isinstance(p.x, int) and isinstance(p.y, int)

    @settings(max_examples=30)
    @given(strategy_for_type(ParityGroups))
    def test_parity_groups(self, g):
        assert isinstance(g.even, list) and isinstance(g.odd, list)

    def test_unknown_type_is_none(self):
        assert find(strategy_for_type(Marker), lambda _v: True) is None

    def test_depth_limit(self):
        assert find(strategy_for_type(int, depth=6), lambda _v: True) is None


class TestOverrides:
    def test_register_strategy(self):
        register_strategy(Marker, st.just("marked"))
        assert find(strategy_for_type(Marker), lambda _v: True) == "marked"

    def test_register_strategy_factory_receives_sizes(self):
        seen = {}

        def factory(*, max_list_size, depth):
            seen.update(max_list_size=max_list_size, depth=depth)
            return st.just(max_list_size)

        register_strategy_factory(Marker, factory)
        assert find(strategy_for_type(Marker, max_list_size=7), lambda _v: True) == 7
        assert seen == {"max_list_size": 7, "depth": 0}


class TestStrategyForFunction:
    def test_one_key_per_parameter(self):
        def f(xs: Sequence[int], ys: Sequence[int]) -> list[int]:
            return []
        kwargs = find(strategy_for_function(f), lambda _kw: True)
        assert kwargs == {"xs": [], "ys": []}

    def test_skips_var_args(self):
        def f(xs: list[int], *rest: int, **extra: int) -> None:
            return None
        kwargs = find(strategy_for_function(f), lambda _kw: True)
        assert set(kwargs) == {"xs"}

    def test_default_is_a_candidate(self):
        def f(n: int = 42) -> int:
            return n
        kwargs = find(strategy_for_function(f), lambda kw: kw["n"] == 42)
        assert kwargs == {"n": 42}
