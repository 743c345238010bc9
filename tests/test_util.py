"""Tests for small shared helpers."""

from __future__ import annotations

from arraykit import ParityGroups, arrays
from arraykit._util import _jsonable, _qualified_name, _safe_call


class TestJsonable:
    def test_scalars_pass_through(self):
        assert _jsonable([1, "a", None, True, 1.5]) == [1, "a", None, True, 1.5]

    def test_non_finite_floats_become_strings(self):
        assert _jsonable([float("inf"), float("nan")]) == ["inf", "nan"]

    def test_sets_are_ordered_lists(self):
        assert _jsonable({3, 1, 2}) == [1, 2, 3]

    def test_dataclass(self):
        assert _jsonable(ParityGroups(even=[2], odd=[1, 3])) == {"even": [2], "odd": [1, 3]}

    def test_nested_dict_keys_are_strings(self):
        assert _jsonable({1: (2, 3)}) == {"1": [2, 3]}


class TestSafeCall:
    def test_truthy(self):
        assert _safe_call(lambda x: x > 0, 1) == (True, None)

    def test_exception_is_reported(self):
        ok, err = _safe_call(lambda xs: xs[0], [])
        assert not ok
        assert err.startswith("IndexError")


def test_qualified_name():
    assert _qualified_name(arrays.ParityGroups.as_dict) == "arraykit.arrays.ParityGroups.as_dict"
