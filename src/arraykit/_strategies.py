from __future__ import annotations

import collections.abc
import dataclasses
import inspect
import types
from collections.abc import Callable
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from hypothesis import strategies as st

StrategyFactory = Callable[..., st.SearchStrategy[Any]]

_MAX_DEPTH = 5

_STRATEGY_OVERRIDES: dict[Any, st.SearchStrategy[Any]] = {}
_STRATEGY_FACTORY_OVERRIDES: dict[Any, StrategyFactory] = {}

_SCALARS: dict[Any, Callable[[], st.SearchStrategy[Any]]] = {
    int: st.integers,
    bool: st.booleans,
    str: st.text,
    bytes: st.binary,
    float: lambda: st.floats(allow_nan=False, allow_infinity=False),
}


def register_strategy(tp: Any, strat: st.SearchStrategy[Any]) -> None:
    _STRATEGY_OVERRIDES[tp] = strat


def register_strategy_factory(tp: Any, factory: StrategyFactory) -> None:
    """Register ``factory(max_list_size=..., depth=...)`` for ``tp``."""
    _STRATEGY_FACTORY_OVERRIDES[tp] = factory


def _override_for(tp: Any, *, max_list_size: int, depth: int) -> st.SearchStrategy[Any] | None:
    for key in (tp, get_origin(tp)):
        if key is None:
            continue
        try:
            if key in _STRATEGY_OVERRIDES:
                return _STRATEGY_OVERRIDES[key]
            if key in _STRATEGY_FACTORY_OVERRIDES:
                return _STRATEGY_FACTORY_OVERRIDES[key](max_list_size=max_list_size, depth=depth)
        except TypeError:
            # unhashable annotation
            continue
    return None


def strategy_for_type(tp: Any, *, max_list_size: int = 20, depth: int = 0) -> st.SearchStrategy[Any]:
    if depth > _MAX_DEPTH:
        return st.none()

    override = _override_for(tp, max_list_size=max_list_size, depth=depth)
    if override is not None:
        return override

    def sub(t: Any) -> st.SearchStrategy[Any]:
        return strategy_for_type(t, max_list_size=max_list_size, depth=depth + 1)

    if tp is Any:
        return st.one_of(st.none(), st.booleans(), st.integers(), st.text())
    if tp in _SCALARS:
        return _SCALARS[tp]()

    if isinstance(tp, TypeVar):
        # Unconstrained type variables draw integers.
        if tp.__constraints__:
            return st.one_of(*[sub(c) for c in tp.__constraints__])
        return st.integers()

    origin = get_origin(tp)
    args = get_args(tp)

    if origin in (Union, types.UnionType):
        return st.one_of(*[st.none() if a is type(None) else sub(a) for a in args])

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return st.lists(sub(args[0]), max_size=max_list_size).map(tuple)
        return st.tuples(*[sub(a) for a in args])

    if origin in (list, collections.abc.Sequence, collections.abc.Iterable):
        (elem,) = args or (Any,)
        return st.lists(sub(elem), max_size=max_list_size)

    if origin is frozenset:
        (elem,) = args or (Any,)
        return st.frozensets(sub(elem), max_size=max_list_size)

    if origin in (set, collections.abc.Set):
        (elem,) = args or (Any,)
        return st.sets(sub(elem), max_size=max_list_size)

    if origin in (dict, collections.abc.Mapping):
        key, value = args or (Any, Any)
        return st.dictionaries(sub(key), sub(value), max_size=max_list_size)

    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        hints = get_type_hints(tp)
        return st.builds(tp, **{f.name: sub(hints.get(f.name, Any)) for f in dataclasses.fields(tp)})

    return st.just(None)


def strategy_for_function(fn: Callable[..., Any], *, max_list_size: int = 20) -> st.SearchStrategy[dict[str, Any]]:
    """Strategy producing keyword arguments for every named parameter of ``fn``."""
    hints = get_type_hints(fn)
    fields: dict[str, st.SearchStrategy[Any]] = {}
    for name, param in inspect.signature(fn).parameters.items():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        strat = strategy_for_type(hints.get(name, Any), max_list_size=max_list_size)
        if param.default is not inspect.Parameter.empty:
            strat = st.one_of(st.just(param.default), strat)
        fields[name] = strat
    return st.fixed_dictionaries(fields)
