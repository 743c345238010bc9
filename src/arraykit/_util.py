from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any

ContractPredicate = Callable[..., bool]


def _qualified_name(fn: Callable[..., Any]) -> str:
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)
    return f"{fn.__module__}.{name}"


def _jsonable(obj: Any) -> Any:
    """Convert arguments and results into plain lists, dicts and scalars for reporting."""
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, float):
        # nan/inf have no JSON literal
        return obj if obj == obj and obj not in (float("inf"), float("-inf")) else repr(obj)
    if isinstance(obj, (list, tuple)):
        return [_jsonable(x) for x in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted((_jsonable(x) for x in obj), key=repr)
    if isinstance(obj, dict):
        return {str(k): _jsonable(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    return repr(obj)


def _safe_call(pred: ContractPredicate, *args: Any, **kwargs: Any) -> tuple[bool, str | None]:
    try:
        return bool(pred(*args, **kwargs)), None
    except Exception as e:
        return False, f"{type(e).__name__}: {e}"
