"""Contract metadata attached to decorated functions.

Every decorator writes into a single dict stored on the innermost
(undecorated) function, so stacking ``@ensures`` wrappers never splits
the contract across several objects.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from arraykit._util import _safe_call

_BUNDLE_ATTR = "__arraykit_contract__"
_WRAPPED_ATTR = "__arraykit_wrapped__"


def _new_bundle() -> dict[str, Any]:
    return {"ensures": [], "against": None, "is_spec": False, "pure": None}


def _root_original(fn: Callable[..., Any]) -> Callable[..., Any]:
    cur = fn
    while (inner := getattr(cur, _WRAPPED_ATTR, None)) is not None:
        cur = inner
    return cur


def _has_bundle(fn: Callable[..., Any]) -> bool:
    return hasattr(_root_original(fn), _BUNDLE_ATTR)


def _get_bundle(fn: Callable[..., Any]) -> dict[str, Any]:
    root = _root_original(fn)
    bundle = getattr(root, _BUNDLE_ATTR, None)
    if bundle is None:
        bundle = _new_bundle()
        setattr(root, _BUNDLE_ATTR, bundle)
    return bundle


def _link_wrapper(wrapper: Callable[..., Any], wrapped: Callable[..., Any]) -> None:
    setattr(wrapper, _WRAPPED_ATTR, wrapped)
    setattr(wrapper, _BUNDLE_ATTR, _get_bundle(wrapped))


def _check_predicate(
    pred: Callable[..., bool],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    result: Any,
) -> tuple[bool, str]:
    ok, err = _safe_call(pred, *args, **kwargs, result=result)
    if ok:
        return True, ""
    return False, err or f"{getattr(pred, '__name__', 'predicate')} returned False"


def _check_ensures(
    fn: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    result: Any,
) -> tuple[bool, str]:
    for pred in _get_bundle(fn)["ensures"]:
        ok, err = _check_predicate(pred, args, kwargs, result)
        if not ok:
            return False, err
    return True, ""
