"""Decorators that attach contracts to a function.

``ensures`` wraps the function; the others only record metadata and hand
the function back untouched.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from hypothesis import HealthCheck

from arraykit._bundle import _check_predicate, _get_bundle, _link_wrapper, _root_original
from arraykit._util import _qualified_name

Decorator = Callable[[Callable[..., Any]], Callable[..., Any]]

DEFAULT_SUPPRESSED = (HealthCheck.too_slow, HealthCheck.filter_too_much)


def ensures(pred: Callable[..., bool]) -> Decorator:
    """Attach a postcondition, called as ``pred(*args, **kwargs, result=result)``.

    Each ``@ensures`` layer evaluates only its own predicate, so a stack of
    N postconditions costs N predicate calls. A failing predicate raises
    ``AssertionError`` naming the undecorated function.
    """
    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        _get_bundle(fn)["ensures"].append(pred)
        name = _qualified_name(_root_original(fn))

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = fn(*args, **kwargs)
            ok, err = _check_predicate(pred, args, kwargs, result)
            if not ok:
                raise AssertionError(f"Postcondition failed for {name}: {err}")
            return result

        _link_wrapper(wrapper, fn)
        return wrapper

    return deco


def spec(fn: Callable[..., Any]) -> Callable[..., Any]:
    _get_bundle(fn)["is_spec"] = True
    return fn


def pure(fn: Callable[..., Any] | None = None, *, eq: Callable[[Any, Any], bool] | None = None) -> Any:
    """Mark a function as pure: no IO, deterministic, arguments left intact.

    ``@pure`` or ``@pure(eq=...)``; ``eq`` compares the outputs of two calls.
    """
    def mark(f: Callable[..., Any]) -> Callable[..., Any]:
        _get_bundle(f)["pure"] = {"eq": eq}
        return f

    return mark if fn is None else mark(fn)


def against(
    spec_fn: Callable[..., Any],
    *,
    eq: Callable[[Any, Any], bool] | None = None,
    max_examples: int = 200,
    deadline_ms: int | None = None,
    suppress_health_checks: tuple[HealthCheck, ...] = DEFAULT_SUPPRESSED,
) -> Decorator:
    """Require agreement with a reference implementation on generated inputs."""
    settings = {
        "spec": spec_fn,
        "eq": eq,
        "max_examples": max_examples,
        "deadline_ms": deadline_ms,
        "suppress_health_checks": suppress_health_checks,
    }

    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        _get_bundle(fn)["against"] = dict(settings)
        return fn

    return deco
