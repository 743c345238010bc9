from __future__ import annotations

import dataclasses
import importlib
import time
from collections.abc import Callable
from types import ModuleType
from typing import Any

from hypothesis import find, given, settings
from hypothesis.errors import FailedHealthCheck, NoSuchExample

from arraykit._bundle import _check_ensures, _get_bundle, _has_bundle, _root_original
from arraykit._purity import dynamic_purity_check, static_purity_check
from arraykit._strategies import strategy_for_function
from arraykit._util import _jsonable, _qualified_name

_PURITY_EXAMPLES = 50


@dataclasses.dataclass
class ObligationResult:
    function: str
    obligation: str
    status: str  # "pass" | "fail" | "error" | "skip"
    details: dict[str, Any]
    duration_s: float = 0.0

    def to_json(self) -> dict[str, Any]:
        return {
            "function": self.function,
            "obligation": self.obligation,
            "status": self.status,
            "details": self.details,
            "duration_s": round(self.duration_s, 3),
        }


def _collect_functions(module: ModuleType) -> list[Callable[..., Any]]:
    fns: list[Callable[..., Any]] = []
    for obj in vars(module).values():
        if callable(obj) and not isinstance(obj, type) and _has_bundle(obj):
            if not _get_bundle(obj)["is_spec"]:
                fns.append(obj)
    return fns


def _smallest_input(root: Callable[..., Any], max_list_size: int) -> dict[str, Any]:
    return find(strategy_for_function(root, max_list_size=max_list_size), lambda _kwargs: True)


def _nontrivial_input(root: Callable[..., Any], max_list_size: int) -> dict[str, Any]:
    # Mutation is invisible on empty sequences, so prefer an input with some content.
    strat = strategy_for_function(root, max_list_size=max_list_size)
    try:
        return find(strat, lambda kwargs: any(kwargs.values()))
    except NoSuchExample:
        return _smallest_input(root, max_list_size)


def _describe_mismatch(
    root: Callable[..., Any],
    spec_fn: Callable[..., Any],
    eq: Callable[[Any, Any], bool],
    kwargs: dict[str, Any],
) -> dict[str, Any] | None:
    """Return a counterexample record if ``kwargs`` breaks the contract, else None."""
    impl_r = root(**kwargs)
    ok_post, post_err = _check_ensures(root, (), kwargs, impl_r)
    if not ok_post:
        return {
            "kwargs": _jsonable(kwargs),
            "impl_result": _jsonable(impl_r),
            "spec_result": None,
            "note": f"ensures failed: {post_err}",
        }
    spec_r = spec_fn(**kwargs)
    if not eq(impl_r, spec_r):
        return {
            "kwargs": _jsonable(kwargs),
            "impl_result": _jsonable(impl_r),
            "spec_result": _jsonable(spec_r),
        }
    return None


def _find_counterexample(
    root: Callable[..., Any],
    spec_fn: Callable[..., Any],
    eq: Callable[[Any, Any], bool],
    *,
    max_list_size: int,
    max_examples: int,
) -> dict[str, Any] | None:
    strat = strategy_for_function(root, max_list_size=max_list_size)

    def fails(kwargs: dict[str, Any]) -> bool:
        try:
            return _describe_mismatch(root, spec_fn, eq, kwargs) is not None
        except Exception:
            return True

    try:
        kwargs = find(strat, fails, settings=settings(max_examples=max_examples, database=None))
    except NoSuchExample:
        return None

    try:
        return _describe_mismatch(root, spec_fn, eq, kwargs)
    except Exception as e:
        return {"kwargs": _jsonable(kwargs), "error": f"{type(e).__name__}: {e}"}


def _run_equivalence(
    root: Callable[..., Any],
    spec_fn: Callable[..., Any],
    eq: Callable[[Any, Any], bool],
    cfg: dict[str, Any],
    *,
    max_list_size: int,
) -> dict[str, Any] | None:
    """Randomized search; returns the shrunk counterexample or None.

    Raises ``FailedHealthCheck`` or whatever the function under test raised.
    """
    shrunk: list[dict[str, Any] | None] = [None]

    @settings(
        max_examples=int(cfg["max_examples"]),
        deadline=cfg["deadline_ms"],
        suppress_health_check=list(cfg["suppress_health_checks"]),
        database=None,
    )
    @given(strategy_for_function(root, max_list_size=max_list_size))
    def prop(kwargs: dict[str, Any]) -> None:
        ce = _describe_mismatch(root, spec_fn, eq, kwargs)
        if ce is not None:
            # Hypothesis replays the minimal failing example last.
            shrunk[0] = ce
            raise AssertionError(ce.get("note", "impl != spec"))

    try:
        prop()
    except AssertionError:
        if shrunk[0] is None:
            raise
        return shrunk[0]
    return None


def _check_smoke(
    root: Callable[..., Any], qn: str, b: dict[str, Any], smoke_max_list_size: int
) -> ObligationResult:
    t0 = time.monotonic()
    try:
        example = _smallest_input(root, smoke_max_list_size)
        r = root(**example)
        ok, err = _check_ensures(root, (), example, r)
    except Exception as e:
        return ObligationResult(
            qn, "contracts_smoke", "error", {"error": f"{type(e).__name__}: {e}"},
            duration_s=time.monotonic() - t0,
        )
    if not ok:
        return ObligationResult(
            qn, "ensures_holds_on_smoke", "fail",
            {"example": _jsonable(example), "result": _jsonable(r), "error": err},
            duration_s=time.monotonic() - t0,
        )
    return ObligationResult(
        qn, "contracts_smoke", "pass",
        {"example": _jsonable(example), "ensures": len(b["ensures"])},
        duration_s=time.monotonic() - t0,
    )


def _check_purity(
    root: Callable[..., Any], qn: str, pure_cfg: dict[str, Any], smoke_max_list_size: int
) -> list[ObligationResult]:
    out: list[ObligationResult] = []

    t0 = time.monotonic()
    warnings = static_purity_check(root)
    if warnings:
        out.append(ObligationResult(
            qn, "pure_static", "fail", {"warnings": [repr(w) for w in warnings]},
            duration_s=time.monotonic() - t0,
        ))
    else:
        out.append(ObligationResult(
            qn, "pure_static", "pass", {"message": "no impure operations detected"},
            duration_s=time.monotonic() - t0,
        ))

    t1 = time.monotonic()
    eq = pure_cfg.get("eq")
    strat = strategy_for_function(root, max_list_size=smoke_max_list_size)
    try:
        try:
            # Smallest input on which two calls disagree, print, or mutate an argument.
            kwargs = find(
                strat,
                lambda kw: not dynamic_purity_check(root, kw, eq=eq)[0],
                settings=settings(max_examples=_PURITY_EXAMPLES, database=None),
            )
        except NoSuchExample:
            kwargs = _nontrivial_input(root, smoke_max_list_size)
        is_pure, err = dynamic_purity_check(root, kwargs, eq=eq)
    except Exception as e:
        out.append(ObligationResult(
            qn, "pure_dynamic", "error", {"error": f"{type(e).__name__}: {e}"},
            duration_s=time.monotonic() - t1,
        ))
        return out

    details: dict[str, Any] = {"example": _jsonable(kwargs)}
    if not is_pure:
        details["error"] = err
    out.append(ObligationResult(
        qn, "pure_dynamic", "pass" if is_pure else "fail", details,
        duration_s=time.monotonic() - t1,
    ))
    return out


def _check_against(
    root: Callable[..., Any],
    qn: str,
    b: dict[str, Any],
    max_list_size: int,
    max_examples: int | None = None,
) -> ObligationResult:
    if b["against"] is None or b["against"]["spec"] is None:
        return ObligationResult(qn, "equiv_to_spec", "skip", {"reason": "no @against(spec) attached"})

    cfg = dict(b["against"])
    if max_examples is not None:
        cfg["max_examples"] = min(int(cfg["max_examples"]), max_examples)

    spec_fn = cfg["spec"]
    spec_name = _qualified_name(spec_fn)
    eq = cfg["eq"] or (lambda a, b2: a == b2)
    t0 = time.monotonic()

    def result(status: str, **details: Any) -> ObligationResult:
        return ObligationResult(
            qn, "equiv_to_spec", status, {"spec": spec_name, **details},
            duration_s=time.monotonic() - t0,
        )

    # Deterministic search first, then a randomized run.
    ce = _find_counterexample(
        root, spec_fn, eq, max_list_size=max_list_size, max_examples=int(cfg["max_examples"])
    )
    if ce is not None:
        return result("fail", error="counterexample found by find()", counterexample=ce)

    try:
        ce = _run_equivalence(root, spec_fn, eq, cfg, max_list_size=max_list_size)
    except FailedHealthCheck as e:
        return result("fail", error=f"FailedHealthCheck: {e}")
    except Exception as e:
        return result("error", error=f"{type(e).__name__}: {e}")
    if ce is not None:
        return result("fail", error=ce.get("note", "impl != spec"), counterexample=ce)
    return result("pass", max_examples=cfg["max_examples"], ensures=len(b["ensures"]))


def check_module(
    module_name: str,
    *,
    max_list_size: int = 20,
    smoke_max_list_size: int = 5,
    max_examples: int | None = None,
    on_result: Callable[[ObligationResult], None] | None = None,
) -> tuple[list[ObligationResult], dict[str, Any]]:
    """Check every contract-carrying function in ``module_name``.

    Returns the obligation results and a per-function summary. Nothing is
    written anywhere; ``on_result`` sees each result as soon as it exists.
    ``max_examples`` caps the randomized search set by ``@against``.
    """
    module = importlib.import_module(module_name)

    results: list[ObligationResult] = []
    summary: dict[str, Any] = {"module": module_name, "functions": []}

    def _emit(r: ObligationResult) -> None:
        results.append(r)
        if on_result is not None:
            on_result(r)

    for fn in _collect_functions(module):
        root = _root_original(fn)
        b = _get_bundle(root)
        qn = _qualified_name(root)
        first = len(results)

        _emit(_check_smoke(root, qn, b, smoke_max_list_size))
        if b["pure"] is not None:
            for r in _check_purity(root, qn, b["pure"], smoke_max_list_size):
                _emit(r)
        _emit(_check_against(root, qn, b, max_list_size, max_examples))

        own = results[first:]
        summary["functions"].append({
            "function": qn,
            "verified": all(r.status in ("pass", "skip") for r in own),
            "obligations": {r.obligation: r.status for r in own},
        })

    return results, summary
