"""Static and dynamic purity analysis.

The static pass walks a function's AST looking for calls that perform IO,
introduce non-determinism, depend on object addresses, or mutate global
state. It reports what it sees; an empty report is not a proof.

The dynamic pass calls the function twice on independent deep copies of
the same arguments and compares: the two results, anything written to
stdout/stderr, and each argument before and after the call.
"""

from __future__ import annotations

import ast
import contextlib
import copy
import dataclasses
import inspect
import io
import textwrap
from collections.abc import Callable
from typing import Any

_CALL_RULES: dict[str, frozenset[str]] = {
    "io": frozenset({"print", "open", "input"}),
    "nondeterminism": frozenset({"time.time", "time.monotonic", "datetime.now", "uuid1", "uuid4"}),
    "hash_addr": frozenset({"id", "hash"}),
    "global_mutation": frozenset({"setattr", "delattr", "exec", "eval", "globals", "__import__"}),
}

_IO_SUFFIXES: tuple[str, ...] = ("sys.stdout", "sys.stderr", "sys.stdin", "stdout.write", "stderr.write")

_NONDETERMINISTIC_MODULES: frozenset[str] = frozenset({"random", "secrets"})


@dataclasses.dataclass(frozen=True, slots=True)
class ImpurityWarning:
    """One impure operation found by the static pass."""

    category: str
    description: str
    lineno: int | None = None

    def __repr__(self) -> str:
        where = "" if self.lineno is None else f" (line {self.lineno})"
        return f"ImpurityWarning({self.category}: {self.description}{where})"


def _dotted_name(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        prefix = _dotted_name(node.value)
        return node.attr if prefix is None else f"{prefix}.{node.attr}"
    return None


def _classify_call(name: str) -> list[str]:
    categories = [cat for cat, names in _CALL_RULES.items() if name in names]
    if "io" not in categories and name.endswith(_IO_SUFFIXES):
        categories.append("io")
    if "nondeterminism" not in categories and name.split(".")[0] in _NONDETERMINISTIC_MODULES:
        categories.append("nondeterminism")
    return categories


def static_purity_check(fn: Callable[..., Any]) -> list[ImpurityWarning]:
    try:
        source = textwrap.dedent(inspect.getsource(fn))
    except (OSError, TypeError):
        return [ImpurityWarning("unknown", "could not retrieve source")]
    try:
        tree = ast.parse(source)
    except SyntaxError:
        return [ImpurityWarning("unknown", "could not parse source")]

    found: list[ImpurityWarning] = []
    for node in ast.walk(tree):
        lineno = getattr(node, "lineno", None)
        if isinstance(node, ast.Call):
            name = _dotted_name(node.func)
            if name is None:
                continue
            for category in _classify_call(name):
                found.append(ImpurityWarning(category, f"call to {name}", lineno))
        elif isinstance(node, (ast.Global, ast.Nonlocal)):
            keyword = "global" if isinstance(node, ast.Global) else "nonlocal"
            found.append(ImpurityWarning("global_mutation", f"{keyword} statement: {', '.join(node.names)}", lineno))
    return found


def _observed_call(fn: Callable[..., Any], kwargs: dict[str, Any]) -> tuple[Any, str, str]:
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        result = fn(**kwargs)
    return result, out.getvalue(), err.getvalue()


def dynamic_purity_check(
    fn: Callable[..., Any],
    kwargs: dict[str, Any],
    *,
    eq: Callable[[Any, Any], bool] | None = None,
) -> tuple[bool, str]:
    """Return ``(is_pure, reason)``; ``reason`` is empty when pure."""
    if eq is None:
        eq = lambda a, b: a == b  # noqa: E731

    before = copy.deepcopy(kwargs)
    first_args = copy.deepcopy(kwargs)
    second_args = copy.deepcopy(kwargs)

    first, out1, err1 = _observed_call(fn, first_args)
    second, out2, err2 = _observed_call(fn, second_args)

    problems: list[str] = []
    if not eq(first, second):
        problems.append(f"results differ: {first!r} vs {second!r}")
    if out1 or out2:
        problems.append("function produced stdout output")
    if err1 or err2:
        problems.append("function produced stderr output")
    for name, original in before.items():
        if first_args[name] != original:
            problems.append(f"input mutated: {name}")

    return (False, "; ".join(problems)) if problems else (True, "")
