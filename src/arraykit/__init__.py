from arraykit._decorators import against, ensures, pure, spec
from arraykit._engine import ObligationResult, check_module
from arraykit._strategies import register_strategy, register_strategy_factory
from arraykit.arrays import (
    ParityGroups,
    find_common_elements,
    group_by_parity,
    remove_duplicates,
    sort_numbers,
    sum_positive_numbers,
)

__all__ = [
    "ObligationResult",
    "ParityGroups",
    "against",
    "check_module",
    "ensures",
    "find_common_elements",
    "group_by_parity",
    "pure",
    "register_strategy",
    "register_strategy_factory",
    "remove_duplicates",
    "sort_numbers",
    "spec",
    "sum_positive_numbers",
]
