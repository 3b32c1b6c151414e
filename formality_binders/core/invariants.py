"""Representation-invariant checks for binders.

Out-of-range positions and leaked free variables are collaborator bugs,
not runtime conditions, so nothing on the normal path calls these. They
return lists of violation strings; strict callers turn a non-empty list
into BinderInvariantViolation.
"""

from __future__ import annotations

from typing import Any, Sequence

from formality_binders.core import fold
from formality_binders.core.variables import KindedVarIndex


class BinderInvariantViolation(Exception):
    """Raised by strict binder operations when an invariant check fails."""

    def __init__(self, operation: str, violations: list[str]) -> None:
        self.operation = operation
        self.violations = violations
        msg = f"Invariant violation in {operation}:\n" + "\n".join(violations)
        super().__init__(msg)


def check_bound_indices(binder: Any) -> list[str]:
    """Every innermost reference in the payload must be below the arity."""
    violations: list[str] = []
    arity = len(binder.kinds)
    for var in fold.free_variables(binder.term):
        if var.is_innermost() and var.var_index >= arity:
            violations.append(
                f"Bound reference {var} out of range for binder of arity {arity}"
            )
    return violations


def check_closed_over(binder: Any, variables: Sequence[KindedVarIndex]) -> list[str]:
    """None of *variables* may still occur free inside the closed binder."""
    violations: list[str] = []
    leaked = {handle.to_bound_var() for handle in variables}
    for var in fold.free_variables(binder):
        if var in leaked:
            violations.append(f"Variable {var} still free after close")
    return violations


def check_no_free_variables(term: Any) -> list[str]:
    """The term must be closed, e.g. before it is used as a memo key."""
    return [f"Unexpected free variable {var}" for var in fold.free_variables(term)]


def validate_binder(binder: Any) -> list[str]:
    """Run all single-binder invariant checks."""
    violations: list[str] = []
    violations.extend(check_bound_indices(binder))
    return violations


def assert_well_formed(binder: Any, operation: str = "binder") -> None:
    """Raise BinderInvariantViolation if *binder* fails validate_binder()."""
    violations = validate_binder(binder)
    if violations:
        raise BinderInvariantViolation(operation, violations)
