"""Traversal contract every term kind implements.

A term supports four capture-aware rewrites:

  substitute(fn)     -- call fn(kind, var) on each variable reached; a
                        non-None result replaces it
  free_variables()   -- variables not bound by a binder inside the term
  shift_in()         -- the term moves one binder deeper
  shift_out()        -- the term is pulled out from under one binder; None if
                        it mentions a variable owned by that binder

Term nodes subclass FoldModel and implement the first two; the shifts are
derived from them. The module-level functions lift the contract over
tuples, None and atoms so models can fold their children uniformly.
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Iterable, Optional, Protocol, runtime_checkable

from pydantic import BaseModel

from formality_binders.core.kinds import ParameterKind
from formality_binders.core.variables import BoundVar

# A replacement is either a bare BoundVar (the variable node re-wraps it in
# its own type) or a concrete term of the variable's kind.
Replacement = Any
SubstitutionFn = Callable[[ParameterKind, BoundVar], Optional[Replacement]]

_ATOMS = (str, int, float, enum.Enum)


@runtime_checkable
class Fold(Protocol):
    """Capability every term representation satisfies."""

    def substitute(self, fn: SubstitutionFn) -> Any: ...

    def free_variables(self) -> list[BoundVar]: ...

    def shift_in(self) -> Any: ...

    def shift_out(self) -> Any | None: ...


def unique_variables(variables: Iterable[BoundVar]) -> list[BoundVar]:
    """Deduplicate, keeping first-occurrence order."""
    seen: set[BoundVar] = set()
    result: list[BoundVar] = []
    for v in variables:
        if v not in seen:
            seen.add(v)
            result.append(v)
    return result


def _reject_bare_variable(value: Any) -> None:
    # A bare BoundVar carries no kind, so it cannot be a term or a term child;
    # lift it with the node of its kind first.
    if isinstance(value, BoundVar):
        raise TypeError(f"Bare variable {value} is not a term; wrap it in a term node")


def substitute(value: Any, fn: SubstitutionFn) -> Any:
    _reject_bare_variable(value)
    if isinstance(value, tuple):
        return tuple(substitute(item, fn) for item in value)
    if value is None or isinstance(value, _ATOMS):
        return value
    return value.substitute(fn)


def free_variables(value: Any) -> list[BoundVar]:
    _reject_bare_variable(value)
    if isinstance(value, tuple):
        return unique_variables(v for item in value for v in free_variables(item))
    if value is None or isinstance(value, _ATOMS):
        return []
    return value.free_variables()


def _shift_in_var(_kind: ParameterKind, var: BoundVar) -> BoundVar | None:
    return None if var.is_free() else var.shift_in()


def _shift_out_var(_kind: ParameterKind, var: BoundVar) -> BoundVar | None:
    return None if var.is_free() else var.shift_out()


def shift_in(value: Any) -> Any:
    _reject_bare_variable(value)
    return substitute(value, _shift_in_var)


def shift_out(value: Any) -> Any | None:
    _reject_bare_variable(value)
    if any(v.is_innermost() for v in free_variables(value)):
        return None
    return substitute(value, _shift_out_var)


class FoldModel(BaseModel):
    """Frozen base for term nodes.

    Subclasses implement substitute() and free_variables().
    """

    model_config = {"frozen": True}

    def substitute(self, fn: SubstitutionFn) -> Any:
        raise NotImplementedError(f"{type(self).__name__}.substitute")

    def free_variables(self) -> list[BoundVar]:
        raise NotImplementedError(f"{type(self).__name__}.free_variables")

    def shift_in(self) -> Any:
        return shift_in(self)

    def shift_out(self) -> Any | None:
        return shift_out(self)
