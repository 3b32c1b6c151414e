"""Binder: a term with N declared bound variables of known kinds.

Inside a Binder, a reference to position i of the signature is written
BoundVar(debruijn=INNERMOST, var_index=i). Free identifiers are erased
entirely by close(), so two binders that differ only in the names of their
bound variables are structurally equal: alpha-equivalence is plain ``==``
and closed binders can be used as dict keys.

A Binder is created once and never mutated. open() and instantiate()
derive independent new terms.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from formality_binders.core import fold
from formality_binders.core.fold import FoldModel, Replacement, SubstitutionFn
from formality_binders.core.fresh import FreshVarAllocator, default_allocator
from formality_binders.core.invariants import (
    BinderInvariantViolation,
    check_closed_over,
    validate_binder,
)
from formality_binders.core.kinds import ParameterKind
from formality_binders.core.substitution import Substitution
from formality_binders.core.variables import BoundVar, KindedVarIndex

logger = logging.getLogger(__name__)


class Binder(FoldModel):
    """Ordered signature of kinds plus the payload term they scope over.

    Note that ``len(binder)`` is the arity, so a zero-arity binder is falsy.
    """

    kinds: tuple[ParameterKind, ...] = ()
    term: Any = None

    @classmethod
    def close(
        cls,
        variables: Sequence[KindedVarIndex],
        term: Any,
        strict: bool = False,
    ) -> "Binder":
        """Bind *variables*, which *term* references freely.

        Variable ``variables[i]`` becomes bound position i. With strict=True
        the result is checked for leaked or out-of-range references and
        BinderInvariantViolation is raised on failure.
        """
        substitution = Substitution(
            (handle.to_bound_var(), BoundVar.bound(index))
            for index, handle in enumerate(variables)
        )
        binder = cls(
            kinds=tuple(handle.kind for handle in variables),
            term=substitution.apply(term),
        )
        logger.debug(f"Closed binder over {len(binder)} variable(s)")

        if strict:
            violations = validate_binder(binder)
            violations.extend(check_closed_over(binder, variables))
            if violations:
                logger.warning(f"Binder.close produced {len(violations)} violation(s)")
                raise BinderInvariantViolation("close", violations)
        return binder

    @classmethod
    def empty(cls, term: Any) -> "Binder":
        """A binder that binds nothing."""
        return cls(kinds=(), term=term)

    def open(
        self,
        allocator: FreshVarAllocator | None = None,
    ) -> tuple[list[KindedVarIndex], Any]:
        """Rename every bound position to a fresh free variable.

        Returns the handles, aligned with the signature, and the rewritten
        term. The variables are distinct from any ever produced before.
        """
        allocator = allocator or default_allocator()
        handles = [allocator.fresh(kind) for kind in self.kinds]
        substitution = Substitution(
            (BoundVar.bound(index), handle.to_bound_var())
            for index, handle in enumerate(handles)
        )
        logger.debug(f"Opened binder of arity {len(handles)}")
        return handles, substitution.apply(self.term)

    def instantiate(
        self,
        op: Callable[[ParameterKind, int], Replacement],
    ) -> Any:
        """Replace each bound position i with ``op(kind_i, i)``.

        No fresh identifiers are allocated.
        """
        replacements = [op(kind, index) for index, kind in enumerate(self.kinds)]

        def replace_bound(_kind: ParameterKind, var: BoundVar) -> Replacement | None:
            if var.is_innermost():
                return replacements[var.var_index]
            return None

        return fold.substitute(self.term, replace_bound)

    def peek(self) -> Any:
        """The still-bound payload.

        Fine for shape checks that never need to name a bound variable;
        otherwise use open().
        """
        return self.term

    def substitute(self, fn: SubstitutionFn) -> "Binder":
        def under_binder(kind: ParameterKind, var: BoundVar) -> Replacement | None:
            # A variable that cannot be shifted out belongs to this binder.
            outer = var.shift_out()
            if outer is None:
                return None
            replacement = fn(kind, outer)
            if replacement is None:
                return None
            if isinstance(replacement, BoundVar):
                return replacement.shift_in()
            return fold.shift_in(replacement)

        return Binder(kinds=self.kinds, term=fold.substitute(self.term, under_binder))

    def free_variables(self) -> list[BoundVar]:
        escaping: list[BoundVar] = []
        for var in fold.free_variables(self.term):
            outer = var.shift_out()
            if outer is not None:
                escaping.append(outer)
        return fold.unique_variables(escaping)

    def __len__(self) -> int:
        return len(self.kinds)
