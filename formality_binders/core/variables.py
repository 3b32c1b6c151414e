"""Variable identity for the locally nameless representation.

A variable is either still bound (``debruijn`` set: the number of enclosing
binders to cross from the point of use to reach the owner) or free
(``debruijn`` is None: ``var_index`` is then a process-wide identifier
minted by the fresh allocator).

All objects are frozen Pydantic models, so equality and hashing are
structural.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from formality_binders.core.kinds import ParameterKind

# Depth of the nearest enclosing binder.
INNERMOST = 0


class BoundVar(BaseModel):
    """A variable reference: bound by (depth, position) or free by global id."""

    model_config = {"frozen": True}

    debruijn: int | None = Field(default=None, ge=0)
    var_index: int = Field(ge=0)

    @classmethod
    def bound(cls, index: int, debruijn: int = INNERMOST) -> "BoundVar":
        return cls(debruijn=debruijn, var_index=index)

    @classmethod
    def free(cls, var_index: int) -> "BoundVar":
        return cls(debruijn=None, var_index=var_index)

    def is_free(self) -> bool:
        return self.debruijn is None

    def is_innermost(self) -> bool:
        return self.debruijn == INNERMOST

    def shift_in(self) -> "BoundVar":
        """Account for one more binder between this reference and its owner."""
        if self.debruijn is None:
            return self
        return BoundVar(debruijn=self.debruijn + 1, var_index=self.var_index)

    def shift_out(self) -> "BoundVar | None":
        """Pull the reference out from under the nearest binder.

        Returns None when the variable belongs to that binder: it cannot
        escape it.
        """
        if self.debruijn is None:
            return self
        if self.debruijn == INNERMOST:
            return None
        return BoundVar(debruijn=self.debruijn - 1, var_index=self.var_index)

    def __str__(self) -> str:
        if self.debruijn is None:
            return f"?{self.var_index}"
        return f"^{self.debruijn}_{self.var_index}"


class KindedVarIndex(BaseModel):
    """Handle for an opened variable: its global id plus its kind."""

    model_config = {"frozen": True}

    kind: ParameterKind
    var_index: int = Field(ge=0)

    def to_bound_var(self) -> BoundVar:
        return BoundVar.free(self.var_index)

    def __str__(self) -> str:
        return f"{self.kind.value}:?{self.var_index}"
