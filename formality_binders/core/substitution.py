"""Substitution: transient mapping from variables to replacements."""

from __future__ import annotations

from typing import Any, Iterable

from formality_binders.core import fold
from formality_binders.core.fold import Replacement
from formality_binders.core.kinds import ParameterKind
from formality_binders.core.variables import BoundVar


class Substitution:
    """Dict-backed variable -> replacement map, usable as a SubstitutionFn.

    Replacements must have the kind of the variable they replace; that is
    not checked here.
    """

    def __init__(self, pairs: Iterable[tuple[BoundVar, Replacement]] = ()) -> None:
        self._map: dict[BoundVar, Replacement] = {}
        for var, replacement in pairs:
            self._map[var] = replacement

    def __call__(self, kind: ParameterKind, var: BoundVar) -> Replacement | None:
        return self._map.get(var)

    def apply(self, term: Any) -> Any:
        """Return a new term with every mapped variable replaced."""
        if not self._map:
            return term
        return fold.substitute(term, self)

    def domain(self) -> list[BoundVar]:
        return list(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, var: BoundVar) -> bool:
        return var in self._map

    def __repr__(self) -> str:
        inner = ", ".join(f"{k} -> {v}" for k, v in self._map.items())
        return f"Substitution({{{inner}}})"
