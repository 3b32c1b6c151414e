"""Predicates and goals, including quantified goals that carry a Binder.

Grammar:
  Predicate := IsImplemented(trait_id, parameters) | Outlives(a, b)
  Goal      := Holds(predicate) | All(goals)
             | ForAll(binder) | Exists(binder)

The binder of a quantified goal holds a Goal payload.
"""

from __future__ import annotations

from typing import Annotated, Literal, Sequence, Union

from pydantic import Discriminator, Tag

from formality_binders.core import fold
from formality_binders.core.binder import Binder
from formality_binders.core.fold import FoldModel, SubstitutionFn
from formality_binders.core.variables import BoundVar, KindedVarIndex
from formality_binders.grammar.ty import Lt, Parameter


class IsImplemented(FoldModel):
    """parameters[0]: trait_id<parameters[1:]>"""

    tag: Literal["is_implemented"] = "is_implemented"
    trait_id: str
    parameters: tuple[Parameter, ...] = ()

    def substitute(self, fn: SubstitutionFn) -> IsImplemented:
        return IsImplemented(
            trait_id=self.trait_id,
            parameters=fold.substitute(self.parameters, fn),
        )

    def free_variables(self) -> list[BoundVar]:
        return fold.free_variables(self.parameters)


class Outlives(FoldModel):
    """a: b"""

    tag: Literal["outlives"] = "outlives"
    a: Parameter
    b: Lt

    def substitute(self, fn: SubstitutionFn) -> Outlives:
        return Outlives(a=fold.substitute(self.a, fn), b=fold.substitute(self.b, fn))

    def free_variables(self) -> list[BoundVar]:
        return fold.free_variables((self.a, self.b))


Predicate = Annotated[
    Union[
        Annotated[IsImplemented, Tag("is_implemented")],
        Annotated[Outlives, Tag("outlives")],
    ],
    Discriminator("tag"),
]


class Holds(FoldModel):
    tag: Literal["holds"] = "holds"
    predicate: Predicate

    def substitute(self, fn: SubstitutionFn) -> Holds:
        return Holds(predicate=fold.substitute(self.predicate, fn))

    def free_variables(self) -> list[BoundVar]:
        return fold.free_variables(self.predicate)


class All(FoldModel):
    """Conjunction; the empty conjunction is trivially true."""

    tag: Literal["all"] = "all"
    goals: tuple[Goal, ...] = ()

    def substitute(self, fn: SubstitutionFn) -> All:
        return All(goals=fold.substitute(self.goals, fn))

    def free_variables(self) -> list[BoundVar]:
        return fold.free_variables(self.goals)


class ForAll(FoldModel):
    tag: Literal["for_all"] = "for_all"
    binder: Binder

    def substitute(self, fn: SubstitutionFn) -> ForAll:
        return ForAll(binder=self.binder.substitute(fn))

    def free_variables(self) -> list[BoundVar]:
        return self.binder.free_variables()


class Exists(FoldModel):
    tag: Literal["exists"] = "exists"
    binder: Binder

    def substitute(self, fn: SubstitutionFn) -> Exists:
        return Exists(binder=self.binder.substitute(fn))

    def free_variables(self) -> list[BoundVar]:
        return self.binder.free_variables()


Goal = Annotated[
    Union[
        Annotated[Holds, Tag("holds")],
        Annotated[All, Tag("all")],
        Annotated[ForAll, Tag("for_all")],
        Annotated[Exists, Tag("exists")],
    ],
    Discriminator("tag"),
]

All.model_rebuild()


# ---- Helpers ----

def predicate_to_goal(predicate: Predicate) -> Goal:
    """Embed a predicate into the goal level."""
    if not isinstance(predicate, (IsImplemented, Outlives)):
        raise TypeError(f"Not a predicate: {type(predicate).__name__}")
    return Holds(predicate=predicate)


def implemented(trait_id: str, *parameters: Parameter) -> Holds:
    """Shorthand for Holds(IsImplemented(...))."""
    return Holds(predicate=IsImplemented(trait_id=trait_id, parameters=parameters))


def for_all(variables: Sequence[KindedVarIndex], goal: Goal) -> ForAll:
    """Universally quantify *goal* over *variables*."""
    return ForAll(binder=Binder.close(variables, goal))


def exists(variables: Sequence[KindedVarIndex], goal: Goal) -> Exists:
    """Existentially quantify *goal* over *variables*."""
    return Exists(binder=Binder.close(variables, goal))
