"""Generic parameters: types and lifetimes.

Grammar:
  Ty        := TyRigid(name, parameters) | TyVar(var)
  Lt        := LtStatic | LtVar(var)
  Parameter := Ty | Lt

Nodes are frozen Pydantic models in tagged unions, the same shape as the
rest of the term language. Each node implements the traversal contract;
the variable nodes are where substitution actually happens.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Discriminator, Tag

from formality_binders.core import fold
from formality_binders.core.fold import FoldModel, SubstitutionFn
from formality_binders.core.kinds import ParameterKind
from formality_binders.core.variables import BoundVar


class TyRigid(FoldModel):
    """A named type applied to generic parameters, e.g. Vec<T>."""

    tag: Literal["rigid"] = "rigid"
    name: str
    parameters: tuple[Parameter, ...] = ()

    def substitute(self, fn: SubstitutionFn) -> TyRigid:
        return TyRigid(name=self.name, parameters=fold.substitute(self.parameters, fn))

    def free_variables(self) -> list[BoundVar]:
        return fold.free_variables(self.parameters)

    def as_variable(self) -> BoundVar | None:
        return None

    def __str__(self) -> str:
        if not self.parameters:
            return self.name
        return f"{self.name}<{', '.join(str(p) for p in self.parameters)}>"


class TyVar(FoldModel):
    """A type that is just a variable."""

    tag: Literal["ty_var"] = "ty_var"
    var: BoundVar

    def substitute(self, fn: SubstitutionFn) -> Ty:
        replacement = fn(ParameterKind.TY, self.var)
        if replacement is None:
            return self
        if isinstance(replacement, BoundVar):
            return TyVar(var=replacement)
        return replacement

    def free_variables(self) -> list[BoundVar]:
        return [self.var]

    def as_variable(self) -> BoundVar | None:
        return self.var

    def __str__(self) -> str:
        return str(self.var)


class LtStatic(FoldModel):
    """The 'static lifetime."""

    tag: Literal["static"] = "static"

    def substitute(self, fn: SubstitutionFn) -> LtStatic:
        return self

    def free_variables(self) -> list[BoundVar]:
        return []

    def as_variable(self) -> BoundVar | None:
        return None

    def __str__(self) -> str:
        return "'static"


class LtVar(FoldModel):
    """A lifetime that is just a variable."""

    tag: Literal["lt_var"] = "lt_var"
    var: BoundVar

    def substitute(self, fn: SubstitutionFn) -> Lt:
        replacement = fn(ParameterKind.LT, self.var)
        if replacement is None:
            return self
        if isinstance(replacement, BoundVar):
            return LtVar(var=replacement)
        return replacement

    def free_variables(self) -> list[BoundVar]:
        return [self.var]

    def as_variable(self) -> BoundVar | None:
        return self.var

    def __str__(self) -> str:
        return f"'{self.var}"


Ty = Annotated[
    Union[
        Annotated[TyRigid, Tag("rigid")],
        Annotated[TyVar, Tag("ty_var")],
    ],
    Discriminator("tag"),
]

Lt = Annotated[
    Union[
        Annotated[LtStatic, Tag("static")],
        Annotated[LtVar, Tag("lt_var")],
    ],
    Discriminator("tag"),
]

# Discriminated union type for all generic parameters
Parameter = Annotated[
    Union[
        Annotated[TyRigid, Tag("rigid")],
        Annotated[TyVar, Tag("ty_var")],
        Annotated[LtStatic, Tag("static")],
        Annotated[LtVar, Tag("lt_var")],
    ],
    Discriminator("tag"),
]

# Rebuild models now that Parameter is defined (forward references)
TyRigid.model_rebuild()

_TY_NODES = (TyRigid, TyVar)
_LT_NODES = (LtStatic, LtVar)


# ---- Helpers ----

def rigid(name: str, *parameters: Parameter) -> TyRigid:
    """Shorthand constructor for TyRigid."""
    return TyRigid(name=name, parameters=parameters)


def var_to_parameter(kind: ParameterKind, var: BoundVar) -> Parameter:
    """Lift a bare variable into the term of its kind."""
    if kind == ParameterKind.TY:
        return TyVar(var=var)
    return LtVar(var=var)


def parameter_kind(parameter: Parameter) -> ParameterKind:
    """Kind of a generic parameter."""
    if isinstance(parameter, _TY_NODES):
        return ParameterKind.TY
    if isinstance(parameter, _LT_NODES):
        return ParameterKind.LT
    raise TypeError(f"Not a generic parameter: {type(parameter).__name__}")


def ty_to_parameter(ty: Ty) -> Parameter:
    """Embed a type into the parameter level."""
    if not isinstance(ty, _TY_NODES):
        raise TypeError(f"Not a type: {type(ty).__name__}")
    return ty


def lt_to_parameter(lt: Lt) -> Parameter:
    """Embed a lifetime into the parameter level."""
    if not isinstance(lt, _LT_NODES):
        raise TypeError(f"Not a lifetime: {type(lt).__name__}")
    return lt
