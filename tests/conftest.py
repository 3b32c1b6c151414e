"""Shared fixtures for formality-binders tests."""

from __future__ import annotations

import pytest

from formality_binders.core.binder import Binder
from formality_binders.core.fresh import FreshVarAllocator, fresh_bound_var
from formality_binders.core.kinds import ParameterKind
from formality_binders.core.variables import BoundVar, KindedVarIndex
from formality_binders.grammar.ty import TyVar, rigid


@pytest.fixture
def allocator() -> FreshVarAllocator:
    """A private allocator, independent of the process-wide one."""
    return FreshVarAllocator()


@pytest.fixture
def x() -> KindedVarIndex:
    handle, _ = fresh_bound_var(ParameterKind.TY)
    return handle


@pytest.fixture
def y() -> KindedVarIndex:
    handle, _ = fresh_bound_var(ParameterKind.TY)
    return handle


@pytest.fixture
def pair_binder() -> Binder:
    """signature [Type, Type]; payload Pair<^0_0, ^0_1>."""
    return Binder(
        kinds=(ParameterKind.TY, ParameterKind.TY),
        term=rigid(
            "Pair",
            TyVar(var=BoundVar.bound(0)),
            TyVar(var=BoundVar.bound(1)),
        ),
    )
