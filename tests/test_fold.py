"""Tests for the traversal contract and derived shifts."""

from __future__ import annotations

import pytest

from formality_binders.core import fold
from formality_binders.core.fold import Fold, FoldModel, unique_variables
from formality_binders.core.kinds import ParameterKind
from formality_binders.core.variables import BoundVar
from formality_binders.grammar.ty import LtStatic, LtVar, TyVar, rigid


def _ty(var: BoundVar) -> TyVar:
    return TyVar(var=var)


class TestProtocol:
    def test_term_nodes_satisfy_fold(self) -> None:
        assert isinstance(rigid("u8"), Fold)
        assert isinstance(LtStatic(), Fold)

    def test_bare_variable_is_not_a_term(self) -> None:
        assert not isinstance(BoundVar.free(0), Fold)

    def test_base_model_requires_overrides(self) -> None:
        with pytest.raises(NotImplementedError, match="FoldModel.substitute"):
            FoldModel().substitute(lambda k, v: None)
        with pytest.raises(NotImplementedError, match="free_variables"):
            FoldModel().free_variables()


class TestContainerLifting:
    def test_atoms_pass_through(self) -> None:
        calls: list[BoundVar] = []

        def record(kind: ParameterKind, var: BoundVar) -> None:
            calls.append(var)
            return None

        assert fold.substitute("Vec", record) == "Vec"
        assert fold.substitute(3, record) == 3
        assert fold.substitute(None, record) is None
        assert fold.substitute(ParameterKind.TY, record) is ParameterKind.TY
        assert calls == []

    def test_tuple_substitution(self) -> None:
        terms = (_ty(BoundVar.free(1)), rigid("u8"), _ty(BoundVar.free(2)))
        out = fold.substitute(
            terms,
            lambda k, v: rigid("i32") if v == BoundVar.free(1) else None,
        )
        assert out == (rigid("i32"), rigid("u8"), _ty(BoundVar.free(2)))

    def test_atoms_have_no_free_variables(self) -> None:
        assert fold.free_variables("x") == []
        assert fold.free_variables(None) == []

    def test_bare_variable_rejected_everywhere(self) -> None:
        for value in (BoundVar.free(3), (BoundVar.bound(0),), (rigid("u8"), BoundVar.bound(0, debruijn=2))):
            with pytest.raises(TypeError, match="not a term"):
                fold.substitute(value, lambda k, v: None)
            with pytest.raises(TypeError, match="not a term"):
                fold.free_variables(value)
            with pytest.raises(TypeError, match="not a term"):
                fold.shift_in(value)
            with pytest.raises(TypeError, match="not a term"):
                fold.shift_out(value)


class TestFreeVariables:
    def test_first_occurrence_order_deduplicated(self) -> None:
        a, b = BoundVar.free(10), BoundVar.free(20)
        term = rigid("F", _ty(b), _ty(a), _ty(b), LtVar(var=a))
        assert term.free_variables() == [b, a]

    def test_unique_variables(self) -> None:
        a, b = BoundVar.free(1), BoundVar.bound(0)
        assert unique_variables([a, b, a, b, a]) == [a, b]


class TestSubstituteOnVariableNodes:
    def test_bare_var_replacement_keeps_node_type(self) -> None:
        out = LtVar(var=BoundVar.free(1)).substitute(lambda k, v: BoundVar.free(2))
        assert out == LtVar(var=BoundVar.free(2))

    def test_kind_reported_to_fn(self) -> None:
        kinds: list[ParameterKind] = []

        def record(kind: ParameterKind, var: BoundVar) -> None:
            kinds.append(kind)
            return None

        rigid("Ref", LtVar(var=BoundVar.free(0)), _ty(BoundVar.free(1))).substitute(record)
        assert kinds == [ParameterKind.LT, ParameterKind.TY]

    def test_term_replacement(self) -> None:
        out = _ty(BoundVar.free(1)).substitute(lambda k, v: rigid("bool"))
        assert out == rigid("bool")


class TestShifts:
    def test_shift_in_moves_bound_only(self) -> None:
        term = rigid("F", _ty(BoundVar.bound(0)), _ty(BoundVar.free(5)))
        assert term.shift_in() == rigid(
            "F", _ty(BoundVar.bound(0, debruijn=1)), _ty(BoundVar.free(5))
        )

    def test_shift_out_fails_on_innermost(self) -> None:
        term = rigid("F", _ty(BoundVar.bound(0, debruijn=2)), _ty(BoundVar.bound(1)))
        assert term.shift_out() is None

    def test_shift_out_after_shift_in_is_identity(self) -> None:
        term = rigid("F", _ty(BoundVar.bound(0)), _ty(BoundVar.bound(2, debruijn=1)))
        assert term.shift_in().shift_out() == term

    def test_tuple_of_wrapped_variables_shifts(self) -> None:
        terms = (_ty(BoundVar.bound(0)), _ty(BoundVar.bound(0, debruijn=2)))
        shifted = fold.shift_in(terms)
        assert shifted == (_ty(BoundVar.bound(0, debruijn=1)), _ty(BoundVar.bound(0, debruijn=3)))
        assert fold.shift_out(shifted) == terms
        assert fold.shift_out(terms) is None

    def test_closed_term_unchanged(self) -> None:
        term = rigid("Vec", rigid("u8"))
        assert term.shift_in() == term
        assert term.shift_out() == term
