"""Coercion layer: widen binders over a narrower term representation.

An embedding is a total, structure-preserving function from one
representation level to a broader one (a type into a generic parameter, a
predicate into a goal). Upcasting a binder applies the embedding to the
payload only; the signature is kept exactly and no variable is allocated or
renumbered.
"""

from __future__ import annotations

from typing import Any, Callable

from formality_binders.core.binder import Binder


class UpcastError(TypeError):
    """Raised when an embedding does not produce a value."""


def upcast(value: Any, embed: Callable[[Any], Any]) -> Any:
    """Apply *embed* to a term, a binder's payload, or each item of a tuple."""
    if isinstance(value, Binder):
        return Binder(kinds=value.kinds, term=upcast(value.term, embed))
    if isinstance(value, tuple):
        return tuple(upcast(item, embed) for item in value)
    result = embed(value)
    if result is None:
        raise UpcastError(f"Embedding produced no value for {type(value).__name__}")
    return result
