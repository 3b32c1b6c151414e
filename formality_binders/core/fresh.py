"""Process-wide source of fresh free-variable identifiers.

Identifiers come from one monotone counter shared by every binder and
every kind. It is never reset and issued values are never reused, so
free-variable equality is identifier equality.
"""

from __future__ import annotations

import logging
import threading

from formality_binders.core.kinds import ParameterKind
from formality_binders.core.variables import BoundVar, KindedVarIndex

logger = logging.getLogger(__name__)


class FreshVarAllocator:
    """Mints pairwise-distinct variable identifiers, starting at zero."""

    def __init__(self) -> None:
        self._next = 0
        self._lock = threading.Lock()

    def fresh(self, kind: ParameterKind) -> KindedVarIndex:
        with self._lock:
            index = self._next
            self._next += 1
        logger.debug(f"Allocated fresh {kind.value} variable ?{index}")
        return KindedVarIndex(kind=kind, var_index=index)

    @property
    def issued(self) -> int:
        """How many identifiers this allocator has handed out."""
        return self._next


_DEFAULT_ALLOCATOR = FreshVarAllocator()


def default_allocator() -> FreshVarAllocator:
    return _DEFAULT_ALLOCATOR


def fresh_bound_var(
    kind: ParameterKind,
    allocator: FreshVarAllocator | None = None,
) -> tuple[KindedVarIndex, BoundVar]:
    """Create a fresh free variable not yet part of any binder.

    Put the BoundVar into a term, then bind it with Binder.close().
    """
    handle = (allocator or _DEFAULT_ALLOCATOR).fresh(kind)
    return handle, handle.to_bound_var()
