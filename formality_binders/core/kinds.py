"""Closed set of variable sorts.

A kind travels with every API that introduces a variable. The binder
layer trusts the kind it is handed; kind-correct construction is the
caller's job.
"""

from __future__ import annotations

import enum


class ParameterKind(str, enum.Enum):
    """Sort of a generic parameter or logical variable."""

    TY = "ty"
    LT = "lt"
