"""Base classes for constraint evaluation.

ConstraintContext provides a uniform interface for constraint evaluation that
works for both the prover (whole columns, returns arrays) and the verifier
(one row pair, returns scalars). The same constraint code is used in both
contexts thanks to galois broadcasting.

Constraints are asserted through the context rather than returned, in the
"assert zero when condition holds" style a proving backend accumulates:

    def eval(self, ctx: ConstraintContext):
        a = ctx.col('a')
        ctx.when_first_row().assert_eq('a_starts_at_zero', a, ZERO)
        ctx.when_transition().assert_eq('a_increments', ctx.next_col('a'), a + ONE)

    # Works for prover (arrays)
    air.eval(TraceConstraintContext(trace_data))

    # Works for verifier (scalars)
    air.eval(RowPairConstraintContext(row_pair_data))
"""

from abc import ABC, abstractmethod
from typing import List, Tuple, Union

import numpy as np

from primitives.errors import ConstraintViolation
from primitives.field import FF, FFPoly, ONE
from protocol.data import FIRST_ROW, LAST_ROW, TRANSITION, RowPairData, TraceData

Expr = Union[FFPoly, FF]


class ConstraintContext(ABC):
    """Uniform interface for constraint evaluation - works for prover and verifier."""

    @abstractmethod
    def col(self, name: str) -> Expr:
        """Get main trace column at current row.

        Returns:
            Prover: array of values at all rows
            Verifier: scalar value at the local row
        """

    @abstractmethod
    def next_col(self, name: str) -> Expr:
        """Get main trace column at next row (offset +1, circular)."""

    @abstractmethod
    def const(self, name: str) -> Expr:
        """Get preprocessed column or row selector at current row.

        Args:
            name: Constant name (e.g., '__L1__' for the first-row selector)
        """

    @abstractmethod
    def assert_zero(self, name: str, expr: Expr) -> None:
        """Record a constraint that must evaluate to zero."""

    def assert_eq(self, name: str, a: Expr, b: Expr) -> None:
        self.assert_zero(name, a - b)

    def assert_bool(self, name: str, a: Expr) -> None:
        self.assert_zero(name, a * (ONE - a))

    def when(self, selector: Expr) -> "FilteredConstraintContext":
        """Context whose assertions only apply where selector is non-zero."""
        return FilteredConstraintContext(self, selector)

    def when_first_row(self) -> "FilteredConstraintContext":
        return self.when(self.const(FIRST_ROW))

    def when_last_row(self) -> "FilteredConstraintContext":
        return self.when(self.const(LAST_ROW))

    def when_transition(self) -> "FilteredConstraintContext":
        return self.when(self.const(TRANSITION))


class FilteredConstraintContext(ConstraintContext):
    """Multiplies every assertion by a selector before forwarding it."""

    def __init__(self, inner: ConstraintContext, selector: Expr):
        self._inner = inner
        self._selector = selector

    def col(self, name: str) -> Expr:
        return self._inner.col(name)

    def next_col(self, name: str) -> Expr:
        return self._inner.next_col(name)

    def const(self, name: str) -> Expr:
        return self._inner.const(name)

    def assert_zero(self, name: str, expr: Expr) -> None:
        self._inner.assert_zero(name, self._selector * expr)


class RecordingConstraintContext(ConstraintContext):
    """Keeps every asserted constraint, in assertion order."""

    def __init__(self):
        self.constraints: List[Tuple[str, Expr]] = []

    def assert_zero(self, name: str, expr: Expr) -> None:
        self.constraints.append((name, expr))


class TraceConstraintContext(RecordingConstraintContext):
    """Prover implementation - returns column arrays.

    The prover evaluates constraints at all rows simultaneously, producing an
    array of evaluations per constraint.
    """

    def __init__(self, data: TraceData):
        super().__init__()
        self._data = data

    def col(self, name: str) -> FFPoly:
        return self._data.columns[name]

    def next_col(self, name: str) -> FFPoly:
        return np.roll(self.col(name), -1)

    def const(self, name: str) -> FFPoly:
        return self._data.constants[name]

    def violations(self) -> List[ConstraintViolation]:
        """Every (constraint, row) whose evaluation is non-zero, row-major order."""
        found = []
        for name, values in self.constraints:
            values = np.broadcast_to(np.asarray(values), (self._data.height,))
            for row in np.flatnonzero(values):
                found.append(ConstraintViolation(name, int(row)))
        found.sort(key=lambda v: v.row)
        return found


class RowPairConstraintContext(RecordingConstraintContext):
    """Verifier implementation - returns scalar values for one row pair."""

    def __init__(self, data: RowPairData):
        super().__init__()
        self._data = data

    def col(self, name: str) -> FF:
        return self._data.evals[(name, 0)]

    def next_col(self, name: str) -> FF:
        return self._data.evals[(name, 1)]

    def const(self, name: str) -> FF:
        return self._data.constants[(name, 0)]

    def violations(self) -> List[ConstraintViolation]:
        return [
            ConstraintViolation(name, self._data.row)
            for name, value in self.constraints
            if int(value) != 0
        ]


class ConstraintModule(ABC):
    """Per-AIR constraint evaluation. Used by both prover and verifier.

    Each AIR has its own constraint module. Public parameters are baked into
    the instance, so the module is a pure predicate evaluator over whatever
    context it is given.
    """

    @abstractmethod
    def width(self) -> int:
        """Number of main trace columns."""

    @abstractmethod
    def eval(self, ctx: ConstraintContext) -> None:
        """Assert every boundary and transition constraint through ctx."""

    def preprocessed_columns(self, height: int) -> dict:
        """Constant columns the AIR reads through ctx.const (none by default)."""
        return {}

    def constraint_polynomial(self, ctx: RecordingConstraintContext, vc: FF) -> Expr:
        """Evaluate all constraints combined into a single polynomial.

        Returns:
            Prover: array of combined evaluations at all rows
            Verifier: single combined evaluation
        """
        self.eval(ctx)
        return self._combine_constraints([expr for _, expr in ctx.constraints], vc)

    def _combine_constraints(self, constraints, vc):
        """Combine constraint list using standard accumulation pattern.

        Computes: ((constraints[0] * vc + constraints[1]) * vc + ...) + constraints[-1]
        """
        acc = constraints[0]
        for c in constraints[1:]:
            acc = acc * vc + c
        return acc
