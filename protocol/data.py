"""Trace matrix and data structures for constraint evaluation.

Architecture Overview:
    1. Trace (this module)
       - Immutable row-major (height x width) matrix over GF(p)
       - Produced by a witness module, handed to the proof backend

    2. TraceData / RowPairData (this module)
       - Dict-based storage with named columns
       - Used by: constraint modules through a ConstraintContext

    TraceData holds whole columns (prover side, every row at once).
    RowPairData holds a single (local, next) pair of rows as scalars
    (verifier side, one transition at a time).

Usage:
    data = TraceData.from_trace(trace, air.preprocessed_columns())
    ctx = TraceConstraintContext(data)
    air.eval(ctx)
"""

from collections import namedtuple
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional, Tuple

import numpy as np

from primitives.field import FF, FFPoly, ONE

# Selector constants available to every AIR, following the Lagrange naming
FIRST_ROW = "__L1__"
LAST_ROW = "__LLAST__"
TRANSITION = "__LTRANS__"


@lru_cache(maxsize=None)
def _row_type(column_names: Tuple[str, ...]):
    return namedtuple("Row", column_names)


@dataclass(frozen=True, eq=False)
class Trace:
    """Execution trace: ordered rows of fixed width, row-major.

    The backing array is made read-only on construction so rows can be handed
    out (and read out of order) without copying.

    Attributes:
        values: (height, width) FF array
        column_names: One name per column, in column order
    """
    values: FFPoly
    column_names: Tuple[str, ...]

    def __post_init__(self):
        if not isinstance(self.values, FF):
            raise TypeError(f"trace values must be an FF array, got {type(self.values).__name__}")
        if self.values.ndim != 2:
            raise ValueError(f"trace must be 2-dimensional, got shape {self.values.shape}")
        if self.values.shape[1] != len(self.column_names):
            raise ValueError(
                f"trace width {self.values.shape[1]} does not match "
                f"{len(self.column_names)} column names"
            )
        self.values.flags.writeable = False

    @classmethod
    def from_rows(cls, rows, column_names: Tuple[str, ...]) -> "Trace":
        """Build a trace from row-major integer (or FF scalar) rows."""
        ints = np.array([[int(v) for v in row] for row in rows], dtype=np.int64)
        return cls(FF(ints.reshape(-1, len(column_names))), tuple(column_names))

    @property
    def height(self) -> int:
        return self.values.shape[0]

    @property
    def width(self) -> int:
        return self.values.shape[1]

    def column_index(self, name: str) -> int:
        try:
            return self.column_names.index(name)
        except ValueError:
            raise KeyError(f"no column '{name}' in trace (columns: {list(self.column_names)})") from None

    def column(self, name: str) -> FFPoly:
        return self.values[:, self.column_index(name)]

    def row(self, i: int):
        """Row i as a named tuple of FF scalars."""
        return _row_type(self.column_names)(*(self.values[i, j] for j in range(self.width)))

    def to_ints(self) -> list:
        return [[int(v) for v in row] for row in self.values]

    def with_value(self, row: int, name: str, value) -> "Trace":
        """Copy of the trace with a single cell replaced."""
        values = self.values.copy()
        values.flags.writeable = True
        values[row, self.column_index(name)] = FF(int(value))
        return Trace(values, self.column_names)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Trace):
            return NotImplemented
        return self.column_names == other.column_names and np.array_equal(self.values, other.values)

    __hash__ = None


def _selectors(height: int) -> Dict[str, FFPoly]:
    first = FF.Zeros(height)
    first[0] = ONE
    last = FF.Zeros(height)
    last[height - 1] = ONE
    return {FIRST_ROW: first, LAST_ROW: last, TRANSITION: FF.Ones(height) - last}


@dataclass
class TraceData:
    """Whole-trace data for vectorized constraint evaluation.

    Attributes:
        columns: Main trace columns keyed by name
        constants: Preprocessed columns and row selectors keyed by name
        height: Number of rows
    """
    columns: Dict[str, FFPoly] = field(default_factory=dict)
    constants: Dict[str, FFPoly] = field(default_factory=dict)
    height: int = 0

    @classmethod
    def from_trace(cls, trace: Trace, preprocessed: Optional[Dict[str, FFPoly]] = None) -> "TraceData":
        constants = _selectors(trace.height)
        for name, values in (preprocessed or {}).items():
            if len(values) != trace.height:
                raise ValueError(
                    f"preprocessed column '{name}' has {len(values)} rows, trace has {trace.height}"
                )
            constants[name] = values
        columns = {name: trace.values[:, i] for i, name in enumerate(trace.column_names)}
        return cls(columns=columns, constants=constants, height=trace.height)


@dataclass
class RowPairData:
    """Two adjacent rows for scalar constraint evaluation.

    Values are keyed by (name, offset): offset 0 is the local row, offset 1
    the next row (wrapping to row 0 after the last row).

    Attributes:
        evals: Main trace values keyed by (name, offset)
        constants: Preprocessed values and selectors keyed by (name, offset)
        row: Index of the local row
    """
    evals: Dict[Tuple[str, int], FF] = field(default_factory=dict)
    constants: Dict[Tuple[str, int], FF] = field(default_factory=dict)
    row: int = 0

    @classmethod
    def from_trace(
        cls,
        trace: Trace,
        row: int,
        preprocessed: Optional[Dict[str, FFPoly]] = None,
    ) -> "RowPairData":
        if not 0 <= row < trace.height:
            raise IndexError(f"row {row} out of range for trace of height {trace.height}")
        nxt = (row + 1) % trace.height
        evals = {}
        for i, name in enumerate(trace.column_names):
            evals[(name, 0)] = trace.values[row, i]
            evals[(name, 1)] = trace.values[nxt, i]
        constants = {}
        all_constants = {**_selectors(trace.height), **(preprocessed or {})}
        for name, values in all_constants.items():
            constants[(name, 0)] = values[row]
            constants[(name, 1)] = values[nxt]
        return cls(evals=evals, constants=constants, row=row)


__all__ = [
    "FIRST_ROW",
    "LAST_ROW",
    "TRANSITION",
    "Trace",
    "TraceData",
    "RowPairData",
]
