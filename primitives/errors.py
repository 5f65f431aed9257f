"""Error kinds shared by the field, curve, trace and constraint layers.

InvalidInput and DivisionByZero are local failures raised before any proof is
attempted. RelationViolated is only raised by a proof backend when the trace
does not satisfy the AIR; constraint evaluation itself never raises it.
"""

from typing import List, NamedTuple


class ApkError(Exception):
    """Base class for all aggregate-public-key proving errors."""


class InvalidInput(ApkError, ValueError):
    """Malformed committee, claim or configuration data."""


class DivisionByZero(ApkError, ZeroDivisionError):
    """Field division by the additive identity."""


class ConstraintViolation(NamedTuple):
    """A single non-zero constraint evaluation."""
    name: str
    row: int


class RelationViolated(ApkError):
    """The trace is not a faithful run of the accumulation."""

    def __init__(self, violations: List[ConstraintViolation]):
        self.violations = list(violations)
        shown = ", ".join(f"{v.name}@{v.row}" for v in self.violations[:8])
        more = len(self.violations) - 8
        if more > 0:
            shown += f", ... ({more} more)"
        super().__init__(f"relation not satisfied: {shown}")
