"""Aggregate public key accumulation AIR.

Main trace columns (width 6):
    index         step counter, 0..N
    selector_bit  participation flag of the member on this row
    member_x/y    that member's public key (zero on the terminal row)
    acc_x/y       running accumulator, starting at the auxiliary point

Preprocessed columns bind the known values to the committee:
    committee_flag, committee_x, committee_y (zero on the terminal row)

Constraints:
- First row: index = 0, selector_bit = participated[0], acc = AUX_POINT
- Transition: selector_bit is boolean, index increments, the known columns
  match the committee, and acc advances by one composition when
  selector_bit = 1 or is carried unchanged when selector_bit = 0
- Last row: acc = uncompose(claim, AUX_POINT)

The accumulator update is the cross-multiplied form of compose, so it stays
polynomial:

    s * (x' * (y*py + a*x*px) - (x*y + px*py)) + (1 - s) * (x' - x) = 0
    s * (y' * (x*py - y*px) - (x*y - px*py)) + (1 - s) * (y' - y) = 0
"""

from typing import Dict

import numpy as np

from primitives.curve import A_EDWARDS, AUX_POINT, uncompose
from primitives.field import FF, FFPoly, ONE, ZERO
from protocol.committee import Claim, Committee
from .base import ConstraintContext, ConstraintModule

COLUMNS = ("index", "selector_bit", "member_x", "member_y", "acc_x", "acc_y")

COMMITTEE_FLAG = "committee_flag"
COMMITTEE_X = "committee_x"
COMMITTEE_Y = "committee_y"


class ApkConstraints(ConstraintModule):
    """Constraint evaluation for the APK accumulation AIR.

    The claim is translated into the terminal accumulator value once, here,
    with ordinary field division; raises DivisionByZero if that is degenerate.
    """

    def __init__(self, committee: Committee, claim: Claim):
        committee.validate()
        self.committee = committee
        self.claim = claim
        self.final_value = uncompose(claim.point, AUX_POINT)

    def width(self) -> int:
        return len(COLUMNS)

    def preprocessed_columns(self, height: int) -> Dict[str, FFPoly]:
        n = self.committee.size
        if height != n + 1:
            raise ValueError(f"trace height {height} does not match committee size {n} + 1")
        flags = np.zeros(height, dtype=np.int64)
        xs = np.zeros(height, dtype=np.int64)
        ys = np.zeros(height, dtype=np.int64)
        for i, member in enumerate(self.committee.members):
            flags[i] = member.participated
            xs[i], ys[i] = member.public_key.to_ints()
        return {COMMITTEE_FLAG: FF(flags), COMMITTEE_X: FF(xs), COMMITTEE_Y: FF(ys)}

    def eval(self, ctx: ConstraintContext) -> None:
        index = ctx.col("index")
        sel = ctx.col("selector_bit")
        px = ctx.col("member_x")
        py = ctx.col("member_y")
        x = ctx.col("acc_x")
        y = ctx.col("acc_y")
        next_index = ctx.next_col("index")
        next_x = ctx.next_col("acc_x")
        next_y = ctx.next_col("acc_y")

        # Starting values
        first = ctx.when_first_row()
        first.assert_eq("first_index", index, ZERO)
        first.assert_eq("first_selector", sel, FF(self.committee.members[0].participated))
        first.assert_eq("first_acc_x", x, AUX_POINT.x)
        first.assert_eq("first_acc_y", y, AUX_POINT.y)

        transition = ctx.when_transition()
        transition.assert_bool("selector_is_bit", sel)
        transition.assert_eq("index_increments", next_index, index + ONE)

        # Known columns come from the committee
        transition.assert_eq("selector_matches_committee", sel, ctx.const(COMMITTEE_FLAG))
        transition.assert_eq("member_x_matches_committee", px, ctx.const(COMMITTEE_X))
        transition.assert_eq("member_y_matches_committee", py, ctx.const(COMMITTEE_Y))

        # Accumulation, switched linearly on the selector
        xy = x * y
        pxpy = px * py
        skip = ONE - sel
        transition.assert_zero(
            "acc_x_update",
            sel * (next_x * (y * py + A_EDWARDS * x * px) - (xy + pxpy)) + skip * (next_x - x),
        )
        transition.assert_zero(
            "acc_y_update",
            sel * (next_y * (x * py - y * px) - (xy - pxpy)) + skip * (next_y - y),
        )

        # Final value
        last = ctx.when_last_row()
        last.assert_eq("final_acc_x", x, self.final_value.x)
        last.assert_eq("final_acc_y", y, self.final_value.y)
