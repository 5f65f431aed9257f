"""APK accumulation witness generation.

Row k holds the accumulator state before member k is processed; row N is a
dummy terminal row carrying only the final accumulator:

    row 0:  (0, flag[0], pk[0], AUX_POINT)
    row i:  (i, flag[i], pk[i], acc_i)           for 0 < i < N
    row N:  (N, 0,       0, 0,  acc_N)

    acc_i = compose(acc_{i-1}, pk[i-1])  if flag[i-1] == 1
            acc_{i-1}                    otherwise

Accumulation is an ordered left fold over the committee: each step depends on
the previous one, so there is no parallel reordering.
"""

import logging

from constraints.apk import COLUMNS
from primitives.curve import AUX_POINT, Point, compose
from primitives.errors import DivisionByZero
from primitives.field import ZERO
from protocol.committee import Committee, CommitteeMember
from protocol.data import Trace
from .base import WitnessModule

logger = logging.getLogger(__name__)


def _accumulate(acc: Point, member: CommitteeMember) -> Point:
    if member.participated != 1:
        return acc
    try:
        return compose(acc, member.public_key)
    except DivisionByZero as e:
        raise DivisionByZero(
            f"degenerate public key for member {member.index}: {e}"
        ) from e


class ApkWitness(WitnessModule):
    """Witness generation for the APK accumulation AIR."""

    def __init__(self, committee: Committee):
        self.committee = committee

    def build(self) -> Trace:
        """Build the N + 1 row trace.

        Raises:
            InvalidInput: If the committee is malformed
            DivisionByZero: If a composition step is degenerate
        """
        committee = self.committee
        committee.validate()
        n = committee.size
        logger.debug("building APK trace: %d members, %d participating",
                     n, len(committee.participants()))

        accs = self._fold(AUX_POINT, committee.members, _accumulate)

        rows = []
        for i in range(n + 1):
            if i < n:
                member = committee.members[i]
                flag = member.participated
                px, py = member.public_key
            else:
                flag, px, py = 0, ZERO, ZERO
            rows.append((i, flag, px, py, accs[i].x, accs[i].y))
        return Trace.from_rows(rows, COLUMNS)


def build_trace(committee: Committee) -> Trace:
    """Convenience wrapper: ApkWitness(committee).build()."""
    return ApkWitness(committee).build()
