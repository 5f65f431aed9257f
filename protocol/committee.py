"""Committee and claim value types.

All data here is public: keys, participation flags and the claimed aggregate
key are baked into the AIR instance rather than passed as public inputs, so a
different committee needs a different AIR instance.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from primitives.curve import Point, aggregate
from primitives.errors import DivisionByZero, InvalidInput
from primitives.field import from_u32


@dataclass(frozen=True)
class CommitteeMember:
    """One committee seat.

    Attributes:
        index: Position in the committee, in [0, N)
        public_key: Member key as a curve point
        participated: Participation flag, 0 or 1
    """
    index: int
    public_key: Point
    participated: int


@dataclass(frozen=True)
class Committee:
    """Ordered sequence of exactly N members."""
    members: Tuple[CommitteeMember, ...]

    @classmethod
    def from_arrays(
        cls,
        pk_x: Sequence[int],
        pk_y: Sequence[int],
        participated: Sequence[int],
    ) -> "Committee":
        """Build a committee from the three parallel arrays.

        Raises:
            InvalidInput: On mismatched lengths, an empty committee,
                non-canonical key coordinates or a flag outside {0, 1}
        """
        if not (len(pk_x) == len(pk_y) == len(participated)):
            raise InvalidInput(
                f"committee arrays differ in length: pk_x={len(pk_x)}, "
                f"pk_y={len(pk_y)}, participated={len(participated)}"
            )
        members = []
        for i, (x, y, flag) in enumerate(zip(pk_x, pk_y, participated)):
            try:
                key = Point(from_u32(x), from_u32(y))
            except InvalidInput as e:
                raise InvalidInput(f"public key of member {i}: {e}") from None
            members.append(CommitteeMember(i, key, flag))
        committee = cls(tuple(members))
        committee.validate()
        return committee

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def keys(self) -> List[Point]:
        return [m.public_key for m in self.members]

    @property
    def flags(self) -> List[int]:
        return [m.participated for m in self.members]

    def participants(self) -> List[CommitteeMember]:
        return [m for m in self.members if m.participated == 1]

    def validate(self) -> None:
        """Check the committee is well formed.

        Raises:
            InvalidInput: If the committee is empty, a member index is out of
                place or a participation flag is not exactly 0 or 1
        """
        if not self.members:
            raise InvalidInput("committee is empty")
        for i, member in enumerate(self.members):
            if member.index != i:
                raise InvalidInput(f"member at position {i} has index {member.index}")
            flag = member.participated
            if isinstance(flag, bool) or flag not in (0, 1):
                raise InvalidInput(f"participation flag of member {i} must be 0 or 1, got {flag!r}")

    def with_flag(self, index: int, participated: int) -> "Committee":
        """Copy of the committee with one participation flag replaced."""
        members = list(self.members)
        m = members[index]
        members[index] = CommitteeMember(m.index, m.public_key, participated)
        return Committee(tuple(members))

    def with_key(self, index: int, public_key: Point) -> "Committee":
        """Copy of the committee with one public key replaced."""
        members = list(self.members)
        m = members[index]
        members[index] = CommitteeMember(m.index, public_key, m.participated)
        return Committee(tuple(members))


@dataclass(frozen=True)
class Claim:
    """Claimed aggregate public key (apk_x, apk_y)."""
    apk_x: int
    apk_y: int

    def __post_init__(self):
        for name in ("apk_x", "apk_y"):
            try:
                from_u32(getattr(self, name))
            except InvalidInput as e:
                raise InvalidInput(f"claim {name}: {e}") from None

    @property
    def point(self) -> Point:
        return Point.from_ints(self.apk_x, self.apk_y)

    @classmethod
    def for_committee(cls, committee: Committee) -> "Claim":
        """Claim derived from the participating keys.

        With nobody participating the accumulator never leaves the auxiliary
        point, and (0, 1) is the claim that uncompose maps back onto it.

        Summing the participants without the auxiliary offset can need a
        doubling step the trace itself never takes, most commonly when two
        participants share a public key.

        Raises:
            InvalidInput: If the participants' keys cannot be summed with the
                dedicated addition law
        """
        participants = committee.participants()
        if not participants:
            return cls(0, 1)
        try:
            x, y = aggregate([m.public_key for m in participants]).to_ints()
        except DivisionByZero:
            raise InvalidInput(_degenerate_sum_message(participants)) from None
        return cls(x, y)


def _degenerate_sum_message(participants: List[CommitteeMember]) -> str:
    seen = {}
    for m in participants:
        key = m.public_key.to_ints()
        if key in seen:
            return (
                f"participants {seen[key]} and {m.index} share a public key; "
                f"summing them needs a doubling step"
            )
        seen[key] = m.index
    return "participating keys hit a degenerate pair of the addition law"
