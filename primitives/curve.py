"""Twisted Edwards point composition over Mersenne31.

Accumulation never uses the curve identity. It starts from a fixed auxiliary
base point, every step is the same generic addition formula, and the target
the trace must reach is compose(claim, AUX_POINT).

For P = (x1, y1), Q = (x2, y2) the dedicated addition law is

    x3 = (x1*y1 + x2*y2) / (y1*y2 + a*x1*x2)
    y3 = (x1*y1 - x2*y2) / (x1*y2 - y1*x2)

It is not defined for doubling (P == Q makes the y denominator vanish), which
surfaces as DivisionByZero.
"""

from typing import Iterable, NamedTuple

from primitives.errors import InvalidInput
from primitives.field import FF, div

# a = -1 written as its canonical representative 2^31 - 2
A_EDWARDS = FF(2147483646)

AUX_POINT_X = 310816354
AUX_POINT_Y = 2077510353


class Point(NamedTuple):
    """Affine curve point. There is no identity variant."""
    x: FF
    y: FF

    @classmethod
    def from_ints(cls, x: int, y: int) -> "Point":
        return cls(FF(x), FF(y))

    def to_ints(self) -> tuple:
        return int(self.x), int(self.y)


AUX_POINT = Point.from_ints(AUX_POINT_X, AUX_POINT_Y)
"""Starting value of the accumulator."""


def compose(p: Point, q: Point) -> Point:
    """Add two points with the dedicated twisted Edwards law.

    Raises:
        DivisionByZero: If either denominator vanishes (degenerate pair)
    """
    x1y1 = p.x * p.y
    x2y2 = q.x * q.y
    x3 = div(x1y1 + x2y2, p.y * q.y + A_EDWARDS * p.x * q.x)
    y3 = div(x1y1 - x2y2, p.x * q.y - p.y * q.x)
    return Point(x3, y3)


def uncompose(claim: Point, aux: Point = AUX_POINT) -> Point:
    """Translate a claimed aggregate key into the terminal accumulator value.

    This is compose applied to (claim, aux): the trace starts at aux and adds
    every participating key, so it must end at claim + aux.
    """
    return compose(claim, aux)


def aggregate(points: Iterable[Point]) -> Point:
    """Sum a non-empty set of points by folding compose from the first one.

    Raises:
        InvalidInput: If no points are given
        DivisionByZero: If an intermediate pair is degenerate
    """
    it = iter(points)
    try:
        acc = next(it)
    except StopIteration:
        raise InvalidInput("cannot aggregate an empty set of points") from None
    for p in it:
        acc = compose(acc, p)
    return acc
