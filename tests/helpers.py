"""
Curve helpers for APK accumulation tests.

Points produced by curve_points lie on the twisted Edwards curve through the
auxiliary base point, so compose behaves as a group law on them and claims
derived with aggregate() match the trace's terminal accumulator.
"""

from pathlib import Path

import numpy as np

from primitives.curve import A_EDWARDS, AUX_POINT, Point
from primitives.field import FF, ONE, ZERO
from protocol.committee import Committee

TEST_DATA_DIR = Path(__file__).parent / "test-data"
GOLDEN_CONFIG = TEST_DATA_DIR / "committee-7.json"


def curve_d(p: Point = AUX_POINT) -> FF:
    """Edwards d of the curve a*x^2 + y^2 = 1 + d*x^2*y^2 through p."""
    x2 = p.x * p.x
    y2 = p.y * p.y
    return (A_EDWARDS * x2 + y2 - ONE) / (x2 * y2)


def curve_points(count: int, start: int = 2) -> list:
    """First `count` points with x >= start on the auxiliary point's curve."""
    d = curve_d()
    points = []
    x = start
    while len(points) < count:
        fx = FF(x)
        x2 = fx * fx
        den = ONE - d * x2
        if den != ZERO:
            y2 = (ONE - A_EDWARDS * x2) / den
            if y2 != ZERO and y2.is_square():
                points.append(Point(fx, FF(int(np.sqrt(y2)))))
        x += 1
    return points


def committee_from_points(points, participated) -> Committee:
    xs = [int(p.x) for p in points]
    ys = [int(p.y) for p in points]
    return Committee.from_arrays(xs, ys, participated)
