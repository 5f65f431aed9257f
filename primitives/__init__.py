"""Primitives - Low-level field, curve and transcript building blocks."""

from primitives.errors import (
    ApkError,
    ConstraintViolation,
    DivisionByZero,
    InvalidInput,
    RelationViolated,
)
from primitives.field import FF, MERSENNE31_PRIME, ONE, ZERO, div, from_u32, inv
from primitives.curve import (
    A_EDWARDS,
    AUX_POINT,
    Point,
    aggregate,
    compose,
    uncompose,
)
from primitives.transcript import Transcript

__all__ = [
    # Errors
    "ApkError",
    "ConstraintViolation",
    "DivisionByZero",
    "InvalidInput",
    "RelationViolated",
    # Field
    "FF",
    "MERSENNE31_PRIME",
    "ONE",
    "ZERO",
    "div",
    "from_u32",
    "inv",
    # Curve
    "A_EDWARDS",
    "AUX_POINT",
    "Point",
    "aggregate",
    "compose",
    "uncompose",
    # Transcript
    "Transcript",
]
