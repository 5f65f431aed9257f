"""Mersenne31 field GF(2^31 - 1).

Uses galois library for all field arithmetic. FF is the field type. Scalars
are 0-d FF arrays and trace columns are 1-d FF arrays, so constraint code is
written once and broadcasts over either.
"""

import galois
import numpy as np

from primitives.errors import DivisionByZero, InvalidInput

# --- Field Construction ---

MERSENNE31_PRIME = (1 << 31) - 1

FF = galois.GF(MERSENNE31_PRIME)
"""Base field GF(p) - Mersenne31 prime field."""

# Type alias for arrays of base field elements
FFPoly = FF

ZERO = FF(0)
ONE = FF(1)

U32_MAX = (1 << 32) - 1


# --- Embedding ---

def from_u32(value: int) -> FF:
    """Embed an unsigned 32-bit integer as a field element.

    Only canonical representatives are accepted: values in [p, 2^32) would
    alias a smaller element and are rejected together with non-u32 inputs.

    Raises:
        InvalidInput: If value is not an integer in [0, p)
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidInput(f"expected an unsigned 32-bit integer, got {value!r}")
    value = int(value)
    if not 0 <= value <= U32_MAX:
        raise InvalidInput(f"{value} is not an unsigned 32-bit integer")
    if value >= MERSENNE31_PRIME:
        raise InvalidInput(f"{value} is not a canonical Mersenne31 element (p = {MERSENNE31_PRIME})")
    return FF(value)


# --- Arithmetic ---
# add/sub/mul are the FieldArray operators; division goes through inv.

def inv(a: FF) -> FF:
    """Multiplicative inverse of a non-zero scalar.

    Raises:
        DivisionByZero: If a is the additive identity
    """
    if a == ZERO:
        raise DivisionByZero("inverse of zero in GF(2^31 - 1)")
    return a ** -1


def div(a: FF, b: FF) -> FF:
    """Field division a / b.

    Raises:
        DivisionByZero: If b is the additive identity
    """
    return a * inv(b)

