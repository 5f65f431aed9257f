"""Constraint evaluation modules.

Each AIR has its own ConstraintModule that asserts its boundary and
transition constraints directly in readable Python code. The same module is
evaluated over a whole trace (prover) or over one row pair (verifier).
"""

from protocol.committee import Claim, Committee

from .base import (
    ConstraintContext,
    ConstraintModule,
    FilteredConstraintContext,
    RowPairConstraintContext,
    TraceConstraintContext,
)
from .apk import ApkConstraints

# Registry mapping AIR names to constraint module classes
CONSTRAINT_REGISTRY: dict[str, type[ConstraintModule]] = {
    "ApkAccumulation": ApkConstraints,
}


def get_constraint_module(air_name: str, committee: Committee, claim: Claim) -> ConstraintModule:
    """Get constraint module instance for an AIR.

    Args:
        air_name: Name of the AIR (e.g., 'ApkAccumulation')
        committee: Committee baked into the instance
        claim: Claimed aggregate key baked into the instance

    Returns:
        ConstraintModule instance for the AIR

    Raises:
        KeyError: If no constraint module is registered for the AIR
    """
    if air_name in CONSTRAINT_REGISTRY:
        return CONSTRAINT_REGISTRY[air_name](committee, claim)
    raise KeyError(
        f"No constraint module for AIR '{air_name}'. "
        f"Available: {list(CONSTRAINT_REGISTRY.keys())}"
    )


__all__ = [
    "ConstraintContext",
    "FilteredConstraintContext",
    "TraceConstraintContext",
    "RowPairConstraintContext",
    "ConstraintModule",
    "ApkConstraints",
    "CONSTRAINT_REGISTRY",
    "get_constraint_module",
]
