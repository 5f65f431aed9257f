"""Witness generation modules.

Each AIR has its own WitnessModule that runs the computation and records the
execution trace directly in readable Python code.
"""

from protocol.committee import Committee

from .base import WitnessModule
from .apk import ApkWitness, build_trace

# Registry mapping AIR names to witness module classes
WITNESS_REGISTRY: dict[str, type[WitnessModule]] = {
    'ApkAccumulation': ApkWitness,
}


def get_witness_module(air_name: str, committee: Committee) -> WitnessModule:
    """Get witness module instance for an AIR.

    Raises:
        KeyError: If no witness module is registered for the AIR
    """
    if air_name in WITNESS_REGISTRY:
        return WITNESS_REGISTRY[air_name](committee)
    raise KeyError(f"No witness module for AIR '{air_name}'. "
                   f"Available: {list(WITNESS_REGISTRY.keys())}")


__all__ = [
    'WitnessModule',
    'ApkWitness',
    'build_trace',
    'WITNESS_REGISTRY',
    'get_witness_module',
]
