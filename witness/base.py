"""Base class for witness generation."""

from abc import ABC, abstractmethod

from protocol.data import Trace


class WitnessModule(ABC):
    """Per-AIR witness generation. Used by prover only.

    Each AIR has its own witness module that runs the computation being proven
    and records every intermediate state as a trace row. Unlike
    ConstraintModule, this is only used by the prover - the verifier checks
    constraints but never rebuilds the trace.
    """

    @abstractmethod
    def build(self) -> Trace:
        """Run the computation and return the completed trace."""

    def _fold(self, initial, steps, step_fn):
        """Left fold returning every intermediate state, initial included.

        result[0] = initial, result[i] = step_fn(result[i-1], steps[i-1])
        """
        states = [initial]
        for step in steps:
            states.append(step_fn(states[-1], step))
        return states
