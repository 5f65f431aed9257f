"""Proof backend interface and a constraint-checking backend.

A proof backend consumes a constraint module (fixed width plus predicates)
and a row-major trace, and produces or checks a proof. Commitment schemes,
low-degree testing and the rest of a succinct STARK live behind this
interface and are not part of this package.

CheckingBackend is a transparent, non-succinct backend: it checks every
constraint on every row directly and "proves" by committing to the full
trace. It has the same accept/reject behaviour a sound backend must have,
which makes it the reference for AIR and witness development.
"""

import hashlib
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from constraints.base import ConstraintModule, TraceConstraintContext
from primitives.errors import RelationViolated
from primitives.field import FF, FFPoly
from primitives.transcript import Transcript
from protocol.air_config import StarkConfig
from protocol.data import Trace, TraceData

logger = logging.getLogger(__name__)


# --- Proof ---

@dataclass(frozen=True)
class Proof:
    """Opaque proof object produced by a backend.

    Attributes:
        commitment: Digest binding the trace
        trace: Committed trace (CheckingBackend opens it in full)
        folded: Folded constraint evaluations, one per row
    """
    commitment: bytes
    trace: Trace
    folded: tuple


def commit_trace(trace: Trace) -> bytes:
    """SHA3-256 over the shape and little-endian 32-bit cells of the trace."""
    h = hashlib.sha3_256()
    h.update(trace.height.to_bytes(4, "little"))
    h.update(trace.width.to_bytes(4, "little"))
    h.update(np.array(trace.to_ints(), dtype="<u4").tobytes())
    return h.digest()


def _absorb(transcript: Transcript, trace: Trace, commitment: bytes) -> None:
    transcript.put([trace.height, trace.width])
    transcript.put_bytes(commitment)


def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


# --- Backend Interface ---

class ProofBackend(ABC):
    """prove/verify pair supplied by a proving system."""

    @abstractmethod
    def prove(
        self,
        config: StarkConfig,
        air: ConstraintModule,
        transcript: Transcript,
        trace: Trace,
        public_values: Sequence[int],
    ) -> Proof:
        """Produce a proof that trace satisfies air.

        Raises:
            RelationViolated: If any constraint is non-zero on the trace
        """

    @abstractmethod
    def verify(
        self,
        config: StarkConfig,
        air: ConstraintModule,
        transcript: Transcript,
        proof: Proof,
        public_values: Sequence[int],
    ) -> bool:
        """Check a proof against air. Returns True if valid, False otherwise."""


# --- Checking Backend ---

class CheckingBackend(ProofBackend):
    """Backend that evaluates the AIR on every row of the committed trace."""

    def _check_shape(self, air: ConstraintModule, trace: Trace, public_values: Sequence[int]) -> None:
        if len(public_values) != 0:
            raise ValueError("public values are baked into the AIR instance; expected none")
        if trace.width != air.width():
            raise ValueError(f"trace width {trace.width} does not match AIR width {air.width()}")
        if not _is_power_of_two(trace.height):
            raise ValueError(f"trace height {trace.height} is not a power of two")

    def _evaluate(self, air: ConstraintModule, trace: Trace, vc: FF):
        data = TraceData.from_trace(trace, air.preprocessed_columns(trace.height))
        ctx = TraceConstraintContext(data)
        folded: FFPoly = air.constraint_polynomial(ctx, vc)
        return ctx.violations(), folded

    def prove(self, config, air, transcript, trace, public_values) -> Proof:
        self._check_shape(air, trace, public_values)

        commitment = commit_trace(trace)
        logger.debug("trace commitment %s (%d x %d)", commitment.hex(), trace.height, trace.width)
        _absorb(transcript, trace, commitment)
        vc = transcript.get_field()

        violations, folded = self._evaluate(air, trace, vc)
        if violations:
            logger.warning("refusing to prove: %d constraint violations", len(violations))
            raise RelationViolated(violations)
        return Proof(commitment, trace, tuple(int(v) for v in folded))

    def verify(self, config, air, transcript, proof, public_values) -> bool:
        try:
            self._check_shape(air, proof.trace, public_values)
        except ValueError as e:
            logger.warning("proof rejected: %s", e)
            return False

        if commit_trace(proof.trace) != proof.commitment:
            logger.warning("proof rejected: trace does not match commitment")
            return False
        _absorb(transcript, proof.trace, proof.commitment)
        vc = transcript.get_field()

        violations, folded = self._evaluate(air, proof.trace, vc)
        if violations:
            logger.warning("proof rejected: %s", RelationViolated(violations))
            return False
        if tuple(int(v) for v in folded) != proof.folded:
            logger.warning("proof rejected: folded constraint evaluations differ")
            return False
        return True
