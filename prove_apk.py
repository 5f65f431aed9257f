"""Prove and verify an aggregate public key statement.

Loads committee data and a claimed APK from JSON, builds the accumulation
trace, proves it with the constraint-checking backend and verifies the proof
against a freshly constructed AIR instance.

Usage:
    python prove_apk.py --config tests/test-data/committee-7.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from constraints import get_constraint_module
from primitives.errors import ApkError, RelationViolated
from primitives.transcript import Transcript
from protocol.air_config import AirConfig
from protocol.backend import CheckingBackend, Proof, ProofBackend
from witness import get_witness_module

logger = logging.getLogger("prove_apk")


def prove_apk(config: AirConfig, backend: Optional[ProofBackend] = None) -> Proof:
    """Build the trace for config and prove it.

    Raises:
        InvalidInput: If the committee is malformed
        DivisionByZero: If accumulation or the claim translation is degenerate
        RelationViolated: If the claim does not match the committee
    """
    backend = backend or CheckingBackend()
    air = get_constraint_module(config.name, config.committee, config.claim)
    trace = get_witness_module(config.name, config.committee).build()
    return backend.prove(config.stark, air, Transcript(), trace, [])


def verify_apk(config: AirConfig, proof: Proof, backend: Optional[ProofBackend] = None) -> bool:
    """Verify proof against the statement in config."""
    backend = backend or CheckingBackend()
    air = get_constraint_module(config.name, config.committee, config.claim)
    return backend.verify(config.stark, air, Transcript(), proof, [])


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Prove that a claimed APK aggregates the participating committee keys'
    )
    parser.add_argument(
        '--config',
        type=Path,
        required=True,
        help='Path to committee JSON (committee, claim, optional stark parameters)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log trace commitments and per-step details'
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    if not args.config.exists():
        logger.error("config file not found: %s", args.config)
        return 1

    try:
        config = AirConfig.from_json(args.config)
        logger.info("committee of %d, %d participating, claim (%d, %d)",
                    config.committee_size, len(config.committee.participants()),
                    config.claim.apk_x, config.claim.apk_y)
        proof = prove_apk(config)
    except RelationViolated as e:
        logger.error("claim rejected: %s", e)
        return 1
    except (ApkError, ValueError) as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    if not verify_apk(config, proof):
        logger.error("verification failed")
        return 1
    logger.info("proof verified (commitment %s)", proof.commitment.hex())
    return 0


if __name__ == '__main__':
    sys.exit(main())
