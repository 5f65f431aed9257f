"""
Fiat-Shamir transcript over a SHA3-256 hash chain.

The transcript absorbs field elements and produces challenges in a
deterministic, pseudorandom manner. The state is a 32-byte digest; each
absorbed element is hashed into it as a 4-byte little-endian word.
"""

import hashlib
from typing import List

from primitives.field import FF, MERSENNE31_PRIME

HASH_SIZE = 32

_DOMAIN_TAG = b"apk-accumulation-v1"


class Transcript:
    """
    Fiat-Shamir transcript using a SHA3-256 hash chain.

    Attributes:
        state: Current chain value (HASH_SIZE bytes)
        pending: Elements absorbed since the last squeeze
    """

    def __init__(self, seed: bytes = b""):
        self.state = hashlib.sha3_256(_DOMAIN_TAG + seed).digest()
        self.pending: List[int] = []

    def put(self, input_data: List[int]) -> None:
        """Add field elements (canonical integers) to the transcript."""
        for elem in input_data:
            elem = int(elem)
            if not 0 <= elem < MERSENNE31_PRIME:
                raise ValueError(f"transcript input {elem} is not a canonical field element")
            self.pending.append(elem)

    def put_bytes(self, data: bytes) -> None:
        """Absorb raw bytes (e.g. a commitment digest)."""
        self._flush()
        self.state = hashlib.sha3_256(self.state + data).digest()

    def _flush(self) -> None:
        if not self.pending:
            return
        payload = b"".join(v.to_bytes(4, "little") for v in self.pending)
        self.state = hashlib.sha3_256(self.state + payload).digest()
        self.pending = []

    def get_field(self) -> FF:
        """Squeeze one challenge in GF(p).

        Rejection-samples 31-bit words so the output is uniform over [0, p).
        """
        self._flush()
        counter = 0
        while True:
            block = hashlib.sha3_256(self.state + counter.to_bytes(4, "little")).digest()
            for i in range(0, HASH_SIZE, 4):
                candidate = int.from_bytes(block[i:i + 4], "little") & MERSENNE31_PRIME
                if candidate < MERSENNE31_PRIME:
                    self.state = hashlib.sha3_256(block).digest()
                    return FF(candidate)
            counter += 1
