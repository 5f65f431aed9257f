"""AIR configuration: committee data, claim and backend parameters.

The committee (keys and participation flags) and the claimed aggregate key
are the only inputs the AIR consumes. They are plain in-memory arrays, loaded
here from JSON:

    {
        "name": "ApkAccumulation",
        "committee": {"pk_x": [...], "pk_y": [...], "participated": [...]},
        "claim": {"apk_x": ..., "apk_y": ...},
        "stark": {"log_blowup": 1, "num_queries": 100, "proof_of_work_bits": 16}
    }

Example:
    config = AirConfig.from_json("committee.json")
    trace = get_witness_module(config.name, config.committee).build()
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

from primitives.errors import InvalidInput
from protocol.committee import Claim, Committee

DEFAULT_AIR_NAME = "ApkAccumulation"


@dataclass(frozen=True)
class StarkConfig:
    """Proof backend parameters, passed through opaquely.

    Attributes:
        log_blowup: log2 of the low-degree extension factor
        num_queries: Number of FRI queries
        proof_of_work_bits: Grinding difficulty
    """
    log_blowup: int = 1
    num_queries: int = 100
    proof_of_work_bits: int = 16

    def __post_init__(self):
        if self.log_blowup < 1:
            raise InvalidInput(f"log_blowup must be >= 1, got {self.log_blowup}")
        if self.num_queries < 1:
            raise InvalidInput(f"num_queries must be >= 1, got {self.num_queries}")
        if self.proof_of_work_bits < 0:
            raise InvalidInput(f"proof_of_work_bits must be >= 0, got {self.proof_of_work_bits}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StarkConfig":
        unknown = set(data) - {"log_blowup", "num_queries", "proof_of_work_bits"}
        if unknown:
            raise InvalidInput(f"unknown stark parameters: {sorted(unknown)}")
        return cls(**data)


@dataclass(frozen=True)
class AirConfig:
    """Everything needed to build, prove and verify one APK statement.

    Attributes:
        name: AIR name, used to look up constraint and witness modules
        committee: Committee members with keys and participation flags
        claim: Claimed aggregate public key
        stark: Backend parameters
    """
    committee: Committee
    claim: Claim
    name: str = DEFAULT_AIR_NAME
    stark: StarkConfig = field(default_factory=StarkConfig)

    @property
    def committee_size(self) -> int:
        return self.committee.size

    @property
    def trace_height(self) -> int:
        return self.committee.size + 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AirConfig":
        """Build from an already parsed JSON document.

        Raises:
            InvalidInput: On missing keys or malformed committee/claim data
        """
        committee_data = _require(data, "committee")
        claim_data = _require(data, "claim")
        committee = Committee.from_arrays(
            _require(committee_data, "pk_x", "committee"),
            _require(committee_data, "pk_y", "committee"),
            _require(committee_data, "participated", "committee"),
        )
        size = data.get("committee_size")
        if size is not None and size != committee.size:
            raise InvalidInput(
                f"committee_size is {size} but the committee has {committee.size} members"
            )
        claim = Claim(_require(claim_data, "apk_x", "claim"), _require(claim_data, "apk_y", "claim"))
        return cls(
            committee=committee,
            claim=claim,
            name=data.get("name", DEFAULT_AIR_NAME),
            stark=StarkConfig.from_dict(data.get("stark", {})),
        )

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "AirConfig":
        with open(path) as f:
            return cls.from_dict(json.load(f))


def _require(data: Dict[str, Any], key: str, section: str = "") -> Any:
    if not isinstance(data, dict):
        raise InvalidInput(f"expected an object for '{section}', got {type(data).__name__}")
    try:
        return data[key]
    except KeyError:
        where = f"{section}.{key}" if section else key
        raise InvalidInput(f"missing configuration key '{where}'") from None
