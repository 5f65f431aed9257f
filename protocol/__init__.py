"""Protocol - Committee data, configuration, trace data and proof backends.

protocol.backend is not imported here: it depends on the constraint modules,
which in turn depend on this package.
"""

from protocol.committee import Claim, Committee, CommitteeMember
from protocol.data import Trace, TraceData, RowPairData
from protocol.air_config import AirConfig, StarkConfig

__all__ = [
    "Claim",
    "Committee",
    "CommitteeMember",
    "Trace",
    "TraceData",
    "RowPairData",
    "AirConfig",
    "StarkConfig",
]
