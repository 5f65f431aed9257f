"""Pytest configuration for APK accumulation tests."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path so absolute imports work
# (tests/ is inside the project root, so parent is the root)
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from protocol.air_config import AirConfig  # noqa: E402
from protocol.committee import Committee  # noqa: E402
from tests.helpers import GOLDEN_CONFIG, committee_from_points, curve_points  # noqa: E402


@pytest.fixture
def golden_config() -> AirConfig:
    """Reference 7-member committee with participation [1,0,1,1,0,0,0]."""
    return AirConfig.from_json(GOLDEN_CONFIG)


@pytest.fixture
def curve_committee() -> Committee:
    """Seven on-curve members, three of them participating."""
    return committee_from_points(curve_points(7), [0, 1, 1, 0, 1, 0, 0])
