"""Tests for committee, claim and configuration loading."""

import json

import pytest

from primitives.curve import AUX_POINT, Point, uncompose
from primitives.errors import InvalidInput
from primitives.field import MERSENNE31_PRIME
from protocol.air_config import AirConfig, StarkConfig
from protocol.committee import Claim, Committee, CommitteeMember
from tests.helpers import GOLDEN_CONFIG, committee_from_points, curve_points
from witness import build_trace


class TestCommittee:
    """Committee.from_arrays validation."""

    def test_from_arrays(self) -> None:
        """Members keep their order, keys and flags."""
        committee = Committee.from_arrays([5, 6, 7], [8, 9, 10], [1, 0, 1])
        assert committee.size == 3
        assert committee.flags == [1, 0, 1]
        assert [k.to_ints() for k in committee.keys] == [(5, 8), (6, 9), (7, 10)]
        assert [m.index for m in committee.participants()] == [0, 2]

    def test_mismatched_lengths(self) -> None:
        """Arrays of different length are rejected."""
        with pytest.raises(InvalidInput, match="differ in length"):
            Committee.from_arrays([1, 2], [3, 4, 5], [0, 1])

    def test_empty(self) -> None:
        """An empty committee is rejected."""
        with pytest.raises(InvalidInput):
            Committee.from_arrays([], [], [])

    @pytest.mark.parametrize("flag", [2, -1, 255])
    def test_flag_outside_bits(self, flag) -> None:
        """Participation flags must be 0 or 1."""
        with pytest.raises(InvalidInput, match="member 1"):
            Committee.from_arrays([1, 2], [3, 4], [0, flag])

    def test_non_canonical_key(self) -> None:
        """Key coordinates must be canonical field elements."""
        with pytest.raises(InvalidInput, match="member 0"):
            Committee.from_arrays([MERSENNE31_PRIME], [1], [1])

    def test_validate_catches_direct_construction(self) -> None:
        """validate() re-checks committees built without from_arrays."""
        committee = Committee((CommitteeMember(0, Point.from_ints(1, 2), 3),))
        with pytest.raises(InvalidInput):
            committee.validate()

    def test_misplaced_index(self) -> None:
        """Member indices must match their position."""
        committee = Committee((CommitteeMember(1, Point.from_ints(1, 2), 0),))
        with pytest.raises(InvalidInput, match="index"):
            committee.validate()

    def test_with_flag_and_key_copy(self) -> None:
        """with_flag/with_key return modified copies."""
        committee = Committee.from_arrays([5, 6], [8, 9], [1, 0])
        flipped = committee.with_flag(1, 1)
        moved = committee.with_key(0, Point.from_ints(11, 12))
        assert committee.flags == [1, 0]
        assert flipped.flags == [1, 1]
        assert moved.keys[0].to_ints() == (11, 12)
        assert committee.keys[0].to_ints() == (5, 8)


class TestClaim:
    """Claim validation and derivation."""

    def test_out_of_range(self) -> None:
        """Claim coordinates must be canonical."""
        with pytest.raises(InvalidInput, match="apk_y"):
            Claim(1, MERSENNE31_PRIME)

    def test_point(self) -> None:
        """Claim.point is the (apk_x, apk_y) pair."""
        assert Claim(3, 4).point.to_ints() == (3, 4)

    def test_for_committee_without_participants(self) -> None:
        """Nobody participating gives the claim that maps onto AUX_POINT."""
        committee = Committee.from_arrays([5, 6], [8, 9], [0, 0])
        claim = Claim.for_committee(committee)
        assert (claim.apk_x, claim.apk_y) == (0, 1)
        assert uncompose(claim.point).to_ints() == AUX_POINT.to_ints()

    def test_for_committee_single_participant(self) -> None:
        """A single participant's key is the claim."""
        committee = Committee.from_arrays([5, 6], [8, 9], [0, 1])
        assert Claim.for_committee(committee) == Claim(6, 9)

    def test_for_committee_on_curve(self) -> None:
        """Claims for on-curve keys aggregate the participants only."""
        pts = curve_points(3)
        a = Claim.for_committee(committee_from_points(pts, [1, 0, 1]))
        b = Claim.for_committee(committee_from_points([pts[2], pts[0]], [1, 1]))
        assert a == b

    def test_for_committee_shared_key(self) -> None:
        """Participants sharing a key are named instead of dividing by zero."""
        golden = AirConfig.from_json(GOLDEN_CONFIG).committee
        committee = Committee.from_arrays(
            [int(k.x) for k in golden.keys],
            [int(k.y) for k in golden.keys],
            [1, 0, 0, 0, 0, 1, 0],
        )
        assert build_trace(committee).height == 8
        with pytest.raises(InvalidInput, match="participants 0 and 5 share a public key"):
            Claim.for_committee(committee)


class TestAirConfig:
    """JSON configuration loading."""

    def test_golden_file(self) -> None:
        """The reference scenario loads with its backend parameters."""
        config = AirConfig.from_json(GOLDEN_CONFIG)
        assert config.name == "ApkAccumulation"
        assert config.committee_size == 7
        assert config.trace_height == 8
        assert config.committee.flags == [1, 0, 1, 1, 0, 0, 0]
        assert config.claim == Claim(2105811123, 1146185955)
        assert config.stark == StarkConfig(log_blowup=1, num_queries=100, proof_of_work_bits=16)

    def test_defaults(self) -> None:
        """name and stark are optional."""
        config = AirConfig.from_dict({
            "committee": {"pk_x": [5], "pk_y": [8], "participated": [1]},
            "claim": {"apk_x": 5, "apk_y": 8},
        })
        assert config.name == "ApkAccumulation"
        assert config.stark == StarkConfig()

    def test_missing_key(self) -> None:
        """Missing keys are reported by dotted path."""
        with pytest.raises(InvalidInput, match="committee.pk_y"):
            AirConfig.from_dict({
                "committee": {"pk_x": [5], "participated": [1]},
                "claim": {"apk_x": 5, "apk_y": 8},
            })

    def test_size_mismatch(self) -> None:
        """A declared committee_size must match the arrays."""
        with pytest.raises(InvalidInput, match="committee_size"):
            AirConfig.from_dict({
                "committee_size": 3,
                "committee": {"pk_x": [5], "pk_y": [8], "participated": [1]},
                "claim": {"apk_x": 5, "apk_y": 8},
            })

    def test_unknown_stark_parameter(self) -> None:
        """Unknown backend parameters are rejected."""
        with pytest.raises(InvalidInput, match="unknown"):
            StarkConfig.from_dict({"log_blowup": 2, "blowup": 4})

    def test_invalid_stark_parameter(self) -> None:
        """Backend parameters are range checked."""
        with pytest.raises(InvalidInput):
            StarkConfig(log_blowup=0)

    def test_round_trip_through_file(self, tmp_path) -> None:
        """from_json reads what json.dump writes."""
        data = {
            "committee": {"pk_x": [5, 6], "pk_y": [8, 9], "participated": [0, 1]},
            "claim": {"apk_x": 6, "apk_y": 9},
            "stark": {"num_queries": 28},
        }
        path = tmp_path / "committee.json"
        path.write_text(json.dumps(data))
        config = AirConfig.from_json(path)
        assert config.stark.num_queries == 28
        assert config.committee.flags == [0, 1]
