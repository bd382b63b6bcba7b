"""Tests for single-round simulation."""

from decimal import Decimal

import pytest

from src.envelope_engine.models import GrabMode
from src.envelope_engine.round_simulator import RoundSimulator


# ── Helpers ──────────────────────────────────────────────────────────

def _fixed_amounts(simulator, amounts):
    """Make the allocator return *amounts* every round."""
    simulator.allocator.allocate = lambda total, count: list(amounts)


# ── Structure ────────────────────────────────────────────────────────

class TestRoundStructure:
    def test_one_share_per_position(self, rng, make_config):
        config = make_config()
        record = RoundSimulator(rng).simulate_round(config, 3)
        assert record.round_index == 3
        assert [s.position for s in record.shares] == list(range(1, 11))

    def test_conserves_total(self, rng, make_config):
        config = make_config(total_amount="66.66", share_count=9)
        simulator = RoundSimulator(rng)
        for i in range(1, 101):
            record = simulator.simulate_round(config, i)
            assert record.total == Decimal("66.66")
            assert all(s.amount >= Decimal("0.01") for s in record.shares)

    def test_invalid_round_index(self, rng, make_config):
        with pytest.raises(ValueError):
            RoundSimulator(rng).simulate_round(make_config(), 0)


# ── Labels and outcome ───────────────────────────────────────────────

class TestLabels:
    def test_success_labels_participant_position(self, rng, make_config):
        config = make_config(mode=GrabMode.FAST)
        record = RoundSimulator(rng).simulate_round(config, 1)
        outcome = record.user_outcome
        assert outcome.is_success
        assert outcome.fail_reason is None
        for share in record.shares:
            if share.position == outcome.position:
                assert share.holder == "alice"
                assert share.amount == outcome.amount
            else:
                assert share.holder == f"User{share.position}"

    def test_failure_uses_placeholders_only(self, rng, make_config):
        # (1000 - 1) / 7 > 100, so slow grabbers always miss
        config = make_config(group_size=1000, share_count=1, mode=GrabMode.SLOW)
        record = RoundSimulator(rng).simulate_round(config, 1)
        outcome = record.user_outcome
        assert outcome.is_success is False
        assert outcome.amount == Decimal("0.00")
        assert outcome.fail_reason == "arrived too late"
        assert outcome.is_best_luck is False
        assert [s.holder for s in record.shares] == ["User1"]


# ── Best luck ────────────────────────────────────────────────────────

class TestBestLuck:
    def test_ties_all_flagged(self, rng, make_config):
        config = make_config(total_amount="13", group_size=4, share_count=4,
                             mode=None)
        simulator = RoundSimulator(rng)
        _fixed_amounts(simulator, [Decimal("2.00"), Decimal("5.00"),
                                   Decimal("5.00"), Decimal("1.00")])
        record = simulator.simulate_round(config, 1)
        assert [s.is_best_luck for s in record.shares] == [False, True, True, False]
        outcome = record.user_outcome
        assert outcome.is_best_luck == (outcome.amount == Decimal("5.00"))

    def test_privileged_always_gets_maximum(self, rng, make_config):
        config = make_config(participant_name="YISHENG", group_size=1000,
                             share_count=8, mode=GrabMode.SLOW)
        simulator = RoundSimulator(rng)
        for i in range(1, 51):
            record = simulator.simulate_round(config, i)
            outcome = record.user_outcome
            assert outcome.is_success
            assert outcome.amount == record.max_amount
            assert outcome.is_best_luck
            assert record.total == Decimal("100.00")

    def test_privileged_swap_moves_first_maximum(self, rng, make_config):
        config = make_config(participant_name="yisheng", total_amount="10",
                             group_size=4, share_count=4, mode=GrabMode.SLOW)
        simulator = RoundSimulator(rng)
        _fixed_amounts(simulator, [Decimal("4.00"), Decimal("1.00"),
                                   Decimal("4.00"), Decimal("1.00")])
        record = simulator.simulate_round(config, 1)
        # Slow with 4 shares always lands on position 4
        assert record.user_outcome.position == 4
        assert [s.amount for s in record.shares] == [
            Decimal("1.00"), Decimal("1.00"), Decimal("4.00"), Decimal("4.00"),
        ]
        assert record.shares[3].holder == "yisheng"

    def test_custom_allow_list(self, rng, make_config):
        config = make_config(participant_name="carol")
        simulator = RoundSimulator(rng, privileged_names=["Carol"])
        record = simulator.simulate_round(config, 1)
        assert record.user_outcome.amount == record.max_amount
