"""Tests for simulation config validation."""

import dataclasses
from decimal import Decimal

import pytest

from src.envelope_engine.models import GrabMode, SimulationConfig
from src.envelope_engine.validation import ConfigRules, ValidationError

# ── Config construction ──────────────────────────────────────────────

class TestSimulationConfigCreate:
    def test_trims_name_and_quantizes_amount(self, make_config):
        config = make_config(participant_name="  alice  ", total_amount="12.345")
        assert config.participant_name == "alice"
        assert config.total_amount == Decimal("12.35")

    def test_mode_parsing(self, make_config):
        assert make_config(mode="SLOW").mode is GrabMode.SLOW
        assert make_config(mode="teleport").mode is None

    def test_frozen(self, make_config):
        config = make_config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.round_count = 5

    @pytest.mark.parametrize("total", ["abc", "", None, "12,50"])
    def test_non_numeric_total_rejected(self, make_config, total):
        with pytest.raises(ValidationError, match="total_amount must be a number"):
            make_config(total_amount=total)

    @pytest.mark.parametrize("field,value", [
        ("group_size", "3.5"),
        ("share_count", "ten"),
        ("round_count", None),
    ])
    def test_non_integer_counts_rejected(self, make_config, field, value):
        with pytest.raises(ValidationError, match=f"{field} must be a whole number"):
            make_config(**{field: value})

    @pytest.mark.parametrize("total", ["nan", "inf", "-Infinity"])
    def test_non_finite_total_kept_for_validation(self, make_config, total):
        config = make_config(total_amount=total)
        assert not config.total_amount.is_finite()


# ── Rules ────────────────────────────────────────────────────────────

class TestConfigRules:
    def test_valid_config(self, make_config):
        assert ConfigRules().validate(make_config()) == (True, None)

    def test_share_count_equal_group_size_ok(self, make_config):
        valid, _ = ConfigRules().validate(make_config(group_size=10, share_count=10))
        assert valid is True

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_missing_name(self, make_config, name):
        valid, error = ConfigRules().validate(make_config(participant_name=name))
        assert valid is False
        assert "name is required" in error

    @pytest.mark.parametrize("field,value", [
        ("total_amount", "0"),
        ("total_amount", "-5"),
        ("group_size", 0),
        ("share_count", -1),
        ("round_count", 0),
    ])
    def test_non_positive_fields(self, make_config, field, value):
        valid, error = ConfigRules().validate(make_config(**{field: value}))
        assert valid is False
        assert f"{field} must be greater than 0" in error

    def test_share_count_exceeds_group(self, make_config):
        valid, error = ConfigRules().validate(make_config(group_size=5, share_count=6))
        assert valid is False
        assert "cannot exceed" in error

    def test_direct_construction_checked(self):
        config = SimulationConfig("bob", Decimal("1.00"), 3, 2, 1, GrabMode.FAST)
        assert ConfigRules().validate(config) == (True, None)

    @pytest.mark.parametrize("total", ["nan", "inf", "-inf"])
    def test_non_finite_total(self, make_config, total):
        valid, error = ConfigRules().validate(make_config(total_amount=total))
        assert valid is False
        assert "finite" in error
