"""Shared fixtures for the envelope engine test suite."""

import random

import pytest

from src.envelope_engine.models import GrabMode, SimulationConfig


@pytest.fixture
def rng():
    """Seeded generator so every test run draws the same numbers."""
    return random.Random(20240210)


@pytest.fixture
def make_config():
    """Factory for valid configs with per-test overrides."""

    def _make(**overrides):
        defaults = {
            "participant_name": "alice",
            "total_amount": "100",
            "group_size": 50,
            "share_count": 10,
            "round_count": 20,
            "mode": GrabMode.NORMAL,
        }
        defaults.update(overrides)
        return SimulationConfig.create(**defaults)

    return _make
