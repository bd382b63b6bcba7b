from src.envelope_engine.allocator import AmountAllocator
from src.envelope_engine.batch_runner import BatchRunner
from src.envelope_engine.models import (
    GrabMode,
    RatingResult,
    RoundRecord,
    Share,
    SimulationConfig,
    SimulationResult,
    SimulationSummary,
    UserOutcome,
)
from src.envelope_engine.outcome_resolver import OutcomeResolver
from src.envelope_engine.position_generator import PositionGenerator
from src.envelope_engine.rating import LuckRater, find_extreme_rounds, records_to_frame
from src.envelope_engine.round_simulator import RoundSimulator
from src.envelope_engine.validation import ConfigRules, ValidationError

__all__ = [
    "AmountAllocator",
    "BatchRunner",
    "ConfigRules",
    "GrabMode",
    "LuckRater",
    "OutcomeResolver",
    "PositionGenerator",
    "RatingResult",
    "RoundRecord",
    "RoundSimulator",
    "Share",
    "SimulationConfig",
    "SimulationResult",
    "SimulationSummary",
    "UserOutcome",
    "ValidationError",
    "find_extreme_rounds",
    "records_to_frame",
]
