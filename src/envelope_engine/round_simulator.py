"""Single-round orchestration: allocate, place, resolve, label."""

import logging
import random
from decimal import Decimal
from typing import Iterable, Optional

from src.envelope_engine.allocator import AmountAllocator
from src.envelope_engine.config import FAIL_REASON, PLACEHOLDER_NAME
from src.envelope_engine.models import RoundRecord, Share, SimulationConfig, UserOutcome
from src.envelope_engine.outcome_resolver import OutcomeResolver
from src.envelope_engine.position_generator import PositionGenerator

logger = logging.getLogger(__name__)


class RoundSimulator:
    """Play one round of envelope grabbing for the configured participant.

    Coordinates AmountAllocator (shares), PositionGenerator (where the
    participant lands) and OutcomeResolver (whether they get anything).
    All three share one random generator.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        privileged_names: Optional[Iterable[str]] = None,
    ):
        self.rng = rng or random.Random()
        self.allocator = AmountAllocator(self.rng)
        self.position_generator = PositionGenerator(self.rng)
        self.resolver = OutcomeResolver(self.rng, privileged_names)

    def simulate_round(self, config: SimulationConfig, round_index: int) -> RoundRecord:
        """Simulate round number *round_index* (1-based)."""
        if round_index < 1:
            raise ValueError(f"round_index must be at least 1, got {round_index}")

        amounts = self.allocator.allocate(config.total_amount, config.share_count)
        position = self.position_generator.generate_position(
            config.mode, config.share_count
        )

        privileged = self.resolver.is_privileged(config.participant_name)
        is_success, failure_rate = self.resolver.resolve(
            config.mode, config.group_size, config.share_count, privileged
        )
        if privileged and is_success:
            amounts = self.resolver.grant_best_share(amounts, position)

        max_amount = max(amounts)
        shares = tuple(
            Share(
                holder=(
                    config.participant_name
                    if is_success and pos == position
                    else PLACEHOLDER_NAME.format(position=pos)
                ),
                amount=amount,
                position=pos,
                is_best_luck=amount == max_amount,
            )
            for pos, amount in enumerate(amounts, start=1)
        )

        user_amount = amounts[position - 1]
        outcome = UserOutcome(
            position=position,
            is_success=is_success,
            amount=user_amount if is_success else Decimal("0.00"),
            fail_reason=None if is_success else FAIL_REASON,
            is_best_luck=is_success and user_amount == max_amount,
        )

        logger.debug(
            "Round %d: %s at position %d/%d (failure rate %.2f%%) -> %s",
            round_index,
            config.participant_name,
            position,
            config.share_count,
            failure_rate,
            outcome.amount if is_success else FAIL_REASON,
        )

        return RoundRecord(round_index=round_index, shares=shares, user_outcome=outcome)
