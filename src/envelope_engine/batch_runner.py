"""Run many independent rounds."""

import logging
import random
from typing import Iterable, List, Optional

from src.envelope_engine.models import RoundRecord, SimulationConfig
from src.envelope_engine.round_simulator import RoundSimulator

logger = logging.getLogger(__name__)


class BatchRunner:
    """Run ``config.round_count`` rounds sequentially.

    Rounds share nothing but the immutable config and the random
    generator, so a seeded generator makes a whole batch reproducible.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        privileged_names: Optional[Iterable[str]] = None,
    ):
        self.round_simulator = RoundSimulator(rng, privileged_names)

    def run(self, config: SimulationConfig) -> List[RoundRecord]:
        records = [
            self.round_simulator.simulate_round(config, round_index)
            for round_index in range(1, config.round_count + 1)
        ]
        logger.info(
            "Simulated %d rounds for %s (%s split %d ways, group of %d, mode=%s)",
            len(records),
            config.participant_name,
            config.total_amount,
            config.share_count,
            config.group_size,
            config.mode.value if config.mode else "any",
        )
        return records
