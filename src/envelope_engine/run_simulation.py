"""Run a complete red envelope simulation.

Usage:
    python -m src.envelope_engine.run_simulation NAME TOTAL GROUP SHARES [ROUNDS] [MODE] [--seed N]

Examples:
    python -m src.envelope_engine.run_simulation alice 100 50 10 20 slow
    python -m src.envelope_engine.run_simulation alice 88.88 30 8 5 fast --seed 7
"""

import json
import logging
import random
import sys
from typing import Iterable, Optional

from src.envelope_engine.batch_runner import BatchRunner
from src.envelope_engine.config import DEFAULT_MODE, DEFAULT_ROUND_COUNT
from src.envelope_engine.models import (
    RoundRecord,
    SimulationConfig,
    SimulationResult,
)
from src.envelope_engine.rating import LuckRater
from src.envelope_engine.validation import ConfigRules, ValidationError
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def run_simulation(
    config: SimulationConfig,
    rng: Optional[random.Random] = None,
    privileged_names: Optional[Iterable[str]] = None,
) -> SimulationResult:
    """Validate *config*, simulate every round and summarize the run.

    Args:
        config: Simulation inputs.
        rng: Random generator shared by every round. A fresh unseeded
            generator is used when omitted.
        privileged_names: Overrides the built-in privileged allow-list.

    Returns:
        :class:`SimulationResult` with the round records and summary.

    Raises:
        ValidationError: If the config is invalid. No rounds are run.
    """
    is_valid, error = ConfigRules().validate(config)
    if not is_valid:
        logger.warning("Rejected simulation config: %s", error)
        raise ValidationError(error)

    logger.info(
        "Starting simulation: %s, %d rounds",
        config.participant_name, config.round_count,
    )

    records = BatchRunner(rng, privileged_names).run(config)
    summary = LuckRater().summarize(
        config.participant_name,
        records,
        config.total_amount,
        config.share_count,
    )
    return SimulationResult(config=config, records=records, summary=summary)


def _round_to_dict(record: Optional[RoundRecord]) -> Optional[dict]:
    if record is None:
        return None
    outcome = record.user_outcome
    return {
        "round": record.round_index,
        "shares": [
            {
                "holder": share.holder,
                "amount": str(share.amount),
                "position": share.position,
                "is_best_luck": share.is_best_luck,
            }
            for share in record.shares
        ],
        "user_result": {
            "position": outcome.position,
            "is_success": outcome.is_success,
            "amount": str(outcome.amount),
            "fail_reason": outcome.fail_reason,
            "is_best_luck": outcome.is_best_luck,
        },
    }


def result_to_dict(result: SimulationResult) -> dict:
    """Convert *result* into plain JSON-serializable data for presenters."""
    summary = result.summary
    return {
        "summary": {
            "participant_name": summary.participant_name,
            "round_count": summary.round_count,
            "success_count": summary.success_count,
            "total_received": str(summary.total_received),
            "best_luck_count": summary.best_luck_count,
            "rating": {
                "level": summary.rating.level,
                "description": summary.rating.description,
            },
            "highest_round": _round_to_dict(summary.highest_round),
            "lowest_round": _round_to_dict(summary.lowest_round),
        },
        "rounds": [_round_to_dict(record) for record in result.records],
    }


def _parse_args(argv):
    args = list(argv)
    seed = None
    if "--seed" in args:
        idx = args.index("--seed")
        seed = int(args[idx + 1])
        del args[idx:idx + 2]

    if len(args) < 4:
        raise ValueError(
            "expected NAME TOTAL GROUP SHARES [ROUNDS] [MODE] [--seed N]"
        )

    name, total, group, shares = args[:4]
    rounds = args[4] if len(args) > 4 else DEFAULT_ROUND_COUNT
    mode = args[5] if len(args) > 5 else DEFAULT_MODE
    config = SimulationConfig.create(name, total, group, shares, rounds, mode)
    return config, seed


if __name__ == "__main__":
    setup_logging()

    try:
        config, seed = _parse_args(sys.argv[1:])
        result = run_simulation(config, rng=random.Random(seed))
        print(json.dumps(result_to_dict(result), ensure_ascii=False, indent=2))
    except (ValidationError, ValueError, IndexError) as exc:
        logger.error("Invalid input: %s", exc)
        sys.exit(1)
    except Exception:
        logger.exception("Simulation failed")
        sys.exit(1)
