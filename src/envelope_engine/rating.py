"""Aggregate statistics and luck rating over a batch of rounds."""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from src.envelope_engine.config import RATING_TIERS, ZERO_SUCCESS_TIER
from src.envelope_engine.models import (
    RatingResult,
    RoundRecord,
    SimulationSummary,
    to_amount,
)

logger = logging.getLogger(__name__)

_OUTCOME_COLUMNS = [
    "round", "position", "is_success", "amount", "is_best_luck", "fail_reason",
]


def records_to_frame(records: Sequence[RoundRecord]) -> pd.DataFrame:
    """One row per round with the participant's outcome.

    ``amount`` keeps its Decimal values (object dtype) so sums stay exact.
    """
    rows = [
        {
            "round": record.round_index,
            "position": record.user_outcome.position,
            "is_success": record.user_outcome.is_success,
            "amount": record.user_outcome.amount,
            "is_best_luck": record.user_outcome.is_best_luck,
            "fail_reason": record.user_outcome.fail_reason,
        }
        for record in records
    ]
    frame = pd.DataFrame(rows, columns=_OUTCOME_COLUMNS)
    return frame.astype({"is_success": bool, "is_best_luck": bool})


class LuckRater:
    """Summarize a participant's run and map it to a luck tier."""

    def rate(self, percentage: Optional[float]) -> RatingResult:
        """Tier for *percentage* (actual / expected average share x 100).

        ``None`` means the participant never got an envelope.
        """
        if percentage is None:
            return RatingResult(*ZERO_SUCCESS_TIER)
        for upper_bound, level, description in RATING_TIERS[:-1]:
            if percentage <= upper_bound:
                return RatingResult(level, description)
        _, level, description = RATING_TIERS[-1]
        return RatingResult(level, description)

    def summarize(
        self,
        participant_name: str,
        records: Sequence[RoundRecord],
        total_amount,
        share_count: int,
    ) -> SimulationSummary:
        """Aggregate the participant's results across *records*.

        Formula::

            expected_average = total_amount / share_count
            actual_average   = total_received / success_count
            percentage       = actual_average / expected_average * 100
        """
        frame = records_to_frame(records)
        successes = frame.loc[frame["is_success"]]

        success_count = len(successes)
        total_received = to_amount(successes["amount"].sum())
        best_luck_count = int(successes["is_best_luck"].sum())

        percentage = None
        if success_count:
            expected_average = Decimal(str(total_amount)) / share_count
            actual_average = total_received / success_count
            percentage = float(actual_average / expected_average * 100)

        rating = self.rate(percentage)
        highest, lowest = find_extreme_rounds(records)

        logger.info(
            "%s: %d/%d successful, received %s, best luck %d times -> %s",
            participant_name,
            success_count,
            len(records),
            total_received,
            best_luck_count,
            rating.level,
        )

        return SimulationSummary(
            participant_name=participant_name,
            round_count=len(records),
            success_count=success_count,
            total_received=total_received,
            best_luck_count=best_luck_count,
            rating=rating,
            highest_round=highest,
            lowest_round=lowest,
        )


def find_extreme_rounds(
    records: Sequence[RoundRecord],
) -> Tuple[Optional[RoundRecord], Optional[RoundRecord]]:
    """First successful rounds with the highest and lowest received amount.

    Returns ``(None, None)`` when the participant never succeeded.
    """
    successful: List[RoundRecord] = [
        r for r in records if r.user_outcome.is_success
    ]
    if not successful:
        return None, None

    highest = max(successful, key=lambda r: r.user_outcome.amount)
    lowest = min(successful, key=lambda r: r.user_outcome.amount)
    return highest, lowest
