"""Success/failure model for the named participant."""

import logging
import random
from typing import Iterable, List, Optional, Sequence, Tuple

from src.envelope_engine.config import (
    FAILURE_RATE_DIVISOR,
    MAX_FAILURE_RATE,
    PRIVILEGED_NAMES,
)
from src.envelope_engine.models import GrabMode

logger = logging.getLogger(__name__)


class OutcomeResolver:
    """Decide whether the participant gets an envelope.

    Only slow grabbers can miss out; the chance grows with the number of
    group members who will not get a share. Privileged participants
    always succeed and are handed the round's largest share.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        privileged_names: Optional[Iterable[str]] = None,
    ):
        self.rng = rng or random.Random()
        if privileged_names is None:
            privileged_names = PRIVILEGED_NAMES
        self.privileged_names = frozenset(name.lower() for name in privileged_names)

    def is_privileged(self, participant_name: str) -> bool:
        """Case-insensitive exact match against the allow-list."""
        return participant_name.lower() in self.privileged_names

    @staticmethod
    def calculate_failure_rate(mode, group_size: int, share_count: int) -> float:
        """Failure probability in percent (0-100).

        Formula::

            slow:  clamp((group_size - share_count) / 7, 0, 100)
            other: 0
        """
        if GrabMode.parse(mode) is not GrabMode.SLOW:
            return 0.0
        rate = (group_size - share_count) / FAILURE_RATE_DIVISOR
        return max(0.0, min(MAX_FAILURE_RATE, rate))

    def resolve(
        self,
        mode,
        group_size: int,
        share_count: int,
        participant_is_privileged: bool,
    ) -> Tuple[bool, float]:
        """Resolve one attempt.

        Returns:
            ``(is_success, failure_rate_percent)``
        """
        failure_rate = self.calculate_failure_rate(mode, group_size, share_count)

        if participant_is_privileged or failure_rate <= 0:
            return True, failure_rate

        draw = self.rng.random() * 100
        return draw > failure_rate, failure_rate

    @staticmethod
    def grant_best_share(amounts: Sequence, position: int) -> List:
        """Swap the first largest amount into *position* (1-based).

        Returns a new list; *amounts* is left untouched.
        """
        swapped = list(amounts)
        max_index = swapped.index(max(swapped))
        user_index = position - 1
        swapped[max_index], swapped[user_index] = swapped[user_index], swapped[max_index]
        return swapped
