"""Random amount splitting using the double-average method.

Each share except the last is drawn uniformly from
``(0, 2 * remaining_amount / remaining_count]`` and clamped so every later
share can still receive the minimum of 0.01. The last share takes exactly
what is left, so the shares always sum to the total.
"""

import logging
import random
from decimal import Decimal
from typing import List, Optional

from src.envelope_engine.config import MIN_SHARE
from src.envelope_engine.models import to_amount

logger = logging.getLogger(__name__)


class AmountAllocator:
    """Split a total amount into randomly sized positive shares."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def allocate(self, total_amount, share_count: int) -> List[Decimal]:
        """Split *total_amount* into *share_count* shares.

        Args:
            total_amount: Amount to split. Quantized to 0.01 (half-up).
            share_count: Number of shares, at least 1.

        Returns:
            List of ``share_count`` Decimals summing exactly to the
            quantized total.

        Raises:
            ValueError: If ``share_count`` is less than 1.
        """
        if share_count < 1:
            raise ValueError(f"share_count must be at least 1, got {share_count}")

        total = to_amount(total_amount)
        if total < MIN_SHARE * share_count:
            # Not enough to give everyone 0.01; the final share may go below it.
            logger.warning(
                "Total %s cannot cover %d shares of %s; final share may fall short",
                total, share_count, MIN_SHARE,
            )

        shares: List[Decimal] = []
        remaining_amount = total
        remaining_count = share_count

        while remaining_count > 1:
            amount = self._draw(remaining_amount, remaining_count)
            shares.append(amount)
            remaining_amount -= amount
            remaining_count -= 1

        shares.append(to_amount(remaining_amount))

        logger.debug("Allocated %s into %d shares: %s", total, share_count, shares)
        return shares

    def _draw(self, remaining_amount: Decimal, remaining_count: int) -> Decimal:
        """Draw one non-final share, clamped to leave room for the rest."""
        upper = remaining_amount / remaining_count * 2
        draw = Decimal(str(self.rng.random())) * upper
        ceiling = remaining_amount - MIN_SHARE * (remaining_count - 1)
        return to_amount(max(MIN_SHARE, min(draw, ceiling)))
