"""Draw-queue position generation keyed by grab mode."""

import random
from typing import Optional, Tuple

from src.envelope_engine.models import GrabMode


class PositionGenerator:
    """Pick the participant's 1-based position among the shares.

    The queue is split into quarter (``n // 4``) and half (``n // 2``)
    blocks: fast grabbers land in the first quarter, normal ones in the
    middle half, slow ones in the last quarter. An unrecognized mode
    draws from the whole queue.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate_position(self, mode, share_count: int) -> int:
        """Return a position in ``[1, share_count]`` for *mode*.

        Raises:
            ValueError: If ``share_count`` is less than 1.
        """
        if share_count < 1:
            raise ValueError(f"share_count must be at least 1, got {share_count}")

        low, high = self.position_range(mode, share_count)
        return self.rng.randint(low, high)

    @staticmethod
    def position_range(mode, share_count: int) -> Tuple[int, int]:
        """Inclusive ``(low, high)`` bounds for *mode*, clamped into the queue."""
        quarter = share_count // 4
        half = share_count // 2

        grab_mode = GrabMode.parse(mode)
        if grab_mode is GrabMode.FAST:
            low, high = 1, quarter
        elif grab_mode is GrabMode.NORMAL:
            low, high = quarter + 1, quarter + half
        elif grab_mode is GrabMode.SLOW:
            low, high = share_count - quarter + 1, share_count
        else:
            low, high = 1, share_count

        # Small queues give empty ranges (quarter == 0); collapse onto the
        # nearest valid position.
        low = max(1, min(low, high, share_count))
        high = min(share_count, max(low, high))
        return low, high
