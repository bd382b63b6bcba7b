"""Data models for the red envelope simulation engine."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import List, Optional, Tuple

from src.envelope_engine.config import AMOUNT_QUANTUM
from src.envelope_engine.validation import ValidationError


def to_amount(value) -> Decimal:
    """Convert *value* to a Decimal rounded half-up to 2 decimal places.

    NaN and infinities are returned unrounded; validation rejects them.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if not value.is_finite():
        return value
    return value.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)


class GrabMode(str, Enum):
    """When the participant reaches for an envelope in the draw queue."""

    FAST = "fast"
    NORMAL = "normal"
    SLOW = "slow"

    @classmethod
    def parse(cls, value) -> Optional["GrabMode"]:
        """Return the matching mode, or None for anything unrecognized."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


@dataclass(frozen=True)
class SimulationConfig:
    """Inputs for one simulation run."""

    participant_name: str
    total_amount: Decimal
    group_size: int
    share_count: int  # Packet quota
    round_count: int
    mode: Optional[GrabMode] = GrabMode.NORMAL  # None draws from the full queue

    @classmethod
    def create(
        cls,
        participant_name: str,
        total_amount,
        group_size: int,
        share_count: int,
        round_count: int,
        mode=GrabMode.NORMAL,
    ) -> "SimulationConfig":
        """Build a config from raw collector values (name trimmed, amount quantized).

        Raises:
            ValidationError: If a numeric field cannot be converted.
        """
        try:
            amount = to_amount(total_amount)
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError(f"total_amount must be a number (got {total_amount!r})")

        counts = {}
        for field_name, value in (
            ("group_size", group_size),
            ("share_count", share_count),
            ("round_count", round_count),
        ):
            try:
                counts[field_name] = int(value)
            except (ValueError, TypeError):
                raise ValidationError(f"{field_name} must be a whole number (got {value!r})")

        return cls(
            participant_name=(participant_name or "").strip(),
            total_amount=amount,
            mode=GrabMode.parse(mode),
            **counts,
        )


@dataclass(frozen=True)
class Share:
    """A single envelope within a round."""

    holder: str
    amount: Decimal
    position: int  # 1-based
    is_best_luck: bool = False


@dataclass(frozen=True)
class UserOutcome:
    """What happened to the named participant in one round."""

    position: int
    is_success: bool
    amount: Decimal
    fail_reason: Optional[str] = None
    is_best_luck: bool = False


@dataclass(frozen=True)
class RoundRecord:
    """All shares of one round plus the participant's outcome."""

    round_index: int  # 1-based
    shares: Tuple[Share, ...]
    user_outcome: UserOutcome

    @property
    def max_amount(self) -> Decimal:
        return max(share.amount for share in self.shares)

    @property
    def total(self) -> Decimal:
        return sum((share.amount for share in self.shares), Decimal("0.00"))


@dataclass(frozen=True)
class RatingResult:
    """Discrete luck tier."""

    level: str
    description: str


@dataclass(frozen=True)
class SimulationSummary:
    """Aggregate statistics for the named participant over a run."""

    participant_name: str
    round_count: int
    success_count: int
    total_received: Decimal
    best_luck_count: int
    rating: RatingResult
    highest_round: Optional[RoundRecord] = None
    lowest_round: Optional[RoundRecord] = None


@dataclass(frozen=True)
class SimulationResult:
    """Everything a presenter needs from one run."""

    config: SimulationConfig
    records: List[RoundRecord]
    summary: SimulationSummary
