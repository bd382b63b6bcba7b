"""Input validation for simulation configs."""

from decimal import Decimal
from typing import Optional, Tuple


class ValidationError(Exception):
    """Raised when a simulation config is rejected."""

    pass


class ConfigRules:
    """Checks a config before any round is simulated."""

    def validate(self, config) -> Tuple[bool, Optional[str]]:
        """
        Validate a :class:`SimulationConfig`.

        Returns:
            (is_valid, error_message) - (True, None) if valid
        """
        if not config.participant_name or not config.participant_name.strip():
            return False, "Participant name is required"

        if isinstance(config.total_amount, Decimal) and not config.total_amount.is_finite():
            return False, f"total_amount must be a finite number (got {config.total_amount})"

        numeric_fields = (
            ("total_amount", config.total_amount),
            ("group_size", config.group_size),
            ("share_count", config.share_count),
            ("round_count", config.round_count),
        )
        for field_name, value in numeric_fields:
            if value is None or value <= 0:
                return False, f"{field_name} must be greater than 0 (got {value})"

        if config.share_count > config.group_size:
            return False, (
                f"share_count ({config.share_count}) cannot exceed "
                f"group_size ({config.group_size})"
            )

        return True, None
