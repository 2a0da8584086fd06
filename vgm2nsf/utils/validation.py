"""
Data validation utilities for conversion options.
"""


class ValidationError(Exception):
    """Raised when conversion input validation fails."""

    pass


def validate_loop_threshold(threshold: float) -> None:
    """
    Validate the loop detection threshold.

    Args:
        threshold: Correlation threshold

    Raises:
        ValidationError: If threshold is outside 0.5-1.0
    """
    if not 0.5 <= threshold <= 1.0:
        raise ValidationError(f"Loop threshold must be 0.5-1.0, got {threshold}")
