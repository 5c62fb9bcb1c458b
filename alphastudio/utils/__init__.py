"""Utility helpers: validation."""

from alphastudio.utils.validation import (
    AlphaStudioValidationError,
    validate_bars,
    validate_window_range,
)

__all__ = [
    "AlphaStudioValidationError",
    "validate_bars",
    "validate_window_range",
]
