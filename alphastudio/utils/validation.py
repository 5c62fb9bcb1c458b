"""Input validation helpers.

Row-level parsing problems are raised as :class:`AlphaStudioValidationError`
and converted into diagnostics by the loader.  :func:`validate_bars` runs
integrity checks over an already-loaded sequence and reports every problem
through :mod:`warnings`.
"""

from __future__ import annotations

import math
import warnings
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from alphastudio.data.base import Bar


class AlphaStudioValidationError(ValueError):
    """Raised when input data violates expected invariants."""


def validate_window_range(lo: int, hi: int, name: str) -> None:
    """Check an inclusive integer window range supplied from a CLI or config."""
    if not isinstance(lo, int) or not isinstance(hi, int):
        raise AlphaStudioValidationError(
            f"{name} range bounds must be integers; got {lo!r}..{hi!r}."
        )
    if lo <= 0:
        raise AlphaStudioValidationError(
            f"{name} range must start at a positive window; got {lo}."
        )


def validate_bars(bars: Sequence[Bar]) -> dict:
    """Validate integrity of a loaded bar sequence.

    Checks
    ------
    - Strictly increasing timestamps
    - Finite, positive close prices
    - ``high >= low``
    - Non-negative volume

    Returns a dict ``{"valid": bool, "issues": [...]}``.
    Emits :mod:`warnings` for each problem found.
    """
    if not isinstance(bars, (list, tuple)):
        raise AlphaStudioValidationError(
            f"bars must be a list or tuple; got {type(bars).__name__}."
        )

    issues: list[str] = []

    non_monotonic = sum(
        1 for prev, cur in zip(bars, bars[1:]) if cur.ts_ms <= prev.ts_ms
    )
    if non_monotonic:
        issues.append(f"{non_monotonic} non-monotonic timestamps")

    bad_close = sum(1 for b in bars if not math.isfinite(b.close) or b.close <= 0)
    if bad_close:
        issues.append(f"{bad_close} non-positive close prices")

    inverted = sum(1 for b in bars if b.high < b.low)
    if inverted:
        issues.append(f"{inverted} rows where high < low")

    neg_vol = sum(1 for b in bars if b.volume < 0)
    if neg_vol:
        issues.append(f"{neg_vol} negative volume entries")

    for issue in issues:
        warnings.warn(f"Data integrity: {issue}")

    return {"valid": not issues, "issues": issues}
