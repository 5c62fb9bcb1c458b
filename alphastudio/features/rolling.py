"""Rolling statistics over bar sequences.

Warm-up positions are ``None`` rather than NaN so that "not enough history
yet" can never be confused with a computed value.
"""

from __future__ import annotations

from typing import Sequence

from alphastudio.data.base import Bar


def rolling_mean(values: Sequence[float], window: int) -> list[float | None]:
    """Simple moving average using a running window sum.

    Each step adds the newest value and subtracts the one leaving the
    window, so the cost is linear in ``len(values)`` for any *window*.

    Returns
    -------
    list
        Same length as *values*; the first ``window - 1`` entries are
        ``None``.  All entries are ``None`` when ``window <= 0``.
    """
    out: list[float | None] = [None] * len(values)
    if window <= 0:
        return out
    total = 0.0
    for i, value in enumerate(values):
        total += value
        if i >= window:
            total -= values[i - window]
        if i + 1 >= window:
            out[i] = total / window
    return out


def close_sma(bars: Sequence[Bar], window: int) -> list[float | None]:
    """Simple moving average of closing prices."""
    return rolling_mean([b.close for b in bars], window)
