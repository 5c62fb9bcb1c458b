"""Drawdown tracking and analysis.

Drawdown is measured in absolute equity units (peak minus current), never
as a percentage.
"""

from __future__ import annotations

import pandas as pd


class DrawdownTracker:
    """Tracks the running equity peak and the largest drawdown seen.

    Args:
        initial_peak: Peak level before the first update (the starting
            equity of the account).
    """

    def __init__(self, initial_peak: float = 0.0) -> None:
        self._peak_equity: float = initial_peak
        self._current_equity: float = initial_peak
        self._max_drawdown: float = 0.0

    def update(self, equity: float) -> float:
        """Record the latest equity and return the running max drawdown."""
        self._current_equity = equity
        if equity > self._peak_equity:
            self._peak_equity = equity
        dd = self._peak_equity - equity
        if dd > self._max_drawdown:
            self._max_drawdown = dd
        return self._max_drawdown

    @property
    def peak_equity(self) -> float:
        """Highest equity recorded."""
        return self._peak_equity

    @property
    def current_equity(self) -> float:
        return self._current_equity

    @property
    def drawdown(self) -> float:
        """Current distance below the peak (non-negative)."""
        return self._peak_equity - self._current_equity

    @property
    def max_drawdown(self) -> float:
        """Largest drawdown recorded so far (non-negative)."""
        return self._max_drawdown


def drawdown_series(equity: pd.Series, initial_peak: float = 0.0) -> pd.Series:
    """Absolute drawdown at each point of an equity curve.

    Returns
    -------
    Series
        ``running_peak - equity`` (non-negative; 0 at peaks), same index.
    """
    running_max = equity.cummax().clip(lower=initial_peak)
    return running_max - equity


def max_drawdown(equity: pd.Series, initial_peak: float = 0.0) -> float:
    """Largest absolute drawdown of an equity curve (0 for an empty curve)."""
    if len(equity) == 0:
        return 0.0
    return float(drawdown_series(equity, initial_peak).max())
