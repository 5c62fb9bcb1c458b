"""Directory-backed market data provider.

Reads one ``<TICKER>.csv`` file per instrument through :func:`load` and
stacks the results into a single DataFrame.  Either supported layout may be
used, and layouts may be mixed within a directory.

This module also exposes :func:`generate_synthetic`, which creates
realistic-looking random bars useful for unit tests and demos.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd

from alphastudio.data.base import Bar, bars_to_frame
from alphastudio.data.csv_loader import load
from alphastudio.utils.validation import AlphaStudioValidationError

DAY_MS = 86_400_000


def _as_utc(ts: str | pd.Timestamp) -> pd.Timestamp:
    stamp = pd.Timestamp(ts)
    if stamp.tzinfo is None:
        return stamp.tz_localize("UTC")
    return stamp.tz_convert("UTC")


class BarDirectoryProvider:
    """Read bars from one CSV file per ticker.

    Parameters
    ----------
    directory : str or Path
        Folder containing ``<TICKER>.csv`` files.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        if not self.directory.is_dir():
            raise AlphaStudioValidationError(
                f"CSV directory does not exist: {self.directory}"
            )

    def path_for(self, ticker: str) -> Path:
        return self.directory / f"{ticker}.csv"

    def fetch(
        self,
        tickers: Sequence[str],
        start: str | pd.Timestamp | None = None,
        end: str | pd.Timestamp | None = None,
    ) -> pd.DataFrame:
        """Load the given tickers, optionally clipped to ``[start, end]``.

        Returns
        -------
        DataFrame
            MultiIndex ``(date, ticker)`` with columns
            ``open, high, low, close, volume``.
        """
        parts: list[pd.DataFrame] = []
        for ticker in tickers:
            path = self.path_for(ticker)
            if not path.exists():
                raise AlphaStudioValidationError(f"CSV file not found: {path}")
            result = load(path)
            if result.error is not None:
                raise AlphaStudioValidationError(f"{path}: {result.error}")
            df = bars_to_frame(result.bars)
            if start is not None:
                df = df[df.index >= _as_utc(start)]
            if end is not None:
                df = df[df.index <= _as_utc(end)]
            parts.append(df.assign(ticker=ticker).set_index("ticker", append=True))
        if not parts:
            raise AlphaStudioValidationError("No data fetched: empty ticker list.")
        return pd.concat(parts).sort_index()


def generate_synthetic(
    n_bars: int = 500,
    start_ms: int = 1_577_923_200_000,
    step_ms: int = DAY_MS,
    seed: int = 42,
    start_price: float = 100.0,
) -> list[Bar]:
    """Generate synthetic OHLCV bars for testing.

    Prices follow geometric Brownian motion with drift and volatility drawn
    from realistic daily ranges.

    Parameters
    ----------
    n_bars : int
        Number of bars to produce.
    start_ms : int
        Timestamp of the first bar (default 2020-01-02 UTC).
    step_ms : int
        Spacing between bars.
    seed : int
        Random seed for reproducibility.
    start_price : float
        Level the close series starts from.

    Returns
    -------
    list of Bar
        Strictly ascending timestamps.
    """
    if n_bars < 0:
        raise AlphaStudioValidationError(f"n_bars must be non-negative; got {n_bars}.")
    if step_ms <= 0:
        raise AlphaStudioValidationError(f"step_ms must be positive; got {step_ms}.")
    rng = np.random.default_rng(seed)
    daily_drift = rng.uniform(0.02, 0.12) / 252
    daily_vol = rng.uniform(0.15, 0.45) / np.sqrt(252)
    log_returns = rng.normal(daily_drift, daily_vol, size=n_bars)
    close = start_price * np.exp(np.cumsum(log_returns))
    # Synthetic intraday range
    spread = rng.uniform(0.005, 0.02, size=n_bars) * close
    high = close + spread * rng.uniform(0.3, 1.0, size=n_bars)
    low = np.maximum(close - spread * rng.uniform(0.3, 1.0, size=n_bars), 0.01)
    open_ = np.clip(close * np.exp(rng.normal(0, daily_vol * 0.3, size=n_bars)), low, high)
    volume = rng.integers(100_000, 10_000_000, size=n_bars).astype(float)
    return [
        Bar(
            ts_ms=start_ms + i * step_ms,
            open=float(open_[i]),
            high=float(high[i]),
            low=float(low[i]),
            close=float(close[i]),
            volume=float(volume[i]),
        )
        for i in range(n_bars)
    ]
