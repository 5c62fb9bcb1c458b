"""Moving-average crossover simulator.

Timing convention:
    1. Both averages are computed over closing prices; a bar takes part only
       once the slow window has filled.
    2. The signal is evaluated at the **close** of bar *t* and filled at the
       same close, with fee and slippage applied to the fill.
    3. Equity is marked at that close after any fill.

The strategy holds at most one unit long.  It starts flat with zero cash,
so ``pnl`` (the final equity) is the net profit of the run.  An open
position at the end is marked to the last close, not liquidated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import pandas as pd

from alphastudio.backtest.config import MAParams
from alphastudio.backtest.costs import BUY, SELL, costed_fill
from alphastudio.data.base import Bar
from alphastudio.features.rolling import close_sma
from alphastudio.risk.drawdown import DrawdownTracker, drawdown_series


@dataclass(frozen=True)
class BacktestPoint:
    """One sample of the equity curve."""

    ts_ms: int
    px: float
    equity: float


@dataclass(frozen=True)
class Trade:
    """A position change.

    Attributes
    ----------
    idx : int
        Index of the bar in the input sequence.
    ts_ms : int
        Timestamp of that bar.
    px : float
        Traded price before costs.
    dir : int
        ``+1`` for an open (buy), ``-1`` for a close (sell).
    """

    idx: int
    ts_ms: int
    px: float
    dir: int


@dataclass(frozen=True)
class BacktestResult:
    """Container for backtest outputs.

    Attributes
    ----------
    curve : tuple of BacktestPoint
        One point per bar with both averages defined, in time order.
    trades : tuple of Trade
        Fills in time order; directions alternate starting with a buy.
    pnl : float
        Ending equity, including any open position at the last close.
    max_dd : float
        Largest absolute drawdown of the curve.
    sharpe : float
        Always 0.0.  Reserved; not a computed ratio.
    params : MAParams or None
        The parameters of the run.
    """

    curve: tuple[BacktestPoint, ...] = ()
    trades: tuple[Trade, ...] = ()
    pnl: float = 0.0
    max_dd: float = 0.0
    sharpe: float = 0.0
    params: MAParams | None = field(default=None, compare=False)

    def curve_frame(self) -> pd.DataFrame:
        """Equity curve as a DataFrame indexed by UTC timestamp.

        Columns are ``price``, ``equity`` and ``drawdown`` (absolute).
        """
        index = pd.to_datetime([p.ts_ms for p in self.curve], unit="ms", utc=True)
        df = pd.DataFrame(
            {
                "price": [p.px for p in self.curve],
                "equity": [p.equity for p in self.curve],
            },
            index=index.rename("date"),
        )
        df["drawdown"] = drawdown_series(df["equity"])
        return df

    def trades_frame(self) -> pd.DataFrame:
        """Trade log with columns ``date, idx, price, direction``."""
        return pd.DataFrame(
            {
                "date": pd.to_datetime([t.ts_ms for t in self.trades], unit="ms", utc=True),
                "idx": [t.idx for t in self.trades],
                "price": [t.px for t in self.trades],
                "direction": [t.dir for t in self.trades],
            }
        )

    def summary(self) -> dict:
        return {
            "pnl": self.pnl,
            "max_dd": self.max_dd,
            "sharpe": self.sharpe,
            "num_trades": len(self.trades),
            "num_points": len(self.curve),
        }


def run_ma_crossover(bars: Sequence[Bar], params: MAParams) -> BacktestResult:
    """Run a long-only moving-average crossover backtest.

    Parameters
    ----------
    bars : sequence of Bar
        Bars in ascending time order.
    params : MAParams
        Windows and per-fill costs.

    Returns
    -------
    BacktestResult
        Empty (all zeros) when *bars* is empty or the windows are not
        ``0 < fast < slow``.
    """
    if not bars or not params.is_valid:
        return BacktestResult(params=params)

    fast_ma = close_sma(bars, params.fast)
    slow_ma = close_sma(bars, params.slow)

    position = 0
    cash = 0.0
    equity = 0.0
    tracker = DrawdownTracker(initial_peak=0.0)
    curve: list[BacktestPoint] = []
    trades: list[Trade] = []

    for i, bar in enumerate(bars):
        fast, slow = fast_ma[i], slow_ma[i]
        if fast is None or slow is None:
            continue

        px = bar.close
        if position == 0 and fast > slow:
            cash -= costed_fill(px, BUY, params)
            position = 1
            trades.append(Trade(i, bar.ts_ms, px, BUY))
        elif position == 1 and fast < slow:
            cash += costed_fill(px, SELL, params)
            position = 0
            trades.append(Trade(i, bar.ts_ms, px, SELL))

        equity = cash + position * px
        tracker.update(equity)
        curve.append(BacktestPoint(bar.ts_ms, px, equity))

    return BacktestResult(
        curve=tuple(curve),
        trades=tuple(trades),
        pnl=equity,
        max_dd=tracker.max_drawdown,
        sharpe=0.0,
        params=params,
    )


backtest = run_ma_crossover
