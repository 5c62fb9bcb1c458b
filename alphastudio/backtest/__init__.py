"""Crossover backtesting engine with transaction cost modelling."""

from alphastudio.backtest.config import MAParams
from alphastudio.backtest.costs import cost_rate, costed_fill
from alphastudio.backtest.engine import (
    BacktestPoint,
    BacktestResult,
    Trade,
    backtest,
    run_ma_crossover,
)

__all__ = [
    "MAParams",
    "cost_rate",
    "costed_fill",
    "BacktestPoint",
    "BacktestResult",
    "Trade",
    "backtest",
    "run_ma_crossover",
]
