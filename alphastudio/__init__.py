"""alphastudio: moving-average crossover research toolkit.

Load bars with :func:`load`, simulate with :func:`backtest` and search
window pairs with :func:`optimize`.
"""

from alphastudio.backtest import BacktestResult, MAParams, backtest, run_ma_crossover
from alphastudio.data import Bar, LoadResult, load
from alphastudio.optimize import OptResult, grid_search_fast_slow, optimize

__version__ = "0.1.0"

__all__ = [
    "Bar",
    "LoadResult",
    "load",
    "MAParams",
    "BacktestResult",
    "backtest",
    "run_ma_crossover",
    "OptResult",
    "grid_search_fast_slow",
    "optimize",
]
