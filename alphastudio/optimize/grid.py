"""Grid search over fast/slow moving-average windows.

Every dataset is loaded once and reused for the whole grid.  Each
``(fast, slow)`` cell runs the simulator on every dataset, scores each run
with :func:`score_run` and averages the scores.  The best average wins;
ties keep the first cell in iteration order (fast ascending, then slow
ascending), including when cells are evaluated on a thread pool.
"""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, Sequence

import numpy as np
import pandas as pd

from alphastudio.backtest.config import MAParams
from alphastudio.backtest.engine import BacktestResult, run_ma_crossover
from alphastudio.data.base import Bar
from alphastudio.data.csv_loader import load

SCORE_COLUMNS = ["fast", "slow", "score"]

ProgressCallback = Callable[[float], None]


def _empty_scores() -> pd.DataFrame:
    return pd.DataFrame(
        {"fast": pd.Series(dtype=int), "slow": pd.Series(dtype=int),
         "score": pd.Series(dtype=float)}
    )


@dataclass
class OptResult:
    """Best window pair found by the grid search.

    Attributes
    ----------
    best_fast, best_slow : int
        Winning windows; ``best_fast == 0`` means nothing was scored.
    best_score : float or None
        Mean score of the winner, ``None`` until a cell is scored.
    evaluated : int
        Number of grid cells that produced a score.
    datasets : int
        Number of datasets that loaded successfully.
    scores : DataFrame
        Columns ``fast, slow, score`` for every scored cell, in
        iteration order.
    """

    best_fast: int = 0
    best_slow: int = 0
    best_score: float | None = None
    evaluated: int = 0
    datasets: int = 0
    scores: pd.DataFrame = field(default_factory=_empty_scores)

    @property
    def found(self) -> bool:
        return self.best_fast != 0

    def best_params(self, base: MAParams) -> MAParams | None:
        """*base* with the winning windows, or ``None`` if nothing was found."""
        if not self.found:
            return None
        return base.with_windows(self.best_fast, self.best_slow)


def score_run(result: BacktestResult) -> float:
    """Drawdown-penalised return: ``pnl / (1 + max_dd)``."""
    return result.pnl / (1.0 + result.max_dd)


def load_datasets(paths: Iterable[str | Path]) -> list[list[Bar]]:
    """Load each path once, dropping any that error or come back empty."""
    datasets: list[list[Bar]] = []
    for path in paths:
        result = load(path)
        if result.error is not None or not result.bars:
            continue
        datasets.append(result.bars)
    return datasets


def grid_cells(
    fast_min: int, fast_max: int, slow_min: int, slow_max: int
) -> Iterator[tuple[int, int]]:
    """Yield ``(fast, slow)`` pairs with ``0 < fast < slow`` in search order.

    Slow windows start at ``max(slow_min, fast + 1)`` so no invalid pair
    is produced.  Non-positive fast windows are skipped.
    """
    for fast in range(max(fast_min, 1), fast_max + 1):
        for slow in range(max(slow_min, fast + 1), slow_max + 1):
            yield fast, slow


def evaluate_cell(
    datasets: Sequence[Sequence[Bar]], params: MAParams
) -> float | None:
    """Mean score of *params* across *datasets*.

    Non-finite per-dataset scores are left out of the mean; ``None`` when
    no dataset produced a finite score.
    """
    scores = [score_run(run_ma_crossover(bars, params)) for bars in datasets]
    finite = [s for s in scores if math.isfinite(s)]
    if not finite:
        return None
    return float(np.mean(finite))


def search_datasets(
    datasets: Sequence[Sequence[Bar]],
    base: MAParams,
    fast_min: int,
    fast_max: int,
    slow_min: int,
    slow_max: int,
    max_workers: int | None = None,
    progress: ProgressCallback | None = None,
) -> OptResult:
    """Grid search over already-loaded datasets.

    Parameters
    ----------
    datasets : sequence of bar sequences
        Read-only; shared by every cell.
    base : MAParams
        Supplies ``fee_bps`` and ``slippage_bps``; its windows are ignored.
    fast_min, fast_max, slow_min, slow_max : int
        Inclusive window ranges.
    max_workers : int, optional
        Evaluate cells on a thread pool of this size when greater than 1.
    progress : callable, optional
        Called with the completed fraction (0-1) after each cell.
    """
    out = OptResult(datasets=len(datasets))
    if not datasets:
        return out

    cells = list(grid_cells(fast_min, fast_max, slow_min, slow_max))

    def _evaluate(cell: tuple[int, int]) -> float | None:
        return evaluate_cell(datasets, base.with_windows(*cell))

    rows: list[tuple[int, int, float]] = []
    executor = None
    if max_workers is not None and max_workers > 1:
        executor = ThreadPoolExecutor(max_workers=max_workers)
        cell_scores = executor.map(_evaluate, cells)
    else:
        cell_scores = map(_evaluate, cells)

    try:
        # Results arrive in cell order, so the strict ">" keeps the first of
        # equal scores whether or not a pool is used.
        for done, (cell, score) in enumerate(zip(cells, cell_scores), start=1):
            if progress is not None:
                progress(done / len(cells))
            if score is None:
                continue
            fast, slow = cell
            rows.append((fast, slow, score))
            if out.best_score is None or score > out.best_score:
                out.best_score = score
                out.best_fast = fast
                out.best_slow = slow
    finally:
        if executor is not None:
            executor.shutdown(wait=True)

    out.evaluated = len(rows)
    if rows:
        out.scores = pd.DataFrame(rows, columns=SCORE_COLUMNS)
    return out


def grid_search_fast_slow(
    csv_paths: Iterable[str | Path],
    base: MAParams,
    fast_min: int,
    fast_max: int,
    slow_min: int,
    slow_max: int,
    max_workers: int | None = None,
    progress: ProgressCallback | None = None,
) -> OptResult:
    """Find the window pair with the best mean score across files.

    Files that fail to load are dropped from the pool.  Returns an
    :class:`OptResult` with ``best_fast == 0`` when no file loads or no
    valid pair lies within the ranges.
    """
    datasets = load_datasets(csv_paths)
    return search_datasets(
        datasets, base, fast_min, fast_max, slow_min, slow_max,
        max_workers=max_workers, progress=progress,
    )


def optimize(
    paths: Iterable[str | Path],
    base: MAParams,
    fast_range: tuple[int, int],
    slow_range: tuple[int, int],
    **kwargs,
) -> OptResult:
    """Range-tuple form of :func:`grid_search_fast_slow`."""
    return grid_search_fast_slow(
        paths, base, fast_range[0], fast_range[1], slow_range[0], slow_range[1],
        **kwargs,
    )
