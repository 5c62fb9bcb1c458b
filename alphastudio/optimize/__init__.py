"""Parameter search across multiple datasets."""

from alphastudio.optimize.grid import (
    OptResult,
    evaluate_cell,
    grid_cells,
    grid_search_fast_slow,
    load_datasets,
    optimize,
    score_run,
    search_datasets,
)

__all__ = [
    "OptResult",
    "evaluate_cell",
    "grid_cells",
    "grid_search_fast_slow",
    "load_datasets",
    "optimize",
    "score_run",
    "search_datasets",
]
