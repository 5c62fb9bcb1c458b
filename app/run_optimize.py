"""CLI entrypoint for the fast/slow window grid search.

Usage:
    python -m app.run_optimize data/AAPL.csv data/MSFT.csv
    python -m app.run_optimize data/*.csv --fast-min 5 --fast-max 30 --workers 4
"""
from __future__ import annotations

import argparse

from alphastudio.optimize import grid_search_fast_slow
from alphastudio.utils.validation import AlphaStudioValidationError, validate_window_range

from app.config import StudioConfig


def build_parser() -> argparse.ArgumentParser:
    defaults = StudioConfig()
    parser = argparse.ArgumentParser(description="alphastudio Window Grid Search")
    parser.add_argument("paths", nargs="+", help="Bar files; unloadable files are skipped")
    parser.add_argument("--fast-min", type=int, default=defaults.fast_min)
    parser.add_argument("--fast-max", type=int, default=defaults.fast_max)
    parser.add_argument("--slow-min", type=int, default=defaults.slow_min)
    parser.add_argument("--slow-max", type=int, default=defaults.slow_max)
    parser.add_argument("--fee-bps", type=float, default=defaults.fee_bps)
    parser.add_argument("--slippage-bps", type=float, default=defaults.slippage_bps)
    parser.add_argument("--workers", type=int, default=defaults.max_workers)
    parser.add_argument("--top", type=int, default=10, help="Number of ranked cells to print")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = StudioConfig(
        data_files=tuple(args.paths),
        fee_bps=args.fee_bps,
        slippage_bps=args.slippage_bps,
        fast_min=args.fast_min,
        fast_max=args.fast_max,
        slow_min=args.slow_min,
        slow_max=args.slow_max,
        max_workers=args.workers,
    )
    try:
        validate_window_range(config.fast_min, config.fast_max, "fast")
        validate_window_range(config.slow_min, config.slow_max, "slow")
    except AlphaStudioValidationError as e:
        parser.error(str(e))

    result = grid_search_fast_slow(
        config.data_files,
        config.ma_params(),
        config.fast_min,
        config.fast_max,
        config.slow_min,
        config.slow_max,
        max_workers=config.max_workers,
    )

    print("\n" + "=" * 50)
    print("GRID SEARCH COMPLETE")
    print("=" * 50)
    print(f"  Datasets used:   {result.datasets} of {len(config.data_files)}")
    print(f"  Cells scored:    {result.evaluated}")
    if not result.found:
        print("  No valid combination found.")
        print("=" * 50)
        return 1
    print(f"  Best fast:       {result.best_fast}")
    print(f"  Best slow:       {result.best_slow}")
    print(f"  Best score:      {result.best_score:.4f}")
    print("=" * 50)

    ranked = result.scores.sort_values("score", ascending=False, kind="stable")
    print(f"\nTOP {args.top} CELLS (score = pnl / (1 + max_dd), mean over datasets):")
    print(ranked.head(args.top).to_string(index=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
