"""CLI entrypoint for a single crossover backtest.

Usage:
    python -m app.run_backtest sample_data/spy_1min.csv
    python -m app.run_backtest data/AAPL.csv --fast 10 --slow 30 --fee-bps 0.5
"""
from __future__ import annotations

import argparse

from alphastudio.backtest import run_ma_crossover
from alphastudio.data import load
from alphastudio.utils.validation import validate_bars

from app.config import StudioConfig


def build_parser() -> argparse.ArgumentParser:
    defaults = StudioConfig()
    parser = argparse.ArgumentParser(description="alphastudio MA Crossover Backtest")
    parser.add_argument("path", help="Bar file (ts_ms or Date,Close/Last layout)")
    parser.add_argument("--fast", type=int, default=defaults.fast, help="Fast MA window")
    parser.add_argument("--slow", type=int, default=defaults.slow, help="Slow MA window")
    parser.add_argument("--fee-bps", type=float, default=defaults.fee_bps)
    parser.add_argument("--slippage-bps", type=float, default=defaults.slippage_bps)
    parser.add_argument("--trades", action="store_true", help="Print the trade log")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = StudioConfig(
        data_files=(args.path,),
        fast=args.fast,
        slow=args.slow,
        fee_bps=args.fee_bps,
        slippage_bps=args.slippage_bps,
    )

    loaded = load(args.path)
    print(f"Bars loaded: {len(loaded.bars)}")
    if loaded.warning:
        print(f"WARN: {loaded.warning} ({len(loaded.warnings)} total)")
    if loaded.error:
        print(f"ERR: {loaded.error}")
        return 1

    # Integrity problems are reported as warnings on stderr.
    validate_bars(loaded.bars)

    params = config.ma_params()
    if not params.is_valid:
        print("Fast must be < Slow")
        return 2

    result = run_ma_crossover(loaded.bars, params)
    s = result.summary()
    print("\n" + "=" * 50)
    print(f"MA CROSSOVER  fast={params.fast}  slow={params.slow}")
    print("=" * 50)
    print(f"  PnL:                   {s['pnl']:.2f}")
    print(f"  Max DD:                {s['max_dd']:.2f}")
    print(f"  Sharpe (placeholder):  {s['sharpe']:.2f}")
    print(f"  Trades:                {s['num_trades']}")
    print(f"  Curve points:          {s['num_points']}")
    print("=" * 50)

    if args.trades and result.trades:
        print(result.trades_frame().to_string(index=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
