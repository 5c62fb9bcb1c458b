"""Command-line run configuration."""
from __future__ import annotations

from dataclasses import dataclass

from alphastudio.backtest import MAParams


@dataclass(frozen=True)
class StudioConfig:
    # Data
    data_files: tuple[str, ...] = ("sample_data/spy_1min.csv",)

    # Strategy
    fast: int = 20
    slow: int = 50
    fee_bps: float = 1.0            # per fill
    slippage_bps: float = 2.0       # per fill

    # Grid search (inclusive ranges)
    fast_min: int = 2
    fast_max: int = 50
    slow_min: int = 5
    slow_max: int = 200
    max_workers: int = 1            # >1 evaluates grid cells on a thread pool

    def ma_params(self) -> MAParams:
        return MAParams(
            fast=self.fast,
            slow=self.slow,
            fee_bps=self.fee_bps,
            slippage_bps=self.slippage_bps,
        )

    def to_dict(self) -> dict:
        return {k: getattr(self, k) for k in self.__dataclass_fields__}
