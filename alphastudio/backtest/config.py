"""Strategy parameter dataclass."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class MAParams:
    """Immutable configuration for a moving-average crossover run.

    Parameters
    ----------
    fast : int
        Window of the short moving average.
    slow : int
        Window of the long moving average.  A run is only valid when
        ``0 < fast < slow``.
    fee_bps : float
        Commission per fill in basis points of the traded price.
    slippage_bps : float
        Slippage per fill in basis points of the traded price.
    """

    fast: int = 20
    slow: int = 50
    fee_bps: float = 1.0
    slippage_bps: float = 2.0

    @property
    def is_valid(self) -> bool:
        return 0 < self.fast < self.slow

    def with_windows(self, fast: int, slow: int) -> MAParams:
        """Copy with new windows and the same costs."""
        return replace(self, fast=fast, slow=slow)
