"""Risk analysis: drawdown tracking."""

from alphastudio.risk.drawdown import (
    DrawdownTracker,
    drawdown_series,
    max_drawdown,
)

__all__ = ["DrawdownTracker", "drawdown_series", "max_drawdown"]
