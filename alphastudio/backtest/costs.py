"""Transaction cost and slippage model."""

from __future__ import annotations

from alphastudio.backtest.config import MAParams

BUY = 1
SELL = -1


def cost_rate(params: MAParams) -> float:
    """Combined fee and slippage as a fraction of the traded price."""
    return (params.fee_bps + params.slippage_bps) / 10_000


def costed_fill(price: float, direction: int, params: MAParams) -> float:
    """Cash value of filling one unit at *price*.

    Buys (``direction=+1``) pay ``price * (1 + rate)``; sells
    (``direction=-1``) receive ``price * (1 - rate)``.  The returned amount
    is always positive; the caller applies the sign to cash.
    """
    rate = cost_rate(params)
    if direction == BUY:
        return price * (1 + rate)
    return price * (1 - rate)
