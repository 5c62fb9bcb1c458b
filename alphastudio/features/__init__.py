"""Feature engineering: moving averages over bar sequences."""

from alphastudio.features.rolling import close_sma, rolling_mean

__all__ = ["rolling_mean", "close_sma"]
