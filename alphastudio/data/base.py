"""Bar and load-result containers shared by the loader and the simulator."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, Sequence

import pandas as pd

BAR_COLUMNS = ["open", "high", "low", "close", "volume"]


@dataclass(frozen=True)
class Bar:
    """One OHLCV sample; ``ts_ms`` is milliseconds since the Unix epoch."""

    ts_ms: int
    open: float
    high: float
    low: float
    close: float
    volume: float


class Schema(str, enum.Enum):
    """Supported input file layouts, detected from the header line."""

    native = "native"              # ts_ms,open,high,low,close,volume
    vendor_daily = "vendor_daily"  # Date,Close/Last,Volume,Open,High,Low


@dataclass
class LoadResult:
    """Outcome of loading one file.

    Attributes
    ----------
    bars : list of Bar
        Parsed bars in ascending time order (empty when *error* is set).
    warnings : list of str
        Every recoverable defect, in the order encountered.
    error : str or None
        Fatal problem that prevented loading.
    schema : Schema or None
        The detected layout, ``None`` if detection never succeeded.
    """

    bars: list[Bar] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: str | None = None
    schema: Schema | None = None

    @property
    def warning(self) -> str | None:
        """Most recent warning, or ``None`` when the load was clean."""
        return self.warnings[-1] if self.warnings else None

    @property
    def ok(self) -> bool:
        return self.error is None and len(self.bars) > 0

    def __iter__(self) -> Iterator:
        # Allows ``bars, warning, error = load(path)``.
        return iter((self.bars, self.warning, self.error))


def bars_to_frame(bars: Sequence[Bar]) -> pd.DataFrame:
    """Convert bars to a DataFrame indexed by UTC timestamp.

    The index is named ``date`` and the columns are
    ``open, high, low, close, volume``.
    """
    index = pd.to_datetime([b.ts_ms for b in bars], unit="ms", utc=True)
    index = index.rename("date")
    return pd.DataFrame(
        {
            "open": [b.open for b in bars],
            "high": [b.high for b in bars],
            "low": [b.low for b in bars],
            "close": [b.close for b in bars],
            "volume": [b.volume for b in bars],
        },
        index=index,
        columns=BAR_COLUMNS,
    )
