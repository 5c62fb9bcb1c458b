"""Shared test fixtures for alphastudio."""

from __future__ import annotations

from pathlib import Path

import pytest

from alphastudio.data.base import Bar
from alphastudio.data.csv_provider import generate_synthetic

NATIVE_HEADER = "ts_ms,open,high,low,close,volume"
VENDOR_HEADER = "Date,Close/Last,Volume,Open,High,Low"


def native_text(bars: list[Bar]) -> str:
    rows = [NATIVE_HEADER]
    rows += [
        f"{b.ts_ms},{b.open!r},{b.high!r},{b.low!r},{b.close!r},{b.volume!r}"
        for b in bars
    ]
    return "\n".join(rows) + "\n"


@pytest.fixture()
def write_file(tmp_path):
    """Factory writing *text* to ``tmp_path / name`` and returning the path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def ramp_bars() -> list[Bar]:
    """Five bars closing at 10, 11, 12, 13, 14 with ts 1000..5000."""
    return [
        Bar(ts_ms=1000 * (i + 1), open=c, high=c, low=c, close=c, volume=0.0)
        for i, c in enumerate([10.0, 11.0, 12.0, 13.0, 14.0])
    ]


@pytest.fixture()
def round_trip_bars() -> list[Bar]:
    """Rises from 10 to 14 then falls back to 9: one buy, one sell at (2, 3)."""
    closes = [10.0, 11.0, 12.0, 13.0, 14.0, 13.0, 12.0, 11.0, 10.0, 9.0]
    return [
        Bar(ts_ms=1000 * (i + 1), open=c, high=c, low=c, close=c, volume=100.0)
        for i, c in enumerate(closes)
    ]


@pytest.fixture()
def synthetic_bars() -> list[Bar]:
    """300 deterministic daily bars."""
    return generate_synthetic(n_bars=300, seed=0)


@pytest.fixture()
def synthetic_csv(write_file, synthetic_bars) -> Path:
    return write_file("SYN.csv", native_text(synthetic_bars))


@pytest.fixture()
def vendor_rows_desc() -> list[str]:
    """Vendor daily rows, newest first."""
    return [
        '01/05/2024,$181.18,"62,303,300",$181.99,$182.76,$180.17',
        '01/04/2024,$181.91,"71,983,570",$182.15,$183.09,$180.88',
        '01/03/2024,$184.25,"58,414,460",$184.22,$185.88,$183.43',
        '01/02/2024,$185.64,"82,488,670",$187.15,$188.44,$183.89',
    ]
