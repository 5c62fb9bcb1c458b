"""Bar ingestion from delimited text files.

Two layouts are recognised from the header line, which is compared after
removing all whitespace and lower-casing:

* **native** -- ``ts_ms,open,high,low,close,volume``.  The timestamp is
  already epoch milliseconds; rows are expected in ascending order and a
  warning is recorded (the row is kept) whenever a timestamp fails to
  increase.
* **vendor daily** -- ``Date,Close/Last,Volume,Open,High,Low`` as exported
  by retail brokerage sites.  Dates are ``MM/DD/YYYY`` at midnight UTC,
  money fields may carry a ``$`` prefix and volume may contain thousands
  separators.  These exports are usually newest-first, so the parsed
  sequence is reversed when its first timestamp is later than its last.

Detection is the only branch point: each layout has its own pure parsing
function from numbered lines to ``(bars, warnings)``.  Bad rows are skipped
with a warning; only an unreadable file or an unknown header is fatal.
"""

from __future__ import annotations

import csv
import math
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from alphastudio.data.base import Bar, LoadResult, Schema
from alphastudio.utils.validation import AlphaStudioValidationError

N_FIELDS = 6

_MONEY_STRIP = re.compile(r"[$\s]")
_VOLUME_STRIP = re.compile(r"[,\s]")

NumberedLines = Iterable[tuple[int, str]]


def normalize_header(header: str) -> str:
    return "".join(header.split()).lower()


def detect_schema(header: str) -> Schema:
    """Return the layout announced by *header*.

    Raises
    ------
    AlphaStudioValidationError
        If neither layout matches.
    """
    norm = normalize_header(header)
    if "ts_ms" in norm and "open" in norm:
        return Schema.native
    if "date" in norm and "close/last" in norm:
        return Schema.vendor_daily
    raise AlphaStudioValidationError(f"Unrecognized header: {header}")


def _split_fields(line: str, ln: int) -> list[str]:
    try:
        fields = next(csv.reader([line]))
    except csv.Error:
        raise AlphaStudioValidationError(f"Malformed line {ln}") from None
    if len(fields) != N_FIELDS:
        raise AlphaStudioValidationError(f"Malformed line {ln}")
    return fields


def _to_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"non-finite value {token!r}")
    return value


def _money(token: str) -> float:
    return _to_float(_MONEY_STRIP.sub("", token))


def _volume(token: str) -> float:
    return _to_float(_VOLUME_STRIP.sub("", token))


def parse_date_ms(text: str) -> int:
    """Parse ``MM/DD/YYYY`` as midnight UTC and return epoch milliseconds."""
    day = datetime.strptime(text.strip(), "%m/%d/%Y").replace(tzinfo=timezone.utc)
    return int(day.timestamp()) * 1000


def _parse_native_row(fields: list[str], ln: int) -> Bar:
    try:
        ts_ms = int(fields[0])
        open_, high, low, close, volume = (_to_float(f) for f in fields[1:])
    except ValueError:
        raise AlphaStudioValidationError(f"Bad numeric at {ln}") from None
    return Bar(ts_ms, open_, high, low, close, volume)


def _parse_vendor_row(fields: list[str], ln: int) -> Bar:
    try:
        ts_ms = parse_date_ms(fields[0])
    except ValueError:
        raise AlphaStudioValidationError(f"Bad date at line {ln}") from None
    try:
        close = _money(fields[1])
        volume = _volume(fields[2])
        open_ = _money(fields[3])
        high = _money(fields[4])
        low = _money(fields[5])
    except ValueError:
        raise AlphaStudioValidationError(
            f"Numeric parse error at line {ln}"
        ) from None
    return Bar(ts_ms, open_, high, low, close, volume)


def parse_native(lines: NumberedLines) -> tuple[list[Bar], list[str]]:
    """Parse ``ts_ms,open,high,low,close,volume`` rows.

    Order is kept as found; each timestamp that does not strictly exceed
    its predecessor adds a warning.
    """
    bars: list[Bar] = []
    warnings: list[str] = []
    last_ts: int | None = None
    for ln, line in lines:
        try:
            bar = _parse_native_row(_split_fields(line, ln), ln)
        except AlphaStudioValidationError as exc:
            warnings.append(str(exc))
            continue
        if last_ts is not None and bar.ts_ms <= last_ts:
            warnings.append(f"Non-monotonic ts at {ln}")
        last_ts = bar.ts_ms
        bars.append(bar)
    return bars, warnings


def parse_vendor_daily(lines: NumberedLines) -> tuple[list[Bar], list[str]]:
    """Parse ``Date,Close/Last,Volume,Open,High,Low`` rows.

    The result is reversed when it was stored newest-first.
    """
    bars: list[Bar] = []
    warnings: list[str] = []
    for ln, line in lines:
        try:
            bars.append(_parse_vendor_row(_split_fields(line, ln), ln))
        except AlphaStudioValidationError as exc:
            warnings.append(str(exc))
    if bars and bars[0].ts_ms > bars[-1].ts_ms:
        bars.reverse()
    return bars, warnings


_PARSERS = {
    Schema.native: parse_native,
    Schema.vendor_daily: parse_vendor_daily,
}


def _numbered_rows(lines: list[str]) -> NumberedLines:
    # Line 1 is the header.
    for ln, line in enumerate(lines[1:], start=2):
        line = line.rstrip("\r")
        if line:
            yield ln, line


def load(path: str | Path) -> LoadResult:
    """Load one file of bars.

    Never raises for bad input: problems are reported through
    :attr:`LoadResult.warnings` (row skipped or kept, loading continues)
    and :attr:`LoadResult.error` (nothing loaded).

    Parameters
    ----------
    path : str or Path
        File in either supported layout.

    Returns
    -------
    LoadResult
        Unpacks as ``(bars, warning, error)``.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError):
        return LoadResult(error=f"Cannot open {path}")
    if not text:
        return LoadResult(error="Empty file")

    lines = text.split("\n")
    header = lines[0].rstrip("\r")
    try:
        schema = detect_schema(header)
    except AlphaStudioValidationError as exc:
        return LoadResult(error=str(exc))

    bars, warnings = _PARSERS[schema](_numbered_rows(lines))
    return LoadResult(bars=bars, warnings=warnings, schema=schema)
