"""Market data ingestion: bar models, file loading, and providers."""

from alphastudio.data.base import Bar, LoadResult, Schema, bars_to_frame
from alphastudio.data.csv_loader import (
    detect_schema,
    load,
    parse_native,
    parse_vendor_daily,
)
from alphastudio.data.csv_provider import BarDirectoryProvider, generate_synthetic

__all__ = [
    "Bar",
    "LoadResult",
    "Schema",
    "bars_to_frame",
    "detect_schema",
    "load",
    "parse_native",
    "parse_vendor_daily",
    "BarDirectoryProvider",
    "generate_synthetic",
]
