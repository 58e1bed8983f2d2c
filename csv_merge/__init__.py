"""
csv_merge - Merge, clean, shuffle and split directories of CSV files.

This package provides:

- Merging: header compatibility check and exact-text deduplication across
  any number of CSV files sharing a header
- Exports: a full export sorted by first field and a full shuffled export
- Splitting: fixed-size chunk files with optional per-chunk category labels
- A command line driver with console and per-run file logging
"""

__version__ = "2.3.1"

from csv_merge.exceptions import ConfigError, RunAborted, ValidationError  # noqa: E402
from csv_merge.data_prep import (  # noqa: E402
    CategoryLabel,
    CSVMerger,
    CSVSplitter,
    MergeResult,
    merge_csv_files,
    split_into_files,
)
from csv_merge.pipeline import RunConfig, RunSummary, run_merge  # noqa: E402

__all__ = [
    "ConfigError",
    "RunAborted",
    "ValidationError",
    "CategoryLabel",
    "CSVMerger",
    "CSVSplitter",
    "MergeResult",
    "merge_csv_files",
    "split_into_files",
    "RunConfig",
    "RunSummary",
    "run_merge",
]
