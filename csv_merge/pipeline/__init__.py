"""Run configuration and orchestration for the CSV merge pipeline."""

from .run_config import RunConfig
from .run import (
    RunSummary,
    find_csv_files,
    run_merge,
    sort_rows_by_first_field,
    write_csv_lines,
)

__all__ = [
    "RunConfig",
    "RunSummary",
    "find_csv_files",
    "run_merge",
    "sort_rows_by_first_field",
    "write_csv_lines",
]
