"""Run orchestrator for the CSV merge pipeline.

This module runs the stages of one batch in sequence:
- Scan the input directory and merge all CSV files
- Write the sorted and shuffled full exports
- Split the shuffled rows into chunk files
- Log per-stage timing, progress milestones and a final summary

Files written by a stage stay on disk if a later stage fails with an I/O
error; nothing is rolled back.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from csv_merge.DEFAULT_CONSTS import CSV_GLOB, DEFAULT_OUTPUT_NAMES, OutputNames
from csv_merge.data_prep import CSVMerger, CSVSplitter, MergeResult
from csv_merge.exceptions import RunAborted
from .run_config import RunConfig
from csv_merge.utils.row_utils import first_field_key

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], None]
AbortCheck = Callable[[], bool]

# Progress percentage reported once each stage completes
STAGE_PROGRESS: Dict[str, int] = {
    "merge": 25,
    "full_exports": 60,
    "split": 100,
}


@dataclass
class RunSummary:
    """Counters and artifacts of a finished run.

    Attributes
    ----------
    total_entries : int
        Unique rows written to each full export
    duplicates_removed : int
        Rows dropped as exact duplicates
    files_created : int
        Number of chunk files written
    input_files : List[str]
        CSV files merged, in processing order
    output_files : List[str]
        Every file written, in write order
    timings : Dict[str, float]
        Seconds spent per stage
    """

    total_entries: int = 0
    duplicates_removed: int = 0
    files_created: int = 0
    input_files: List[str] = field(default_factory=list)
    output_files: List[str] = field(default_factory=list)
    timings: Dict[str, float] = field(default_factory=dict)


def sort_rows_by_first_field(rows: Iterable[str]) -> List[str]:
    """Stable sort of rows by their first field, case-insensitive.

    Rows with the same first field keep their relative order, so sorting an
    already sorted list returns it unchanged.
    """
    return sorted(rows, key=first_field_key)


def write_csv_lines(path: Union[str, Path], header: str, rows: Iterable[str]) -> Path:
    """Write a header line followed by ``rows``, one per ``\\n``-terminated line."""
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(header + "\n")
            for row in rows:
                f.write(row + "\n")
    except OSError as exc:
        raise OSError(f"Could not write {path}: {exc}") from exc
    return path


def find_csv_files(input_dir: Union[str, Path]) -> List[Path]:
    """List ``*.csv`` files directly inside ``input_dir``, sorted by name.

    The suffix match is case-insensitive.
    """
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        raise NotADirectoryError(f"Input directory not found: {input_dir}")

    suffix = CSV_GLOB.lstrip("*").lower()
    return sorted(
        (p for p in input_dir.iterdir() if p.is_file() and p.name.lower().endswith(suffix)),
        key=lambda p: p.name,
    )


def _timed_task(
    task_name: str,
    fn: Any,
    timings: Dict[str, float],
    *args: Any,
    **kwargs: Any,
) -> Any:
    """Execute a task and record elapsed time in seconds."""
    start = time.perf_counter()
    result = fn(*args, **kwargs)
    elapsed = time.perf_counter() - start
    timings[task_name] = elapsed
    LOGGER.info("%s completed in %.3fs", task_name, elapsed)
    return result


def _write_full_exports(
    result: MergeResult,
    output_dir: Path,
    output_names: OutputNames,
) -> List[Path]:
    """Write the sorted export, then the shuffled export."""
    sorted_path = write_csv_lines(
        output_dir / output_names.full_sorted,
        result.header,
        sort_rows_by_first_field(result.unique_rows),
    )
    LOGGER.info("Created: %s", sorted_path.name)

    shuffled_path = write_csv_lines(
        output_dir / output_names.full_shuffled,
        result.header,
        result.shuffled_rows,
    )
    LOGGER.info("Created: %s", shuffled_path.name)

    return [sorted_path, shuffled_path]


def log_summary(summary: RunSummary) -> None:
    LOGGER.info("Summary:")
    LOGGER.info("Total entries: %d", summary.total_entries)
    LOGGER.info("Duplicates removed: %d", summary.duplicates_removed)
    LOGGER.info("Output CSV files created: %d", summary.files_created)


def run_merge(
    config: RunConfig,
    csv_paths: Optional[List[Union[str, Path]]] = None,
    progress_callback: Optional[ProgressCallback] = None,
    should_abort: Optional[AbortCheck] = None,
    output_names: OutputNames = DEFAULT_OUTPUT_NAMES,
) -> RunSummary:
    """Merge, deduplicate, shuffle and split the CSV files of one run.

    Outputs are written in this order: ``0_FULL_UNSHUFFLED.csv`` (rows
    sorted by first field), ``1_FULL_SHUFFLED.csv`` (random order), then
    ``{output_base}{N}.csv`` chunks of the shuffled rows.

    Parameters
    ----------
    config : RunConfig
        Validated run configuration
    csv_paths : List[str or Path], optional
        Explicit input files in processing order. Defaults to the ``*.csv``
        files of ``config.input_dir`` sorted by name.
    progress_callback : callable, optional
        Called as ``progress_callback(stage, percent)`` after each stage
    should_abort : callable, optional
        Checked before each stage; returning ``True`` raises ``RunAborted``
    output_names : OutputNames, optional
        Names of the full exports and the category column

    Returns
    -------
    RunSummary
        Counters, written files and stage timings. When no input file (or
        no non-empty input file) is found, nothing is written and all
        counters are zero.

    Raises
    ------
    ValidationError
        If input headers are incompatible; no output is written
    OSError
        If an input cannot be read or an output cannot be written
    RunAborted
        If ``should_abort`` returned ``True``
    """
    timings: Dict[str, float] = {}
    summary = RunSummary(timings=timings)
    run_start = time.perf_counter()

    def _checkpoint(stage: str) -> None:
        if should_abort is not None and should_abort():
            LOGGER.warning("Run aborted before stage '%s'", stage)
            raise RunAborted(stage)

    def _report(stage: str) -> None:
        if progress_callback is not None:
            progress_callback(stage, STAGE_PROGRESS[stage])

    if csv_paths is None:
        input_dir = Path(config.input_dir)
        if not input_dir.exists():
            input_dir.mkdir(parents=True, exist_ok=True)
            LOGGER.info("Created input directory %s", input_dir)
        LOGGER.info("Scanning input directory...")
        csv_paths = find_csv_files(input_dir)

    if not csv_paths:
        LOGGER.warning("No CSV files found in input directory.")
        return summary

    LOGGER.info("Found %d CSV files. Starting merge...", len(csv_paths))
    _checkpoint("merge")
    merger = CSVMerger(random_seed=config.random_seed, show_progress=config.show_progress)
    result: MergeResult = _timed_task("merge", merger.merge_csv_files, timings, csv_paths)
    summary.input_files = result.input_files
    LOGGER.debug("Per-file statistics:\n%s", result.stats_frame().to_string(index=False))

    if result.header is None:
        LOGGER.warning("All input files are empty; nothing to write.")
        return summary
    _report("merge")

    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    _checkpoint("full_exports")
    LOGGER.info("Creating full CSV outputs...")
    full_paths = _timed_task(
        "full_exports", _write_full_exports, timings, result, output_dir, output_names
    )
    summary.output_files.extend(str(p) for p in full_paths)
    _report("full_exports")

    _checkpoint("split")
    LOGGER.info("Splitting into smaller CSV files...")
    splitter = CSVSplitter(
        chunk_size=config.entries_per_file,
        output_base=config.output_base,
        category=config.category_label,
        add_category=config.add_category,
        output_names=output_names,
        show_progress=config.show_progress,
    )
    file_count = _timed_task(
        "split", splitter.split, timings, result.header, result.shuffled_rows, output_dir
    )
    summary.output_files.extend(
        str(splitter.chunk_path(output_dir, k)) for k in range(1, file_count + 1)
    )
    _report("split")

    summary.total_entries = result.final_count
    summary.duplicates_removed = result.duplicates_removed
    summary.files_created = file_count

    LOGGER.info("Run finished in %.3fs", time.perf_counter() - run_start)
    log_summary(summary)
    return summary
