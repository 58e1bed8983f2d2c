#!/usr/bin/env python3
r"""Command line driver for the CSV merge pipeline.

Merges every ``*.csv`` file of the input directory, removes duplicate rows,
writes a sorted and a shuffled full export and splits the shuffled rows into
chunk files.

Usage
-----
Minimal (uses ``./Input Folder`` and ``./Output Folder``)::

    csv-merge

Full overrides::

    csv-merge \\
        --input-dir        data/in \\
        --output-dir       data/out \\
        --entries-per-file 250 \\
        --category-base    Batch7 \\
        --output-base      Part \\
        --seed             42

From a config file (explicit flags still win)::

    csv-merge --config run.yaml --entries-per-file 100
"""

import argparse
import datetime
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from csv_merge.DEFAULT_CONSTS import DEFAULT_LOG_DIR
from csv_merge.exceptions import ConfigError, RunAborted, ValidationError
from csv_merge.pipeline import RunConfig, run_merge

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
LOGGER = logging.getLogger("csv_merge.cli")

# argparse dest -> RunConfig field
_CONFIG_FLAGS = {
    "input_dir": "input_dir",
    "output_dir": "output_dir",
    "entries_per_file": "entries_per_file",
    "category_base": "category_base",
    "output_base": "output_base",
    "seed": "random_seed",
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Merge, deduplicate, shuffle and split a directory of CSV files.",
        epilog=(
            "If writing fails midway, files already written by earlier stages "
            "are left in the output directory."
        ),
    )
    parser.add_argument("--config", type=Path, default=None, help="JSON or YAML run config")
    parser.add_argument("--input-dir", dest="input_dir", default=None)
    parser.add_argument("--output-dir", dest="output_dir", default=None)
    parser.add_argument(
        "--entries-per-file",
        dest="entries_per_file",
        default=None,
        help="Maximum data rows per split file (default: 500)",
    )
    parser.add_argument(
        "--category-base",
        dest="category_base",
        default=None,
        help="Category label base, e.g. 'Batch7'; omit to disable the Category column",
    )
    parser.add_argument(
        "--output-base",
        dest="output_base",
        default=None,
        help="Split file name prefix (default: ShuffledCSV)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    parser.add_argument("--log-dir", type=Path, default=Path(DEFAULT_LOG_DIR))
    parser.add_argument("--no-log-file", action="store_true", help="Log to console only")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bars")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RunConfig:
    """Combine the optional config file with explicit command line flags."""
    payload: Dict[str, Any] = {}
    if args.config is not None:
        payload.update(RunConfig.load(args.config).to_dict())

    for dest, field_name in _CONFIG_FLAGS.items():
        value = getattr(args, dest)
        if value is not None:
            payload[field_name] = value

    if args.no_progress:
        payload["show_progress"] = False

    return RunConfig.from_dict(payload)


def setup_logging(
    verbose: bool = False, log_dir: Optional[Path] = None
) -> Optional[Path]:
    """Configure console logging and, when ``log_dir`` is given, a per-run log file."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=True)

    if log_dir is None:
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_path = log_dir / f"CSVMergeLog_{timestamp}.txt"
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return log_path


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    log_path = setup_logging(args.verbose, None if args.no_log_file else args.log_dir)
    if log_path is not None:
        LOGGER.info("Logging to %s", log_path)

    try:
        config = build_config(args)
        summary = run_merge(config)
    except (ConfigError, ValidationError, RunAborted, OSError) as exc:
        LOGGER.error("%s", exc)
        return 1

    if summary.input_files:
        LOGGER.info("All tasks completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
