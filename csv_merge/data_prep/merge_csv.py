"""
CSV Merger for the merge/shuffle/split pipeline.

This module reads multiple CSV files that share a header, validates header
compatibility, removes exact-duplicate rows and produces a random ordering of
the unique rows.

Merge Rules:
- Rows are compared as raw text after trimming control characters and
  ASCII spaces from both ends; other Unicode spaces are kept
- A row with fewer fields than the first header is skipped as malformed
- Extra trailing fields are tolerated
- First-seen order across files is preserved for the unique rows
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from tqdm import tqdm

from csv_merge.DEFAULT_CONSTS import DEFAULT_HEADER_RULES, HeaderRules
from csv_merge.exceptions import ValidationError
from csv_merge.utils.row_utils import (
    clean_header,
    count_fields,
    is_empty_text,
    split_fields,
    trim,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileMergeStats:
    """Per-file counters collected while merging.

    Attributes
    ----------
    path : str
        Input file path.
    rows_read : int
        Non-empty data lines (header excluded).
    malformed : int
        Lines skipped for having too few fields.
    duplicates : int
        Lines already seen in this or an earlier file.
    added : int
        Lines that entered the unique set.
    skipped_empty : bool
        ``True`` when the file had no lines at all.
    """

    path: str
    rows_read: int = 0
    malformed: int = 0
    duplicates: int = 0
    added: int = 0
    skipped_empty: bool = False


@dataclass(frozen=True)
class MergeResult:
    """Immutable outcome of one merge.

    Attributes
    ----------
    header : str
        Header of the first non-empty input file.
    unique_rows : Tuple[str, ...]
        Unique rows in first-seen order.
    shuffled_rows : Tuple[str, ...]
        Uniform random permutation of ``unique_rows``.
    duplicates_removed : int
        Number of well-formed rows dropped as exact repeats.
    file_stats : Tuple[FileMergeStats, ...]
        Counters per input file, in processing order.
    """

    header: Optional[str]
    unique_rows: Tuple[str, ...]
    shuffled_rows: Tuple[str, ...]
    duplicates_removed: int
    file_stats: Tuple[FileMergeStats, ...] = field(default_factory=tuple)

    @property
    def final_count(self) -> int:
        """Number of unique rows."""
        return len(self.unique_rows)

    @property
    def input_files(self) -> List[str]:
        """Input file paths in processing order, empty files included."""
        return [stats.path for stats in self.file_stats]

    def stats_frame(self) -> pd.DataFrame:
        """Per-file counters as a DataFrame (one row per input file)."""
        columns = ["path", "rows_read", "malformed", "duplicates", "added", "skipped_empty"]
        return pd.DataFrame(
            [[getattr(stats, col) for col in columns] for stats in self.file_stats],
            columns=columns,
        )


class CSVMerger:
    """Merge multiple CSV files into one set of unique rows.

    Parameters
    ----------
    header_rules : HeaderRules, optional
        How headers of later files are compared against the first one.
        Default: first 5 columns, case-insensitive.
    random_seed : int, optional
        Seed for the shuffle. ``None`` (default) draws fresh OS entropy.
    show_progress : bool, optional
        Show a tqdm bar over input files (default: ``False``).
    encoding : str, optional
        Text encoding of input files (default: ``"utf-8"``).

    Examples
    --------
    >>> merger = CSVMerger(random_seed=42)
    >>> result = merger.merge_csv_files(["a.csv", "b.csv"])
    >>> print(f"{result.final_count} unique, {result.duplicates_removed} duplicates")
    """

    def __init__(
        self,
        header_rules: HeaderRules = DEFAULT_HEADER_RULES,
        random_seed: Optional[int] = None,
        show_progress: bool = False,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize CSV merger."""
        if header_rules.max_compared_columns < 1:
            raise ValueError(
                "max_compared_columns must be positive, "
                f"got {header_rules.max_compared_columns}"
            )
        self.header_rules = header_rules
        self.random_seed = random_seed
        self.show_progress = show_progress
        self.encoding = encoding

    def _read_lines(self, csv_path: Path) -> List[str]:
        """Read all lines of a file without their line terminators.

        ``\\r\\n`` and ``\\r`` are normalised to ``\\n``; a final terminator
        does not produce an extra empty line.

        Raises
        ------
        FileNotFoundError
            If the file does not exist
        OSError
            If the file cannot be read or decoded
        """
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_path}")

        try:
            with open(csv_path, "r", encoding=self.encoding, newline=None) as f:
                text = f.read()
        except UnicodeDecodeError as exc:
            raise OSError(f"Could not decode CSV file {csv_path}: {exc}") from exc
        except OSError as exc:
            raise OSError(f"Could not read CSV file {csv_path}: {exc}") from exc

        if not text:
            return []

        lines = text.split("\n")
        if text.endswith("\n"):
            lines.pop()
        return lines

    def _headers_match(self, base_header: str, header: str) -> Optional[int]:
        """Compare the leading columns of two headers.

        Returns
        -------
        int or None
            Index of the first mismatching column, ``None`` if compatible.
        """
        base_cols = split_fields(base_header)
        current_cols = split_fields(header)
        n_compared = min(
            self.header_rules.max_compared_columns, len(base_cols), len(current_cols)
        )

        for i in range(n_compared):
            base_value = trim(base_cols[i])
            current_value = trim(current_cols[i])
            if not self.header_rules.case_sensitive:
                base_value = base_value.lower()
                current_value = current_value.lower()
            if base_value != current_value:
                return i

        return None

    def _validate_header(self, base_header: str, header: str, source_file: Path) -> None:
        """Raise ``ValidationError`` if ``header`` is incompatible with the base header."""
        mismatch = self._headers_match(base_header, header)
        if mismatch is None:
            return

        base_col = trim(split_fields(base_header)[mismatch])
        current_col = trim(split_fields(header)[mismatch])
        raise ValidationError(
            f"CSV headers do not match in file: {source_file} "
            f"(column {mismatch + 1}: expected '{base_col}', found '{current_col}')",
            file_path=source_file,
        )

    def _shuffle(self, rows: Sequence[str]) -> Tuple[str, ...]:
        """Uniform random permutation of ``rows``."""
        rng = np.random.default_rng(self.random_seed)
        order = rng.permutation(len(rows))
        return tuple(rows[i] for i in order)

    def merge_csv_files(self, csv_paths: Sequence[Union[str, Path]]) -> MergeResult:
        """Merge CSV files, dropping malformed and duplicate rows.

        Files are processed in the given order. Every data line is trimmed;
        blank lines and lines with fewer fields than the first header are
        skipped. A trimmed line already seen (in any file, including the
        current one) counts as a duplicate.

        Parameters
        ----------
        csv_paths : Sequence[str or Path]
            Paths to CSV files, in processing order

        Returns
        -------
        MergeResult
            Header, unique rows, shuffled rows and counters

        Raises
        ------
        ValueError
            If ``csv_paths`` is empty
        ValidationError
            If a file's header does not match the first header
        OSError
            If a file cannot be read
        """
        if not csv_paths:
            raise ValueError("No CSV files provided")

        LOGGER.info("Merging %d CSV files", len(csv_paths))

        # dict keeps first-seen insertion order and doubles as the seen set
        unique: Dict[str, None] = {}
        header: Optional[str] = None
        expected_cols = -1
        duplicates = 0
        file_stats: List[FileMergeStats] = []

        paths = [Path(p) for p in csv_paths]
        for csv_path in tqdm(
            paths, desc="Merging CSV files", unit="file", disable=not self.show_progress
        ):
            lines = self._read_lines(csv_path)
            if not lines:
                LOGGER.warning("Skipping empty file %s", csv_path)
                file_stats.append(FileMergeStats(path=str(csv_path), skipped_empty=True))
                continue

            current_header = clean_header(lines[0])
            if header is None:
                header = current_header
                expected_cols = count_fields(header)
                LOGGER.info("Base header from %s (%d columns)", csv_path, expected_cols)
            else:
                self._validate_header(header, current_header, csv_path)

            rows_read = malformed = file_duplicates = added = 0
            for line in lines[1:]:
                if is_empty_text(line):
                    continue
                row = trim(line)
                rows_read += 1
                if count_fields(row) < expected_cols:
                    malformed += 1
                    LOGGER.debug("Skipping malformed row in %s: %r", csv_path, row[:50])
                    continue

                if row in unique:
                    file_duplicates += 1
                else:
                    unique[row] = None
                    added += 1

            duplicates += file_duplicates
            file_stats.append(
                FileMergeStats(
                    path=str(csv_path),
                    rows_read=rows_read,
                    malformed=malformed,
                    duplicates=file_duplicates,
                    added=added,
                )
            )
            LOGGER.info(
                "  %s: %d rows, %d duplicates, %d malformed",
                csv_path.name,
                rows_read,
                file_duplicates,
                malformed,
            )

        unique_rows = tuple(unique)
        result = MergeResult(
            header=header,
            unique_rows=unique_rows,
            shuffled_rows=self._shuffle(unique_rows),
            duplicates_removed=duplicates,
            file_stats=tuple(file_stats),
        )

        LOGGER.info(
            "Merged %d unique rows (%d duplicates removed)",
            result.final_count,
            result.duplicates_removed,
        )
        return result


def merge_csv_files(
    csv_paths: Sequence[Union[str, Path]],
    random_seed: Optional[int] = None,
    header_rules: HeaderRules = DEFAULT_HEADER_RULES,
    show_progress: bool = False,
) -> MergeResult:
    """Merge CSV files into unique rows plus a shuffled ordering.

    Parameters
    ----------
    csv_paths : Sequence[str or Path]
        Paths to CSV files, in processing order
    random_seed : int, optional
        Seed for the shuffle; ``None`` uses OS entropy
    header_rules : HeaderRules, optional
        Header comparison rules
    show_progress : bool, optional
        Show a progress bar over files

    Returns
    -------
    MergeResult
        Merge outcome

    Examples
    --------
    >>> result = merge_csv_files(["a.csv", "b.csv"], random_seed=0)
    >>> result.header
    'Name,Age'
    """
    merger = CSVMerger(
        header_rules=header_rules,
        random_seed=random_seed,
        show_progress=show_progress,
    )
    return merger.merge_csv_files(csv_paths)
