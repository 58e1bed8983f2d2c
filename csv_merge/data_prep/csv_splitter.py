"""Chunked CSV writer.

Partitions an ordered row sequence into consecutive files of at most
``chunk_size`` rows. Each chunk can be tagged with a category label built from
a prefix and a counter that increases by one per chunk (``Batch7``,
``Batch8``, ...), appended as an extra ``Category`` column.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from tqdm import tqdm

from csv_merge.DEFAULT_CONSTS import (
    DEFAULT_CATEGORY_START,
    DEFAULT_OUTPUT_NAMES,
    FIELD_SEPARATOR,
    OutputNames,
)
from csv_merge.exceptions import ConfigError
from csv_merge.utils.row_utils import parse_category_base

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryLabel:
    """Prefix and starting number of per-chunk category labels."""

    prefix: str = ""
    start_number: int = DEFAULT_CATEGORY_START

    @classmethod
    def from_base(cls, category_base: str) -> "CategoryLabel":
        prefix, start_number = parse_category_base(category_base)
        return cls(prefix=prefix, start_number=start_number)

    def label_for(self, chunk_index: int) -> str:
        """Label of the 1-based ``chunk_index``."""
        return f"{self.prefix}{self.start_number + chunk_index - 1}"


class CSVSplitter:
    """Write rows into fixed-size CSV chunk files.

    Parameters
    ----------
    chunk_size : int
        Maximum number of data rows per file (must be positive).
    output_base : str
        File name prefix; chunk ``k`` is written to ``{output_base}{k}.csv``.
    category : CategoryLabel, optional
        Label prefix and starting number.
    add_category : bool, optional
        Append the ``Category`` column to header and rows (default: ``False``).
    output_names : OutputNames, optional
        Category column name and chunk file suffix.
    show_progress : bool, optional
        Show a tqdm bar over chunks (default: ``False``).

    Examples
    --------
    >>> splitter = CSVSplitter.from_category_base(500, "ShuffledCSV", "Batch3")
    >>> splitter.split("Name,Age", rows, "out/")
    """

    def __init__(
        self,
        chunk_size: int,
        output_base: str,
        category: CategoryLabel = CategoryLabel(),
        add_category: bool = False,
        output_names: OutputNames = DEFAULT_OUTPUT_NAMES,
        show_progress: bool = False,
    ) -> None:
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size < 1:
            raise ConfigError(f"chunk_size must be a positive integer, got {chunk_size!r}")
        if not output_base:
            raise ConfigError("output_base cannot be empty")

        self.chunk_size = chunk_size
        self.output_base = output_base
        self.category = category
        self.add_category = add_category
        self.output_names = output_names
        self.show_progress = show_progress

    @classmethod
    def from_category_base(
        cls,
        chunk_size: int,
        output_base: str,
        category_base: str = "",
        **kwargs,
    ) -> "CSVSplitter":
        """Build a splitter from a raw category base; blank disables labeling."""
        category_base = category_base.strip()
        return cls(
            chunk_size=chunk_size,
            output_base=output_base,
            category=CategoryLabel.from_base(category_base),
            add_category=bool(category_base),
            **kwargs,
        )

    def chunk_bounds(self, n_rows: int) -> List[Tuple[int, int]]:
        """``(start, end)`` row ranges of each chunk, in order."""
        return [
            (start, min(start + self.chunk_size, n_rows))
            for start in range(0, n_rows, self.chunk_size)
        ]

    def chunk_path(self, output_dir: Union[str, Path], chunk_index: int) -> Path:
        return Path(output_dir) / f"{self.output_base}{chunk_index}{self.output_names.split_suffix}"

    def split(
        self,
        header: str,
        rows: Sequence[str],
        output_dir: Union[str, Path],
    ) -> int:
        """Write ``rows`` into chunk files under ``output_dir``.

        Rows keep the given order. Same-named files from earlier runs are
        overwritten; no other file is touched.

        Parameters
        ----------
        header : str
            Header line written at the top of every chunk
        rows : Sequence[str]
            Data rows, already in output order
        output_dir : str or Path
            Existing directory receiving the chunks

        Returns
        -------
        int
            Number of chunk files written (0 when ``rows`` is empty)

        Raises
        ------
        OSError
            If a chunk file cannot be written
        """
        output_dir = Path(output_dir)
        bounds = self.chunk_bounds(len(rows))

        if self.add_category:
            chunk_header = f"{header}{FIELD_SEPARATOR}{self.output_names.category_column}"
        else:
            chunk_header = header

        for chunk_index, (start, end) in enumerate(
            tqdm(bounds, desc="Writing chunks", unit="file", disable=not self.show_progress),
            start=1,
        ):
            path = self.chunk_path(output_dir, chunk_index)
            suffix = ""
            if self.add_category:
                suffix = FIELD_SEPARATOR + self.category.label_for(chunk_index)

            try:
                with open(path, "w", encoding="utf-8", newline="\n") as f:
                    f.write(chunk_header + "\n")
                    for row in rows[start:end]:
                        f.write(row + suffix + "\n")
            except OSError as exc:
                raise OSError(f"Could not write chunk file {path}: {exc}") from exc

            LOGGER.debug("Wrote %s (%d rows)", path.name, end - start)

        LOGGER.info("Split %d rows into %d files", len(rows), len(bounds))
        return len(bounds)


def split_into_files(
    header: str,
    rows: Sequence[str],
    output_dir: Union[str, Path],
    chunk_size: int,
    category_prefix: str,
    start_number: int,
    output_base: str,
    add_category: bool,
) -> int:
    """Partition ``rows`` into ``{output_base}{k}.csv`` files of at most ``chunk_size`` rows.

    Parameters
    ----------
    header : str
        Header line of every chunk
    rows : Sequence[str]
        Rows in output order
    output_dir : str or Path
        Directory receiving the chunks
    chunk_size : int
        Maximum rows per chunk
    category_prefix : str
        Non-numeric part of the category label
    start_number : int
        Number of the first chunk's label
    output_base : str
        File name prefix of each chunk
    add_category : bool
        Append ``,Category`` to the header and ``,{label}`` to each row

    Returns
    -------
    int
        Number of files written
    """
    splitter = CSVSplitter(
        chunk_size=chunk_size,
        output_base=output_base,
        category=CategoryLabel(prefix=category_prefix, start_number=start_number),
        add_category=add_category,
    )
    return splitter.split(header, rows, output_dir)
