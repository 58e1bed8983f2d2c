"""Shared constants for the CSV merge pipeline.

This module defines frozen-dataclass constants that act as the single source
of truth for names shared across sub-packages:

* :data:`DEFAULT_OUTPUT_NAMES`: file names of the two full exports and the
  extra column appended by the splitter.
* :data:`DEFAULT_HEADER_RULES`: how headers of later input files are compared
  against the first one.

Overriding defaults
-------------------
Both singletons are ``frozen=True`` dataclass instances, so they cannot be
mutated.  Create a modified copy with :func:`dataclasses.replace`::

    import dataclasses
    from csv_merge.DEFAULT_CONSTS import DEFAULT_OUTPUT_NAMES

    names = dataclasses.replace(DEFAULT_OUTPUT_NAMES, category_column="Label")
"""

from dataclasses import dataclass

__all__ = [
    "OutputNames",
    "HeaderRules",
    "DEFAULT_OUTPUT_NAMES",
    "DEFAULT_HEADER_RULES",
    "FIELD_SEPARATOR",
    "BYTE_ORDER_MARK",
    "CSV_GLOB",
    "DEFAULT_INPUT_DIR",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_LOG_DIR",
    "DEFAULT_ENTRIES_PER_FILE",
    "DEFAULT_OUTPUT_BASE",
    "DEFAULT_CATEGORY_START",
]


# ---------------------------------------------------------------------------
# Output file schema
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OutputNames:
    """Names of files and columns written by the pipeline.

    Attributes
    ----------
    full_sorted : str
        All unique rows ordered by first field (case-insensitive).
    full_shuffled : str
        All unique rows in random order.
    category_column : str
        Header of the column appended to split files when labeling is on.
    split_suffix : str
        Extension of each split chunk, appended after ``{output_base}{N}``.
    """

    full_sorted: str = "0_FULL_UNSHUFFLED.csv"
    full_shuffled: str = "1_FULL_SHUFFLED.csv"
    category_column: str = "Category"
    split_suffix: str = ".csv"


# ---------------------------------------------------------------------------
# Header comparison schema
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HeaderRules:
    """Rules used by ``CSVMerger`` to validate headers across files.

    Attributes
    ----------
    max_compared_columns : int
        Only the first ``min(max_compared_columns, base_cols, current_cols)``
        header fields are compared.
    case_sensitive : bool
        Compare header fields case-sensitively.
    """

    max_compared_columns: int = 5
    case_sensitive: bool = False


DEFAULT_OUTPUT_NAMES = OutputNames()
DEFAULT_HEADER_RULES = HeaderRules()

FIELD_SEPARATOR: str = ","
BYTE_ORDER_MARK: str = "\ufeff"
CSV_GLOB: str = "*.csv"

# ---------------------------------------------------------------------------
# Run configuration defaults
# ---------------------------------------------------------------------------

DEFAULT_INPUT_DIR: str = "Input Folder"
DEFAULT_OUTPUT_DIR: str = "Output Folder"
DEFAULT_LOG_DIR: str = "Logs"
DEFAULT_ENTRIES_PER_FILE: int = 500
DEFAULT_OUTPUT_BASE: str = "ShuffledCSV"

# Category number used when the category base has no trailing digits
DEFAULT_CATEGORY_START: int = 1
