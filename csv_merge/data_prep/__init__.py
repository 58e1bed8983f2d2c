"""CSV merging and splitting for csv_merge.

Key Features:
- Header compatibility check across files (first columns, case-insensitive)
- Exact-text deduplication with first-seen ordering
- Seedable uniform shuffle of the unique rows
- Fixed-size chunk files with optional per-chunk category labels

Examples
--------
>>> from csv_merge.data_prep import merge_csv_files, split_into_files
>>>
>>> result = merge_csv_files(["a.csv", "b.csv"], random_seed=42)
>>> n_files = split_into_files(
...     result.header,
...     result.shuffled_rows,
...     output_dir="out",
...     chunk_size=500,
...     category_prefix="Batch",
...     start_number=1,
...     output_base="ShuffledCSV",
...     add_category=True,
... )
"""

from .merge_csv import CSVMerger, FileMergeStats, MergeResult, merge_csv_files
from .csv_splitter import CategoryLabel, CSVSplitter, split_into_files

__all__ = [
    # CSV merging
    "CSVMerger",
    "FileMergeStats",
    "MergeResult",
    "merge_csv_files",
    # CSV splitting
    "CategoryLabel",
    "CSVSplitter",
    "split_into_files",
]
