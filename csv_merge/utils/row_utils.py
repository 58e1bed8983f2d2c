"""Row and header helpers for naive comma-separated text.

Fields are never unquoted: a row is split on every comma and trailing empty
fields are kept, so ``"a,b,"`` has three fields.
"""

from typing import List, Tuple

from csv_merge.DEFAULT_CONSTS import (
    BYTE_ORDER_MARK,
    DEFAULT_CATEGORY_START,
    FIELD_SEPARATOR,
)


# Control characters and the ASCII space; other Unicode spaces are row content
_TRIM_CHARS = "".join(chr(c) for c in range(0x21))


def trim(text: str) -> str:
    """Remove leading and trailing characters up to U+0020.

    Unlike :meth:`str.strip`, non-breaking and other Unicode spaces are kept,
    so ``"Bob,30\\xa0"`` and ``"Bob,30"`` stay distinct rows.
    """
    return text.strip(_TRIM_CHARS)


def split_fields(row: str) -> List[str]:
    """Split a row on commas, keeping trailing empty fields."""
    return row.split(FIELD_SEPARATOR)


def count_fields(row: str) -> int:
    """Number of comma-separated fields in ``row``."""
    return row.count(FIELD_SEPARATOR) + 1


def clean_header(line: str) -> str:
    """Remove byte-order marks and surrounding whitespace from a header line."""
    return trim(line.replace(BYTE_ORDER_MARK, ""))


def first_field_key(row: str) -> str:
    """Sort key of a row: its first field, lower-cased."""
    return row.split(FIELD_SEPARATOR, 1)[0].lower()


def is_empty_text(text: str) -> bool:
    """Check if the text is empty or only whitespace and control characters"""
    return not text or trim(text) == ""


def parse_category_base(category_base: str) -> Tuple[str, int]:
    """Split a category base into its prefix and trailing number.

    Parameters
    ----------
    category_base : str
        User supplied base such as ``"Batch7"`` or ``"Group"``.

    Returns
    -------
    Tuple[str, int]
        ``(prefix, start_number)``. When ``category_base`` has no trailing
        digits the prefix is the whole string and the number is 1.

    Examples
    --------
    >>> parse_category_base("Batch07")
    ('Batch', 7)
    >>> parse_category_base("Group")
    ('Group', 1)
    """
    i = len(category_base)
    while i > 0 and category_base[i - 1] in "0123456789":
        i -= 1

    if i == len(category_base):
        return category_base, DEFAULT_CATEGORY_START

    return category_base[:i], int(category_base[i:])
