"""Utility functions for csv_merge."""

from .row_utils import (
    clean_header,
    count_fields,
    first_field_key,
    is_empty_text,
    parse_category_base,
    split_fields,
    trim,
)

__all__ = [
    "clean_header",
    "count_fields",
    "first_field_key",
    "is_empty_text",
    "parse_category_base",
    "split_fields",
    "trim",
]
