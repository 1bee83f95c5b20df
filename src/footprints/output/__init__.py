"""Output formatting package."""

from .formatter import (
    format_record,
    format_plain,
    format_csv,
    format_json,
    format_custom,
    parse_json_line
)

__all__ = [
    "format_record",
    "format_plain",
    "format_csv",
    "format_json",
    "format_custom",
    "parse_json_line"
]
