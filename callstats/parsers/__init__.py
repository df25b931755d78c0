"""
callstats/parsers: plain-text dataset codec.
"""

from callstats.parsers.dataset_parser import (
    format_record,
    parse_dataset_file,
    parse_line,
    parse_lines,
    write_dataset_file,
)

__all__ = [
    "format_record",
    "parse_dataset_file",
    "parse_line",
    "parse_lines",
    "write_dataset_file",
]
