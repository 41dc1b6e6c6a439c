"""Parsers for Shinylive code blocks and their ``#|`` option lines."""

from .cells import parse_code_block
from .options import OPTION_LINE, format_option_line, parse_option_lines, parse_option_value

__all__ = [
    "OPTION_LINE",
    "format_option_line",
    "parse_code_block",
    "parse_option_lines",
    "parse_option_value",
]
