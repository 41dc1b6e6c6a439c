"""Decoding and encoding of ``#| key: value`` option lines."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

from ..logging import get_logger
from ..models import OptionValue

OPTION_LINE = re.compile(r"^\s*#\|")
_PREFIX = re.compile(r"^\s*#\|\s*")
_SEPARATOR = re.compile(r":\s*")
_DIGITS = re.compile(r"^[0-9]+$")

logger = get_logger("parsing.options")


def parse_option_lines(lines: Iterable[str]) -> Dict[str, OptionValue]:
    """Decode option lines into an ordered mapping.

    Lines without a ``:`` separator are skipped. A repeated key keeps its
    first position and takes the later value.
    """
    options: Dict[str, OptionValue] = {}
    for raw in lines:
        line = _PREFIX.sub("", raw, count=1)
        parts = _SEPARATOR.split(line, maxsplit=1)
        if len(parts) < 2:
            logger.debug("Skipping option line without separator: %r", raw)
            continue
        key = parts[0].strip()
        options[key] = parse_option_value(parts[1].strip())
    return options


def parse_option_value(value: str) -> OptionValue:
    """Type a raw option value by its literal shape."""
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1].strip()
        if not inner:
            return []
        return [_unquote(item.strip()) for item in inner.split(",")]
    if value in ("true", "false"):
        return value == "true"
    if _DIGITS.match(value):
        return int(value)
    return _unquote(value)


def format_option_line(key: str, value: OptionValue) -> str:
    """Render an option back into a ``#|`` line that ``parse_option_lines`` accepts."""
    return f"#| {key}: {format_option_value(value)}"


def format_option_value(value: OptionValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        # Only whole numbers survive a round trip; this comes back as a string.
        return repr(value)
    if isinstance(value, str):
        return f'"{value}"'
    items: List[str] = [f'"{item}"' for item in value]
    return "[" + ", ".join(items) + "]"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


__all__ = [
    "OPTION_LINE",
    "format_option_line",
    "format_option_value",
    "parse_option_lines",
    "parse_option_value",
]
