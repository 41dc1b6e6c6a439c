"""Parser for the text of a single Shinylive code block.

A block mixes three kinds of directives with application source::

    #| viewerHeight: 500
    ## file: app.R
    library(shiny)
    ## file: www/logo.png
    ## type: binary
    iVBORw0KGgo...

``#|`` lines are options, ``## file:`` starts a new file and ``## type:``
overrides the type of the file being read. Content found before any file
marker is placed in ``app.R`` or ``app.py`` depending on the engine.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ..logging import get_logger
from ..models import TEXT, FileEntry, ShinyliveApp, default_file_name
from .options import OPTION_LINE, parse_option_lines

FILE_MARKER = re.compile(r"^##\s*file:\s*")
TYPE_MARKER = re.compile(r"^##\s*type:\s*")
_SKIPPABLE = re.compile(r"^\s*#|^\s*$")

logger = get_logger("parsing.cells")


@dataclass
class _NoOpenFile:
    # A ``## type:`` seen before any content applies to the implicit file.
    type: str = TEXT


@dataclass
class _Accumulating:
    name: str
    type: str = TEXT
    lines: List[str] = field(default_factory=list)


_State = Union[_NoOpenFile, _Accumulating]


def parse_code_block(code_text: str, engine: Optional[str]) -> ShinyliveApp:
    """Parse one code block into an application with options and files."""
    lines = _split_lines(code_text)
    options = parse_option_lines(line for line in lines if OPTION_LINE.match(line))

    files: Dict[str, FileEntry] = {}
    state: _State = _NoOpenFile()

    for line in lines:
        if FILE_MARKER.match(line):
            _flush(state, files)
            state = _Accumulating(name=FILE_MARKER.sub("", line, count=1))
            continue

        if TYPE_MARKER.match(line):
            state.type = TYPE_MARKER.sub("", line, count=1)
            continue

        if OPTION_LINE.match(line):
            continue

        if isinstance(state, _Accumulating):
            state.lines.append(line)
        elif not _SKIPPABLE.match(line):
            state = _Accumulating(
                name=default_file_name(engine), type=state.type, lines=[line]
            )

    _flush(state, files)
    logger.debug(
        "Parsed %s block with %d option(s) and %d file(s)",
        engine,
        len(options),
        len(files),
    )
    return ShinyliveApp(engine=engine, options=options, files=files)


def _flush(state: _State, files: Dict[str, FileEntry]) -> None:
    if not isinstance(state, _Accumulating):
        return
    if state.name in files:
        logger.debug("File %s appears more than once; keeping the last copy", state.name)
    files[state.name] = FileEntry(
        name=state.name,
        content="\n".join(state.lines),
        type=state.type,
    )


def _split_lines(text: str) -> List[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


__all__ = ["FILE_MARKER", "TYPE_MARKER", "parse_code_block"]
