"""Core data models shared across peeky components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

OptionValue = Union[bool, int, float, str, List[str]]
"""Typed value of a ``#|`` option line. Check ``bool`` before ``int``."""

ENGINES = ("r", "python")
DEFAULT_FILE_NAMES = {"r": "app.R", "python": "app.py"}
TEXT = "text"
BINARY = "binary"


@dataclass
class FileEntry:
    """A single bundled file, either raw text or base64 encoded binary."""

    name: str
    content: str
    type: str = TEXT


@dataclass
class ShinyliveApp:
    """One application recovered from a Shinylive code block.

    ``engine`` is taken verbatim from the page and may be ``None`` or an
    unknown label. ``options`` and ``files`` keep first-appearance order.
    """

    engine: Optional[str]
    options: Dict[str, OptionValue] = field(default_factory=dict)
    files: Dict[str, FileEntry] = field(default_factory=dict)

    def metadata(self) -> Dict[str, object]:
        return {"engine": self.engine, "options": dict(self.options)}


@dataclass
class StandaloneApp:
    """Result of extracting a standalone app.json bundle."""

    files: List[FileEntry]
    output_dir: Path
    source_url: str


@dataclass
class QuartoApps:
    """Result of extracting every application embedded in a Quarto document."""

    apps: List[ShinyliveApp]
    output_format: str
    output_path: Path
    app_dirs: List[Path] = field(default_factory=list)


def default_file_name(engine: Optional[str]) -> str:
    """Return the implicit single-file name for an engine."""
    return DEFAULT_FILE_NAMES["r"] if engine == "r" else DEFAULT_FILE_NAMES["python"]
