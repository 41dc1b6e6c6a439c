"""Materialise bundled files, text or base64 binary, onto disk."""

from __future__ import annotations

import base64
from pathlib import Path, PurePosixPath
from typing import Iterable, List

from ..errors import UnsafePathError
from ..logging import get_logger
from ..models import BINARY, TEXT, FileEntry

logger = get_logger("writers.files")


def write_file_content(content: str, file_path: Path, type: str = TEXT) -> Path:
    """Write one file, creating parent directories as needed.

    Binary content is base64 decoded first; a malformed payload raises
    ``binascii.Error``. Text is written as UTF-8 with every line terminated
    by a single newline.
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    if type == BINARY:
        compact = "".join(content.split())
        data = base64.b64decode(compact, validate=True)
        file_path.write_bytes(data)
        logger.debug("Wrote %d bytes to %s", len(data), file_path)
        return file_path

    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    text = "".join(f"{line}\n" for line in lines)
    with file_path.open("w", encoding="utf-8", newline="\n") as handle:
        handle.write(text)
    logger.debug("Wrote %d line(s) to %s", len(lines), file_path)
    return file_path


def resolve_entry_path(root: Path, name: str) -> Path:
    """Return where a bundled file called ``name`` goes under ``root``."""
    relative = PurePosixPath(name.replace("\\", "/"))
    if not name or relative.is_absolute() or ".." in relative.parts:
        raise UnsafePathError(f"Refusing to write {name!r} outside {root}")
    return Path(root).joinpath(*relative.parts)


def write_standalone_files(entries: Iterable[FileEntry], output_dir: Path) -> List[Path]:
    """Write every manifest entry under ``output_dir``."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for entry in entries:
        target = resolve_entry_path(output_dir, entry.name)
        written.append(write_file_content(entry.content, target, entry.type))
    return written


__all__ = ["resolve_entry_path", "write_file_content", "write_standalone_files"]
