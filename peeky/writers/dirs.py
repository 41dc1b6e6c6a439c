"""Directory output: one numbered folder per extracted application."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Sequence

from ..logging import get_logger
from ..models import ShinyliveApp
from .files import resolve_entry_path, write_file_content

METADATA_FILE = "shinylive_metadata.json"

logger = get_logger("writers.dirs")


def padding_width(count: int) -> int:
    """Number of digits needed to number ``count`` items, never less than one."""
    if count <= 0:
        return 1
    return len(str(count))


def app_dir_name(index: int, count: int) -> str:
    """Name of the folder for the 1-based ``index`` out of ``count`` apps."""
    return f"app_{index:0{padding_width(count)}d}"


def write_apps_to_dirs(apps: Sequence[ShinyliveApp], base_dir: Path) -> List[Path]:
    """Write each app into ``base_dir/app_<n>`` with a metadata sidecar.

    Existing files are overwritten. Returns the created app directories in
    the order of ``apps``.
    """
    base_dir = Path(base_dir)
    base_dir.mkdir(parents=True, exist_ok=True)

    app_dirs: List[Path] = []
    for index, app in enumerate(apps, start=1):
        app_dir = base_dir / app_dir_name(index, len(apps))
        app_dir.mkdir(parents=True, exist_ok=True)

        for entry in app.files.values():
            target = resolve_entry_path(app_dir, entry.name)
            write_file_content(entry.content, target, entry.type)

        (app_dir / METADATA_FILE).write_text(
            json.dumps(app.metadata(), indent=2), encoding="utf-8"
        )
        logger.debug("Wrote %d file(s) for %s app to %s", len(app.files), app.engine, app_dir)
        app_dirs.append(app_dir)
    return app_dirs


__all__ = ["METADATA_FILE", "app_dir_name", "padding_width", "write_apps_to_dirs"]
