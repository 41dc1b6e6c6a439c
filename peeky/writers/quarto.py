"""Document output: all applications recombined into one Quarto file."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Sequence

import yaml

from ..logging import get_logger
from ..models import TEXT, ShinyliveApp
from ..parsing.options import format_option_line

DEFAULT_TITLE = "Extracted Shinylive Applications"
HEADING = "# Shinylive Applications"
FENCE = "```"
_BACKTICK_RUN = re.compile(r"^ {0,3}(`+)", re.MULTILINE)

logger = get_logger("writers.quarto")


def render_quarto_document(apps: Sequence[ShinyliveApp], *, title: str = DEFAULT_TITLE) -> str:
    """Render apps as a ``.qmd`` document that the shinylive filter can run.

    Each block is fenced with more backticks than any fence inside its files,
    so embedded Markdown samples do not close it early. An app without an
    engine is written with an empty ``{shinylive-}`` label.
    """
    frontmatter = yaml.safe_dump(
        {"title": title, "filters": ["shinylive"]},
        sort_keys=False,
        default_flow_style=False,
    )
    lines: List[str] = ["---", *frontmatter.rstrip("\n").split("\n"), "---", "", HEADING, ""]

    for index, app in enumerate(apps, start=1):
        lines.append(f"## Application {index}")
        lines.append("")
        lines.extend(_render_block(app))
        lines.extend(["", ""])

    return "\n".join(lines) + "\n"


def write_apps_to_quarto(
    apps: Sequence[ShinyliveApp], qmd_path: Path, *, title: str = DEFAULT_TITLE
) -> Path:
    qmd_path = Path(qmd_path)
    qmd_path.parent.mkdir(parents=True, exist_ok=True)
    qmd_path.write_text(render_quarto_document(apps, title=title), encoding="utf-8")
    logger.debug("Wrote %d app(s) to %s", len(apps), qmd_path)
    return qmd_path


def _render_block(app: ShinyliveApp) -> List[str]:
    fence = _fence_for(app)
    label = app.engine if app.engine is not None else ""
    block = [f"{fence}{{shinylive-{label}}}"]
    block.extend(format_option_line(key, value) for key, value in app.options.items())
    for name, entry in app.files.items():
        block.append(f"## file: {name}")
        if entry.type != TEXT:
            block.append(f"## type: {entry.type}")
        block.append(entry.content)
    block.append(fence)
    return block


def _fence_for(app: ShinyliveApp) -> str:
    """Return a backtick fence longer than any fence inside the app's files."""
    longest = 0
    for entry in app.files.values():
        for match in _BACKTICK_RUN.finditer(entry.content):
            longest = max(longest, len(match.group(1)))
    return "`" * max(len(FENCE), longest + 1)


__all__ = ["DEFAULT_TITLE", "render_quarto_document", "write_apps_to_quarto"]
