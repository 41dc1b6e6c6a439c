"""Plain-text instructions for running extracted applications."""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path, PurePosixPath
from typing import Dict, List, Sequence

from .models import QuartoApps, ShinyliveApp, StandaloneApp
from .orchestrator import APP_DIR
from .writers.dirs import app_dir_name

NO_EXTENSION = "no extension"


def render_result(result: StandaloneApp | QuartoApps, *, cwd: Path | None = None) -> str:
    """Return the instructions matching the kind of extraction result."""
    if isinstance(result, StandaloneApp):
        return format_standalone_app(result)
    return format_quarto_apps(result, cwd=cwd)


def format_standalone_app(result: StandaloneApp) -> str:
    names = [entry.name for entry in result.files]
    lines = _heading("Standalone Shinylive Application", "=")

    if any(name.endswith(".R") for name in names):
        lines.append("Type: R Shiny")
        lines.append("Run in R:")
        lines.append(f'  shiny::runApp("{result.output_dir}")')
    elif any(name.endswith(".py") for name in names):
        lines.append("Type: Python Shiny")
        lines.append("Run in Terminal:")
        lines.append(f'  shiny run --reload --launch-browser "{result.output_dir}"')

    lines.append("")
    lines.extend(_heading("Contents", "-"))
    grouped = _group_by_extension(names)
    for extension in sorted(grouped):
        if extension == NO_EXTENSION:
            lines.append("Files without extension:")
        else:
            lines.append(f".{extension} files:")
        lines.extend(f"  - {name}" for name in grouped[extension])

    lines.append("")
    lines.append(f"Total files: {len(result.files)}")
    lines.append("")
    lines.append(f"Location: {result.output_dir}")
    return "\n".join(lines)


def format_quarto_apps(result: QuartoApps, *, cwd: Path | None = None) -> str:
    if result.output_format == APP_DIR:
        return _format_app_dirs(result)
    return _format_quarto_document(result, cwd=cwd or Path.cwd())


def main_python_file(app: ShinyliveApp) -> str:
    """Pick the file ``shiny run`` should start: ``app.py`` or the first ``.py``."""
    names = list(app.files)
    if "app.py" in names:
        return "app.py"
    for name in names:
        if name.endswith(".py"):
            return name
    return ""


def _format_app_dirs(result: QuartoApps) -> str:
    base = Path(result.output_path).resolve()
    count = len(result.apps)
    app_dirs = [Path(path).resolve() for path in result.app_dirs] or [
        base / app_dir_name(index, count) for index in range(1, count + 1)
    ]
    r_apps = [i for i, app in enumerate(result.apps) if app.engine == "r"]
    py_apps = [i for i, app in enumerate(result.apps) if app.engine == "python"]

    lines = _heading("Shinylive Applications", "=")
    if r_apps:
        lines.extend(_heading("Shiny for R Applications", "-"))
        lines.append("Run in R:")
        for index in r_apps:
            lines.append(f'  shiny::runApp("{app_dirs[index].as_posix()}")')

    if py_apps:
        if r_apps:
            lines.append("")
        lines.extend(_heading("Shiny for Python Applications", "-"))
        lines.append("Run in Terminal:")
        for index in py_apps:
            app_path = app_dirs[index] / main_python_file(result.apps[index])
            lines.append(f'  shiny run --reload --launch-browser "{app_path.as_posix()}"')
    return "\n".join(lines)


def _format_quarto_document(result: QuartoApps, *, cwd: Path) -> str:
    doc_path = Path(result.output_path)
    doc_dir = doc_path.parent.resolve()
    needs_cd = doc_dir != cwd.resolve()

    lines = _heading("Quarto Document with Shinylive Applications", "=")
    lines.extend(_heading("Setup and Preview Steps", "-"))

    step = 1
    if needs_cd:
        lines.append("")
        lines.append(f"Step {step}: Change to the document directory:")
        lines.append(f'  cd "{doc_dir}"')
        step += 1

    lines.append("")
    lines.append(f"Step {step}: Install the Shinylive extension:")
    lines.append("  quarto add quarto-ext/shinylive")
    step += 1

    lines.append("")
    lines.append(f"Step {step}: Preview the document:")
    lines.append(f'  quarto preview "{doc_path.name}"')

    lines.append("")
    lines.extend(_heading("Contents", "-"))
    r_count = sum(1 for app in result.apps if app.engine == "r")
    py_count = sum(1 for app in result.apps if app.engine == "python")
    lines.append(f"* R applications: {r_count}")
    lines.append(f"* Python applications: {py_count}")
    return "\n".join(lines)


def _group_by_extension(names: Sequence[str]) -> Dict[str, List[str]]:
    grouped: Dict[str, List[str]] = defaultdict(list)
    for name in names:
        suffix = PurePosixPath(name).suffix
        grouped[suffix[1:] if suffix else NO_EXTENSION].append(name)
    return grouped


def _heading(title: str, underline: str) -> List[str]:
    return [title, underline * len(title)]


__all__ = ["format_quarto_apps", "format_standalone_app", "main_python_file", "render_result"]
