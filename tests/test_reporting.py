"""Tests for the run instructions printed after extraction."""

from __future__ import annotations

from pathlib import Path

from peeky.models import FileEntry, QuartoApps, ShinyliveApp, StandaloneApp
from peeky.reporting import format_quarto_apps, format_standalone_app, main_python_file, render_result


def _standalone(*names: str) -> StandaloneApp:
    return StandaloneApp(
        files=[FileEntry(name=name, content="") for name in names],
        output_dir=Path("converted_shiny_app"),
        source_url="https://example.com/app.json",
    )


def test_format_standalone_app_for_r() -> None:
    text = format_standalone_app(_standalone("app.R", "data/example.csv", "README"))

    assert "Type: R Shiny" in text
    assert 'shiny::runApp("converted_shiny_app")' in text
    assert ".R files:\n  - app.R" in text
    assert ".csv files:\n  - data/example.csv" in text
    assert "Files without extension:\n  - README" in text
    assert "Total files: 3" in text
    assert "Location: converted_shiny_app" in text


def test_format_standalone_app_for_python() -> None:
    text = format_standalone_app(_standalone("app.py", "requirements.txt"))

    assert "Type: Python Shiny" in text
    assert 'shiny run --reload --launch-browser "converted_shiny_app"' in text
    assert text.index(".py files:") < text.index(".txt files:")


def test_format_quarto_apps_lists_run_commands_per_engine(tmp_path: Path) -> None:
    base = tmp_path / "apps"
    apps = [
        ShinyliveApp("python", {}, {"app.py": FileEntry("app.py", "")}),
        ShinyliveApp("r", {}, {"app.R": FileEntry("app.R", "")}),
        ShinyliveApp("python", {}, {"utils.py": FileEntry("utils.py", ""), "main.py": FileEntry("main.py", "")}),
    ]
    app_dirs = [base / f"app_{index}" for index in range(1, 4)]
    result = QuartoApps(apps=apps, output_format="app-dir", output_path=base, app_dirs=app_dirs)

    text = format_quarto_apps(result)

    resolved = base.resolve().as_posix()
    assert f'shiny::runApp("{resolved}/app_2")' in text
    assert f'shiny run --reload --launch-browser "{resolved}/app_1/app.py"' in text
    assert f'shiny run --reload --launch-browser "{resolved}/app_3/utils.py"' in text
    assert text.index("Shiny for R Applications") < text.index("Shiny for Python Applications")


def test_format_quarto_apps_derives_padded_dirs_when_missing(tmp_path: Path) -> None:
    apps = [ShinyliveApp("r", {}, {"app.R": FileEntry("app.R", "")}) for _ in range(10)]
    result = QuartoApps(apps=apps, output_format="app-dir", output_path=tmp_path)

    text = format_quarto_apps(result)

    assert f'shiny::runApp("{tmp_path.resolve().as_posix()}/app_01")' in text
    assert "Shiny for Python Applications" not in text


def test_format_quarto_document_steps(tmp_path: Path) -> None:
    apps = [
        ShinyliveApp("r", {}, {}),
        ShinyliveApp("python", {}, {}),
        ShinyliveApp("python", {}, {}),
    ]
    result = QuartoApps(apps=apps, output_format="quarto", output_path=tmp_path / "docs" / "apps.qmd")

    elsewhere = format_quarto_apps(result, cwd=tmp_path)
    here = format_quarto_apps(result, cwd=tmp_path / "docs")

    assert "Step 1: Change to the document directory:" in elsewhere
    assert "Step 3: Preview the document:" in elsewhere
    assert "Change to the document directory" not in here
    assert "Step 1: Install the Shinylive extension:" in here
    assert 'quarto preview "apps.qmd"' in here
    assert "* R applications: 1" in here
    assert "* Python applications: 2" in here


def test_main_python_file_prefers_app_py() -> None:
    app = ShinyliveApp("python", {}, {"utils.py": FileEntry("utils.py", ""), "app.py": FileEntry("app.py", "")})
    assert main_python_file(app) == "app.py"
    assert main_python_file(ShinyliveApp("python", {}, {})) == ""


def test_render_result_dispatches_on_result_type() -> None:
    assert render_result(_standalone("app.R")).startswith("Standalone Shinylive Application")
