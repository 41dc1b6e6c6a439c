"""Tests for parsing Shinylive code block text."""

from __future__ import annotations

from peeky.models import FileEntry
from peeky.parsing.cells import parse_code_block

from tests._fixtures.pages import R_APP


def test_parse_code_block_reads_options_and_files() -> None:
    app = parse_code_block(R_APP, "r")

    assert app.engine == "r"
    assert app.options == {"viewerHeight": 500, "standalone": True}
    assert list(app.files) == ["app.R", "data.csv"]
    assert app.files["app.R"] == FileEntry(
        name="app.R",
        content=(
            "library(shiny)\n"
            "ui <- fluidPage()\n"
            "server <- function(input, output) {}\n"
            "shinyApp(ui, server)"
        ),
        type="text",
    )
    assert app.files["data.csv"].content == "x,y\n1,2"
    assert app.files["data.csv"].type == "text"


def test_parse_code_block_without_file_marker_uses_engine_default() -> None:
    r_app = parse_code_block("library(shiny)\nshinyApp(ui, server)\n", "r")
    py_app = parse_code_block("\n# comment\nfrom shiny import App\n", "python")

    assert list(r_app.files) == ["app.R"]
    assert r_app.files["app.R"].content == "library(shiny)\nshinyApp(ui, server)"
    assert list(py_app.files) == ["app.py"]
    assert py_app.files["app.py"].content == "from shiny import App"


def test_parse_code_block_unknown_engine_defaults_to_python_file_name() -> None:
    app = parse_code_block("print('hi')", None)
    assert app.engine is None
    assert list(app.files) == ["app.py"]


def test_parse_code_block_with_only_options_has_no_files() -> None:
    app = parse_code_block("#| viewerHeight: 300\n#| standalone: true\n", "python")
    assert app.options == {"viewerHeight": 300, "standalone": True}
    assert app.files == {}


def test_parse_code_block_type_marker_applies_to_open_file() -> None:
    code = "## file: www/logo.png\n## type: binary\niVBORw0KGgo=\n## file: app.py\nimport shiny"
    app = parse_code_block(code, "python")

    assert app.files["www/logo.png"].type == "binary"
    assert app.files["www/logo.png"].content == "iVBORw0KGgo="
    assert app.files["app.py"].type == "text"


def test_parse_code_block_keeps_blank_lines_inside_files() -> None:
    code = "## file: app.py\nimport shiny\n\n\napp = None\n"
    app = parse_code_block(code, "python")
    assert app.files["app.py"].content == "import shiny\n\n\napp = None"


def test_parse_code_block_duplicate_file_names_last_write_wins() -> None:
    # Documented quirk: repeated names are not merged or rejected.
    code = "## file: app.R\nfirst\n## file: data.csv\na,b\n## file: app.R\nsecond"
    app = parse_code_block(code, "r")

    assert list(app.files) == ["app.R", "data.csv"]
    assert app.files["app.R"].content == "second"


def test_parse_code_block_indented_file_marker_is_a_comment() -> None:
    code = "  #| viewerHeight: 400\n  ## file: main.py\n  from shiny import App\n"
    app = parse_code_block(code, "python")

    assert app.options == {"viewerHeight": 400}
    assert list(app.files) == ["app.py"]
    assert app.files["app.py"].content == "  from shiny import App"
