"""Tests for finding Shinylive code blocks in HTML."""

from __future__ import annotations

from peeky.discovery.scanner import find_shinylive_code, is_quarto_document

from tests._fixtures.pages import PY_APP, R_APP, code_block, quarto_page


def test_find_shinylive_code_returns_blocks_in_document_order() -> None:
    html = quarto_page(
        code_block(PY_APP, "python"),
        "<p>prose</p>",
        code_block(R_APP, "r"),
        code_block("print(1)", "python"),
    )

    apps = find_shinylive_code(html)

    assert [app.engine for app in apps] == ["python", "r", "python"]
    assert apps[0].options == {"components": ["editor", "viewer"]}
    assert list(apps[0].files) == ["app.py"]
    assert list(apps[1].files) == ["app.R", "data.csv"]


def test_find_shinylive_code_decodes_html_entities() -> None:
    html = quarto_page(
        '<pre class="shinylive-r" data-engine="r">ui &lt;- fluidPage()\nx &amp;&amp; y</pre>'
    )
    apps = find_shinylive_code(html)
    assert apps[0].files["app.R"].content == "ui <- fluidPage()\nx && y"


def test_find_shinylive_code_ignores_other_code_blocks() -> None:
    html = quarto_page(
        '<pre class="sourceCode r">library(shiny)</pre>',
        '<div class="shinylive-r" data-engine="r">library(shiny)</div>',
    )
    assert find_shinylive_code(html) == []


def test_find_shinylive_code_passes_engine_attribute_through() -> None:
    # Documented quirk: a missing or unknown data-engine is not corrected.
    html = quarto_page(
        code_block("library(shiny)", None, css_class="shinylive-r"),
        code_block("print(1)", "julia", css_class="shinylive-python"),
    )

    apps = find_shinylive_code(html)

    assert [app.engine for app in apps] == [None, "julia"]
    assert list(apps[0].files) == ["app.py"]
    assert list(apps[1].files) == ["app.py"]


def test_is_quarto_document_checks_main_content() -> None:
    assert is_quarto_document(quarto_page()) is True
    assert is_quarto_document("<html><main class='content'></main></html>") is False
