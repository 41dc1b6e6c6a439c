"""Scanner for Shinylive code blocks in rendered Quarto HTML."""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup

from ..logging import get_logger
from ..models import ENGINES, ShinyliveApp
from ..parsing.cells import parse_code_block

CODE_BLOCK_SELECTOR = "pre.shinylive-r, pre.shinylive-python"
QUARTO_SELECTOR = "main.content#quarto-document-content"
ENGINE_ATTRIBUTE = "data-engine"

logger = get_logger("discovery.scanner")


def find_shinylive_code(html: str) -> List[ShinyliveApp]:
    """Parse every Shinylive code block of a page, in document order.

    The engine comes from the ``data-engine`` attribute as written; a missing
    attribute yields ``None`` rather than a guessed engine.
    """
    soup = BeautifulSoup(html, "html.parser")
    apps: List[ShinyliveApp] = []
    for block in soup.select(CODE_BLOCK_SELECTOR):
        engine = block.get(ENGINE_ATTRIBUTE)
        if isinstance(engine, list):
            engine = " ".join(engine)
        if engine not in ENGINES:
            logger.debug("Code block has unrecognised engine %r; keeping it as-is", engine)
        apps.append(parse_code_block(block.get_text(), engine))
    logger.debug("Found %d Shinylive code block(s)", len(apps))
    return apps


def is_quarto_document(html: str) -> bool:
    """Return ``True`` when the page carries Quarto's main content container."""
    soup = BeautifulSoup(html, "html.parser")
    return soup.select_one(QUARTO_SELECTOR) is not None


__all__ = [
    "CODE_BLOCK_SELECTOR",
    "ENGINE_ATTRIBUTE",
    "QUARTO_SELECTOR",
    "find_shinylive_code",
    "is_quarto_document",
]
