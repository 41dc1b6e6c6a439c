"""Locating Shinylive applications in pages and app.json bundles."""

from .manifest import (
    MANIFEST_NAME,
    REQUIRED_FIELDS,
    ManifestLocator,
    ManifestLookup,
    candidate_urls,
    manifest_entries,
    validate_manifest,
)
from .scanner import CODE_BLOCK_SELECTOR, QUARTO_SELECTOR, find_shinylive_code, is_quarto_document

__all__ = [
    "CODE_BLOCK_SELECTOR",
    "MANIFEST_NAME",
    "ManifestLocator",
    "ManifestLookup",
    "QUARTO_SELECTOR",
    "REQUIRED_FIELDS",
    "candidate_urls",
    "find_shinylive_code",
    "is_quarto_document",
    "manifest_entries",
    "validate_manifest",
]
