"""Validation and discovery of standalone ``app.json`` manifests.

A manifest is a JSON array of file objects::

    [
      {"name": "app.R", "content": "library(shiny)\\n...", "type": "text"},
      {"name": "www/logo.png", "content": "iVBORw0...", "type": "binary"}
    ]
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Optional
from urllib.parse import urlsplit, urlunsplit

from ..errors import FetchError, ManifestValidationError, ValidationErrorKind
from ..fetch import Fetcher, HttpFetcher
from ..logging import get_logger
from ..models import TEXT, FileEntry

MANIFEST_NAME = "app.json"
REQUIRED_FIELDS = ("name", "content", "type")


@dataclass
class ManifestLookup:
    """Outcome of probing candidate locations for a manifest."""

    valid: bool
    url: Optional[str] = None
    data: Optional[List[Any]] = None


def validate_manifest(data: Any) -> bool:
    """Return ``True`` for a usable manifest, otherwise raise ``ManifestValidationError``."""
    if not isinstance(data, list):
        raise ManifestValidationError(
            ValidationErrorKind.NOT_A_LIST,
            "expected a list or array of files",
        )
    if not data:
        raise ManifestValidationError(
            ValidationErrorKind.EMPTY_LIST,
            "file list is empty; app.json must contain at least one file",
        )
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ManifestValidationError(
                ValidationErrorKind.NOT_A_FILE_OBJECT,
                f"entry {index} is not a file object with name, content and type",
                index=index,
            )
        missing = [name for name in REQUIRED_FIELDS if name not in entry]
        if missing:
            raise ManifestValidationError(
                ValidationErrorKind.MISSING_FIELDS,
                f"entry {index} is missing required fields: {', '.join(missing)}",
                missing_fields=missing,
                index=index,
            )
    return True


def manifest_entries(data: List[Any]) -> List[FileEntry]:
    """Convert validated manifest data into file entries."""
    entries: List[FileEntry] = []
    for raw in data:
        entries.append(
            FileEntry(
                name=str(raw["name"]),
                content="" if raw["content"] is None else str(raw["content"]),
                type=str(raw["type"] or TEXT),
            )
        )
    return entries


def candidate_urls(base_url: str) -> List[str]:
    """Return the locations probed for a manifest, in order and without repeats."""
    parts = urlsplit(base_url)
    trimmed = parts.path.rstrip("/")
    child = urlunsplit(parts._replace(path=f"{trimmed}/{MANIFEST_NAME}", query="", fragment=""))
    parent_path = trimmed.rsplit("/", 1)[0] if "/" in trimmed else ""
    parent = urlunsplit(
        parts._replace(path=f"{parent_path}/{MANIFEST_NAME}", query="", fragment="")
    )
    candidates: List[str] = []
    for url in (base_url, child, parent):
        if url not in candidates:
            candidates.append(url)
    return candidates


class ManifestLocator:
    """Finds the first candidate location that serves a valid manifest."""

    def __init__(self, fetcher: Fetcher | None = None) -> None:
        self.fetcher = fetcher or HttpFetcher()
        self.logger = get_logger("discovery.manifest")

    def find(self, base_url: str) -> ManifestLookup:
        for url in candidate_urls(base_url):
            data = self._probe(url)
            if data is not None:
                self.logger.debug("Found app.json at %s", url)
                return ManifestLookup(valid=True, url=url, data=data)
        return ManifestLookup(valid=False)

    def _probe(self, url: str) -> Optional[List[Any]]:
        try:
            response = self.fetcher.get(url)
        except FetchError as exc:
            self.logger.debug("Skipping %s: %s", url, exc)
            return None
        if not response.ok or not response.is_json():
            self.logger.debug(
                "Skipping %s: status %d, content-type %r",
                url,
                response.status,
                response.content_type,
            )
            return None
        try:
            data = json.loads(response.text())
            validate_manifest(data)
        except (json.JSONDecodeError, ManifestValidationError) as exc:
            self.logger.debug("Skipping %s: %s", url, exc)
            return None
        return data


__all__ = [
    "MANIFEST_NAME",
    "REQUIRED_FIELDS",
    "ManifestLocator",
    "ManifestLookup",
    "candidate_urls",
    "manifest_entries",
    "validate_manifest",
]
