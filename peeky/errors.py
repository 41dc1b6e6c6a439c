"""Exception hierarchy for extraction failures."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence


class PeekyError(RuntimeError):
    """Base class for errors surfaced to CLI and service callers."""


class FetchError(PeekyError):
    """Raised when a required download fails."""

    def __init__(self, message: str, *, url: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class DiscoveryError(PeekyError):
    """Raised when no application can be found at a location."""

    def __init__(self, message: str, *, url: str, hint: str | None = None) -> None:
        full = f"{message}\n{hint}" if hint else message
        super().__init__(full)
        self.url = url
        self.hint = hint


class ValidationErrorKind(str, Enum):
    NOT_A_LIST = "not_a_list"
    EMPTY_LIST = "empty_list"
    NOT_A_FILE_OBJECT = "not_a_file_object"
    MISSING_FIELDS = "missing_fields"


class ManifestValidationError(PeekyError):
    """Raised when decoded app.json data does not describe a file bundle."""

    def __init__(
        self,
        kind: ValidationErrorKind,
        message: str,
        *,
        missing_fields: Sequence[str] = (),
        index: Optional[int] = None,
    ) -> None:
        super().__init__(f"Invalid app.json structure: {message}")
        self.kind = kind
        self.missing_fields = list(missing_fields)
        self.index = index


class UnsafePathError(PeekyError):
    """Raised when a bundled file name would be written outside its directory."""


__all__ = [
    "DiscoveryError",
    "FetchError",
    "ManifestValidationError",
    "PeekyError",
    "UnsafePathError",
    "ValidationErrorKind",
]
