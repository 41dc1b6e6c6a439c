"""HTTP retrieval for Shinylive pages and app.json bundles."""

from __future__ import annotations

from dataclasses import dataclass, field
from email.message import Message
from typing import Dict, Optional, Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .errors import FetchError
from .logging import get_logger

DEFAULT_USER_AGENT = "peeky/0.1"


@dataclass
class HttpResponse:
    """Status, headers and raw body of a GET request."""

    url: str
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    def text(self, encoding: str | None = None) -> str:
        """Decode the body, preferring the charset announced by the server."""
        charset = encoding or _charset(self.content_type) or "utf-8"
        try:
            return self.body.decode(charset, errors="replace")
        except LookupError:
            return self.body.decode("utf-8", errors="replace")

    def is_json(self) -> bool:
        return "application/json" in self.content_type

    def is_html(self) -> bool:
        return "text/html" in self.content_type


class Fetcher(Protocol):
    """Anything that can GET a URL."""

    def get(self, url: str) -> HttpResponse:
        """Return the response for ``url`` or raise ``FetchError``."""


class HttpFetcher:
    """Performs GET requests with urllib."""

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: Optional[float] = None,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.logger = get_logger("fetch")

    def get(self, url: str) -> HttpResponse:
        request = Request(url, headers={"User-Agent": self.user_agent}, method="GET")
        self.logger.debug("GET %s", url)
        kwargs: Dict[str, float] = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        try:
            with urlopen(request, **kwargs) as response:  # type: ignore[arg-type]
                body = response.read()
                status = getattr(response, "status", 200)
                headers = _normalise_headers(response.headers)
        except HTTPError as exc:
            # Error statuses are still responses; callers decide whether they are fatal.
            body = exc.read() if hasattr(exc, "read") else b""
            return HttpResponse(
                url=url,
                status=exc.code,
                headers=_normalise_headers(exc.headers),
                body=body or b"",
            )
        except URLError as exc:
            raise FetchError(f"Could not reach {url}: {exc.reason}", url=url) from exc
        except (OSError, ValueError) as exc:
            raise FetchError(f"Could not reach {url}: {exc}", url=url) from exc
        self.logger.debug("GET %s -> %d (%d bytes)", url, status, len(body))
        return HttpResponse(url=url, status=status, headers=headers, body=body)


def _normalise_headers(headers: Optional[Message]) -> Dict[str, str]:
    if headers is None:
        return {}
    return {key.lower(): value for key, value in headers.items()}


def _charset(content_type: str) -> Optional[str]:
    for part in content_type.split(";")[1:]:
        name, _, value = part.partition("=")
        if name.strip().lower() == "charset" and value.strip():
            return value.strip().strip('"')
    return None


__all__ = ["DEFAULT_USER_AGENT", "Fetcher", "HttpFetcher", "HttpResponse"]
