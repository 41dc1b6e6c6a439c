"""Pipeline orchestration for app, quarto and standalone extraction."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

from .config import PeekyConfig
from .discovery.manifest import ManifestLocator, manifest_entries, validate_manifest
from .discovery.scanner import find_shinylive_code, is_quarto_document
from .errors import DiscoveryError, FetchError
from .fetch import Fetcher, HttpFetcher, HttpResponse
from .logging import get_logger
from .models import QuartoApps, StandaloneApp
from .writers.dirs import write_apps_to_dirs
from .writers.files import write_standalone_files
from .writers.quarto import write_apps_to_quarto

APP_DIR = "app-dir"
QUARTO = "quarto"
OUTPUT_FORMATS = (APP_DIR, QUARTO)


class Orchestrator:
    """Coordinates download, discovery and writing of Shinylive applications."""

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        locator: ManifestLocator | None = None,
        config: PeekyConfig | None = None,
    ) -> None:
        self.config = config or PeekyConfig(root=Path.cwd())
        self.fetcher = fetcher or HttpFetcher(
            user_agent=self.config.http.user_agent,
            timeout=self.config.http.timeout,
        )
        self.locator = locator or ManifestLocator(self.fetcher)
        self.logger = get_logger("orchestrator")

    def peek_app(
        self, url: str, output_dir: str | Path | None = None
    ) -> StandaloneApp | QuartoApps:
        """Extract whatever Shinylive content lives at ``url``.

        Quarto pages are written in app-dir format; anything else is treated
        as a standalone app and resolved through its app.json.
        """
        self.logger.info("Inspecting %s", url)
        response = self._download(url, what="URL")

        if response.is_html():
            html = response.text()
            if is_quarto_document(html):
                self.logger.info("Detected a Quarto document")
                target = Path(output_dir) if output_dir is not None else self.config.output.apps_dir
                return self._extract_quarto(html, url, APP_DIR, target)

        return self.peek_standalone(url, output_dir)

    def peek_quarto(
        self,
        url: str,
        output_format: str = APP_DIR,
        output_path: str | Path | None = None,
    ) -> QuartoApps:
        """Extract every application embedded in the Quarto document at ``url``."""
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {', '.join(OUTPUT_FORMATS)}; got {output_format!r}"
            )
        if output_path is None:
            target = (
                self.config.output.apps_dir
                if output_format == APP_DIR
                else self.config.output.quarto_path
            )
        else:
            target = Path(output_path)

        self.logger.info("Downloading Quarto document %s", url)
        response = self._download(url, what="Quarto document")
        return self._extract_quarto(response.text(), url, output_format, target)

    def peek_standalone(self, url: str, output_dir: str | Path | None = None) -> StandaloneApp:
        """Extract the standalone application whose app.json lives at or near ``url``."""
        lookup = self.locator.find(url)
        if not lookup.valid or lookup.url is None:
            raise DiscoveryError(
                f"No Shinylive app found at {url}",
                url=url,
                hint=(
                    "Check that the URL points to either a Shinylive app.json file "
                    "or a directory containing app.json."
                ),
            )
        target = Path(output_dir) if output_dir is not None else self.config.output.app_dir
        return self.write_standalone_app(lookup.data, lookup.url, target)

    def write_standalone_app(self, data: Any, source_url: str, output_dir: str | Path) -> StandaloneApp:
        """Validate decoded app.json data and write its files under ``output_dir``."""
        validate_manifest(data)
        entries = manifest_entries(data)
        output_dir = Path(output_dir)
        write_standalone_files(entries, output_dir)
        self.logger.info("Wrote %d file(s) to %s", len(entries), output_dir)
        return StandaloneApp(files=entries, output_dir=output_dir, source_url=source_url)

    def _extract_quarto(
        self, html: str, url: str, output_format: str, output_path: Path
    ) -> QuartoApps:
        apps = find_shinylive_code(html)
        if not apps:
            raise DiscoveryError(
                f"No Shinylive applications found in the Quarto document at {url}",
                url=url,
                hint=(
                    "Check that the document contains code blocks with class "
                    "shinylive-r or shinylive-python."
                ),
            )
        self.logger.info("Found %d application(s)", len(apps))

        app_dirs: List[Path] = []
        if output_format == APP_DIR:
            app_dirs = write_apps_to_dirs(apps, output_path)
        else:
            write_apps_to_quarto(apps, output_path, title=self.config.output.quarto_title)
        self.logger.info("Wrote %s output to %s", output_format, output_path)
        return QuartoApps(
            apps=apps,
            output_format=output_format,
            output_path=output_path,
            app_dirs=app_dirs,
        )

    def _download(self, url: str, *, what: str) -> HttpResponse:
        response = self.fetcher.get(url)
        if not response.ok:
            raise FetchError(
                f"Failed to download {what}: {url} returned HTTP {response.status}",
                url=url,
                status=response.status,
            )
        return response


__all__ = ["APP_DIR", "OUTPUT_FORMATS", "Orchestrator", "QUARTO"]
