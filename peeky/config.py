"""Configuration loading for peeky (.peeky.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .fetch import DEFAULT_USER_AGENT
from .writers.quarto import DEFAULT_TITLE

CONFIG_NAME = ".peeky.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class OutputConfig:
    """Default output locations when the caller does not pass one."""

    app_dir: Path = Path("converted_shiny_app")
    apps_dir: Path = Path("converted_shiny_apps")
    quarto_path: Path = Path("converted_shiny_apps.qmd")
    quarto_title: str = DEFAULT_TITLE


@dataclass
class HttpConfig:
    """Settings passed to the HTTP fetcher."""

    user_agent: str = DEFAULT_USER_AGENT
    timeout: Optional[float] = None


@dataclass
class PeekyConfig:
    """Represents the settings defined in .peeky.yml."""

    root: Path
    output: OutputConfig = field(default_factory=OutputConfig)
    http: HttpConfig = field(default_factory=HttpConfig)


def load_config(config_path: Path) -> PeekyConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return PeekyConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_NAME} must contain a mapping at the root")

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    if output_data:
        app_dir = _as_str(output_data.get("app_dir"))
        apps_dir = _as_str(output_data.get("apps_dir"))
        quarto_path = _as_str(output_data.get("quarto_path"))
        title = _as_str(output_data.get("quarto_title"))
        if app_dir:
            output.app_dir = root / app_dir
        if apps_dir:
            output.apps_dir = root / apps_dir
        if quarto_path:
            output.quarto_path = root / quarto_path
        if title:
            output.quarto_title = title

    http = HttpConfig()
    http_data = _as_dict(data.get("http"))
    if http_data:
        http.user_agent = _as_str(http_data.get("user_agent")) or DEFAULT_USER_AGENT
        http.timeout = _as_float(http_data.get("timeout"))

    return PeekyConfig(root=root, output=output, http=http)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


__all__ = ["CONFIG_NAME", "ConfigError", "HttpConfig", "OutputConfig", "PeekyConfig", "load_config"]
