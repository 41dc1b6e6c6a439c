"""Extract Shiny applications bundled into Shinylive apps and Quarto documents."""

from .models import FileEntry, QuartoApps, ShinyliveApp, StandaloneApp
from .orchestrator import Orchestrator

__version__ = "0.1.0"

__all__ = [
    "FileEntry",
    "Orchestrator",
    "QuartoApps",
    "ShinyliveApp",
    "StandaloneApp",
    "__version__",
]
