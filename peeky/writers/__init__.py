"""Writers that rebuild extracted applications on disk."""

from .dirs import METADATA_FILE, app_dir_name, padding_width, write_apps_to_dirs
from .files import resolve_entry_path, write_file_content, write_standalone_files
from .quarto import DEFAULT_TITLE, render_quarto_document, write_apps_to_quarto

__all__ = [
    "DEFAULT_TITLE",
    "METADATA_FILE",
    "app_dir_name",
    "padding_width",
    "render_quarto_document",
    "resolve_entry_path",
    "write_apps_to_dirs",
    "write_apps_to_quarto",
    "write_file_content",
    "write_standalone_files",
]
