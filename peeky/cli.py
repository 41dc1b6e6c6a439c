"""CLI entrypoints for peeky commands."""

from __future__ import annotations

import argparse
import binascii
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .errors import PeekyError
from .logging import configure_logging
from .orchestrator import OUTPUT_FORMATS, Orchestrator
from .reporting import render_result


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_url_argument(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("url", help=help_text)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="peeky",
        description="Extract Shiny applications from Shinylive apps and Quarto documents.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .peeky.yml or the directory holding it (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    app_parser = subparsers.add_parser(
        "app",
        help="Extract a standalone app or every app of a Quarto document, whichever the URL holds.",
    )
    _add_verbose_option(app_parser, suppress_default=True)
    _add_url_argument(app_parser, "URL of a Shinylive app, its app.json, or a Quarto document.")
    app_parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help=(
            "Directory to extract into (defaults to converted_shiny_app for standalone "
            "apps and converted_shiny_apps for Quarto documents)."
        ),
    )

    quarto_parser = subparsers.add_parser(
        "quarto",
        help="Extract every Shinylive app embedded in a Quarto document.",
    )
    _add_verbose_option(quarto_parser, suppress_default=True)
    _add_url_argument(quarto_parser, "URL of the rendered Quarto document.")
    quarto_parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=OUTPUT_FORMATS[0],
        help="Write one directory per app (app-dir) or a single .qmd document (quarto).",
    )
    quarto_parser.add_argument(
        "-o",
        "--output-path",
        default=None,
        help="Output directory or .qmd path (defaults depend on --format).",
    )

    standalone_parser = subparsers.add_parser(
        "standalone",
        help="Extract a standalone Shinylive app from its app.json.",
    )
    _add_verbose_option(standalone_parser, suppress_default=True)
    _add_url_argument(standalone_parser, "URL of app.json or the directory serving it.")
    standalone_parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Directory to extract into (defaults to converted_shiny_app).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing the extraction commands.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for peeky commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "serve":
        try:
            from .service import run_service
        except ModuleNotFoundError as exc:
            parser.exit(
                1,
                f"Service mode needs FastAPI ({exc.name} is missing). "
                "Install it with `pip install 'peeky[service]'`.\n",
            )

        try:
            run_service(host=args.host, port=args.port)
        except RuntimeError as exc:
            parser.exit(1, f"{exc}\n")
        return

    orchestrator = Orchestrator(config=config)

    try:
        if args.command == "app":
            result = orchestrator.peek_app(args.url, args.output_dir)
        elif args.command == "quarto":
            result = orchestrator.peek_quarto(
                args.url,
                output_format=args.output_format,
                output_path=args.output_path,
            )
        elif args.command == "standalone":
            result = orchestrator.peek_standalone(args.url, args.output_dir)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except PeekyError as exc:
        parser.exit(1, f"peeky {args.command} failed: {exc}\nRun with --verbose for more details.\n")
    except binascii.Error as exc:
        parser.exit(1, f"peeky {args.command} failed: invalid base64 content ({exc})\n")
    except OSError as exc:
        parser.exit(1, f"peeky {args.command} failed: {exc}\n")

    print(render_result(result))


if __name__ == "__main__":
    main(sys.argv[1:])
