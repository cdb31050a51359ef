"""CLI entrypoints for pagemap commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .assembler import build_spec
from .config import PagemapConfig, load_config
from .emit import FORMATS, render_spec, write_spec
from .errors import PagemapError
from .logging import configure_logging, get_logger

logger = get_logger("cli")


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


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log records to this file.",
    )


def _add_project_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=(
            "Path to a .pagemap.yml file (defaults to <path>/.pagemap.yml). "
            "Relative paths inside it resolve against its directory."
        ),
    )
    parser.add_argument(
        "--pages-root",
        default=None,
        help="Override the pages directory, relative to the project root.",
    )


def _add_emit_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the bundler configuration to this file instead of stdout.",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default="json",
        help="Serialisation format for the bundler configuration.",
    )
    parser.add_argument(
        "--mode",
        choices=("production", "development", "none"),
        default=None,
        help="Override the bundler mode.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on duplicate page ids and on pages missing a script or template.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagemap",
        description="Derive multi-page bundler configuration from a pages directory.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Emit the bundler configuration for a production build.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_log_file_option(build_parser, suppress_default=True)
    _add_project_options(build_parser)
    _add_emit_options(build_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Emit the bundler configuration including dev server settings.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_log_file_option(serve_parser, suppress_default=True)
    _add_project_options(serve_parser)
    _add_emit_options(serve_parser)
    serve_parser.add_argument("--port", type=int, default=None, help="Dev server port.")
    serve_parser.add_argument(
        "--no-hot",
        dest="hot",
        action="store_false",
        default=None,
        help="Disable hot module reloading.",
    )
    serve_parser.add_argument(
        "--no-open",
        dest="open",
        action="store_false",
        default=None,
        help="Do not open a browser when the dev server starts.",
    )

    pages_parser = subparsers.add_parser(
        "pages",
        help="List discovered pages with their script and template.",
    )
    _add_verbose_option(pages_parser, suppress_default=True)
    _add_log_file_option(pages_parser, suppress_default=True)
    _add_project_options(pages_parser)

    return parser


def _load(args: argparse.Namespace) -> PagemapConfig:
    if args.config:
        if args.path != ".":
            logger.warning(
                "Ignoring project path %s: the directory of --config %s is the project root",
                args.path,
                args.config,
            )
        config = load_config(Path(args.config), required=True)
    else:
        config = load_config(Path(args.path))
    if args.pages_root:
        config.pages_root = (config.root / args.pages_root).resolve()

    options = config.options
    if getattr(args, "mode", None):
        options = replace(options, mode=args.mode)
    if getattr(args, "strict", False):
        options = replace(options, on_duplicate="error", on_orphan="error")
    server_overrides = {
        key: getattr(args, key)
        for key in ("port", "hot", "open")
        if getattr(args, key, None) is not None
    }
    if server_overrides:
        options = replace(options, dev_server=replace(options.dev_server, **server_overrides))
    config.options = options
    return config


def _run_emit(args: argparse.Namespace, config: PagemapConfig) -> None:
    spec = build_spec(
        config.pages_root,
        config.options,
        project_root=config.root,
        serve=args.command == "serve",
    )
    if args.output:
        destination = write_spec(spec, Path(args.output), args.format)
        logger.info("Bundler configuration written to %s", _relativize(destination))
    else:
        sys.stdout.write(render_spec(spec, args.format))


def _run_pages(config: PagemapConfig) -> None:
    # Listing shows orphans as gaps instead of reporting them.
    spec = build_spec(
        config.pages_root,
        replace(config.options, on_orphan="ignore"),
        project_root=config.root,
    )
    if not spec.page_ids:
        print(f"No pages found under {_relativize(config.pages_root)}")
        return
    templates = {binding.page_id: binding for binding in spec.templates}
    for page_id in spec.page_ids:
        script = spec.entries.get(page_id, "(no script)")
        binding = templates.get(page_id)
        shell = f"{binding.template_path} -> {binding.output_filename}" if binding else "(no template)"
        print(f"{page_id}\t{script}\t{shell}")


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for pagemap commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file).expanduser() if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    try:
        config = _load(args)
        if args.command in {"build", "serve"}:
            _run_emit(args, config)
        elif args.command == "pages":
            _run_pages(config)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except PagemapError as exc:
        parser.exit(1, f"pagemap {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
