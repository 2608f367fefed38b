"""CLI entrypoints for srcgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config import (
    DEFAULT_IGNORE_GLOBS,
    DEFAULT_INCLUDE_GLOBS,
    ConfigError,
    ExportsSettings,
    RoutesSettings,
    SrcGenConfig,
    ThemesSettings,
    build_selection_config,
    load_config,
)
from .exports import ExportsGenerator, NamingError
from .logging import configure_logging, get_logger
from .routes.generator import DEFAULT_OUT_DIR, DEFAULT_ROUTES_DIR, RouteTableGenerator
from .themes.generator import THEME_FORMATS, ThemeError, ThemeGenerator


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    def _default(value: object) -> object:
        return argparse.SUPPRESS if suppress_default else value

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=_default(False),
        help="Log debug details (selected patterns, skipped files).",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=_default(False),
        help="Only log warnings and errors.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srcgen",
        description="Generate package index, theme CSS and localised route modules.",
    )
    _add_common_options(parser)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .srcgen.yml file (defaults to ./.srcgen.yml when present).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    exports_parser = subparsers.add_parser(
        "exports",
        help="Write an index.ts re-exporting every selected module.",
    )
    _add_common_options(exports_parser, suppress_default=True)
    exports_parser.add_argument("--dir", help="Base directory to scan for exports.")
    exports_parser.add_argument("--out", help="Directory in which to write index.ts.")
    exports_parser.add_argument(
        "--include-glob",
        "--include_glob",
        dest="include_glob",
        nargs="+",
        action="extend",
        default=None,
        help=f"Glob patterns to include, relative to --dir (default: {' '.join(DEFAULT_INCLUDE_GLOBS)}).",
    )
    exports_parser.add_argument(
        "--ignore-glob",
        "--ignore_glob",
        dest="ignore_glob",
        nargs="+",
        action="extend",
        default=None,
        help=f"Glob patterns to ignore, relative to --dir (default: {' '.join(DEFAULT_IGNORE_GLOBS)}).",
    )
    exports_parser.add_argument(
        "--include-bin",
        "--include_bin",
        dest="include_bin",
        action="store_true",
        default=None,
        help="Include files under **/bin/**.",
    )
    exports_parser.add_argument(
        "--types-only",
        "--types_only",
        dest="types_only",
        action="store_true",
        default=None,
        help="Only export files named types.ts.",
    )
    exports_parser.add_argument(
        "--is-module",
        "--is_module",
        dest="is_module",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Append .js to plain module exports (ESM build output). Enabled by default.",
    )
    exports_parser.add_argument(
        "--dir-skip",
        "--dir_skip",
        dest="dir_skip",
        nargs="+",
        action="extend",
        default=None,
        help="Directories to skip (names become **/<name>/**; globs are used as given).",
    )

    themes_parser = subparsers.add_parser(
        "themes",
        help="Flatten theme layer JSON files into CSS.",
    )
    _add_common_options(themes_parser, suppress_default=True)
    themes_parser.add_argument("--dir", help="Directory containing <theme>.<format>.<mode>.json files.")
    themes_parser.add_argument("--out", help="Directory to write CSS files to.")
    themes_parser.add_argument(
        "--format",
        choices=THEME_FORMATS,
        default=None,
        help="Colour format of the theme files (default: hsl).",
    )

    routes_parser = subparsers.add_parser(
        "routes",
        help="Generate the localised route lookup module.",
    )
    _add_common_options(routes_parser, suppress_default=True)
    routes_parser.add_argument("--routes", help="Path to the route translations JSON file.")
    routes_parser.add_argument("--locales", help="Path to the locales JSON file.")
    routes_parser.add_argument(
        "--routes-dir",
        default=None,
        help=f"Routes tree to scan for pages (default: {DEFAULT_ROUTES_DIR.as_posix()}).",
    )
    routes_parser.add_argument(
        "--out",
        default=None,
        help=f"Directory to write {DEFAULT_OUT_DIR.as_posix()}/localised.gen.ts into.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for srcgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logger = get_logger("cli")

    try:
        configure_logging(
            verbose=bool(args.verbose),
            quiet=bool(args.quiet),
            log_file=Path(args.log_file) if args.log_file else None,
        )
        config = _load_config(args.config)
        if args.command == "exports":
            _run_exports(args, config)
        elif args.command == "themes":
            _run_themes(args, config)
        elif args.command == "routes":
            _run_routes(args, config)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except ConfigError as exc:
        parser.exit(1, f"srcgen {args.command}: configuration error: {exc}\n")
    except NamingError as exc:
        parser.exit(1, f"srcgen {args.command}: naming error: {exc}\n")
    except ThemeError as exc:
        parser.exit(1, f"srcgen {args.command}: {exc}\n")
    except OSError as exc:
        logger.debug("I/O failure", exc_info=True)
        parser.exit(1, f"srcgen {args.command}: I/O error: {exc}\n")


def _load_config(config_arg: Optional[str]) -> SrcGenConfig:
    if config_arg:
        return load_config(Path(config_arg), required=True)
    return load_config(Path.cwd())


def _cli_path(value: Optional[str]) -> Optional[Path]:
    return Path(value) if value else None


def _run_exports(args: argparse.Namespace, config: SrcGenConfig) -> None:
    overrides = ExportsSettings(
        dir=_cli_path(args.dir),
        out=_cli_path(args.out),
        include_glob=args.include_glob,
        ignore_glob=args.ignore_glob,
        include_bin=args.include_bin,
        types_only=args.types_only,
        is_module=args.is_module,
        dir_skip=args.dir_skip,
    )
    selection = build_selection_config(config.exports.merged(overrides))
    result = ExportsGenerator().run(selection)
    print(f"Exports written to {_relativize(result.path)} ({len(result.lines)} exports)")


def _run_themes(args: argparse.Namespace, config: SrcGenConfig) -> None:
    settings = config.themes.merged(
        ThemesSettings(dir=_cli_path(args.dir), out=_cli_path(args.out), format=args.format)
    )
    if settings.dir is None or settings.out is None:
        raise ConfigError("themes requires --dir and --out (or themes.dir / themes.out)")
    written = ThemeGenerator().run(settings.dir, settings.out, settings.format or "hsl")
    for path in written:
        print(f"Wrote {_relativize(path)}")


def _run_routes(args: argparse.Namespace, config: SrcGenConfig) -> None:
    settings = config.routes.merged(
        RoutesSettings(
            routes=_cli_path(args.routes),
            locales=_cli_path(args.locales),
            routes_dir=_cli_path(args.routes_dir),
            out=_cli_path(args.out),
        )
    )
    if settings.routes is None or settings.locales is None:
        raise ConfigError("routes requires --routes and --locales (or routes.routes / routes.locales)")
    output_path = RouteTableGenerator().run(
        settings.routes,
        settings.locales,
        settings.routes_dir or DEFAULT_ROUTES_DIR,
        settings.out or DEFAULT_OUT_DIR,
    )
    print(f"Routes written to {_relativize(output_path)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
