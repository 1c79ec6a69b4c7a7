"""Command line entry point for the sundrop sprite bundler.

Parses command line arguments, merges them over an optional configuration
file, and runs a single build. Flags always take precedence over values from
the configuration file.
"""

import argparse
import asyncio
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

from sundrop.builder import bundle_sprites
from sundrop.constants import DEFAULT_CONFIG_FILENAMES, DEFAULT_SEARCH_PATTERN
from sundrop.exceptions import ConfigurationError, SundropError
from sundrop.models.config import BuildConfig
from sundrop.models.results import NoMatchesFound
from sundrop.utils.early_error_handler import (
    handle_build_error,
    handle_keyboard_interrupt,
    handle_startup_error,
    handle_unexpected_error,
)
from sundrop.utils.logging import setup_logging
from sundrop.utils.path_utils import PathResolver

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def parse_alias(value: str) -> tuple[str, str]:
    """Parse an ``alias_name:real_icon_name`` argument.

    Only the first colon separates the two names, so icon names may
    themselves contain colons (``back:mdi:arrow-left``).

    Raises:
        argparse.ArgumentTypeError: If either side is empty.
    """
    alias, _, icon = value.partition(":")
    if not alias or not icon:
        raise argparse.ArgumentTypeError(
            f"Invalid alias {value!r}, expected alias_name:real_icon_name"
        )
    return alias, icon


def _package_version() -> str:
    try:
        return version("sundrop")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sundrop",
        description="Bundle the SVG icons a project references into one sprite sheet",
    )
    parser.add_argument(
        "-p",
        "--path",
        action="append",
        dest="paths",
        default=None,
        help="Relative path or package to search for icons (repeatable)",
    )
    parser.add_argument("-o", "--out", default=None, help="Output file")
    parser.add_argument(
        "-f",
        "--files",
        dest="search_pattern",
        default=None,
        help=f"Glob of files to search for icon names (default: {DEFAULT_SEARCH_PATTERN})",
    )
    parser.add_argument(
        "-a",
        "--alias",
        action="append",
        dest="aliases",
        type=parse_alias,
        default=None,
        help="Alias for icon name, alias_name:real_icon_name (repeatable)",
    )
    parser.add_argument(
        "-i",
        "--id-prefix",
        action="append",
        dest="id_prefix",
        default=None,
        help='Prefix for icon symbol ids (repeatable, default: "icon-")',
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help=f"Path to YAML/JSON config file (default: {', '.join(DEFAULT_CONFIG_FILENAMES)})",
    )
    parser.add_argument("--cwd", default=None, help="Project directory (default: current directory)")
    parser.add_argument(
        "--strict-aliases",
        action="store_true",
        default=None,
        help="Fail when an alias points at an unknown icon",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: INFO)")
    parser.add_argument(
        "--log-format", choices=["console", "json"], default=None, help="Log output format"
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {_package_version()}")
    return parser


def load_config(args: argparse.Namespace) -> BuildConfig:
    """Build the configuration from an optional config file and the parsed flags.

    Raises:
        ConfigurationError: If the config file is missing or the result is invalid.
    """
    overrides: dict[str, Any] = {
        "cwd": args.cwd,
        "paths": args.paths,
        "out": args.out,
        "search_pattern": args.search_pattern,
        "aliases": dict(args.aliases) if args.aliases else None,
        "id_prefix": args.id_prefix,
        "strict_aliases": args.strict_aliases,
    }

    config_path: Path | None = Path(args.config) if args.config else None
    if config_path is None:
        config_path = PathResolver(args.cwd).get_config_path()

    if config_path is not None:
        config = BuildConfig.from_file(config_path, **overrides)
    else:
        config = BuildConfig.validate_data(
            {key: value for key, value in overrides.items() if value is not None}, source="cli"
        )

    logging_updates = {
        key: value
        for key, value in {"level": args.log_level, "format": args.log_format}.items()
        if value is not None
    }
    if logging_updates:
        logging_config = config.logging.model_validate(
            {**config.logging.model_dump(), **logging_updates}
        )
        config = config.model_copy(update={"logging": logging_config})

    return config


def main(argv: list[str] | None = None) -> int:
    """Run one build from command line arguments.

    Args:
        argv: Arguments without the program name; defaults to sys.argv[1:].

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        handle_startup_error("Configuration Error", e.message, e.details)
        return EXIT_FAILURE

    logger = setup_logging(config.logging, "sundrop")

    try:
        result = asyncio.run(bundle_sprites(config))
    except KeyboardInterrupt:
        handle_keyboard_interrupt()
        return EXIT_INTERRUPTED
    except SundropError as e:
        logger.error(f"Build failed: {e}")
        handle_build_error(e)
        return EXIT_FAILURE
    except Exception as e:
        handle_unexpected_error(e)
        raise

    if isinstance(result, NoMatchesFound):
        logger.info(f"Nothing to bundle after scanning {result.files_scanned} files")
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
