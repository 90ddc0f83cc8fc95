"""CLI for computing name keys and comparing names under a profile."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

import toml
from pydantic import ValidationError

from .config import APP_NAME, ConfigLoader, PathNormConfig
from .errors import ConfigurationError
from .logging import get_logger, setup_logging, setup_logging_from_config
from .normalizer import PathNormalizer
from .profile import Normalization, NormalizationProfile

EXIT_EQUIVALENT = 0
EXIT_DISTINCT = 1
EXIT_CONFIG_ERROR = 2

logger = get_logger(__name__)


def write_key(key: str, stream: Optional[TextIO] = None) -> None:
    """Write one key and a newline to ``stream`` (stdout by default).

    Names that came from undecodable argv bytes hold surrogate escapes; those
    are written back as the original bytes. Any other lone surrogate is
    written as a backslash escape.
    """
    stream = stream or sys.stdout
    encoding = getattr(stream, "encoding", None) or "utf-8"
    try:
        data = key.encode(encoding, "surrogateescape")
    except UnicodeEncodeError:
        data = key.encode(encoding, "backslashreplace")

    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(data.decode(encoding, "replace") + "\n")
        return
    stream.flush()
    buffer.write(data + b"\n")
    buffer.flush()


def key_command(normalizer: PathNormalizer, names: Sequence[str]) -> int:
    """Print the comparison key of each name, one per line.

    Returns:
        Exit code (0 for success)
    """
    for name in names:
        write_key(normalizer.normalize(name))
    return 0


def compare_command(normalizer: PathNormalizer, first: str, second: str) -> int:
    """Print whether two names are equivalent.

    Returns:
        0 if the names are equivalent, 1 otherwise
    """
    if normalizer.compile_pattern(first).matches(second):
        print("equivalent")
        return EXIT_EQUIVALENT
    print("distinct")
    return EXIT_DISTINCT


def resolve_profile(
    config: PathNormConfig,
    option_overrides: Optional[List[str]] = None
) -> NormalizationProfile:
    """Build the profile from command line options, falling back to config.

    Raises:
        ConfigurationError: If the overriding options are contradictory or unknown
    """
    if option_overrides:
        return NormalizationProfile.create(option_overrides)
    return config.normalization.to_profile()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Compute path-name keys and compare names under a normalization profile"
    )
    parser.add_argument(
        "-o", "--option",
        action="append",
        dest="options",
        metavar="OPTION",
        help=(
            "Normalization option, repeatable (overrides config). "
            f"One of: {', '.join(option.value for option in Normalization)}"
        )
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (defaults.toml)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    key_parser = subparsers.add_parser("key", help="Print the comparison key of each name")
    key_parser.add_argument("names", nargs="+", metavar="NAME")

    compare_parser = subparsers.add_parser("compare", help="Check whether two names are equivalent")
    compare_parser.add_argument("first", metavar="FIRST")
    compare_parser.add_argument("second", metavar="SECOND")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the memfs-pathnorm command."""
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader(app_name=APP_NAME, config_class=PathNormConfig).load(
            defaults_path=args.config
        )
    except (ValidationError, toml.TomlDecodeError) as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    setup_logging_from_config(config.logging)

    try:
        profile = resolve_profile(config, args.options)
    except ConfigurationError as e:
        logger.error(
            f"Invalid normalization options: {e.message}",
            extra={"extra_fields": e.context}
        )
        return EXIT_CONFIG_ERROR

    normalizer = PathNormalizer(profile)

    if args.command == "key":
        return key_command(normalizer, args.names)
    return compare_command(normalizer, args.first, args.second)


if __name__ == "__main__":
    sys.exit(main())
