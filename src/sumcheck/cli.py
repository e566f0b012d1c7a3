#!/usr/bin/env python3
"""Command-line entry point for sumcheck.

Usage:
    # Print a manifest line for each file
    sumcheck report.pdf data.csv > SHA256SUMS

    # Binary mode, different algorithm
    sumcheck -b -a md5 image.iso

    # Verify files listed in a manifest
    sumcheck -c SHA256SUMS

    # Same, without running the installed script
    python -m sumcheck.cli -c SHA256SUMS

This is the only place that turns errors into exit statuses: 0 when
everything succeeded, 1 when a manifest cannot be opened or parsed, a file
fails verification, or a dump input cannot be read, 2 for usage and
configuration errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from sumcheck.config import create_default, load_config
from sumcheck.digest import available_algorithms, get_provider
from sumcheck.errors import ConfigError, ManifestOpenError, ManifestParseError
from sumcheck.manifest import read_manifest
from sumcheck.report import ConsoleReporter
from sumcheck.verify import dump, verify

logger = logging.getLogger("sumcheck")

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _version() -> str:
    try:
        return version("sumcheck")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sumcheck",
        description="Print or check file checksums.",
        epilog="With -c, read checksums from MANIFEST and verify the files it lists.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Files to hash")
    parser.add_argument(
        "-a", "--algorithm", default=None, help="Digest algorithm (default from config, else sha256)"
    )
    parser.add_argument(
        "-b", "--binary", action="store_true", default=None, help="Read input files in binary mode"
    )
    parser.add_argument("-c", "--check", metavar="MANIFEST", help="Checking mode")
    parser.add_argument(
        "-q", "--quiet", action="store_true", default=None, help="Don't print SUCCESS lines"
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument(
        "--init-config", action="store_true", help="Write a starter config.yaml (if missing) and exit"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument(
        "--list-algorithms", action="store_true", help="List available algorithms and exit"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    return parser


def _attach_stderr_handler(verbose: bool) -> tuple[logging.Handler, int]:
    """Attach a stderr handler; returns it with the level to restore afterwards."""
    previous_level = logger.level
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return handler, previous_level


def cmd_check(manifest: str, args: argparse.Namespace, reporter: ConsoleReporter) -> int:
    """Verify every entry of *manifest*."""
    provider = get_provider(args.algorithm)
    try:
        entries = read_manifest(manifest, provider.digest_size)
    except (ManifestOpenError, ManifestParseError) as e:
        reporter.report_error(str(e))
        return EXIT_FAILURE

    if not entries:
        logger.warning("%s lists no files", manifest)
    return EXIT_SUCCESS if verify(entries, provider, reporter) else EXIT_FAILURE


def cmd_dump(args: argparse.Namespace, reporter: ConsoleReporter) -> int:
    """Print a manifest line for each input file."""
    provider = get_provider(args.algorithm)
    return EXIT_SUCCESS if dump(args.files, provider, args.binary, reporter) else EXIT_FAILURE


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_algorithms:
        for name in available_algorithms():
            provider = get_provider(name)
            print(f"{name:<10} {provider.digest_size * 8} bits")
        return EXIT_SUCCESS

    if args.init_config:
        try:
            print(create_default(args.config))
        except OSError as e:
            print(f"error: cannot write config: {e}", file=sys.stderr)
            return EXIT_FAILURE
        return EXIT_SUCCESS

    if args.check and args.files:
        parser.error("no FILE arguments are allowed with --check")
    if not args.check and not args.files:
        parser.error("at least one FILE is required (or use --check MANIFEST)")

    handler, previous_level = _attach_stderr_handler(args.verbose)
    try:
        try:
            cfg = load_config(args.config)
            # Flags override config values
            if args.algorithm is None:
                args.algorithm = cfg.algorithm
            if args.binary is None:
                args.binary = cfg.binary
            if args.quiet is None:
                args.quiet = cfg.quiet
            get_provider(args.algorithm)
        except ConfigError as e:
            print(f"error: {e}", file=sys.stderr)
            return EXIT_USAGE

        reporter = ConsoleReporter(quiet=args.quiet)
        if args.check:
            return cmd_check(args.check, args, reporter)
        return cmd_dump(args, reporter)
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)


if __name__ == "__main__":
    sys.exit(main())
