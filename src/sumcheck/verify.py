"""Check mode and dump mode.

Check mode re-hashes every manifest entry and compares digests. Per-file
problems (unreadable file, digest of the wrong size) make that entry FAIL
and never stop the run, so every listed file gets a status line.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from sumcheck import hexcodec
from sumcheck.digest import DigestProvider
from sumcheck.errors import DigestSizeMismatch, FileIoError
from sumcheck.manifest import ChecksumEntry
from sumcheck.report import Reporter

logger = logging.getLogger("sumcheck")

OK = "ok"
MISMATCH = "mismatch"
IO_ERROR = "io_error"
DIGEST_SIZE = "digest_size"


@dataclass(frozen=True)
class CheckOutcome:
    """Result of verifying one entry."""

    entry: ChecksumEntry
    passed: bool
    reason: str = OK


def check_entry(entry: ChecksumEntry, provider: DigestProvider) -> CheckOutcome:
    """Verify a single entry against the file on disk."""
    if len(entry.digest) != provider.digest_size:
        logger.debug(
            "%s", DigestSizeMismatch(entry.filename, provider.digest_size, len(entry.digest))
        )
        return CheckOutcome(entry, passed=False, reason=DIGEST_SIZE)

    try:
        actual = provider.hash(entry.filename, entry.binary_mode)
    except FileIoError as e:
        logger.debug("%s", e)
        return CheckOutcome(entry, passed=False, reason=IO_ERROR)

    if actual != entry.digest:
        logger.debug(
            "%s: expected %s, computed %s",
            entry.filename,
            hexcodec.encode(entry.digest),
            hexcodec.encode(actual),
        )
        return CheckOutcome(entry, passed=False, reason=MISMATCH)
    return CheckOutcome(entry, passed=True)


def check_entries(
    entries: Iterable[ChecksumEntry], provider: DigestProvider
) -> Iterator[CheckOutcome]:
    """Yield one outcome per entry, in manifest order."""
    for entry in entries:
        yield check_entry(entry, provider)


def verify(
    entries: Iterable[ChecksumEntry],
    provider: DigestProvider,
    reporter: Reporter,
) -> bool:
    """Verify all entries, reporting each one.

    Returns:
        True only if every entry passed. All entries are processed even
        after a failure.
    """
    success = True
    counts = {MISMATCH: 0, IO_ERROR: 0, DIGEST_SIZE: 0}
    for outcome in check_entries(entries, provider):
        if outcome.passed:
            reporter.report_pass(outcome.entry.filename)
        else:
            reporter.report_fail(outcome.entry.filename)
            counts[outcome.reason] += 1
            success = False

    if counts[IO_ERROR]:
        logger.warning("%d listed file(s) could not be read", counts[IO_ERROR])
    if counts[MISMATCH]:
        logger.warning("%d computed checksum(s) did NOT match", counts[MISMATCH])
    if counts[DIGEST_SIZE]:
        logger.warning(
            "%d checksum(s) have the wrong size for %s", counts[DIGEST_SIZE], provider.name
        )
    return success


def dump(
    paths: Iterable[str | Path],
    provider: DigestProvider,
    binary_mode: bool,
    reporter: Reporter,
) -> bool:
    """Print a manifest line for each file, in input order.

    Returns:
        False if any file could not be read; the others are still printed.
    """
    success = True
    for path in paths:
        try:
            digest = provider.hash(path, binary_mode)
        except FileIoError as e:
            reporter.report_error(str(e))
            success = False
            continue
        reporter.report_digest_line(hexcodec.encode(digest), str(path), binary_mode)
    return success
