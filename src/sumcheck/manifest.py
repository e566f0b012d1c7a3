"""Checksum manifest: the ``<hex><SP><SP-or-*><filename>`` line format.

One entry per line. The second separator character selects the read mode
used when re-hashing: ``*`` for binary, a space for text. Blank lines are
skipped; there is no comment syntax and no escaping in filenames.

Parsing is all-or-nothing: the first malformed line raises and no entries
are returned, so a damaged manifest can never verify only part of the
files it lists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sumcheck import hexcodec
from sumcheck.errors import (
    EmptyFilename,
    FormatError,
    InvalidChecksum,
    InvalidChecksumLength,
    InvalidSeparator,
    ManifestOpenError,
    MissingChecksum,
    TruncatedLine,
)

logger = logging.getLogger("sumcheck")

BINARY_MARK = "*"
TEXT_MARK = " "


@dataclass(frozen=True)
class ChecksumEntry:
    """One validated manifest line."""

    filename: str
    digest: bytes
    binary_mode: bool = False
    line_number: int = field(default=0, compare=False)


def format_line(hex_digest: str, filename: str, binary_mode: bool) -> str:
    """Render one manifest line (without the trailing newline)."""
    mark = BINARY_MARK if binary_mode else TEXT_MARK
    return f"{hex_digest} {mark}{filename}"


def _split_lines(text: str) -> list[str]:
    # Only '\n' ends a line; str.splitlines() would also split filenames on
    # form feeds and unicode separators. A CR before the LF is dropped so CRLF
    # manifests parse; a filename that itself ends in CR cannot be listed.
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_line(line: str, line_number: int, digest_size: int) -> ChecksumEntry:
    """Parse a single non-empty manifest line.

    Raises:
        ManifestParseError: One of its subclasses, carrying *line_number*.
    """
    i = 0
    while i < len(line) and hexcodec.is_hex_digit(line[i]):
        i += 1

    if i == 0:
        raise MissingChecksum(line_number)
    if i != digest_size * 2:
        raise InvalidChecksumLength(line_number, digest_size * 2, i)
    if i + 1 >= len(line):
        raise TruncatedLine(line_number)

    sep = line[i : i + 2]
    if sep[0] != " " or sep[1] not in (BINARY_MARK, TEXT_MARK):
        raise InvalidSeparator(line_number, sep)
    binary_mode = sep[1] == BINARY_MARK

    filename = line[i + 2 :]
    if not filename:
        raise EmptyFilename(line_number)

    try:
        digest = hexcodec.decode(line[:i])
    except FormatError as e:
        raise InvalidChecksum(line_number, e.reason) from e

    return ChecksumEntry(
        filename=filename,
        digest=digest,
        binary_mode=binary_mode,
        line_number=line_number,
    )


def parse_manifest(text: str, digest_size: int) -> list[ChecksumEntry]:
    """Parse manifest text into entries, in line order.

    Args:
        text: The whole manifest.
        digest_size: Expected digest size in bytes; every checksum must be
            exactly twice as many hex digits.

    Returns:
        One entry per non-blank line.

    Raises:
        ManifestParseError: At the first malformed line (1-based line number).
    """
    entries: list[ChecksumEntry] = []
    for line_number, line in enumerate(_split_lines(text), start=1):
        if not line:
            continue
        entries.append(parse_line(line, line_number, digest_size))
    return entries


def read_manifest(path: str | Path, digest_size: int) -> list[ChecksumEntry]:
    """Read and parse a manifest file.

    Undecodable bytes in filenames survive via ``surrogateescape`` and are
    passed through to ``open`` unchanged.

    Raises:
        ManifestOpenError: If the file cannot be opened or read.
        ManifestParseError: At the first malformed line.
    """
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
            text = f.read()
    except OSError as e:
        raise ManifestOpenError(str(path), e.strerror or str(e)) from e

    entries = parse_manifest(text, digest_size)
    logger.debug("Parsed %d entries from %s", len(entries), path)
    return entries
