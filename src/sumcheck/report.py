"""Console rendering of check outcomes and digest lines.

The reporter owns its output streams; the parser and verifier only hand it
plain values.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO

from sumcheck.manifest import format_line


class Reporter(Protocol):
    def report_pass(self, filename: str) -> None: ...

    def report_fail(self, filename: str) -> None: ...

    def report_digest_line(self, hex_digest: str, filename: str, binary_mode: bool) -> None: ...

    def report_error(self, message: str) -> None: ...


class ConsoleReporter:
    """Writes ``<file>: SUCCESS`` / ``<file>: FAIL`` and manifest lines.

    Args:
        out: Stream for results (default stdout).
        err: Stream for error messages (default stderr).
        quiet: Suppress SUCCESS lines; failures are always shown.
    """

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        quiet: bool = False,
    ):
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.quiet = quiet

    def report_pass(self, filename: str) -> None:
        if not self.quiet:
            print(f"{filename}: SUCCESS", file=self.out)

    def report_fail(self, filename: str) -> None:
        print(f"{filename}: FAIL", file=self.out)

    def report_digest_line(self, hex_digest: str, filename: str, binary_mode: bool) -> None:
        print(format_line(hex_digest, filename, binary_mode), file=self.out)

    def report_error(self, message: str) -> None:
        print(f"error: {message}", file=self.err)
