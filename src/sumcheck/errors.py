"""Exception hierarchy for sumcheck.

Every error message includes: what happened, why, and what to do next.
Manifest and parse errors are fatal to a check run; per-file errors are
downgraded to FAIL by the verifier and never propagate out of it.
"""


class SumcheckError(Exception):
    """Base class for all sumcheck errors."""


class FormatError(SumcheckError, ValueError):
    """Text is not a valid hex encoding."""

    def __init__(self, text: str, reason: str):
        shown = text if len(text) <= 40 else text[:37] + "..."
        super().__init__(f"Invalid hex text '{shown}': {reason}.")
        self.text = text
        self.reason = reason


# ---------------------------------------------------------------------------
# Manifest-level errors (fatal)
# ---------------------------------------------------------------------------


class ManifestOpenError(SumcheckError):
    """The checksum manifest could not be opened or read."""

    def __init__(self, path: str, detail: str):
        super().__init__(
            f"could not open `{path}`: {detail}. "
            f"Check the path, or create the manifest by running sumcheck in dump mode "
            f"and redirecting its output to a file."
        )
        self.path = path
        self.detail = detail


class ManifestParseError(SumcheckError):
    """A manifest line is malformed. The whole run is aborted."""

    reason = "malformed line"

    def __init__(self, line_number: int, detail: str = ""):
        msg = f"{self.reason} at line {line_number}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
        self.line_number = line_number
        self.detail = detail


class MissingChecksum(ManifestParseError):
    """The line does not start with a hex digest."""

    reason = "no checksum"


class InvalidChecksumLength(ManifestParseError):
    """The hex digest has the wrong length for the selected algorithm."""

    reason = "invalid checksum length"

    def __init__(self, line_number: int, expected: int, actual: int):
        super().__init__(
            line_number,
            f"expected {expected} hex digits, found {actual} "
            f"(was the manifest written with a different algorithm?)",
        )
        self.expected = expected
        self.actual = actual


class TruncatedLine(ManifestParseError):
    """The line ends before the separator and filename."""

    reason = "invalid format"

    def __init__(self, line_number: int):
        super().__init__(line_number, "line ends before the separator and filename")


class InvalidSeparator(ManifestParseError):
    """The digest is not followed by two spaces or by a space and '*'."""

    reason = "invalid format"

    def __init__(self, line_number: int, separator: str):
        super().__init__(
            line_number,
            f"expected '  ' or ' *' after the checksum, found {separator!r}",
        )
        self.separator = separator


class EmptyFilename(ManifestParseError):
    """Nothing follows the separator."""

    reason = "invalid filename"


class InvalidChecksum(ManifestParseError):
    """The checksum text could not be hex-decoded."""

    reason = "invalid checksum"


# ---------------------------------------------------------------------------
# Per-entry errors (downgraded to FAIL)
# ---------------------------------------------------------------------------


class FileIoError(SumcheckError):
    """A listed file could not be opened or read."""

    def __init__(self, path: str, detail: str):
        super().__init__(f"cannot read '{path}': {detail}")
        self.path = path
        self.detail = detail


class DigestSizeMismatch(SumcheckError):
    """A manifest digest does not match the selected algorithm's size."""

    def __init__(self, filename: str, expected: int, actual: int):
        super().__init__(
            f"checksum for '{filename}' is {actual} bytes but the algorithm produces "
            f"{expected}. Select the algorithm the manifest was written with (--algorithm)."
        )
        self.filename = filename
        self.expected = expected
        self.actual = actual


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------


class ConfigError(SumcheckError):
    """Configuration is missing or invalid."""

    def __init__(self, detail: str, hint: str = ""):
        msg = f"Configuration error: {detail}."
        if hint:
            msg += f" {hint}"
        super().__init__(msg)
        self.detail = detail
        self.hint = hint


class UnknownAlgorithm(ConfigError):
    """The requested digest algorithm is not registered."""

    def __init__(self, name: str, available: list[str]):
        avail_str = ", ".join(available) if available else "(none)"
        super().__init__(
            f"Unknown algorithm '{name}'",
            hint=f"Available algorithms: {avail_str}.",
        )
        self.name = name
        self.available = available
