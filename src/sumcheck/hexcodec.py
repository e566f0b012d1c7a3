"""Lowercase hex encoding and strict hex decoding for digests."""

from __future__ import annotations

from sumcheck.errors import FormatError

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def is_hex_digit(ch: str) -> bool:
    """True if *ch* is a single character in ``0-9a-fA-F``."""
    return ch in HEX_DIGITS


def encode(data: bytes) -> str:
    """Encode bytes as lowercase hex, two characters per byte, no separators."""
    return data.hex()


def decode(text: str) -> bytes:
    """Decode hex text into bytes.

    Unlike ``bytes.fromhex`` this accepts nothing but hex digits:
    whitespace and any other character is rejected.

    Args:
        text: Upper- or lowercase hex text of even length.

    Returns:
        The decoded bytes (``len(text) // 2`` of them).

    Raises:
        FormatError: If the length is odd or a character is not a hex digit.
    """
    if len(text) % 2:
        raise FormatError(text, f"odd length ({len(text)})")
    for pos, ch in enumerate(text):
        if ch not in HEX_DIGITS:
            raise FormatError(text, f"non-hex character {ch!r} at position {pos}")
    return bytes.fromhex(text)
