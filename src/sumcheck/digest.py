"""Digest providers: one per algorithm, selected by name at runtime.

Every provider has a fixed ``digest_size`` and hashes files by streaming
them in 64 KB chunks. Binary mode hashes the bytes as stored. Text mode
translates CRLF to LF first, but only on platforms whose native line
separator is CRLF, so on POSIX both modes give the same digest.
"""

from __future__ import annotations

import hashlib
import logging
import os
import zlib
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from sumcheck.errors import FileIoError, UnknownAlgorithm

logger = logging.getLogger("sumcheck")

CHUNK_SIZE = 65536  # 64 KB read chunks

# Whether text-mode reads translate line endings on this platform.
TEXT_MODE_TRANSLATES = os.linesep == "\r\n"


class Hasher(Protocol):
    def update(self, data: bytes) -> None: ...

    def digest(self) -> bytes: ...


class _Crc32:
    """zlib CRC-32 behind the hashlib update/digest interface."""

    def __init__(self) -> None:
        self._value = 0

    def update(self, data: bytes) -> None:
        self._value = zlib.crc32(data, self._value)

    def digest(self) -> bytes:
        return self._value.to_bytes(4, "big")


def _translate_crlf(chunks: Iterator[bytes]) -> Iterator[bytes]:
    """Replace CRLF with LF across chunk boundaries."""
    pending_cr = False
    for chunk in chunks:
        if pending_cr:
            chunk = b"\r" + chunk
            pending_cr = False
        if chunk.endswith(b"\r"):
            chunk = chunk[:-1]
            pending_cr = True
        yield chunk.replace(b"\r\n", b"\n")
    if pending_cr:
        yield b"\r"


def _read_chunks(f) -> Iterator[bytes]:
    while True:
        chunk = f.read(CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


@dataclass(frozen=True)
class DigestProvider:
    """A named algorithm with a fixed digest size."""

    name: str
    digest_size: int
    factory: Callable[[], Hasher] = field(repr=False, compare=False)

    def hash_bytes(self, data: bytes) -> bytes:
        """Digest of an in-memory byte string."""
        h = self.factory()
        h.update(data)
        return h.digest()

    def hash(self, path: str | Path, binary_mode: bool = False) -> bytes:
        """Compute the digest of a file.

        Args:
            path: File to hash.
            binary_mode: Read the file as-is. When False, line endings are
                translated on platforms that distinguish text and binary reads.

        Returns:
            The raw digest, ``digest_size`` bytes long.

        Raises:
            FileIoError: If the file is missing, a directory, or unreadable.
        """
        translate = not binary_mode and TEXT_MODE_TRANSLATES
        h = self.factory()
        try:
            with open(path, "rb") as f:
                chunks = _read_chunks(f)
                if translate:
                    chunks = _translate_crlf(chunks)
                for chunk in chunks:
                    h.update(chunk)
        except (OSError, ValueError) as e:
            # ValueError: path with an embedded NUL byte
            raise FileIoError(str(path), getattr(e, "strerror", None) or str(e)) from e
        logger.debug("%s %s (%s mode)", self.name, path, "binary" if binary_mode else "text")
        return h.digest()


def _hashlib_provider(name: str, hashlib_name: str) -> DigestProvider:
    def factory() -> Hasher:
        return hashlib.new(hashlib_name)

    return DigestProvider(name=name, digest_size=factory().digest_size, factory=factory)


_HASHLIB_ALGORITHMS: dict[str, str] = {
    "md5": "md5",
    "sha1": "sha1",
    "sha224": "sha224",
    "sha256": "sha256",
    "sha384": "sha384",
    "sha512": "sha512",
    "sha3-224": "sha3_224",
    "sha3-256": "sha3_256",
    "sha3-384": "sha3_384",
    "sha3-512": "sha3_512",
    "blake2b": "blake2b",
    "blake2s": "blake2s",
}

DEFAULT_ALGORITHM = "sha256"


def _build_registry() -> dict[str, DigestProvider]:
    registry: dict[str, DigestProvider] = {}
    for name, hashlib_name in _HASHLIB_ALGORITHMS.items():
        try:
            registry[name] = _hashlib_provider(name, hashlib_name)
        except ValueError:
            # e.g. md5 on a FIPS-restricted OpenSSL build
            logger.debug("Algorithm %s unavailable in this hashlib build", name)
    registry["crc32"] = DigestProvider(name="crc32", digest_size=4, factory=_Crc32)
    return registry


_REGISTRY = _build_registry()


def available_algorithms() -> list[str]:
    """Registered algorithm names, sorted."""
    return sorted(_REGISTRY)


def normalize_name(name: str) -> str:
    """Canonical registry spelling: lowercase, '_' accepted for '-'."""
    return name.strip().lower().replace("_", "-")


def get_provider(name: str) -> DigestProvider:
    """Look up a provider by algorithm name.

    Raises:
        UnknownAlgorithm: If *name* is not registered.
    """
    provider = _REGISTRY.get(normalize_name(name))
    if provider is None:
        raise UnknownAlgorithm(name, available_algorithms())
    return provider
