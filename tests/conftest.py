"""Shared test fixtures for sumcheck."""

import hashlib
from pathlib import Path

import pytest


@pytest.fixture
def sample_files(tmp_path: Path) -> dict[str, Path]:
    """Three small files with known content."""
    files = {
        "empty.txt": b"",
        "hello.txt": b"hello world\n",
        "data.bin": bytes(range(256)),
    }
    paths = {}
    for name, content in files.items():
        p = tmp_path / name
        p.write_bytes(content)
        paths[name] = p
    return paths


@pytest.fixture
def md5_manifest(tmp_path: Path, sample_files: dict[str, Path]) -> Path:
    """MD5SUMS listing every sample file with absolute paths."""
    lines = []
    for name, p in sample_files.items():
        digest = hashlib.md5(p.read_bytes()).hexdigest()
        mark = "*" if name.endswith(".bin") else " "
        lines.append(f"{digest} {mark}{p}")
    manifest = tmp_path / "MD5SUMS"
    manifest.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return manifest
