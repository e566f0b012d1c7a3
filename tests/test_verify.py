"""Tests for sumcheck.verify — per-entry outcomes, aggregation, dump mode."""

import hashlib
import logging
from pathlib import Path

from sumcheck.digest import get_provider
from sumcheck.manifest import ChecksumEntry, format_line, parse_manifest, read_manifest
from sumcheck.verify import (
    DIGEST_SIZE,
    IO_ERROR,
    MISMATCH,
    OK,
    check_entries,
    check_entry,
    dump,
    verify,
)


class RecordingReporter:
    """Collects reporter calls in order."""

    def __init__(self):
        self.calls: list[tuple] = []

    def report_pass(self, filename):
        self.calls.append(("pass", filename))

    def report_fail(self, filename):
        self.calls.append(("fail", filename))

    def report_digest_line(self, hex_digest, filename, binary_mode):
        self.calls.append(("digest", hex_digest, filename, binary_mode))

    def report_error(self, message):
        self.calls.append(("error", message))


def _entry(path: Path, content_digest: bytes, binary_mode: bool = False) -> ChecksumEntry:
    return ChecksumEntry(str(path), content_digest, binary_mode)


# ---------------------------------------------------------------------------
# check_entry
# ---------------------------------------------------------------------------


class TestCheckEntry:
    def test_pass(self, tmp_path: Path):
        p = tmp_path / "a.txt"
        p.write_bytes(b"abc")
        outcome = check_entry(_entry(p, hashlib.md5(b"abc").digest()), get_provider("md5"))
        assert outcome.passed
        assert outcome.reason == OK

    def test_mismatch(self, tmp_path: Path):
        p = tmp_path / "a.txt"
        p.write_bytes(b"abc")
        outcome = check_entry(_entry(p, hashlib.md5(b"abd").digest()), get_provider("md5"))
        assert not outcome.passed
        assert outcome.reason == MISMATCH

    def test_missing_file(self, tmp_path: Path):
        entry = _entry(tmp_path / "gone.txt", b"\x00" * 16)
        outcome = check_entry(entry, get_provider("md5"))
        assert not outcome.passed
        assert outcome.reason == IO_ERROR

    def test_digest_size_mismatch_does_not_read_file(self, tmp_path: Path, monkeypatch):
        provider = get_provider("sha256")
        opened = []
        monkeypatch.setattr(
            type(provider), "hash", lambda self, path, binary_mode=False: opened.append(path)
        )
        entry = _entry(tmp_path / "whatever", b"\x00" * 16)
        outcome = check_entry(entry, provider)
        assert outcome.reason == DIGEST_SIZE
        assert not outcome.passed
        assert opened == []

    def test_check_entries_in_order(self, tmp_path: Path):
        entries = [_entry(tmp_path / f"missing{i}", b"\x00" * 16) for i in range(3)]
        outcomes = list(check_entries(entries, get_provider("md5")))
        assert [o.entry for o in outcomes] == entries


# ---------------------------------------------------------------------------
# verify
# ---------------------------------------------------------------------------


class TestVerify:
    def test_all_pass(self, md5_manifest: Path):
        reporter = RecordingReporter()
        entries = read_manifest(md5_manifest, 16)
        assert verify(entries, get_provider("md5"), reporter) is True
        assert [c[0] for c in reporter.calls] == ["pass", "pass", "pass"]

    def test_independent_failure(self, tmp_path: Path, sample_files, md5_manifest: Path):
        sample_files["hello.txt"].write_bytes(b"modified after the manifest was written\n")
        reporter = RecordingReporter()
        entries = read_manifest(md5_manifest, 16)
        assert verify(entries, get_provider("md5"), reporter) is False
        assert reporter.calls == [
            ("pass", str(sample_files["empty.txt"])),
            ("fail", str(sample_files["hello.txt"])),
            ("pass", str(sample_files["data.bin"])),
        ]

    def test_nul_in_filename_fails_entry_and_continues(self, sample_files):
        good = sample_files["empty.txt"]
        text = (
            "d41d8cd98f00b204e9800998ecf8427e  bad\x00name\n"
            f"d41d8cd98f00b204e9800998ecf8427e  {good}\n"
        )
        reporter = RecordingReporter()
        assert verify(parse_manifest(text, 16), get_provider("md5"), reporter) is False
        assert reporter.calls == [("fail", "bad\x00name"), ("pass", str(good))]

    def test_no_early_abort_after_missing_file(self, tmp_path: Path, sample_files):
        good = sample_files["empty.txt"]
        text = (
            f"d41d8cd98f00b204e9800998ecf8427e  {tmp_path / 'missing.txt'}\n"
            f"d41d8cd98f00b204e9800998ecf8427e  {good}\n"
        )
        reporter = RecordingReporter()
        assert verify(parse_manifest(text, 16), get_provider("md5"), reporter) is False
        assert reporter.calls == [("fail", str(tmp_path / "missing.txt")), ("pass", str(good))]

    def test_wrong_algorithm_entries_fail(self, sample_files):
        entries = [ChecksumEntry(str(sample_files["empty.txt"]), bytes(16))]
        reporter = RecordingReporter()
        assert verify(entries, get_provider("sha1"), reporter) is False
        assert reporter.calls == [("fail", str(sample_files["empty.txt"]))]

    def test_empty_manifest_succeeds(self):
        reporter = RecordingReporter()
        assert verify([], get_provider("md5"), reporter) is True
        assert reporter.calls == []

    def test_empty_txt_scenario(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "empty.txt").write_bytes(b"")
        entries = parse_manifest("d41d8cd98f00b204e9800998ecf8427e  empty.txt\n", 16)
        assert entries[0].binary_mode is False
        reporter = RecordingReporter()
        assert verify(entries, get_provider("md5"), reporter) is True
        assert reporter.calls == [("pass", "empty.txt")]

    def test_summary_warnings(self, tmp_path: Path, sample_files, caplog):
        text = (
            f"{'0' * 32}  {sample_files['empty.txt']}\n"
            f"{'0' * 32}  {tmp_path / 'missing'}\n"
        )
        with caplog.at_level(logging.WARNING, logger="sumcheck"):
            verify(parse_manifest(text, 16), get_provider("md5"), RecordingReporter())
        assert "1 computed checksum(s) did NOT match" in caplog.text
        assert "1 listed file(s) could not be read" in caplog.text

    def test_mismatch_detail_logged_at_debug(self, sample_files, caplog):
        entries = [ChecksumEntry(str(sample_files["empty.txt"]), bytes(16))]
        with caplog.at_level(logging.DEBUG, logger="sumcheck"):
            verify(entries, get_provider("md5"), RecordingReporter())
        assert "d41d8cd98f00b204e9800998ecf8427e" in caplog.text


# ---------------------------------------------------------------------------
# dump
# ---------------------------------------------------------------------------


class TestDump:
    def test_lines_in_input_order(self, sample_files):
        reporter = RecordingReporter()
        paths = [sample_files["hello.txt"], sample_files["empty.txt"]]
        assert dump(paths, get_provider("md5"), False, reporter) is True
        assert reporter.calls == [
            ("digest", hashlib.md5(b"hello world\n").hexdigest(), str(paths[0]), False),
            ("digest", "d41d8cd98f00b204e9800998ecf8427e", str(paths[1]), False),
        ]

    def test_binary_flag_passed_through(self, sample_files):
        reporter = RecordingReporter()
        dump([sample_files["data.bin"]], get_provider("sha256"), True, reporter)
        assert reporter.calls[0][3] is True

    def test_unreadable_file_continues(self, tmp_path: Path, sample_files):
        reporter = RecordingReporter()
        paths = [tmp_path / "missing", sample_files["empty.txt"]]
        assert dump(paths, get_provider("md5"), False, reporter) is False
        assert reporter.calls[0][0] == "error"
        assert "missing" in reporter.calls[0][1]
        assert reporter.calls[1] == (
            "digest",
            "d41d8cd98f00b204e9800998ecf8427e",
            str(sample_files["empty.txt"]),
            False,
        )

    def test_dump_output_parses_back(self, sample_files):
        reporter = RecordingReporter()
        provider = get_provider("sha1")
        dump([sample_files["data.bin"]], provider, True, reporter)
        _, hex_digest, filename, binary_mode = reporter.calls[0]
        (entry,) = parse_manifest(format_line(hex_digest, filename, binary_mode), 20)
        assert entry == ChecksumEntry(filename, bytes.fromhex(hex_digest), True)
        assert verify([entry], provider, RecordingReporter()) is True
