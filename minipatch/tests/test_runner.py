"""Tests for per-file orchestration."""

from pathlib import Path
from unittest.mock import patch

import pytest

from minipatch.errors import SourceFileError
from minipatch.patch.parser import parse_patch
from minipatch.patch.trace import RecordingTracer
from minipatch.report import FileStatus
from minipatch.runner import apply_file_patch, apply_patch_set, is_fully_applied

SHRINK_PATCH = """\
--- src/f.txt
+++ src/f.txt
@@ -1,2 +1,1 @@
-A
-B
+X
"""

TWO_FILE_PATCH = """\
--- a.txt
+++ a.txt
@@ -1,1 +1,1 @@
-one
+ONE
--- b.txt
+++ b.txt
@@ -2,1 +2,1 @@
-two
+TWO
"""


def _tree(tmp_path: Path, files: dict[str, str]) -> Path:
    for name, content in files.items():
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return tmp_path


class TestApplyFilePatch:
    """Tests for apply_file_patch function."""

    def test_patch_then_already_patched(self, tmp_path: Path):
        """Applying twice patches once and then reports already patched."""
        base = _tree(tmp_path, {"src/f.txt": "A\nB\nC\nD\n"})
        file_patch = parse_patch(SHRINK_PATCH)[0]

        first = apply_file_patch(file_patch, base_dir=base)
        assert first.status == FileStatus.PATCHED
        assert (base / "src/f.txt").read_text() == "X\nC\nD\n"

        with patch("minipatch.runner.write_source") as mock_write:
            second = apply_file_patch(file_patch, base_dir=base)

        assert second.status == FileStatus.ALREADY_PATCHED
        assert second.applied_hunks == 1
        mock_write.assert_not_called()
        assert (base / "src/f.txt").read_text() == "X\nC\nD\n"

    def test_already_patched_does_not_read_original(self, tmp_path: Path):
        """When the target is up to date the original path is never opened."""
        base = _tree(tmp_path, {"new.txt": "X\nC\n"})
        file_patch = parse_patch(
            "--- missing.txt\n+++ new.txt\n@@ -1,2 +1,1 @@\n-A\n-B\n+X\n"
        )[0]

        outcome = apply_file_patch(file_patch, base_dir=base)

        assert outcome.status == FileStatus.ALREADY_PATCHED

    def test_unclean_file_is_not_rewritten(self, tmp_path: Path):
        """Content matching neither side is reported and left alone."""
        base = _tree(tmp_path, {"src/f.txt": "Q\nR\n"})
        file_patch = parse_patch(SHRINK_PATCH)[0]

        with patch("minipatch.runner.rewrite") as mock_rewrite:
            outcome = apply_file_patch(file_patch, base_dir=base)

        assert outcome.status == FileStatus.UNCLEAN
        assert outcome.path == str(base / "src/f.txt")
        assert outcome.error is not None
        mock_rewrite.assert_not_called()
        assert (base / "src/f.txt").read_text() == "Q\nR\n"

    def test_dry_run_writes_nothing(self, tmp_path: Path):
        base = _tree(tmp_path, {"src/f.txt": "A\nB\nC\n"})
        file_patch = parse_patch(SHRINK_PATCH)[0]

        outcome = apply_file_patch(file_patch, base_dir=base, dry_run=True)

        assert outcome.status == FileStatus.WOULD_PATCH
        assert (base / "src/f.txt").read_text() == "A\nB\nC\n"

    def test_partial_application_completed(self, tmp_path: Path):
        """A half-applied file gets only its pending hunks."""
        base = _tree(tmp_path, {"f.txt": "Z\nB\nC\nD\nE\n"})
        file_patch = parse_patch(
            "--- f.txt\n+++ f.txt\n"
            "@@ -1,1 +1,1 @@\n-A\n+Z\n"
            "@@ -4,1 +4,1 @@\n-D\n+D2\n"
        )[0]

        outcome = apply_file_patch(file_patch, base_dir=base)

        assert outcome.status == FileStatus.PATCHED
        assert outcome.applied_hunks == 1
        assert (base / "f.txt").read_text() == "Z\nB\nC\nD2\nE\n"

    def test_original_and_new_paths_differ(self, tmp_path: Path):
        """The original is read from --- and the result written to +++."""
        base = _tree(tmp_path, {"old.txt": "A\nB\n", "new.txt": "stale\n"})
        file_patch = parse_patch(
            "--- old.txt\n+++ new.txt\n@@ -2,1 +2,1 @@\n-B\n+B2\n"
        )[0]

        outcome = apply_file_patch(file_patch, base_dir=base)

        assert outcome.status == FileStatus.PATCHED
        assert (base / "new.txt").read_text() == "A\nB2\n"
        assert (base / "old.txt").read_text() == "A\nB\n"

    def test_missing_trailing_newline_preserved(self, tmp_path: Path):
        base = _tree(tmp_path, {"src/f.txt": "A\nB\nC"})
        file_patch = parse_patch(SHRINK_PATCH)[0]

        apply_file_patch(file_patch, base_dir=base)

        assert (base / "src/f.txt").read_text() == "X\nC"

    def test_missing_target_raises(self, tmp_path: Path):
        file_patch = parse_patch(SHRINK_PATCH)[0]

        with pytest.raises(SourceFileError):
            apply_file_patch(file_patch, base_dir=tmp_path)

    def test_without_base_dir_uses_relative_paths(self, tmp_path: Path, monkeypatch):
        _tree(tmp_path, {"src/f.txt": "A\nB\n"})
        monkeypatch.chdir(tmp_path)
        file_patch = parse_patch(SHRINK_PATCH)[0]

        outcome = apply_file_patch(file_patch)

        assert outcome.path == str(Path("src/f.txt"))
        assert (tmp_path / "src/f.txt").read_text() == "X\n"


class TestIsFullyApplied:
    """Tests for the up-to-date check on the target file."""

    def test_all_hunks_present(self):
        file_patch = parse_patch(SHRINK_PATCH)[0]
        assert is_fully_applied(["X", "C"], file_patch)

    def test_checks_every_hunk(self):
        """Every hunk is probed even after one fails."""
        tracer = RecordingTracer()
        file_patch = parse_patch(
            "--- f\n+++ f\n@@ -1,1 +1,1 @@\n-a\n+A\n@@ -2,1 +2,1 @@\n-b\n+B\n"
        )[0]

        assert not is_fully_applied(["a", "B"], file_patch, tracer)
        assert "sublist_match: [2] === B" in tracer.messages


class TestApplyPatchSet:
    """Tests for apply_patch_set function."""

    def test_unclean_file_does_not_stop_others(self, tmp_path: Path):
        base = _tree(tmp_path, {"a.txt": "diverged\n", "b.txt": "x\ntwo\n"})

        report = apply_patch_set(parse_patch(TWO_FILE_PATCH), base_dir=base)

        assert [o.status for o in report.outcomes] == [
            FileStatus.UNCLEAN,
            FileStatus.PATCHED,
        ]
        assert report.unclean_count == 1
        assert report.exit_code == 1
        assert (base / "b.txt").read_text() == "x\nTWO\n"

    def test_all_patched_exit_zero(self, tmp_path: Path):
        base = _tree(tmp_path, {"a.txt": "one\n", "b.txt": "x\ntwo\n"})

        report = apply_patch_set(parse_patch(TWO_FILE_PATCH), base_dir=base)

        assert report.ok
        assert report.exit_code == 0
        assert report.count(FileStatus.PATCHED) == 2

    def test_file_patch_without_hunks_skipped(self, tmp_path: Path):
        report = apply_patch_set(parse_patch("--- nowhere\n+++ nowhere\n"), base_dir=tmp_path)

        assert report.outcomes == []
        assert report.exit_code == 0
