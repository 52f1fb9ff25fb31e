"""Tests for giadd.git -- porcelain status parsing and staging."""

from __future__ import annotations

import shutil
import subprocess

import pytest

from giadd import git
from giadd.git import FileStatus, GitError, StatusParseError, git_add, git_status, parse_status


class TestParseStatus:
    def test_basic(self):
        files = parse_status(" M src/main.rs\0?? wow\0")
        assert files == [
            FileStatus(status=" M", path="src/main.rs"),
            FileStatus(status="??", path="wow"),
        ]

    def test_status_kept_verbatim(self):
        (entry,) = parse_status("MM both.txt\0")
        assert entry.status == "MM"
        assert entry.display() == "MM both.txt"

    def test_path_with_space_is_unquoted(self):
        (entry,) = parse_status("?? a b.txt\0")
        assert entry.path == "a b.txt"

    def test_non_ascii_path(self):
        (entry,) = parse_status("?? caf\u00e9.txt\0")
        assert entry.path == "caf\u00e9.txt"

    def test_rename_keeps_destination(self):
        files = parse_status("R  new name.txt\0old name.txt\0?? x\0")
        assert files == [FileStatus("R ", "new name.txt"), FileStatus("??", "x")]

    def test_copy_keeps_destination(self):
        (entry,) = parse_status("C  copy.txt\0orig.txt\0")
        assert entry.path == "copy.txt"

    def test_arrow_in_name_is_not_a_rename(self):
        (entry,) = parse_status("?? a -> b\0")
        assert entry.path == "a -> b"

    def test_rename_without_source(self):
        with pytest.raises(StatusParseError):
            parse_status("R  new.txt\0")

    def test_short_record(self):
        with pytest.raises(StatusParseError):
            parse_status("M\0")

    def test_missing_separator(self):
        with pytest.raises(StatusParseError):
            parse_status("??xfile\0")

    def test_empty(self):
        assert parse_status("") == []

    def test_missing_trailing_nul(self):
        assert parse_status("?? a") == [FileStatus("??", "a")]


class _Completed:
    def __init__(self, returncode=0, stdout="", stderr=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class TestGitCommands:
    def test_status_runs_porcelain(self, monkeypatch):
        calls = []

        def fake_run(args, **kwargs):
            calls.append(args)
            return _Completed(stdout="?? a.txt\0")

        monkeypatch.setattr(git.subprocess, "run", fake_run)
        assert git_status() == [FileStatus("??", "a.txt")]
        assert calls == [["git", "status", "--porcelain=v1", "-z"]]

    def test_status_failure(self, monkeypatch):
        monkeypatch.setattr(
            git.subprocess,
            "run",
            lambda args, **kw: _Completed(128, stderr="fatal: not a git repository\n"),
        )
        with pytest.raises(GitError) as exc_info:
            git_status()
        assert exc_info.value.returncode == 128
        assert str(exc_info.value) == "fatal: not a git repository"

    def test_error_without_stderr(self):
        assert str(GitError(2, "")) == "git exited with status 2"

    def test_add_prefixes_root(self, monkeypatch):
        calls = []

        def fake_run(args, **kwargs):
            calls.append(args)
            return _Completed()

        monkeypatch.setattr(git.subprocess, "run", fake_run)
        git_add(["a.txt", "dir/b.txt"])
        assert calls == [["git", "add", ":/a.txt", ":/dir/b.txt"]]


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestRealRepository:
    def test_status_and_add(self, tmp_path):
        subprocess.run(["git", "init", "-q", str(tmp_path)], check=True)
        (tmp_path / "a.txt").write_text("a\n")
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / "b.txt").write_text("b\n")

        files = git_status(cwd=str(tmp_path))
        assert FileStatus("??", "a.txt") in files

        result = git_add(["a.txt"], cwd=str(sub))
        assert result.returncode == 0
        assert FileStatus("A ", "a.txt") in git_status(cwd=str(tmp_path))

    def test_path_with_space_can_be_staged(self, tmp_path):
        subprocess.run(["git", "init", "-q", str(tmp_path)], check=True)
        (tmp_path / "a b.txt").write_text("a\n")

        assert git_status(cwd=str(tmp_path)) == [FileStatus("??", "a b.txt")]

        result = git_add(["a b.txt"], cwd=str(tmp_path))
        assert result.returncode == 0
        assert git_status(cwd=str(tmp_path)) == [FileStatus("A ", "a b.txt")]
