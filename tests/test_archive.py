# File: tests/test_archive.py
import re
import shutil
import subprocess

import pytest

import site_spider.archive as archive_module
from site_spider.archive import Archive, GitArchive
from site_spider.exceptions import ArchiveError, GitError, GitNotInstalled


class GitRecorder(list):
    returncode = 0

    def __call__(self, command, **kwargs):
        self.append(command)
        return subprocess.CompletedProcess(command, self.returncode, stdout="", stderr="fatal: boom")


@pytest.fixture()
def git_calls(monkeypatch):
    """Record git invocations instead of running them; returncode is configurable."""
    recorder = GitRecorder()
    monkeypatch.setattr(archive_module.subprocess, "run", recorder)
    return recorder


def test_open_creates_root(tmp_path):
    root = tmp_path / "does-not-exist-yet"
    archive = Archive.open(root)
    assert isinstance(archive, Archive)
    assert root.is_dir()
    assert str(archive) == str(root)
    # opening again is fine
    Archive.open(root)


def test_write_creates_parents_and_file(tmp_path):
    archive = Archive.open(tmp_path)
    path = archive.write("https://example.com/foo/bar.html", "test file")
    assert path == tmp_path / "foo" / "bar.html"
    assert (tmp_path / "foo").is_dir()
    assert path.read_text(encoding="utf-8") == "test file"


def test_write_bytes(tmp_path):
    archive = Archive.open(tmp_path)
    path = archive.write("https://example.com/favicon.ico", b"\x00\x01")
    assert path.read_bytes() == b"\x00\x01"


def test_query_string_is_part_of_file_name(tmp_path):
    archive = Archive.open(tmp_path)
    archive.write("https://example.com/foo/bar.php?q=1", "test file")
    assert (tmp_path / "foo" / "bar.php?q=1").read_text(encoding="utf-8") == "test file"


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://example.com/foo/bar/", ("foo", "bar", "index.html")),
        ("https://example.com/", ("index.html",)),
        ("https://example.com", ("index.html",)),
    ],
)
def test_trailing_slash_maps_to_index_html(tmp_path, url, expected):
    archive = Archive.open(tmp_path)
    path = archive.write(url, "body")
    assert path == tmp_path.joinpath(*expected)
    assert path.read_text(encoding="utf-8") == "body"


def test_paths_outside_root_are_rejected(tmp_path):
    archive = Archive.open(tmp_path / "root")
    with pytest.raises(ArchiveError):
        archive.write("https://example.com/../../escape.txt", "x")
    assert not (tmp_path / "escape.txt").exists()


def test_io_failure_is_archive_error(tmp_path):
    archive = Archive.open(tmp_path)
    (tmp_path / "foo").write_text("a file, not a directory", encoding="utf-8")
    with pytest.raises(ArchiveError):
        archive.write("https://example.com/foo/bar.html", "x")


def test_git_open_runs_init(tmp_path, git_calls):
    root = tmp_path / "repo"
    archive = GitArchive.open(root)
    assert isinstance(archive, GitArchive)
    assert git_calls == [["git", "-C", str(root), "init"]]


def test_git_open_skips_init_when_repository_exists(tmp_path, git_calls):
    (tmp_path / ".git").mkdir()
    archive = GitArchive.open(tmp_path)
    assert archive.is_git()
    assert git_calls == []


def test_is_git(tmp_path):
    archive = GitArchive(tmp_path)
    assert archive.is_git() is False
    (tmp_path / ".git").mkdir()
    assert archive.is_git() is True


def test_git_write_adds_file(tmp_path, git_calls):
    (tmp_path / ".git").mkdir()
    archive = GitArchive.open(tmp_path)
    path = archive.write("https://example.com/foo/bar.html", "test file")
    assert path.read_text(encoding="utf-8") == "test file"
    assert git_calls == [["git", "-C", str(tmp_path), "add", str(tmp_path / "foo" / "bar.html")]]


def test_git_commit(tmp_path, git_calls):
    (tmp_path / ".git").mkdir()
    archive = GitArchive.open(tmp_path)
    assert archive.commit("commit message") is True
    assert git_calls == [["git", "-C", str(tmp_path), "commit", "-m", "commit message"]]


def test_git_committing_commits_after_block(tmp_path, git_calls):
    (tmp_path / ".git").mkdir()
    archive = GitArchive.open(tmp_path)
    with archive.committing("snapshot") as same:
        assert same is archive
        assert git_calls == []
        archive.write("https://example.com/a.html", "a")
    assert git_calls[-1] == ["git", "-C", str(tmp_path), "commit", "-m", "snapshot"]


def test_git_failure_raises_git_error(tmp_path, git_calls):
    git_calls.returncode = 1
    archive = GitArchive(tmp_path)
    with pytest.raises(GitError, match=re.escape(f"git command failed: git -C {tmp_path} init")):
        archive.init()


def test_missing_git_raises_git_not_installed(tmp_path, monkeypatch):
    def no_git(command, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "git")

    monkeypatch.setattr(archive_module.subprocess, "run", no_git)
    archive = GitArchive(tmp_path)
    with pytest.raises(GitNotInstalled, match="the git command was not found"):
        archive.init()
    assert issubclass(GitNotInstalled, GitError)


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_real_git_init(tmp_path):
    root = tmp_path / "real"
    GitArchive.open(root)
    assert (root / ".git").is_dir()
