# === FILE: site_spider/archive.py ===
"""Archive sinks for raw page bodies.

:class:`Archive` writes every body to a file under a root directory, the file
path mirroring the URL path (plus query string).  A URL path ending in ``/``
is stored as ``index.html`` inside that directory.

:class:`GitArchive` additionally keeps the root under ``git``: every write is
staged with ``git add`` and :meth:`GitArchive.commit` records a snapshot.

Example::

    with GitArchive.open("archive/example.com") as archive:
        with archive.committing("Updated 2024-05-01"):
            pipeline.every_page(lambda page: archive.write(page.url, page.body))
            pipeline.run()
"""
from __future__ import annotations

import os
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from site_spider.exceptions import ArchiveError, GitError, GitNotInstalled
from site_spider.logger import get_logger
from site_spider.utils import request_uri

__all__ = ["Archive", "GitArchive"]

logger = get_logger(__name__)

_Body = Union[str, bytes]


class Archive:
    """A web archive directory."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(os.path.abspath(os.path.expanduser(str(root))))

    @classmethod
    def open(cls, root: Union[str, Path]) -> Archive:
        """Create the archive, making its root directory if needed."""
        archive = cls(root)
        try:
            archive.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ArchiveError(f"cannot create archive root {archive.root}: {exc}") from exc
        return archive

    def __enter__(self) -> Archive:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None

    def path_for(self, url: str) -> Path:
        """Absolute file path a body fetched from *url* is stored under."""
        relative = request_uri(url)[1:]
        target = Path(os.path.normpath(self.root / relative))
        if relative == "" or relative.endswith("/"):
            target = target / "index.html"
        if target != self.root and self.root not in target.parents:
            raise ArchiveError(f"URL {url} maps outside of the archive root")
        return target

    def write(self, url: str, body: _Body) -> Path:
        """Archive a page body; returns the full path of the written file."""
        target = self.path_for(url)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(body, bytes):
                target.write_bytes(body)
            else:
                target.write_text(body, encoding="utf-8")
        except OSError as exc:
            raise ArchiveError(f"cannot write {target}: {exc}") from exc
        logger.debug("Archived %s -> %s", url, target)
        return target

    def __str__(self) -> str:
        return str(self.root)


class GitArchive(Archive):
    """A web archive directory backed by a ``git`` repository."""

    @classmethod
    def open(cls, root: Union[str, Path]) -> GitArchive:
        """Create the archive and run ``git init`` unless it already is a repository."""
        archive = super().open(root)
        if not archive.is_git():
            archive.init()
        return archive

    def is_git(self) -> bool:
        return (self.root / ".git").is_dir()

    def init(self) -> bool:
        return self._git("init")

    def write(self, url: str, body: _Body) -> Path:
        """Archive a page body and stage it with ``git add``."""
        target = super().write(url, body)
        self._git("add", str(target))
        return target

    def commit(self, message: str) -> bool:
        return self._git("commit", "-m", str(message))

    @contextmanager
    def committing(self, message: str) -> Iterator[GitArchive]:
        """Yield the archive, then commit everything written inside the block."""
        yield self
        self.commit(message)

    def _git(self, *args: str) -> bool:
        command = ["git", "-C", str(self.root), *args]
        try:
            result = subprocess.run(command, capture_output=True, text=True, check=False)
        except FileNotFoundError as exc:
            raise GitNotInstalled("the git command was not found") from exc
        if result.returncode != 0:
            logger.error("git exited with %d: %s", result.returncode, (result.stderr or "").strip())
            raise GitError(f"git command failed: {' '.join(command)}")
        return True
