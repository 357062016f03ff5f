"""Exception hierarchy for SiteSpider.

Extraction itself never raises on bad input; only the archive sinks and the
configuration loader report errors to the caller.
"""
from __future__ import annotations

__all__ = ["SiteSpiderError", "ArchiveError", "GitError", "GitNotInstalled"]


class SiteSpiderError(Exception):
    """Base class for all SiteSpider errors."""


class ArchiveError(SiteSpiderError):
    """An archive write could not be completed (I/O failure, unsafe path)."""


class GitError(ArchiveError):
    """A ``git`` command exited with a non-zero status."""


class GitNotInstalled(GitError):
    """The ``git`` executable could not be found."""
