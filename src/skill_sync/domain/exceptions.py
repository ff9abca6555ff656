"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class SkillSyncError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidSourceUrlError(SkillSyncError):
    """A skill's ``source_url`` cannot be parsed into a repository reference."""


class InvalidHostError(InvalidSourceUrlError):
    """The URL host is not the supported code-hosting domain."""


class InvalidPathError(InvalidSourceUrlError):
    """The URL path does not contain both an owner and a repository."""


# ── Store errors ────────────────────────────────────────────────────────────


class SkillNotFoundError(SkillSyncError):
    """No skill exists with the requested id."""


class DownloadNotSupportedError(SkillSyncError):
    """The skill is flagged as not offering a zip download."""


class PersistenceError(SkillSyncError):
    """Writing a patch back to the store failed."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class SourceFetchError(SkillSyncError):
    """Network failure or unexpected status from the hosting API."""


class RepositoryNotFoundError(SourceFetchError):
    """The repository does not exist or is not accessible (404)."""


class RepositoryAccessDeniedError(SourceFetchError):
    """Access to the repository was denied (403)."""


class GitHubRateLimitError(SourceFetchError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class SyncTimeoutError(SkillSyncError):
    """A resync did not finish within its time budget."""


# ── Archive errors ──────────────────────────────────────────────────────────


class DownloadFailedError(SkillSyncError):
    """The archive endpoint answered with a non-success status."""

    def __init__(self, status: int | None, body: str = "") -> None:
        self.status = status
        self.body = body
        detail = f"Download failed: {status if status is not None else 'network error'}"
        if body:
            detail = f"{detail} {body}"
        super().__init__(detail)


class EmptyArchiveError(SkillSyncError):
    """The downloaded archive has no entries."""


class PathNotFoundError(SkillSyncError):
    """No archive entry lives under the requested sub-path."""
