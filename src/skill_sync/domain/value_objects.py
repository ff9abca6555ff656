"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from urllib.parse import urlsplit

from skill_sync.domain.exceptions import InvalidHostError, InvalidPathError

GITHUB_HOST = "github.com"

_REF_MARKERS = frozenset({"tree", "blob"})


@dataclass(frozen=True, slots=True)
class SourceReference:
    """A repository, optionally narrowed to a ref and a sub-directory.

    Parsed from URLs like ``https://github.com/acme/skills/tree/main/pdf``.
    ``ref`` and ``path`` are ``None`` when the URL names the repository only;
    callers fall back to the default branch in that case.
    """

    owner: str
    repo: str
    ref: str | None = None
    path: str | None = None

    @classmethod
    def parse(cls, raw_url: str) -> SourceReference:
        """Parse a raw URL string.

        Raises :class:`InvalidHostError` for hosts other than github.com and
        :class:`InvalidPathError` when owner or repo is missing.
        """
        try:
            parts = urlsplit(raw_url.strip())
            host = (parts.hostname or "").lower()
        except ValueError as exc:
            raise InvalidHostError(f"Malformed URL host: '{raw_url}'") from exc
        if host != GITHUB_HOST:
            raise InvalidHostError(
                f"Only {GITHUB_HOST} URLs are supported, got: '{host or raw_url}'"
            )

        segments = [s for s in parts.path.split("/") if s]
        if len(segments) < 2:
            raise InvalidPathError(f"Invalid GitHub URL path: '{parts.path}'")

        owner = segments[0]
        repo = segments[1].removesuffix(".git")

        ref: str | None = None
        path: str | None = None
        if len(segments) > 2 and segments[2] in _REF_MARKERS:
            ref = segments[3] if len(segments) > 3 else None
            path = "/".join(segments[4:]) or None

        return cls(owner=owner, repo=repo, ref=ref, path=path)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def dir_name(self) -> str:
        """Name for a downloaded copy: last path segment, or the repo name."""
        if self.path:
            return posixpath.basename(self.path.rstrip("/")) or self.repo
        return self.repo
