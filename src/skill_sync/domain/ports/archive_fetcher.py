"""Port: archive fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class ArchiveFetcher(Protocol):
    """Abstract contract for downloading a whole-repository zip archive."""

    async def fetch_archive(self, owner: str, repo: str, branch: str) -> bytes:
        """Return the archive bytes for *branch*."""
        ...
