"""Port: source client — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from skill_sync.domain.entities import LatestCommit, OwnerInfo, RepoInfo


class SourceClient(Protocol):
    """Abstract contract for reading skill data from the hosting service."""

    async def get_repo_info(self, owner: str, repo: str) -> RepoInfo:
        """Return default branch, star count and owner of the repository."""
        ...

    async def get_owner_info(self, login: str) -> OwnerInfo:
        """Return the owner's display name, if they have set one."""
        ...

    async def get_latest_commit(
        self, owner: str, repo: str, branch: str, path: str | None
    ) -> LatestCommit:
        """Return the most recent commit touching *path* (or the whole repo)."""
        ...

    async def get_file_content(
        self, owner: str, repo: str, branch: str, path: str | None
    ) -> str | None:
        """Return the text of ``SKILL.md`` under *path*, or ``None``."""
        ...

    async def get_readme(self, owner: str, repo: str, branch: str) -> str | None:
        """Return the text of the root README, or ``None``."""
        ...
