"""GitHub REST API adapter — implements the SourceClient port."""

from __future__ import annotations

import base64
import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from skill_sync.domain.entities import LatestCommit, OwnerInfo, RepoInfo
from skill_sync.domain.exceptions import (
    GitHubRateLimitError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    SkillSyncError,
    SourceFetchError,
)

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_SKILL_FILE = "SKILL.md"
# Chinese README first, then the default one
_README_CANDIDATES = ("README.zh.md", "README.md")


class GitHubRestAdapter:
    """Concrete SourceClient backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        api_url: str = _GITHUB_API,
        user_agent: str = "skill-sync/1.0",
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def get_repo_info(self, owner: str, repo: str) -> RepoInfo:
        """GET /repos/{owner}/{repo} → RepoInfo."""
        resp = await self._api_get(f"/repos/{owner}/{repo}")
        data = resp.json()
        repo_owner = data.get("owner") or {}
        return RepoInfo(
            default_branch=data.get("default_branch", "main"),
            star_count=data.get("stargazers_count") or 0,
            owner_login=repo_owner.get("login") or owner,
            owner_avatar_url=repo_owner.get("avatar_url") or None,
        )

    async def get_owner_info(self, login: str) -> OwnerInfo:
        """GET /users/{login} → OwnerInfo (display name may be unset)."""
        resp = await self._api_get(f"/users/{login}")
        data = resp.json() or {}
        return OwnerInfo(display_name=data.get("name") or None)

    async def get_latest_commit(
        self, owner: str, repo: str, branch: str, path: str | None
    ) -> LatestCommit:
        """GET /repos/{owner}/{repo}/commits?sha=…&path=…&per_page=1 → LatestCommit."""
        params = {"sha": branch, "per_page": "1"}
        if path:
            params["path"] = path
        resp = await self._api_get(f"/repos/{owner}/{repo}/commits", params=params)
        data = resp.json()

        if not isinstance(data, list) or not data:
            return LatestCommit()

        latest = data[0]
        commit = latest.get("commit") or {}
        date = (commit.get("committer") or {}).get("date") or (
            commit.get("author") or {}
        ).get("date")
        return LatestCommit(sha=latest.get("sha") or None, date=date or None)

    async def get_file_content(
        self, owner: str, repo: str, branch: str, path: str | None
    ) -> str | None:
        """Fetch ``<path>/SKILL.md`` (or root ``SKILL.md``); ``None`` on any failure."""
        file_path = f"{path}/{_SKILL_FILE}" if path else _SKILL_FILE
        return await self._optional_text(owner, repo, branch, file_path)

    async def get_readme(self, owner: str, repo: str, branch: str) -> str | None:
        """Fetch the first non-empty root README candidate."""
        for file_path in _README_CANDIDATES:
            text = await self._optional_text(owner, repo, branch, file_path)
            if text:
                return text
        return None

    async def _optional_text(
        self, owner: str, repo: str, branch: str, file_path: str
    ) -> str | None:
        try:
            resp = await self._api_get(
                f"/repos/{owner}/{repo}/contents/{quote(file_path)}",
                params={"ref": branch},
            )
            return _decode_contents(resp.json())
        except (SkillSyncError, ValueError) as exc:
            logger.debug(
                "No %s in %s/%s@%s (%s); returning None",
                file_path, owner, repo, branch, exc,
            )
            return None

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._api_url}{endpoint}"
        try:
            resp = await self._client.get(
                url, headers=self._api_headers, params=params
            )
        except httpx.HTTPError as exc:
            raise SourceFetchError(
                f"Network error fetching {url}: {exc}"
            ) from exc

        if resp.status_code == 200:
            return resp

        if resp.status_code == 404:
            raise RepositoryNotFoundError(f"GitHub resource not found: {endpoint}")

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                    "Set the GITHUB_TOKEN environment variable to increase the limit."
                )
            raise RepositoryAccessDeniedError(
                "Access denied. The repository may be private."
            )

        if resp.status_code == 429:
            raise GitHubRateLimitError("GitHub API rate limit exceeded (HTTP 429).")

        raise SourceFetchError(
            f"GitHub API returned HTTP {resp.status_code} for {url}"
        )


def _decode_contents(data: Any) -> str | None:
    """Decode a contents-API file payload; directories and empty files give ``None``."""
    if not isinstance(data, dict):
        return None
    content = data.get("content")
    if not content:
        return None
    return base64.b64decode(content).decode("utf-8")
