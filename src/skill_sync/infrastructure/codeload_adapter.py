"""Codeload adapter — implements the ArchiveFetcher port."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from skill_sync.domain.exceptions import DownloadFailedError

logger = logging.getLogger(__name__)

_CODELOAD = "https://codeload.github.com"


class CodeloadArchiveAdapter:
    """Downloads whole-repository zips from codeload.github.com.

    Single shot and fully buffered: repositories served here are source
    trees, small enough to hold in memory.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        base_url: str = _CODELOAD,
        user_agent: str = "skill-sync/1.0",
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers: dict[str, str] = {"User-Agent": user_agent}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    async def fetch_archive(self, owner: str, repo: str, branch: str) -> bytes:
        """GET /{owner}/{repo}/zip/{branch} → archive bytes."""
        url = f"{self._base_url}/{owner}/{repo}/zip/{quote(branch, safe='')}"
        try:
            resp = await self._client.get(
                url, headers=self._headers, follow_redirects=True
            )
        except httpx.HTTPError as exc:
            raise DownloadFailedError(status=None, body=str(exc)) from exc

        if not resp.is_success:
            raise DownloadFailedError(status=resp.status_code, body=resp.text)

        logger.info("Downloaded %s/%s@%s (%d bytes)", owner, repo, branch, len(resp.content))
        return resp.content
