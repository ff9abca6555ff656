"""Skill download use cases — zip packaging and the download counter."""

from __future__ import annotations

import logging

from skill_sync.domain.entities import RepackagedArchive
from skill_sync.domain.exceptions import DownloadNotSupportedError, SkillNotFoundError
from skill_sync.domain.ports.archive_fetcher import ArchiveFetcher
from skill_sync.domain.ports.skill_store import SkillStore
from skill_sync.domain.ports.source_client import SourceClient
from skill_sync.domain.value_objects import SourceReference
from skill_sync.services.archive_repackager import repackage

logger = logging.getLogger(__name__)


class DownloadSkillUseCase:
    """Builds a zip holding just the skill's directory.

    There is nothing cached to fall back to, so every failure surfaces.
    """

    def __init__(
        self,
        store: SkillStore,
        source_client: SourceClient,
        archive_fetcher: ArchiveFetcher,
    ) -> None:
        self._store = store
        self._source = source_client
        self._archives = archive_fetcher

    async def execute(self, skill_id: int) -> RepackagedArchive:
        record = await self._store.get(skill_id)
        if record is None:
            raise SkillNotFoundError(f"Skill {skill_id} not found")
        if not record.supports_download_zip:
            raise DownloadNotSupportedError("Skill download not supported")

        reference = SourceReference.parse(record.source_url)
        repo_info = await self._source.get_repo_info(reference.owner, reference.repo)
        branch = repo_info.default_branch

        logger.info(
            "Packaging %s@%s:%s for skill %d",
            reference.full_name,
            branch,
            reference.path or "/",
            skill_id,
        )
        archive = await self._archives.fetch_archive(reference.owner, reference.repo, branch)
        return repackage(archive, reference.path, reference.dir_name)


class DownloadCounterUseCase:
    def __init__(self, store: SkillStore) -> None:
        self._store = store

    async def increment(self, skill_id: int) -> int:
        count = await self._store.increment_download(skill_id)
        if count is None:
            raise SkillNotFoundError(f"Skill {skill_id} not found")
        return count
