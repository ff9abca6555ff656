"""Skill synchronisation — bounded-latency refresh of cached skill rows.

The cached row is always the safe answer.  A resync races the GitHub reads
against a time budget; if the budget runs out, or any read fails, the caller
gets the cached row back unchanged.  Only a malformed ``source_url`` is a hard
failure, because retrying cannot fix it.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from skill_sync.domain.entities import (
    Provenance,
    RenderMode,
    SkillPatch,
    SkillRecord,
    SyncResult,
)
from skill_sync.domain.exceptions import (
    InvalidSourceUrlError,
    SkillNotFoundError,
    SyncTimeoutError,
)
from skill_sync.domain.ports.skill_store import SkillStore
from skill_sync.domain.ports.source_client import SourceClient
from skill_sync.domain.value_objects import SourceReference
from skill_sync.services.ranking import heat_score, sanitize_count
from skill_sync.services.render_mode import classify

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 5000


class SkillSyncService:
    """Resyncs a single skill record against its source repository.

    Parameters
    ----------
    source_client:
        Adapter reading repository data from GitHub.
    timeout_ms:
        Default time budget for one resync.
    cancel_on_timeout:
        When ``False`` (the default) a resync that loses the race keeps
        running in the background and its result is discarded.  When ``True``
        it is cancelled, which stops further API calls.
    """

    def __init__(
        self,
        source_client: SourceClient,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        cancel_on_timeout: bool = False,
    ) -> None:
        self._source = source_client
        self._timeout_ms = timeout_ms
        self._cancel_on_timeout = cancel_on_timeout
        self._background: set[asyncio.Task[SkillPatch]] = set()

    # ── Public entry points ─────────────────────────────────────────────

    def read_cached(self, record: SkillRecord) -> SyncResult:
        """Return *record* as-is, tagged as cached."""
        return SyncResult(record=record, provenance=Provenance.CACHE)

    async def resync(
        self,
        record: SkillRecord,
        practice_count: int,
        timeout_ms: int | None = None,
    ) -> SyncResult:
        """Fetch fresh data for *record* within the time budget.

        Raises :class:`InvalidSourceUrlError` for a malformed ``source_url``,
        :class:`SyncTimeoutError` when the budget runs out, and whatever the
        source client raised otherwise.
        """
        reference = SourceReference.parse(record.source_url)
        budget_ms = self._timeout_ms if timeout_ms is None else timeout_ms

        task = asyncio.ensure_future(self._fetch_patch(record, reference, practice_count))
        try:
            done, _ = await asyncio.wait({task}, timeout=budget_ms / 1000)
        except asyncio.CancelledError:
            self._abandon(task)
            raise

        if task not in done:
            self._abandon(task)
            raise SyncTimeoutError(
                f"Resync of {reference.full_name} exceeded {budget_ms} ms"
            )

        patch = task.result()
        return SyncResult(
            record=record.apply(patch),
            provenance=Provenance.SOURCE,
            patch=patch,
        )

    async def resync_or_cached(
        self,
        record: SkillRecord,
        practice_count: int,
        timeout_ms: int | None = None,
    ) -> SyncResult:
        """Best-effort resync: any failure except a bad URL yields the cache."""
        try:
            return await self.resync(record, practice_count, timeout_ms)
        except InvalidSourceUrlError:
            raise
        except Exception as exc:
            logger.warning(
                "Resync of skill %d failed (%s: %s); serving cached record",
                record.id,
                type(exc).__name__,
                exc,
            )
            return self.read_cached(record)

    # ── Internals ───────────────────────────────────────────────────────

    async def _fetch_patch(
        self,
        record: SkillRecord,
        reference: SourceReference,
        practice_count: int,
    ) -> SkillPatch:
        owner, repo = reference.owner, reference.repo
        logger.info("Resyncing skill %d from %s", record.id, reference.full_name)

        # 1. Repo info first (need default_branch), then the rest in parallel
        repo_info = await self._source.get_repo_info(owner, repo)
        branch = repo_info.default_branch

        # Packages track the whole repository and show its README
        if record.is_package:
            commit_path = None
            document_call = self._source.get_readme(owner, repo, branch)
        else:
            commit_path = reference.path
            document_call = self._source.get_file_content(
                owner, repo, branch, reference.path
            )

        owner_info, latest_commit, document = await asyncio.gather(
            self._source.get_owner_info(repo_info.owner_login),
            self._source.get_latest_commit(owner, repo, branch, commit_path),
            document_call,
        )

        # 2. Derived fields
        render_mode = classify(document) if document is not None else RenderMode.PLAIN
        stars = sanitize_count(repo_info.star_count)

        return SkillPatch(
            repo_stars=stars,
            repo_owner_name=owner_info.display_name or repo_info.owner_login,
            repo_owner_avatar_url=repo_info.owner_avatar_url,
            updated_at=latest_commit.date or record.updated_at,
            markdown=document,
            markdown_render_mode=render_mode,
            heat_score=heat_score(sanitize_count(practice_count), stars),
        )

    def _abandon(self, task: asyncio.Task[SkillPatch]) -> None:
        if self._cancel_on_timeout:
            task.cancel()
            return
        # Keep a reference so the task is not garbage-collected mid-flight
        self._background.add(task)
        task.add_done_callback(self._discard)

    def _discard(self, task: asyncio.Task[SkillPatch]) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.debug("Abandoned resync finished with %s: %s", type(exc).__name__, exc)


class RefreshSkillUseCase:
    """Loads a skill, optionally resyncs it, and persists fresh data."""

    def __init__(self, store: SkillStore, sync_service: SkillSyncService) -> None:
        self._store = store
        self._sync = sync_service

    async def execute(self, skill_id: int, refresh: bool = False) -> SyncResult:
        record = await self._store.get(skill_id)
        if record is None:
            raise SkillNotFoundError(f"Skill {skill_id} not found")

        # The listed-practice count is authoritative in the store, not the row
        practice_count = sanitize_count(await self._store.count_listed_practices(skill_id))
        record = replace(record, practice_count=practice_count)

        if not refresh:
            return self._sync.read_cached(record)

        result = await self._sync.resync_or_cached(record, practice_count)
        if result.patch is None:
            return result

        try:
            stored = await self._store.patch(skill_id, result.patch)
        except Exception as exc:
            logger.warning(
                "Could not persist resync of skill %d (%s: %s); returning unsaved data",
                skill_id,
                type(exc).__name__,
                exc,
            )
            return result

        return SyncResult(
            record=replace(stored, practice_count=practice_count),
            provenance=Provenance.SOURCE,
            patch=result.patch,
        )
