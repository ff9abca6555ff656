"""FastAPI dependency injection wiring."""

from __future__ import annotations

import logging
from functools import lru_cache

import httpx

from skill_sync.infrastructure.codeload_adapter import CodeloadArchiveAdapter
from skill_sync.infrastructure.config import Settings, get_settings
from skill_sync.infrastructure.github_rest_adapter import GitHubRestAdapter
from skill_sync.infrastructure.memory_store import InMemorySkillStore
from skill_sync.services.download_skill import DownloadCounterUseCase, DownloadSkillUseCase
from skill_sync.services.sync_skill import RefreshSkillUseCase, SkillSyncService

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None
_store: InMemorySkillStore | None = None
_sync_service: SkillSyncService | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _store, _sync_service  # noqa: PLW0603

    settings = _settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_s))

    if settings.skills_seed_path:
        _store = InMemorySkillStore.from_json_file(settings.skills_seed_path)
    else:
        logger.warning("SKILLS_SEED_PATH not set; starting with an empty skill store")
        _store = InMemorySkillStore()

    # One service per process so abandoned resyncs stay referenced
    _sync_service = SkillSyncService(
        source_client=_github_adapter(settings),
        timeout_ms=settings.sync_timeout_ms,
        cancel_on_timeout=settings.sync_cancel_on_timeout,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _store, _sync_service  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _store = None
    _sync_service = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def _token(settings: Settings) -> str | None:
    return settings.github_token.get_secret_value() if settings.github_token else None


def _github_adapter(settings: Settings) -> GitHubRestAdapter:
    assert _http_client is not None, "startup() was not called"
    return GitHubRestAdapter(
        client=_http_client,
        token=_token(settings),
        api_url=settings.github_api_url,
        user_agent=settings.user_agent,
    )


def get_store() -> InMemorySkillStore:
    assert _store is not None, "startup() was not called"
    return _store


def get_refresh_use_case() -> RefreshSkillUseCase:
    """Build the refresh use case around the shared sync service."""
    assert _sync_service is not None, "startup() was not called"
    return RefreshSkillUseCase(store=get_store(), sync_service=_sync_service)


def get_download_use_case() -> DownloadSkillUseCase:
    """Build the download use case with injected adapters."""
    settings = _settings()
    assert _http_client is not None, "startup() was not called"

    return DownloadSkillUseCase(
        store=get_store(),
        source_client=_github_adapter(settings),
        archive_fetcher=CodeloadArchiveAdapter(
            client=_http_client,
            token=_token(settings),
            base_url=settings.codeload_url,
            user_agent=settings.user_agent,
        ),
    )


def get_download_counter() -> DownloadCounterUseCase:
    return DownloadCounterUseCase(store=get_store())
