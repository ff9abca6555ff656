"""Shared test fixtures."""

from __future__ import annotations

import asyncio
import io
import zipfile

import pytest

from skill_sync.domain.entities import (
    LatestCommit,
    OwnerInfo,
    RenderMode,
    RepoInfo,
    SkillRecord,
)
from skill_sync.domain.exceptions import SourceFetchError


class FakeSourceClient:
    """In-process SourceClient with canned answers and optional delay / failure."""

    def __init__(
        self,
        *,
        repo_info: RepoInfo | None = None,
        display_name: str | None = "Acme Inc",
        commit: LatestCommit | None = None,
        skill_md: str | None = "# Demo\n\nSee [docs](https://example.com/docs).",
        readme: str | None = "# Readme",
        delay: float = 0.0,
        fail_with: Exception | None = None,
    ) -> None:
        self.repo_info = repo_info or RepoInfo(
            default_branch="main",
            star_count=2000,
            owner_login="acme",
            owner_avatar_url="https://avatars.example.com/acme.png",
        )
        self.display_name = display_name
        self.commit = commit or LatestCommit(sha="abc123", date="2026-01-02T03:04:05Z")
        self.skill_md = skill_md
        self.readme = readme
        self.delay = delay
        self.fail_with = fail_with
        self.calls: list[tuple] = []
        self.finished = asyncio.Event()

    async def get_repo_info(self, owner: str, repo: str) -> RepoInfo:
        self.calls.append(("repo_info", owner, repo))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        return self.repo_info

    async def get_owner_info(self, login: str) -> OwnerInfo:
        self.calls.append(("owner_info", login))
        return OwnerInfo(display_name=self.display_name)

    async def get_latest_commit(self, owner, repo, branch, path) -> LatestCommit:
        self.calls.append(("latest_commit", owner, repo, branch, path))
        return self.commit

    async def get_file_content(self, owner, repo, branch, path) -> str | None:
        self.calls.append(("file_content", owner, repo, branch, path))
        self.finished.set()
        return self.skill_md

    async def get_readme(self, owner, repo, branch) -> str | None:
        self.calls.append(("readme", owner, repo, branch))
        self.finished.set()
        return self.readme


@pytest.fixture
def source_client() -> FakeSourceClient:
    return FakeSourceClient()


@pytest.fixture
def make_source_client():
    return FakeSourceClient


@pytest.fixture
def network_error() -> Exception:
    return SourceFetchError("Network error fetching https://api.github.com/repos/acme/skills")


@pytest.fixture
def cached_record() -> SkillRecord:
    """A skill row as it sits in the store before any resync."""
    return SkillRecord(
        id=7,
        name="pdf",
        source_url="https://github.com/acme/skills/tree/main/skills/pdf",
        repo_stars=10,
        repo_owner_name="acme",
        repo_owner_avatar_url=None,
        updated_at="2025-06-01T00:00:00Z",
        markdown="old body",
        markdown_render_mode=RenderMode.MARKDOWN,
        heat_score=1.5,
        practice_count=0,
    )


def _build_zip(entries: dict[str, bytes | None]) -> bytes:
    """Build a zip; ``None`` values become directory entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in entries.items():
            if data is None:
                zf.writestr(name if name.endswith("/") else f"{name}/", b"")
            else:
                zf.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def build_zip():
    return _build_zip


@pytest.fixture
def repo_zip() -> bytes:
    """A codeload-style archive with a single ``skills-main/`` root."""
    return _build_zip(
        {
            "skills-main/": None,
            "skills-main/README.md": b"# Skills\n",
            "skills-main/skills/": None,
            "skills-main/skills/pdf/": None,
            "skills-main/skills/pdf/SKILL.md": b"---\nname: pdf\n---\n",
            "skills-main/skills/pdf/scripts/": None,
            "skills-main/skills/pdf/scripts/extract.py": b"print('hi')\n",
            "skills-main/skills/docx/": None,
            "skills-main/skills/docx/SKILL.md": b"---\nname: docx\n---\n",
        }
    )
