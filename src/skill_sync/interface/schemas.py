"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from dataclasses import asdict
from typing import Literal

from pydantic import BaseModel

from skill_sync.domain.entities import SkillRecord, SyncResult


class SkillOut(BaseModel):
    """A skill row as returned to clients."""

    id: int
    name: str
    source_url: str
    is_package: bool
    supports_download_zip: bool
    repo_stars: int | None
    repo_owner_name: str | None
    repo_owner_avatar_url: str | None
    updated_at: str | None
    markdown: str | None
    markdown_render_mode: Literal["markdown", "plain"]
    heat_score: float
    practice_count: int
    download_count: int

    @classmethod
    def from_record(cls, record: SkillRecord) -> SkillOut:
        data = asdict(record)
        data["markdown_render_mode"] = record.markdown_render_mode.value
        return cls(**data)


class SkillResponse(BaseModel):
    """Response from ``GET /skills/{id}``; ``source`` tells cache from fresh data."""

    data: SkillOut
    source: Literal["source", "cache"]

    @classmethod
    def from_result(cls, result: SyncResult) -> SkillResponse:
        return cls(
            data=SkillOut.from_record(result.record),
            source=result.provenance.value,
        )


class DownloadCountResponse(BaseModel):
    download_count: int


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
