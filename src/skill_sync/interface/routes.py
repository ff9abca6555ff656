"""API routes — thin controllers that delegate to the use cases."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from skill_sync.interface.dependencies import (
    get_download_counter,
    get_download_use_case,
    get_refresh_use_case,
)
from skill_sync.interface.schemas import (
    DownloadCountResponse,
    ErrorResponse,
    SkillResponse,
)
from skill_sync.services.download_skill import DownloadCounterUseCase, DownloadSkillUseCase
from skill_sync.services.sync_skill import RefreshSkillUseCase

router = APIRouter(prefix="/skills")


@router.get(
    "/{skill_id}",
    response_model=SkillResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Skill not found"},
        422: {"model": ErrorResponse, "description": "Skill has a malformed source URL"},
    },
)
async def get_skill(
    skill_id: int,
    refresh: bool = False,
    use_case: RefreshSkillUseCase = Depends(get_refresh_use_case),
) -> SkillResponse:
    """Return a skill; with ``refresh`` set, try to resync it from GitHub first."""
    result = await use_case.execute(skill_id, refresh=refresh)
    return SkillResponse.from_result(result)


@router.get(
    "/{skill_id}/download",
    response_class=Response,
    responses={
        200: {"content": {"application/zip": {}}},
        400: {"model": ErrorResponse, "description": "Skill download not supported"},
        404: {"model": ErrorResponse, "description": "Skill or skill directory not found"},
        502: {"model": ErrorResponse, "description": "Archive download failed"},
    },
)
async def download_skill(
    skill_id: int,
    use_case: DownloadSkillUseCase = Depends(get_download_use_case),
) -> Response:
    """Stream a zip containing only the skill's directory."""
    archive = await use_case.execute(skill_id)
    return Response(
        content=archive.content,
        media_type="application/zip",
        headers={
            "Content-Disposition": f"attachment; filename={archive.filename}",
            "Cache-Control": "no-store",
        },
    )


@router.post(
    "/{skill_id}/download-count",
    response_model=DownloadCountResponse,
    responses={404: {"model": ErrorResponse, "description": "Skill not found"}},
)
async def increment_download_count(
    skill_id: int,
    counter: DownloadCounterUseCase = Depends(get_download_counter),
) -> DownloadCountResponse:
    count = await counter.increment(skill_id)
    return DownloadCountResponse(download_count=count)
