"""Skills introspection endpoints -- list catalog entries and load issues."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from skillroute.api.v1.schemas.common import ErrorResponse
from skillroute.api.v1.schemas.skill import (
    LoadIssuesResponse,
    SkillDetail,
    SkillInfo,
    SkillsListResponse,
)
from skillroute.dependencies import get_catalog, get_load_result
from skillroute.skills.models import Catalog, LoadResult
from skillroute.utils.exceptions import SkillNotFoundError

router = APIRouter()


@router.get(
    "/skills",
    response_model=SkillsListResponse,
    summary="List catalog skills",
    description="Return a summary of every skill in the catalog, in SkillID order.",
)
async def list_skills(
    catalog: Catalog = Depends(get_catalog),
) -> SkillsListResponse:
    skills = [SkillInfo.from_definition(s) for s in catalog.skills()]
    return SkillsListResponse(skills=skills, total=len(skills))


@router.get(
    "/skills/{skill_id}",
    response_model=SkillDetail,
    responses={404: {"model": ErrorResponse, "description": "Unknown skill"}},
    summary="Show one skill",
)
async def get_skill(
    skill_id: str,
    catalog: Catalog = Depends(get_catalog),
) -> SkillDetail:
    if skill_id not in catalog:
        raise SkillNotFoundError(skill_id)
    return SkillDetail.from_definition(catalog[skill_id])


@router.get(
    "/issues",
    response_model=LoadIssuesResponse,
    summary="List catalog load issues",
    description="Parse errors, duplicate ids and dangling related-skill references.",
)
async def list_issues(
    result: LoadResult = Depends(get_load_result),
) -> LoadIssuesResponse:
    return LoadIssuesResponse(
        issues=list(result.issues),
        errors=len(result.errors),
        warnings=len(result.warnings),
    )
