"""Routing endpoints -- pick a skill for a query, or escalate from a known one."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from skillroute.api.v1.schemas.common import ErrorResponse
from skillroute.api.v1.schemas.routing import (
    EscalateRequest,
    EscalateResponse,
    RouteRequest,
    RouteResponse,
)
from skillroute.dependencies import get_router
from skillroute.routing.router import SkillRouter

router = APIRouter()


@router.post(
    "/route",
    response_model=RouteResponse,
    summary="Route a query",
    description=(
        "Match the query text against every skill's triggers and follow "
        "related-skill links from the best match.  A query that matches "
        "nothing returns ``matched=false`` with an empty path."
    ),
)
async def route_query(
    request: RouteRequest,
    skill_router: SkillRouter = Depends(get_router),
) -> RouteResponse:
    decision = skill_router.route(request.text, max_hops=request.max_hops)
    return RouteResponse(matched=decision.matched, decision=decision)


@router.post(
    "/escalate",
    response_model=EscalateResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown start skill"}},
    summary="Escalate from a skill",
)
async def escalate_from(
    request: EscalateRequest,
    skill_router: SkillRouter = Depends(get_router),
) -> EscalateResponse:
    path = skill_router.escalate(request.start, request.text, max_hops=request.max_hops)
    return EscalateResponse(path=path)
