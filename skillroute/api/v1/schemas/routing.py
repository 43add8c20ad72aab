"""Request/response schemas for the routing endpoints."""

from pydantic import BaseModel, Field

from skillroute.routing.models import RoutingDecision


class RouteRequest(BaseModel):
    """Query text to route against the catalog."""

    text: str = Field(..., min_length=1, max_length=10000, description="User query")
    max_hops: int | None = Field(
        default=None,
        ge=0,
        le=16,
        description="Escalation hop limit; the configured default when omitted",
    )


class RouteResponse(BaseModel):
    """Routing outcome.

    * ``matched=True`` -- ``decision.primary`` holds the chosen skill.
    * ``matched=False`` -- nothing matched; the caller picks its own default.
    """

    matched: bool
    decision: RoutingDecision


class EscalateRequest(BaseModel):
    """Walk related skills from an explicit starting skill."""

    start: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1, max_length=10000)
    max_hops: int | None = Field(default=None, ge=0, le=16)


class EscalateResponse(BaseModel):
    path: list[str]
