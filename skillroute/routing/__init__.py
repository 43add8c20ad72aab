"""Routing subsystem -- trigger matching, escalation and the router API.

Public API::

    from skillroute.routing import (
        MatchResult,
        Query,
        RoutingDecision,
        SkillRouter,
        escalate,
        match,
        route,
    )
"""

from skillroute.routing.escalation import DEFAULT_MAX_HOPS, escalate
from skillroute.routing.matcher import match, score_skill
from skillroute.routing.models import MatchResult, Query, RoutingDecision
from skillroute.routing.router import SkillRouter, route

__all__ = [
    "DEFAULT_MAX_HOPS",
    "MatchResult",
    "Query",
    "RoutingDecision",
    "SkillRouter",
    "escalate",
    "match",
    "route",
    "score_skill",
]
