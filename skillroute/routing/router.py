"""Router API -- one call from query text to a routing decision.

``route`` composes the trigger matcher and the escalation resolver: the
best match becomes the primary skill, related skills that also match the
query are appended as secondaries, and the matched triggers of every skill
on the path form the rationale.
"""

from __future__ import annotations

from skillroute.routing.escalation import DEFAULT_MAX_HOPS, escalate
from skillroute.routing.matcher import match, score_skill
from skillroute.routing.models import Query, RoutingDecision, as_query
from skillroute.skills.models import Catalog
from skillroute.utils.logging import get_logger

logger = get_logger(__name__)


def route(
    catalog: Catalog,
    query: Query | str,
    max_hops: int = DEFAULT_MAX_HOPS,
) -> RoutingDecision:
    """Route *query* against *catalog*.

    A query matching nothing yields ``RoutingDecision(primary=None, path=())``;
    that is an expected outcome, not an error.  The function has no side
    effects and is safe to call concurrently on a shared catalog.
    """
    query = as_query(query)
    results = match(catalog, query)
    if not results:
        logger.info("route_no_match", query=query.text[:200])
        return RoutingDecision()

    primary = results[0]
    path = escalate(catalog, primary.skill_id, query, max_hops=max_hops)

    rationale: dict[str, None] = dict.fromkeys(primary.matched_triggers)
    for skill_id in path[1:]:
        _, matched = score_skill(catalog[skill_id], query)
        for trigger in matched:
            rationale.setdefault(trigger, None)

    decision = RoutingDecision(
        primary=primary,
        path=tuple(path),
        rationale=tuple(rationale),
    )
    logger.info(
        "route_resolved",
        primary=primary.skill_id,
        score=primary.score,
        path=list(decision.path),
    )
    return decision


class SkillRouter:
    """A thin facade binding a catalog and a hop limit.

    Useful where one catalog serves many queries (the HTTP app, the CLI)::

        router = SkillRouter(result.catalog, max_hops=1)
        decision = router.route("why does my Arc<Mutex<T>> deadlock?")
    """

    def __init__(self, catalog: Catalog, max_hops: int = DEFAULT_MAX_HOPS) -> None:
        if max_hops < 0:
            raise ValueError(f"max_hops must be >= 0, got {max_hops}")
        self.catalog = catalog
        self.max_hops = max_hops

    def route(self, query: Query | str, max_hops: int | None = None) -> RoutingDecision:
        hops = self.max_hops if max_hops is None else max_hops
        return route(self.catalog, query, max_hops=hops)

    def escalate(self, start: str, query: Query | str, max_hops: int | None = None) -> list[str]:
        hops = self.max_hops if max_hops is None else max_hops
        return escalate(self.catalog, start, query, max_hops=hops)
