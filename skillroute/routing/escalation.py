"""Escalation resolver -- follows related-skill links from a matched skill.

The related-skill graph is a general directed graph; skills routinely link
to each other in both directions.  The walk therefore tracks visited skills
by arena index and never appends a skill twice, which bounds it on any
graph regardless of cycles.
"""

from __future__ import annotations

from skillroute.routing.matcher import score_skill
from skillroute.routing.models import Query, as_query
from skillroute.skills.models import Catalog, SkillID
from skillroute.utils.exceptions import SkillNotFoundError
from skillroute.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_HOPS = 1


def escalate(
    catalog: Catalog,
    start: SkillID,
    query: Query | str,
    max_hops: int = DEFAULT_MAX_HOPS,
    *,
    require_match: bool = True,
) -> list[SkillID]:
    """Build an escalation path of at most ``max_hops + 1`` skills.

    Starting from *start*, each hop gathers the unvisited neighbours of every
    skill already on the path, re-scores them against *query*, and appends
    the best one (score descending, then tier, then SkillID).  The walk stops
    after *max_hops* appends or when no candidate is left.  With
    *require_match* (the default) neighbours scoring zero are not candidates.

    Related ids that are not in the catalog are skipped silently; they were
    already reported as load warnings.

    Raises
    ------
    SkillNotFoundError
        If *start* is not in the catalog.
    ValueError
        If *max_hops* is negative.
    """
    if max_hops < 0:
        raise ValueError(f"max_hops must be >= 0, got {max_hops}")
    if start not in catalog:
        raise SkillNotFoundError(start)

    query = as_query(query)
    start_index = catalog.index_of(start)
    path: list[int] = [start_index]
    visited: set[int] = {start_index}
    scores: dict[int, int] = {}

    while len(path) <= max_hops:
        best: int | None = None
        best_key: tuple[int, int, str] | None = None

        for candidate in _frontier(catalog, path, visited):
            skill = catalog.at(candidate)
            if candidate not in scores:
                scores[candidate] = score_skill(skill, query)[0]
            score = scores[candidate]
            if require_match and score <= 0:
                continue
            key = (-score, skill.tier.priority, skill.id)
            if best_key is None or key < best_key:
                best, best_key = candidate, key

        if best is None:
            break
        path.append(best)
        visited.add(best)

    result = [catalog.at(i).id for i in path]
    logger.debug("escalation_resolved", start=start, max_hops=max_hops, path=result)
    return result


def _frontier(catalog: Catalog, path: list[int], visited: set[int]) -> set[int]:
    """Arena indices of unvisited skills linked from any skill on *path*."""
    frontier: set[int] = set()
    for index in path:
        for related_id in catalog.at(index).related_ids:
            if related_id not in catalog:
                continue
            neighbour = catalog.index_of(related_id)
            if neighbour not in visited:
                frontier.add(neighbour)
    return frontier
