"""Trigger matcher -- scores a query against every skill in a catalog.

A trigger matches when its normalised phrase occurs in the normalised
query as a run of whole tokens (``"borrow"`` matches ``"a borrow error"``
but not ``"borrowed"``).  Each matching trigger contributes its token
count, so ``"borrow checker"`` outweighs ``"borrow"``.

Triggers written in CJK scripts, which do not separate words with spaces,
match as plain substrings of the normalised query instead.
"""

from __future__ import annotations

from skillroute.routing.models import MatchResult, Query, as_query
from skillroute.skills.models import Catalog, SkillDefinition
from skillroute.utils.logging import get_logger
from skillroute.utils.text import contains_cjk

logger = get_logger(__name__)


def trigger_weight(trigger: str) -> int:
    """Number of tokens in the (normalised) trigger phrase."""
    return len(trigger.split())


def trigger_matches(trigger: str, query: Query) -> bool:
    if not trigger:
        return False
    if contains_cjk(trigger):
        return trigger in query.normalized
    return f" {trigger} " in f" {query.normalized} "


def score_skill(skill: SkillDefinition, query: Query) -> tuple[int, tuple[str, ...]]:
    """Score a single skill.

    Returns ``(score, matched_triggers)``; triggers are ordered heaviest
    first, then alphabetically.
    """
    matched = [t for t in skill.triggers if trigger_matches(t, query)]
    matched.sort(key=lambda t: (-trigger_weight(t), t))
    return sum(trigger_weight(t) for t in matched), tuple(matched)


def match(catalog: Catalog, query: Query | str) -> list[MatchResult]:
    """Rank every skill in *catalog* against *query*.

    Skills scoring zero are left out.  The order is total: score descending,
    then tier (core before advanced before expert), then SkillID.  An empty
    list is a normal outcome meaning nothing matched.
    """
    query = as_query(query)
    results: list[MatchResult] = []

    for skill in catalog.skills():
        score, matched = score_skill(skill, query)
        if score <= 0:
            continue
        results.append(
            MatchResult(
                skill_id=skill.id,
                score=score,
                matched_triggers=matched,
                tier=skill.tier,
            )
        )

    results.sort(key=lambda r: r.sort_key)
    logger.debug(
        "query_matched",
        query=query.text[:200],
        matches=len(results),
        top=results[0].skill_id if results else None,
    )
    return results
