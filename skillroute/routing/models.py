"""Per-call routing values: queries, match results and routing decisions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from skillroute.skills.models import SkillID, Tier
from skillroute.utils.text import tokenize


class Query(BaseModel):
    """Raw query text plus its normalised tokens.

    ``tokens`` is derived from ``text`` when not given: case-folded, with
    punctuation stripped.  Build one with ``Query.from_text("...")``.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    tokens: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _derive_tokens(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("tokens"):
            data = {**data, "tokens": tuple(tokenize(str(data.get("text", ""))))}
        return data

    @classmethod
    def from_text(cls, text: str) -> Query:
        return cls(text=text)

    @property
    def normalized(self) -> str:
        return " ".join(self.tokens)

    @property
    def token_set(self) -> frozenset[str]:
        return frozenset(self.tokens)


def as_query(query: Query | str) -> Query:
    """Accept either a :class:`Query` or raw text."""
    if isinstance(query, Query):
        return query
    return Query.from_text(query)


class MatchResult(BaseModel):
    """How well one skill matched a query.

    Attributes:
        skill_id: The matched skill.
        score: Sum of the weights of every matching trigger.
        matched_triggers: Matching triggers, heaviest first.
        tier: The skill's tier, used to break score ties.
    """

    model_config = ConfigDict(frozen=True)

    skill_id: SkillID
    score: int
    matched_triggers: tuple[str, ...] = ()
    tier: Tier = Tier.CORE

    @property
    def sort_key(self) -> tuple[int, int, str]:
        """Ascending key: higher score, then higher tier priority, then smaller id."""
        return (-self.score, self.tier.priority, self.skill_id)


class RoutingDecision(BaseModel):
    """The result of routing one query.

    ``primary`` is ``None`` (and ``path`` empty) when no trigger matched;
    the caller then falls back to its own default skill.
    """

    model_config = ConfigDict(frozen=True)

    primary: MatchResult | None = None
    path: tuple[SkillID, ...] = ()
    rationale: tuple[str, ...] = ()

    @property
    def matched(self) -> bool:
        return self.primary is not None
