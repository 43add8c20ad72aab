"""Skill routing and compliance engine.

Build a catalog once, then route queries and validate structure against it::

    from skillroute import load, route, validate

    result = load(documents)
    decision = route(result.catalog, "borrow checker error E0382")
    reports = validate(result.catalog)
"""

__version__ = "0.1.0"

from skillroute.routing import Query, RoutingDecision, SkillRouter, escalate, match, route
from skillroute.skills import Catalog, LoadResult, RawDocument, SkillDefinition, SkillRegistry, load
from skillroute.validation import ValidationReport, lint, validate

__all__ = [
    "Catalog",
    "LoadResult",
    "Query",
    "RawDocument",
    "RoutingDecision",
    "SkillDefinition",
    "SkillRegistry",
    "SkillRouter",
    "ValidationReport",
    "__version__",
    "escalate",
    "lint",
    "load",
    "match",
    "route",
    "validate",
]
