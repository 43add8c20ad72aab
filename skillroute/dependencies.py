"""FastAPI dependency functions for injection into endpoint handlers.

The catalog is expensive to build and immutable once built, so it is
loaded during the app lifespan, stored on ``app.state`` and simply looked
up here.  Lighter objects (the router, validators) are created per call.
"""

from __future__ import annotations

from fastapi import Request

from skillroute.config import settings
from skillroute.routing.router import SkillRouter
from skillroute.skills.models import Catalog, LoadResult
from skillroute.utils.exceptions import CatalogNotLoadedError
from skillroute.validation.compliance import ComplianceValidator
from skillroute.validation.frontmatter import FrontmatterLinter


# ---------------------------------------------------------------------------
# Catalog (initialised during app lifespan)
# ---------------------------------------------------------------------------

def get_load_result(request: Request) -> LoadResult:
    """Return the load result stored on ``app.state``."""
    result = getattr(request.app.state, "load_result", None)
    if result is None:
        raise CatalogNotLoadedError("Skill catalog has not been loaded.")
    return result


def get_catalog(request: Request) -> Catalog:
    return get_load_result(request).catalog


# ---------------------------------------------------------------------------
# Routing and validation services
# ---------------------------------------------------------------------------

def get_router(request: Request) -> SkillRouter:
    """Construct a :class:`SkillRouter` over the session catalog."""
    return SkillRouter(get_catalog(request), max_hops=settings.max_hops)


def get_compliance_validator() -> ComplianceValidator:
    return ComplianceValidator(settings.required_sections)


def get_frontmatter_linter() -> FrontmatterLinter:
    return FrontmatterLinter(settings.description_max_chars)
