"""Response schemas for the compliance and lint endpoints."""

from pydantic import BaseModel

from skillroute.validation.models import FrontmatterReport, ValidationReport


class ValidationResponse(BaseModel):
    """One row per skill; ``compliant`` is true only when no row misses a section."""

    required: list[str]
    reports: list[ValidationReport]
    compliant: bool
    non_compliant: int


class LintResponse(BaseModel):
    reports: list[FrontmatterReport]
    clean: bool
    with_problems: int
