"""Validation subsystem -- section compliance and front-matter linting."""

from skillroute.validation.compliance import (
    DEFAULT_REQUIRED_SECTIONS,
    ComplianceValidator,
    validate,
)
from skillroute.validation.frontmatter import FrontmatterLinter, lint
from skillroute.validation.models import FrontmatterReport, ValidationReport

__all__ = [
    "DEFAULT_REQUIRED_SECTIONS",
    "ComplianceValidator",
    "FrontmatterLinter",
    "FrontmatterReport",
    "ValidationReport",
    "lint",
    "validate",
]
