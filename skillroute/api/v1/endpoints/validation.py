"""Structural compliance and front-matter lint endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from skillroute.api.v1.schemas.validation import LintResponse, ValidationResponse
from skillroute.dependencies import (
    get_catalog,
    get_compliance_validator,
    get_frontmatter_linter,
)
from skillroute.skills.models import Catalog
from skillroute.validation.compliance import ComplianceValidator
from skillroute.validation.frontmatter import FrontmatterLinter

router = APIRouter()


@router.get(
    "/validate",
    response_model=ValidationResponse,
    summary="Check mandatory sections",
    description="Return one report per skill listing the required sections it lacks.",
)
async def validate_catalog(
    catalog: Catalog = Depends(get_catalog),
    validator: ComplianceValidator = Depends(get_compliance_validator),
) -> ValidationResponse:
    reports = validator.validate(catalog)
    failing = sum(1 for r in reports if not r.compliant)
    return ValidationResponse(
        required=list(validator.required),
        reports=reports,
        compliant=failing == 0,
        non_compliant=failing,
    )


@router.get(
    "/lint",
    response_model=LintResponse,
    summary="Lint skill front matter",
)
async def lint_catalog(
    catalog: Catalog = Depends(get_catalog),
    linter: FrontmatterLinter = Depends(get_frontmatter_linter),
) -> LintResponse:
    reports = linter.lint(catalog)
    with_problems = sum(1 for r in reports if not r.clean)
    return LintResponse(reports=reports, clean=with_problems == 0, with_problems=with_problems)
