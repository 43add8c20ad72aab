"""Compliance validator -- checks every skill for the mandatory sections.

A section is present when the skill document has a heading with that text,
compared case-insensitively at any heading level (see
:meth:`SkillDefinition.has_section`).
"""

from __future__ import annotations

from collections.abc import Iterable

from skillroute.skills.models import Catalog
from skillroute.utils.logging import get_logger
from skillroute.validation.models import ValidationReport

logger = get_logger(__name__)

DEFAULT_REQUIRED_SECTIONS: tuple[str, ...] = (
    "Core Question",
    "Review Checklist",
    "Verification Commands",
    "Related Skills",
)


class ComplianceValidator:
    """Stateless validator bound to an ordered set of required sections.

    Reports keep the declared order of *required*, so callers can print
    missing sections in a stable, meaningful order.
    """

    def __init__(self, required: Iterable[str] = DEFAULT_REQUIRED_SECTIONS) -> None:
        # Ordered de-duplication; blank names are ignored.
        self.required: tuple[str, ...] = tuple(
            dict.fromkeys(name.strip() for name in required if name and name.strip())
        )

    def validate(self, catalog: Catalog) -> list[ValidationReport]:
        """Return one report per skill, in SkillID order.  Never raises."""
        reports = [
            ValidationReport(
                skill_id=skill.id,
                missing_sections=tuple(
                    name for name in self.required if not skill.has_section(name)
                ),
            )
            for skill in catalog.skills()
        ]

        failing = [r.skill_id for r in reports if not r.compliant]
        logger.info(
            "compliance_validation_complete",
            checked=len(reports),
            non_compliant=len(failing),
            failing_skills=failing,
        )
        return reports


def validate(
    catalog: Catalog,
    required: Iterable[str] = DEFAULT_REQUIRED_SECTIONS,
) -> list[ValidationReport]:
    """Check *catalog* against *required* sections."""
    return ComplianceValidator(required).validate(catalog)
