"""Front-matter linter for skill descriptions.

Checks performed on every skill:

1. **cjk** -- the description is English only.
2. **length** -- the description fits in ``max_description_chars``
   (CJK characters count as two).
3. **mixed_triggers** -- triggers live in a ``triggers:`` field, not inside
   the description text.
4. **style** -- a single-line description is quoted (or uses a ``|``/``>``
   block scalar).
"""

from __future__ import annotations

from typing import Callable

from skillroute.skills.models import Catalog, DescriptionStyle, SkillDefinition, TriggerSource
from skillroute.utils.logging import get_logger
from skillroute.utils.text import contains_cjk, display_width
from skillroute.validation.models import FrontmatterReport

logger = get_logger(__name__)

DEFAULT_MAX_DESCRIPTION_CHARS = 200


class FrontmatterLinter:
    """Stateless linter producing one :class:`FrontmatterReport` per skill."""

    def __init__(self, max_description_chars: int = DEFAULT_MAX_DESCRIPTION_CHARS) -> None:
        self.max_description_chars = max_description_chars

    def _get_checks(self) -> list[Callable[[SkillDefinition], str | None]]:
        return [
            self._check_missing,
            self._check_cjk,
            self._check_length,
            self._check_mixed_triggers,
            self._check_style,
        ]

    def lint(self, catalog: Catalog) -> list[FrontmatterReport]:
        """Lint every skill in SkillID order."""
        checks = self._get_checks()
        reports: list[FrontmatterReport] = []

        for skill in catalog.skills():
            problems = [p for p in (check(skill) for check in checks) if p]
            reports.append(FrontmatterReport(skill_id=skill.id, problems=tuple(problems)))

        logger.info(
            "frontmatter_lint_complete",
            checked=len(reports),
            with_problems=sum(1 for r in reports if not r.clean),
        )
        return reports

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    @staticmethod
    def _check_missing(skill: SkillDefinition) -> str | None:
        if skill.description_style is DescriptionStyle.MISSING or not skill.description:
            return "description missing"
        return None

    @staticmethod
    def _check_cjk(skill: SkillDefinition) -> str | None:
        if contains_cjk(skill.description):
            return "description contains CJK characters"
        return None

    def _check_length(self, skill: SkillDefinition) -> str | None:
        width = display_width(skill.description)
        if width > self.max_description_chars:
            return f"description too long ({width} chars)"
        return None

    @staticmethod
    def _check_mixed_triggers(skill: SkillDefinition) -> str | None:
        if skill.trigger_source is TriggerSource.DESCRIPTION:
            return "triggers mixed into description"
        return None

    @staticmethod
    def _check_style(skill: SkillDefinition) -> str | None:
        if skill.description_style is DescriptionStyle.PLAIN:
            return "single-line description should use quotes"
        return None


def lint(
    catalog: Catalog,
    max_description_chars: int = DEFAULT_MAX_DESCRIPTION_CHARS,
) -> list[FrontmatterReport]:
    """Lint *catalog* with a default :class:`FrontmatterLinter`."""
    return FrontmatterLinter(max_description_chars).lint(catalog)
