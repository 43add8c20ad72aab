"""Request/response schemas for the skills introspection endpoints."""

from pydantic import BaseModel

from skillroute.skills.models import LoadIssue, SkillDefinition


class SkillInfo(BaseModel):
    """Public-facing summary of a single catalog entry."""

    id: str
    description: str
    tier: str
    triggers: list[str]
    related_ids: list[str]

    @classmethod
    def from_definition(cls, skill: SkillDefinition) -> "SkillInfo":
        return cls(
            id=skill.id,
            description=skill.description,
            tier=skill.tier.value,
            triggers=list(skill.triggers),
            related_ids=list(skill.related_ids),
        )


class SkillDetail(SkillInfo):
    """Full catalog entry, including the headings found in the document."""

    sections_present: list[str]
    trigger_source: str
    source: str

    @classmethod
    def from_definition(cls, skill: SkillDefinition) -> "SkillDetail":
        return cls(
            id=skill.id,
            description=skill.description,
            tier=skill.tier.value,
            triggers=list(skill.triggers),
            related_ids=list(skill.related_ids),
            sections_present=list(skill.sections_present),
            trigger_source=skill.trigger_source.value,
            source=skill.source,
        )


class SkillsListResponse(BaseModel):
    """Response listing every skill in the catalog."""

    skills: list[SkillInfo]
    total: int


class LoadIssuesResponse(BaseModel):
    """Problems recorded while the catalog was built."""

    issues: list[LoadIssue]
    errors: int
    warnings: int
