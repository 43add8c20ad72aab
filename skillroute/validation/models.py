"""Report models for structural compliance and front-matter linting."""

from pydantic import BaseModel, ConfigDict


class ValidationReport(BaseModel):
    """Mandatory sections one skill is missing.

    Every skill gets a row, compliant or not, so a missing row never has to
    be read as "compliant".
    """

    model_config = ConfigDict(frozen=True)

    skill_id: str
    missing_sections: tuple[str, ...] = ()

    @property
    def compliant(self) -> bool:
        return not self.missing_sections


class FrontmatterReport(BaseModel):
    """Front-matter problems found for one skill."""

    model_config = ConfigDict(frozen=True)

    skill_id: str
    problems: tuple[str, ...] = ()

    @property
    def clean(self) -> bool:
        return not self.problems
