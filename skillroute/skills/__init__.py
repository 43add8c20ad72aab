"""Skills subsystem -- document parsing, catalog models and the registry."""

from skillroute.skills.loader import load_documents_from_directory
from skillroute.skills.models import (
    Catalog,
    DescriptionStyle,
    IssueKind,
    LoadIssue,
    LoadResult,
    RawDocument,
    SkillDefinition,
    Tier,
    TriggerSource,
)
from skillroute.skills.parser import SkillDocumentParser
from skillroute.skills.registry import SkillRegistry, load

__all__ = [
    "Catalog",
    "DescriptionStyle",
    "IssueKind",
    "LoadIssue",
    "LoadResult",
    "RawDocument",
    "SkillDefinition",
    "SkillDocumentParser",
    "SkillRegistry",
    "Tier",
    "TriggerSource",
    "load",
    "load_documents_from_directory",
]
