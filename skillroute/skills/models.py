"""Data models for the skill catalog.

Everything here is immutable: pydantic models are frozen, collections are
tuples, and :class:`Catalog` exposes a read-only mapping.  A catalog is
built once per routing session and can be shared between threads.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, field_validator

from skillroute.utils.exceptions import DuplicateIDError, ParseError
from skillroute.utils.text import normalize

SkillID = str

_RE_LEADING_NOISE = re.compile(r"^[^\w]+")


class Tier(str, Enum):
    """Specialisation depth of a skill.  Lower priority value wins ties."""

    CORE = "core"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @property
    def priority(self) -> int:
        return _TIER_PRIORITY[self]


_TIER_PRIORITY: dict[Tier, int] = {
    Tier.CORE: 0,
    Tier.ADVANCED: 1,
    Tier.EXPERT: 2,
}


class TriggerSource(str, Enum):
    """Where the parser found a skill's trigger list."""

    FRONTMATTER = "frontmatter"
    DESCRIPTION = "description"
    BODY = "body"
    INFERRED = "inferred"
    NONE = "none"


class DescriptionStyle(str, Enum):
    """How the ``description:`` front-matter field was written."""

    QUOTED = "quoted"
    BLOCK = "block"
    PLAIN = "plain"
    MISSING = "missing"


class RawDocument(BaseModel):
    """One skill document as handed over by a document loader."""

    model_config = ConfigDict(frozen=True)

    identifier_hint: str
    raw_text: str


class SkillDefinition(BaseModel):
    """A parsed, well-formed skill.

    ``triggers`` are stored normalised (case-folded, punctuation stripped)
    and sorted; ``related_ids`` are sorted; ``sections_present`` keeps the
    heading text in document order.
    """

    model_config = ConfigDict(frozen=True)

    id: SkillID
    description: str = ""
    triggers: tuple[str, ...] = ()
    tier: Tier = Tier.CORE
    related_ids: tuple[SkillID, ...] = ()
    sections_present: tuple[str, ...] = ()
    trigger_source: TriggerSource = TriggerSource.NONE
    description_style: DescriptionStyle = DescriptionStyle.MISSING
    source: str = ""

    @field_validator("triggers", mode="before")
    @classmethod
    def _normalize_triggers(cls, value: Iterable[str]) -> tuple[str, ...]:
        phrases = {normalize(str(t)) for t in value or ()}
        phrases.discard("")
        return tuple(sorted(phrases))

    @field_validator("related_ids", mode="before")
    @classmethod
    def _sort_related(cls, value: Iterable[str]) -> tuple[str, ...]:
        ids = {str(v).strip() for v in value or ()}
        ids.discard("")
        return tuple(sorted(ids))

    @field_validator("sections_present", mode="before")
    @classmethod
    def _dedupe_sections(cls, value: Iterable[str]) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for heading in value or ():
            heading = str(heading).strip()
            if heading:
                seen.setdefault(heading, None)
        return tuple(seen)

    def has_section(self, name: str) -> bool:
        """Return ``True`` if any heading matches *name*.

        Matching ignores case and heading level.  A heading also matches when
        it starts with *name* followed by a non-word character, so
        ``"Core Question (details)"`` satisfies ``"Core Question"``.
        """
        wanted = name.strip().casefold()
        if not wanted:
            return False
        for heading in self.sections_present:
            text = _RE_LEADING_NOISE.sub("", heading).casefold()
            if text == wanted:
                return True
            if text.startswith(wanted) and not text[len(wanted)].isalnum():
                return True
        return False


class IssueKind(str, Enum):
    PARSE_ERROR = "parse_error"
    DUPLICATE_ID = "duplicate_id"
    DANGLING_REFERENCE = "dangling_reference"


class LoadIssue(BaseModel):
    """A problem found while building the catalog.

    Issues are values, never exceptions: one bad document is recorded here
    and the rest of the batch keeps loading.
    """

    model_config = ConfigDict(frozen=True)

    kind: IssueKind
    document: str
    position: int
    skill_id: SkillID | None = None
    related_id: SkillID | None = None
    message: str = ""

    @property
    def is_fatal(self) -> bool:
        """``True`` when the document was dropped from the catalog."""
        return self.kind in (IssueKind.PARSE_ERROR, IssueKind.DUPLICATE_ID)


class Catalog(Mapping[SkillID, SkillDefinition]):
    """Immutable mapping of SkillID to :class:`SkillDefinition`.

    Skills are stored in an arena (a tuple sorted by id) with an id-to-index
    lookup, so graph walks can track visited nodes by integer index.
    Iteration always yields ids in lexicographic order.
    """

    __slots__ = ("_skills", "_index")

    def __init__(self, skills: Iterable[SkillDefinition] = ()) -> None:
        ordered = sorted(skills, key=lambda s: s.id)
        index: dict[SkillID, int] = {}
        for position, skill in enumerate(ordered):
            if skill.id in index:
                raise ValueError(f"Duplicate skill id in catalog: {skill.id}")
            index[skill.id] = position
        self._skills: tuple[SkillDefinition, ...] = tuple(ordered)
        self._index: Mapping[SkillID, int] = MappingProxyType(index)

    def __getitem__(self, skill_id: SkillID) -> SkillDefinition:
        return self._skills[self._index[skill_id]]

    def __iter__(self) -> Iterator[SkillID]:
        return (s.id for s in self._skills)

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._index

    def __repr__(self) -> str:
        return f"Catalog({len(self._skills)} skills)"

    def index_of(self, skill_id: SkillID) -> int:
        """Arena index of *skill_id*.  Raises ``KeyError`` when unknown."""
        return self._index[skill_id]

    def at(self, index: int) -> SkillDefinition:
        return self._skills[index]

    def skills(self) -> tuple[SkillDefinition, ...]:
        """All definitions in SkillID order."""
        return self._skills


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a batch of documents.

    Attributes:
        catalog: Every document that parsed cleanly and declared a new id.
        issues: Load problems in input-document order, followed by dangling
            reference warnings.
    """

    catalog: Catalog
    issues: tuple[LoadIssue, ...] = ()

    @property
    def errors(self) -> list[LoadIssue]:
        return [i for i in self.issues if i.is_fatal]

    @property
    def warnings(self) -> list[LoadIssue]:
        return [i for i in self.issues if not i.is_fatal]

    def raise_for_issues(self, duplicates_only: bool = False) -> None:
        """Raise the first dropped-document issue as an exception.

        Loading itself never raises; callers that want a strict catalog opt in
        here.  With *duplicates_only* parse errors are tolerated.
        """
        for issue in self.errors:
            if issue.kind is IssueKind.DUPLICATE_ID:
                documents = [
                    i.document for i in self.issues
                    if i.kind is IssueKind.DUPLICATE_ID and i.skill_id == issue.skill_id
                ]
                raise DuplicateIDError(issue.skill_id or "", documents)
            if issue.kind is IssueKind.PARSE_ERROR and not duplicates_only:
                raise ParseError(issue.document, issue.message)
