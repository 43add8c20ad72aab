"""Skill registry -- builds an immutable :class:`Catalog` from raw documents."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from skillroute.skills.loader import load_documents_from_directory
from skillroute.skills.models import (
    Catalog,
    IssueKind,
    LoadIssue,
    LoadResult,
    RawDocument,
    SkillDefinition,
)
from skillroute.skills.parser import SkillDocumentParser
from skillroute.utils.logging import get_logger

logger = get_logger(__name__)


class SkillRegistry:
    """Turns a batch of skill documents into a catalog plus load issues.

    Typical lifecycle::

        registry = SkillRegistry(max_workers=4)
        result = registry.load_directory("./skills")
        decision = route(result.catalog, "borrow checker error")

    The registry itself holds no catalog.  Every call builds a fresh,
    immutable one, so a document change simply means calling ``load`` again.
    """

    def __init__(
        self,
        max_workers: int = 4,
        parser: SkillDocumentParser | None = None,
    ) -> None:
        self.max_workers = max(1, int(max_workers))
        self.parser = parser or SkillDocumentParser()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, documents: Iterable[RawDocument]) -> LoadResult:
        """Parse *documents* and build the catalog.

        Documents are parsed independently on a thread pool.  Results are
        merged in input order, so the first declaration of an id always wins
        and issues come out in the same order as the documents went in.  A bad
        document never stops the rest of the batch from loading.
        """
        batch: Sequence[RawDocument] = list(documents)
        parsed = self._parse_all(batch)

        accepted: dict[str, SkillDefinition] = {}
        positions: dict[str, int] = {}
        issues: list[LoadIssue] = []

        for position, outcome in enumerate(parsed):
            if isinstance(outcome, LoadIssue):
                logger.warning(
                    "skill_document_rejected",
                    document=outcome.document,
                    reason=outcome.message,
                )
                issues.append(outcome)
                continue

            if outcome.id in accepted:
                first = accepted[outcome.id].source
                logger.warning(
                    "duplicate_skill_id",
                    skill_id=outcome.id,
                    kept=first,
                    rejected=outcome.source,
                )
                issues.append(
                    LoadIssue(
                        kind=IssueKind.DUPLICATE_ID,
                        document=batch[position].identifier_hint,
                        position=position,
                        skill_id=outcome.id,
                        message=f"id '{outcome.id}' already declared by '{first}'",
                    )
                )
                continue

            accepted[outcome.id] = outcome
            positions[outcome.id] = position

        catalog = Catalog(accepted.values())
        issues.extend(self._dangling_references(catalog, positions))

        logger.info(
            "catalog_loaded",
            documents=len(batch),
            skills=len(catalog),
            issues=len(issues),
        )
        return LoadResult(catalog=catalog, issues=tuple(issues))

    def load_directory(
        self,
        directory: str | Path,
        filename: str = "SKILL.md",
    ) -> LoadResult:
        """Read every ``<directory>/*/<filename>`` and load it."""
        return self.load(load_documents_from_directory(directory, filename=filename))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _parse_all(self, batch: Sequence[RawDocument]) -> list[SkillDefinition | LoadIssue]:
        if len(batch) <= 1 or self.max_workers == 1:
            return [self.parser.parse(doc, pos) for pos, doc in enumerate(batch)]

        # map() yields results in submission order regardless of completion order.
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(self.parser.parse, batch, range(len(batch))))

    @staticmethod
    def _dangling_references(catalog: Catalog, positions: dict[str, int]) -> list[LoadIssue]:
        """One warning per related id that names no loaded skill."""
        warnings: list[LoadIssue] = []
        for skill in catalog.skills():
            for target in skill.related_ids:
                if target in catalog:
                    continue
                logger.info("dangling_related_skill", skill_id=skill.id, target=target)
                warnings.append(
                    LoadIssue(
                        kind=IssueKind.DANGLING_REFERENCE,
                        document=skill.source,
                        position=positions.get(skill.id, -1),
                        skill_id=skill.id,
                        related_id=target,
                        message=f"related skill '{target}' is not in the catalog",
                    )
                )
        return warnings


def load(documents: Iterable[RawDocument], max_workers: int = 4) -> LoadResult:
    """Build a catalog from *documents* with a default :class:`SkillRegistry`."""
    return SkillRegistry(max_workers=max_workers).load(documents)
