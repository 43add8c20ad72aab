"""Filesystem document loader -- reads ``SKILL.md`` files into RawDocuments.

This is the only part of the catalog pipeline that touches the disk.  The
registry and everything downstream work on in-memory documents.
"""

from __future__ import annotations

from pathlib import Path

from skillroute.skills.models import RawDocument
from skillroute.utils.logging import get_logger

logger = get_logger(__name__)


def load_documents_from_directory(
    directory: str | Path,
    filename: str = "SKILL.md",
) -> list[RawDocument]:
    """Scan ``<directory>/*/<filename>`` and return one document per skill.

    Parameters
    ----------
    directory:
        Root of the skills tree.  Non-existent or non-directory paths are
        handled gracefully (an empty list is returned).
    filename:
        Name of the skill document inside each skill directory.

    Returns
    -------
    list[RawDocument]
        Documents sorted by skill directory name; the directory name is used
        as the ``identifier_hint``.
    """
    directory = Path(directory)

    if not directory.exists():
        logger.warning("skills_directory_missing", path=str(directory))
        return []

    if not directory.is_dir():
        logger.warning("skills_path_not_directory", path=str(directory))
        return []

    documents: list[RawDocument] = []

    for filepath in sorted(directory.glob(f"*/{filename}")):
        document = load_document_from_file(filepath)
        if document is not None:
            documents.append(document)

    logger.debug("skill_documents_read", path=str(directory), count=len(documents))
    return documents


def load_document_from_file(filepath: str | Path) -> RawDocument | None:
    """Read a single skill document.  Returns ``None`` if it cannot be read."""
    filepath = Path(filepath)

    try:
        text = filepath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("skill_file_unreadable", path=str(filepath), error=str(exc))
        return None

    return RawDocument(identifier_hint=filepath.parent.name, raw_text=text)
