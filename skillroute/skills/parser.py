"""Skill document parser: turns one ``SKILL.md`` text into a SkillDefinition.

A skill document is YAML front matter followed by Markdown prose::

    ---
    name: m01-ownership
    description: "Ownership, borrowing and lifetimes"
    triggers: [borrow checker, E0382, move]
    tier: core
    related: [m02-resource]
    ---
    # Ownership
    ## Core Question
    ...
    ## Related Skills
    - `m07-concurrency` - when ownership crosses threads

The parse never raises: :meth:`SkillDocumentParser.parse` returns either a
:class:`SkillDefinition` or a :class:`LoadIssue`.  Front matter that is not
valid YAML is read line by line, as long as a name can be recovered.
Markdown is handled with regexes (no markdown library):

- Headings (# through ######), fenced code blocks skipped
- Bullet lists (-, * or +) and table rows for trigger / related lists
- Inline code, bold text and links for related skill ids
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import yaml

from skillroute.skills.models import (
    DescriptionStyle,
    IssueKind,
    LoadIssue,
    RawDocument,
    SkillDefinition,
    Tier,
    TriggerSource,
)
from skillroute.utils.logging import get_logger
from skillroute.utils.text import collapse_whitespace, normalize, slugify

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

_RE_FRONTMATTER = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(.*?)^---[ \t]*\r?$\n?",
    re.DOTALL | re.MULTILINE,
)
_RE_DESCRIPTION_LINE = re.compile(r"^description\s*:[ \t]*(.*)$")
_RE_HEADING = re.compile(r"^\s{0,3}(#{1,6})\s+(.+?)(?:\s+#+)?\s*$")
_RE_CODE_FENCE = re.compile(r"^\s*(```|~~~)")
_RE_BULLET = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+(.+)$")
_RE_TABLE_ROW = re.compile(r"^\s*\|(.+)\|\s*$")
_RE_TABLE_SEP = re.compile(r"^\s*\|[\s:|-]+\|\s*$")
_RE_INLINE_CODE = re.compile(r"`([^`\n]+)`")
_RE_BOLD = re.compile(r"\*\*([^*\n]+)\*\*")
_RE_LINK = re.compile(r"\[([^\]\n]+)\]\(([^)\s]+)\)")
_RE_LEADING_TOKEN = re.compile(r"^[`*\[]*([A-Za-z0-9][\w-]*)")
_RE_INLINE_TRIGGERS = re.compile(
    r"(?:\btriggers?|\bkeywords?|触发词)\s*[:：]\s*(.+)$",
    re.IGNORECASE | re.DOTALL,
)
_RE_LIST_SEPARATOR = re.compile(r"[,，、;；\n]")
_RE_TOP_LEVEL_KEY = re.compile(r"^([A-Za-z_][\w-]*)[ \t]*:(?:[ \t]+(.*))?$")
_RE_RECOVERED_NAME = re.compile(r"^\w[\w .-]*$")

# An id mentioned in prose must look like one: word runs joined by - or _.
_RE_ID_SHAPE = re.compile(r"^[A-Za-z0-9]+(?:[-_][A-Za-z0-9]+)+$")
_RE_WORD_SHAPE = re.compile(r"^[A-Za-z0-9][\w-]*$")
_RE_LEADING_NOISE = re.compile(r"^[^\w]+")

_TRIGGER_HEADINGS = ("triggers", "trigger words", "keywords")
_RELATED_HEADINGS = ("related skills",)
_TIER_KEYS = ("tier", "classification", "level")
_RELATED_KEYS = ("related", "related_skills", "related-skills")

_TIER_ALIASES: dict[str, Tier] = {
    "core": Tier.CORE,
    "basic": Tier.CORE,
    "fundamental": Tier.CORE,
    "advanced": Tier.ADVANCED,
    "intermediate": Tier.ADVANCED,
    "expert": Tier.EXPERT,
    "specialist": Tier.EXPERT,
}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


@dataclass
class _Section:
    """A heading and the non-code lines beneath it (up to the next heading)."""

    heading: str
    level: int
    lines: list[str] = field(default_factory=list)


def _split_frontmatter(text: str) -> tuple[str | None, str]:
    """Return ``(front_matter_block, body)``; the block is ``None`` when absent."""
    match = _RE_FRONTMATTER.match(text)
    if match is None:
        return None, text
    return match.group(1), text[match.end():]


def _split_sections(body: str) -> list[_Section]:
    """Walk the Markdown body and group lines under their headings.

    Lines inside fenced code blocks are ignored entirely, so a ``#`` comment
    in a shell snippet is never mistaken for a heading.
    """
    sections: list[_Section] = [_Section(heading="", level=0)]
    in_code_block = False

    for line in body.splitlines():
        if _RE_CODE_FENCE.match(line):
            in_code_block = not in_code_block
            continue
        if in_code_block:
            continue

        heading = _RE_HEADING.match(line)
        if heading:
            sections.append(
                _Section(heading=heading.group(2).strip(), level=len(heading.group(1)))
            )
        else:
            sections[-1].lines.append(line)

    return sections


def _heading_is(heading: str, names: tuple[str, ...]) -> bool:
    text = _RE_LEADING_NOISE.sub("", heading).casefold()
    for name in names:
        if text == name:
            return True
        if text.startswith(name) and not text[len(name)].isalnum():
            return True
    return False


def _section_lines(sections: list[_Section], names: tuple[str, ...]) -> list[str]:
    """Lines of every section titled one of *names*, including its subsections."""
    lines: list[str] = []
    owner_level = 0
    for section in sections:
        if owner_level and section.level > owner_level:
            lines.extend(section.lines)
            continue
        owner_level = 0
        if section.level and _heading_is(section.heading, names):
            owner_level = section.level
            lines.extend(section.lines)
    return lines


def _as_list(value: Any) -> list[str]:
    """Accept a YAML list or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in _RE_LIST_SEPARATOR.split(value) if part.strip()]
    if isinstance(value, (list, tuple, set)):
        return [str(item).strip() for item in value if str(item).strip()]
    return [str(value).strip()]


def _description_style(block: str) -> DescriptionStyle:
    """Classify how ``description:`` was written in the raw front matter.

    Quotes and ``|`` literal blocks are always accepted.  Anything else
    (plain or ``>`` folded) counts as a block only when its text really
    spans more than one line.
    """
    lines = block.splitlines()
    for idx, line in enumerate(lines):
        match = _RE_DESCRIPTION_LINE.match(line)
        if match is None:
            continue
        value = match.group(1).strip()
        if value.startswith(('"', "'")):
            return DescriptionStyle.QUOTED
        if value.startswith("|"):
            return DescriptionStyle.BLOCK

        text_lines = 1 if value and not value.startswith(">") else 0
        for following in lines[idx + 1:]:
            if not following.strip() or following[:1] not in (" ", "\t"):
                break
            text_lines += 1

        if text_lines == 0:
            return DescriptionStyle.MISSING
        return DescriptionStyle.BLOCK if text_lines > 1 else DescriptionStyle.PLAIN
    return DescriptionStyle.MISSING


def _strip_scalar(value: str) -> str:
    value = value.strip()
    if value[:1] in ("|", ">") and not value[1:].strip("+-0123456789"):
        return ""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    if value.startswith("[") and value.endswith("]"):
        return value[1:-1]
    return value


def _recover_frontmatter(block: str) -> dict[str, Any]:
    """Line-based read of top-level ``key: value`` pairs when YAML fails.

    Unquoted descriptions such as ``description: Use when: ...`` are invalid
    YAML but still carry a usable name.  Indented lines extend the previous
    value, and ``- item`` lines turn it into a list.
    """
    recovered: dict[str, Any] = {}
    key: str | None = None

    for line in block.splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        top = _RE_TOP_LEVEL_KEY.match(line)
        if top:
            key = top.group(1)
            recovered[key] = _strip_scalar(top.group(2) or "")
            continue
        if key is None:
            continue

        item = line.strip()
        current = recovered[key]
        if item.startswith("- "):
            items = current if isinstance(current, list) else []
            items.append(_strip_scalar(item[2:]))
            recovered[key] = items
        elif isinstance(current, str):
            recovered[key] = f"{current} {item}".strip()

    return recovered


def _lookup(frontmatter: dict[str, Any], keys: tuple[str, ...]) -> Any:
    """Find the first of *keys* at top level, then inside a ``metadata`` mapping."""
    scopes = [frontmatter]
    nested = frontmatter.get("metadata")
    if isinstance(nested, dict):
        scopes.append(nested)
    for scope in scopes:
        for key in keys:
            if scope.get(key) not in (None, ""):
                return scope[key]
    return None


def _bullet_items(lines: list[str]) -> list[str]:
    items: list[str] = []
    for line in lines:
        bullet = _RE_BULLET.match(line)
        if bullet:
            items.extend(_as_list(bullet.group(1).replace("`", "")))
    return items


def _related_candidates(lines: list[str]) -> list[str]:
    """Collect skill ids mentioned in a *Related Skills* section."""
    found: list[str] = []

    for line in lines:
        for target_text, target in _RE_LINK.findall(line):
            parts = [p for p in target.split("/") if p and p not in (".", "..")]
            if parts and parts[-1].lower() == "skill.md" and len(parts) >= 2:
                found.append(parts[-2])
            elif _RE_WORD_SHAPE.match(target_text.strip("` ")):
                found.append(target_text.strip("` "))

        for code in _RE_INLINE_CODE.findall(line):
            if _RE_ID_SHAPE.match(code.strip()):
                found.append(code.strip())

        for bold in _RE_BOLD.findall(line):
            if _RE_ID_SHAPE.match(bold.strip("` ")):
                found.append(bold.strip("` "))

        bullet = _RE_BULLET.match(line)
        row = _RE_TABLE_ROW.match(line)
        lead = ""
        if bullet:
            lead = bullet.group(1)
        elif row and not _RE_TABLE_SEP.match(line):
            lead = row.group(1).split("|")[0].strip()
        token = _RE_LEADING_TOKEN.match(lead) if lead else None
        if token and _RE_ID_SHAPE.match(token.group(1)):
            found.append(token.group(1))

    return found


def _infer_trigger(name: str) -> str:
    """Build a fallback trigger from the skill name, dropping numbered prefixes."""
    words = [w for w in normalize(name).split() if not any(c.isdigit() for c in w)]
    return " ".join(words)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


class SkillDocumentParser:
    """Parse raw skill documents into :class:`SkillDefinition` values."""

    def parse(self, document: RawDocument, position: int = 0) -> SkillDefinition | LoadIssue:
        """Parse *document*; *position* is its index in the load batch."""
        block, body = _split_frontmatter(document.raw_text)
        if block is None:
            return self._error(document, position, "missing front matter header")

        try:
            frontmatter = yaml.safe_load(block)
        except yaml.YAMLError as exc:
            frontmatter = _recover_frontmatter(block)
            name = frontmatter.get("name")
            if not (isinstance(name, str) and _RE_RECOVERED_NAME.match(name)):
                return self._error(document, position, f"malformed front matter: {exc}")
            logger.warning(
                "frontmatter_recovered",
                document=document.identifier_hint,
                error=str(exc).split("\n", 1)[0],
            )

        if frontmatter is None:
            frontmatter = {}
        if not isinstance(frontmatter, dict):
            return self._error(document, position, "front matter is not a mapping")

        name = frontmatter.get("name")
        skill_id = slugify(str(name)) if name is not None else ""
        if not skill_id:
            return self._error(document, position, "no extractable skill name")

        description = collapse_whitespace(str(frontmatter.get("description") or ""))
        sections = _split_sections(body)

        triggers, trigger_source = self._extract_triggers(
            str(name), description, frontmatter, sections,
        )

        related = [slugify(r) for r in _as_list(_lookup(frontmatter, _RELATED_KEYS))]
        related.extend(
            slugify(c) for c in _related_candidates(_section_lines(sections, _RELATED_HEADINGS))
        )
        related_ids = {r for r in related if r and r != skill_id}

        return SkillDefinition(
            id=skill_id,
            description=description,
            triggers=triggers,
            tier=self._extract_tier(skill_id, frontmatter),
            related_ids=related_ids,
            sections_present=[s.heading for s in sections if s.level > 0],
            trigger_source=trigger_source,
            description_style=_description_style(block),
            source=document.identifier_hint,
        )

    # ------------------------------------------------------------------
    # Private implementation
    # ------------------------------------------------------------------

    @staticmethod
    def _error(document: RawDocument, position: int, detail: str) -> LoadIssue:
        logger.debug("skill_parse_failed", document=document.identifier_hint, reason=detail)
        return LoadIssue(
            kind=IssueKind.PARSE_ERROR,
            document=document.identifier_hint,
            position=position,
            message=detail,
        )

    @staticmethod
    def _extract_triggers(
        name: str,
        description: str,
        frontmatter: dict[str, Any],
        sections: list[_Section],
    ) -> tuple[list[str], TriggerSource]:
        """Pick the first non-empty trigger source.

        Order: front matter ``triggers``, an inline ``Triggers:`` list in the
        description, bullets under a *Triggers* heading, then the skill name.
        """
        explicit = _as_list(frontmatter.get("triggers"))
        if explicit:
            return explicit, TriggerSource.FRONTMATTER

        inline = _RE_INLINE_TRIGGERS.search(description)
        if inline:
            items = _as_list(inline.group(1))
            if items:
                return items, TriggerSource.DESCRIPTION

        items = _bullet_items(_section_lines(sections, _TRIGGER_HEADINGS))
        if items:
            return items, TriggerSource.BODY

        inferred = _infer_trigger(name)
        if inferred:
            return [inferred], TriggerSource.INFERRED
        return [], TriggerSource.NONE

    @staticmethod
    def _extract_tier(skill_id: str, frontmatter: dict[str, Any]) -> Tier:
        value = _lookup(frontmatter, _TIER_KEYS)
        if value is None:
            return Tier.CORE
        tier = _TIER_ALIASES.get(str(value).strip().casefold())
        if tier is None:
            logger.warning("unknown_skill_tier", skill_id=skill_id, tier=str(value))
            return Tier.CORE
        return tier
