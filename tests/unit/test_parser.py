"""Tests for the skill document parser."""
import pytest

from skillroute.skills.models import (
    DescriptionStyle,
    IssueKind,
    LoadIssue,
    RawDocument,
    SkillDefinition,
    Tier,
    TriggerSource,
)
from skillroute.skills.parser import SkillDocumentParser


def _parse(text: str, hint: str = "doc"):
    return SkillDocumentParser().parse(RawDocument(identifier_hint=hint, raw_text=text))


class TestHeader:
    def test_parse_full_document(self, ownership_doc):
        skill = _parse(ownership_doc, hint="m01-ownership")
        assert isinstance(skill, SkillDefinition)
        assert skill.id == "m01-ownership"
        assert skill.description == "Ownership, borrowing and lifetime errors"
        assert skill.tier is Tier.CORE
        assert skill.source == "m01-ownership"
        assert skill.description_style is DescriptionStyle.QUOTED

    def test_id_is_slugified_name(self):
        skill = _parse("---\nname: Rust Error\n---\n# Body\n")
        assert skill.id == "rust-error"

    def test_missing_front_matter_is_parse_error(self):
        issue = _parse("# Just a heading\n\nSome prose.", hint="broken")
        assert isinstance(issue, LoadIssue)
        assert issue.kind is IssueKind.PARSE_ERROR
        assert issue.document == "broken"

    def test_missing_name_is_parse_error(self):
        issue = _parse("---\ndescription: \"no name here\"\n---\n# Body\n")
        assert isinstance(issue, LoadIssue)
        assert issue.kind is IssueKind.PARSE_ERROR

    def test_empty_front_matter_is_parse_error(self):
        issue = _parse("---\n---\n# Body\n")
        assert isinstance(issue, LoadIssue)

    def test_malformed_yaml_is_parse_error(self):
        issue = _parse("---\nname: [unclosed\n---\n# Body\n")
        assert isinstance(issue, LoadIssue)
        assert "malformed" in issue.message

    def test_unquoted_colon_in_description_is_recovered(self):
        skill = _parse(
            "---\n"
            "name: m01-ownership\n"
            "description: Ownership rules. Triggers: borrow, move\n"
            "---\n"
            "## Core Question\n"
        )
        assert isinstance(skill, SkillDefinition)
        assert skill.id == "m01-ownership"
        assert skill.description == "Ownership rules. Triggers: borrow, move"
        assert skill.trigger_source is TriggerSource.DESCRIPTION
        assert skill.triggers == ("borrow", "move")
        assert skill.description_style is DescriptionStyle.PLAIN
        assert skill.has_section("Core Question")

    def test_recovered_header_keeps_list_fields(self):
        skill = _parse(
            "---\n"
            "name: m07-concurrency\n"
            "description: Use when: threads share data\n"
            "triggers:\n"
            "  - data race\n"
            "  - deadlock\n"
            "tier: advanced\n"
            "related: [m01-ownership]\n"
            "---\n"
        )
        assert isinstance(skill, SkillDefinition)
        assert skill.triggers == ("data race", "deadlock")
        assert skill.trigger_source is TriggerSource.FRONTMATTER
        assert skill.tier is Tier.ADVANCED
        assert skill.related_ids == ("m01-ownership",)

    def test_invalid_yaml_without_name_is_parse_error(self):
        issue = _parse("---\ndescription: Use when: anything\n---\n")
        assert isinstance(issue, LoadIssue)
        assert "malformed" in issue.message

    def test_non_mapping_front_matter_is_parse_error(self):
        issue = _parse("---\n- a\n- b\n---\n# Body\n")
        assert isinstance(issue, LoadIssue)
        assert "mapping" in issue.message

    def test_parse_never_raises_on_garbage(self):
        result = _parse("---\n\x00\x01: : :\n---\n")
        assert isinstance(result, (SkillDefinition, LoadIssue))


class TestTriggers:
    def test_front_matter_triggers_are_normalized(self, ownership_doc):
        skill = _parse(ownership_doc)
        assert skill.triggers == ("borrow", "borrow checker", "e0382", "ownership")
        assert skill.trigger_source is TriggerSource.FRONTMATTER

    def test_comma_separated_triggers(self):
        skill = _parse("---\nname: x-skill\ntriggers: \"alpha, beta gamma\"\n---\n")
        assert skill.triggers == ("alpha", "beta gamma")

    def test_triggers_inline_in_description(self):
        text = (
            "---\n"
            "name: m06-error-handling\n"
            "description: \"Result and panics. Triggers: Result, anyhow, 错误处理\"\n"
            "---\n"
        )
        skill = _parse(text)
        assert skill.trigger_source is TriggerSource.DESCRIPTION
        assert set(skill.triggers) == {"result", "anyhow", "错误处理"}

    def test_triggers_from_body_section(self):
        text = "---\nname: m04-lifetimes\n---\n## Triggers\n- lifetime\n- dangling reference\n"
        skill = _parse(text)
        assert skill.trigger_source is TriggerSource.BODY
        assert skill.triggers == ("dangling reference", "lifetime")

    def test_triggers_inferred_from_name(self):
        skill = _parse("---\nname: m03-mutability\n---\n# Body\n")
        assert skill.trigger_source is TriggerSource.INFERRED
        assert skill.triggers == ("mutability",)


class TestRelatedSkills:
    def test_related_from_front_matter_and_body(self, ownership_doc):
        skill = _parse(ownership_doc)
        assert skill.related_ids == ("m06-error-handling", "m07-concurrency")

    def test_bold_and_table_mentions(self):
        text = (
            "---\nname: a-skill\n---\n"
            "## Related Skills\n"
            "See **b-skill** first.\n\n"
            "| Skill | When |\n"
            "|-------|------|\n"
            "| c-skill | later |\n"
        )
        skill = _parse(text)
        assert skill.related_ids == ("b-skill", "c-skill")

    def test_subsections_belong_to_related_section(self):
        text = (
            "---\nname: a-skill\n---\n"
            "## Related Skills\n"
            "### Escalate to\n"
            "- `b-skill`\n"
            "## Notes\n"
            "- `not-related`\n"
        )
        skill = _parse(text)
        assert skill.related_ids == ("b-skill",)

    def test_inline_code_prose_is_not_an_id(self):
        text = (
            "---\nname: a-skill\n---\n"
            "## Related Skills\n"
            "- `m07-concurrency` when values must be `Send` or `Sync`\n"
        )
        skill = _parse(text)
        assert skill.related_ids == ("m07-concurrency",)

    def test_self_reference_dropped(self):
        text = "---\nname: a-skill\nrelated: [a-skill, b-skill]\n---\n"
        skill = _parse(text)
        assert skill.related_ids == ("b-skill",)


class TestSections:
    def test_headings_collected_outside_code_fences(self, ownership_doc):
        skill = _parse(ownership_doc)
        assert "Verification Commands" in skill.sections_present
        assert "Not a heading" not in skill.sections_present

    def test_has_section_ignores_case_and_level(self):
        skill = SkillDefinition(id="x", sections_present=["core question", "Related Skills (see also)"])
        assert skill.has_section("Core Question")
        assert skill.has_section("related skills")
        assert not skill.has_section("Review Checklist")

    def test_has_section_requires_word_boundary(self):
        skill = SkillDefinition(id="x", sections_present=["Core Questions"])
        assert not skill.has_section("Core Question")


class TestTier:
    @pytest.mark.parametrize(
        "header, expected",
        [
            ("tier: expert", Tier.EXPERT),
            ("classification: Advanced", Tier.ADVANCED),
            ("metadata:\n  level: expert", Tier.EXPERT),
            ("tier: legendary", Tier.CORE),
            ("", Tier.CORE),
        ],
    )
    def test_tier_resolution(self, header, expected):
        skill = _parse(f"---\nname: t-skill\n{header}\n---\n")
        assert skill.tier is expected


class TestDescriptionStyle:
    @pytest.mark.parametrize(
        "line, expected",
        [
            ('description: "quoted"', DescriptionStyle.QUOTED),
            ("description: 'single'", DescriptionStyle.QUOTED),
            ("description: |\n  block text", DescriptionStyle.BLOCK),
            ("description: plain text", DescriptionStyle.PLAIN),
            ("description:\n  continued plain", DescriptionStyle.PLAIN),
            ("description:\n  two plain\n  lines", DescriptionStyle.BLOCK),
            ("description: >\n  folded onto one line", DescriptionStyle.PLAIN),
            ("description: >\n  folded over\n  two lines", DescriptionStyle.BLOCK),
            ("", DescriptionStyle.MISSING),
        ],
    )
    def test_style(self, line, expected):
        skill = _parse(f"---\nname: s-skill\n{line}\n---\n")
        assert skill.description_style is expected
