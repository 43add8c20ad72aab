"""Tests for the skill registry and catalog."""
import pytest

from skillroute.skills.models import Catalog, IssueKind, RawDocument, SkillDefinition
from skillroute.skills.registry import SkillRegistry, load
from skillroute.utils.exceptions import DuplicateIDError, ParseError


def _doc(hint: str, name: str | None, description: str = "x") -> RawDocument:
    if name is None:
        return RawDocument(identifier_hint=hint, raw_text="no header at all\n")
    return RawDocument(
        identifier_hint=hint,
        raw_text=f"---\nname: {name}\ndescription: \"{description}\"\n---\n# {name}\n",
    )


class TestSkillRegistry:
    def test_load(self, sample_result):
        catalog = sample_result.catalog
        assert len(catalog) == 3
        assert list(catalog) == ["m01-ownership", "m07-concurrency", "unsafe-checker"]

    def test_dangling_reference_is_warning(self, sample_result):
        dangling = [i for i in sample_result.issues if i.kind is IssueKind.DANGLING_REFERENCE]
        assert len(dangling) == 1
        assert dangling[0].skill_id == "m01-ownership"
        assert dangling[0].related_id == "m06-error-handling"
        assert not dangling[0].is_fatal
        assert sample_result.errors == []

    def test_duplicate_id_keeps_first(self):
        result = load([
            _doc("first", "rust-error", description="first one"),
            _doc("second", "rust-error", description="second one"),
        ])
        assert len(result.catalog) == 1
        assert result.catalog["rust-error"].description == "first one"
        duplicates = [i for i in result.issues if i.kind is IssueKind.DUPLICATE_ID]
        assert len(duplicates) == 1
        assert duplicates[0].document == "second"
        assert duplicates[0].position == 1

    def test_load_isolation(self):
        docs = [_doc(f"d{i}", f"skill-{i}") for i in range(4)]
        docs.insert(2, _doc("bad", None))
        result = load(docs)
        assert len(result.catalog) == 4
        assert [i.kind for i in result.issues] == [IssueKind.PARSE_ERROR]
        assert result.issues[0].document == "bad"
        assert result.issues[0].position == 2

    def test_issue_order_follows_input(self):
        result = SkillRegistry(max_workers=8).load([
            _doc("bad-1", None),
            _doc("a", "alpha"),
            _doc("a-again", "alpha"),
            _doc("bad-2", None),
        ])
        assert [i.document for i in result.issues] == ["bad-1", "a-again", "bad-2"]

    def test_parallel_and_serial_load_agree(self, sample_documents):
        serial = SkillRegistry(max_workers=1).load(sample_documents)
        parallel = SkillRegistry(max_workers=4).load(sample_documents)
        assert serial.catalog == parallel.catalog
        assert serial.issues == parallel.issues

    def test_load_empty_batch(self):
        result = load([])
        assert len(result.catalog) == 0
        assert result.issues == ()

    def test_load_directory(self, skills_dir):
        result = SkillRegistry().load_directory(skills_dir)
        assert "unsafe-checker" in result.catalog

    def test_raise_for_issues(self):
        result = load([_doc("a", "alpha"), _doc("b", "alpha")])
        with pytest.raises(DuplicateIDError):
            result.raise_for_issues()

    def test_raise_for_issues_parse_error(self):
        result = load([_doc("a", None)])
        with pytest.raises(ParseError):
            result.raise_for_issues()
        result.raise_for_issues(duplicates_only=True)


class TestCatalog:
    def test_iterates_in_id_order(self):
        catalog = Catalog([SkillDefinition(id="b"), SkillDefinition(id="a")])
        assert list(catalog) == ["a", "b"]
        assert catalog.index_of("b") == 1
        assert catalog.at(0).id == "a"

    def test_rejects_duplicate_ids(self):
        with pytest.raises(ValueError):
            Catalog([SkillDefinition(id="a"), SkillDefinition(id="a")])

    def test_is_read_only(self):
        catalog = Catalog([SkillDefinition(id="a")])
        with pytest.raises(TypeError):
            catalog["b"] = SkillDefinition(id="b")  # type: ignore[index]

    def test_definitions_are_frozen(self):
        skill = SkillDefinition(id="a")
        with pytest.raises(Exception):
            skill.id = "b"  # type: ignore[misc]
