import pytest

from prd_kit.observability import InMemoryMetricsHook, names
from prd_kit.parsers.markdown_parser import (
    MarkdownParser,
    detect_sections,
    parse_document,
)
from prd_kit.parsers.models import ParseResult, TaskNode
from prd_kit.parsers.task_tree import iter_task_tree


def _assert_levels_increase(nodes: list[TaskNode]) -> None:
    for node in nodes:
        for child in node.sub_tasks:
            assert child.level > node.level
        _assert_levels_increase(node.sub_tasks)


class TestDetectSections:
    def test_heading_opens_section_with_level_and_title(self) -> None:
        sections = detect_sections("### Checkout Flow\nbody text")

        assert len(sections) == 1
        assert sections[0].title == "Checkout Flow"
        assert sections[0].level == 3
        assert sections[0].content == "body text"

    def test_text_before_first_heading_is_dropped(self) -> None:
        sections = detect_sections("intro line\n\n# A\nbody")

        assert [s.title for s in sections] == ["A"]
        assert sections[0].content == "body"

    def test_content_excludes_nested_headings(self) -> None:
        sections = detect_sections("# A\nalpha\n## B\nbeta")

        assert [(s.title, s.content) for s in sections] == [
            ("A", "alpha"),
            ("B", "beta"),
        ]

    def test_multiline_content_is_joined_and_stripped(self) -> None:
        sections = detect_sections("# A\n\n  line one\nline two\n\n")

        assert sections[0].content == "line one\nline two"

    def test_literal_newline_escapes_are_normalized(self) -> None:
        sections = detect_sections("# A\\nbody\\n## B")

        assert [(s.title, s.level) for s in sections] == [("A", 1), ("B", 2)]
        assert sections[0].content == "body"

    def test_seven_hashes_is_not_a_heading(self) -> None:
        sections = detect_sections("# A\n####### not a heading")

        assert len(sections) == 1
        assert sections[0].content == "####### not a heading"

    def test_hash_without_space_is_not_a_heading(self) -> None:
        assert detect_sections("#hashtag\nmore text") == []

    def test_no_headings_yields_no_sections(self) -> None:
        assert detect_sections("just some text\nwith lines") == []

    @pytest.mark.parametrize("raw", ["", None, 123, ["# A"]])
    def test_invalid_input_yields_no_sections(self, raw: object) -> None:
        assert detect_sections(raw) == []

    def test_section_entities_are_extracted(self) -> None:
        sections = detect_sections("# A\nThe admin configures the database.")

        assert sections[0].entities.actors == ["admin"]
        assert sections[0].entities.systems == ["database"]

    def test_section_ids_are_unique(self) -> None:
        sections = detect_sections("# A\n# A\n## A\n# A")

        assert len({s.id for s in sections}) == 4


class TestParseDocument:
    def test_nested_headings_build_tree(self) -> None:
        result = parse_document("# A\n## B\ntext\n## C\ntext")

        assert len(result.task_tree) == 1
        root = result.task_tree[0]
        assert (root.task_name, root.level) == ("A", 1)
        assert [(c.task_name, c.level) for c in root.sub_tasks] == [
            ("B", 2),
            ("C", 2),
        ]
        assert result.total_task_count == 3
        assert result.level_histogram == {1: 1, 2: 2}

    @pytest.mark.parametrize("raw", ["", None, 123])
    def test_invalid_input_yields_empty_result(self, raw: object) -> None:
        result = parse_document(raw)

        assert result.sections == []
        assert result.task_tree == []
        assert result.total_task_count == 0
        assert result.level_histogram == {}
        assert result.entity_totals.total_actors == 0
        assert result.input_size == 0

    def test_document_without_headings_has_no_tasks(self) -> None:
        result = parse_document("plain prose, no structure at all")

        assert result.sections == []
        assert result.total_task_count == 0

    def test_sample_document_structure(self, sample_prd: str) -> None:
        result = parse_document(sample_prd)

        assert [t.task_name for t in result.task_tree] == [
            "Overview",
            "Authentication Module",
            "Reporting Module",
        ]
        auth = result.task_tree[1]
        assert [t.task_name for t in auth.sub_tasks] == ["Login", "Session Management"]
        assert [t.task_name for t in auth.sub_tasks[0].sub_tasks] == ["Password Reset"]
        assert result.total_task_count == 7
        assert result.level_histogram == {1: 3, 2: 3, 3: 1}
        _assert_levels_increase(result.task_tree)

    def test_total_count_matches_traversal_and_ids_are_unique(
        self, sample_prd: str
    ) -> None:
        result = parse_document(sample_prd)
        nodes = list(iter_task_tree(result.task_tree))

        assert result.total_task_count == len(nodes) == len(result.sections)
        assert len({n.id for n in nodes}) == len(nodes)

    def test_task_ids_match_section_ids(self, sample_prd: str) -> None:
        result = parse_document(sample_prd)

        assert [n.id for n in iter_task_tree(result.task_tree)] == [
            s.id for s in result.sections
        ]

    def test_roots_sit_at_minimum_heading_level(self) -> None:
        result = parse_document("## A\n### B\n## C\n#### D")

        assert [(t.task_name, t.level) for t in result.task_tree] == [
            ("A", 2),
            ("C", 2),
        ]
        assert [t.task_name for t in result.task_tree[1].sub_tasks] == ["D"]

    def test_entity_totals_are_unique_across_tree(self, sample_prd: str) -> None:
        totals = parse_document(sample_prd).entity_totals

        assert totals.unique_actors == ["user", "admin", "developer", "stakeholder"]
        assert totals.unique_systems == ["api", "system", "database", "service"]
        assert totals.unique_features == ["feature"]
        assert totals.total_systems == 4

    def test_input_size_counts_characters(self) -> None:
        assert parse_document("# A\nbody").input_size == 8

    def test_result_is_parse_result(self) -> None:
        assert isinstance(MarkdownParser().parse("# A"), ParseResult)

    def test_metrics_are_recorded(self, sample_prd: str) -> None:
        hook = InMemoryMetricsHook()

        parse_document(sample_prd, metrics_hook=hook)

        assert hook.total(names.PARSE_SECTIONS_DETECTED) == 7
        assert hook.total(names.PARSE_TASKS_BUILT) == 7
        assert len(hook.named(names.PARSE_DURATION)) == 1

    def test_invalid_input_records_no_metrics(self) -> None:
        hook = InMemoryMetricsHook()

        parse_document(None, metrics_hook=hook)

        assert hook.records == []
