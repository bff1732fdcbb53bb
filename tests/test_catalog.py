from __future__ import annotations

from datetime import UTC, datetime

import allure
import pytest

from ux_processes.catalog.docblock import (
    DocField,
    category_for,
    extract_braced,
    parse_docblock,
    split_top_level,
)
from ux_processes.catalog.indexer import CatalogEntry, build_entries
from ux_processes.catalog.repository import CatalogRepository
from ux_processes.processes import list_processes

pytestmark = [
    allure.epic("Process Catalog"),
    allure.feature("Docstring Indexing"),
]

_DOCSTRING = """Sample process.

@process specializations/ux-ui-design/sample
@description Sample Process - spans
   two lines of text.
@inputs { projectName: string, options?: { depth: number, tags: array },
  scope?: array }
@outputs { success: boolean }
"""


def test_parse_docblock_extracts_tags_and_fields() -> None:
    docblock = parse_docblock(_DOCSTRING)

    assert docblock is not None
    assert docblock.process_id == "specializations/ux-ui-design/sample"
    assert docblock.description == "Sample Process - spans two lines of text."
    assert docblock.inputs == (
        "{ projectName: string, options?: { depth: number, tags: array }, scope?: array }"
    )
    assert docblock.outputs == "{ success: boolean }"
    assert docblock.input_fields == [
        DocField(name="projectName", type="string", required=True),
        DocField(name="options", type="{ depth: number, tags: array }", required=False),
        DocField(name="scope", type="array", required=False),
    ]
    assert docblock.output_fields == [DocField(name="success", type="boolean")]


def test_parse_docblock_without_process_tag_returns_none() -> None:
    assert parse_docblock("Just a module.\n\n@description nothing here") is None


def test_parse_docblock_falls_back_to_first_line_for_description() -> None:
    docblock = parse_docblock("Short summary.\n\n@process a/b\n")

    assert docblock is not None
    assert docblock.description == "Short summary."
    assert docblock.inputs is None


def test_extract_braced_requires_brace_right_after_tag() -> None:
    assert extract_braced("@inputs none {a: b}", "@inputs") is None
    assert extract_braced("@inputs {a: {b: c}", "@inputs") is None
    assert split_top_level("a, b(c, d), [e, f]") == ["a", "b(c, d)", "[e, f]"]


@pytest.mark.parametrize(
    ("process_id", "category"),
    [
        ("specializations/ux-ui-design/component-library", "ux-ui-design"),
        ("ux-ui-design/ux-writing", "ux-ui-design"),
        ("standalone", "general"),
    ],
)
def test_category_for(process_id: str, category: str) -> None:
    assert category_for(process_id) == category


def test_build_entries_covers_every_registered_process() -> None:
    entries = build_entries(list_processes())

    assert [entry.process_id for entry in entries] == [
        entry.process_id for entry in list_processes()
    ]
    by_id = {entry.process_id: entry for entry in entries}
    writing = by_id["ux-ui-design/ux-writing"]
    assert writing.description.startswith("UX Writing and Microcopy Guidelines")
    assert writing.category == "ux-ui-design"
    assert "content-audit" in writing.tasks
    assert writing.inputs is not None
    assert writing.inputs.startswith("{ projectName: string")


def test_repository_index_search_and_reindex(tmp_path) -> None:
    indexed_at = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
    with CatalogRepository(tmp_path / "nested" / "catalog.db") as repository:
        repository.init_schema()
        assert repository.last_indexed_at() is None

        count = repository.index_processes(build_entries(list_processes()), indexed_at=indexed_at)

        assert count == 5
        assert repository.list_categories() == [("ux-ui-design", 5)]
        assert repository.last_indexed_at() == indexed_at

        matches = repository.search("PERSONA")
        assert [entry.process_id for entry in matches] == [
            "specializations/ux-ui-design/persona-development",
            "ux-ui-design/user-research",
        ]
        assert matches[0].indexed_at == indexed_at
        assert "persona-validation" in matches[0].tasks

        assert len(repository.search("ux-ui-design", limit=2)) == 2
        assert repository.search("persona", category="other") == []
        assert repository.search("no-such-thing") == []

        stored = repository.get("ux-ui-design/ux-writing")
        assert stored is not None
        assert stored.module == "ux_processes.processes.ux_writing"
        assert repository.get("missing") is None

        repository.index_processes(
            [
                CatalogEntry(
                    process_id="general-only",
                    description="Replacement",
                    category="general",
                    module="tests",
                    tasks=["one"],
                ),
            ],
        )
        assert repository.list_categories() == [("general", 1)]
        assert repository.get("ux-ui-design/ux-writing") is None


def test_repository_rejects_non_positive_limit(tmp_path) -> None:
    with CatalogRepository(tmp_path / "catalog.db") as repository:
        repository.init_schema()
        with pytest.raises(ValueError, match="limit"):
            repository.search("x", limit=0)


def test_search_treats_like_wildcards_literally(tmp_path) -> None:
    with CatalogRepository(tmp_path / "catalog.db") as repository:
        repository.init_schema()
        repository.index_processes(
            [
                *build_entries(list_processes()),
                CatalogEntry(
                    process_id="general/coverage",
                    description="Reach 100% coverage_report targets",
                    category="general",
                    module="tests",
                ),
            ],
        )

        assert [entry.process_id for entry in repository.search("_")] == ["general/coverage"]
        assert [entry.process_id for entry in repository.search("0% c")] == ["general/coverage"]
        assert repository.search("%") == [repository.get("general/coverage")]
        assert repository.search("ux_ui") == []
        assert repository.search("\\") == []
        assert len(repository.search("ux-ui")) == 5
