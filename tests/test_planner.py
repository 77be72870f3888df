"""Tests for combining repair strategies into a fix plan."""

from typing import Callable

from tests.fakes import make_document
from vaultmind.domain.document import Document
from vaultmind.domain.findings import BrokenLink, LinkReport, QualityReport
from vaultmind.domain.fixes import FixAction, FixCategory
from vaultmind.fixers.planner import RepairPlanner, merge_actions


def _edit(
    file_path: str,
    content: str,
    transform: Callable[[str], str],
    category: FixCategory = "links",
    description: str = "edit",
) -> FixAction:
    return FixAction.edit(
        category=category,
        description=description,
        file_path=file_path,
        original_content=content,
        transform=transform,
    )


def test_merge_replays_edits_of_the_same_file() -> None:
    """Later edits see the content produced by earlier ones."""
    first = _edit("A.md", "one two", lambda c: c.replace("one", "1"), description="first")
    second = _edit("A.md", "one two", lambda c: c + " three", "orphans", "second")
    create = FixAction(
        category="links",
        description="stub",
        file_path="B.md",
        create_content="# B\n",
        is_create=True,
    )

    merged = merge_actions([create, first, second])

    assert len(merged) == 2
    assert merged[0].file_path == "A.md"
    assert merged[0].category == "links"
    assert merged[0].original_content == "one two"
    assert merged[0].new_content == "1 two three"
    assert merged[0].description == "first; second"
    assert merged[1] is create


def test_merge_keeps_single_edits_as_is() -> None:
    only = _edit("A.md", "abc", lambda c: c.upper())

    assert merge_actions([only]) == [only]


def test_merge_drops_edits_that_cancel_out() -> None:
    add = _edit("A.md", "abc", lambda c: c + "!")
    remove = _edit("A.md", "abc", lambda c: c.removesuffix("!"))

    assert merge_actions([add, remove]) == []


def test_creations_are_never_merged() -> None:
    creates = [
        FixAction(category="links", description=f"stub {n}", file_path="X.md", is_create=True)
        for n in range(2)
    ]

    assert merge_actions(creates) == creates


def _broken_link_vault() -> tuple[list[Document], LinkReport]:
    documents = [
        make_document("Alice.md", content="# Alice\n\nFriend."),
        make_document(
            "Notes.md", content="Met [[Allice]] today, see [[Allice|her]] and [[Ghost]]."
        ),
    ]
    report = LinkReport(
        broken_links=[
            BrokenLink(source="Notes.md", target="Allice"),
            BrokenLink(source="Notes.md", target="Allice"),
            BrokenLink(source="Notes.md", target="Ghost"),
        ],
    )
    return documents, report


def test_plan_rewrites_typos_and_creates_stubs() -> None:
    documents, link_report = _broken_link_vault()

    plan = RepairPlanner().plan(documents, link_report, QualityReport())

    assert [a.file_path for a in plan.actions] == ["Notes.md", "Ghost.md"]
    edit, create = plan.actions
    assert edit.new_content == "Met [[Alice]] today, see [[Alice|her]] and [[Ghost]]."
    assert create.is_create
    assert create.create_content == "# Ghost\n\nTODO: Add content for Ghost.\n"

    summary = plan.summary
    assert summary.total_fixes == 2
    assert summary.link_fixes == 2
    assert summary.orphan_fixes == 0
    assert summary.isolated_fixes == 0
    assert summary.files_to_modify == 1
    assert summary.files_to_create == 1


def test_plan_only_one_category() -> None:
    documents, link_report = _broken_link_vault()

    plan = RepairPlanner().plan(documents, link_report, QualityReport(), only="orphans")

    assert plan.actions == []
    assert plan.summary.total_fixes == 0
