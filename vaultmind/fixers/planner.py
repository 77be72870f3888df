"""Combining the repair strategies into one coherent fix plan."""

from loguru import logger

from vaultmind.domain.document import Document
from vaultmind.domain.findings import LinkReport, QualityReport
from vaultmind.domain.fixes import FixAction, FixCategory, FixPlan, FixSummary

from .isolated import IsolatedFixer
from .links import BrokenLinkFixer
from .orphans import OrphanFixer


def merge_actions(actions: list[FixAction]) -> list[FixAction]:
    """Merge edits of the same file into one action.

    Each file's edits are replayed in generation order on the evolving content,
    and their descriptions joined. Creations are never merged and come last.
    Merged edits that end up changing nothing are dropped.
    """
    edits_by_file: dict[str, list[FixAction]] = {}
    creates = []
    for action in actions:
        if action.is_create:
            creates.append(action)
        else:
            edits_by_file.setdefault(action.file_path, []).append(action)

    merged = []
    for file_path, edits in edits_by_file.items():
        if len(edits) == 1:
            merged.append(edits[0])
            continue

        original = edits[0].original_content or ""
        content = original
        for edit in edits:
            content = edit.apply_to(content)

        merged.append(
            FixAction(
                category=edits[0].category,
                description="; ".join(edit.description for edit in edits),
                file_path=file_path,
                original_content=original,
                new_content=content,
            )
        )

    return [action for action in merged if not action.is_noop] + creates


def summarize(actions: list[FixAction]) -> FixSummary:
    return FixSummary(
        total_fixes=len(actions),
        link_fixes=sum(1 for a in actions if a.category == "links"),
        orphan_fixes=sum(1 for a in actions if a.category == "orphans"),
        isolated_fixes=sum(1 for a in actions if a.category == "isolated"),
        files_to_modify=sum(1 for a in actions if not a.is_create),
        files_to_create=sum(1 for a in actions if a.is_create),
    )


class RepairPlanner:
    """Runs the broken link, orphan and isolated file strategies and merges their actions."""

    def __init__(self):
        self.link_fixer = BrokenLinkFixer()
        self.orphan_fixer = OrphanFixer()
        self.isolated_fixer = IsolatedFixer()

    def plan(
        self,
        documents: list[Document],
        link_report: LinkReport,
        quality_report: QualityReport,
        only: FixCategory | None = None,
    ) -> FixPlan:
        """Generate a fix plan.

        Args:
            documents: Scanned documents the findings were computed from
            link_report: Connectivity findings
            quality_report: Quality findings, for the isolated files
            only: Restrict the plan to one category

        Returns:
            FixPlan whose summary counts the merged actions
        """
        actions: list[FixAction] = []
        if only in (None, "links"):
            actions.extend(self.link_fixer.fix(documents, link_report))
        if only in (None, "orphans"):
            actions.extend(self.orphan_fixer.fix(documents, link_report))
        if only in (None, "isolated"):
            actions.extend(self.isolated_fixer.fix(documents, quality_report))

        actions = merge_actions(actions)
        summary = summarize(actions)

        logger.info(
            f"Planned {summary.total_fixes} fixes: {summary.files_to_modify} edits, "
            f"{summary.files_to_create} new files"
        )
        return FixPlan(actions=actions, summary=summary)
