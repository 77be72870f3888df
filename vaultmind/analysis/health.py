"""Overall vault health: a score out of 100, a letter grade and actionable issues."""

from loguru import logger

from vaultmind.config import VaultConfig
from vaultmind.domain.findings import LinkReport, QualityReport, StalenessReport
from vaultmind.domain.health import HealthIssue, HealthReport

# Above this many orphans, stubs or isolated files it becomes an issue
ISSUE_COUNT_THRESHOLD = 3
LOW_CONNECTIVITY = 0.5
HIGH_CONNECTIVITY = 0.8
STREAK_BONUS_DAYS = 7

SEVERITY_ORDER = {"critical": 0, "warning": 1, "info": 2}


def calculate_score(
    links: LinkReport, quality: QualityReport, staleness: StalenessReport
) -> int:
    score = 100

    score -= len(staleness.stale_core_files) * 10
    score -= min(len(staleness.stale_files) * 2, 20)
    score -= min(len(staleness.daily_log_gaps) * 3, 15)

    score -= len(links.broken_links) * 5
    score -= min(len(links.orphan_files) * 2, 15)
    if links.connectivity_score < LOW_CONNECTIVITY:
        score -= 10

    score -= min(len(quality.stubs) * 2, 10)
    score -= min(len(quality.oversized) * 3, 10)
    score -= len(quality.duplicates) * 5

    if staleness.daily_log_streak >= STREAK_BONUS_DAYS:
        score += 5
    if links.connectivity_score >= HIGH_CONNECTIVITY:
        score += 5
    if quality.self_review and quality.self_review.hits > quality.self_review.misses:
        score += 5

    return max(0, min(100, score))


def score_to_grade(score: int) -> str:
    if score >= 90:
        return "A"
    if score >= 80:
        return "B"
    if score >= 70:
        return "C"
    if score >= 60:
        return "D"
    return "F"


class HealthGrader:
    """Condenses the audit findings into a grade and a prioritised issue list."""

    def __init__(self, config: VaultConfig | None = None):
        self.config = config or VaultConfig()

    def grade(
        self, links: LinkReport, quality: QualityReport, staleness: StalenessReport
    ) -> HealthReport:
        """Grade a vault from its findings.

        Args:
            links: Connectivity findings
            quality: Quality findings
            staleness: Staleness findings

        Returns:
            HealthReport with issues ordered critical, warning, info
        """
        score = calculate_score(links, quality, staleness)
        grade = score_to_grade(score)
        issues = self._collect_issues(links, quality, staleness)

        top_issues = "; ".join(issue.message for issue in issues[:3])
        summary = (
            f"Vault health: {grade} ({score}/100). {len(issues)} issue(s). "
            f"{top_issues or 'Looking good!'}"
        )

        logger.info(summary)
        return HealthReport(grade=grade, score=score, issues=issues, summary=summary)

    def _collect_issues(
        self, links: LinkReport, quality: QualityReport, staleness: StalenessReport
    ) -> list[HealthIssue]:
        issues = []

        for core in staleness.stale_core_files:
            issues.append(
                HealthIssue(
                    severity="critical",
                    message=f"Core file {core.path} hasn't been updated in "
                    f"{core.days_since_update} days",
                    fix=f"Review and update {core.path} to reflect current state",
                )
            )

        if links.broken_links:
            targets = ", ".join(link.target for link in links.broken_links[:3])
            issues.append(
                HealthIssue(
                    severity="critical",
                    message=f"{len(links.broken_links)} broken wikilink(s) found",
                    fix=f"Create missing files or fix link targets: {targets}",
                )
            )

        if quality.duplicates:
            duplicates = ", ".join(pair.file2 for pair in quality.duplicates)
            issues.append(
                HealthIssue(
                    severity="warning",
                    message=f"{len(quality.duplicates)} duplicate file(s) detected",
                    fix=f"Review and consolidate: {duplicates}",
                )
            )

        if staleness.daily_log_gaps:
            issues.append(
                HealthIssue(
                    severity="warning",
                    message=f"{len(staleness.daily_log_gaps)} gap(s) in daily logs",
                    fix="Ensure daily logs are written consistently",
                )
            )

        if len(links.orphan_files) > ISSUE_COUNT_THRESHOLD:
            issues.append(
                HealthIssue(
                    severity="warning",
                    message=f"{len(links.orphan_files)} orphan files not linked from anywhere",
                    fix="Add wikilinks to orphan files from relevant documents",
                )
            )

        if len(quality.stubs) > ISSUE_COUNT_THRESHOLD:
            issues.append(
                HealthIssue(
                    severity="info",
                    message=f"{len(quality.stubs)} stub files with "
                    f"<{self.config.quality.min_words} words",
                    fix="Flesh out stub files with more content or remove if unnecessary",
                )
            )

        if len(quality.isolated_files) > ISSUE_COUNT_THRESHOLD:
            issues.append(
                HealthIssue(
                    severity="info",
                    message=f"{len(quality.isolated_files)} files contain no wikilinks",
                    fix="Add cross-references to connect isolated knowledge",
                )
            )

        if links.connectivity_score < LOW_CONNECTIVITY:
            issues.append(
                HealthIssue(
                    severity="warning",
                    message=f"Low connectivity score: {links.connectivity_score:.0%}",
                    fix="Increase cross-linking between files to improve knowledge navigation",
                )
            )

        # sorted() is stable, so issues of one severity keep the order above
        return sorted(issues, key=lambda issue: SEVERITY_ORDER[issue.severity])
