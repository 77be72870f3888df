"""Staleness checks: files left untouched, stale core files and daily log continuity."""

import re
from datetime import date, datetime, timedelta, timezone
from pathlib import PurePosixPath

from loguru import logger

from vaultmind.config import VaultConfig
from vaultmind.domain.document import Document
from vaultmind.domain.findings import StaleCoreFile, StaleFile, StalenessReport

from vaultmind.analysis.graph_builder import categorize_document

DAILY_LOG_DATE = re.compile(r"^memory/(\d{4}-\d{2}-\d{2})\.md$")
SECONDS_PER_DAY = 24 * 60 * 60


def days_since(timestamp: float, now: datetime) -> int:
    """Whole days elapsed between a timestamp and ``now``."""
    return int((now.timestamp() - timestamp) // SECONDS_PER_DAY)


def find_daily_log_gaps(dates: list[date]) -> list[str]:
    """List every date missing between consecutive daily logs.

    Args:
        dates: Daily log dates, sorted ascending

    Returns:
        Missing dates in ISO format, in order
    """
    gaps = []
    for previous, current in zip(dates, dates[1:]):
        missing = previous + timedelta(days=1)
        while missing < current:
            gaps.append(missing.isoformat())
            missing += timedelta(days=1)
    return gaps


def daily_log_streak(dates: list[date], today: date) -> int:
    """Count consecutive days with a log, ending at the last log.

    A streak only counts while the last log is from today or yesterday.
    """
    if not dates or (today - dates[-1]).days > 1:
        return 0

    streak = 1
    for i in range(len(dates) - 1, 0, -1):
        if (dates[i] - dates[i - 1]).days != 1:
            break
        streak += 1
    return streak


class StalenessAnalyzer:
    def __init__(self, config: VaultConfig | None = None):
        self.config = config or VaultConfig()

    def analyze(self, documents: list[Document], now: datetime | None = None) -> StalenessReport:
        """Find stale files and daily log gaps.

        Args:
            documents: Scanned documents, in scan order
            now: Reference time, defaults to the current UTC time

        Returns:
            StalenessReport with stale files sorted most stale first
        """
        now = now or datetime.now(timezone.utc)
        thresholds = self.config.staleness

        stale_files = []
        stale_core_files = []
        log_dates = []

        for document in documents:
            days = days_since(document.modified, now)

            if days >= thresholds.warning_days:
                stale_files.append(
                    StaleFile(
                        path=document.relative_path,
                        days_since_update=days,
                        category=categorize_document(document.relative_path),
                        critical=days >= thresholds.critical_days,
                    )
                )

            basename = PurePosixPath(document.relative_path).name
            if basename in self.config.core_files and days >= thresholds.core_file_critical_days:
                stale_core_files.append(
                    StaleCoreFile(path=document.relative_path, days_since_update=days)
                )

            match = DAILY_LOG_DATE.match(document.relative_path)
            if match:
                try:
                    log_dates.append(date.fromisoformat(match.group(1)))
                except ValueError:
                    logger.warning(
                        f"Ignoring daily log with an invalid date: {document.relative_path}"
                    )

        # sort() is stable, so equally stale files keep scan order
        stale_files.sort(key=lambda f: f.days_since_update, reverse=True)
        log_dates.sort()

        report = StalenessReport(
            stale_files=stale_files,
            stale_core_files=stale_core_files,
            daily_log_gaps=find_daily_log_gaps(log_dates),
            daily_log_streak=daily_log_streak(log_dates, now.astimezone(timezone.utc).date()),
            last_daily_log=log_dates[-1].isoformat() if log_dates else None,
        )

        logger.info(
            f"Staleness: {len(stale_files)} stale files, {len(stale_core_files)} stale core files, "
            f"{len(report.daily_log_gaps)} daily log gaps"
        )
        return report
