"""Link and quality finding models."""

from typing import Literal

from pydantic import BaseModel


class BrokenLink(BaseModel):
    """A link whose target does not resolve to any document."""

    source: str
    target: str


class PathStyleLink(BaseModel):
    """A resolvable link written as a directory-qualified path."""

    source: str
    target: str
    suggested_name: str


class LinkReport(BaseModel):
    """Connectivity findings across the whole vault."""

    total_links: int = 0
    unique_links: int = 0
    broken_links: list[BrokenLink] = []
    orphan_files: list[str] = []
    structural_orphans: list[str] = []  # orphans under expected-sparse directories
    knowledge_orphans: list[str] = []
    path_style_links: list[PathStyleLink] = []
    connectivity_score: float = 0.0  # 0-1 ratio
    knowledge_connectivity: float = 0.0  # 0-1 ratio, structural files excluded
    links_by_file: dict[str, list[str]] = {}


class DuplicatePair(BaseModel):
    file1: str
    file2: str
    similarity: Literal["exact"] = "exact"


class SelfReview(BaseModel):
    hits: int = 0
    misses: int = 0
    fixes: int = 0


class QualityReport(BaseModel):
    """Per-document content quality findings."""

    stubs: list[str] = []
    oversized: list[str] = []
    isolated_files: list[str] = []  # no outbound wikilinks
    duplicates: list[DuplicatePair] = []
    self_review: SelfReview | None = None


class StaleFile(BaseModel):
    path: str
    days_since_update: int
    category: str
    critical: bool = False  # past staleness.critical_days


class StaleCoreFile(BaseModel):
    path: str
    days_since_update: int


class StalenessReport(BaseModel):
    """How recently the vault was kept up to date."""

    stale_files: list[StaleFile] = []  # most stale first
    stale_core_files: list[StaleCoreFile] = []
    daily_log_gaps: list[str] = []  # ISO dates with no daily log
    daily_log_streak: int = 0  # consecutive days with logs, ending today or yesterday
    last_daily_log: str | None = None
