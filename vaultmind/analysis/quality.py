"""Content quality checks: stubs, oversized files, isolated files and duplicates."""

import re
from hashlib import md5

from loguru import logger

from vaultmind.config import VaultConfig
from vaultmind.domain.document import Document
from vaultmind.domain.findings import DuplicatePair, QualityReport, SelfReview
from vaultmind.ingestion.content_extractor import ContentExtractor

SELF_REVIEW_PATH = "memory/self-review.md"

# Files shorter than this are too thin to compare for duplication
MIN_DUPLICATE_WORDS = 10


def content_hash(content: str) -> str:
    """Hash the body of a note, ignoring front matter, case and whitespace."""
    text = ContentExtractor.strip_frontmatter(content)
    text = re.sub(r"\s+", " ", text.lower()).strip()
    return md5(text.encode()).hexdigest()


def parse_self_review(content: str) -> SelfReview | None:
    """Count HIT / MISS / FIX markers in a self-review log."""
    hits = len(re.findall(r"\bHIT\b", content, re.IGNORECASE))
    misses = len(re.findall(r"\bMISS\b", content, re.IGNORECASE))
    fixes = len(re.findall(r"\bFIX\b", content, re.IGNORECASE))

    if not (hits or misses or fixes):
        return None
    return SelfReview(hits=hits, misses=misses, fixes=fixes)


class QualityAnalyzer:
    def __init__(self, config: VaultConfig | None = None):
        self.config = config or VaultConfig()

    def analyze(self, documents: list[Document]) -> QualityReport:
        stubs = []
        oversized = []
        isolated_files = []
        duplicates = []
        self_review = None
        hashes: dict[str, str] = {}  # hash -> first file with that body

        for document in documents:
            if document.word_count < self.config.quality.min_words:
                stubs.append(document.relative_path)
            if document.word_count > self.config.quality.max_words:
                oversized.append(document.relative_path)
            if not document.wikilinks:
                isolated_files.append(document.relative_path)

            if document.relative_path == SELF_REVIEW_PATH:
                self_review = parse_self_review(document.content)

            if document.word_count >= MIN_DUPLICATE_WORDS:
                digest = content_hash(document.content)
                if digest in hashes:
                    duplicates.append(
                        DuplicatePair(file1=hashes[digest], file2=document.relative_path)
                    )
                else:
                    hashes[digest] = document.relative_path

        logger.info(
            f"Quality: {len(stubs)} stubs, {len(oversized)} oversized, "
            f"{len(isolated_files)} isolated, {len(duplicates)} duplicates"
        )
        return QualityReport(
            stubs=stubs,
            oversized=oversized,
            isolated_files=isolated_files,
            duplicates=duplicates,
            self_review=self_review,
        )
