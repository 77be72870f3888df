"""Repairs for orphan files: link them from the documents they relate to most."""

import re
from functools import partial

from loguru import logger

from vaultmind.analysis.link_target import parse_link_target
from vaultmind.domain.document import Document
from vaultmind.domain.findings import LinkReport
from vaultmind.domain.fixes import FixAction
from vaultmind.ingestion.content_extractor import ContentExtractor

# Orphans shorter than this carry too little text to match on
MIN_ORPHAN_WORDS = 10
MIN_SCORE = 2
MAX_CANDIDATES = 2

NAME_SCORE = 10
NORMALIZED_NAME_SCORE = 8
KEYWORD_SCORE = 5

STOP_WORDS = frozenset(
    """
    this that with from have been will would could should their there here when what
    which about into through during before after above below between some most other
    than then just also more very much such each every both many like over only make
    made does done being these those them they were your file files link links note
    notes page content
    """.split()
)

SEE_ALSO_HEADER = re.compile(
    r"^(#{1,2}\s+(?:See\s+also|Related|References))[ \t]*(?=\r?$)", re.M | re.I
)
NOTES_HEADER = re.compile(r"^(#{1,2}\s+Notes)[ \t]*(?=\r?$)", re.M | re.I)
NEXT_SECTION = re.compile(r"\r?\n#{1,2}\s+")


def extract_keywords(content: str) -> list[str]:
    """Extract distinct meaningful words from markdown content.

    Front matter, heading markers, link syntax, formatting and punctuation are
    stripped; stop words and words of three letters or fewer are dropped.
    """
    text = ContentExtractor.strip_frontmatter(content)
    text = re.sub(r"^#+\s+", "", text, flags=re.M)
    text = re.sub(r"\[\[([^\]|]+)(?:\|[^\]]+)?\]\]", r"\1", text)
    text = re.sub(r"\[([^\]]*)\]\([^)]*\)", r"\1", text)
    text = re.sub(r"[*_`~]", "", text)
    text = re.sub(r"[-–—]", " ", text)

    words = (re.sub(r"[^a-zA-Z0-9]", "", w).lower() for w in text.split())
    return list(dict.fromkeys(w for w in words if len(w) > 3 and w not in STOP_WORDS))


def links_to(content: str, name: str) -> bool:
    """Check whether content already has a wikilink to ``name``."""
    name = name.lower()
    return any(
        parse_link_target(link).short_name.lower() == name
        for link in ContentExtractor.extract_wikilinks(content)
    )


def _newline(content: str) -> str:
    return "\r\n" if "\r\n" in content else "\n"


def _insert_into_section(content: str, header: re.Match[str], line: str) -> str:
    nl = _newline(content)
    after_header = header.end()
    next_section = NEXT_SECTION.search(content, after_header)
    if next_section is None:
        return content.rstrip() + f"{nl}{line}{nl}"

    body = content[after_header : next_section.start()]
    insert_point = after_header + len(body.rstrip())
    return content[:insert_point] + f"{nl}{line}" + content[insert_point:]


def insert_wikilink(content: str, target_name: str) -> str:
    """Insert a wikilink to ``target_name`` where a reader would expect it.

    Goes into an existing "See also" / "Related" / "References" section, then a
    "Notes" section; otherwise a new "See also" section is appended. Content
    that already links to the target is returned unchanged.
    """
    if links_to(content, target_name):
        return content

    link = f"[[{target_name}]]"

    header = SEE_ALSO_HEADER.search(content)
    if header:
        return _insert_into_section(content, header, f"- {link}")

    header = NOTES_HEADER.search(content)
    if header:
        return _insert_into_section(content, header, f"- See also: {link}")

    nl = _newline(content)
    return content.rstrip() + f"{nl}{nl}## See also{nl}{nl}- {link}{nl}"


def score_candidate(orphan_name: str, orphan_keywords: list[str], candidate: Document) -> float:
    """Score how strongly a candidate document relates to an orphan.

    A literal mention of the orphan's name counts most, a mention with dashes
    and underscores read as spaces next, and the share of the orphan's keywords
    found in the candidate least.
    """
    name = orphan_name.lower()
    candidate_content = candidate.content.lower()
    score = 0.0

    if name in candidate_content:
        score += NAME_SCORE

    normalized = re.sub(r"[-_]", " ", name)
    if normalized != name and normalized in candidate_content:
        score += NORMALIZED_NAME_SCORE

    if orphan_keywords:
        candidate_keywords = set(extract_keywords(candidate.content))
        matches = sum(1 for kw in orphan_keywords if kw in candidate_keywords)
        score += matches / len(orphan_keywords) * KEYWORD_SCORE

    return score


class OrphanFixer:
    """Links orphan documents from the best-matching connected documents."""

    def fix(self, documents: list[Document], link_report: LinkReport) -> list[FixAction]:
        orphan_paths = set(link_report.orphan_files)
        orphans = [
            d
            for d in documents
            if d.relative_path in orphan_paths and d.word_count >= MIN_ORPHAN_WORDS
        ]
        non_orphans = [d for d in documents if d.relative_path not in orphan_paths]

        actions = []
        for orphan in orphans:
            keywords = extract_keywords(orphan.content)
            if not keywords:
                continue

            candidates = []
            for candidate in non_orphans:
                if links_to(candidate.content, orphan.name):
                    continue
                score = score_candidate(orphan.name, keywords, candidate)
                if score > MIN_SCORE:
                    candidates.append((candidate, score))

            candidates.sort(key=lambda item: item[1], reverse=True)
            for candidate, score in candidates[:MAX_CANDIDATES]:
                logger.debug(
                    f"Orphan {orphan.relative_path} -> {candidate.relative_path} ({score:.1f})"
                )
                action = FixAction.edit(
                    category="orphans",
                    description=(
                        f"Add link to orphan [[{orphan.name}]] from {candidate.relative_path}"
                    ),
                    file_path=candidate.relative_path,
                    original_content=candidate.content,
                    transform=partial(insert_wikilink, target_name=orphan.name),
                )
                if not action.is_noop:
                    actions.append(action)

        return actions
