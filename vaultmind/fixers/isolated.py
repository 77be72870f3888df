"""Repairs for isolated files: turn plain-text mentions of known notes into wikilinks."""

import re
from functools import partial

from vaultmind.domain.document import Document
from vaultmind.domain.findings import QualityReport
from vaultmind.domain.fixes import FixAction
from vaultmind.ingestion.content_extractor import ContentExtractor

MIN_NAME_LENGTH = 3
# Isolated files shorter than this are left alone
MIN_ISOLATED_WORDS = 5

# Spans that must never be turned into links
MASKED_SPANS = [
    re.compile(r"\[\[[^\]]+\]\]"),  # existing wikilinks
    re.compile(r"\[[^\]]*\]\([^)]*\)"),  # markdown links
    re.compile(r"```[\s\S]*?```"),  # fenced code
    re.compile(r"`[^`]+`"),  # inline code
]

BOUNDARY_BEFORE = r"(?<![^\s.,;:!?(\"'])"
BOUNDARY_AFTER = r"(?![^\s.,;:!?)\"'])"


def name_variants(name: str) -> list[str]:
    """Forms a note name may take in running text: lower-case, dashes as spaces, camelCase split."""
    lower = name.lower()
    dashed = re.sub(r"[-_]", " ", lower)
    camel_split = re.sub(r"([a-z])([A-Z])", r"\1 \2", name).lower()
    return [v for v in dict.fromkeys([lower, dashed, camel_split]) if len(v) >= MIN_NAME_LENGTH]


def _mask(content: str) -> str:
    """Blank out front matter, links and code, keeping every offset intact."""
    end = ContentExtractor.frontmatter_end(content)
    text = " " * end + content[end:]
    for pattern in MASKED_SPANS:
        text = pattern.sub(lambda m: " " * len(m.group(0)), text)
    return text


def find_mentions(content: str, name: str) -> list[tuple[int, int]]:
    """Find whole-word mentions of a note name outside links, code and front matter.

    Args:
        content: Markdown content
        name: Note name to look for, in any of its variants

    Returns:
        Sorted (start, end) offsets of every mention
    """
    text = _mask(content)
    mentions = set()
    for variant in name_variants(name):
        pattern = re.compile(BOUNDARY_BEFORE + re.escape(variant) + BOUNDARY_AFTER, re.I)
        mentions.update((m.start(), m.end()) for m in pattern.finditer(text))
    return sorted(mentions)


def link_mentions(content: str, names: list[str]) -> tuple[str, list[str]]:
    """Turn the first mention of each name into a wikilink.

    The original text is kept as an alias when it differs from the note name.

    Returns:
        The new content and the names that were linked
    """
    linked = []
    for name in names:
        mentions = find_mentions(content, name)
        if not mentions:
            continue

        start, end = mentions[0]
        matched = content[start:end]
        if content[max(0, start - 2) : start] == "[[" or content[end : end + 2] == "]]":
            continue

        replacement = f"[[{name}]]" if matched == name else f"[[{name}|{matched}]]"
        content = content[:start] + replacement + content[end:]
        linked.append(name)

    return content, linked


def _relink(content: str, names: list[str]) -> str:
    return link_mentions(content, names)[0]


class IsolatedFixer:
    """Adds outbound links to documents that have none."""

    def fix(self, documents: list[Document], quality_report: QualityReport) -> list[FixAction]:
        isolated_paths = set(quality_report.isolated_files)
        known = [d for d in documents if len(d.name) >= MIN_NAME_LENGTH]

        actions = []
        for document in documents:
            if document.relative_path not in isolated_paths:
                continue
            if document.word_count < MIN_ISOLATED_WORDS:
                continue

            names = [
                d.name
                for d in known
                if d.relative_path != document.relative_path
                and d.name.lower() != document.name.lower()
            ]
            _, linked = link_mentions(document.content, list(dict.fromkeys(names)))
            if not linked:
                continue

            action = FixAction.edit(
                category="isolated",
                description=f"Add wikilinks to isolated file {document.relative_path}: "
                + ", ".join(f"[[{n}]]" for n in linked),
                file_path=document.relative_path,
                original_content=document.content,
                transform=partial(_relink, names=linked),
            )
            if not action.is_noop:
                actions.append(action)

        return actions
