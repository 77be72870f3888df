"""Repairs for broken wikilinks: fuzzy rewrites and stub creation."""

import re
from functools import partial
from pathlib import PurePosixPath

from loguru import logger

from vaultmind.analysis.link_target import parse_link_target
from vaultmind.domain.document import Document, strip_md_extension
from vaultmind.domain.findings import LinkReport
from vaultmind.domain.fixes import FixAction

MATCH_THRESHOLD = 0.4


def levenshtein(a: str, b: str) -> int:
    """Character-level edit distance between two strings."""
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Two rows instead of the full matrix
    prev = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        curr = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            curr.append(min(prev[j] + 1, curr[j - 1] + 1, prev[j - 1] + cost))
        prev = curr

    return prev[-1]


def normalize_name(name: str) -> str:
    """Lowercase, turn dashes and underscores into spaces, collapse whitespace."""
    return " ".join(re.sub(r"[-_]", " ", name.lower()).split())


def find_best_match(
    target: str, names: list[str], threshold: float = MATCH_THRESHOLD
) -> str | None:
    """Find the closest known name for a broken link target.

    An exact match after normalization wins outright. Otherwise the candidate
    with the smallest edit distance is returned, provided its distance relative
    to the longer of the two names is below ``threshold``.

    Args:
        target: The broken link target
        names: Known document names
        threshold: Maximum normalized distance, exclusive

    Returns:
        The matching name, or None if nothing is close enough
    """
    norm_target = normalize_name(target)
    best_match = None
    best_distance = None

    for name in names:
        norm_name = normalize_name(name)
        if norm_name == norm_target:
            return name

        distance = levenshtein(norm_target, norm_name)
        ratio = distance / max(len(norm_target), len(norm_name))
        if ratio < threshold and (best_distance is None or distance < best_distance):
            best_distance = distance
            best_match = name

    return best_match


def rewrite_link(content: str, target: str, replacement: str) -> str:
    """Rewrite every ``[[target]]`` / ``[[target|alias]]`` to point at ``replacement``.

    Aliases are kept; nothing outside the rewritten spans changes.
    """
    pattern = re.compile(r"\[\[\s*" + re.escape(target) + r"\s*(\|[^\]]*)?\]\]")
    return pattern.sub(lambda m: f"[[{replacement}{m.group(1) or ''}]]", content)


def _rewrite_links(content: str, rewrites: dict[str, str]) -> str:
    for target, replacement in rewrites.items():
        content = rewrite_link(content, target, replacement)
    return content


def is_vault_relative(path: str) -> bool:
    """Check that a link path stays below the vault root: not absolute, no drive, no ``..``."""
    parts = PurePosixPath(path.replace("\\", "/")).parts
    return bool(parts) and parts[0] != "/" and ":" not in parts[0] and ".." not in parts


def stub_content(name: str) -> str:
    return f"# {name}\n\nTODO: Add content for {name}.\n"


class BrokenLinkFixer:
    """Proposes a rewrite for each broken link with a close match, else a stub file."""

    def fix(self, documents: list[Document], link_report: LinkReport) -> list[FixAction]:
        names = [d.name for d in documents]
        by_path = {d.relative_path: d for d in documents}
        existing = {path.lower() for path in by_path}

        # Decide once per unique target, so every source is rewritten consistently
        corrections: dict[str, str] = {}
        # Keyed case-insensitively, Foo.md and foo.md are one file on many filesystems
        stubs: dict[str, tuple[str, str]] = {}  # lower-cased path -> (stub path, name)
        for target in dict.fromkeys(bl.target for bl in link_report.broken_links):
            link = parse_link_target(target)
            match = find_best_match(link.short_name, names)
            if match:
                section = f"#{link.section}" if link.section is not None else ""
                corrections[target] = f"{match}{section}"
            elif link.short_name:
                stub_path = f"{strip_md_extension(link.file_part)}.md"
                if not is_vault_relative(stub_path):
                    logger.warning(f"Not creating stub outside the vault: {stub_path}")
                    continue
                stubs.setdefault(stub_path.lower(), (stub_path, link.short_name))

        targets_by_source: dict[str, list[str]] = {}
        for bl in link_report.broken_links:
            targets = targets_by_source.setdefault(bl.source, [])
            if bl.target in corrections and bl.target not in targets:
                targets.append(bl.target)

        actions = []
        for source, targets in targets_by_source.items():
            document = by_path.get(source)
            if document is None or not targets:
                continue

            rewrites = {t: corrections[t] for t in targets}
            action = FixAction.edit(
                category="links",
                description=f"Rewrite broken wikilinks in {source}: "
                + ", ".join(f"[[{t}]] → [[{r}]]" for t, r in rewrites.items()),
                file_path=source,
                original_content=document.content,
                transform=partial(_rewrite_links, rewrites=rewrites),
            )
            if not action.is_noop:
                actions.append(action)

        for key, (stub_path, name) in stubs.items():
            if key in existing:
                continue
            actions.append(
                FixAction(
                    category="links",
                    description=f"Create stub file for broken link target: {name}",
                    file_path=stub_path,
                    create_content=stub_content(name),
                    is_create=True,
                )
            )

        return actions
