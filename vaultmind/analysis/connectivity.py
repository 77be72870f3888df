"""Broken link and orphan classification."""

from collections import defaultdict

from loguru import logger

from vaultmind.config import VaultConfig
from vaultmind.domain.document import Document, note_name
from vaultmind.domain.findings import BrokenLink, LinkReport, PathStyleLink

from .index import VaultIndex
from .link_target import parse_link_target
from .resolver import FilesystemProbe, ReferenceResolver


def is_structural_path(relative_path: str, structural_dirs: list[str]) -> bool:
    """Check if a file lives in a directory expected to be sparsely linked."""
    normalized = relative_path.replace("\\", "/")
    return any(normalized.startswith(d.replace("\\", "/")) for d in structural_dirs)


def _ratio(part: int, whole: int) -> float:
    return part / whole if whole > 0 else 0.0


class ConnectivityClassifier:
    """Aggregates link resolution across a vault into broken link and orphan findings."""

    def __init__(self, config: VaultConfig | None = None, probe: FilesystemProbe | None = None):
        """Initialize the classifier.

        Args:
            config: Vault configuration, used for the structural directories
            probe: Optional filesystem probe handed to the resolver
        """
        self.config = config or VaultConfig()
        self.probe = probe

    def classify(self, documents: list[Document], index: VaultIndex | None = None) -> LinkReport:
        """Classify every link and document of a vault snapshot.

        Args:
            documents: Scanned documents, in scan order
            index: Lookup tables for the snapshot, built if not given

        Returns:
            LinkReport with broken links, orphans and connectivity ratios
        """
        index = index or VaultIndex.build(documents)
        resolver = ReferenceResolver(index, self.probe)

        all_links: list[str] = []
        broken_links: list[BrokenLink] = []
        path_style_links: list[PathStyleLink] = []

        for document in documents:
            for link in document.wikilinks:
                all_links.append(link)
                resolution = resolver.resolve(link)
                if not resolution.valid:
                    broken_links.append(BrokenLink(source=document.relative_path, target=link))
                elif resolution.path_style and resolution.suggested_name:
                    path_style_links.append(
                        PathStyleLink(
                            source=document.relative_path,
                            target=link,
                            suggested_name=resolution.suggested_name,
                        )
                    )

        linked_by = self._build_linked_targets(documents)

        orphan_files = []
        structural_orphans = []
        knowledge_orphans = []
        for document in documents:
            sources = linked_by.get(document.name.lower(), set()) | linked_by.get(
                document.relative_path_no_ext.lower(), set()
            )
            if sources - {document.relative_path}:
                continue

            orphan_files.append(document.relative_path)
            if is_structural_path(document.relative_path, self.config.structural_dirs):
                structural_orphans.append(document.relative_path)
            else:
                knowledge_orphans.append(document.relative_path)

        knowledge_files = [
            d
            for d in documents
            if not is_structural_path(d.relative_path, self.config.structural_dirs)
        ]

        report = LinkReport(
            total_links=len(all_links),
            unique_links=len(set(all_links)),
            broken_links=broken_links,
            orphan_files=orphan_files,
            structural_orphans=structural_orphans,
            knowledge_orphans=knowledge_orphans,
            path_style_links=path_style_links,
            connectivity_score=_ratio(len(documents) - len(orphan_files), len(documents)),
            knowledge_connectivity=_ratio(
                len(knowledge_files) - len(knowledge_orphans), len(knowledge_files)
            ),
            links_by_file={d.relative_path: list(d.wikilinks) for d in documents},
        )

        logger.info(
            f"Links: {report.total_links} total, {len(broken_links)} broken, "
            f"{len(orphan_files)} orphans ({len(knowledge_orphans)} knowledge)"
        )
        return report

    @staticmethod
    def _build_linked_targets(documents: list[Document]) -> dict[str, set[str]]:
        """Map every normalized raw link target to the documents that reference it.

        Raw links count whether or not they resolve. Path-style targets also
        register their basename so that [[dir/Name]] references Name.
        """
        linked_by: dict[str, set[str]] = defaultdict(set)

        for document in documents:
            for link in document.wikilinks:
                target = parse_link_target(link)
                normalized = target.file_part or document.name  # self-reference
                linked_by[normalized.lower()].add(document.relative_path)
                if "/" in normalized:
                    linked_by[note_name(normalized).lower()].add(document.relative_path)

        return linked_by
