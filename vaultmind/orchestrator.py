"""Orchestration of one audit run over a vault snapshot."""

from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from vaultmind.analysis import (
    ConnectivityClassifier,
    HealthGrader,
    QualityAnalyzer,
    StalenessAnalyzer,
    VaultGraphBuilder,
    VaultIndex,
)
from vaultmind.analysis.resolver import FilesystemProbe
from vaultmind.config import VaultConfig, load_vault_config
from vaultmind.domain.document import Document
from vaultmind.domain.fixes import FixCategory, FixPlan
from vaultmind.domain.report import AuditReport
from vaultmind.fixers import RepairPlanner
from vaultmind.ingestion.path_resolver import VaultPathProbe
from vaultmind.ingestion.scanner import VaultScanner


class VaultAuditor:
    """Runs the analyzers and the repair planner over scanned documents."""

    def __init__(self, config: VaultConfig | None = None, probe: FilesystemProbe | None = None):
        """Initialize the auditor.

        Args:
            config: Vault configuration
            probe: Optional filesystem probe used as a last resort for path-style links
        """
        self.config = config or VaultConfig()
        self.probe = probe

        self.scanner = VaultScanner(self.config)
        self.classifier = ConnectivityClassifier(self.config, probe)
        self.quality_analyzer = QualityAnalyzer(self.config)
        self.staleness_analyzer = StalenessAnalyzer(self.config)
        self.health_grader = HealthGrader(self.config)
        self.graph_builder = VaultGraphBuilder()
        self.planner = RepairPlanner()

    def audit(
        self, documents: list[Document], vault_path: str = "", now: datetime | None = None
    ) -> AuditReport:
        """Analyse one snapshot of documents.

        Args:
            documents: Scanned documents
            vault_path: Vault root, recorded in the report
            now: Reference time for staleness, defaults to the current UTC time

        Returns:
            AuditReport with link, quality, graph, staleness and health findings
        """
        now = now or datetime.now(timezone.utc)
        index = VaultIndex.build(documents)

        links = self.classifier.classify(documents, index)
        quality = self.quality_analyzer.analyze(documents)
        staleness = self.staleness_analyzer.analyze(documents, now)

        return AuditReport(
            vault_path=vault_path,
            scan_date=now.isoformat(),
            total_files=len(documents),
            total_words=sum(d.word_count for d in documents),
            links=links,
            quality=quality,
            graph=self.graph_builder.build(documents, index),
            staleness=staleness,
            health=self.health_grader.grade(links, quality, staleness),
        )

    def plan_fixes(
        self, documents: list[Document], report: AuditReport, only: FixCategory | None = None
    ) -> FixPlan:
        return self.planner.plan(documents, report.links, report.quality, only)

    @classmethod
    def for_vault(cls, vault_path: str | Path) -> "VaultAuditor":
        """Create an auditor with the vault's own config and a filesystem probe rooted at it."""
        return cls(config=load_vault_config(vault_path), probe=VaultPathProbe(vault_path).exists)

    def audit_vault(self, vault_path: str | Path) -> tuple[list[Document], AuditReport]:
        """Scan a vault directory and audit the result.

        Raises:
            VaultNotFoundError: If vault_path is not a directory
        """
        folder = Path(vault_path).resolve()
        documents = self.scanner.scan(folder)
        report = self.audit(documents, vault_path=str(folder))

        logger.info(
            f"Audit complete: {report.total_files} files, "
            f"connectivity {report.links.connectivity_score:.0%}"
        )
        return documents, report
