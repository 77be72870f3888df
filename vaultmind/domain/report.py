"""Audit report model."""

from pydantic import BaseModel

from vaultmind.domain.findings import LinkReport, QualityReport, StalenessReport
from vaultmind.domain.graph import GraphData
from vaultmind.domain.health import HealthReport


class AuditReport(BaseModel):
    """Everything one audit run found about a vault snapshot."""

    vault_path: str
    scan_date: str
    total_files: int
    total_words: int
    links: LinkReport
    quality: QualityReport
    graph: GraphData
    staleness: StalenessReport
    health: HealthReport
