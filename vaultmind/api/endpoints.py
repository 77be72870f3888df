from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from loguru import logger

from vaultmind.analysis import to_dot
from vaultmind.domain.document import Document
from vaultmind.domain.fixes import FixCategory, FixPlan
from vaultmind.domain.graph import GraphData
from vaultmind.domain.health import HealthReport
from vaultmind.domain.report import AuditReport
from vaultmind.errors import VaultNotFoundError
from vaultmind.orchestrator import VaultAuditor


def _run_audit(auditor: VaultAuditor, vault_path: Path) -> tuple[list[Document], AuditReport]:
    """Scan and audit the vault, mapping a missing vault to a 404."""
    try:
        return auditor.audit_vault(vault_path)
    except VaultNotFoundError as err:
        logger.error(f"Vault not found: {vault_path}")
        raise HTTPException(status_code=404, detail=str(err)) from err


def get_endpoints_router(*, vault_path: Path, auditor: VaultAuditor) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        return {"status": "healthy"}

    @router.get("/api/report", response_model=AuditReport)
    async def get_report() -> AuditReport:
        _, report = _run_audit(auditor, vault_path)
        return report

    @router.get("/api/doctor", response_model=HealthReport)
    async def get_doctor() -> HealthReport:
        _, report = _run_audit(auditor, vault_path)
        return report.health

    @router.get("/api/graph", response_model=GraphData)
    async def get_graph() -> GraphData:
        _, report = _run_audit(auditor, vault_path)
        return report.graph

    @router.get("/api/graph/dot", response_class=PlainTextResponse)
    async def get_graph_dot() -> str:
        _, report = _run_audit(auditor, vault_path)
        return to_dot(report.graph)

    @router.get("/api/fixes", response_model=FixPlan)
    async def get_fix_plan(only: FixCategory | None = None) -> FixPlan:
        """Preview the fix plan; nothing is written."""
        documents, report = _run_audit(auditor, vault_path)
        return auditor.plan_fixes(documents, report, only)

    return router
