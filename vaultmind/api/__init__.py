from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vaultmind.api.endpoints import get_endpoints_router
from vaultmind.config import VaultConfig, load_vault_config
from vaultmind.ingestion.path_resolver import VaultPathProbe
from vaultmind.orchestrator import VaultAuditor


def create_app(*, vault_path: str | Path, config: VaultConfig | None = None) -> FastAPI:
    """Create FastAPI app serving audits of one vault."""
    vault_path = Path(vault_path)
    auditor = VaultAuditor(
        config=config or load_vault_config(vault_path),
        probe=VaultPathProbe(vault_path).exists,
    )

    app = FastAPI(title="vault-mind")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(router=get_endpoints_router(vault_path=vault_path, auditor=auditor))

    return app
