import sys

from loguru import logger

from vaultmind.api import create_app
from vaultmind.config import settings

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

logger.info(f"Serving vault-mind audits for {settings.vault_path}")
app = create_app(vault_path=settings.vault_path)
