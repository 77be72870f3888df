import json
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict


class _ConfigSection(BaseModel):
    """Accepts both camelCase (as written in .vault-mind.json) and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StalenessConfig(_ConfigSection):
    warning_days: int = 7
    critical_days: int = 30
    core_file_critical_days: int = 14


class QualityConfig(_ConfigSection):
    min_words: int = 50
    max_words: int = 5000


class VaultConfig(_ConfigSection):
    """Per-vault analysis settings.

    Attributes:
        staleness: Age thresholds, shared with staleness reporting
        quality: Word-count thresholds for stub / oversized detection
        core_files: Top-level files every agent workspace is expected to keep
        ignore_paths: Relative path prefixes skipped by the scanner
        structural_dirs: Directories whose files are expected to have no inbound links
    """

    staleness: StalenessConfig = StalenessConfig()
    quality: QualityConfig = QualityConfig()
    core_files: list[str] = ["MEMORY.md", "SOUL.md", "USER.md", "AGENTS.md", "TOOLS.md"]
    ignore_paths: list[str] = [".vault-mind", ".obsidian", ".git", "node_modules"]
    structural_dirs: list[str] = [
        "memory/",
        "reports/",
        "templates/",
        "skills/",
        "docs/",
        "research/",
    ]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VAULTMIND_", env_file=".env", extra="ignore")

    # Vault served by the API
    vault_path: Path = Path(".")

    # Name of the per-vault config file, relative to the vault root
    config_filename: str = ".vault-mind.json"

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()


def load_vault_config(vault_path: str | Path, filename: str | None = None) -> VaultConfig:
    """Load the vault's config file, falling back to defaults.

    Nested sections (staleness, quality) are merged over their defaults, while
    top-level lists replace the defaults outright.

    Args:
        vault_path: Root directory of the vault
        filename: Config file name, defaults to settings.config_filename

    Returns:
        The merged VaultConfig
    """
    config_path = Path(vault_path) / (filename or settings.config_filename)
    if not config_path.exists():
        return VaultConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
        return VaultConfig.model_validate(user_config)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable config {config_path}: {e}")
        return VaultConfig()
