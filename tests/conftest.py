import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from vaultmind.api import create_app
from vaultmind.config import VaultConfig


@pytest.fixture
def config() -> VaultConfig:
    return VaultConfig()


@pytest.fixture
def temp_vault() -> Generator[Path, None, None]:
    """Create an empty temporary vault directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def write_note(temp_vault: Path) -> Callable[[str, str], Path]:
    """Write a markdown file into the temporary vault, creating folders as needed."""

    def _write(relative_path: str, content: str) -> Path:
        file = temp_vault / relative_path
        file.parent.mkdir(parents=True, exist_ok=True)
        file.write_text(content, encoding="utf-8")
        return file

    return _write


@pytest.fixture
def test_client(temp_vault: Path) -> TestClient:
    """API client serving audits of the temporary vault."""
    return TestClient(create_app(vault_path=temp_vault))
