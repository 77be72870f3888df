"""Vault scanning: turns a directory of markdown files into Documents."""

from pathlib import Path

from loguru import logger

from vaultmind.config import VaultConfig
from vaultmind.domain.document import Document
from vaultmind.errors import VaultNotFoundError

from .content_extractor import ContentExtractor


class VaultScanner:
    """Reads every markdown file of a vault into an immutable snapshot."""

    def __init__(self, config: VaultConfig | None = None):
        """Initialize the scanner.

        Args:
            config: Vault configuration, used for the ignored path prefixes
        """
        self.config = config or VaultConfig()
        self.content_extractor = ContentExtractor()

    def scan(self, vault_path: str | Path) -> list[Document]:
        """Scan a vault directory.

        Args:
            vault_path: Root directory of the vault

        Returns:
            Documents sorted by relative path

        Raises:
            VaultNotFoundError: If vault_path is not a directory
        """
        folder = Path(vault_path)
        if not folder.is_dir():
            raise VaultNotFoundError(f"Vault directory not found: {folder}")

        documents = []
        for file in self._get_markdown_files(folder):
            document = self._read_document(file, folder)
            if document is not None:
                documents.append(document)

        logger.info(f"Scanned {len(documents)} markdown files in {folder}")
        return documents

    def _get_markdown_files(self, folder: Path) -> list[Path]:
        """Get all markdown files that are not under an ignored prefix."""
        files = []
        for file in sorted(folder.rglob("*.md")):
            if not file.is_file():
                continue
            relative_path = file.relative_to(folder).as_posix()
            if self._is_ignored(relative_path):
                logger.debug(f"Ignoring {relative_path}")
                continue
            files.append(file)
        return files

    def _is_ignored(self, relative_path: str) -> bool:
        return any(relative_path.startswith(prefix) for prefix in self.config.ignore_paths)

    def _read_document(self, file: Path, folder: Path) -> Document | None:
        """Read a single markdown file, returning None if it cannot be read."""
        try:
            content = file.read_text(encoding="utf-8")
            stats = file.stat()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable file {file}: {e}")
            return None

        return Document(
            path=str(file),
            relative_path=file.relative_to(folder).as_posix(),
            content=content,
            word_count=self.content_extractor.count_words(content),
            wikilinks=self.content_extractor.extract_wikilinks(content),
            frontmatter=self.content_extractor.parse_frontmatter(content),
            size=stats.st_size,
            modified=stats.st_mtime,
        )
