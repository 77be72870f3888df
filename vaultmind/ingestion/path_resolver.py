"""Filesystem probe for link targets that the in-memory index cannot resolve."""

from pathlib import Path

from loguru import logger


class VaultPathProbe:
    """Checks whether a link target exists on disk, relative to the vault root."""

    def __init__(self, base_path: str | Path):
        """
        Initialize VaultPathProbe.

        Args:
            base_path: Root directory of the vault
        """
        self.base_path = Path(base_path)

    def exists(self, target: str) -> bool:
        """
        Check a link target against the vault on disk.

        The target is tried as written, then with a ``.md`` extension. Any
        filesystem error counts as "not found".

        Args:
            target: Link target relative to the vault root

        Returns:
            True if one of the candidate files exists
        """
        root = self.base_path.resolve()
        for candidate in self.get_candidates(target):
            try:
                # Targets like ../outside.md must not reach beyond the vault
                if not candidate.resolve().is_relative_to(root):
                    continue
                if candidate.is_file():
                    logger.debug(f"Probe found {target} at {candidate}")
                    return True
            except OSError as e:
                logger.warning(f"Probe failed for {candidate}: {e}")
        return False

    def get_candidates(self, target: str) -> list[Path]:
        """
        Get all candidate paths for a target.

        Returns:
            List of all paths that would be tried, in order
        """
        clean = target.strip().lstrip("/")
        if not clean:
            return []
        candidates = [self.base_path / clean]
        if not clean.endswith(".md"):
            candidates.append(self.base_path / f"{clean}.md")
        return candidates
