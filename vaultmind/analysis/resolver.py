"""Reference resolution for wikilink targets."""

from typing import Callable, Literal

from loguru import logger
from pydantic import BaseModel

from vaultmind.domain.document import strip_md_extension

from .index import VaultIndex
from .link_target import LinkTarget, parse_link_target

FilesystemProbe = Callable[[str], bool]


class Resolution(BaseModel):
    """Outcome of resolving one link target."""

    status: Literal["resolved", "path_style", "unresolved"]
    suggested_name: str | None = None  # short name to use instead of a path-style target

    @property
    def valid(self) -> bool:
        return self.status != "unresolved"

    @property
    def path_style(self) -> bool:
        return self.status == "path_style"


RESOLVED = Resolution(status="resolved")
UNRESOLVED = Resolution(status="unresolved")


class ReferenceResolver:
    """Decides whether wikilink targets point at known documents."""

    def __init__(self, index: VaultIndex, probe: FilesystemProbe | None = None):
        """Initialize resolver with a vault index.

        Args:
            index: Lookup tables for the current snapshot
            probe: Optional last-resort existence check against the filesystem
        """
        self.index = index
        self.probe = probe

    def resolve(self, raw_target: str) -> Resolution:
        """Resolve a raw target as written inside ``[[...]]``.

        Args:
            raw_target: Link text without brackets or alias

        Returns:
            Resolution describing whether and how the target matched
        """
        return self.resolve_target(parse_link_target(raw_target))

    def resolve_target(self, target: LinkTarget) -> Resolution:
        """Resolve a parsed target.

        Priority:
        1. Self-reference ([[#Section]]) always resolves
        2. Name match against basenames and extension-less relative paths
        3. Path-style targets against relative paths, with and without ``.md``
        4. Path-style targets against the filesystem probe, if one was given
        """
        if target.kind == "self":
            return RESOLVED

        if self.index.has_name(target.file_part):
            if target.kind == "path":
                return self._path_style(target)
            return RESOLVED

        if target.kind == "path":
            without_md = strip_md_extension(target.file_part)
            if self.index.has_relative_path(f"{without_md}.md") or self.index.has_relative_path(
                without_md
            ):
                return self._path_style(target)

            if self._probe(target.file_part):
                return self._path_style(target)

        logger.debug(f"Could not resolve wikilink: {target.raw}")
        return UNRESOLVED

    def _probe(self, file_part: str) -> bool:
        if self.probe is None:
            return False
        try:
            return self.probe(file_part)
        except OSError as e:
            logger.warning(f"Filesystem probe unavailable for {file_part}: {e}")
            return False

    @staticmethod
    def _path_style(target: LinkTarget) -> Resolution:
        return Resolution(status="path_style", suggested_name=target.short_name)
