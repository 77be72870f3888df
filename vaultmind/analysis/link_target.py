"""Parsing of raw wikilink targets into an explicit variant."""

from typing import Literal

from pydantic import BaseModel

from vaultmind.domain.document import note_name

LinkKind = Literal["plain", "path", "self"]


class LinkTarget(BaseModel):
    """A raw link target decomposed into its parts.

    Attributes:
        raw: The target exactly as authored, without brackets
        file_part: Text before the first ``#``, trimmed (empty for self-references)
        section: Text after the first ``#``, verbatim, or None when there is no ``#``
        kind: ``self`` for ``[[#Section]]``, ``path`` when the file part contains ``/``,
            ``plain`` otherwise
    """

    raw: str
    file_part: str
    section: str | None = None
    kind: LinkKind

    @property
    def short_name(self) -> str:
        """Basename of the file part without ``.md``, the name Obsidian would use."""
        return note_name(self.file_part)


def parse_link_target(raw: str) -> LinkTarget:
    """Split a raw target on its first ``#`` and classify it.

    Nested ``#`` characters stay in the section verbatim.
    """
    file_part, sep, section = raw.partition("#")
    file_part = file_part.strip()

    if sep and not file_part:
        kind: LinkKind = "self"
    elif "/" in file_part:
        kind = "path"
    else:
        kind = "plain"

    return LinkTarget(raw=raw, file_part=file_part, section=section if sep else None, kind=kind)
