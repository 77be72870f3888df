"""Document domain models."""

from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict


def strip_md_extension(name: str) -> str:
    """Drop a trailing ``.md`` from a file name or link target."""
    return name[:-3] if name.endswith(".md") else name


def note_name(relative_path: str) -> str:
    """Basename of a vault-relative path without its ``.md`` extension."""
    return strip_md_extension(PurePosixPath(relative_path).name)


class Document(BaseModel):
    """Represents one scanned markdown file.

    Attributes:
        path: Absolute file path
        relative_path: Posix path relative to the vault root, the identity key
        content: Raw markdown content
        word_count: Whitespace-separated words outside the front matter
        wikilinks: Raw link targets in the order they appear
        frontmatter: Flat key/value pairs from the leading ``---`` block
        size: File size in bytes
        modified: File modification timestamp (seconds since epoch)
    """

    model_config = ConfigDict(frozen=True)

    path: str
    relative_path: str
    content: str = ""
    word_count: int = 0
    wikilinks: list[str] = []
    frontmatter: dict[str, str] | None = None
    size: int = 0
    modified: float = 0.0

    @property
    def name(self) -> str:
        return note_name(self.relative_path)

    @property
    def relative_path_no_ext(self) -> str:
        return strip_md_extension(self.relative_path)
