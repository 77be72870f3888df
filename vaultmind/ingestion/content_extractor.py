"""Content extraction service for markdown content."""

import re
from typing import List


class ContentExtractor:
    """Service for extracting links and metadata from markdown text."""

    WIKILINK_PATTERN = re.compile(r"\[\[([^\]|]+)(?:\|[^\]]*)?\]\]")

    @staticmethod
    def extract_wikilinks(content: str) -> List[str]:
        """Extract Obsidian wikilink references from markdown content.

        Extracts links in the form of [[link name]] or [[link name|display text]].
        Embeds (![[name]]) are returned as well, since they reference a note too.

        Args:
            content: Markdown content to extract wikilinks from

        Returns:
            List of trimmed wikilink targets, in document order
        """
        return [target.strip() for target in ContentExtractor.WIKILINK_PATTERN.findall(content)]

    @staticmethod
    def frontmatter_end(content: str) -> int:
        """Index just past the closing ``---`` of the front matter, or 0 if there is none."""
        if not content.startswith("---"):
            return 0
        end = content.find("---", 3)
        if end == -1:
            return 0
        return end + 3

    @staticmethod
    def strip_frontmatter(content: str) -> str:
        return content[ContentExtractor.frontmatter_end(content) :]

    @staticmethod
    def parse_frontmatter(content: str) -> dict[str, str] | None:
        """Parse the leading ``---`` block as flat ``key: value`` lines.

        Args:
            content: Markdown content

        Returns:
            Mapping of keys to raw string values, or None when there is no usable block
        """
        end = ContentExtractor.frontmatter_end(content)
        if not end:
            return None

        result = {}
        for line in content[3 : end - 3].strip().split("\n"):
            key, sep, value = line.partition(":")
            if not sep:
                continue
            result[key.strip()] = value.strip()

        return result or None

    @staticmethod
    def count_words(content: str) -> int:
        """Count whitespace-separated words, ignoring front matter."""
        return len(ContentExtractor.strip_frontmatter(content).split())
