"""Lookup tables built once per analysis run."""

from pydantic import BaseModel

from vaultmind.domain.document import Document


class VaultIndex(BaseModel):
    """Name and path lookups over one snapshot of documents.

    Attributes:
        names: Lower-cased basename or extension-less relative path -> canonical form
        relative_paths: Relative paths with extension, as written and lower-cased
        path_by_name: Lower-cased basename -> relative path (first document wins)
    """

    names: dict[str, str] = {}
    relative_paths: set[str] = set()
    path_by_name: dict[str, str] = {}

    @classmethod
    def build(cls, documents: list[Document]) -> "VaultIndex":
        names: dict[str, str] = {}
        relative_paths: set[str] = set()
        path_by_name: dict[str, str] = {}

        for document in documents:
            names[document.name.lower()] = document.name
            names[document.relative_path_no_ext.lower()] = document.relative_path_no_ext
            relative_paths.add(document.relative_path)
            relative_paths.add(document.relative_path.lower())
            path_by_name.setdefault(document.name.lower(), document.relative_path)

        return cls(names=names, relative_paths=relative_paths, path_by_name=path_by_name)

    def has_name(self, name: str) -> bool:
        return name.lower() in self.names

    def has_relative_path(self, path: str) -> bool:
        return path in self.relative_paths or path.lower() in self.relative_paths
