"""Fix plan domain models."""

from typing import Callable, Literal

from pydantic import BaseModel, PrivateAttr

FixCategory = Literal["links", "orphans", "isolated"]


class FixAction(BaseModel):
    """One proposed change to the vault.

    Edits carry a snapshot of the file's content and the proposed replacement;
    creations carry only the content of the new file.

    Attributes:
        category: Which repair strategy produced the action
        description: Human-readable summary of the change
        file_path: Vault-relative path of the file to edit or create
        original_content: Content the edit was computed against
        new_content: Proposed content after the edit
        create_content: Content of a new file
        is_create: Whether the action creates a file instead of editing one
    """

    category: FixCategory
    description: str
    file_path: str
    original_content: str | None = None
    new_content: str | None = None
    create_content: str | None = None
    is_create: bool = False

    _transform: Callable[[str], str] | None = PrivateAttr(default=None)

    @classmethod
    def edit(
        cls,
        *,
        category: FixCategory,
        description: str,
        file_path: str,
        original_content: str,
        transform: Callable[[str], str],
    ) -> "FixAction":
        """Build an edit action from a content transformation.

        The transformation is kept so the edit can be replayed on content that
        other actions have already changed.
        """
        action = cls(
            category=category,
            description=description,
            file_path=file_path,
            original_content=original_content,
            new_content=transform(original_content),
        )
        action._transform = transform
        return action

    def apply_to(self, content: str) -> str:
        """Replay this edit on ``content``."""
        if self._transform is not None:
            return self._transform(content)
        return self.new_content if self.new_content is not None else content

    @property
    def is_noop(self) -> bool:
        return not self.is_create and self.new_content == self.original_content


class FixSummary(BaseModel):
    total_fixes: int = 0
    link_fixes: int = 0
    orphan_fixes: int = 0
    isolated_fixes: int = 0
    files_to_modify: int = 0
    files_to_create: int = 0


class FixPlan(BaseModel):
    actions: list[FixAction] = []
    summary: FixSummary = FixSummary()


class FixError(BaseModel):
    action: FixAction
    error: str


class FixResult(BaseModel):
    """Outcome of applying (or dry-running) a fix plan."""

    plan: FixPlan
    applied: bool
    actions_applied: int = 0
    actions_skipped: int = 0
    errors: list[FixError] = []
