"""Writing a fix plan to disk."""

from pathlib import Path
from typing import Callable

from loguru import logger

from vaultmind.domain.fixes import FixAction, FixError, FixPlan, FixResult
from vaultmind.errors import OutsideVaultError

ApprovalCallback = Callable[[FixAction], bool]


class FixApplier:
    """Applies fix actions to a vault, one file at a time."""

    def apply(
        self,
        vault_path: str | Path,
        plan: FixPlan,
        *,
        apply: bool,
        approve: ApprovalCallback | None = None,
    ) -> FixResult:
        """Apply a fix plan.

        A failing action is recorded and the remaining actions still run.
        Actions whose path resolves outside the vault count as failures.

        Args:
            vault_path: Root directory of the vault
            plan: The plan to apply
            apply: When False nothing is written (dry run)
            approve: Optional callback; actions it rejects are skipped

        Returns:
            FixResult with counts and per-action errors
        """
        result = FixResult(plan=plan, applied=apply)
        if not apply:
            return result

        folder = Path(vault_path)
        for action in plan.actions:
            if approve is not None and not approve(action):
                result.actions_skipped += 1
                continue

            try:
                self._apply_action(folder, action)
            except (OSError, OutsideVaultError) as e:
                logger.error(f"Failed to apply fix to {action.file_path}: {e}")
                result.errors.append(FixError(action=action, error=str(e)))
                continue

            result.actions_applied += 1

        logger.info(
            f"Applied {result.actions_applied} fixes, skipped {result.actions_skipped}, "
            f"{len(result.errors)} errors"
        )
        return result

    @staticmethod
    def _apply_action(folder: Path, action: FixAction) -> None:
        full_path = folder / action.file_path
        if not full_path.resolve().is_relative_to(folder.resolve()):
            raise OutsideVaultError(f"Refusing to write outside the vault: {full_path}")

        if action.is_create:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text(action.create_content or "", encoding="utf-8")
        elif action.new_content is not None:
            full_path.write_text(action.new_content, encoding="utf-8")
        logger.debug(f"Wrote {full_path}")
