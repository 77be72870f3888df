"""Repair strategies for broken links, orphans and isolated files."""

from vaultmind.fixers.applier import FixApplier
from vaultmind.fixers.isolated import IsolatedFixer
from vaultmind.fixers.links import BrokenLinkFixer, find_best_match, levenshtein
from vaultmind.fixers.orphans import OrphanFixer
from vaultmind.fixers.planner import RepairPlanner

__all__ = [
    "BrokenLinkFixer",
    "FixApplier",
    "IsolatedFixer",
    "OrphanFixer",
    "RepairPlanner",
    "find_best_match",
    "levenshtein",
]
