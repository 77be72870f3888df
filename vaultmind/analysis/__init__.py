"""Link resolution and graph analysis over a vault snapshot."""

from vaultmind.analysis.connectivity import ConnectivityClassifier, is_structural_path
from vaultmind.analysis.graph_builder import VaultGraphBuilder, to_dot
from vaultmind.analysis.health import HealthGrader
from vaultmind.analysis.index import VaultIndex
from vaultmind.analysis.link_target import LinkTarget, parse_link_target
from vaultmind.analysis.quality import QualityAnalyzer
from vaultmind.analysis.resolver import ReferenceResolver, Resolution
from vaultmind.analysis.staleness import StalenessAnalyzer

__all__ = [
    "ConnectivityClassifier",
    "HealthGrader",
    "LinkTarget",
    "QualityAnalyzer",
    "ReferenceResolver",
    "Resolution",
    "StalenessAnalyzer",
    "VaultGraphBuilder",
    "VaultIndex",
    "is_structural_path",
    "parse_link_target",
    "to_dot",
]
