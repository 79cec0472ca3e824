from .asset_index import AssetIndex, AssetLookup, AssetLookupStatus
from .baseline import (
    BASELINE_COMPARISON_HEADER,
    BASELINE_COMPARISON_TITLE,
    BaselinePackageValidator,
)
from .comparison import ComparisonQueue, ComparisonService, Comparer, null_comparer
from .compatibility import FrameworkCompatibility, is_compatible, max_net_standard_version
from .compatible_frameworks import CompatibleFrameworkValidator
from .config import SuppressionFile, ValidationSettings, load_suppression_file, parse_suppression_arg
from .resolver import CompatibilityResolver, FallbackChain, version_distance
from .runtime_graph import DEFAULT_RID_FALLBACKS, DEFAULT_RUNTIME_GRAPH, ROOT_RID, RuntimeGraph
from .sinks import CollectingSink, DiagnosticSink, LoggingSink, TeeSink
from .suppression import SuppressionRegistry, SuppressionRun, parse_no_warn

__all__ = [
    "AssetIndex",
    "AssetLookup",
    "AssetLookupStatus",
    "BASELINE_COMPARISON_HEADER",
    "BASELINE_COMPARISON_TITLE",
    "BaselinePackageValidator",
    "CollectingSink",
    "Comparer",
    "ComparisonQueue",
    "ComparisonService",
    "CompatibilityResolver",
    "CompatibleFrameworkValidator",
    "DEFAULT_RID_FALLBACKS",
    "DEFAULT_RUNTIME_GRAPH",
    "DiagnosticSink",
    "FallbackChain",
    "FrameworkCompatibility",
    "LoggingSink",
    "ROOT_RID",
    "RuntimeGraph",
    "SuppressionFile",
    "SuppressionRegistry",
    "SuppressionRun",
    "TeeSink",
    "ValidationSettings",
    "is_compatible",
    "load_suppression_file",
    "max_net_standard_version",
    "null_comparer",
    "parse_no_warn",
    "parse_suppression_arg",
    "version_distance",
]

__version__ = "0.0.0"
