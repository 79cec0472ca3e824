from .diagnostic_ids import (
    BASELINE_DIAGNOSTIC_IDS,
    COMPATIBLE_FRAMEWORK_DIAGNOSTIC_IDS,
    DiagnosticId,
    format_message,
)
from .errors import (
    InvalidFrameworkError,
    InvalidPackageError,
    PackageValidationError,
    PackageValidationErrorDetail,
    RuntimeGraphError,
    SuppressionConfigError,
)
from .frameworks import (
    NET_CORE_APP,
    NET_FRAMEWORK,
    NET_STANDARD,
    TargetFramework,
    coerce_framework,
    parse_framework,
)
from .layout import (
    PackageManifest,
    load_package_manifest,
    package_from_files,
    package_from_manifest,
)
from .models import (
    ASSET_CATEGORIES,
    Asset,
    AssetCategory,
    ComparisonRequest,
    Diagnostic,
    Package,
    SuppressionEntry,
    ValidationReport,
)

__all__ = [
    "ASSET_CATEGORIES",
    "Asset",
    "AssetCategory",
    "BASELINE_DIAGNOSTIC_IDS",
    "COMPATIBLE_FRAMEWORK_DIAGNOSTIC_IDS",
    "ComparisonRequest",
    "Diagnostic",
    "DiagnosticId",
    "InvalidFrameworkError",
    "InvalidPackageError",
    "NET_CORE_APP",
    "NET_FRAMEWORK",
    "NET_STANDARD",
    "Package",
    "PackageManifest",
    "PackageValidationError",
    "PackageValidationErrorDetail",
    "RuntimeGraphError",
    "SuppressionConfigError",
    "SuppressionEntry",
    "TargetFramework",
    "ValidationReport",
    "coerce_framework",
    "format_message",
    "load_package_manifest",
    "package_from_files",
    "package_from_manifest",
    "parse_framework",
]

__version__ = "0.0.0"
