from __future__ import annotations

from enum import Enum


class DiagnosticId(str, Enum):
    COMPATIBLE_COMPILE_ASSET_MISSING = "PKV0001"
    COMPATIBLE_RUNTIME_ASSET_MISSING = "PKV004"
    COMPATIBLE_RUNTIME_RID_ASSET_MISSING = "PKV005"
    TARGET_FRAMEWORK_DROPPED = "PKV006"
    TARGET_FRAMEWORK_AND_RID_PAIR_DROPPED = "PKV007"


MESSAGE_TEMPLATES: dict[DiagnosticId, str] = {
    DiagnosticId.COMPATIBLE_COMPILE_ASSET_MISSING: (
        "There is no compatible compile time asset for target framework {framework}."
    ),
    DiagnosticId.COMPATIBLE_RUNTIME_ASSET_MISSING: (
        "There is no compatible runtime asset for target framework {framework} in the package."
    ),
    DiagnosticId.COMPATIBLE_RUNTIME_RID_ASSET_MISSING: (
        "There is no compatible runtime asset for target framework {framework}-{rid}."
    ),
    DiagnosticId.TARGET_FRAMEWORK_DROPPED: (
        "TargetFramework {framework} is no longer supported in the latest version."
    ),
    DiagnosticId.TARGET_FRAMEWORK_AND_RID_PAIR_DROPPED: (
        "TargetFramework and RuntimeIdentifier pair {framework}-{rid} "
        "is no longer supported in the latest version."
    ),
}

BASELINE_DIAGNOSTIC_IDS: frozenset[str] = frozenset(
    {
        DiagnosticId.TARGET_FRAMEWORK_DROPPED.value,
        DiagnosticId.TARGET_FRAMEWORK_AND_RID_PAIR_DROPPED.value,
    }
)
COMPATIBLE_FRAMEWORK_DIAGNOSTIC_IDS: frozenset[str] = frozenset(
    {
        DiagnosticId.COMPATIBLE_COMPILE_ASSET_MISSING.value,
        DiagnosticId.COMPATIBLE_RUNTIME_ASSET_MISSING.value,
        DiagnosticId.COMPATIBLE_RUNTIME_RID_ASSET_MISSING.value,
    }
)


def format_message(code: DiagnosticId, *, framework: object, rid: str | None = None) -> str:
    return MESSAGE_TEMPLATES[code].format(framework=framework, rid=rid)
