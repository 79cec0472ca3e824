from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PackageValidationErrorDetail(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


class PackageValidationError(Exception):
    def __init__(
        self,
        *,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.detail = PackageValidationErrorDetail(
            code=code,
            message=message,
            context=context or {},
        )


class InvalidFrameworkError(PackageValidationError, ValueError):
    """Target framework name cannot be parsed."""

    def __init__(self, name: str, *, reason: str) -> None:
        super().__init__(
            code="PKGVAL_INVALID_FRAMEWORK",
            message=f"invalid target framework {name!r}: {reason}",
            context={"framework": name},
        )


class InvalidPackageError(PackageValidationError, ValueError):
    """Package contents violate the asset layout rules."""


class SuppressionConfigError(PackageValidationError, ValueError):
    """Suppression specification is malformed."""


class RuntimeGraphError(PackageValidationError, ValueError):
    """Runtime identifier fallback graph is malformed."""
