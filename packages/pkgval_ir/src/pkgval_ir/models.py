from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from .frameworks import TargetFramework, coerce_framework

AssetCategory = Literal["compile", "runtime", "runtime_specific"]

ASSET_CATEGORIES: tuple[AssetCategory, ...] = ("compile", "runtime", "runtime_specific")


class Asset(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str = Field(min_length=1)
    framework: TargetFramework
    category: AssetCategory
    rid: Optional[str] = None

    @field_validator("framework", mode="before")
    @classmethod
    def _parse_framework(cls, value: Any) -> TargetFramework:
        return coerce_framework(value)

    @field_validator("rid", mode="before")
    @classmethod
    def _normalize_rid(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_serializer("framework")
    def _serialize_framework(self, framework: TargetFramework) -> str:
        return framework.short_folder_name

    @model_validator(mode="after")
    def _check_rid_matches_category(self) -> "Asset":
        if self.category == "runtime_specific":
            if not self.rid:
                raise ValueError("runtime_specific assets require a runtime identifier")
        elif self.rid is not None:
            raise ValueError(f"{self.category} assets must not carry a runtime identifier")
        return self


def _check_category(assets: list[Asset], *, expected: AssetCategory, field_name: str) -> None:
    for asset in assets:
        if asset.category != expected:
            raise ValueError(
                f"{field_name} contains {asset.path!r} with category {asset.category!r}"
            )


class Package(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    package_path: str = ""
    compile_assets: list[Asset] = Field(default_factory=list)
    runtime_assets: list[Asset] = Field(default_factory=list)
    runtime_specific_assets: list[Asset] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_asset_categories(self) -> "Package":
        _check_category(self.compile_assets, expected="compile", field_name="compile_assets")
        _check_category(self.runtime_assets, expected="runtime", field_name="runtime_assets")
        _check_category(
            self.runtime_specific_assets,
            expected="runtime_specific",
            field_name="runtime_specific_assets",
        )
        return self

    @property
    def has_compile_assets(self) -> bool:
        return bool(self.compile_assets)

    @property
    def display_name(self) -> str:
        if self.package_path:
            return PurePosixPath(self.package_path.replace("\\", "/")).name
        return f"{self.name}.{self.version}.nupkg"

    def assets(self, category: AssetCategory) -> list[Asset]:
        if category == "compile":
            return self.compile_assets
        if category == "runtime":
            return self.runtime_assets
        return self.runtime_specific_assets

    @property
    def frameworks(self) -> tuple[TargetFramework, ...]:
        seen = {
            asset.framework
            for category in ASSET_CATEGORIES
            for asset in self.assets(category)
        }
        return tuple(sorted(seen))

    @property
    def rids(self) -> tuple[str, ...]:
        return tuple(sorted({asset.rid for asset in self.runtime_specific_assets if asset.rid}))


class Diagnostic(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str = Field(min_length=1)
    target: Optional[str] = None
    message: str

    def line(self) -> str:
        return f"{self.code} {self.message}"


class SuppressionEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str
    target: Optional[str] = None

    @field_validator("code", "target", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @model_validator(mode="after")
    def _check_non_empty(self) -> "SuppressionEntry":
        if not self.code:
            raise ValueError("suppression code must be non-empty")
        if self.target is not None and not self.target:
            raise ValueError("suppression target must be non-empty when given")
        return self


class ComparisonRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    left_package_path: str
    left_asset_path: str
    right_package_path: str
    right_asset_path: str
    display_name: str
    title: str
    header: str


class ValidationReport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    diagnostics: list[Diagnostic] = Field(default_factory=list)
    comparison_requests: list[ComparisonRequest] = Field(default_factory=list)
    comparisons_ran: bool = False

    @property
    def lines(self) -> list[str]:
        return [diagnostic.line() for diagnostic in self.diagnostics]

    @property
    def ok(self) -> bool:
        return not self.diagnostics
