from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pkgval_ir import Asset, AssetCategory, Package, TargetFramework, coerce_framework

from .resolver import CompatibilityResolver

AssetLookupStatus = Literal["matched", "incompatible", "absent"]


@dataclass(frozen=True)
class AssetLookup:
    status: AssetLookupStatus
    asset: Asset | None = None

    @property
    def matched(self) -> bool:
        return self.status == "matched"


@dataclass(frozen=True)
class AssetIndex:
    """Read-only compatibility queries over one package's assets."""

    package: Package
    resolver: CompatibilityResolver = field(default_factory=CompatibilityResolver)

    def find_best_compile_asset(
        self,
        framework: TargetFramework | str,
        *,
        file_name: str | None = None,
    ) -> Asset | None:
        return self.resolver.nearest(
            self.package.compile_assets,
            coerce_framework(framework),
            file_name=file_name,
        )

    def find_best_runtime_asset(
        self,
        framework: TargetFramework | str,
        rid: str | None = None,
        *,
        include_rid_agnostic: bool = False,
        file_name: str | None = None,
    ) -> Asset | None:
        required = coerce_framework(framework)
        if rid is None:
            return self.resolver.nearest(
                self.package.runtime_assets, required, file_name=file_name
            )
        match = self.resolver.nearest_for_runtime(
            self.package.runtime_specific_assets,
            required,
            rid,
            file_name=file_name,
        )
        if match is None and include_rid_agnostic:
            match = self.resolver.nearest(
                self.package.runtime_assets, required, file_name=file_name
            )
        return match

    def lookup(
        self,
        category: AssetCategory,
        framework: TargetFramework | str,
        rid: str | None = None,
        *,
        include_rid_agnostic: bool = False,
        file_name: str | None = None,
    ) -> AssetLookup:
        if category == "compile":
            populated = self.package.has_compile_assets
            asset = self.find_best_compile_asset(framework, file_name=file_name)
        elif category == "runtime":
            populated = bool(self.package.runtime_assets)
            asset = self.find_best_runtime_asset(framework, file_name=file_name)
        else:
            if rid is None:
                raise ValueError("runtime_specific lookups require a runtime identifier")
            populated = bool(self.package.runtime_specific_assets) or (
                include_rid_agnostic and bool(self.package.runtime_assets)
            )
            asset = self.find_best_runtime_asset(
                framework,
                rid,
                include_rid_agnostic=include_rid_agnostic,
                file_name=file_name,
            )

        if asset is not None:
            return AssetLookup(status="matched", asset=asset)
        if populated:
            return AssetLookup(status="incompatible")
        return AssetLookup(status="absent")
