from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidFrameworkError, InvalidPackageError
from .frameworks import parse_framework
from .models import Asset, Package

# ref/<tfm>/<file>, lib/<tfm>/<file>, runtimes/<rid>/lib/<tfm>/<file>
_ASSEMBLY_SUFFIXES: tuple[str, ...] = (".dll", ".exe", ".winmd")


class PackageManifest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    version: str = Field(min_length=1)
    package_path: Optional[str] = None
    files: list[str] = Field(default_factory=list)


def _normalize(path: str) -> str:
    return path.replace("\\", "/").lstrip("/")


def _is_assembly(path: str) -> bool:
    return path.lower().endswith(_ASSEMBLY_SUFFIXES)


def _framework_or_raise(folder: str, path: str):
    try:
        return parse_framework(folder)
    except InvalidFrameworkError as exc:
        raise InvalidPackageError(
            code="PKGVAL_INVALID_ASSET_PATH",
            message=f"asset {path!r} has an unrecognized target framework folder {folder!r}",
            context={"path": path, "framework": folder},
        ) from exc


def _asset_or_raise(path: str, **fields) -> Asset:
    try:
        return Asset(path=path, **fields)
    except ValidationError as exc:
        raise InvalidPackageError(
            code="PKGVAL_INVALID_ASSET_PATH",
            message=f"asset {path!r} is not a valid package asset",
            context={"path": path, "errors": exc.errors(include_url=False, include_context=False)},
        ) from exc


def package_from_files(
    name: str,
    version: str,
    files: Iterable[str],
    *,
    package_path: str | None = None,
) -> Package:
    """
    Build a Package from package-relative file paths.

    Only assemblies under ref/, lib/ and runtimes/<rid>/lib/ are assets; other
    files are ignored. Without any ref/ assets, lib/ assets are also the
    compile-time assets.
    """
    ref_assets: list[Asset] = []
    lib_assets: list[Asset] = []
    rid_assets: list[Asset] = []

    for raw_path in files:
        path = _normalize(raw_path)
        if not _is_assembly(path):
            continue
        parts = path.split("/")
        head = parts[0].lower()
        if head in {"ref", "lib"} and len(parts) >= 3:
            framework = _framework_or_raise(parts[1], path)
            category = "compile" if head == "ref" else "runtime"
            target = ref_assets if head == "ref" else lib_assets
            target.append(_asset_or_raise(path, framework=framework, category=category))
        elif head == "runtimes" and len(parts) >= 5 and parts[2].lower() == "lib":
            framework = _framework_or_raise(parts[3], path)
            rid_assets.append(
                _asset_or_raise(path, framework=framework, category="runtime_specific", rid=parts[1])
            )

    compile_assets = ref_assets
    if not compile_assets:
        compile_assets = [
            Asset(path=asset.path, framework=asset.framework, category="compile")
            for asset in lib_assets
        ]

    try:
        return Package(
            name=name,
            version=version,
            package_path=package_path or f"{name}.{version}.nupkg",
            compile_assets=compile_assets,
            runtime_assets=lib_assets,
            runtime_specific_assets=rid_assets,
        )
    except ValidationError as exc:
        raise InvalidPackageError(
            code="PKGVAL_INVALID_PACKAGE",
            message=f"package {name!r} {version!r} is not a valid package",
            context={
                "name": name,
                "version": version,
                "errors": exc.errors(include_url=False, include_context=False),
            },
        ) from exc


def package_from_manifest(manifest: PackageManifest) -> Package:
    return package_from_files(
        manifest.id,
        manifest.version,
        manifest.files,
        package_path=manifest.package_path,
    )


def load_package_manifest(path: Path) -> Package:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidPackageError(
            code="PKGVAL_INVALID_MANIFEST",
            message=f"package manifest {str(path)!r} could not be read as UTF-8 JSON",
            context={"path": str(path)},
        ) from exc
    try:
        manifest = PackageManifest.model_validate(payload)
    except ValidationError as exc:
        raise InvalidPackageError(
            code="PKGVAL_INVALID_MANIFEST",
            message=f"package manifest {str(path)!r} does not match the manifest schema",
            context={"path": str(path), "errors": exc.errors(include_url=False)},
        ) from exc
    return package_from_manifest(manifest)
