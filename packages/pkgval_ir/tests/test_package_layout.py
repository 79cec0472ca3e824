from __future__ import annotations

import json
from pathlib import Path

import pytest
from pkgval_ir import (
    InvalidPackageError,
    load_package_manifest,
    package_from_files,
)


def test_package_from_files_sorts_assets_into_categories() -> None:
    package = package_from_files(
        "Demo",
        "1.0.0",
        [
            "ref/netstandard2.0/Demo.dll",
            "lib/netstandard2.0/Demo.dll",
            "lib/netstandard2.0/Demo.xml",
            "runtimes/win-x64/lib/net6.0/Demo.dll",
            "runtimes/win-x64/native/demo.so",
            "content/readme.txt",
        ],
    )

    assert [asset.path for asset in package.compile_assets] == ["ref/netstandard2.0/Demo.dll"]
    assert [asset.path for asset in package.runtime_assets] == ["lib/netstandard2.0/Demo.dll"]
    assert [(asset.path, asset.rid) for asset in package.runtime_specific_assets] == [
        ("runtimes/win-x64/lib/net6.0/Demo.dll", "win-x64")
    ]
    assert package.package_path == "Demo.1.0.0.nupkg"


def test_lib_assets_double_as_compile_assets_without_ref() -> None:
    package = package_from_files("Demo", "1.0.0", ["lib/netstandard2.0/Demo.dll"])

    assert [asset.category for asset in package.compile_assets] == ["compile"]
    assert [asset.path for asset in package.compile_assets] == ["lib/netstandard2.0/Demo.dll"]
    assert [asset.category for asset in package.runtime_assets] == ["runtime"]


def test_runtime_only_package_has_no_compile_assets() -> None:
    package = package_from_files("Demo", "1.0.0", ["runtimes/win/lib/netstandard2.0/Demo.dll"])

    assert not package.has_compile_assets
    assert package.runtime_assets == []
    assert package.rids == ("win",)


def test_backslash_paths_are_normalized() -> None:
    package = package_from_files("Demo", "1.0.0", ["ref\\netcoreapp3.1\\Demo.dll"])
    assert package.compile_assets[0].path == "ref/netcoreapp3.1/Demo.dll"


def test_unknown_framework_folder_is_rejected() -> None:
    with pytest.raises(InvalidPackageError) as excinfo:
        package_from_files("Demo", "1.0.0", ["lib/portable-net45/Demo.dll"])
    assert excinfo.value.detail.code == "PKGVAL_INVALID_ASSET_PATH"
    assert excinfo.value.detail.context["framework"] == "portable-net45"


def test_load_package_manifest(tmp_path: Path) -> None:
    manifest_path = tmp_path / "demo.json"
    manifest_path.write_text(
        json.dumps(
            {
                "id": "Demo",
                "version": "2.0.0",
                "package_path": "feeds/Demo.2.0.0.nupkg",
                "files": ["lib/net6.0/Demo.dll"],
            }
        ),
        encoding="utf-8",
    )

    package = load_package_manifest(manifest_path)

    assert package.name == "Demo"
    assert package.version == "2.0.0"
    assert package.package_path == "feeds/Demo.2.0.0.nupkg"
    assert [asset.path for asset in package.runtime_assets] == ["lib/net6.0/Demo.dll"]


def test_load_package_manifest_rejects_unknown_fields(tmp_path: Path) -> None:
    manifest_path = tmp_path / "demo.json"
    manifest_path.write_text(json.dumps({"id": "Demo", "version": "1.0.0", "extra": 1}))

    with pytest.raises(InvalidPackageError) as excinfo:
        load_package_manifest(manifest_path)
    assert excinfo.value.detail.code == "PKGVAL_INVALID_MANIFEST"


def test_load_package_manifest_rejects_invalid_json(tmp_path: Path) -> None:
    manifest_path = tmp_path / "demo.json"
    manifest_path.write_text("{not json")

    with pytest.raises(InvalidPackageError):
        load_package_manifest(manifest_path)


def test_empty_runtime_identifier_segment_is_rejected() -> None:
    with pytest.raises(InvalidPackageError) as excinfo:
        package_from_files("Demo", "1.0.0", ["runtimes//lib/net6.0/Demo.dll"])
    assert excinfo.value.detail.code == "PKGVAL_INVALID_ASSET_PATH"
    assert excinfo.value.detail.context["path"] == "runtimes//lib/net6.0/Demo.dll"


def test_load_package_manifest_rejects_non_utf8_bytes(tmp_path: Path) -> None:
    manifest_path = tmp_path / "demo.json"
    manifest_path.write_bytes(b'{"id": "Demo\xff", "version": "1.0.0", "files": []}')

    with pytest.raises(InvalidPackageError) as excinfo:
        load_package_manifest(manifest_path)
    assert excinfo.value.detail.code == "PKGVAL_INVALID_MANIFEST"


def test_load_package_manifest_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidPackageError) as excinfo:
        load_package_manifest(tmp_path / "missing.json")
    assert excinfo.value.detail.code == "PKGVAL_INVALID_MANIFEST"
