from __future__ import annotations

import json
from pathlib import Path

import pytest
from pkgval_ir import SuppressionConfigError, SuppressionEntry
from pkgval_kernel import ValidationSettings, load_suppression_file, parse_suppression_arg


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PKGVAL_NOWARN", "PKGVAL_RUN_API_COMPAT", "PKGVAL_SUPPRESSION_FILE"):
        monkeypatch.delenv(name, raising=False)

    settings = ValidationSettings.from_env()

    assert settings == ValidationSettings()
    assert settings.no_warn_text == ""


def test_from_env_reads_codes_and_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PKGVAL_NOWARN", "PKV006; PKV007")
    monkeypatch.setenv("PKGVAL_RUN_API_COMPAT", "yes")
    monkeypatch.delenv("PKGVAL_SUPPRESSION_FILE", raising=False)

    settings = ValidationSettings.from_env()

    assert settings.no_warn == ("PKV006", "PKV007")
    assert settings.run_api_compat is True
    assert settings.no_warn_text == "PKV006;PKV007"


def test_from_env_rejects_bad_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PKGVAL_RUN_API_COMPAT", "maybe")
    with pytest.raises(RuntimeError, match="PKGVAL_RUN_API_COMPAT"):
        ValidationSettings.from_env()


def test_suppression_file_merges_bare_and_pair_entries(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "suppressions.json"
    path.write_text(
        json.dumps(
            {
                "no_warn": ["PKV007"],
                "suppressions": [
                    {"code": "PKV004"},
                    {"code": "PKV006", "target": ".NETStandard,Version=v2.0"},
                ],
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("PKGVAL_NOWARN", "PKV006")
    monkeypatch.delenv("PKGVAL_RUN_API_COMPAT", raising=False)
    monkeypatch.setenv("PKGVAL_SUPPRESSION_FILE", str(path))

    settings = ValidationSettings.from_env()

    assert settings.no_warn == ("PKV006", "PKV007", "PKV004")
    assert settings.ignored_differences == (
        SuppressionEntry(code="PKV006", target=".NETStandard,Version=v2.0"),
    )
    assert settings.suppression_file == path


def test_suppression_file_schema_errors(tmp_path: Path) -> None:
    path = tmp_path / "suppressions.json"
    path.write_text(json.dumps({"suppressions": [{"code": ""}]}), encoding="utf-8")
    with pytest.raises(SuppressionConfigError):
        load_suppression_file(path)

    path.write_text("[", encoding="utf-8")
    with pytest.raises(SuppressionConfigError):
        load_suppression_file(path)

    with pytest.raises(SuppressionConfigError):
        load_suppression_file(tmp_path / "missing.json")


def test_overrides_extend_settings() -> None:
    settings = ValidationSettings(no_warn=("PKV006",)).with_overrides(
        no_warn="PKV007;PKV006",
        suppressions=["PKV006=.NETCoreApp,Version=v3.1"],
        run_api_compat=True,
    )

    assert settings.no_warn == ("PKV006", "PKV007")
    assert settings.ignored_differences == (
        SuppressionEntry(code="PKV006", target=".NETCoreApp,Version=v3.1"),
    )
    assert settings.run_api_compat is True
    assert ValidationSettings(run_api_compat=True).with_overrides().run_api_compat is True


@pytest.mark.parametrize("raw", ["PKV006", "=target", "PKV006=", " = "])
def test_parse_suppression_arg_rejects_malformed_values(raw: str) -> None:
    with pytest.raises(SuppressionConfigError):
        parse_suppression_arg(raw)


def test_suppression_file_with_non_utf8_bytes_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "suppressions.json"
    path.write_bytes(b'{"no_warn": ["PKV\xff"]}')

    with pytest.raises(SuppressionConfigError) as excinfo:
        load_suppression_file(path)
    assert excinfo.value.detail.code == "PKGVAL_SUPPRESSION_FILE_UNREADABLE"
