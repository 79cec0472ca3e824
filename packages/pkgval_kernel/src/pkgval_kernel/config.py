from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pkgval_ir import SuppressionConfigError, SuppressionEntry

from .suppression import parse_no_warn

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class SuppressionFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    no_warn: list[str] = Field(default_factory=list)
    suppressions: list[SuppressionEntry] = Field(default_factory=list)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise RuntimeError(f"{name} must be one of: {', '.join(sorted(_TRUE_VALUES | _FALSE_VALUES))}")


def _env_path(name: str) -> Path | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    return Path(raw).expanduser()


def load_suppression_file(path: Path) -> SuppressionFile:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SuppressionConfigError(
            code="PKGVAL_SUPPRESSION_FILE_UNREADABLE",
            message=f"suppression file {str(path)!r} could not be read as UTF-8 JSON",
            context={"path": str(path)},
        ) from exc
    try:
        return SuppressionFile.model_validate(payload)
    except ValidationError as exc:
        raise SuppressionConfigError(
            code="PKGVAL_SUPPRESSION_INVALID",
            message=f"suppression file {str(path)!r} does not match the suppression schema",
            context={"path": str(path), "errors": exc.errors(include_url=False)},
        ) from exc


@dataclass(frozen=True)
class ValidationSettings:
    no_warn: tuple[str, ...] = ()
    ignored_differences: tuple[SuppressionEntry, ...] = ()
    run_api_compat: bool = False
    suppression_file: Path | None = field(default=None, compare=False)

    @classmethod
    def from_env(cls) -> "ValidationSettings":
        settings = cls(
            no_warn=parse_no_warn(os.environ.get("PKGVAL_NOWARN")),
            run_api_compat=_env_bool("PKGVAL_RUN_API_COMPAT", False),
        )
        suppression_file = _env_path("PKGVAL_SUPPRESSION_FILE")
        if suppression_file is not None:
            settings = settings.with_suppression_file(suppression_file)
        return settings

    def with_suppression_file(self, path: Path) -> "ValidationSettings":
        loaded = load_suppression_file(path)
        bare = [entry.code for entry in loaded.suppressions if entry.target is None]
        pairs = [entry for entry in loaded.suppressions if entry.target is not None]
        return replace(
            self,
            no_warn=parse_no_warn([*self.no_warn, *loaded.no_warn, *bare]),
            ignored_differences=_merge_entries(self.ignored_differences, pairs),
            suppression_file=path,
        )

    def with_overrides(
        self,
        *,
        no_warn: str | None = None,
        suppressions: list[str] | None = None,
        run_api_compat: bool | None = None,
    ) -> "ValidationSettings":
        entries = [parse_suppression_arg(raw) for raw in suppressions or ()]
        return replace(
            self,
            no_warn=parse_no_warn([*self.no_warn, *parse_no_warn(no_warn)]),
            ignored_differences=_merge_entries(self.ignored_differences, entries),
            run_api_compat=self.run_api_compat if run_api_compat is None else run_api_compat,
        )

    @property
    def no_warn_text(self) -> str:
        return ";".join(self.no_warn)


def _merge_entries(
    existing: tuple[SuppressionEntry, ...], extra: list[SuppressionEntry]
) -> tuple[SuppressionEntry, ...]:
    merged = list(existing)
    for entry in extra:
        if entry not in merged:
            merged.append(entry)
    return tuple(merged)


def parse_suppression_arg(raw: str) -> SuppressionEntry:
    """Parse ``CODE=TARGET`` into a (code, target) suppression pair."""
    code, sep, target = raw.partition("=")
    if not sep or not code.strip() or not target.strip():
        raise SuppressionConfigError(
            code="PKGVAL_SUPPRESSION_INVALID",
            message=f"suppression {raw!r} must have the form CODE=TARGET",
            context={"value": raw},
        )
    return SuppressionEntry(code=code, target=target)
