from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from pydantic import ValidationError

from pkgval_ir import SuppressionConfigError, SuppressionEntry

logger = logging.getLogger(__name__)

NO_WARN_SEPARATOR = ";"

SuppressionPair = tuple[str, str]


def parse_no_warn(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """Split a ``;``-delimited code list; blank entries are ignored."""
    if raw is None:
        return ()
    if isinstance(raw, str):
        tokens: Iterable[str] = raw.split(NO_WARN_SEPARATOR)
    else:
        tokens = raw
    codes: list[str] = []
    for token in tokens:
        code = str(token).strip()
        if code and code not in codes:
            codes.append(code)
    return tuple(codes)


def _coerce_pair(raw: SuppressionEntry | Sequence[str], index: int) -> SuppressionEntry:
    if isinstance(raw, SuppressionEntry):
        entry = raw
    else:
        if isinstance(raw, str) or len(raw) != 2:
            raise SuppressionConfigError(
                code="PKGVAL_SUPPRESSION_INVALID",
                message="suppression pairs must be (code, target) tuples",
                context={"index": index, "entry": repr(raw)},
            )
        try:
            entry = SuppressionEntry(code=raw[0], target=raw[1])
        except ValidationError as exc:
            raise SuppressionConfigError(
                code="PKGVAL_SUPPRESSION_INVALID",
                message="suppression pair has an empty code or target",
                context={"index": index, "errors": exc.errors(include_url=False)},
            ) from exc
    if entry.target is None:
        raise SuppressionConfigError(
            code="PKGVAL_SUPPRESSION_INVALID",
            message="suppression pairs require a target",
            context={"index": index, "code": entry.code},
        )
    return entry


class SuppressionRun:
    """'Already reported' state for one validation run."""

    def __init__(self, registry: "SuppressionRegistry") -> None:
        self._registry = registry
        self._seen: set[SuppressionPair] = set()
        self._lock = threading.Lock()

    @property
    def seen(self) -> frozenset[SuppressionPair]:
        with self._lock:
            return frozenset(self._seen)

    def filter(self, code: str, target: str) -> bool:
        """True to suppress the diagnostic; False to report it (and remember it)."""
        if self._registry.is_suppressed(code, target):
            return True
        key = (code, target)
        with self._lock:
            if key in self._seen:
                return True
            self._seen.add(key)
        return False


@dataclass(frozen=True)
class SuppressionRegistry:
    """
    Configured suppressions: bare codes (any target) and (code, target) pairs.

    Bare codes only apply to ``eligible_codes``; ``None`` makes every code
    eligible. Deduplication state lives in ``SuppressionRun``.
    """

    no_warn: frozenset[str] = frozenset()
    pairs: frozenset[SuppressionPair] = frozenset()
    eligible_codes: frozenset[str] | None = None
    _default_run: list[SuppressionRun] = field(default_factory=list, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._default_run.append(SuppressionRun(self))

    @classmethod
    def build(
        cls,
        *,
        no_warn: str | Iterable[str] | None = None,
        ignored_differences: Iterable[SuppressionEntry | Sequence[str]] | None = None,
        eligible_codes: Iterable[str] | None = None,
    ) -> "SuppressionRegistry":
        eligible = None if eligible_codes is None else frozenset(eligible_codes)
        bare: set[str] = set()
        for code in parse_no_warn(no_warn):
            if eligible is not None and code not in eligible:
                logger.debug("ignoring no-warn code %s: not eligible for bare suppression", code)
                continue
            bare.add(code)

        pairs: set[SuppressionPair] = set()
        for index, raw in enumerate(ignored_differences or ()):
            entry = _coerce_pair(raw, index)
            pairs.add((entry.code, entry.target or ""))

        return cls(no_warn=frozenset(bare), pairs=frozenset(pairs), eligible_codes=eligible)

    def is_suppressed(self, code: str, target: str) -> bool:
        return code in self.no_warn or (code, target) in self.pairs

    def start_run(self) -> SuppressionRun:
        return SuppressionRun(self)

    def reset(self) -> SuppressionRun:
        run = self.start_run()
        self._default_run[:] = [run]
        return run

    def filter(self, code: str, target: str) -> bool:
        return self._default_run[0].filter(code, target)
