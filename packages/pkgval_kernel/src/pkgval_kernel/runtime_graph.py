from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from pkgval_ir import RuntimeGraphError

ROOT_RID = "any"

DEFAULT_RID_FALLBACKS: dict[str, str] = {
    "base": ROOT_RID,
    "win": ROOT_RID,
    "win-x86": "win",
    "win-x64": "win",
    "win-arm64": "win",
    "unix": ROOT_RID,
    "linux": "unix",
    "linux-x64": "linux",
    "linux-arm": "linux",
    "linux-arm64": "linux",
    "linux-musl": "linux",
    "linux-musl-x64": "linux-musl",
    "linux-musl-arm64": "linux-musl",
    "osx": "unix",
    "osx-x64": "osx",
    "osx-arm64": "osx",
    "freebsd": "unix",
    "freebsd-x64": "freebsd",
    "browser": ROOT_RID,
    "browser-wasm": "browser",
}


@dataclass(frozen=True)
class RuntimeGraph:
    """Single-parent RID fallback graph ending at a universal root."""

    fallbacks: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_RID_FALLBACKS))
    root: str = ROOT_RID

    def __post_init__(self) -> None:
        for rid in self.fallbacks:
            self._walk(rid)

    def _walk(self, rid: str) -> tuple[str, ...]:
        chain: list[str] = [rid]
        seen: set[str] = {rid}
        current = rid
        while current != self.root:
            parent = self.fallbacks.get(current)
            if parent is None:
                # unknown RIDs fall straight back to the root
                chain.append(self.root)
                break
            if parent in seen:
                raise RuntimeGraphError(
                    code="PKGVAL_RID_GRAPH_CYCLE",
                    message=f"runtime identifier fallback cycle through {parent!r}",
                    context={"rid": rid, "chain": chain + [parent]},
                )
            chain.append(parent)
            seen.add(parent)
            current = parent
        return tuple(chain)

    def fallback_chain(self, rid: str) -> tuple[str, ...]:
        """RIDs from ``rid`` (most specific) to the root, inclusive."""
        token = str(rid).strip()
        if not token:
            raise RuntimeGraphError(
                code="PKGVAL_RID_EMPTY",
                message="runtime identifier must be non-empty",
                context={},
            )
        return self._walk(token)

    def is_compatible(self, candidate_rid: str, required_rid: str) -> bool:
        return candidate_rid in self.fallback_chain(required_rid)


DEFAULT_RUNTIME_GRAPH = RuntimeGraph()
