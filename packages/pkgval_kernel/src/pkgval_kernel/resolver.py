from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import PurePosixPath

from pkgval_ir import Asset, TargetFramework

from .compatibility import FrameworkCompatibility
from .compatibility import is_compatible as default_is_compatible
from .runtime_graph import DEFAULT_RUNTIME_GRAPH

logger = logging.getLogger(__name__)

FallbackChain = Callable[[str], Sequence[str]]
_COMPONENT_SCALE = 1000


def _version_number(framework: TargetFramework) -> int:
    number = 0
    for part in framework.version:
        number = number * _COMPONENT_SCALE + part
    return number


def version_distance(candidate: TargetFramework, required: TargetFramework) -> int:
    return abs(_version_number(candidate) - _version_number(required))


def _file_name(path: str) -> str:
    return PurePosixPath(path).name.lower()


def _selection_key(
    asset: Asset, required: TargetFramework, file_name: str | None
) -> tuple[bool, int, str, bool, str]:
    return (
        asset.framework.identifier != required.identifier,
        version_distance(asset.framework, required),
        str(asset.framework),
        file_name is not None and _file_name(asset.path) != file_name.lower(),
        asset.path,
    )


@dataclass(frozen=True)
class CompatibilityResolver:
    """
    Nearest-compatible asset selection over an injected framework predicate
    and RID fallback chain.

    Ordering among compatible assets: same framework family first, then the
    smallest version distance, then the canonical framework string. Distance
    is not compared across families: a nearer version in another family never
    beats a same-family candidate. Assets of the chosen framework prefer
    ``file_name`` and then the lexically smallest path.
    """

    is_compatible: FrameworkCompatibility = default_is_compatible
    fallback_chain: FallbackChain = DEFAULT_RUNTIME_GRAPH.fallback_chain

    def nearest(
        self,
        candidates: Iterable[Asset],
        required: TargetFramework,
        *,
        file_name: str | None = None,
    ) -> Asset | None:
        compatible = [
            asset for asset in candidates if self.is_compatible(asset.framework, required)
        ]
        if not compatible:
            return None
        return min(compatible, key=lambda asset: _selection_key(asset, required, file_name))

    def nearest_for_runtime(
        self,
        candidates: Iterable[Asset],
        required: TargetFramework,
        rid: str,
        *,
        file_name: str | None = None,
    ) -> Asset | None:
        by_rid: dict[str, list[Asset]] = {}
        for asset in candidates:
            if asset.rid:
                by_rid.setdefault(asset.rid, []).append(asset)

        for fallback_rid in self.fallback_chain(rid):
            match = self.nearest(by_rid.get(fallback_rid, ()), required, file_name=file_name)
            if match is not None:
                if fallback_rid != rid:
                    logger.debug(
                        "resolved %s-%s through fallback rid %s: %s",
                        required,
                        rid,
                        fallback_rid,
                        match.path,
                    )
                return match
        return None
