from __future__ import annotations

from collections.abc import Callable

from pkgval_ir import NET_CORE_APP, NET_FRAMEWORK, NET_STANDARD, TargetFramework

FrameworkCompatibility = Callable[[TargetFramework, TargetFramework], bool]

# (minimum consumer version, highest .NET Standard version it can consume),
# ordered by consumer version.
_NET_STANDARD_SUPPORT: dict[str, tuple[tuple[tuple[int, ...], tuple[int, ...]], ...]] = {
    NET_CORE_APP: (
        ((1, 0), (1, 6)),
        ((2, 0), (2, 0)),
        ((3, 0), (2, 1)),
    ),
    NET_FRAMEWORK: (
        ((4, 5), (1, 1)),
        ((4, 5, 1), (1, 2)),
        ((4, 6), (1, 3)),
        ((4, 6, 1), (2, 0)),
    ),
}


def _pad(version: tuple[int, ...]) -> tuple[int, int, int, int]:
    padded = (tuple(version) + (0, 0, 0, 0))[:4]
    return (padded[0], padded[1], padded[2], padded[3])


def max_net_standard_version(consumer: TargetFramework) -> tuple[int, int, int, int] | None:
    """Highest .NET Standard version a consumer framework can reference, if any."""
    if consumer.identifier == NET_STANDARD:
        return consumer.version
    table = _NET_STANDARD_SUPPORT.get(consumer.identifier)
    if table is None:
        return None
    supported: tuple[int, int, int, int] | None = None
    for minimum, standard in table:
        if consumer.version >= _pad(minimum):
            supported = _pad(standard)
    return supported


def is_compatible(candidate: TargetFramework, required: TargetFramework) -> bool:
    """True when an asset built for ``candidate`` can serve a ``required`` consumer."""
    if candidate.identifier == required.identifier:
        return candidate.version <= required.version
    if candidate.identifier == NET_STANDARD:
        supported = max_net_standard_version(required)
        return supported is not None and candidate.version <= supported
    return False
