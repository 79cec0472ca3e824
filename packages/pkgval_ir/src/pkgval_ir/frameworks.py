from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from .errors import InvalidFrameworkError

NET_STANDARD = ".NETStandard"
NET_CORE_APP = ".NETCoreApp"
NET_FRAMEWORK = ".NETFramework"

KNOWN_IDENTIFIERS: frozenset[str] = frozenset({NET_STANDARD, NET_CORE_APP, NET_FRAMEWORK})

_SHORT_PREFIXES: dict[str, str] = {
    "netstandard": NET_STANDARD,
    "netcoreapp": NET_CORE_APP,
}
_LONG_NAME_PATTERN = re.compile(
    r"^(?P<identifier>\.[A-Za-z]+),\s*Version=v?(?P<version>\d+(?:\.\d+){0,3})$"
)
_SHORT_NAME_PATTERN = re.compile(r"^(?P<prefix>[a-z]+)(?P<version>\d+(?:\.\d+){0,3})$")
_FIRST_NET_CORE_APP_ERA_MAJOR = 5

Version = tuple[int, int, int, int]


def _pad_version(parts: list[int]) -> Version:
    padded = (parts + [0, 0, 0, 0])[:4]
    return (padded[0], padded[1], padded[2], padded[3])


def _parse_dotted(raw: str) -> list[int]:
    return [int(part) for part in raw.split(".")]


def _format_version(version: Version) -> str:
    parts = list(version)
    while len(parts) > 2 and parts[-1] == 0:
        parts.pop()
    return ".".join(str(part) for part in parts)


@total_ordering
@dataclass(frozen=True)
class TargetFramework:
    identifier: str
    version: Version

    def __post_init__(self) -> None:
        if self.identifier not in KNOWN_IDENTIFIERS:
            raise InvalidFrameworkError(self.identifier, reason="unknown framework identifier")
        if len(self.version) != 4 or any(part < 0 for part in self.version):
            raise InvalidFrameworkError(
                self.identifier, reason="version must have four non-negative components"
            )

    def __str__(self) -> str:
        return f"{self.identifier},Version=v{_format_version(self.version)}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TargetFramework):
            return NotImplemented
        return (self.identifier, self.version) < (other.identifier, other.version)

    @property
    def short_folder_name(self) -> str:
        if self.identifier == NET_STANDARD:
            return f"netstandard{_format_version(self.version)}"
        if self.identifier == NET_CORE_APP:
            if self.version[0] >= _FIRST_NET_CORE_APP_ERA_MAJOR:
                return f"net{_format_version(self.version)}"
            return f"netcoreapp{_format_version(self.version)}"
        digits = [str(part) for part in self.version]
        while len(digits) > 2 and digits[-1] == "0":
            digits.pop()
        return "net" + "".join(digits)


def _parse_framework_digits(name: str, digits: str) -> Version:
    # net472 -> 4.7.2; each digit is one version component
    if not digits.isdigit() or len(digits) > 4:
        raise InvalidFrameworkError(name, reason="unrecognized .NET Framework version")
    return _pad_version([int(ch) for ch in digits])


def parse_framework(name: str) -> TargetFramework:
    """
    Parse a short folder name (netstandard2.0, netcoreapp3.1, net5.0, net472)
    or a long name (.NETStandard,Version=v2.0).
    """
    raw = str(name).strip()
    if not raw:
        raise InvalidFrameworkError(name, reason="framework name is empty")

    long_match = _LONG_NAME_PATTERN.match(raw)
    if long_match is not None:
        identifier = long_match.group("identifier")
        if identifier not in KNOWN_IDENTIFIERS:
            raise InvalidFrameworkError(name, reason="unknown framework identifier")
        return TargetFramework(
            identifier=identifier,
            version=_pad_version(_parse_dotted(long_match.group("version"))),
        )

    short_match = _SHORT_NAME_PATTERN.match(raw.lower())
    if short_match is None:
        raise InvalidFrameworkError(name, reason="unrecognized framework name")
    prefix = short_match.group("prefix")
    raw_version = short_match.group("version")

    if prefix in _SHORT_PREFIXES:
        return TargetFramework(
            identifier=_SHORT_PREFIXES[prefix],
            version=_pad_version(_parse_dotted(raw_version)),
        )
    if prefix != "net":
        raise InvalidFrameworkError(name, reason=f"unknown framework prefix {prefix!r}")
    if "." in raw_version:
        version = _pad_version(_parse_dotted(raw_version))
        if version[0] < _FIRST_NET_CORE_APP_ERA_MAJOR:
            raise InvalidFrameworkError(
                name, reason="dotted net versions below 5.0 are not valid folder names"
            )
        return TargetFramework(identifier=NET_CORE_APP, version=version)
    return TargetFramework(
        identifier=NET_FRAMEWORK,
        version=_parse_framework_digits(name, raw_version),
    )


def coerce_framework(value: TargetFramework | str) -> TargetFramework:
    if isinstance(value, TargetFramework):
        return value
    return parse_framework(value)
