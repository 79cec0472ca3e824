from __future__ import annotations

import pytest
from pkgval_ir import parse_framework
from pkgval_kernel import is_compatible, max_net_standard_version


@pytest.mark.parametrize(
    ("candidate", "required", "expected"),
    [
        ("netcoreapp3.0", "netcoreapp3.1", True),
        ("netcoreapp3.1", "netcoreapp3.0", False),
        ("netcoreapp3.1", "net5.0", True),
        ("netstandard2.0", "netcoreapp3.1", True),
        ("netstandard2.1", "netcoreapp3.0", True),
        ("netstandard2.1", "netcoreapp2.2", False),
        ("netstandard1.6", "netcoreapp1.0", True),
        ("netstandard2.0", "net461", True),
        ("netstandard2.1", "net48", False),
        ("netstandard1.3", "net46", True),
        ("netstandard1.4", "net46", False),
        ("netstandard1.0", "net40", False),
        ("netcoreapp3.1", "netstandard2.0", False),
        ("net472", "netcoreapp3.1", False),
        ("net45", "net472", True),
        ("netstandard1.6", "netstandard2.0", True),
    ],
)
def test_is_compatible(candidate: str, required: str, expected: bool) -> None:
    assert is_compatible(parse_framework(candidate), parse_framework(required)) is expected


def test_max_net_standard_version() -> None:
    assert max_net_standard_version(parse_framework("net45")) == (1, 1, 0, 0)
    assert max_net_standard_version(parse_framework("net451")) == (1, 2, 0, 0)
    assert max_net_standard_version(parse_framework("net472")) == (2, 0, 0, 0)
    assert max_net_standard_version(parse_framework("netcoreapp2.1")) == (2, 0, 0, 0)
    assert max_net_standard_version(parse_framework("net6.0")) == (2, 1, 0, 0)
    assert max_net_standard_version(parse_framework("net40")) is None
