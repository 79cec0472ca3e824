from __future__ import annotations

import threading

import pytest
from pkgval_ir import BASELINE_DIAGNOSTIC_IDS, SuppressionConfigError, SuppressionEntry
from pkgval_kernel import SuppressionRegistry, parse_no_warn

NS20 = ".NETStandard,Version=v2.0"
NCA31 = ".NETCoreApp,Version=v3.1"


def test_parse_no_warn_ignores_blanks_and_duplicates() -> None:
    assert parse_no_warn("PKV006; ;PKV007;PKV006;") == ("PKV006", "PKV007")
    assert parse_no_warn(None) == ()
    assert parse_no_warn(["PKV006", " PKV007 "]) == ("PKV006", "PKV007")


def test_first_report_passes_and_repeats_are_suppressed() -> None:
    run = SuppressionRegistry.build().start_run()

    assert run.filter("PKV006", NS20) is False
    assert run.filter("PKV006", NS20) is True
    assert run.filter("PKV006", NCA31) is False
    assert run.filter("PKV007", NS20) is False
    assert run.seen == frozenset({("PKV006", NS20), ("PKV006", NCA31), ("PKV007", NS20)})


def test_bare_code_suppresses_every_target() -> None:
    run = SuppressionRegistry.build(no_warn="PKV006", eligible_codes=BASELINE_DIAGNOSTIC_IDS).start_run()

    assert run.filter("PKV006", NS20) is True
    assert run.filter("PKV006", NCA31) is True
    assert run.filter("PKV007", f"{NS20}-win") is False


def test_pair_suppresses_only_matching_target() -> None:
    registry = SuppressionRegistry.build(ignored_differences=[("PKV006", NS20)])
    run = registry.start_run()

    assert run.filter("PKV006", NS20) is True
    assert run.filter("PKV006", NCA31) is False


def test_bare_suppression_ignores_ineligible_codes() -> None:
    registry = SuppressionRegistry.build(
        no_warn="PKV006;CP0002",
        ignored_differences=[SuppressionEntry(code="CP0002", target="M:Demo.Run")],
        eligible_codes=BASELINE_DIAGNOSTIC_IDS,
    )

    assert registry.no_warn == frozenset({"PKV006"})
    run = registry.start_run()
    assert run.filter("CP0002", "M:Demo.Stop") is False
    assert run.filter("CP0002", "M:Demo.Run") is True


def test_all_codes_eligible_without_restriction() -> None:
    run = SuppressionRegistry.build(no_warn="CP0002").start_run()
    assert run.filter("CP0002", "M:Demo.Run") is True


def test_runs_do_not_share_seen_state() -> None:
    registry = SuppressionRegistry.build()
    first = registry.start_run()
    second = registry.start_run()

    assert first.filter("PKV006", NS20) is False
    assert second.filter("PKV006", NS20) is False


def test_registry_filter_uses_default_run_until_reset() -> None:
    registry = SuppressionRegistry.build()

    assert registry.filter("PKV006", NS20) is False
    assert registry.filter("PKV006", NS20) is True
    registry.reset()
    assert registry.filter("PKV006", NS20) is False


@pytest.mark.parametrize(
    "pair",
    [("PKV006", ""), ("", NS20), ("PKV006",), "PKV006", SuppressionEntry(code="PKV006")],
)
def test_malformed_pairs_fail_at_construction(pair: object) -> None:
    with pytest.raises(SuppressionConfigError):
        SuppressionRegistry.build(ignored_differences=[pair])  # type: ignore[list-item]


def test_concurrent_filters_report_each_pair_once() -> None:
    run = SuppressionRegistry.build().start_run()
    results: list[bool] = []
    lock = threading.Lock()
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        outcome = run.filter("PKV006", NS20)
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(False) == 1
    assert results.count(True) == 7


def test_concurrent_first_registry_filters_share_one_default_run() -> None:
    registry = SuppressionRegistry.build()
    results: list[bool] = []
    lock = threading.Lock()
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        outcome = registry.filter("PKV006", NS20)
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(False) == 1
    assert results.count(True) == 7
