from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import PurePosixPath

from pkgval_ir import (
    BASELINE_DIAGNOSTIC_IDS,
    Asset,
    AssetCategory,
    ComparisonRequest,
    Diagnostic,
    DiagnosticId,
    Package,
    SuppressionEntry,
    ValidationReport,
    format_message,
)

from .asset_index import AssetIndex
from .comparison import Comparer, ComparisonQueue, ComparisonService, null_comparer
from .resolver import CompatibilityResolver
from .sinks import DiagnosticSink, LoggingSink
from .suppression import SuppressionRegistry, SuppressionRun

logger = logging.getLogger(__name__)

BASELINE_COMPARISON_TITLE = "Compatibility with the baseline version"
BASELINE_COMPARISON_HEADER = (
    "API compatibility errors between '{left}' ({left_version}) "
    "and '{right}' ({right_version}):"
)


@dataclass(frozen=True)
class _Stage:
    category: AssetCategory
    code: DiagnosticId
    requires_baseline_compile_assets: bool = False

    def qualifier(self, asset: Asset) -> str:
        if self.category == "runtime_specific":
            return f"{asset.framework}-{asset.rid}"
        return str(asset.framework)

    def message(self, asset: Asset) -> str:
        return format_message(self.code, framework=asset.framework, rid=asset.rid)


_STAGES: tuple[_Stage, ...] = (
    _Stage(
        category="compile",
        code=DiagnosticId.TARGET_FRAMEWORK_DROPPED,
        requires_baseline_compile_assets=True,
    ),
    _Stage(category="runtime", code=DiagnosticId.TARGET_FRAMEWORK_DROPPED),
    _Stage(
        category="runtime_specific",
        code=DiagnosticId.TARGET_FRAMEWORK_AND_RID_PAIR_DROPPED,
    ),
)


class BaselinePackageValidator:
    """
    Checks that a candidate package keeps every target framework and
    framework/RID pair the baseline package supports, and queues an API
    comparison for every matched pair of assets when ``run_api_compat`` is set.
    """

    def __init__(
        self,
        baseline: Package,
        *,
        no_warn: str | Iterable[str] | None = None,
        ignored_differences: Iterable[SuppressionEntry | Sequence[str]] | None = None,
        run_api_compat: bool = False,
        comparison_service: ComparisonService | None = None,
        comparer: Comparer | None = None,
        sink: DiagnosticSink | None = None,
        resolver: CompatibilityResolver | None = None,
    ) -> None:
        ignored = tuple(ignored_differences or ())
        self._baseline = baseline
        self._run_api_compat = run_api_compat
        self._sink = sink or LoggingSink()
        self._resolver = resolver or CompatibilityResolver()
        self._suppression = SuppressionRegistry.build(
            no_warn=no_warn,
            ignored_differences=ignored,
            eligible_codes=BASELINE_DIAGNOSTIC_IDS,
        )
        if comparison_service is None:
            comparison_service = ComparisonQueue(
                comparer=comparer or null_comparer,
                suppression=SuppressionRegistry.build(
                    no_warn=no_warn,
                    ignored_differences=ignored,
                ),
                sink=self._sink,
            )
        self._comparison_service = comparison_service

    @property
    def baseline(self) -> Package:
        return self._baseline

    @property
    def suppression(self) -> SuppressionRegistry:
        return self._suppression

    def validate(self, package: Package) -> ValidationReport:
        report = ValidationReport()
        candidate = AssetIndex(package=package, resolver=self._resolver)
        suppression_run = self._suppression.start_run()

        for stage in _STAGES:
            if stage.requires_baseline_compile_assets and not self._baseline.has_compile_assets:
                logger.debug("baseline %s has no compile-time assets", self._baseline.name)
                continue
            for baseline_asset in self._baseline.assets(stage.category):
                self._check_asset(stage, baseline_asset, candidate, suppression_run, report)

        if self._run_api_compat:
            self._comparison_service.run()
            report.comparisons_ran = True
        return report

    def _check_asset(
        self,
        stage: _Stage,
        baseline_asset: Asset,
        candidate: AssetIndex,
        suppression_run: SuppressionRun,
        report: ValidationReport,
    ) -> None:
        lookup = candidate.lookup(
            stage.category,
            baseline_asset.framework,
            baseline_asset.rid,
            file_name=PurePosixPath(baseline_asset.path).name,
        )
        if lookup.asset is None:
            qualifier = stage.qualifier(baseline_asset)
            if suppression_run.filter(stage.code.value, qualifier):
                return
            diagnostic = Diagnostic(
                code=stage.code.value,
                target=qualifier,
                message=stage.message(baseline_asset),
            )
            self._sink.emit(diagnostic)
            report.diagnostics.append(diagnostic)
            return

        if not self._run_api_compat:
            return
        request = self._comparison_request(baseline_asset, lookup.asset, candidate.package)
        self._comparison_service.queue(**request.model_dump())
        report.comparison_requests.append(request)

    def _comparison_request(
        self, baseline_asset: Asset, candidate_asset: Asset, package: Package
    ) -> ComparisonRequest:
        return ComparisonRequest(
            left_package_path=self._baseline.package_path,
            left_asset_path=baseline_asset.path,
            right_package_path=package.package_path,
            right_asset_path=candidate_asset.path,
            display_name=package.display_name,
            title=BASELINE_COMPARISON_TITLE,
            header=BASELINE_COMPARISON_HEADER.format(
                left=baseline_asset.path,
                right=candidate_asset.path,
                left_version=self._baseline.version,
                right_version=package.version,
            ),
        )
