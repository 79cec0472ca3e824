from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import PurePosixPath

from pkgval_ir import (
    COMPATIBLE_FRAMEWORK_DIAGNOSTIC_IDS,
    Asset,
    ComparisonRequest,
    Diagnostic,
    DiagnosticId,
    Package,
    SuppressionEntry,
    TargetFramework,
    ValidationReport,
    format_message,
)

from .asset_index import AssetIndex
from .comparison import Comparer, ComparisonQueue, ComparisonService, null_comparer
from .resolver import CompatibilityResolver
from .sinks import DiagnosticSink, LoggingSink
from .suppression import SuppressionRegistry, SuppressionRun

logger = logging.getLogger(__name__)

COMPATIBLE_FRAMEWORK_COMPARISON_TITLE = "Compatibility between compile and runtime assets"
COMPATIBLE_FRAMEWORK_COMPARISON_HEADER = (
    "API compatibility errors between '{left}' (compile time) and '{right}' (runtime) "
    "for {framework}:"
)


class CompatibleFrameworkValidator:
    """
    Single-package check: every target framework the package mentions must
    resolve to a compile-time asset, a runtime asset, and a runtime asset for
    every RID the package ships. RID lookups fall back to RID-agnostic runtime
    assets, the way a consuming project restores them.
    """

    def __init__(
        self,
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
        self._run_api_compat = run_api_compat
        self._sink = sink or LoggingSink()
        self._resolver = resolver or CompatibilityResolver()
        self._suppression = SuppressionRegistry.build(
            no_warn=no_warn,
            ignored_differences=ignored,
            eligible_codes=COMPATIBLE_FRAMEWORK_DIAGNOSTIC_IDS,
        )
        self._comparison_service = comparison_service or ComparisonQueue(
            comparer=comparer or null_comparer,
            suppression=SuppressionRegistry.build(no_warn=no_warn, ignored_differences=ignored),
            sink=self._sink,
        )

    def validate(self, package: Package) -> ValidationReport:
        report = ValidationReport()
        index = AssetIndex(package=package, resolver=self._resolver)
        suppression_run = self._suppression.start_run()

        for framework in package.frameworks:
            logger.debug("checking %s %s for %s", package.name, package.version, framework)
            compile_asset = index.find_best_compile_asset(framework)
            file_name = None if compile_asset is None else PurePosixPath(compile_asset.path).name
            if compile_asset is None:
                self._report(
                    DiagnosticId.COMPATIBLE_COMPILE_ASSET_MISSING,
                    framework,
                    None,
                    suppression_run,
                    report,
                )

            runtime_asset = index.find_best_runtime_asset(framework)
            if runtime_asset is None:
                self._report(
                    DiagnosticId.COMPATIBLE_RUNTIME_ASSET_MISSING,
                    framework,
                    None,
                    suppression_run,
                    report,
                )
            elif compile_asset is not None:
                self._queue(package, framework, compile_asset, runtime_asset, report)

            for rid in package.rids:
                rid_asset = index.find_best_runtime_asset(
                    framework,
                    rid,
                    include_rid_agnostic=True,
                    file_name=file_name,
                )
                if rid_asset is None:
                    self._report(
                        DiagnosticId.COMPATIBLE_RUNTIME_RID_ASSET_MISSING,
                        framework,
                        rid,
                        suppression_run,
                        report,
                    )
                elif compile_asset is not None and rid_asset != runtime_asset:
                    self._queue(package, framework, compile_asset, rid_asset, report)

        if self._run_api_compat:
            self._comparison_service.run()
            report.comparisons_ran = True
        return report

    def _report(
        self,
        code: DiagnosticId,
        framework: TargetFramework,
        rid: str | None,
        suppression_run: SuppressionRun,
        report: ValidationReport,
    ) -> None:
        target = str(framework) if rid is None else f"{framework}-{rid}"
        if suppression_run.filter(code.value, target):
            return
        diagnostic = Diagnostic(
            code=code.value,
            target=target,
            message=format_message(code, framework=framework, rid=rid),
        )
        self._sink.emit(diagnostic)
        report.diagnostics.append(diagnostic)

    def _queue(
        self,
        package: Package,
        framework: TargetFramework,
        compile_asset: Asset,
        runtime_asset: Asset,
        report: ValidationReport,
    ) -> None:
        if not self._run_api_compat or compile_asset.path == runtime_asset.path:
            return
        request = ComparisonRequest(
            left_package_path=package.package_path,
            left_asset_path=compile_asset.path,
            right_package_path=package.package_path,
            right_asset_path=runtime_asset.path,
            display_name=package.display_name,
            title=COMPATIBLE_FRAMEWORK_COMPARISON_TITLE,
            header=COMPATIBLE_FRAMEWORK_COMPARISON_HEADER.format(
                left=compile_asset.path,
                right=runtime_asset.path,
                framework=framework,
            ),
        )
        if request in report.comparison_requests:
            return
        self._comparison_service.queue(**request.model_dump())
        report.comparison_requests.append(request)
