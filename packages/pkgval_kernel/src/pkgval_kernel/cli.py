from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pkgval_ir import PackageValidationError, ValidationReport, load_package_manifest

from .baseline import BaselinePackageValidator
from .compatible_frameworks import CompatibleFrameworkValidator
from .config import ValidationSettings
from .sinks import CollectingSink

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DIAGNOSTICS = 1
EXIT_CONFIG_ERROR = 2


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--package",
        dest="package_path",
        type=Path,
        required=True,
        help="Package manifest JSON (id, version, package_path, files)",
    )
    parser.add_argument(
        "--no-warn",
        dest="no_warn",
        default=None,
        help="';'-delimited diagnostic codes to suppress for every target",
    )
    parser.add_argument(
        "--suppress",
        dest="suppressions",
        action="append",
        default=None,
        metavar="CODE=TARGET",
        help="Suppress one diagnostic code for one target (repeatable)",
    )
    parser.add_argument(
        "--suppression-file",
        dest="suppression_file",
        type=Path,
        default=None,
        help="JSON file with no_warn codes and code/target suppressions",
    )
    parser.add_argument(
        "--run-api-compat",
        dest="run_api_compat",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Queue and run API comparisons for matched assets",
    )
    parser.add_argument("--out-json", dest="out_json_path", type=Path, required=False)
    parser.add_argument("--verbose", action="store_true")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pkgval",
        description="Package validation: target framework coverage and baseline regressions.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    baseline_parser = subparsers.add_parser(
        "baseline",
        help="Check that a package keeps every framework/RID its baseline supports.",
    )
    baseline_parser.add_argument(
        "--baseline",
        dest="baseline_path",
        type=Path,
        required=True,
        help="Baseline package manifest JSON",
    )
    _add_common_arguments(baseline_parser)

    compatible_parser = subparsers.add_parser(
        "compatible",
        help="Check that every framework in a package has compile and runtime assets.",
    )
    _add_common_arguments(compatible_parser)

    return parser.parse_args(argv)


def _settings(args: argparse.Namespace) -> ValidationSettings:
    settings = ValidationSettings.from_env()
    if args.suppression_file is not None:
        settings = settings.with_suppression_file(args.suppression_file)
    return settings.with_overrides(
        no_warn=args.no_warn,
        suppressions=args.suppressions,
        run_api_compat=args.run_api_compat,
    )


def _write_report(path: Path, report: ValidationReport, lines: list[str]) -> None:
    payload = report.model_dump(mode="json")
    payload["lines"] = lines
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sink = CollectingSink()
    try:
        settings = _settings(args)
        package = load_package_manifest(args.package_path)
        if args.command == "baseline":
            baseline = load_package_manifest(args.baseline_path)
            validator: BaselinePackageValidator | CompatibleFrameworkValidator = (
                BaselinePackageValidator(
                    baseline,
                    no_warn=settings.no_warn,
                    ignored_differences=settings.ignored_differences,
                    run_api_compat=settings.run_api_compat,
                    sink=sink,
                )
            )
        else:
            validator = CompatibleFrameworkValidator(
                no_warn=settings.no_warn,
                ignored_differences=settings.ignored_differences,
                run_api_compat=settings.run_api_compat,
                sink=sink,
            )
        report = validator.validate(package)
    except (PackageValidationError, RuntimeError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_CONFIG_ERROR

    for line in sink.lines:
        print(line)
    if args.out_json_path is not None:
        _write_report(args.out_json_path, report, sink.lines)
    logger.debug(
        "%s: %d diagnostic(s), %d comparison(s) queued",
        package.name,
        len(sink.lines),
        len(report.comparison_requests),
    )
    return EXIT_OK if not sink.lines else EXIT_DIAGNOSTICS


if __name__ == "__main__":
    raise SystemExit(main())
