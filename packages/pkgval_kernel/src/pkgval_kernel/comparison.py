from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from pkgval_ir import ComparisonRequest, Diagnostic

from .sinks import DiagnosticSink, LoggingSink
from .suppression import SuppressionRegistry

logger = logging.getLogger(__name__)

Comparer = Callable[[ComparisonRequest], Iterable[Diagnostic]]


class ComparisonService(Protocol):
    def queue(
        self,
        left_package_path: str,
        left_asset_path: str,
        right_package_path: str,
        right_asset_path: str,
        display_name: str,
        title: str,
        header: str,
    ) -> None:
        ...

    def run(self) -> None:
        ...


def null_comparer(request: ComparisonRequest) -> tuple[Diagnostic, ...]:
    logger.info(
        "no API comparer configured; skipping %s -> %s",
        request.left_asset_path,
        request.right_asset_path,
    )
    return ()


class ComparisonQueue:
    """
    Default comparison service. Requests are held until ``run()``, which hands
    each one to ``comparer`` in queue order and routes the resulting
    diagnostics through ``suppression`` into ``sink``. ``completed`` holds the
    requests of the most recent batch only.
    """

    def __init__(
        self,
        *,
        comparer: Comparer = null_comparer,
        suppression: SuppressionRegistry | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._comparer = comparer
        self._suppression = suppression or SuppressionRegistry()
        self._sink = sink or LoggingSink()
        self._pending: list[ComparisonRequest] = []
        self._completed: list[ComparisonRequest] = []

    @property
    def pending(self) -> tuple[ComparisonRequest, ...]:
        return tuple(self._pending)

    @property
    def completed(self) -> tuple[ComparisonRequest, ...]:
        return tuple(self._completed)

    def queue(
        self,
        left_package_path: str,
        left_asset_path: str,
        right_package_path: str,
        right_asset_path: str,
        display_name: str,
        title: str,
        header: str,
    ) -> None:
        self._pending.append(
            ComparisonRequest(
                left_package_path=left_package_path,
                left_asset_path=left_asset_path,
                right_package_path=right_package_path,
                right_asset_path=right_asset_path,
                display_name=display_name,
                title=title,
                header=header,
            )
        )

    def run(self) -> list[Diagnostic]:
        batch, self._pending = self._pending, []
        self._completed = []
        suppression_run = self._suppression.start_run()
        emitted: list[Diagnostic] = []
        for request in batch:
            logger.debug("comparing %s against %s", request.left_asset_path, request.right_asset_path)
            for diagnostic in self._comparer(request):
                target = diagnostic.target if diagnostic.target is not None else diagnostic.message
                if suppression_run.filter(diagnostic.code, target):
                    continue
                self._sink.emit(diagnostic)
                emitted.append(diagnostic)
            self._completed.append(request)
        return emitted
