from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from pkgval_ir import Diagnostic

DIAGNOSTICS_LOGGER_NAME = "pkgval.diagnostics"


class DiagnosticSink(Protocol):
    def emit(self, diagnostic: Diagnostic) -> None:
        ...


@dataclass
class CollectingSink:
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def lines(self) -> list[str]:
        return [diagnostic.line() for diagnostic in self.diagnostics]


@dataclass(frozen=True)
class LoggingSink:
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    )

    def emit(self, diagnostic: Diagnostic) -> None:
        self.logger.error("%s", diagnostic.line())


@dataclass(frozen=True)
class TeeSink:
    sinks: tuple[DiagnosticSink, ...]

    def emit(self, diagnostic: Diagnostic) -> None:
        for sink in self.sinks:
            sink.emit(diagnostic)
