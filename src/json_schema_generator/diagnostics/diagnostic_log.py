"""Non-fatal generation diagnostics."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    """Categories of problems that do not abort generation."""

    UNKNOWN_TYPE = "unknown-type"
    MARKER_LOAD_FAILURE = "marker-load-failure"
    DANGEROUS_TYPE = "dangerous-type"


@dataclass(frozen=True)
class Diagnostic:
    """A problem attached to the package or type it originated from."""

    kind: DiagnosticKind
    subject: str
    message: str

    def __str__(self) -> str:
        return f"{self.subject}: {self.message}"


class DiagnosticLog:
    """Ordered, de-duplicated accumulator of diagnostics for one run."""

    def __init__(self, diagnostics: Iterable[Diagnostic] = ()) -> None:
        self._entries: list[Diagnostic] = []
        self._seen: set[Diagnostic] = set()
        self.extend(diagnostics)

    def record(self, kind: DiagnosticKind, subject: str, message: str) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, subject=subject, message=message)
        self._append(diagnostic)
        return diagnostic

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self._append(diagnostic)

    def for_subject(self, subject: str) -> tuple[Diagnostic, ...]:
        return tuple(entry for entry in self._entries if entry.subject == subject)

    def _append(self, diagnostic: Diagnostic) -> None:
        if diagnostic in self._seen:
            return
        self._seen.add(diagnostic)
        self._entries.append(diagnostic)
        logger.info("%s", diagnostic)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
