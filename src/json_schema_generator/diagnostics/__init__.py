"""Diagnostics exports."""

from .diagnostic_log import Diagnostic, DiagnosticKind, DiagnosticLog

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
]
