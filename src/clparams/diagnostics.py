"""Diagnostic records and the reporters that deliver them.

A :class:`Diagnostic` is a non-fatal finding — a rejected command-line
occurrence, a repeated option, a missing required parameter.  The
registry and scanner hand every diagnostic to a reporter satisfying
:class:`~clparams.core.protocols.DiagnosticReporter`:

* :class:`ConsoleReporter` — writes to stderr (Rich when installed).
* :class:`CollectingReporter` — keeps everything in memory; handy for
  hosts that render diagnostics themselves, and for tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """How serious a diagnostic is."""

    ERROR = "error"
    WARNING = "warning"


class DiagnosticCode(str, Enum):
    """Stable identifiers for every condition clparams can report or raise."""

    GENERAL = "general"

    # Registration
    DUPLICATE_DECLARATION = "duplicate-declaration"
    INVALID_NO_ARGUMENT_KIND = "invalid-no-argument-kind"
    INVALID_ARITY = "invalid-arity"
    NO_EFFECT_DEFAULT = "no-effect-default"

    # Access
    UNKNOWN_PARAMETER = "unknown-parameter"
    INVALID_VALUE_TEXT = "invalid-value-text"

    # Scanning
    UNRECOGNIZED_OPTION = "unrecognized-option"
    AMBIGUOUS_OPTION = "ambiguous-option"
    MISSING_ARGUMENT = "missing-argument"
    UNEXPECTED_ARGUMENT = "unexpected-argument"
    SINGLE_VALUE_VIOLATION = "single-value-violation"
    REPEATED_OPTION = "repeated-option"

    # Auditing
    MISSING_REQUIRED = "missing-required"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single reported finding."""

    code: DiagnosticCode
    """What went wrong."""

    severity: Severity
    """Whether the finding is an error or a warning."""

    message: str
    """Fully rendered, human-readable text."""

    name: str | None = None
    """Parameter the finding concerns, when there is one."""

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Reporters
# ---------------------------------------------------------------------------

_STYLES: dict[Severity, str] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
}


class ConsoleReporter:
    """Write diagnostics and trace lines to stderr."""

    def report(self, diagnostic: Diagnostic) -> None:
        from clparams.cli.console import console

        console.print(diagnostic.message, style=_STYLES[diagnostic.severity])

    def trace(self, message: str) -> None:
        from clparams.cli.console import console

        console.print(message, style="dim")


class CollectingReporter:
    """Keep diagnostics and trace lines in memory, in arrival order."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []
        self.traces: list[str] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def trace(self, message: str) -> None:
        self.traces.append(message)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_error]

    def codes(self) -> list[DiagnosticCode]:
        """Return the code of every collected diagnostic, in order."""
        return [d.code for d in self.diagnostics]

    def clear(self) -> None:
        self.diagnostics.clear()
        self.traces.clear()
