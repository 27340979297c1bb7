"""Protocols (interfaces) consumed by the core layer.

The registry and scanner never write to a stream themselves; they hand
findings to a reporter.  Any object implementing these methods satisfies
the protocol structurally (no explicit inheritance required).
"""

from __future__ import annotations

from typing import Protocol

from clparams.diagnostics import Diagnostic


class DiagnosticReporter(Protocol):
    """Contract for diagnostic sinks."""

    def report(self, diagnostic: Diagnostic) -> None:
        """Deliver one diagnostic.

        Called synchronously, in the order findings occur.  Must not
        raise: reporting is fire-and-forget.
        """
        ...  # pragma: no cover

    def trace(self, message: str) -> None:
        """Deliver one trace line (only emitted by tracing registries)."""
        ...  # pragma: no cover
