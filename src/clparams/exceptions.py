"""Custom exception hierarchy for clparams.

Every error raised by the registry inherits from :class:`ClparamsError`
and carries the :class:`~clparams.diagnostics.DiagnosticCode` it maps to,
so hosts can treat raised errors and reported diagnostics uniformly.

Scan-time problems caused by user input are *not* raised — they are
reported as diagnostics and the offending occurrence is skipped.  Only
programming errors (bad declarations, unknown names, unreadable values)
surface as exceptions.

Hierarchy
---------
ClparamsError
├── RegistrationError
│   ├── DuplicateDeclarationError
│   ├── InvalidNoArgumentKindError
│   └── InvalidArityError
├── UnknownParameterError
└── InvalidValueTextError
"""

from __future__ import annotations

from clparams.diagnostics import DiagnosticCode


class ClparamsError(Exception):
    """Base exception for all clparams errors.

    The CLI error boundary renders ``str(exc)`` followed by :attr:`hint`
    when one is present.
    """

    code: DiagnosticCode = DiagnosticCode.GENERAL

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""

    def __str__(self) -> str:
        # KeyError subclasses would otherwise repr() the message.
        return str(self.args[0]) if self.args else ""


# --- Registration ----------------------------------------------------------

class RegistrationError(ClparamsError):
    """Raised when a parameter declaration is rejected."""


class DuplicateDeclarationError(RegistrationError):
    """Raised when a name is declared again from a different site."""

    code = DiagnosticCode.DUPLICATE_DECLARATION


class InvalidNoArgumentKindError(RegistrationError):
    """Raised when ``NO_ARGUMENT`` is requested for a non-boolean kind."""

    code = DiagnosticCode.INVALID_NO_ARGUMENT_KIND


class InvalidArityError(RegistrationError):
    """Raised when an arity sets more than one flag of the same group."""

    code = DiagnosticCode.INVALID_ARITY


# --- Access ----------------------------------------------------------------

class UnknownParameterError(ClparamsError, KeyError):
    """Raised by get/set on a name that was never registered."""

    code = DiagnosticCode.UNKNOWN_PARAMETER


class InvalidValueTextError(ClparamsError, ValueError):
    """Raised when text cannot be parsed or a value cannot be formatted."""

    code = DiagnosticCode.INVALID_VALUE_TEXT
