"""clparams — typed command-line parameter registry.

Declare named, typed parameters once, fill them from process arguments,
and read them back with type coercion.
"""

from clparams.core.kinds import ValueKind
from clparams.core.models import Arity, DeclSite, ParameterSpec
from clparams.core.registry import ParameterRegistry
from clparams.core.scanner import CommandLineScanner, ScanResult
from clparams.diagnostics import (
    CollectingReporter,
    ConsoleReporter,
    Diagnostic,
    DiagnosticCode,
    Severity,
)
from clparams.exceptions import (
    ClparamsError,
    DuplicateDeclarationError,
    InvalidArityError,
    InvalidNoArgumentKindError,
    InvalidValueTextError,
    RegistrationError,
    UnknownParameterError,
)
from clparams.version import __version__

__all__: list[str] = [
    "Arity",
    "ClparamsError",
    "CollectingReporter",
    "CommandLineScanner",
    "ConsoleReporter",
    "DeclSite",
    "Diagnostic",
    "DiagnosticCode",
    "DuplicateDeclarationError",
    "InvalidArityError",
    "InvalidNoArgumentKindError",
    "InvalidValueTextError",
    "ParameterRegistry",
    "ParameterSpec",
    "RegistrationError",
    "ScanResult",
    "Severity",
    "UnknownParameterError",
    "ValueKind",
    "__version__",
]
