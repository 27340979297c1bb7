"""Core layer — parameter model, registry, scanning and help.

Rules
-----
* No direct stream output except :func:`clparams.core.help.print_help`;
  findings go through a reporter.
* No imports from ``cli``.
"""

from clparams.core.kinds import ValueKind
from clparams.core.models import Arity, DeclSite, ParameterSpec
from clparams.core.protocols import DiagnosticReporter
from clparams.core.registry import ParameterRegistry
from clparams.core.scanner import ArgumentMode, CommandLineScanner, OptionEntry, ScanResult

__all__: list[str] = [
    "ArgumentMode",
    "Arity",
    "CommandLineScanner",
    "DeclSite",
    "DiagnosticReporter",
    "OptionEntry",
    "ParameterRegistry",
    "ParameterSpec",
    "ScanResult",
    "ValueKind",
]
